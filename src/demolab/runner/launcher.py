#!/usr/bin/env python3
"""
launcher.py
- Starts one service group through compose and, for the optional services, carries it
  through readiness and first-run configuration.
- The first-run decision is taken before `up`, since `up` creates the volume it looks for.
"""

from loguru import logger

from demolab.lib.common.docker_helpers import volume_exists
from demolab.lib.first_run.configurators import run_first_run
from demolab.lib.readiness.checks import health_check_for
from demolab.lib.readiness.waiter import wait_until_ready


def launch_group(descriptor, compose):
    """Bring up the compose services of a group. Raises OrchestratorCommandFailure on failure."""
    logger.info(f"[launcher] Starting {descriptor.display_name}")
    compose.up(descriptor.compose_services)


def needs_first_run(descriptor, config):
    volume = descriptor.volume_name(config)
    if volume is None:
        return False
    return not volume_exists(volume)


def login_message(descriptor, config):
    return (
        f"You now can log in to {descriptor.display_name} at {descriptor.login_url(config)} "
        f"as {descriptor.login_user} using password {config.get(descriptor.password_key, '')}"
    )


def report_readiness(descriptor, config, compose, session=None):
    """Check once, without waiting, and report whether the service is already up."""
    ready = health_check_for(descriptor, config, compose, session=session).is_ready()
    if ready:
        logger.info(f"[launcher] {descriptor.display_name} is already up")
    else:
        logger.info(f"[launcher] {descriptor.display_name} is still starting, continuing in the meantime")
    return ready


def bring_up(descriptor, config, compose, cancel_event=None, session=None, dry_run=False):
    """
    Start a service, wait for it, and configure it if this is its very first start.

    Returns:
        WaitResult or None: The readiness outcome, None in dry-run mode.
    """
    first_run = needs_first_run(descriptor, config)
    launch_group(descriptor, compose)

    if dry_run:
        logger.info(f"[launcher] Dry run: not waiting on {descriptor.display_name}")
        return None

    check = health_check_for(descriptor, config, compose, session=session)
    result = wait_until_ready(check, descriptor.display_name, cancel_event=cancel_event)
    if not result.ready:
        if first_run:
            logger.warning(f"[launcher] Skipping first-run configuration of {descriptor.display_name}: not ready")
        return result

    if first_run:
        logger.info(f"[launcher] First start of {descriptor.display_name} detected, configuring...")
        run_first_run(descriptor, config, compose, session=session)

    logger.info(login_message(descriptor, config))
    return result
