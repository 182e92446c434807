#!/usr/bin/env python3
"""
stack.py
- Runs the whole bring-up sequence for a launch mode:
    - stop: stop every service and return
    - otherwise: load .env, validate hostnames, start GitLab, start the optional services one
      after another, fix the runner cache permissions, then wait for GitLab
- Returns the process exit code.
"""

import threading

from loguru import logger

from demolab.core.config import DRY_RUN, ENV_FILE, ENV_TEMPLATE, SERVICES_FILE
from demolab.core.config_loader import load_runtime_config
from demolab.core.constants import (
    EXIT_CANCELLED,
    EXIT_OK,
    EXIT_ORCHESTRATOR_FAILURE,
    EXIT_READINESS_TIMEOUT,
)
from demolab.core.errors import OrchestratorCommandFailure
from demolab.core.services import GITLAB, LaunchMode, load_service_catalog, services_for_mode
from demolab.lib.common.docker_helpers import fix_cache_permissions
from demolab.lib.hostnames import validate_hostnames
from demolab.lib.readiness.checks import health_check_for
from demolab.lib.readiness.waiter import ReadinessState, wait_until_ready
from demolab.runner.launcher import bring_up, launch_group, login_message, report_readiness

RUNNER_REMINDER = (
    "If you haven't done already: Don't forget to create a runner token and register the runners manually\n"
    "Usage: ./register-runners.sh TOKEN"
)


def stop_stack(compose):
    logger.info("[stack] Stopping all services...")
    try:
        compose.stop()
    except OrchestratorCommandFailure as e:
        logger.error(f"[stack] Could not stop every service: {e}")
    return EXIT_OK


def wait_for_gitlab(descriptor, config, compose, cancel_event, session=None):
    check = health_check_for(descriptor, config, compose, session=session)
    result = wait_until_ready(check, descriptor.display_name, cancel_event=cancel_event)
    if result.state is ReadinessState.CANCELLED:
        return EXIT_CANCELLED
    if not result.ready:
        return EXIT_READINESS_TIMEOUT

    logger.info(login_message(descriptor, config))
    logger.info(RUNNER_REMINDER)
    return EXIT_OK


def run(mode, compose, config=None, catalog=None, cancel_event=None, session=None, dry_run=DRY_RUN):
    """
    Bring up the services selected by mode.

    Args:
        mode (LaunchMode): What to start (or stop).
        compose (ComposeClient): The orchestrator wrapper.
        config (RuntimeConfig): Loaded from ENV_FILE when omitted.
        catalog (dict): Service descriptors, loaded from SERVICES_FILE when omitted.
        cancel_event (threading.Event): Aborts any readiness wait when set.

    Returns:
        int: The exit code for the process.
    """
    if mode is LaunchMode.STOP:
        return stop_stack(compose)

    cancel_event = cancel_event or threading.Event()
    config = config or load_runtime_config(ENV_FILE, ENV_TEMPLATE)
    catalog = catalog or load_service_catalog(SERVICES_FILE)
    exit_code = EXIT_OK

    validate_hostnames(config, session=session)

    gitlab = catalog[GITLAB]
    gitlab_started = False
    try:
        launch_group(gitlab, compose)
        gitlab_started = True
    except OrchestratorCommandFailure as e:
        logger.error(f"[stack] Could not start {gitlab.display_name}: {e}")
        exit_code = EXIT_ORCHESTRATOR_FAILURE

    if gitlab_started and not dry_run:
        report_readiness(gitlab, config, compose, session=session)

    for name in services_for_mode(mode)[1:]:
        descriptor = catalog[name]
        try:
            result = bring_up(descriptor, config, compose, cancel_event=cancel_event, session=session, dry_run=dry_run)
        except OrchestratorCommandFailure as e:
            logger.error(f"[stack] Could not start {descriptor.display_name}: {e}")
            exit_code = EXIT_ORCHESTRATOR_FAILURE
            continue
        if result is None:
            continue
        if result.state is ReadinessState.CANCELLED:
            return EXIT_CANCELLED
        if not result.ready and exit_code == EXIT_OK:
            exit_code = EXIT_READINESS_TIMEOUT

    fix_cache_permissions(config.demo_name, dry_run=dry_run)

    if not gitlab_started or dry_run:
        return exit_code

    gitlab_code = wait_for_gitlab(gitlab, config, compose, cancel_event, session=session)
    return gitlab_code if gitlab_code != EXIT_OK else exit_code
