#!/usr/bin/env python3
"""
entrypoint.py
- Command line entrypoint: start (and configure) GitLab and the optional demo services.
- Usage:
    demolab                    Start GitLab
    demolab dependency-track   Start Dependency-Track (and GitLab)
    demolab sonarqube          Start SonarQube (and GitLab)
    demolab all                Start Dependency-Track, SonarQube, and GitLab
    demolab stop               Stop all started services
"""

import signal
import sys
import threading

import sentry_sdk
from loguru import logger

from demolab.core.config import COMPOSE_FILE, DRY_RUN, SENTRY_DSN, configure_logging
from demolab.core.constants import EXIT_ORCHESTRATOR_FAILURE, EXIT_USAGE
from demolab.core.errors import ConfigError, MissingTool, OrchestratorCommandFailure, UnknownCLIArgument
from demolab.core.services import LaunchMode
from demolab.lib.common.compose_helpers import ComposeClient
from demolab.runner import stack

COL_RED = "\033[0;31m"
COL_YELLOW = "\033[0;33m"
COL_RESET = "\033[0m"


def usage():
    print(f"{COL_RED}Unknown option{COL_RESET} - this program only understands the following options:")
    print("(no options)       Start GitLab")
    print(f"{COL_YELLOW}dependency-track{COL_RESET}   Start Dependency-Track (and GitLab)")
    print(f"{COL_YELLOW}sonarqube{COL_RESET}          Start SonarQube (and GitLab)")
    print(f"{COL_YELLOW}all{COL_RESET}                Start Dependency-Track, SonarQube, and GitLab")
    print(f"{COL_YELLOW}stop{COL_RESET}               Stop all started services")
    return EXIT_USAGE


def install_signal_handlers(cancel_event):
    def handle_exit(signum, frame):
        logger.warning("📴 Received shutdown signal. Cancelling pending waits...")
        cancel_event.set()

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)


def parse_mode(argv):
    if len(argv) > 1:
        raise UnknownCLIArgument(" ".join(argv))
    return LaunchMode.from_argument(argv[0] if argv else None)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()
    if SENTRY_DSN:
        sentry_sdk.init(dsn=SENTRY_DSN, traces_sample_rate=1.0)

    try:
        mode = parse_mode(argv)
    except UnknownCLIArgument:
        return usage()

    cancel_event = threading.Event()
    install_signal_handlers(cancel_event)

    try:
        compose = ComposeClient(COMPOSE_FILE, dry_run=DRY_RUN)
        return stack.run(mode, compose, cancel_event=cancel_event)
    except (ConfigError, MissingTool) as e:
        logger.error(f"❌ {e}")
        return EXIT_USAGE
    except OrchestratorCommandFailure as e:
        logger.error(f"❌ {e}")
        return EXIT_ORCHESTRATOR_FAILURE


if __name__ == "__main__":
    sys.exit(main())
