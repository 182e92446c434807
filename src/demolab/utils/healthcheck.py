#!/usr/bin/env python3
"""
healthcheck.py
- One-shot readiness probe for the demo services, usable from scripts and CI.
- Usage: demolab-healthcheck [gitlab|dependency-track|sonarqube ...]   (default: gitlab)
- Returns exit code 0 if every named service is ready, 1 if not.
"""

import os
import sys

from demolab.core.config import COMPOSE_FILE, ENV_FILE, ENV_TEMPLATE, SERVICES_FILE, configure_logging
from demolab.core.config_loader import load_runtime_config
from demolab.core.errors import DemolabError
from demolab.core.services import GITLAB, load_service_catalog
from demolab.lib.common.compose_helpers import ComposeClient
from demolab.lib.readiness.checks import health_check_for


def check_services(names, config, catalog, compose):
    """Return {name: ready} for each requested service. Unknown names count as not ready."""
    status = {}
    for name in names:
        descriptor = catalog.get(name)
        if descriptor is None:
            print(f"❌ Unknown service: {name}")
            status[name] = False
            continue
        status[name] = health_check_for(descriptor, config, compose).is_ready()
        print(f"{'✅' if status[name] else '⏳'} {descriptor.display_name}: {'ready' if status[name] else 'not ready'}")
    return status


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()

    if not os.path.isfile(ENV_FILE):
        print(f"❌ Healthcheck failed: {ENV_FILE} missing, the stack was never started")
        return 1

    try:
        config = load_runtime_config(ENV_FILE, ENV_TEMPLATE)
        compose = ComposeClient(COMPOSE_FILE)
        status = check_services(argv or [GITLAB], config, load_service_catalog(SERVICES_FILE), compose)
    except DemolabError as e:
        print(f"❌ Healthcheck failed: {e}")
        return 1

    return 0 if all(status.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
