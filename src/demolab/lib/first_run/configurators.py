"""
configurators.py
- One-time configuration of a freshly created service: replace the stock admin password
  and, for SonarQube, install the configured plugins and restart it.
- Runs only when the service's named volume did not exist before this run started.
- Not transactional: failed HTTP calls are logged and never retried. Later runs will not
  try again because the volume exists by then.
"""

import requests
from loguru import logger

from demolab.core.config import HTTP_TIMEOUT
from demolab.core.constants import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USER, SONARQUBE_PLUGIN_DIR
from demolab.core.errors import ConfigError, OrchestratorCommandFailure
from demolab.core.services import DEPENDENCY_TRACK, SONARQUBE

DTRACK_CHANGE_PASSWORD_PATH = "/api/v1/user/forceChangePassword"
SONARQUBE_CHANGE_PASSWORD_PATH = "/api/users/change_password"


def _post(session, url, **kwargs):
    """POST and report failures. Returns True on a 2xx answer."""
    try:
        response = session.post(url, timeout=HTTP_TIMEOUT, **kwargs)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"[first_run] POST {url} failed: {e}")
        return False
    return True


def _new_password(descriptor, config):
    try:
        return config.require(descriptor.password_key)
    except ConfigError as e:
        logger.error(f"[first_run] Cannot change the password of {descriptor.display_name}: {e}")
        return None


def change_dependency_track_password(descriptor, config, session):
    password = _new_password(descriptor, config)
    if password is None:
        return False
    logger.info(f"[first_run] Changing default admin password of {descriptor.display_name}")
    return _post(
        session,
        descriptor.api_url(config) + DTRACK_CHANGE_PASSWORD_PATH,
        data={
            "username": DEFAULT_ADMIN_USER,
            "password": DEFAULT_ADMIN_PASSWORD,
            "newPassword": password,
            "confirmPassword": password,
        },
    )


def change_sonarqube_password(descriptor, config, session):
    password = _new_password(descriptor, config)
    if password is None:
        return False
    logger.info(f"[first_run] Changing default admin password of {descriptor.display_name}")
    return _post(
        session,
        descriptor.api_url(config) + SONARQUBE_CHANGE_PASSWORD_PATH,
        auth=(DEFAULT_ADMIN_USER, DEFAULT_ADMIN_PASSWORD),
        data={
            "login": DEFAULT_ADMIN_USER,
            "previousPassword": DEFAULT_ADMIN_PASSWORD,
            "password": password,
        },
    )


def install_sonarqube_plugins(descriptor, config, compose):
    """
    Download every configured plugin into the SonarQube plugin directory, once each.

    Returns:
        list[str]: The plugin URLs that were downloaded successfully.
    """
    plugins = config.plugins
    if not plugins:
        logger.info("[first_run] No SonarQube plugins configured")
        return []

    logger.info(f"[first_run] Installing the following plugins: {' '.join(plugins)}...")
    installed = []
    for plugin in plugins:
        try:
            compose.exec(descriptor.compose_services[0], ["curl", "--output-dir", SONARQUBE_PLUGIN_DIR, "-LO", plugin])
        except OrchestratorCommandFailure as e:
            logger.error(f"[first_run] Could not download {plugin}: {e}")
            continue
        installed.append(plugin)

    logger.info(f"[first_run] Restarting {descriptor.display_name}...")
    try:
        compose.restart(descriptor.compose_services[0])
    except OrchestratorCommandFailure as e:
        logger.error(f"[first_run] Restart of {descriptor.display_name} failed, restart it manually: {e}")
    return installed


def configure_dependency_track(descriptor, config, compose, session):
    return change_dependency_track_password(descriptor, config, session)


def configure_sonarqube(descriptor, config, compose, session):
    changed = change_sonarqube_password(descriptor, config, session)
    install_sonarqube_plugins(descriptor, config, compose)
    return changed


FIRST_RUN_STEPS = {
    DEPENDENCY_TRACK: configure_dependency_track,
    SONARQUBE: configure_sonarqube,
}


def run_first_run(descriptor, config, compose, session=None):
    """
    Apply the one-time configuration for a service, if it has any.

    Returns:
        bool: True if the credential change succeeded (or nothing needed doing).
    """
    step = FIRST_RUN_STEPS.get(descriptor.name)
    if step is None:
        return True

    ok = step(descriptor, config, compose, session or requests.Session())
    if not ok:
        logger.warning(
            f"[first_run] {descriptor.display_name} still uses the default {DEFAULT_ADMIN_USER} password. "
            f"Change it manually: this step will not run again while volume {descriptor.volume_name(config)} exists"
        )
    return ok
