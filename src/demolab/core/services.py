"""
services.py
- Static descriptions of the demo services (GitLab, Dependency-Track, SonarQube).
- Launch modes selecting which services are brought up in a run.
- Per-field overrides can be supplied through the optional services.yml catalog.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from loguru import logger

from demolab.core.config_loader import load_yaml
from demolab.core.constants import DEFAULT_ADMIN_USER, GITLAB_ROOT_USER
from demolab.core.errors import UnknownCLIArgument

GITLAB = "gitlab"
DEPENDENCY_TRACK = "dependency-track"
SONARQUBE = "sonarqube"


@dataclass(frozen=True)
class ServiceDescriptor:
    name: str
    display_name: str
    compose_services: Tuple[str, ...]
    log_service: str
    readiness_marker: str
    hostname_key: str
    port_key: str
    password_key: str
    login_user: str = DEFAULT_ADMIN_USER
    api_port_key: Optional[str] = None
    first_run_volume: Optional[str] = None  # formatted with demo_name
    health_path: Optional[str] = None
    health_status: Optional[str] = None

    def volume_name(self, config):
        if not self.first_run_volume:
            return None
        return self.first_run_volume.format(demo_name=config.demo_name)

    def login_url(self, config):
        return config.url(self.hostname_key, self.port_key)

    def api_url(self, config):
        return config.url(self.hostname_key, self.api_port_key or self.port_key)


DEFAULT_SERVICES = {
    GITLAB: ServiceDescriptor(
        name=GITLAB,
        display_name="GitLab",
        compose_services=("gitlab", "gitlab-runner-1", "gitlab-runner-2"),
        log_service="gitlab",
        readiness_marker="Server initialized",
        hostname_key="GITLAB_HOSTNAME",
        port_key="GITLAB_PORT",
        password_key="GITLAB_PASSWORD",
        login_user=GITLAB_ROOT_USER,
    ),
    DEPENDENCY_TRACK: ServiceDescriptor(
        name=DEPENDENCY_TRACK,
        display_name="Dependency-Track",
        compose_services=("dtrack-apiserver", "dtrack-frontend"),
        log_service="dtrack-frontend",
        readiness_marker="Configuration complete",
        hostname_key="DTRACK_HOSTNAME",
        port_key="DTRACK_FRONTEND_PORT",
        api_port_key="DTRACK_API_PORT",
        password_key="DTRACK_PASSWORD",
        first_run_volume="{demo_name}-dependency-track",
    ),
    SONARQUBE: ServiceDescriptor(
        name=SONARQUBE,
        display_name="SonarQube",
        compose_services=("sonarqube",),
        log_service="sonarqube",
        readiness_marker="SonarQube is operational",
        hostname_key="SONARQUBE_HOSTNAME",
        port_key="SONARQUBE_PORT",
        password_key="SONARQUBE_PASSWORD",
        first_run_volume="{demo_name}-sonarqube_config",
    ),
}


class LaunchMode(Enum):
    GITLAB_ONLY = "gitlab-only"
    DEPENDENCY_TRACK = "dependency-track"
    SONARQUBE = "sonarqube"
    ALL = "all"
    STOP = "stop"

    @classmethod
    def from_argument(cls, argument=None):
        """Map the optional positional CLI argument to a mode (no argument = GitLab only)."""
        if argument is None:
            return cls.GITLAB_ONLY
        if argument in (cls.DEPENDENCY_TRACK.value, cls.SONARQUBE.value, cls.ALL.value, cls.STOP.value):
            return cls(argument)
        raise UnknownCLIArgument(argument)


def services_for_mode(mode):
    """Return the service names started for a mode, in start order. GitLab always comes first."""
    if mode is LaunchMode.STOP:
        return []
    names = [GITLAB]
    if mode in (LaunchMode.ALL, LaunchMode.DEPENDENCY_TRACK):
        names.append(DEPENDENCY_TRACK)
    if mode in (LaunchMode.ALL, LaunchMode.SONARQUBE):
        names.append(SONARQUBE)
    return names


_FIELDS = {f.name for f in dataclasses.fields(ServiceDescriptor)} - {"name"}


def load_service_catalog(path=None):
    """
    Build the service catalog from the defaults plus per-field overrides from YAML.

    Example services.yml:
        sonarqube:
          health_path: /api/system/status
          health_status: UP
    """
    catalog = dict(DEFAULT_SERVICES)
    overrides = load_yaml(path) if path else {}

    for name, fields in overrides.items():
        if name not in catalog:
            logger.warning(f"[services] Ignoring unknown service '{name}' in {path}")
            continue
        if not isinstance(fields, dict):
            logger.warning(f"[services] Ignoring override for '{name}': expected a mapping")
            continue
        unknown = set(fields) - _FIELDS
        if unknown:
            logger.warning(f"[services] Ignoring unknown fields for '{name}': {', '.join(sorted(unknown))}")
        changes = {key: value for key, value in fields.items() if key in _FIELDS}
        if "compose_services" in changes:
            services = changes["compose_services"]
            changes["compose_services"] = (services,) if isinstance(services, str) else tuple(services)
        catalog[name] = dataclasses.replace(catalog[name], **changes)
        logger.debug(f"[services] Applied overrides for {name}: {changes}")

    return catalog
