"""
checks.py
- Health checks answering a single question: is the service ready yet?
- LogMarkerCheck looks for an exact marker line in the compose logs (the default).
- HttpHealthCheck asks a health endpoint, for services that expose one.
"""

import requests
from loguru import logger


class HealthCheck:
    """A readiness probe. Implementations must not raise for a service that is still starting."""

    description = "health check"

    def is_ready(self) -> bool:
        raise NotImplementedError


class LogMarkerCheck(HealthCheck):
    def __init__(self, compose, service, marker):
        self.compose = compose
        self.service = service
        self.marker = marker
        self.description = f"'{marker}' in {service} logs"

    def is_ready(self) -> bool:
        # Exact, case-sensitive substring match
        return self.marker in self.compose.logs(self.service)


class HttpHealthCheck(HealthCheck):
    def __init__(self, url, expected_status=None, session=None, timeout=5):
        self.url = url
        self.expected_status = expected_status
        self.session = session or requests.Session()
        self.timeout = timeout
        self.description = f"GET {url}"

    def is_ready(self) -> bool:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"[readiness] {self.url} not answering yet: {e}")
            return False

        if response.status_code != 200:
            logger.debug(f"[readiness] {self.url} returned HTTP {response.status_code}")
            return False
        if self.expected_status is None:
            return True

        try:
            status = response.json().get("status")
        except (ValueError, AttributeError):
            return False
        return status == self.expected_status


def health_check_for(descriptor, config, compose, session=None):
    """Pick the health check for a service: its HTTP endpoint if configured, else its log marker."""
    if descriptor.health_path:
        url = descriptor.api_url(config) + descriptor.health_path
        return HttpHealthCheck(url, expected_status=descriptor.health_status, session=session)
    return LogMarkerCheck(compose, descriptor.log_service, descriptor.readiness_marker)
