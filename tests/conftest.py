from unittest.mock import MagicMock

import pytest

from demolab.core.config_loader import RuntimeConfig
from demolab.core.services import DEFAULT_SERVICES

MARKERS = {
    "gitlab": "gitlab Server initialized\n",
    "dtrack-frontend": "frontend Configuration complete\n",
    "sonarqube": "sonarqube SonarQube is operational\n",
}

VOLUMES_BY_SERVICE = {
    "dtrack-apiserver": "demo-dependency-track",
    "sonarqube": "demo-sonarqube_config",
}

SETTINGS = {
    "DEMO_NAME": "demo",
    "GITLAB_HOSTNAME": "gitlab.demo.local",
    "GITLAB_PORT": "8080",
    "GITLAB_PASSWORD": "gitlab-secret",
    "DTRACK_HOSTNAME": "dtrack.demo.local",
    "DTRACK_API_PORT": "8081",
    "DTRACK_FRONTEND_PORT": "8082",
    "DTRACK_PASSWORD": "dtrack-secret",
    "SONARQUBE_HOSTNAME": "sonarqube.demo.local",
    "SONARQUBE_PORT": "9000",
    "SONARQUBE_PASSWORD": "sonar-secret",
    "SONARQUBE_PLUGINS": "https://example.org/a.jar https://example.org/b.jar",
}


class FakeCompose:
    """Records orchestrator calls; `up` creates the volumes the real services would create."""

    def __init__(self, logs=None, volumes=None):
        self.calls = []
        self.log_text = dict(MARKERS if logs is None else logs)
        self.volumes = set() if volumes is None else volumes

    def up(self, services):
        self.calls.append(("up", tuple(services)))
        for service in services:
            if service in VOLUMES_BY_SERVICE:
                self.volumes.add(VOLUMES_BY_SERVICE[service])

    def logs(self, service):
        return self.log_text.get(service, "")

    def stop(self):
        self.calls.append(("stop",))

    def exec(self, service, command):
        self.calls.append(("exec", service, tuple(command)))

    def restart(self, service):
        self.calls.append(("restart", service))

    def started(self):
        return [call[1] for call in self.calls if call[0] == "up"]


@pytest.fixture
def runtime_config():
    return RuntimeConfig(SETTINGS)


@pytest.fixture
def catalog():
    return dict(DEFAULT_SERVICES)


@pytest.fixture
def compose():
    return FakeCompose()


@pytest.fixture
def session():
    """A requests.Session stand-in whose calls all succeed."""
    return MagicMock()


@pytest.fixture
def patch_volumes(monkeypatch):
    """Route volume lookups to the fake compose's volume set."""

    def apply(fake):
        monkeypatch.setattr("demolab.runner.launcher.volume_exists", lambda name: name in fake.volumes)
        return fake

    return apply
