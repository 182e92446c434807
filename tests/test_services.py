import pytest

from demolab.core.errors import UnknownCLIArgument
from demolab.core.services import (
    DEFAULT_SERVICES,
    DEPENDENCY_TRACK,
    GITLAB,
    SONARQUBE,
    LaunchMode,
    load_service_catalog,
    services_for_mode,
)


@pytest.mark.parametrize(
    "argument, mode",
    [
        (None, LaunchMode.GITLAB_ONLY),
        ("all", LaunchMode.ALL),
        ("dependency-track", LaunchMode.DEPENDENCY_TRACK),
        ("sonarqube", LaunchMode.SONARQUBE),
        ("stop", LaunchMode.STOP),
    ],
)
def test_from_argument(argument, mode):
    assert LaunchMode.from_argument(argument) is mode


@pytest.mark.parametrize("argument", ["gitlab-only", "ALL", "Sonarqube", "", "--help"])
def test_from_argument_rejects_unknown(argument):
    with pytest.raises(UnknownCLIArgument):
        LaunchMode.from_argument(argument)


@pytest.mark.parametrize("mode", [m for m in LaunchMode if m is not LaunchMode.STOP])
def test_every_start_mode_begins_with_gitlab(mode):
    assert services_for_mode(mode)[0] == GITLAB


def test_services_for_mode():
    assert services_for_mode(LaunchMode.STOP) == []
    assert services_for_mode(LaunchMode.GITLAB_ONLY) == [GITLAB]
    assert services_for_mode(LaunchMode.DEPENDENCY_TRACK) == [GITLAB, DEPENDENCY_TRACK]
    assert services_for_mode(LaunchMode.SONARQUBE) == [GITLAB, SONARQUBE]
    assert services_for_mode(LaunchMode.ALL) == [GITLAB, DEPENDENCY_TRACK, SONARQUBE]


def test_descriptor_urls_and_volume(runtime_config):
    sonarqube = DEFAULT_SERVICES[SONARQUBE]
    dtrack = DEFAULT_SERVICES[DEPENDENCY_TRACK]

    assert sonarqube.volume_name(runtime_config) == "demo-sonarqube_config"
    assert dtrack.volume_name(runtime_config) == "demo-dependency-track"
    assert DEFAULT_SERVICES[GITLAB].volume_name(runtime_config) is None
    assert dtrack.login_url(runtime_config) == "http://dtrack.demo.local:8082"
    assert dtrack.api_url(runtime_config) == "http://dtrack.demo.local:8081"
    assert sonarqube.api_url(runtime_config) == "http://sonarqube.demo.local:9000"


def test_catalog_without_file_is_defaults(tmp_path):
    assert load_service_catalog(str(tmp_path / "services.yml")) == DEFAULT_SERVICES
    assert load_service_catalog(None) == DEFAULT_SERVICES


def test_catalog_applies_overrides(tmp_path):
    path = tmp_path / "services.yml"
    path.write_text(
        "sonarqube:\n"
        "  health_path: /api/system/status\n"
        "  health_status: UP\n"
        "  colour: blue\n"
        "gitlab:\n"
        "  compose_services: [gitlab]\n"
        "jenkins:\n"
        "  readiness_marker: Jenkins is fully up\n"
    )

    catalog = load_service_catalog(str(path))

    assert catalog[SONARQUBE].health_path == "/api/system/status"
    assert catalog[SONARQUBE].health_status == "UP"
    assert catalog[SONARQUBE].readiness_marker == "SonarQube is operational"
    assert catalog[GITLAB].compose_services == ("gitlab",)
    assert "jenkins" not in catalog
    assert DEFAULT_SERVICES[GITLAB].compose_services == ("gitlab", "gitlab-runner-1", "gitlab-runner-2")


def test_catalog_accepts_a_single_compose_service(tmp_path):
    path = tmp_path / "services.yml"
    path.write_text("sonarqube:\n  compose_services: sonarqube\n")

    assert load_service_catalog(str(path))[SONARQUBE].compose_services == ("sonarqube",)
