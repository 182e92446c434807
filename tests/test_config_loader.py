import dataclasses

import pytest

from demolab.core.config_loader import RuntimeConfig, ensure_env_file, load_runtime_config, load_yaml, redact
from demolab.core.errors import ConfigError

TEMPLATE = """# demo settings
DEMO_NAME=demo
GITLAB_HOSTNAME=gitlab.demo.local
GITLAB_PORT=8080
GITLAB_URL=http://${GITLAB_HOSTNAME}:${GITLAB_PORT}
SONARQUBE_PLUGINS="https://example.org/a.jar
  https://example.org/b.jar"
"""


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "env-example"
    path.write_text(TEMPLATE)
    return path


def test_first_load_creates_env_file_identical_to_template(tmp_path, template):
    env = tmp_path / ".env"

    config = load_runtime_config(str(env), str(template))

    assert env.read_bytes() == template.read_bytes()
    assert config["DEMO_NAME"] == "demo"


def test_existing_env_file_is_loaded_not_overwritten(tmp_path, template):
    env = tmp_path / ".env"
    env.write_text("DEMO_NAME=custom\n")

    created = ensure_env_file(str(env), str(template))
    config = load_runtime_config(str(env), str(template))

    assert created is False
    assert env.read_text() == "DEMO_NAME=custom\n"
    assert config.demo_name == "custom"


def test_missing_template_raises_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_runtime_config(str(tmp_path / ".env"), str(tmp_path / "env-example"))
    assert not (tmp_path / ".env").exists()


def test_values_are_interpolated_and_plugins_split(tmp_path, template):
    config = load_runtime_config(str(tmp_path / ".env"), str(template))

    assert config["GITLAB_URL"] == "http://gitlab.demo.local:8080"
    assert config.plugins == ("https://example.org/a.jar", "https://example.org/b.jar")


def test_runtime_config_is_immutable():
    source = {"DEMO_NAME": "demo"}
    config = RuntimeConfig(source)
    source["DEMO_NAME"] = "changed"

    assert config["DEMO_NAME"] == "demo"
    with pytest.raises(TypeError):
        config.values["DEMO_NAME"] = "other"
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.values = {}


def test_require_and_url():
    config = RuntimeConfig({"HOST": "example.local", "PORT": "80", "EMPTY": ""})

    assert config.url("HOST", "PORT") == "http://example.local:80"
    with pytest.raises(ConfigError):
        config.require("EMPTY")
    with pytest.raises(ConfigError):
        config.require("MISSING")


def test_redact_hides_secrets():
    assert redact("GITLAB_PASSWORD", "hunter2") == "***REDACTED***"
    assert redact("GITLAB_HOSTNAME", "gitlab.local") == "gitlab.local"


def test_load_yaml_tolerates_missing_and_invalid_files(tmp_path):
    broken = tmp_path / "broken.yml"
    broken.write_text("key: [unclosed")
    listing = tmp_path / "list.yml"
    listing.write_text("- a\n- b\n")

    assert load_yaml(str(tmp_path / "absent.yml")) == {}
    assert load_yaml(str(broken)) == {}
    assert load_yaml(str(listing)) == {}
