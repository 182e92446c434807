"""
config_loader.py
- Creates the .env file from the env-example template on first use and loads it.
- Exposes the loaded values as an immutable RuntimeConfig passed to every step.
- Also loads the optional YAML service catalog overrides (services.yml).
"""

import os
import shutil
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

import yaml
from dotenv import dotenv_values
from loguru import logger

from demolab.core.constants import SENSITIVE_PATTERNS
from demolab.core.errors import ConfigError


@dataclass(frozen=True)
class RuntimeConfig:
    """Read-only view of the demo stack settings loaded from the .env file."""

    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, key):
        return self.values[key]

    def __contains__(self, key):
        return key in self.values

    def get(self, key, default=None):
        return self.values.get(key, default)

    def require(self, key):
        value = self.values.get(key)
        if not value:
            raise ConfigError(f"{key} is not set - please edit the .env file")
        return value

    def url(self, hostname_key, port_key):
        return f"http://{self.require(hostname_key)}:{self.require(port_key)}"

    @property
    def demo_name(self):
        return self.require("DEMO_NAME")

    @property
    def plugins(self) -> Tuple[str, ...]:
        return tuple(self.values.get("SONARQUBE_PLUGINS", "").split())


def ensure_env_file(env_path, template_path):
    """
    Create env_path as an exact copy of template_path if it does not exist yet.

    Returns:
        bool: True if the file was created, False if it already existed.
    """
    if os.path.isfile(env_path):
        logger.info(f"[config] Found existing {env_path} file...")
        return False

    logger.info(f"[config] No {env_path} file found, copying {template_path} file to create one...")
    if not os.path.isfile(template_path):
        raise ConfigError(f"Template {template_path} not found, unable to create {env_path}")
    try:
        shutil.copyfile(template_path, env_path)
    except OSError as e:
        raise ConfigError(f"Could not create {env_path} from {template_path}: {e}") from e
    logger.success(f"[config] Default {env_path} file created")
    return True


def load_runtime_config(env_path, template_path):
    ensure_env_file(env_path, template_path)
    try:
        parsed = dotenv_values(env_path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {env_path}: {e}") from e

    config = RuntimeConfig({key: value or "" for key, value in parsed.items()})
    preview_env(config)
    return config


def redact(key, value):
    if any(pattern in key.upper() for pattern in SENSITIVE_PATTERNS):
        return "***REDACTED***"
    return value


def preview_env(config):
    """Log the loaded settings at DEBUG level with secrets redacted."""
    lines = [f"│ {key}={redact(key, value)}" for key, value in config.values.items()]
    logger.debug("[config] Loaded settings:\n" + "\n".join(lines))


def load_yaml(path):
    """Safely load a YAML file and return a parsed dict. Returns {} if absent or invalid."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"[config] Failed to load {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.error(f"[config] Ignoring {path}: expected a mapping at the top level")
        return {}
    return data
