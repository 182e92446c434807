"""
config.py
- Defines process-level configuration values derived from environment variables.
- Used by the runners and helpers for shared behavior control (paths, timeouts, dry-run).
- Demo stack settings (hostnames, passwords) live in the .env file, see config_loader.py.
"""

import os
import sys

from loguru import logger


def parse_env_int(var, default=0):
    try:
        return int(os.getenv(var, default))
    except ValueError:
        return default


def parse_env_bool(var, default="false"):
    return os.getenv(var, default).lower() == "true"


# --- Runtime Behavior Flags ---
DEBUG = parse_env_bool("DEBUG")
DRY_RUN = parse_env_bool("DRY_RUN")

# --- Logging ---
LOG_TO_FILE = parse_env_bool("LOG_TO_FILE")
LOG_FILE = os.getenv("LOG_FILE", "demolab.log")
LOG_LEVEL = "DEBUG" if DEBUG else "INFO"
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# --- Config Paths ---
COMPOSE_FILE = os.getenv("COMPOSE_FILE", "docker-compose.yml")
ENV_FILE = os.getenv("ENV_FILE", ".env")
ENV_TEMPLATE = os.getenv("ENV_TEMPLATE", "env-example")
SERVICES_FILE = os.getenv("SERVICES_FILE", "services.yml")

# --- Readiness & HTTP ---
READY_TIMEOUT = parse_env_int("READY_TIMEOUT", 1800)  # 0 = wait forever
READY_POLL_INTERVAL = parse_env_int("READY_POLL_INTERVAL", 1)
READY_MAX_INTERVAL = parse_env_int("READY_MAX_INTERVAL", 30)
HTTP_TIMEOUT = parse_env_int("HTTP_TIMEOUT", 10)

# --- Error Reporting ---
SENTRY_DSN = os.getenv("SENTRY_DSN")


def configure_logging(debug=DEBUG, log_to_file=LOG_TO_FILE):
    """Replace loguru's default sink with the project format (and an optional file sink)."""
    logger.remove()
    logger.add(
        sink=sys.stderr,
        level="DEBUG" if debug else "INFO",
        format=LOG_FORMAT,
        colorize=True,
    )
    if log_to_file:
        logger.add(LOG_FILE, level="DEBUG", format=LOG_FORMAT, rotation="10 MB", retention=3)
