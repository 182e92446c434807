"""
constants.py
- Project-wide constants shared across helpers and runners.
- Includes exit codes, container paths, and the stock credentials shipped by each service.
"""

# --- Exit Codes ---
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_ORCHESTRATOR_FAILURE = 2
EXIT_READINESS_TIMEOUT = 3
EXIT_CANCELLED = 130

# --- Hostname Validation ---
HOSTNAME_KEYS = ("DTRACK_HOSTNAME", "GITLAB_HOSTNAME", "SONARQUBE_HOSTNAME")
PROBE_PORT_KEY = "GITLAB_PORT"  # any port works, only name resolution matters
PROBE_TIMEOUT = 3  # seconds

# --- Stock Credentials ---
DEFAULT_ADMIN_USER = "admin"
DEFAULT_ADMIN_PASSWORD = "admin"
GITLAB_ROOT_USER = "root"

# --- SonarQube ---
SONARQUBE_PLUGIN_DIR = "/opt/sonarqube/extensions/plugins/"

# --- Shared Runner Cache ---
RUNNER_CACHE_VOLUME = "{demo_name}-runner_cache"
RUNNER_CACHE_MOUNT = "/srv/cache"
PERMISSION_FIX_IMAGE = "busybox"

# --- Secrets Redaction ---
SENSITIVE_PATTERNS = ("PASSWORD", "SECRET", "KEY", "TOKEN", "AUTH")
