"""
docker_client.py
- Provides a shared, lazily created Docker SDK client for volume and helper-container work.
- Returns None when the daemon is unreachable so callers can fall back to the docker CLI.
"""

import docker
from loguru import logger

_client = None


def get_client():
    global _client
    if _client is None:
        try:
            _client = docker.from_env()
        except Exception as e:
            logger.debug(f"[docker_client] Docker SDK unavailable, using CLI fallback: {e}")
            return None
    return _client
