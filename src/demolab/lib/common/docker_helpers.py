"""
docker_helpers.py
- Named-volume inspection and the ephemeral helper container used to fix cache permissions.
- Uses the Docker SDK when the daemon is reachable and falls back to the docker CLI otherwise.
"""

import subprocess

from docker.errors import DockerException, NotFound
from loguru import logger

from demolab.core.constants import PERMISSION_FIX_IMAGE, RUNNER_CACHE_MOUNT, RUNNER_CACHE_VOLUME
from demolab.core.docker_client import get_client


def volume_exists(name, client=None):
    """
    Check whether a named Docker volume exists.

    Args:
        name (str): Volume name (e.g. demo-sonarqube_config).
        client: Optional Docker SDK client, defaults to the shared one.

    Returns:
        bool: True if the volume exists.
    """
    client = client or get_client()
    if client is not None:
        try:
            client.volumes.get(name)
            return True
        except NotFound:
            return False
        except DockerException as e:
            logger.warning(f"[docker_helpers] SDK volume lookup failed for {name}: {e}, falling back to CLI")

    try:
        result = subprocess.run(["docker", "volume", "inspect", name], capture_output=True, text=True)
    except OSError as e:
        logger.warning(f"[docker_helpers] docker CLI unavailable, assuming {name} exists: {e}")
        return True
    return result.returncode == 0


def fix_cache_permissions(demo_name, client=None, dry_run=False):
    """
    Make the shared runner cache volume world-writable so every tool can use it.

    Returns:
        bool: True if the helper container ran successfully.
    """
    volume = RUNNER_CACHE_VOLUME.format(demo_name=demo_name)
    command = ["/bin/sh", "-c", f"chmod o+rwx {RUNNER_CACHE_MOUNT}/"]

    if dry_run:
        logger.info(f"[docker_helpers] Would run {PERMISSION_FIX_IMAGE} with {volume} mounted at {RUNNER_CACHE_MOUNT}")
        return True

    client = client or get_client()
    try:
        if client is not None:
            client.containers.run(
                PERMISSION_FIX_IMAGE,
                command,
                volumes={volume: {"bind": RUNNER_CACHE_MOUNT, "mode": "z"}},
                remove=True,
            )
        else:
            subprocess.run(
                ["docker", "run", "--rm", "-v", f"{volume}:{RUNNER_CACHE_MOUNT}:z", PERMISSION_FIX_IMAGE, *command],
                capture_output=True, text=True, check=True,
            )
    except (DockerException, subprocess.CalledProcessError, OSError) as e:
        logger.error(f"[docker_helpers] Could not fix permissions on {volume}: {e}")
        return False

    logger.info(f"[docker_helpers] Fixed permissions on {volume}")
    return True
