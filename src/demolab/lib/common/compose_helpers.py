"""
compose_helpers.py
- Thin wrapper around the docker-compose CLI (the orchestrator of the demo stack).
- Every call goes through subprocess; failures raise OrchestratorCommandFailure.
- Log retrieval never raises: a failed `logs` call simply yields no text.
"""

import shutil
import subprocess

from loguru import logger

from demolab.core.errors import MissingTool, OrchestratorCommandFailure


def find_compose_command():
    """
    Locate the compose executable: standalone docker-compose first, then the docker plugin.

    Returns:
        list[str]: The command prefix to invoke compose with.
    """
    standalone = shutil.which("docker-compose")
    if standalone:
        return [standalone]

    docker = shutil.which("docker")
    if docker:
        probe = subprocess.run([docker, "compose", "version"], capture_output=True, text=True)
        if probe.returncode == 0:
            return [docker, "compose"]

    raise MissingTool("Neither docker-compose nor the docker compose plugin is installed")


class ComposeClient:
    def __init__(self, compose_file="docker-compose.yml", command=None, dry_run=False):
        self.compose_file = compose_file
        self.command = list(command) if command else find_compose_command()
        self.dry_run = dry_run

    def _run(self, args, check=True):
        cmd = [*self.command, "-f", self.compose_file, *args]
        if self.dry_run:
            logger.info(f"[compose] Would run: {' '.join(cmd)}")
            return subprocess.CompletedProcess(cmd, 0, "", "")

        logger.debug(f"[compose] Running: {' '.join(cmd)}")
        # compose logs may carry arbitrary bytes from the containers
        result = subprocess.run(cmd, capture_output=True, encoding="utf-8", errors="replace")
        if check and result.returncode != 0:
            raise OrchestratorCommandFailure(cmd, result.returncode, result.stderr)
        return result

    def up(self, services):
        """Start exactly the given services detached. Already running services are left as they are."""
        services = list(services)
        self._run(["up", "--detach", *services])
        logger.info(f"[compose] Started {', '.join(services)}")

    def logs(self, service):
        try:
            result = self._run(["logs", "--no-color", service], check=False)
        except OSError as e:
            logger.debug(f"[compose] Could not read logs of {service}: {e}")
            return ""
        if result.returncode != 0:
            return ""
        return result.stdout or ""

    def stop(self):
        self._run(["stop"])

    def exec(self, service, command):
        return self._run(["exec", "-T", service, *command])

    def restart(self, service):
        self._run(["restart", service])
