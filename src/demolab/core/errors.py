"""
errors.py
- Exception types raised by the loader, the compose wrapper and the CLI.
- The entrypoint maps each of them to an exit code.
"""


class DemolabError(Exception):
    pass


class ConfigError(DemolabError):
    """The .env file could not be created or read."""


class MissingTool(DemolabError):
    """A required external executable (docker-compose / docker) is not installed."""


class UnknownCLIArgument(DemolabError):
    def __init__(self, argument):
        super().__init__(f"Unknown option: {argument}")
        self.argument = argument


class OrchestratorCommandFailure(DemolabError):
    def __init__(self, command, returncode, stderr=""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"'{' '.join(self.command)}' exited with {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)
