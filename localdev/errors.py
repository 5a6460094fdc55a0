"""
Bootstrap errors.

Every failure carries a human-readable message and an optional remediation
hint. Procedures raise; only the CLI catches and prints.
"""
from typing import Optional


class LocalDevError(Exception):
    """Base error for every aborted bootstrap step."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class RuntimeMissingError(LocalDevError):
    """Container runtime binary is not on PATH."""


class RuntimeNotRunningError(LocalDevError):
    """Container runtime is installed but its daemon does not answer."""


class EnvFileMissingError(LocalDevError):
    """Environment file has not been created yet."""


class ComposeFileMissingError(LocalDevError):
    """Compose file describing the database is absent."""


class DatabaseNotReadyError(LocalDevError):
    """Readiness probe kept failing after all attempts."""


class CommandFailedError(LocalDevError):
    """External command exited non-zero or could not be started."""

    def __init__(
        self,
        command: str,
        returncode: int,
        output: str = "",
        hint: Optional[str] = None,
    ):
        super().__init__(f"Command failed ({returncode}): {command}", hint)
        self.command = command
        self.returncode = returncode
        self.output = output
