"""
Container runtime checks.
"""
from typing import Optional

from localdev.config import Settings
from localdev.errors import RuntimeMissingError, RuntimeNotRunningError
from localdev.shell import Shell


INSTALL_URL = "https://docs.docker.com/get-docker/"


def check_runtime(shell: Shell, settings: Settings) -> None:
    """
    Fail unless the runtime is installed and its daemon answers.

    Raises:
        RuntimeMissingError: binary not on PATH
        RuntimeNotRunningError: `<runtime> info` exits non-zero
    """
    if shell.which(settings.RUNTIME) is None:
        raise RuntimeMissingError(
            f"{settings.RUNTIME} is not installed.",
            hint=f"Please install Docker Desktop first: {INSTALL_URL}",
        )

    if not shell.succeeds([settings.RUNTIME, "info"]):
        raise RuntimeNotRunningError(
            f"{settings.RUNTIME} is not running.",
            hint="Please start Docker Desktop first.",
        )


def runtime_version(shell: Shell, settings: Settings) -> Optional[str]:
    """Version string from `<runtime> --version`, or None if unavailable."""
    if shell.which(settings.RUNTIME) is None:
        return None
    result = shell.run([settings.RUNTIME, "--version"], check=False)
    if not result.ok:
        return None
    return result.stdout.strip() or None
