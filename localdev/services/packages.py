"""
Package manager steps: dependency install, schema migration, dev server.
"""
from pathlib import Path
from typing import Optional

from localdev import console
from localdev.config import Settings
from localdev.shell import Shell


def install_command(settings: Settings) -> list[str]:
    return [settings.PACKAGE_MANAGER, "install"]


def migrate_command(settings: Settings) -> list[str]:
    return [settings.PACKAGE_MANAGER, "run", settings.MIGRATE_SCRIPT]


def dev_server_command(settings: Settings) -> list[str]:
    return [settings.PACKAGE_MANAGER, "run", settings.DEV_SCRIPT]


def install_dependencies(
    shell: Shell,
    settings: Settings,
    env: Optional[dict[str, str]] = None,
) -> None:
    """Run the install with output streamed to the terminal."""
    shell.run(install_command(settings), capture=False, env=env)


def ensure_dependencies(
    shell: Shell,
    settings: Settings,
    env: Optional[dict[str, str]] = None,
) -> bool:
    """
    Install dependencies only if the dependency directory is missing.

    Returns:
        True if an install ran
    """
    if Path(settings.DEPENDENCY_DIR).exists():
        return False

    console.info("Installing dependencies...")
    install_dependencies(shell, settings, env)
    console.success("Dependencies installed")
    return True


def run_migration(
    shell: Shell,
    settings: Settings,
    env: Optional[dict[str, str]] = None,
) -> None:
    """Push the schema with the migration script."""
    shell.run(migrate_command(settings), capture=False, env=env)
