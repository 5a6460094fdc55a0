"""
Shared fixtures: an in-memory Shell and settings rooted in a temp project.
"""
from typing import Optional

import pytest

from localdev.config import Settings
from localdev.errors import CommandFailedError
from localdev.shell import CommandResult, Shell, command_line


class FakeShell(Shell):
    """Records commands instead of running them."""

    def __init__(
        self,
        installed: bool = True,
        daemon_running: bool = True,
        db_up: bool = False,
        probe_results: Optional[list[bool]] = None,
        failing: tuple[str, ...] = (),
        foreground_code: int = 0,
    ):
        self.installed = installed
        self.daemon_running = daemon_running
        self.db_up = db_up
        self.probe_results = list(probe_results or [])
        self.failing = failing
        self.foreground_code = foreground_code
        self.calls: list[dict] = []

    @property
    def commands(self) -> list[str]:
        return [c["command"] for c in self.calls]

    def which(self, name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if self.installed else None

    def _respond(self, args: list[str]) -> tuple[int, str]:
        line = command_line(args)
        if any(line.startswith(prefix) for prefix in self.failing):
            return 1, ""
        if args[1:] == ["info"]:
            return (0 if self.daemon_running else 1), ""
        if args[1:] == ["--version"]:
            return 0, "Docker version 27.0.3, build 7d4bcd8\n"
        if "ps" in args:
            status = "Up 3 minutes (healthy)" if self.db_up else ""
            return 0, f"NAME  IMAGE  STATUS\ndb-1  postgres  {status}\n"
        if "pg_isready" in args:
            ready = self.probe_results.pop(0) if self.probe_results else True
            return (0 if ready else 2), ""
        if "up" in args:
            self.db_up = True
        return 0, ""

    def run(self, args, *, capture=True, env=None, check=True):
        self.calls.append({"command": command_line(args), "env": env, "capture": capture})
        returncode, stdout = self._respond(args)
        if check and returncode != 0:
            raise CommandFailedError(command_line(args), returncode)
        return CommandResult(args=list(args), returncode=returncode, stdout=stdout)

    def run_foreground(self, args, *, env=None, shutdown_timeout=10.0, shutdown_message=""):
        self.calls.append({"command": command_line(args), "env": env, "capture": False})
        return self.foreground_code


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Empty project root containing only the compose file."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "docker-compose.local.yml").write_text("services: {}\n")
    return tmp_path


@pytest.fixture
def settings(project):
    """Settings with no real waiting."""
    return Settings(
        SETUP_INITIAL_WAIT_SECONDS=5,
        SETUP_READY_INTERVAL_SECONDS=2,
        ENSURE_READY_INTERVAL_SECONDS=1,
        APP_URL="http://localhost:5000",
    )


@pytest.fixture
def sleeps():
    """Collects requested sleeps; pass sleeps.append as the sleep function."""
    return []


@pytest.fixture
def shell():
    return FakeShell()
