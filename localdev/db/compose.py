"""
Database container lifecycle through the compose CLI.

Readiness is a fixed-count poll: no backoff, no jitter, success on the first
zero-exit pg_isready probe.
"""
import time
from pathlib import Path
from typing import Callable, Optional

from tenacity import RetryError, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from localdev import console
from localdev.config import Settings
from localdev.errors import CommandFailedError, ComposeFileMissingError, DatabaseNotReadyError
from localdev.shell import Shell, command_line


class Compose:
    """The database service of the local compose file."""

    def __init__(self, shell: Shell, settings: Settings):
        self.shell = shell
        self.settings = settings

    def _args(self, *extra: str) -> list[str]:
        return self.settings.compose_base + list(extra)

    @property
    def service(self) -> str:
        return self.settings.DB_SERVICE

    def logs_command(self) -> str:
        return command_line(self._args("logs", self.service))

    def down_command(self) -> str:
        return command_line(self._args("down"))

    def require_file(self) -> None:
        if not Path(self.settings.COMPOSE_FILE).is_file():
            raise ComposeFileMissingError(
                f"{self.settings.COMPOSE_FILE} not found",
                hint=f"Make sure {self.settings.COMPOSE_FILE} exists in the project root",
            )

    def up(self) -> None:
        """Start the database service detached."""
        self.shell.run(self._args("up", "-d", self.service), capture=False)

    def is_running(self) -> bool:
        """True when `ps` reports the service as Up."""
        try:
            result = self.shell.run(self._args("ps", self.service))
        except CommandFailedError as e:
            e.hint = (
                f"Check that `{command_line(self.settings.compose_base)}` works "
                f"and {self.settings.COMPOSE_FILE} is valid"
            )
            raise
        return "Up" in result.stdout

    def probe(self) -> bool:
        """One pg_isready run inside the container."""
        return self.shell.succeeds(
            self._args("exec", "-T", self.service, "pg_isready", "-U", self.settings.DB_USER)
        )

    def logs(self, follow: bool = False) -> None:
        args = self._args("logs")
        if follow:
            args.append("-f")
        args.append(self.service)
        self.shell.run(args, capture=False)

    def down(self, volumes: bool = False) -> None:
        args = self._args("down")
        if volumes:
            args.append("-v")
        self.shell.run(args, capture=False)


def wait_until_ready(
    compose: Compose,
    *,
    max_attempts: int,
    interval: float,
    on_retry: Optional[Callable[[int, int], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Poll the readiness probe.

    Args:
        compose: Database service
        max_attempts: Probes before giving up
        interval: Seconds between probes (never before the first)
        on_retry: Called with (failed_attempt, max_attempts) before each sleep
        sleep: Sleep function

    Returns:
        The 1-based attempt that succeeded

    Raises:
        DatabaseNotReadyError: every probe failed
    """
    attempts = 0

    def probe() -> bool:
        nonlocal attempts
        attempts += 1
        return compose.probe()

    def before_sleep(retry_state) -> None:
        if on_retry is not None:
            on_retry(retry_state.attempt_number, max_attempts)

    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_fixed(interval),
        retry=retry_if_result(lambda ready: not ready),
        before_sleep=before_sleep,
        sleep=sleep,
    )
    try:
        retrying(probe)
    except RetryError:
        raise DatabaseNotReadyError(
            f"Database failed to start after {max_attempts} attempts",
            hint=f"Check logs with: {compose.logs_command()}",
        )
    return attempts


def ensure_database(
    compose: Compose,
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """
    Make sure the database is up, starting it if needed.

    Returns:
        True if the container had to be started
    """
    if compose.is_running():
        console.success("PostgreSQL database is running")
        return False

    console.warning("PostgreSQL database is not running")
    console.info("Starting database...")
    compose.up()

    console.info("Waiting for database to be ready...")
    wait_until_ready(
        compose,
        max_attempts=settings.READY_MAX_ATTEMPTS,
        interval=settings.ENSURE_READY_INTERVAL_SECONDS,
        sleep=sleep,
    )
    console.success("Database is ready!")
    return True
