"""
External process execution.

Every bootstrap step is one synchronous shell-out. This module is the only
place that touches subprocess, so tests can swap in a fake Shell.
"""
import logging
import os
import shlex
import shutil
import signal
import subprocess
import time
from typing import Optional

from pydantic import BaseModel

from localdev.errors import CommandFailedError


logger = logging.getLogger(__name__)

FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# Granularity of the foreground wait loop
_WAIT_POLL_SECONDS = 0.2


class CommandResult(BaseModel):
    """Outcome of one finished external command."""
    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return (self.stdout + self.stderr).strip()


def command_line(args: list[str]) -> str:
    """Render args the way a user would type them."""
    return " ".join(shlex.quote(a) for a in args)


class Shell:
    """Runs external commands one at a time."""

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def run(
        self,
        args: list[str],
        *,
        capture: bool = True,
        env: Optional[dict[str, str]] = None,
        check: bool = True,
    ) -> CommandResult:
        """
        Run a command to completion.

        Args:
            args: Program and arguments
            capture: Capture stdout/stderr instead of inheriting the terminal
            env: Full child environment (inherits ours if None)
            check: Raise CommandFailedError on a non-zero exit

        Returns:
            CommandResult
        """
        logger.debug("run: %s", command_line(args))
        try:
            completed = subprocess.run(
                args,
                env=env,
                capture_output=capture,
                text=True,
            )
        except OSError as e:
            # Missing executable behaves like the shell's "command not found"
            raise CommandFailedError(command_line(args), 127, str(e)) from e

        result = CommandResult(
            args=list(args),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        logger.debug("exit %d: %s", result.returncode, command_line(args))

        if check and not result.ok:
            raise CommandFailedError(command_line(args), result.returncode, result.output)
        return result

    def succeeds(self, args: list[str]) -> bool:
        """Zero-exit probe with output discarded."""
        return self.run(args, check=False).ok

    def run_foreground(
        self,
        args: list[str],
        *,
        env: Optional[dict[str, str]] = None,
        shutdown_timeout: float = 10.0,
        shutdown_message: str = "Shutting down...",
    ) -> int:
        """
        Run a long-lived child attached to the terminal.

        SIGINT and SIGTERM received while the child runs are forwarded to it.
        A child that outlives shutdown_timeout after the first forwarded
        signal is killed.

        Returns:
            0 if the child stopped because we forwarded a signal, otherwise
            its exit status (128 + N when it died from signal N)
        """
        logger.debug("spawn: %s", command_line(args))
        try:
            process = subprocess.Popen(args, env=env)
        except OSError as e:
            raise CommandFailedError(command_line(args), 127, str(e)) from e

        received: list[int] = []

        def forward(signum, frame):
            if process.poll() is not None:
                return
            if not received:
                print(f"\n🛑 {shutdown_message}")
            received.append(signum)
            if signum == signal.SIGINT and os.name != "nt":
                process.send_signal(signum)
            else:
                process.terminate()

        previous = {signum: signal.signal(signum, forward) for signum in FORWARDED_SIGNALS}
        try:
            deadline = None
            while True:
                try:
                    returncode = process.wait(timeout=_WAIT_POLL_SECONDS)
                    break
                except subprocess.TimeoutExpired:
                    if not received:
                        continue
                    if deadline is None:
                        deadline = time.monotonic() + shutdown_timeout
                    elif time.monotonic() >= deadline:
                        logger.warning("child ignored shutdown signal, killing pid %d", process.pid)
                        process.kill()
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)

        logger.debug("exit %d: %s", returncode, command_line(args))
        if received:
            return 0
        if returncode < 0:
            return 128 - returncode
        return returncode
