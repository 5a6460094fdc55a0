"""
Bootstrap procedures.

Each procedure is a fixed sequence of external commands that aborts on the
first failure by raising LocalDevError:

1. setup   - runtime check, env file, database, install, migrate, next steps
2. dev     - runtime check, env file, database, install if missing, dev server
3. db-push - env file, database, install if missing, migrate
4. status  - read-only report of all of the above plus the running app
"""
import time
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
from pydantic import BaseModel

from localdev import console, envfile
from localdev.config import Settings
from localdev.db.compose import Compose, ensure_database, wait_until_ready
from localdev.db.postgres import apply_init_sql, check_db_health
from localdev.errors import CommandFailedError, LocalDevError
from localdev.services import packages, runtime
from localdev.shell import Shell


BANNER = "DevSecFlow Platform"


class SetupReport(BaseModel):
    """What setup changed."""
    env_file_created: bool
    ready_attempt: int


def print_next_steps(settings: Settings, compose: Compose) -> None:
    print("Next steps:")
    print("1. Run: python cli.py dev")
    print(f"2. Open: {settings.APP_URL}")
    print("3. Register a new account to get started")
    print()
    print("Useful commands:")
    print("- Start dev server: python cli.py dev")
    print("- Update database: python cli.py db-push")
    print(f"- View logs: {compose.logs_command()}")
    print(f"- Stop database: {compose.down_command()}")


# === Setup ===

def run_setup(
    shell: Shell,
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
) -> SetupReport:
    """
    Full first-time setup.

    Safe to re-run: the env file is never overwritten and every external
    command is idempotent.
    """
    console.print_header(f"🚀 {BANNER} - Local Setup")

    runtime.check_runtime(shell, settings)
    console.success("Docker is installed and running")

    created = envfile.ensure_env_file(settings.ENV_FILE)
    if created:
        console.success(f"Created {settings.ENV_FILE} file")
    else:
        console.success(f"{settings.ENV_FILE} file already exists")

    compose = Compose(shell, settings)
    compose.require_file()
    console.step("🗄️", "Starting PostgreSQL database...")
    compose.up()

    console.step("⏳", "Waiting for database to be ready...")
    sleep(settings.SETUP_INITIAL_WAIT_SECONDS)
    attempt = wait_until_ready(
        compose,
        max_attempts=settings.READY_MAX_ATTEMPTS,
        interval=settings.SETUP_READY_INTERVAL_SECONDS,
        on_retry=lambda n, total: console.step(
            "⏳", f"Waiting for database... (attempt {n}/{total})"
        ),
        sleep=sleep,
    )
    console.success("Database is ready!")

    console.step("📦", "Installing dependencies...")
    packages.install_dependencies(shell, settings)

    console.step("🗄️", "Setting up database schema...")
    env = envfile.build_child_env(envfile.read_env_file(settings.ENV_FILE))
    packages.run_migration(shell, settings, env=env)

    print()
    console.step("🎉", "Setup complete!")
    print()
    print_next_steps(settings, compose)

    return SetupReport(env_file_created=created, ready_attempt=attempt)


# === Dev Server ===

def run_dev(
    shell: Shell,
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Check prerequisites, then run the dev server in the foreground.

    Returns:
        Exit code for the CLI (0 after a forwarded Ctrl+C)
    """
    console.print_header(f"🚀 {BANNER} - Development Server")

    runtime.check_runtime(shell, settings)
    console.success("Docker is installed and running")

    values = envfile.read_env_file(settings.ENV_FILE)
    console.success(f"{settings.ENV_FILE} file found")

    compose = Compose(shell, settings)
    compose.require_file()
    ensure_database(compose, settings, sleep=sleep)

    env = envfile.build_child_env(values, overrides={"NODE_ENV": "development"})
    packages.ensure_dependencies(shell, settings, env=env)

    print()
    console.success("All checks passed! Starting development server...")
    console.info(f"The application will be available at: {settings.APP_URL}")
    console.info("Press Ctrl+C to stop the server")
    print()

    code = shell.run_foreground(
        packages.dev_server_command(settings),
        env=env,
        shutdown_timeout=settings.SHUTDOWN_TIMEOUT_SECONDS,
        shutdown_message="Shutting down development server...",
    )
    if code != 0:
        console.error(f"Development server exited with code {code}")
    return code


# === Schema Push ===

def run_db_push(
    shell: Shell,
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Apply pending schema changes to the local database."""
    console.print_header(f"🗄️ {BANNER} - Database Schema Update")

    values = envfile.read_env_file(settings.ENV_FILE)
    console.success("Environment variables loaded")

    compose = Compose(shell, settings)
    compose.require_file()
    ensure_database(compose, settings, sleep=sleep)

    env = envfile.build_child_env(values)
    packages.ensure_dependencies(shell, settings, env=env)

    console.info("Pushing database schema changes...")
    try:
        packages.run_migration(shell, settings, env=env)
    except CommandFailedError as e:
        raise LocalDevError(
            f"Schema push failed with code {e.returncode}",
            hint="Please check the error messages above and fix any issues.",
        ) from e
    console.success("Database schema updated successfully!")

    print()
    console.success("Database schema update completed!")
    console.info("Your database is now up to date with the latest schema changes.")


# === SQL Bootstrap ===

def _database_url(settings: Settings) -> str:
    values = envfile.read_env_file(settings.ENV_FILE)
    url = values.get("DATABASE_URL")
    if not url:
        raise LocalDevError(
            f"DATABASE_URL is not set in {settings.ENV_FILE}",
            hint=f"Delete {settings.ENV_FILE} and run setup again to regenerate it",
        )
    return url


def run_init_sql(settings: Settings) -> dict[str, Any]:
    """
    Apply the SQL bootstrap file, then call health_check().

    Returns:
        Health check result dict
    """
    console.print_header(f"🗄️ {BANNER} - Database Initialization")

    sql_path = Path(settings.INIT_SQL_FILE)
    if not sql_path.is_file():
        raise LocalDevError(f"{sql_path} not found")

    url = _database_url(settings)
    console.info(f"Applying {sql_path}...")
    apply_init_sql(url, sql_path)
    console.success("SQL bootstrap applied")

    health = check_db_health(url)
    if health["status"] != "healthy":
        raise LocalDevError(
            f"Health check failed: {health['error']}",
            hint=f"Check that {sql_path} defines health_check()",
        )
    console.success(health["message"])
    return health


# === Status ===

def check_app(
    settings: Settings,
    transport: Optional[httpx.BaseTransport] = None,
) -> dict[str, Any]:
    """GET the app URL; any HTTP response counts as reachable."""
    try:
        with httpx.Client(
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        ) as client:
            response = client.get(settings.APP_URL)
        return {
            "url": settings.APP_URL,
            "reachable": True,
            "status_code": response.status_code,
        }
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return {
            "url": settings.APP_URL,
            "reachable": False,
            "error": str(e),
        }


def collect_status(
    shell: Shell,
    settings: Settings,
    transport: Optional[httpx.BaseTransport] = None,
) -> dict[str, Any]:
    """
    Read-only health report. Never starts, installs or writes anything.

    Later checks are skipped (None) when an earlier prerequisite is missing.
    """
    installed = shell.which(settings.RUNTIME) is not None
    running = installed and shell.succeeds([settings.RUNTIME, "info"])
    env_exists = Path(settings.ENV_FILE).is_file()
    compose_exists = Path(settings.COMPOSE_FILE).is_file()

    database: dict[str, Any] = {
        "compose_file": compose_exists,
        "running": None,
        "ready": None,
        "health": None,
        "error": None,
    }
    if running and compose_exists:
        compose = Compose(shell, settings)
        try:
            database["running"] = compose.is_running()
            if database["running"]:
                database["ready"] = compose.probe()
        except CommandFailedError as e:
            database["running"] = False
            database["error"] = e.message

    if database["ready"] and env_exists:
        url = envfile.read_env_file(settings.ENV_FILE).get("DATABASE_URL")
        if url:
            database["health"] = check_db_health(url)

    return {
        "runtime": {
            "installed": installed,
            "running": running,
            "version": runtime.runtime_version(shell, settings) if running else None,
        },
        "env_file": {
            "path": settings.ENV_FILE,
            "exists": env_exists,
        },
        "dependencies": {
            "installed": Path(settings.DEPENDENCY_DIR).exists(),
        },
        "database": database,
        "app": check_app(settings, transport=transport),
    }
