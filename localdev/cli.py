"""
localdev CLI - command-line interface for the local development bootstrap.

Usage:
    python cli.py setup                # First-time setup
    python cli.py dev                  # Start the dev server
    python cli.py db-push              # Push schema changes
    python cli.py status               # Check local environment health
    python cli.py init-sql             # Re-apply scripts/init-db.sql
    python cli.py logs [--follow]      # Database container logs
    python cli.py down [--volumes]     # Stop the database (and delete data)
"""
import argparse
import logging
import sys
from typing import Optional

from localdev import console
from localdev.config import get_settings
from localdev.db.compose import Compose
from localdev.errors import LocalDevError
from localdev.shell import Shell
from localdev.tasks import workflows


logger = logging.getLogger(__name__)


def _mark(ok: Optional[bool], yes: str = "Yes", no: str = "No") -> str:
    if ok is None:
        return "- Skipped"
    return f"✓ {yes}" if ok else f"✗ {no}"


def cmd_setup(shell: Shell) -> int:
    workflows.run_setup(shell, get_settings())
    return 0


def cmd_dev(shell: Shell) -> int:
    return workflows.run_dev(shell, get_settings())


def cmd_db_push(shell: Shell) -> int:
    workflows.run_db_push(shell, get_settings())
    return 0


def cmd_init_sql(shell: Shell) -> int:
    workflows.run_init_sql(get_settings())
    return 0


def cmd_status(shell: Shell) -> int:
    """Print the local environment health report."""
    console.print_header("Local Environment Status")
    report = workflows.collect_status(shell, get_settings())

    rt = report["runtime"]
    print("Container Runtime:")
    console.print_status("Installed", _mark(rt["installed"]), 1)
    console.print_status("Running", _mark(rt["running"]), 1)
    if rt["version"]:
        console.print_status("Version", rt["version"], 1)

    print("\nProject:")
    env = report["env_file"]
    console.print_status(env["path"], _mark(env["exists"], "Present", "Missing"), 1)
    console.print_status("Dependencies", _mark(report["dependencies"]["installed"], "Installed", "Missing"), 1)

    db = report["database"]
    print("\nDatabase:")
    console.print_status("Compose file", _mark(db["compose_file"], "Present", "Missing"), 1)
    console.print_status("Container", _mark(db["running"], "Up", "Down"), 1)
    if db["error"]:
        console.print_status("Compose error", f"✗ {db['error']}", 1)
    console.print_status("Accepting connections", _mark(db["ready"]), 1)
    health = db["health"]
    if health is None:
        console.print_status("health_check()", _mark(None), 1)
    elif health["status"] == "healthy":
        console.print_status("health_check()", f"✓ {health['message']}", 1)
    else:
        console.print_status("health_check()", f"✗ {health['error']}", 1)

    app = report["app"]
    print("\nApplication:")
    console.print_status("URL", app["url"], 1)
    if app["reachable"]:
        console.print_status("Reachable", f"✓ HTTP {app['status_code']}", 1)
    else:
        console.print_status("Reachable", "✗ Not responding", 1)

    print()
    return 0


def cmd_logs(shell: Shell, follow: bool = False) -> int:
    compose = Compose(shell, get_settings())
    compose.require_file()
    compose.logs(follow=follow)
    return 0


def cmd_down(shell: Shell, volumes: bool = False) -> int:
    """Stop the database; with volumes, delete its data too."""
    compose = Compose(shell, get_settings())
    compose.require_file()

    if volumes:
        print("⚠️  WARNING: This will delete all local database data!")
        confirm = input("Type 'yes' to confirm: ")
        if confirm.lower() != "yes":
            print("Aborted.")
            return 1

    compose.down(volumes=volumes)
    console.success("Database stopped")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="localdev",
        description="Local development bootstrap",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s setup               # Docker check, .env.local, database, install, schema
  %(prog)s dev                 # Start the dev server against the local database
  %(prog)s db-push             # Apply schema changes
  %(prog)s down --volumes      # Stop the database and delete its data
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every external command",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.add_parser("setup", help="First-time local setup")
    sub.add_parser("dev", help="Start the development server")
    sub.add_parser("db-push", help="Push database schema changes")
    sub.add_parser("status", help="Check local environment health")
    sub.add_parser("init-sql", help="Re-apply the SQL bootstrap file")

    logs = sub.add_parser("logs", help="Show database container logs")
    logs.add_argument("--follow", "-f", action="store_true", help="Stream new log lines")

    down = sub.add_parser("down", help="Stop the database container")
    down.add_argument("--volumes", action="store_true", help="Also delete the data volume (DESTRUCTIVE!)")

    return parser


def main(argv: Optional[list[str]] = None, shell: Optional[Shell] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    console.setup_logging(args.verbose)
    shell = shell or Shell()

    try:
        if args.command == "setup":
            return cmd_setup(shell)
        elif args.command == "dev":
            return cmd_dev(shell)
        elif args.command == "db-push":
            return cmd_db_push(shell)
        elif args.command == "status":
            return cmd_status(shell)
        elif args.command == "init-sql":
            return cmd_init_sql(shell)
        elif args.command == "logs":
            return cmd_logs(shell, follow=args.follow)
        elif args.command == "down":
            return cmd_down(shell, volumes=args.volumes)
        parser.error(f"Unknown command: {args.command}")
    except LocalDevError as e:
        logger.debug("aborted", exc_info=True)
        print()
        console.error(e.message)
        if e.hint:
            console.info(e.hint)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
