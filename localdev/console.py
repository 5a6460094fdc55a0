"""
Console output helpers.

User-facing progress goes to stdout via print(); command tracing goes through
the logging module and is only shown with --verbose.
"""
import logging
from typing import Any


def print_header(text: str):
    """Print formatted header."""
    print(f"\n{text}")
    print("=" * max(len(text) + 2, 40))


def print_status(key: str, value: Any, indent: int = 0):
    """Print formatted status line."""
    spaces = "  " * indent
    print(f"{spaces}{key:30s}: {value}")


def success(message: str):
    print(f"✅ {message}")


def info(message: str):
    print(f"ℹ️  {message}")


def warning(message: str):
    print(f"⚠️  {message}")


def error(message: str):
    print(f"❌ {message}")


def step(emoji: str, message: str):
    """Announce the start of a step."""
    print(f"{emoji} {message}")


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging once for the CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
