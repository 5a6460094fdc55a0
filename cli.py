#!/usr/bin/env python3
"""
localdev CLI - run from the project root without installing.

Usage:
    python cli.py setup
    python cli.py dev
    python cli.py db-push
    python cli.py status
    python cli.py help
"""
import sys
from pathlib import Path

# Make the checkout importable
sys.path.insert(0, str(Path(__file__).resolve().parent))

from localdev.cli import main


if __name__ == "__main__":
    argv = sys.argv[1:]
    if argv[:1] == ["help"]:
        argv = ["--help"]
    sys.exit(main(argv))
