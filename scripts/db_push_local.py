#!/usr/bin/env python3
"""
Database schema update (thin wrapper).

Usage:
    python scripts/db_push_local.py            # Same as: python cli.py db-push
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from localdev.cli import main


if __name__ == "__main__":
    sys.exit(main([*sys.argv[1:], "db-push"]))
