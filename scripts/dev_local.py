#!/usr/bin/env python3
"""
Local development server (thin wrapper).

Usage:
    python scripts/dev_local.py                # Same as: python cli.py dev
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from localdev.cli import main


if __name__ == "__main__":
    sys.exit(main([*sys.argv[1:], "dev"]))
