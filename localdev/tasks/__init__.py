"""
Tasks module - the bootstrap procedures.

Triggered via:
- cli.py subcommands
- Thin wrappers under scripts/
"""

from localdev.tasks import workflows

__all__ = ["workflows"]
