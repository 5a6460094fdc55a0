"""
Database module - container lifecycle and direct PostgreSQL access.
"""

from localdev.db import compose, postgres

__all__ = ["compose", "postgres"]
