"""
Services module - one module per external tool the bootstrap drives.
"""

from localdev.services import packages, runtime

__all__ = ["packages", "runtime"]
