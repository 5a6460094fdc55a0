"""
localdev - local development bootstrap for the DevSecFlow platform.

Checks the container runtime, writes .env.local, starts and polls the
PostgreSQL container, installs dependencies and pushes the schema.
"""

__version__ = "0.1.0"
