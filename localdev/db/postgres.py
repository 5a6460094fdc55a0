"""
Direct database access for the SQL bootstrap file and the health check.
"""
from pathlib import Path
from typing import Any, Union

from sqlalchemy.engine import Engine
from sqlmodel import create_engine, text


HEALTH_QUERY = "SELECT health_check()"


def get_engine(database_url: str) -> Engine:
    """Get an engine for the local database."""
    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
    )


def apply_init_sql(database_url: str, sql_path: Union[str, Path]) -> None:
    """
    Execute the SQL bootstrap file in one transaction.

    The file is idempotent (IF NOT EXISTS / OR REPLACE), so re-applying it to
    an initialized database is safe.

    Args:
        database_url: SQLAlchemy URL, usually DATABASE_URL from the env file
        sql_path: SQL file to run
    """
    sql = Path(sql_path).read_text(encoding="utf-8")
    engine = get_engine(database_url)
    try:
        with engine.begin() as conn:
            conn.exec_driver_sql(sql)
    finally:
        engine.dispose()


def check_db_health(database_url: str) -> dict[str, Any]:
    """
    Call health_check() and report the outcome.

    Returns:
        Dict with status and either the function's message or the error
    """
    try:
        engine = get_engine(database_url)
        try:
            with engine.connect() as conn:
                message = conn.execute(text(HEALTH_QUERY)).scalar_one()
        finally:
            engine.dispose()
        return {
            "status": "healthy",
            "message": message,
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }
