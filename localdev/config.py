"""
Single source of truth for bootstrap configuration.
All settings are typed and loaded from LOCALDEV_-prefixed environment variables.
"""
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Local development settings.

    - Every value has a default matching the stock docker-compose.local.yml
    - Paths are relative to the project root (the working directory)
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCALDEV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # === Container Runtime ===
    RUNTIME: str = Field(
        default="docker",
        description="Container runtime CLI binary"
    )
    COMPOSE_FILE: str = Field(
        default="docker-compose.local.yml",
        description="Compose file describing the local database"
    )
    DB_SERVICE: str = Field(
        default="postgres",
        description="Compose service name of the database"
    )
    DB_USER: str = Field(
        default="postgres",
        description="Role passed to pg_isready"
    )

    # === Files ===
    ENV_FILE: str = Field(
        default=".env.local",
        description="Environment file written by setup and read by dev/db-push"
    )
    INIT_SQL_FILE: str = Field(
        default="scripts/init-db.sql",
        description="SQL bootstrap file applied by init-sql"
    )

    # === Readiness Polling ===
    SETUP_INITIAL_WAIT_SECONDS: float = Field(default=5.0, ge=0)
    READY_MAX_ATTEMPTS: int = Field(default=30, ge=1, le=600)
    SETUP_READY_INTERVAL_SECONDS: float = Field(default=2.0, ge=0)
    ENSURE_READY_INTERVAL_SECONDS: float = Field(default=1.0, ge=0)

    # === Package Manager ===
    PACKAGE_MANAGER: str = Field(
        default="npm",
        description="Package manager used for install and scripts"
    )
    DEPENDENCY_DIR: str = Field(
        default="node_modules",
        description="Directory whose presence means dependencies are installed"
    )
    MIGRATE_SCRIPT: str = Field(default="db:push")
    DEV_SCRIPT: str = Field(default="dev")

    # === Application ===
    APP_URL: str = Field(
        default="http://localhost:5000",
        description="Where the dev server listens"
    )
    HTTP_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)
    SHUTDOWN_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    @property
    def compose_base(self) -> list[str]:
        """Argument prefix for every compose invocation."""
        return [self.RUNTIME, "compose", "-f", self.COMPOSE_FILE]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    The LRU cache ensures we only parse env vars once.
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Force reload settings from environment.
    Useful for testing or when env vars change at runtime.
    """
    get_settings.cache_clear()
    return get_settings()
