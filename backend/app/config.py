"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded for production)
    - get_settings() is cached (lru_cache), single instance per process
    - database_url names a postgresql or sqlite dialect; anything else fails at load
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

_SUPPORTED_DIALECTS = ("postgresql", "sqlite")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://devsearch:devsearch@db:5432/devsearch"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("database_url")
    @classmethod
    def supported_dialect(cls, v: str) -> str:
        """Tag inserts rely on ON CONFLICT DO NOTHING, available for postgres and sqlite only."""
        dialect = v.split(":", 1)[0].split("+", 1)[0]
        if dialect not in _SUPPORTED_DIALECTS:
            raise ValueError(
                f"Unsupported database dialect '{dialect}', expected one of: "
                f"{', '.join(_SUPPORTED_DIALECTS)}"
            )
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth
    secret_key: str = "dev-secret-change-me"
    access_token_ttl_minutes: int = 60 * 24

    # Listings
    projects_page_size: int = 3
    profiles_page_size: int = 3

    # Media references
    default_project_image: str = "default.jpg"
    default_profile_image: str = "profiles/user-default.png"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
