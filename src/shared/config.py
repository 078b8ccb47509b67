"""Application settings.

Values are read from environment variables prefixed with ``CRM_`` (and an
optional ``.env`` file). ``CRM_ENV`` selects the deployment environment:
``development``, ``test``, ``staging`` or ``production``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CRM_", env_file=".env", extra="ignore")

    env: str = "development"
    log_level: str | None = None
    log_dir: str = "logs"

    database_url: str = "sqlite:///./crm.db"

    jwt_secret_key: str = Field(
        default="dev-only-secret-key-change-me-in-production-0123456789",
        min_length=32,
    )
    jwt_issuer: str = "crm-api"
    jwt_audience: str = "crm-clients"
    jwt_algorithm: str = "HS256"
    jwt_expiry_minutes: int = Field(default=60, gt=0)

    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    admin_email: str = "admin@crm.com"
    admin_password: str | None = None
    admin_name: str = "System Administrator"

    cors_origins: list[str] = ["http://localhost:3000"]

    @property
    def is_production(self) -> bool:
        return self.env.lower() in ("production", "staging")


@lru_cache
def get_settings() -> Settings:
    return Settings()
