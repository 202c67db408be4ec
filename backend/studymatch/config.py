"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Secrets come from environment variables in any real deployment
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box for local runs
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Registration rules
    institutional_email_domain: str = "@clemson.edu"
    min_password_length: int = 8

    @field_validator("institutional_email_domain", mode="before")
    @classmethod
    def ensure_at_prefix(cls, v: str) -> str:
        """Accept `clemson.edu` as well as `@clemson.edu`."""
        if isinstance(v, str) and v and not v.startswith("@"):
            return "@" + v
        return v

    # Credentials
    bcrypt_rounds: int = 12

    # Access tokens
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
