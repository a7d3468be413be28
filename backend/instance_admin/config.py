"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Credential store (MongoDB)
    mongo_uri: str = "mongodb://127.0.0.1:27017"
    auth_db_name: str = "data"

    # Session cookie
    session_secret_key: str = "CHANGE_ME_IN_PRODUCTION_USE_STRONG_SECRET"
    session_algorithm: str = "HS256"
    session_cookie_name: str = "session"
    session_expire_minutes: int = 60 * 24
    session_cookie_secure: bool = False
    flash_cookie_name: str = "flash"

    # Password hashing
    bcrypt_rounds: int = 10

    # Managed instances
    backend_timeout_seconds: float = 5.0
    instance_overwrite_policy: Literal["replace", "reject"] = "replace"
    instances_require_auth: bool = True

    @property
    def backend_timeout_ms(self) -> int:
        return int(self.backend_timeout_seconds * 1000)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
