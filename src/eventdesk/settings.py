"""
eventdesk.settings

Runtime configuration for the event desk, read from `EVD_*` environment variables.

Responsibilities:
- Describe the service, token, database and bootstrap-admin knobs in one model.
- Keep the signing secret and the admin password out of reprs.
- Expose a process-wide `get_settings()` for the entrypoints.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EVD_", case_sensitive=False)

    # dev/test create tables on startup; prod expects them to exist.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "eventdesk"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Session tokens
    jwt_alg: str = "HS256"
    jwt_issuer: str = "eventdesk"
    jwt_audience: str = "eventdesk-rpc"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    token_ttl_days: int = Field(default=365, ge=1)

    database_url: str = "sqlite+aiosqlite:///./eventdesk.db"

    # Bootstrap administrator; created at startup when a password is configured.
    admin_email: str = "admin@eventmanagement.com"
    admin_password: str | None = Field(default=None, repr=False)

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def creates_tables(self) -> bool:
        return self.env in ("dev", "test")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(...)` directly and hand it to `create_app`; the cached
# instance is only used by the process entrypoints.
