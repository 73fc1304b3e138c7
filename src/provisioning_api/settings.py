"""
provisioning_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `PROV_`).
    Defaults are safe for local dev; prod must override the JWT secret.
    """

    model_config = SettingsConfigDict(env_prefix="PROV_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and the dev token route.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "provisioning-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "provisioning-api"
    jwt_audience: str = "provisioning-clients"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Group create/delete require a password confirmation no older than this.
    password_confirmation_ttl_seconds: int = Field(default=30 * 60, ge=0)

    # Directory storage
    database_url: str = "sqlite+aiosqlite:///./provisioning.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests build their own `Settings(...)` and pass it to `create_app`; the app
# overrides `get_settings` so every dependency sees the same instance.
