# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Environment-driven settings, grouped by concern and read once per process."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parents[2]
INSECURE_SECRET_KEYS = frozenset({"", "dev", "development", "test", "changeme"})

_ENV = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///taskmaster.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")
    connect_retries: int = Field(5, ge=1, alias="DATABASE_CONNECT_RETRIES")

    model_config = _ENV

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class SessionConfig(BaseSettings):
    lifetime_days: int = Field(7, ge=1, alias="SESSION_LIFETIME_DAYS")
    cookie_name: str = Field("token", min_length=1, alias="SESSION_COOKIE_NAME")

    model_config = _ENV

    @property
    def lifetime_seconds(self) -> int:
        return self.lifetime_days * 24 * 60 * 60


class SecurityConfig(BaseSettings):
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, ge=1, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, gt=0, alias="RL_WINDOW")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _ENV

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        # ALLOWED_ORIGINS=https://a.example,https://b.example
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_samesite")
    @classmethod
    def _samesite(cls, value: str) -> str:
        normalized = value.capitalize()
        if normalized not in ("Lax", "Strict", "None"):
            raise ValueError("COOKIE_SAMESITE must be Lax, Strict or None")
        return normalized


class LoggingConfig(BaseSettings):
    level: str = Field("INFO", alias="LOG_LEVEL")
    file: Path = Field(PACKAGE_ROOT / "instance" / "taskmaster.log", alias="LOG_FILE")
    debug: bool = Field(False, alias="DEBUG_LOGGING")

    model_config = _ENV

    @property
    def effective_level(self) -> str:
        return "DEBUG" if self.debug else self.level.upper()


class ClientConfig(BaseSettings):
    base_url: str = Field("http://localhost:3000", alias="TASKMASTER_BASE_URL")
    timeout: float = Field(10.0, ge=0.1, alias="CLIENT_TIMEOUT")

    model_config = _ENV


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    display_timezone: str = Field("Asia/Kolkata", alias="DISPLAY_TIMEZONE")
    due_soon_hours: int = Field(48, ge=1, alias="DEADLINE_DUE_SOON_HOURS")
    static_dir: Path = Field(PACKAGE_ROOT / "static", alias="STATIC_DIR")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)

    model_config = _ENV

    @model_validator(mode="after")
    def _require_secret_in_production(self) -> "AppConfig":
        if self.is_production() and self.secret_key in INSECURE_SECRET_KEYS:
            raise ValueError("SECRET_KEY must be set to a strong random value in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def production_warnings(self) -> list[str]:
        if not self.is_production():
            return []
        warnings = []
        if not self.security.cookie_secure:
            warnings.append("session cookie is sent without the Secure flag")
        if "*" in self.security.allowed_origins:
            warnings.append("CORS allows any origin")
        if not self.security.enable_hsts:
            warnings.append("HSTS is disabled")
        return warnings


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = [
    "AppConfig",
    "ClientConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
