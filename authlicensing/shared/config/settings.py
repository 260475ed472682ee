# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authlicensing.shared.errors.base import ConfigurationError

_DEV_JWT_KEY = "dev-only-signing-key-change-me-0123456789abcdef"
_MIN_JWT_KEY_BYTES = 32


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///authlicensing.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)


class AuthConfig(BaseSettings):
    jwt_key: str = Field(_DEV_JWT_KEY, alias="AUTH_JWT_KEY")
    jwt_issuer: str = Field("AuthLicensingAPI", alias="AUTH_JWT_ISSUER")
    jwt_audience: str = Field("AuthLicensingClient", alias="AUTH_JWT_AUDIENCE")
    token_ttl_minutes: int = Field(15, ge=1, alias="AUTH_TOKEN_TTL_MINUTES")
    # werkzeug hash method; scrypt is memory-hard
    password_method: str = Field("scrypt", alias="AUTH_PASSWORD_METHOD")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)

    @property
    def token_ttl_seconds(self) -> int:
        return self.token_ttl_minutes * 60


class SecurityConfig(BaseSettings):
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    service_name: str = Field("AuthLicensing API", alias="SERVICE_NAME")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def validate_startup(self) -> "AppConfig":
        """Reject settings the service must not start with.

        Signing configuration is process-wide and is checked once here
        rather than failing on the first request.
        """
        auth = self.auth
        if len(auth.jwt_key.encode("utf-8")) < _MIN_JWT_KEY_BYTES:
            raise ConfigurationError(
                "jwt_key_too_short", context={"min_bytes": _MIN_JWT_KEY_BYTES}
            )
        if self.is_production() and auth.jwt_key == _DEV_JWT_KEY:
            raise ConfigurationError("jwt_key_insecure_default")
        if not auth.jwt_issuer.strip() or not auth.jwt_audience.strip():
            raise ConfigurationError("jwt_issuer_or_audience_blank")
        return self


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "SecurityConfig", "load_config"]
