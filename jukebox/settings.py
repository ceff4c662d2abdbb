#!/usr/bin/env python
"""
Validated authentication settings.

Reads the token-related keys out of the Flask config (which is seeded from
config.Config) and checks them before the app starts serving requests.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Development-only signing key. Never valid in production.
DEV_JWT_SECRET = "dev-only-insecure-jwt-secret-change-me"

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")


class AuthSettings(BaseModel):
    """Token signing configuration."""

    model_config = ConfigDict(extra="ignore")

    environment: str = "development"
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_expires_in: int = Field(default=24 * 60 * 60, gt=0)

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        return (value or "development").strip().lower()

    @field_validator("jwt_secret")
    @classmethod
    def _blank_secret_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    @field_validator("jwt_algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        algorithm = (value or "").strip().upper()
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(
                f"Unsupported JWT algorithm {value!r}; expected one of {', '.join(SUPPORTED_ALGORITHMS)}"
            )
        return algorithm

    @model_validator(mode="after")
    def _require_secret_in_production(self) -> "AuthSettings":
        if self.is_production and (self.jwt_secret is None or self.jwt_secret == DEV_JWT_SECRET):
            raise ValueError("JWT_SECRET must be set to a non-default value when APP_ENV=production")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uses_dev_secret(self) -> bool:
        return self.jwt_secret is None

    @property
    def signing_secret(self) -> str:
        return self.jwt_secret or DEV_JWT_SECRET


def load_auth_settings(config: Mapping[str, Any]) -> AuthSettings:
    """Build AuthSettings from a Flask config mapping."""
    return AuthSettings(
        environment=config.get("APP_ENV", "development"),
        jwt_secret=config.get("JWT_SECRET"),
        jwt_algorithm=config.get("JWT_ALGORITHM", "HS256"),
        jwt_expires_in=config.get("JWT_EXPIRES_IN_SECONDS", 24 * 60 * 60),
    )


__all__ = ["AuthSettings", "DEV_JWT_SECRET", "SUPPORTED_ALGORITHMS", "load_auth_settings"]
