# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError


def _require_non_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("blank", "Value cannot be blank", {})
    return value


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)
    license_key: str | None = Field(None, alias="licenseKey", max_length=128)

    model_config = ConfigDict(validate_by_name=True)

    @field_validator("username", "password")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        return _require_non_blank(value)

    @field_validator("license_key")
    @classmethod
    def normalize_license_key(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class AuthCheckRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)
    key: str = Field(min_length=1, max_length=128)

    @field_validator("username", "password", "key")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        return _require_non_blank(value)


class RegisterResponseDTO(BaseModel):
    created: bool = True
    username: str
    claim_outcome: str | None = Field(None, serialization_alias="claimOutcome")


class AuthCheckResponseDTO(BaseModel):
    username: str
    license_key: str = Field(serialization_alias="licenseKey")
    level: str
    subscription_expires_at: datetime = Field(serialization_alias="subscriptionExpiresAt")
    access_token: str = Field(serialization_alias="accessToken")
    token_type: str = Field("Bearer", serialization_alias="tokenType")
    token_issued_at: datetime = Field(serialization_alias="tokenIssuedAtUtc")
    token_expires_at: datetime = Field(serialization_alias="tokenExpiresAtUtc")
    token_expires_in_seconds: int = Field(serialization_alias="tokenExpiresInSeconds")
