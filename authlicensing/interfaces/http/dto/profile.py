# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ProfileResponseDTO(BaseModel):
    username: str
    level: str
    license_key: str = Field(serialization_alias="licenseKey")
    license_status: str = Field(serialization_alias="licenseStatus")
    subscription_expires_at: datetime = Field(serialization_alias="subscriptionExpiresAt")
    account_created_at: datetime = Field(serialization_alias="accountCreatedAt")


class HealthResponseDTO(BaseModel):
    status: str
    service: str
    version: str
    time_utc: datetime = Field(serialization_alias="timeUtc")
    database: str
