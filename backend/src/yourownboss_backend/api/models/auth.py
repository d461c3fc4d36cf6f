"""Pydantic models for authentication endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

USERNAME_MAX_LENGTH = 64
PASSWORD_MAX_LENGTH = 128


class UserResponse(BaseModel):
    """Public representation of a registered user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    created_at: datetime
    updated_at: datetime


class UserEnvelope(BaseModel):
    """Body returned by register, login and ``/me``; tokens travel in cookies."""

    user: UserResponse


class CredentialsRequest(BaseModel):
    """Payload for registering or authenticating a user."""

    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    password: str = Field(min_length=1, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not value.strip():
            msg = "username must not be empty"
            raise ValueError(msg)
        return value
