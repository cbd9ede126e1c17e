"""Schemas for the remote auth service and the sign-in form."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from provadmin.core.auth.constants import DEFAULT_ACCESS_TTL_SECONDS


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username is required")
        return v


class UserSchema(BaseModel):
    id: str
    username: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)


class LoginResponse(BaseModel):
    success: bool = True
    access_token: str = Field(min_length=1)
    refresh_token: str = Field(min_length=1)
    expires_in: int = Field(default=DEFAULT_ACCESS_TTL_SECONDS, gt=0)
    user: UserSchema


class RefreshResponse(BaseModel):
    success: bool = True
    access_token: str = Field(min_length=1)
    expires_in: int = Field(default=DEFAULT_ACCESS_TTL_SECONDS, gt=0)

