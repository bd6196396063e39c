"""Pydantic schemas for users and presence."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRegister(BaseModel):
    """Request schema for registering a user."""

    username: str = Field(..., min_length=3, max_length=30)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = Field(None, max_length=255)


class UserLogin(BaseModel):
    email: str = Field(..., max_length=255)
    password: str


class PresenceUpdate(BaseModel):
    is_online: bool


class UserRead(BaseModel):
    """Own-account view: everything except the password hash."""

    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    last_seen: Optional[datetime] = None
    is_online: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PublicUser(BaseModel):
    """Directory view of another user; never carries email or credentials."""

    id: int
    username: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    last_seen: Optional[datetime] = None
    is_online: bool

    model_config = {"from_attributes": True}
