from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from interviewiq.schemas.common import CamelModel


class RegisterIn(CamelModel):
    """Registration input."""
    name: str = Field(default="", max_length=100)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=128)


class LoginIn(CamelModel):
    """Login input (email/password)."""
    email: str
    password: str


class LoginOut(CamelModel):
    """Issued bearer token."""
    token: str
    expires_at: datetime


class UserOut(CamelModel):
    """Public user view."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: datetime
