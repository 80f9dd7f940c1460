"""Schemas for the single-user credential check and its session."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int
    username: str
    full_name: str
    email: str
    role: str
    created_at: datetime
    last_login_at: datetime


class AuthSession(BaseModel):
    """Persisted authentication state."""

    model_config = ConfigDict(extra="forbid")

    user: AuthUser
    token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
