from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthSession:
    """What the auth backend hands back after sign-in or sign-up."""

    user_id: str
    email: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    email: str
    teacher_id: str
    access_token: Optional[str] = None
