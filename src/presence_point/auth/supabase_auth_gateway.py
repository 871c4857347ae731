from __future__ import annotations

import logging

import httpx
from supabase import AuthError, Client, create_client

from ..core.exceptions import AuthenticationError
from ..database.connection import SupabaseConfig
from .gateway import AuthGateway
from .model import AuthSession

logger = logging.getLogger(__name__)


class SupabaseAuthGateway(AuthGateway):
    """Email/password auth against Supabase.

    Note: Each call uses a fresh client so one user's session never leaks into
    the shared data client or into another request.
    """

    def __init__(self, config: SupabaseConfig):
        self._config = config

    def _client(self) -> Client:
        return create_client(self._config.url, self._config.key)

    def sign_up(self, email: str, password: str) -> AuthSession:
        try:
            resp = self._client().auth.sign_up({"email": email, "password": password})
        except (AuthError, httpx.HTTPError) as exc:
            logger.warning("Sign-up rejected for %s: %s", email, exc)
            raise AuthenticationError("Kunde inte skapa konto") from exc

        if resp.user is None:
            raise AuthenticationError("Kunde inte skapa konto")
        session = resp.session
        return AuthSession(
            user_id=str(resp.user.id),
            email=resp.user.email or email,
            access_token=session.access_token if session else None,
            refresh_token=session.refresh_token if session else None,
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            resp = self._client().auth.sign_in_with_password({"email": email, "password": password})
        except (AuthError, httpx.HTTPError) as exc:
            logger.info("Sign-in rejected for %s: %s", email, exc)
            raise AuthenticationError("Fel e-post eller lösenord") from exc

        if resp.user is None or resp.session is None:
            raise AuthenticationError("Fel e-post eller lösenord")
        return AuthSession(
            user_id=str(resp.user.id),
            email=resp.user.email or email,
            access_token=resp.session.access_token,
            refresh_token=resp.session.refresh_token,
        )

    def sign_out(self, access_token: str) -> None:
        try:
            self._client().auth.admin.sign_out(access_token)
        except (AuthError, httpx.HTTPError) as exc:
            raise AuthenticationError("Kunde inte logga ut") from exc
