from __future__ import annotations

from typing import Protocol

from .model import AuthSession


class AuthGateway(Protocol):
    def sign_up(self, email: str, password: str) -> AuthSession:
        """Register an account; ``access_token`` is None while email confirmation is pending."""

        raise NotImplementedError

    def sign_in(self, email: str, password: str) -> AuthSession:
        raise NotImplementedError

    def sign_out(self, access_token: str) -> None:
        raise NotImplementedError
