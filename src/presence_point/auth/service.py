from __future__ import annotations

from typing import Optional

from ..common.validators import require_email, require_min_length
from ..teachers.service import TeacherService
from .gateway import AuthGateway
from .model import AuthSession, SessionUser


class AuthService:
    """Use case: sign up, sign in and sign out a teacher."""

    def __init__(self, gateway: AuthGateway, teachers: TeacherService):
        self._gateway = gateway
        self._teachers = teachers

    def sign_up(self, email: str, password: str) -> Optional[SessionUser]:
        """Returns the signed-in user, or None while the email address awaits confirmation."""

        email = require_email(email)
        require_min_length(password, "Lösenord", 6)

        auth = self._gateway.sign_up(email, password)
        teacher = self._teachers.get_or_create(auth.user_id)
        if not auth.access_token:
            return None
        return self._to_session_user(auth, teacher.teacher_id)

    def sign_in(self, email: str, password: str) -> SessionUser:
        email = require_email(email)
        require_min_length(password, "Lösenord", 1)

        auth = self._gateway.sign_in(email, password)
        teacher = self._teachers.get_or_create(auth.user_id)
        return self._to_session_user(auth, teacher.teacher_id)

    def sign_out(self, access_token: Optional[str]) -> None:
        if access_token:
            self._gateway.sign_out(access_token)

    @staticmethod
    def _to_session_user(auth: AuthSession, teacher_id: str) -> SessionUser:
        return SessionUser(
            user_id=auth.user_id,
            email=auth.email,
            teacher_id=teacher_id,
            access_token=auth.access_token,
        )
