import pytest

from presence_point.auth.service import AuthService
from presence_point.core.exceptions import AuthenticationError, ValidationError
from presence_point.teachers.service import TeacherService

from conftest import FakeAuthGateway, InMemoryTeachers


def _service(gateway=None):
    teachers = InMemoryTeachers()
    return AuthService(gateway or FakeAuthGateway(), TeacherService(teachers)), teachers


def test_sign_up_creates_teacher_profile():
    svc, teachers = _service()

    user = svc.sign_up("anna@example.com", "hemligt")

    assert user.access_token == "token-anna@example.com"
    assert teachers.get_by_id(user.teacher_id).user_id == user.user_id


def test_sign_up_pending_confirmation_returns_none():
    svc, teachers = _service(FakeAuthGateway(confirm_email=True))

    assert svc.sign_up("anna@example.com", "hemligt") is None
    assert teachers.get_by_user_id("u-anna@example.com") is not None


def test_sign_up_validates_before_calling_backend():
    gateway = FakeAuthGateway()
    svc, _ = _service(gateway)

    with pytest.raises(ValidationError):
        svc.sign_up("not-an-email", "hemligt")
    with pytest.raises(ValidationError):
        svc.sign_up("anna@example.com", "kort")
    assert gateway.accounts == {}


def test_sign_in_reuses_teacher():
    svc, _ = _service(FakeAuthGateway(accounts={"anna@example.com": "hemligt"}))

    first = svc.sign_in("anna@example.com", "hemligt")
    second = svc.sign_in("anna@example.com", "hemligt")

    assert first.teacher_id == second.teacher_id


def test_sign_in_wrong_password():
    svc, _ = _service(FakeAuthGateway(accounts={"anna@example.com": "hemligt"}))

    with pytest.raises(AuthenticationError):
        svc.sign_in("anna@example.com", "fel")


def test_sign_out_without_token_is_noop():
    gateway = FakeAuthGateway()
    svc, _ = _service(gateway)

    svc.sign_out(None)
    svc.sign_out("tok")

    assert gateway.signed_out == ["tok"]
