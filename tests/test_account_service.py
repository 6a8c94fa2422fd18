"""Tests for sign-in/up/out and password recovery."""

import uuid

import pytest

from portal.core.errors import BackendError, ValidationError
from portal.schemas.account import (
    AuthSession,
    PasswordUpdatePayload,
    RecoverySessionPayload,
    SignInPayload,
    SignUpPayload,
)
from portal.schemas.session import Identity, NavigationTarget
from portal.services.account_service import AccountService


class FakeGateway:
    def __init__(self, user_id: uuid.UUID, fail: str | None = None):
        self.user_id = user_id
        self.fail = fail
        self.calls: list[tuple] = []

    def _session(self, email="owner@acme.test"):
        return AuthSession(
            access_token="access", refresh_token="refresh", user_id=self.user_id, email=email
        )

    def _maybe_fail(self, name):
        if self.fail == name:
            raise BackendError(f"{name} failed")

    def sign_in(self, email, password):
        self.calls.append(("sign_in", email))
        self._maybe_fail("sign_in")
        return self._session(email)

    def sign_up(self, email, password, full_name):
        self.calls.append(("sign_up", email, full_name))
        return None

    def sign_out(self, access_token, refresh_token):
        self.calls.append(("sign_out", access_token, refresh_token))

    def send_password_reset(self, email, redirect_to):
        self.calls.append(("reset", email, redirect_to))

    def set_session(self, access_token, refresh_token):
        self.calls.append(("set_session", access_token, refresh_token))
        self._maybe_fail("set_session")
        return self._session()

    def update_password(self, new_password):
        self.calls.append(("update_password", new_password))


@pytest.fixture
def gateway(identity):
    return FakeGateway(identity.id)


@pytest.fixture
def make_service(gate, db):
    def _make(gateway):
        return AccountService(gate, gateway_factory=lambda: gateway, db_factory=lambda token: db)

    return _make


class TestSignIn:
    def test_new_user_routes_to_onboarding(self, make_service, gateway):
        result = make_service(gateway).sign_in(SignInPayload(email="owner@acme.test", password="secret1"))

        assert result.target is NavigationTarget.ONBOARDING
        assert result.session.access_token == "access"
        assert result.banner.message == "Successfully signed in!"

    def test_onboarded_user_routes_to_dashboard(self, make_service, gateway, onboarded):
        result = make_service(gateway).sign_in(SignInPayload(email="owner@acme.test", password="secret1"))

        assert result.target is NavigationTarget.DASHBOARD

    def test_profile_check_failure_falls_back_to_dashboard(self, make_service, gateway, db):
        db.fail("profiles", "select")

        result = make_service(gateway).sign_in(SignInPayload(email="owner@acme.test", password="secret1"))

        assert result.target is NavigationTarget.DASHBOARD

    def test_bad_credentials_surface_backend_message(self, make_service, identity):
        gateway = FakeGateway(identity.id, fail="sign_in")

        with pytest.raises(BackendError):
            make_service(gateway).sign_in(SignInPayload(email="owner@acme.test", password="nope"))


class TestSignUp:
    def _payload(self, password="secret1", confirm="secret1"):
        return SignUpPayload(
            name="Dana", email="dana@acme.test", password=password, confirm_password=confirm
        )

    def test_mismatched_passwords_make_no_backend_call(self, make_service, gateway):
        with pytest.raises(ValidationError) as exc_info:
            make_service(gateway).sign_up(self._payload(confirm="secret2"))

        assert exc_info.value.message == "Passwords do not match"
        assert gateway.calls == []

    def test_short_password_rejected(self, make_service, gateway):
        with pytest.raises(ValidationError) as exc_info:
            make_service(gateway).sign_up(self._payload(password="abc", confirm="abc"))

        assert "at least 6 characters" in exc_info.value.message
        assert gateway.calls == []

    def test_success_routes_to_onboarding(self, make_service, gateway):
        result = make_service(gateway).sign_up(self._payload())

        assert result.target is NavigationTarget.ONBOARDING
        assert gateway.calls == [("sign_up", "dana@acme.test", "Dana")]


class TestRecovery:
    def test_reset_link_redirects_to_reset_page(self, make_service, gateway):
        make_service(gateway).request_password_reset("dana@acme.test")

        assert gateway.calls == [
            ("reset", "dana@acme.test", "https://portal.example.com/reset-password.html")
        ]

    @pytest.mark.parametrize(
        "payload",
        [
            RecoverySessionPayload(access_token=None, refresh_token="r", type="recovery"),
            RecoverySessionPayload(access_token="a", refresh_token="r", type="signup"),
        ],
    )
    def test_invalid_recovery_link(self, make_service, gateway, payload):
        with pytest.raises(ValidationError):
            make_service(gateway).open_recovery_session(payload)

        assert gateway.calls == []

    def test_expired_recovery_link(self, make_service, identity):
        gateway = FakeGateway(identity.id, fail="set_session")

        with pytest.raises(BackendError) as exc_info:
            make_service(gateway).open_recovery_session(
                RecoverySessionPayload(access_token="a", refresh_token="r", type="recovery")
            )

        assert "expired or is invalid" in exc_info.value.message

    def test_update_password(self, make_service, gateway, identity):
        result = make_service(gateway).update_password(
            identity,
            PasswordUpdatePayload(refresh_token="r", password="newpass1", confirm_password="newpass1"),
        )

        assert result.banner.message == "Password updated successfully!"
        assert gateway.calls == [
            ("set_session", identity.access_token, "r"),
            ("update_password", "newpass1"),
        ]

    def test_sign_out(self, make_service, gateway, identity):
        result = make_service(gateway).sign_out(identity, "r")

        assert result.target is NavigationTarget.LOGIN
        assert gateway.calls == [("sign_out", identity.access_token, "r")]
