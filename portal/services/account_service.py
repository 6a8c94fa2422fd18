# portal/services/account_service.py
from collections.abc import Callable

from supabase import Client

from portal.core.auth_gateway import AuthGateway
from portal.core.config import get_settings
from portal.core.errors import BackendError, ValidationError
from portal.schemas.account import (
    AccountRead,
    PasswordUpdatePayload,
    RecoverySessionPayload,
    SignInPayload,
    SignUpPayload,
)
from portal.schemas.session import Identity, NavigationTarget
from portal.services import banner
from portal.services.session_gate import SessionGate

settings = get_settings()


def validate_new_password(password: str, confirm_password: str) -> None:
    """
    Client-side password rules shared by sign-up and password reset.

    Raises:
        ValidationError: too short, or confirmation does not match.
    """
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
        )
    if password != confirm_password:
        raise ValidationError("Passwords do not match")


class AccountService:
    """
    Sign-in, sign-up, sign-out and password recovery.

    `gateway_factory` returns a fresh AuthGateway per call because the
    auth client keeps session state; `db_factory` builds a database
    client for a given access token (used to route after sign-in).
    """

    def __init__(
        self,
        gate: SessionGate,
        gateway_factory: Callable[[], AuthGateway],
        db_factory: Callable[[str], Client],
    ):
        self.gate = gate
        self.gateway_factory = gateway_factory
        self.db_factory = db_factory

    def sign_in(self, payload: SignInPayload) -> AccountRead:
        auth = self.gateway_factory().sign_in(payload.email, payload.password)
        identity = Identity(id=auth.user_id, email=auth.email, access_token=auth.access_token)
        target = self.gate.resolve_target(self.db_factory(auth.access_token), identity)
        return AccountRead(
            session=auth,
            target=target,
            banner=banner.success("Successfully signed in!"),
        )

    def sign_up(self, payload: SignUpPayload) -> AccountRead:
        validate_new_password(payload.password, payload.confirm_password)
        auth = self.gateway_factory().sign_up(payload.email, payload.password, payload.name)
        return AccountRead(
            session=auth,
            target=NavigationTarget.ONBOARDING,
            banner=banner.success("Account created successfully! Redirecting to onboarding..."),
        )

    def sign_out(self, identity: Identity, refresh_token: str) -> AccountRead:
        self.gateway_factory().sign_out(identity.access_token, refresh_token)
        return AccountRead(target=NavigationTarget.LOGIN)

    def request_password_reset(self, email: str) -> AccountRead:
        redirect_to = f"{settings.SITE_URL.rstrip('/')}/reset-password.html"
        self.gateway_factory().send_password_reset(email, redirect_to)
        return AccountRead(banner=banner.success("Password reset link sent to your email!"))

    def open_recovery_session(self, payload: RecoverySessionPayload) -> AccountRead:
        """
        Exchange the tokens from a reset link for a session.

        Only links of type "recovery" carrying an access token are
        accepted.
        """
        if not payload.access_token or payload.type != "recovery":
            raise ValidationError(
                "Invalid or missing password reset link. Please request a new one."
            )
        try:
            auth = self.gateway_factory().set_session(
                payload.access_token, payload.refresh_token or ""
            )
        except BackendError as exc:
            raise BackendError(
                "This password reset link has expired or is invalid. Please request a new one."
            ) from exc
        return AccountRead(session=auth)

    def update_password(self, identity: Identity, payload: PasswordUpdatePayload) -> AccountRead:
        validate_new_password(payload.password, payload.confirm_password)
        gateway = self.gateway_factory()
        try:
            gateway.set_session(identity.access_token, payload.refresh_token)
            gateway.update_password(payload.password)
        except BackendError as exc:
            raise BackendError(f"Failed to update password: {exc.message}") from exc
        return AccountRead(banner=banner.success("Password updated successfully!"))
