# portal/core/auth_gateway.py
from typing import Any

from supabase import AuthError, Client

from portal.core.errors import BackendError
from portal.schemas.account import AuthSession


def _to_session(response: Any) -> AuthSession | None:
    session = getattr(response, "session", None)
    if session is None:
        return None
    user = session.user
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user_id=user.id,
        email=user.email,
    )


class AuthGateway:
    """
    Thin wrapper around Supabase Auth (GoTrue).

    One gateway per request: the underlying auth client keeps the
    session it signs in with in memory.
    """

    def __init__(self, client: Client):
        self.client = client

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise BackendError(exc.message) from exc
        session = _to_session(response)
        if session is None:
            raise BackendError("Sign-in did not return a session")
        return session

    def sign_up(self, email: str, password: str, full_name: str) -> AuthSession | None:
        """
        Register a user. Returns None when email confirmation is pending
        and Supabase has not issued a session yet.
        """
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"full_name": full_name}},
                }
            )
        except AuthError as exc:
            raise BackendError(exc.message) from exc
        return _to_session(response)

    def set_session(self, access_token: str, refresh_token: str) -> AuthSession:
        try:
            response = self.client.auth.set_session(access_token, refresh_token)
        except AuthError as exc:
            raise BackendError(exc.message) from exc
        session = _to_session(response)
        if session is None:
            raise BackendError("Session could not be restored")
        return session

    def sign_out(self, access_token: str, refresh_token: str) -> None:
        self.set_session(access_token, refresh_token)
        try:
            self.client.auth.sign_out()
        except AuthError as exc:
            raise BackendError(exc.message) from exc

    def send_password_reset(self, email: str, redirect_to: str) -> None:
        try:
            self.client.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
        except AuthError as exc:
            raise BackendError(exc.message) from exc

    def update_password(self, new_password: str) -> None:
        """Change the password of the session currently set on this gateway."""
        try:
            self.client.auth.update_user({"password": new_password})
        except AuthError as exc:
            raise BackendError(exc.message) from exc
