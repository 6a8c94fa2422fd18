# portal/schemas/account.py
import uuid

from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel

from portal.schemas.banner import Banner
from portal.schemas.session import NavigationTarget


class SignInPayload(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str


class SignUpPayload(SQLModel):
    """
    Sign-up form. Password rules are checked by the service so that a
    mismatch is reported as a banner, not a 422.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    email: EmailStr
    password: str
    confirm_password: str

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class SignOutPayload(SQLModel):
    model_config = ConfigDict(extra="forbid")

    refresh_token: str


class PasswordResetPayload(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr


class RecoverySessionPayload(SQLModel):
    """Tokens taken from the fragment of a password-reset link."""

    model_config = ConfigDict(extra="forbid")

    access_token: str | None = None
    refresh_token: str | None = None
    type: str | None = None


class PasswordUpdatePayload(SQLModel):
    model_config = ConfigDict(extra="forbid")

    refresh_token: str
    password: str
    confirm_password: str


class AuthSession(SQLModel):
    """Tokens and identity returned by Supabase Auth."""

    access_token: str
    refresh_token: str
    user_id: uuid.UUID
    email: str | None = None


class AccountRead(SQLModel):
    """Generic auth response: optional session, next page, banner."""

    session: AuthSession | None = None
    target: NavigationTarget | None = None
    banner: Banner | None = None
