# portal/schemas/session.py
import uuid
from enum import Enum

from sqlmodel import SQLModel

from portal.models.profile import Profile


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED_NO_PROFILE = "authenticated_no_profile"
    AUTHENTICATED_WITH_PROFILE = "authenticated_with_profile"


class NavigationTarget(str, Enum):
    """Page surface a resolved session routes to."""

    LOGIN = "login"
    ONBOARDING = "onboarding"
    DASHBOARD = "dashboard"


class Identity(SQLModel):
    """
    Opaque identity issued by Supabase Auth.

    `access_token` is the raw JWT; it authorises database calls made on
    behalf of this user.
    """

    id: uuid.UUID
    email: str | None = None
    access_token: str


class SessionResolution(SQLModel):
    """Outcome of the session gate."""

    state: SessionState
    identity: Identity | None = None
    profile: Profile | None = None


class SessionRead(SQLModel):
    """Response schema for GET /session."""

    state: SessionState
    target: NavigationTarget
    email: str | None = None
