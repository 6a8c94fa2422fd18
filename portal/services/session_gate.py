# portal/services/session_gate.py
import logging

from supabase import Client

from portal.core.errors import BackendError, NotFoundError
from portal.repositories.profile_repo import ProfileRepository
from portal.schemas.session import (
    Identity,
    NavigationTarget,
    SessionResolution,
    SessionState,
)

logger = logging.getLogger(__name__)

_TARGETS: dict[SessionState, NavigationTarget] = {
    SessionState.ANONYMOUS: NavigationTarget.LOGIN,
    SessionState.AUTHENTICATED_NO_PROFILE: NavigationTarget.ONBOARDING,
    SessionState.AUTHENTICATED_WITH_PROFILE: NavigationTarget.DASHBOARD,
}


def navigation_for(state: SessionState) -> NavigationTarget:
    """Page a resolved session state routes to."""
    return _TARGETS[state]


class SessionGate:
    """
    Decides whether a visitor is signed in and has onboarded.

    Flow:
      1. No identity => Anonymous.
      2. Look up the profile by user_id.
      3. "No rows" => AuthenticatedNoProfile (not an error).
      4. Row found => AuthenticatedWithProfile.

    Any other backend failure propagates as BackendError.
    """

    def __init__(self, profile_repo: ProfileRepository):
        self.profile_repo = profile_repo

    def resolve(self, client: Client | None, identity: Identity | None) -> SessionResolution:
        if identity is None or client is None:
            return SessionResolution(state=SessionState.ANONYMOUS)

        try:
            profile = self.profile_repo.get(client, identity.id)
        except NotFoundError:
            return SessionResolution(
                state=SessionState.AUTHENTICATED_NO_PROFILE,
                identity=identity,
            )

        return SessionResolution(
            state=SessionState.AUTHENTICATED_WITH_PROFILE,
            identity=identity,
            profile=profile,
        )

    def resolve_target(self, client: Client | None, identity: Identity | None) -> NavigationTarget:
        """
        Like resolve(), but never fails: a backend error while checking the
        profile routes to the dashboard so pages cannot redirect-loop.
        """
        try:
            return navigation_for(self.resolve(client, identity).state)
        except BackendError as exc:
            logger.error("Error checking profile status, falling back to dashboard: %s", exc.message)
            return NavigationTarget.DASHBOARD
