# portal/services/onboarding_service.py
from supabase import Client

from portal.core.errors import AuthenticationError, BackendError, ConflictError
from portal.repositories.profile_repo import ProfileRepository
from portal.schemas.profile import OnboardingCreate, OnboardingRead
from portal.schemas.session import Identity, NavigationTarget, SessionState
from portal.services import banner
from portal.services.notification_service import NotificationDispatcher
from portal.services.session_gate import SessionGate


class OnboardingService:
    """
    Business profile onboarding.

    Responsibilities:
      - route visitors who do not belong on the onboarding page
      - create the profile, falling back to update on a duplicate
      - notify the team (best effort)
    """

    def __init__(
        self,
        gate: SessionGate,
        profile_repo: ProfileRepository,
        dispatcher: NotificationDispatcher,
    ):
        self.gate = gate
        self.profile_repo = profile_repo
        self.dispatcher = dispatcher

    def status(self, client: Client | None, identity: Identity | None) -> OnboardingRead:
        """
        Anonymous -> login; already onboarded -> dashboard;
        otherwise stay (target onboarding).
        """
        resolution = self.gate.resolve(client, identity)
        if resolution.state is SessionState.ANONYMOUS:
            return OnboardingRead(target=NavigationTarget.LOGIN)
        if resolution.state is SessionState.AUTHENTICATED_WITH_PROFILE:
            return OnboardingRead(target=NavigationTarget.DASHBOARD)
        return OnboardingRead(target=NavigationTarget.ONBOARDING)

    def submit(
        self,
        client: Client | None,
        identity: Identity | None,
        payload: OnboardingCreate,
    ) -> OnboardingRead:
        """
        Save the onboarding form.

        Steps:
          1. Require a signed-in user.
          2. Insert the profile.
          3. On a duplicate (e.g. a double submit), update instead, so
             exactly one profile row remains.
          4. Send the team notification; its outcome never fails the
             submission.
        """
        if identity is None or client is None:
            raise AuthenticationError(
                "You must be logged in to complete onboarding. Please sign in first."
            )

        fields = payload.model_dump()
        created = True
        try:
            self.profile_repo.create(client, identity.id, identity.email, fields)
        except ConflictError:
            created = False
            try:
                self.profile_repo.update(client, identity.id, fields)
            except BackendError as exc:
                raise BackendError(f"Failed to update profile: {exc.message}") from exc
        except BackendError as exc:
            raise BackendError(f"Failed to create profile: {exc.message}") from exc

        notified = self.dispatcher.notify_onboarding(identity, payload)

        return OnboardingRead(
            target=NavigationTarget.DASHBOARD,
            created=created,
            notification=notified.value,
            banner=banner.success(
                "Profile setup completed successfully! Redirecting to dashboard..."
            ),
        )
