# portal/services/dashboard_service.py
import logging
from enum import Enum
from typing import Any

from supabase import Client

from portal.core.errors import BackendError, ValidationError
from portal.models.profile import Profile
from portal.models.service_request import SERVICE_NAMES, ServiceRequest
from portal.repositories.profile_repo import ProfileRepository
from portal.repositories.service_request_repo import ServiceRequestRepository
from portal.schemas.banner import Banner
from portal.schemas.profile import PROFILE_FIELD_COLUMNS, ProfileField
from portal.schemas.session import Identity, SessionState
from portal.services import banner
from portal.services.notification_service import (
    NotificationDispatcher,
    NotificationOutcome,
)
from portal.services.session_gate import SessionGate

logger = logging.getLogger(__name__)


class DashboardState(str, Enum):
    LOADING = "loading"
    NO_SESSION = "no_session"
    NO_PROFILE = "no_profile"
    READY = "ready"
    SERVICE_SELECTED = "service_selected"
    SUBMITTING = "submitting"


class SubmissionOutcome(str, Enum):
    SUBMITTED_OK = "submitted_ok"
    SUBMITTED_WITH_NOTIFY_FAILURE = "submitted_with_notify_failure"
    SUBMIT_FAILED = "submit_failed"


_STATE_BY_SESSION: dict[SessionState, DashboardState] = {
    SessionState.ANONYMOUS: DashboardState.NO_SESSION,
    SessionState.AUTHENTICATED_NO_PROFILE: DashboardState.NO_PROFILE,
    SessionState.AUTHENTICATED_WITH_PROFILE: DashboardState.READY,
}


class DashboardSession:
    """
    Page-level context for one dashboard visit.

    Holds the transient, non-authoritative copies of the user's profile
    and recent requests, plus the purely local service selection.
    """

    def __init__(self, identity: Identity | None = None):
        self.identity = identity
        self.profile: Profile | None = None
        self.requests: list[ServiceRequest] = []
        self.selected_service: str | None = None
        self.state = DashboardState.LOADING
        self.last_outcome: SubmissionOutcome | None = None
        self.last_request: ServiceRequest | None = None
        self.banner: Banner | None = None


def coerce_field_value(field: ProfileField, raw: str) -> Any:
    """
    Validate one edited value.

    office-size must be a positive integer; every other field must be
    non-empty after trimming.
    """
    value = raw.strip()
    if not value:
        raise ValidationError("Please enter a value.")

    if field is ProfileField.OFFICE_SIZE:
        try:
            size = int(value)
        except ValueError:
            raise ValidationError("Office size must be a whole number.")
        if size < 1:
            raise ValidationError("Office size must be at least 1.")
        return size

    return value


class DashboardService:
    """
    Customer dashboard flow.

    States:
      Loading -> NoSession | NoProfile | Ready
      Ready -> ServiceSelected(type) -> Submitting -> Ready

    Every submission ends back in Ready with the selection cleared; the
    terminal outcome is kept in `last_outcome`.
    """

    def __init__(
        self,
        gate: SessionGate,
        profile_repo: ProfileRepository,
        request_repo: ServiceRequestRepository,
        dispatcher: NotificationDispatcher,
        history_limit: int = 10,
    ):
        self.gate = gate
        self.profile_repo = profile_repo
        self.request_repo = request_repo
        self.dispatcher = dispatcher
        self.history_limit = history_limit

    # -------- Loading --------

    def load(
        self,
        client: Client | None,
        identity: Identity | None,
        with_requests: bool = True,
        raise_on_error: bool = False,
    ) -> DashboardSession:
        """
        Resolve the session and, when ready, fetch recent requests.

        A backend error while loading the profile leaves the page in
        Loading with an error banner instead of redirecting. With
        `raise_on_error` the same error is raised as a BackendError, for
        callers about to act on the profile.
        """
        session = DashboardSession(identity)
        try:
            resolution = self.gate.resolve(client, identity)
        except BackendError as exc:
            message = f"Error loading profile: {exc.message}"
            if raise_on_error:
                raise BackendError(message) from exc
            session.banner = banner.error(message)
            return session

        session.state = _STATE_BY_SESSION[resolution.state]
        session.profile = resolution.profile
        if with_requests and session.state is DashboardState.READY:
            self.refresh_requests(client, session)
        return session

    def refresh_requests(self, client: Client, session: DashboardSession) -> None:
        """Re-fetch the user's latest requests; failures are logged only."""
        if session.identity is None:
            return
        try:
            session.requests = self.request_repo.list_by_user(
                client, session.identity.id, limit=self.history_limit
            )
        except BackendError as exc:
            logger.error("Error loading service requests: %s", exc.message)

    # -------- Service selection / submission --------

    def select_service(self, session: DashboardSession, service_type: str) -> None:
        """Local only; re-selecting replaces the previous choice."""
        if service_type not in SERVICE_NAMES:
            raise ValidationError(f"Unknown service: {service_type}")
        if session.state not in (DashboardState.READY, DashboardState.SERVICE_SELECTED):
            raise ValidationError("Please ensure you are logged in and have completed your profile.")
        session.selected_service = service_type
        session.state = DashboardState.SERVICE_SELECTED

    def submit_request(self, client: Client, session: DashboardSession) -> SubmissionOutcome:
        """
        Create the selected request, then fire the notification hook.

        Raises:
            ValidationError: nothing selected, or user/profile not loaded.
              No backend call is made in that case.
        """
        if session.selected_service is None:
            raise ValidationError("Please select a service first.")
        if session.identity is None or session.profile is None:
            raise ValidationError("Please ensure you are logged in and have completed your profile.")

        service_type = session.selected_service
        service_name = SERVICE_NAMES[service_type]
        identity = session.identity
        profile = session.profile
        session.state = DashboardState.SUBMITTING

        try:
            created = self.request_repo.create(
                client,
                {
                    "user_id": identity.id,
                    "business_name": profile.business_name,
                    "business_address": profile.business_address,
                    "service_type": service_type,
                    "service_name": service_name,
                    "email": identity.email or profile.email,
                },
            )
        except BackendError as exc:
            session.banner = banner.error(f"Failed to create service request: {exc.message}")
            return self._finish(session, SubmissionOutcome.SUBMIT_FAILED)

        session.last_request = created
        notified = self.dispatcher.notify_request_created(
            created, profile, identity.email or profile.email
        )
        if notified is NotificationOutcome.SENT:
            outcome = SubmissionOutcome.SUBMITTED_OK
            session.banner = banner.success(
                f"{service_name} request submitted and notification sent!"
            )
        else:
            outcome = SubmissionOutcome.SUBMITTED_WITH_NOTIFY_FAILURE
            session.banner = banner.success(
                f"{service_name} request submitted! (Note: Email notification may have failed)"
            )

        self._finish(session, outcome)
        self.refresh_requests(client, session)
        return outcome

    def _finish(self, session: DashboardSession, outcome: SubmissionOutcome) -> SubmissionOutcome:
        session.last_outcome = outcome
        session.selected_service = None
        session.state = DashboardState.READY
        return outcome

    # -------- Profile edits --------

    def edit_profile_field(
        self,
        client: Client,
        session: DashboardSession,
        field: ProfileField,
        raw_value: str,
    ) -> Profile:
        """
        Update exactly one profile column (plus updated_at).

        The local copy is patched only after the remote write succeeded.
        """
        if session.identity is None or session.profile is None:
            raise ValidationError("Please ensure you are logged in and have completed your profile.")

        value = coerce_field_value(field, raw_value)
        column = PROFILE_FIELD_COLUMNS[field]

        try:
            written = self.profile_repo.update(client, session.identity.id, {column: value})
        except BackendError as exc:
            raise BackendError(f"Failed to update profile: {exc.message}") from exc

        session.profile = session.profile.model_copy(update=written)
        session.banner = banner.success("Profile updated successfully!")
        return session.profile
