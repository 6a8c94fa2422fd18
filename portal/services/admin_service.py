# portal/services/admin_service.py
import logging

from supabase import Client

from portal.core.errors import BackendError
from portal.models.profile import Profile
from portal.models.service_request import RequestStatus, ServiceRequest
from portal.repositories.profile_repo import ProfileRepository
from portal.repositories.service_request_repo import ServiceRequestRepository
from portal.schemas.banner import Banner
from portal.schemas.service_request import RequestFilter, RequestStats, StatusUpdateRead
from portal.services import banner

logger = logging.getLogger(__name__)


def filter_requests(
    requests: list[ServiceRequest],
    criteria: RequestFilter,
) -> list[ServiceRequest]:
    """
    AND of three optional predicates: business name, status, service type.

    Pure and order preserving, so applying the filters one at a time in
    any order gives the same result.
    """
    return [
        r
        for r in requests
        if (criteria.business is None or r.business_name == criteria.business)
        and (criteria.status is None or r.status == criteria.status)
        and (criteria.service_type is None or r.service_type == criteria.service_type)
    ]


def business_options(requests: list[ServiceRequest]) -> list[str]:
    """Distinct non-empty business names, in first-seen order."""
    seen: dict[str, None] = {}
    for r in requests:
        if r.business_name:
            seen.setdefault(r.business_name, None)
    return list(seen)


def apply_committed(
    requests: list[ServiceRequest],
    committed: ServiceRequest,
) -> list[ServiceRequest]:
    """Replace the record with the committed row's id; others untouched."""
    return [committed if r.id == committed.id else r for r in requests]


def request_stats(requests: list[ServiceRequest]) -> RequestStats:
    return RequestStats(
        total=len(requests),
        pending=sum(1 for r in requests if r.status == "pending"),
        in_progress=sum(1 for r in requests if r.status == "in-progress"),
        completed=sum(1 for r in requests if r.status == "completed"),
    )


class AdminSession:
    """In-memory copies of everything the admin page shows."""

    def __init__(self):
        self.requests: list[ServiceRequest] = []
        self.businesses: list[Profile] = []
        self.banner: Banner | None = None


class AdminService:
    """
    Admin panel flow.

    Requests and profiles are loaded by two independent calls (no join).
    Filtering is done locally. A status update returns the committed row
    so the affected record can be patched in place (`apply_committed`)
    instead of re-fetching.
    """

    def __init__(
        self,
        profile_repo: ProfileRepository,
        request_repo: ServiceRequestRepository,
    ):
        self.profile_repo = profile_repo
        self.request_repo = request_repo

    def load(self, client: Client) -> AdminSession:
        session = AdminSession()

        try:
            session.requests = self.request_repo.list_all(client)
        except BackendError as exc:
            session.banner = banner.error(f"Error loading requests: {exc.message}")

        try:
            session.businesses = self.profile_repo.list_all(client)
        except BackendError as exc:
            logger.error("Error loading businesses: %s", exc.message)

        return session

    def list_businesses(self, client: Client) -> list[Profile]:
        try:
            return self.profile_repo.list_all(client)
        except BackendError as exc:
            raise BackendError(f"Error loading businesses: {exc.message}") from exc

    def view(
        self,
        session: AdminSession,
        criteria: RequestFilter,
    ) -> tuple[list[ServiceRequest], RequestStats, list[str]]:
        """Filtered rows, their counts, and filter options from all rows."""
        rows = filter_requests(session.requests, criteria)
        return rows, request_stats(rows), business_options(session.requests)

    def update_status(
        self,
        client: Client,
        request_id: str,
        status: RequestStatus,
        notes: str | None = None,
    ) -> StatusUpdateRead:
        """
        One round trip; the result carries the row as committed so the
        caller can patch its copy with `apply_committed` instead of
        re-fetching.
        """
        try:
            committed = self.request_repo.update_status(client, request_id, status, notes)
        except BackendError as exc:
            raise BackendError(f"Failed to update status: {exc.message}") from exc

        return StatusUpdateRead(
            request=committed,
            banner=banner.success("Request status updated successfully!"),
        )
