# portal/routers/dashboard.py
from fastapi import APIRouter, Depends, Response, status
from supabase import Client

from portal.core.auth import get_current_identity, get_db, require_identity
from portal.routers.deps import get_dashboard_service
from portal.schemas.dashboard import DashboardRead
from portal.schemas.profile import ProfileFieldUpdate, ProfileUpdateRead
from portal.schemas.service_request import ServiceRequestCreate, SubmissionRead
from portal.schemas.session import Identity
from portal.services.dashboard_service import DashboardService, SubmissionOutcome

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardRead)
def read_dashboard(
    identity: Identity | None = Depends(get_current_identity),
    client: Client | None = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    Profile plus the latest requests (newest first).

    `state` tells the page where it stands: no_session -> login,
    no_profile -> onboarding, ready -> render.
    """
    session = service.load(client, identity)
    return DashboardRead(
        state=session.state.value,
        profile=session.profile,
        requests=session.requests,
        banner=session.banner,
    )


@router.patch("/profile", response_model=ProfileUpdateRead)
def edit_profile_field(
    payload: ProfileFieldUpdate,
    identity: Identity = Depends(require_identity),
    client: Client = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Edit a single profile field from the dashboard modal."""
    session = service.load(client, identity, with_requests=False, raise_on_error=True)
    profile = service.edit_profile_field(client, session, payload.field, payload.value)
    return ProfileUpdateRead(profile=profile, banner=session.banner)


@router.post("/requests", response_model=SubmissionRead)
def submit_service_request(
    payload: ServiceRequestCreate,
    response: Response,
    identity: Identity = Depends(require_identity),
    client: Client = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    Submit a request for the chosen service.

    The request is stored with status 'pending' and the team is emailed.
    A failed email still reports success, with a caveat in the banner.
    """
    session = service.load(client, identity, with_requests=False, raise_on_error=True)
    service.select_service(session, payload.service_type)
    outcome = service.submit_request(client, session)
    if outcome is SubmissionOutcome.SUBMIT_FAILED:
        response.status_code = status.HTTP_502_BAD_GATEWAY

    return SubmissionRead(
        outcome=outcome.value,
        request=session.last_request,
        requests=session.requests,
        banner=session.banner,
    )
