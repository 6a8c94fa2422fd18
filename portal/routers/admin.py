# portal/routers/admin.py
import pydantic
from fastapi import APIRouter, Depends
from supabase import Client

from portal.core.auth import get_db, require_admin_access
from portal.core.errors import ValidationError
from portal.models.profile import Profile
from portal.routers.deps import get_admin_service
from portal.schemas.service_request import (
    AdminRequestsRead,
    RequestFilter,
    StatusUpdate,
    StatusUpdateRead,
)
from portal.services.admin_service import AdminService

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin_access)],
)


@router.get("/requests", response_model=AdminRequestsRead)
def list_requests(
    business: str | None = None,
    status: str | None = None,
    service_type: str | None = None,
    client: Client = Depends(get_db),
    service: AdminService = Depends(get_admin_service),
):
    """
    All service requests, newest first, filtered locally.

    Empty filter values mean "no constraint". Stats are computed over
    the filtered rows; business options come from all rows.
    """
    try:
        criteria = RequestFilter(business=business, status=status, service_type=service_type)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid filter: {exc.errors()[0]['msg']}") from exc

    session = service.load(client)
    rows, stats, options = service.view(session, criteria)
    return AdminRequestsRead(
        requests=rows,
        stats=stats,
        business_options=options,
        banner=session.banner,
    )


@router.get("/businesses", response_model=list[Profile])
def list_businesses(
    client: Client = Depends(get_db),
    service: AdminService = Depends(get_admin_service),
):
    """All business profiles ordered by name."""
    return service.list_businesses(client)


@router.patch("/requests/{request_id}/status", response_model=StatusUpdateRead)
def update_request_status(
    request_id: str,
    payload: StatusUpdate,
    client: Client = Depends(get_db),
    service: AdminService = Depends(get_admin_service),
):
    """
    Set a request's status (any value, any order) and optional notes.

    Returns the row as committed.
    """
    return service.update_status(client, request_id, payload.status, payload.notes)
