# portal/schemas/service_request.py
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from portal.models.service_request import (
    RequestStatus,
    ServiceRequest,
    ServiceType,
)
from portal.schemas.banner import Banner


class ServiceRequestCreate(SQLModel):
    """
    Payload for submitting a service request from the dashboard.

    Backend derives:
      - user_id / email from token
      - business name/address snapshot from the profile
      - status = 'pending'
    """

    model_config = ConfigDict(extra="forbid")

    service_type: ServiceType


class StatusUpdate(SQLModel):
    """
    Admin payload to change request status.

    Any status may be set at any time; there is no transition table.
    """

    model_config = ConfigDict(extra="forbid")

    status: RequestStatus
    notes: str | None = None

    @field_validator("notes")
    @classmethod
    def normalize_notes(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class RequestFilter(SQLModel):
    """
    Admin table filters. An empty value means "no constraint".
    """

    business: str | None = None
    status: RequestStatus | None = None
    service_type: ServiceType | None = None

    @field_validator("business", "status", "service_type", mode="before")
    @classmethod
    def blank_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class RequestStats(SQLModel):
    total: int
    pending: int
    in_progress: int
    completed: int


class SubmissionRead(SQLModel):
    """Result of POST /dashboard/requests."""

    outcome: str
    request: ServiceRequest | None = None
    requests: list[ServiceRequest]
    banner: Banner | None = None


class AdminRequestsRead(SQLModel):
    """Admin table payload: filtered rows plus counts and filter options."""

    requests: list[ServiceRequest]
    stats: RequestStats
    business_options: list[str]
    banner: Banner | None = None


class StatusUpdateRead(SQLModel):
    request: ServiceRequest
    banner: Banner
