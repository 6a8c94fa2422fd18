# portal/models/service_request.py
import uuid
from datetime import datetime
from typing import Literal

from sqlmodel import SQLModel, Field

ServiceType = Literal["coffee-refill", "nitrogen-refill", "kegerator-maintenance"]
RequestStatus = Literal["pending", "in-progress", "completed"]

# Display name stored alongside the type on every request
SERVICE_NAMES: dict[str, str] = {
    "coffee-refill": "Coffee Refill",
    "nitrogen-refill": "Nitrogen Refill",
    "kegerator-maintenance": "Kegerator Maintenance",
}


class ServiceRequest(SQLModel):
    """
    Customer service request row from the `service_requests` table.

    business_name / business_address are a snapshot of the profile taken
    at creation time; they do not follow later profile edits.

    `id` is opaque: whatever the backend generates (UUID text or an int8
    identity), or a "temp-<ms>" placeholder when the insert response does
    not echo the row.
    """

    id: int | str

    user_id: uuid.UUID = Field(
        description="Owner; matches Supabase auth.users.id",
    )

    business_name: str | None = Field(default=None)
    business_address: str | None = Field(default=None)

    service_type: ServiceType
    service_name: str

    # pending | in-progress | completed, set by the admin in any order
    status: RequestStatus = Field(default="pending")

    admin_notes: str | None = Field(default=None)

    email: str | None = Field(
        default=None,
        description="Contact email of the requesting user",
    )

    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)
