# portal/schemas/dashboard.py
from sqlmodel import SQLModel

from portal.models.profile import Profile
from portal.models.service_request import ServiceRequest
from portal.schemas.banner import Banner
from portal.schemas.profile import PROFILE_FIELD_LABELS


class DashboardRead(SQLModel):
    """Full dashboard view after page load."""

    state: str
    profile: Profile | None = None
    requests: list[ServiceRequest] = []
    banner: Banner | None = None

    # Edit-modal labels keyed by the field name PATCH /dashboard/profile takes
    editable_fields: dict[str, str] = {
        field.value: label for field, label in PROFILE_FIELD_LABELS.items()
    }
