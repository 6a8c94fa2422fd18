# portal/schemas/profile.py
from enum import Enum

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from portal.models.profile import Profile
from portal.schemas.banner import Banner
from portal.schemas.session import NavigationTarget


class ProfileField(str, Enum):
    """Dashboard-editable profile fields, keyed by their UI name."""

    BUSINESS_NAME = "business-name"
    BUSINESS_ADDRESS = "business-address"
    POINT_OF_CONTACT = "point-of-contact"
    PHONE_NUMBER = "phone-number"
    OFFICE_SIZE = "office-size"


# Storage column per field; must cover every ProfileField member.
PROFILE_FIELD_COLUMNS: dict[ProfileField, str] = {
    ProfileField.BUSINESS_NAME: "business_name",
    ProfileField.BUSINESS_ADDRESS: "business_address",
    ProfileField.POINT_OF_CONTACT: "point_of_contact",
    ProfileField.PHONE_NUMBER: "phone_number",
    ProfileField.OFFICE_SIZE: "office_size",
}

PROFILE_FIELD_LABELS: dict[ProfileField, str] = {
    ProfileField.BUSINESS_NAME: "Business Name",
    ProfileField.BUSINESS_ADDRESS: "Business Address",
    ProfileField.POINT_OF_CONTACT: "Point of Contact",
    ProfileField.PHONE_NUMBER: "Phone Number",
    ProfileField.OFFICE_SIZE: "Office Size (Number of People)",
}

if set(PROFILE_FIELD_COLUMNS) != set(ProfileField) or set(PROFILE_FIELD_LABELS) != set(ProfileField):
    raise RuntimeError("Profile field tables do not cover every ProfileField")


class OnboardingCreate(SQLModel):
    """
    Payload for the onboarding form.

    Backend derives:
      - user_id / email from token
      - created_at / updated_at
    """

    model_config = ConfigDict(extra="forbid")

    business_name: str
    business_address: str
    office_size: int = Field(gt=0, description="Number of people (>=1)")
    point_of_contact: str
    phone_number: str

    @field_validator("business_name", "business_address", "point_of_contact", "phone_number")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class ProfileFieldUpdate(SQLModel):
    """
    Single-field edit from the dashboard modal.

    `value` arrives as text; coercion per field happens in the service
    so that a bad value becomes a banner error rather than a 422.
    """

    model_config = ConfigDict(extra="forbid")

    field: ProfileField
    value: str


class ProfileUpdateRead(SQLModel):
    profile: Profile
    banner: Banner


class OnboardingRead(SQLModel):
    """Result of onboarding status check or submission."""

    target: NavigationTarget | None = None
    created: bool | None = None
    notification: str | None = None
    banner: Banner | None = None
