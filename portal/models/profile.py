# portal/models/profile.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field


class Profile(SQLModel):
    """
    Business profile row from the `profiles` table.

    Identity:
      - user_id: MUST match Supabase auth.users.id (UUID from JWT "sub"),
        unique, so there is at most one profile per user.

    A missing row for an authenticated user means onboarding is not
    complete yet. Rows are owned by Supabase; instances here are
    transient copies used for rendering.
    """

    user_id: uuid.UUID = Field(
        description="Matches Supabase auth.users.id",
    )

    business_name: str | None = Field(default=None)
    business_address: str | None = Field(default=None)
    point_of_contact: str | None = Field(default=None)
    phone_number: str | None = Field(default=None)

    office_size: int | None = Field(
        default=None,
        description="Number of people in the office (>=1)",
    )

    email: str | None = Field(
        default=None,
        description="Email from Supabase auth.users at onboarding time",
    )

    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)
