# portal/repositories/profile_repo.py
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from supabase import Client

from portal.core.timeutils import utcnow
from portal.models.profile import Profile
from portal.repositories.query import execute


class ProfileRepository:
    """
    Data access layer for the `profiles` table.

    Responsibilities:
      - Pure Supabase operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic

    Errors surface as the portal taxonomy: NotFoundError when no row
    exists, ConflictError when a profile already exists for the user.
    """

    TABLE = "profiles"

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    def get(self, client: Client, user_id: uuid.UUID) -> Profile:
        """
        Return the profile for a user.

        Raises:
            NotFoundError: if the user has not onboarded yet.
        """
        response = execute(
            client.table(self.TABLE).select("*").eq("user_id", str(user_id)).single()
        )
        return Profile.model_validate(response.data)

    def list_all(self, client: Client) -> list[Profile]:
        """All profiles, ordered by business name (admin view)."""
        response = execute(
            client.table(self.TABLE).select("*").order("business_name")
        )
        return [Profile.model_validate(row) for row in response.data or []]

    def create(
        self,
        client: Client,
        user_id: uuid.UUID,
        email: str | None,
        fields: dict[str, Any],
    ) -> Profile:
        """
        Insert a new profile.

        Raises:
            ConflictError: if a profile already exists for this user
              (unique user_id); callers retry as update().
        """
        row = {
            **fields,
            "user_id": str(user_id),
            "email": email,
            "created_at": self.clock().isoformat(),
        }
        response = execute(client.table(self.TABLE).insert(row))
        if response.data:
            return Profile.model_validate(response.data[0])
        return Profile.model_validate(row)

    def update(
        self,
        client: Client,
        user_id: uuid.UUID,
        fields: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Merge the given columns into the user's profile and stamp updated_at.

        Returns exactly the columns written, so callers can patch their
        local copy with the same values.
        """
        changes = {**fields, "updated_at": self.clock()}
        execute(
            client.table(self.TABLE)
            .update({**changes, "updated_at": changes["updated_at"].isoformat()})
            .eq("user_id", str(user_id))
        )
        return changes
