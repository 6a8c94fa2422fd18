# portal/repositories/service_request_repo.py
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from supabase import Client

from portal.core.errors import NotFoundError
from portal.core.timeutils import utcnow
from portal.models.service_request import RequestStatus, ServiceRequest
from portal.repositories.query import execute


class ServiceRequestRepository:
    """
    Data access layer for the `service_requests` table.

    Listings are always newest first by created_at; ties keep whatever
    order the backend returns.
    """

    TABLE = "service_requests"

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    # ---- Queries ----

    def find(
        self,
        client: Client,
        user_id: uuid.UUID | None = None,
        status: RequestStatus | None = None,
        business_name: str | None = None,
        service_type: str | None = None,
        limit: int | None = None,
    ) -> list[ServiceRequest]:
        query = client.table(self.TABLE).select("*")
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        if status is not None:
            query = query.eq("status", status)
        if business_name is not None:
            query = query.eq("business_name", business_name)
        if service_type is not None:
            query = query.eq("service_type", service_type)
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)

        response = execute(query)
        return [ServiceRequest.model_validate(row) for row in response.data or []]

    def list_by_user(
        self,
        client: Client,
        user_id: uuid.UUID,
        limit: int = 10,
    ) -> list[ServiceRequest]:
        return self.find(client, user_id=user_id, limit=limit)

    def list_all(self, client: Client) -> list[ServiceRequest]:
        return self.find(client)

    # ---- Mutations ----

    def create(self, client: Client, fields: dict[str, Any]) -> ServiceRequest:
        """
        Insert a request. Status is always 'pending' regardless of input.

        If the backend does not echo the row back, a "temp-<ms>" id is
        used so the caller and the notification payload stay consistent.
        """
        now = self.clock()
        row = {
            **fields,
            "status": "pending",
            "created_at": now.isoformat(),
        }
        if "user_id" in row:
            row["user_id"] = str(row["user_id"])

        response = execute(client.table(self.TABLE).insert(row))
        if response.data and response.data[0].get("id"):
            return ServiceRequest.model_validate({**row, **response.data[0]})

        placeholder = f"temp-{int(now.timestamp() * 1000)}"
        return ServiceRequest.model_validate({**row, "id": placeholder})

    def update_status(
        self,
        client: Client,
        request_id: str,
        status: RequestStatus,
        notes: str | None = None,
    ) -> ServiceRequest:
        """
        Set status (and admin_notes when non-empty), stamping updated_at.

        Returns the row as committed by the backend.

        Raises:
            NotFoundError: if no row was updated.
        """
        changes: dict[str, Any] = {
            "status": status,
            "updated_at": self.clock().isoformat(),
        }
        if notes and notes.strip():
            changes["admin_notes"] = notes.strip()

        response = execute(
            client.table(self.TABLE).update(changes).eq("id", request_id)
        )
        if not response.data:
            raise NotFoundError("Service request not found")
        return ServiceRequest.model_validate(response.data[0])
