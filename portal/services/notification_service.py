# portal/services/notification_service.py
import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any

from portal.core import email_client
from portal.core.config import get_settings
from portal.core.errors import NotificationError
from portal.core.timeutils import utcnow
from portal.models.profile import Profile
from portal.models.service_request import ServiceRequest
from portal.schemas.profile import OnboardingCreate
from portal.schemas.session import Identity

settings = get_settings()
logger = logging.getLogger(__name__)

Sender = Callable[[str, dict[str, Any]], None]


class NotificationOutcome(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


def build_request_params(
    request: ServiceRequest,
    profile: Profile,
    user_email: str | None,
    sent_at: datetime,
) -> dict[str, str]:
    """Template parameters for the "new service request" email."""
    return {
        "name": profile.point_of_contact or "Customer",
        "business_name": profile.business_name or "Unknown Business",
        "business_address": profile.business_address or "Address not provided",
        "service_name": request.service_name or "Unknown Service",
        "service_type": request.service_type or "unknown",
        "point_of_contact": profile.point_of_contact or "Not specified",
        "phone_number": profile.phone_number or "Not provided",
        "user_email": user_email or profile.email or "No email",
        "request_id": str(request.id),
        "submission_date": sent_at.strftime("%Y-%m-%d"),
        "submission_time": sent_at.strftime("%H:%M:%S"),
        "admin_link": f"{settings.SITE_URL.rstrip('/')}/admin.html",
    }


def build_onboarding_params(
    identity: Identity,
    payload: OnboardingCreate,
    sent_at: datetime,
) -> dict[str, str]:
    """Template parameters for the "new business onboarded" team email."""
    return {
        "to_email": settings.TEAM_EMAIL,
        "to_name": settings.TEAM_NAME,
        "from_name": payload.point_of_contact,
        "from_email": identity.email or "",
        "business_name": payload.business_name,
        "business_address": payload.business_address,
        "office_size": str(payload.office_size),
        "point_of_contact": payload.point_of_contact,
        "phone_number": payload.phone_number,
        "user_email": identity.email or "",
        "submission_date": sent_at.strftime("%Y-%m-%d"),
        "submission_time": sent_at.strftime("%H:%M:%S"),
    }


class NotificationDispatcher:
    """
    Best-effort post-commit hook around the email service.

    At most one delivery attempt per call, no retry, no queue. The
    outcome is reported back but never raised: the primary write has
    already succeeded and must not be undone by a failed email.
    """

    def __init__(
        self,
        sender: Sender = email_client.send_template_email,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.sender = sender
        self.clock = clock

    def _dispatch(self, template_id: str, params: dict[str, Any]) -> NotificationOutcome:
        try:
            self.sender(template_id, params)
        except NotificationError as exc:
            logger.error("❌ Notification failed: %s", exc.message)
            return NotificationOutcome.FAILED
        except Exception:
            logger.exception("❌ Notification failed unexpectedly")
            return NotificationOutcome.FAILED

        logger.info("✅ Notification sent (template=%s)", template_id)
        return NotificationOutcome.SENT

    def notify_request_created(
        self,
        request: ServiceRequest,
        profile: Profile,
        user_email: str | None,
    ) -> NotificationOutcome:
        params = build_request_params(request, profile, user_email, self.clock())
        return self._dispatch(settings.EMAILJS_REQUEST_TEMPLATE_ID or "", params)

    def notify_onboarding(
        self,
        identity: Identity,
        payload: OnboardingCreate,
    ) -> NotificationOutcome:
        template_id = settings.EMAILJS_ONBOARDING_TEMPLATE_ID
        if not email_client.is_configured(template_id):
            logger.warning("EmailJS onboarding template not configured. Skipping team notification.")
            return NotificationOutcome.SKIPPED

        params = build_onboarding_params(identity, payload, self.clock())
        return self._dispatch(template_id, params)
