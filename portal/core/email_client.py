# portal/core/email_client.py
"""
Email client for the portal.

Responsibilities:
  - Read EmailJS configuration from settings.
  - Provide a single send_template_email(...) function for services to use.

EmailJS renders and delivers the message from a template stored in the
EmailJS dashboard; we only send the template id plus a flat key/value
parameter map. Typical .env configuration:

    EMAILJS_SERVICE_ID=service_xxxxxxx
    EMAILJS_USER_ID=<public key>
    EMAILJS_REQUEST_TEMPLATE_ID=template_xxxxxxx
    EMAILJS_ONBOARDING_TEMPLATE_ID=template_yyyyyyy
"""

from __future__ import annotations

from typing import Any

import httpx

from portal.core.config import get_settings
from portal.core.errors import NotificationError

settings = get_settings()

# Human readable reasons for the statuses EmailJS commonly answers with
_STATUS_REASONS: dict[int, str] = {
    400: "Invalid template parameters or template not found",
    401: "Authentication failed - check your EmailJS keys",
    404: "Template or service not found",
    429: "Rate limit exceeded",
}


def is_configured(template_id: str | None) -> bool:
    """True when EmailJS credentials and the given template are all set."""
    return bool(settings.EMAILJS_SERVICE_ID and settings.EMAILJS_USER_ID and template_id)


def describe_failure(status_code: int | None, text: str | None) -> str:
    """Build the log/banner text for a failed send."""
    reason = _STATUS_REASONS.get(status_code) if status_code is not None else None
    return "Failed to send notification: " + (reason or text or "Unknown error")


def send_template_email(
    template_id: str,
    template_params: dict[str, Any],
    http_client: httpx.Client | None = None,
) -> None:
    """
    Send one templated email through the EmailJS REST API.

    Parameters
    ----------
    template_id:
        EmailJS template to render.
    template_params:
        Flat key/value map consumed by the template.
    http_client:
        Optional pre-built client (tests pass one backed by MockTransport).

    Raises
    ------
    NotificationError:
        If configuration is missing, the transport fails, or EmailJS
        answers with a non-2xx status.
    """
    if not is_configured(template_id):
        raise NotificationError(
            "EmailJS is not configured correctly. "
            "Please set EMAILJS_SERVICE_ID, EMAILJS_USER_ID and the template id in .env."
        )

    body = {
        "service_id": settings.EMAILJS_SERVICE_ID,
        "template_id": template_id,
        "user_id": settings.EMAILJS_USER_ID,
        "template_params": template_params,
    }

    client = http_client or httpx.Client()
    try:
        response = client.post(settings.EMAILJS_API_URL, json=body)
    except httpx.HTTPError as exc:
        raise NotificationError(describe_failure(None, str(exc))) from exc
    finally:
        if http_client is None:
            client.close()

    if response.is_error:
        raise NotificationError(
            describe_failure(response.status_code, response.text),
            status_code=response.status_code,
        )
