# portal/core/errors.py
"""
Error taxonomy shared by adapters, flows and routers.

  - ValidationError:    client-side check failed, no backend call was made
  - ConflictError:      duplicate profile (unique user_id)
  - NotFoundError:      "no rows"; a normal branch wherever it means
                        "onboarding incomplete"
  - BackendError:       any other database/auth failure, message verbatim
  - NotificationError:  email delivery failed; always swallowed upstream
  - AuthenticationError: no identity where one is required
"""

from postgrest.exceptions import APIError

# PostgREST code for `.single()` matching zero rows
NO_ROWS_CODE = "PGRST116"
# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class PortalError(Exception):
    """Base class for every error surfaced to the banner."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    pass


class ConflictError(PortalError):
    pass


class NotFoundError(PortalError):
    pass


class BackendError(PortalError):
    pass


class NotificationError(PortalError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(PortalError):
    pass


def translate_api_error(exc: APIError) -> PortalError:
    """
    Map a PostgREST APIError onto the taxonomy.

    The backend message is kept verbatim so the banner can show it.
    """
    message = exc.message or str(exc)
    if exc.code == NO_ROWS_CODE:
        return NotFoundError(message)
    if exc.code == UNIQUE_VIOLATION_CODE:
        return ConflictError(message)
    return BackendError(message)
