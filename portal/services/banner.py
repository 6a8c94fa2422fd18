# portal/services/banner.py
from portal.core.config import get_settings
from portal.schemas.banner import Banner

settings = get_settings()


def success(message: str) -> Banner:
    return Banner(
        kind="success",
        message=message,
        dismiss_after_seconds=settings.SUCCESS_BANNER_SECONDS,
    )


def error(message: str) -> Banner:
    return Banner(kind="error", message=message)
