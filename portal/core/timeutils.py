# portal/core/timeutils.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current time; the default clock for timestamps."""
    return datetime.now(timezone.utc)
