"""Time utilities (configured local timezone)."""

from datetime import datetime
from zoneinfo import ZoneInfo

from dealcoach.config import settings


def local_zone() -> ZoneInfo:
    """Timezone the dealership's calendar days are counted in."""
    return ZoneInfo(settings.TIMEZONE)


def now_local_naive() -> datetime:
    """
    Current wall-clock time in the configured timezone, returned naive.

    Delivery dates are stored timezone-naive, so "today" must be too.
    """
    return datetime.now(local_zone()).replace(tzinfo=None)


def parse_delivery_date(value: str) -> datetime:
    """
    Parse an ISO delivery date ("2026-10-19" or "2026-10-19T15:30:00Z").

    Offsets are dropped; the calendar fields are kept as written.
    Raises ValueError for malformed input.
    """
    return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
