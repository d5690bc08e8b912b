"""Business wall clock."""

from datetime import datetime
from zoneinfo import ZoneInfo

from ridebook.config import get_settings


def local_now() -> datetime:
    """Current wall-clock time in the business timezone, as a naive datetime.

    Dates and pickup times are stored without a timezone, so comparisons
    against "now" must happen in the same naive local frame.
    """
    settings = get_settings()
    return datetime.now(ZoneInfo(settings.business_timezone)).replace(tzinfo=None)
