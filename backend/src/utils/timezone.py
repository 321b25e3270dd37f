"""
Theme Park Wait Summary - Time Utilities
Fixed feed offset, clock labels and feed date paths.

The feed timestamps are one hour behind the parks' wall clock. The correction
is a fixed +1 hour offset, not a timezone lookup; the
source timezone of the feed is not documented, so no DST handling is applied.
"""

from datetime import datetime, date, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

# Paris parks - used only to decide what "today" means for the feed location
PARK_TZ = ZoneInfo('Europe/Paris')

# Fixed correction applied to every feed timestamp
FEED_TIME_OFFSET = timedelta(hours=1)

CLOCK_LABEL_FORMAT = '%H:%M'

DATE_MODE_TODAY = 'today'
DATE_MODE_HISTORICAL = 'historical'


class InvalidFeedDateError(ValueError):
    """Raised when a historical date or date mode cannot be understood."""
    pass


def get_today_park() -> date:
    """
    Get current calendar date at the parks.

    Returns:
        date: Current date in Europe/Paris
    """
    return datetime.now(PARK_TZ).date()


def apply_feed_offset(value: datetime) -> datetime:
    """Shift a raw feed timestamp onto the parks' wall clock."""
    return value + FEED_TIME_OFFSET


def format_clock_label(value: datetime) -> str:
    """
    Format a timestamp as a zero-padded 24-hour clock label.

    Example:
        >>> format_clock_label(datetime(2025, 2, 2, 9, 5))
        '09:05'
    """
    return value.strftime(CLOCK_LABEL_FORMAT)


def parse_clock_label(label: str) -> time:
    """Parse an "HH:MM" label back into a time of day."""
    return datetime.strptime(label, CLOCK_LABEL_FORMAT).time()


def format_feed_date_path(feed_date: date) -> str:
    """
    Format a date as the slash-separated path segment used by the feed bucket.

    Example:
        >>> format_feed_date_path(date(2025, 2, 2))
        '2025/02/02'
    """
    return f"{feed_date.year:04d}/{feed_date.month:02d}/{feed_date.day:02d}"


def parse_historical_date(value: str) -> date:
    """
    Parse an operator-chosen "YYYY-MM-DD" date.

    Raises:
        InvalidFeedDateError: If the value is not a valid calendar date
    """
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidFeedDateError(f"Invalid historical date '{value}': {e}")


def resolve_feed_date(
    date_mode: str = DATE_MODE_TODAY,
    historical_date: Optional[str] = None,
    today: Optional[date] = None
) -> date:
    """
    Decide which day's feed to load.

    Args:
        date_mode: 'today' or 'historical'
        historical_date: "YYYY-MM-DD" string, used in historical mode
        today: Override for the current park date (tests, replays)

    Returns:
        The feed date. Historical mode without a date falls back to today.

    Raises:
        InvalidFeedDateError: For an unknown mode or a malformed date
    """
    if today is None:
        today = get_today_park()

    if date_mode == DATE_MODE_TODAY:
        return today
    if date_mode != DATE_MODE_HISTORICAL:
        raise InvalidFeedDateError(f"Unknown date mode: {date_mode}")

    if not historical_date:
        return today
    return parse_historical_date(historical_date)


def format_update_label(value: Optional[datetime]) -> str:
    """Render the "last updated" clock label, or 'Unknown' with no data."""
    if value is None:
        return 'Unknown'
    return format_clock_label(value)
