"""
Queue-Time Feed Parser
Splits the per-day queue_times.csv feed into rows and normalizes each row
into a typed Reading.

Parsing is lenient: a bad wait time becomes 0, a bad
open flag means closed, and a bad timestamp becomes the invalid-instant
marker (None). No row ever raises.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from utils.timezone import apply_feed_offset

# Comma followed by an even number of quotes up to end of line,
# i.e. a comma that is not inside a quoted span
_FIELD_SPLIT_RE = re.compile(r',(?=(?:(?:[^"]*"){2})*[^"]*$)')

# Only LF and CRLF end a row; other line separators stay inside fields
_LINE_SPLIT_RE = re.compile(r'\r?\n')

_LEADING_INT_RE = re.compile(r'\s*([+-]?\d+)')

FEED_FIELD_COUNT = 5


@dataclass(frozen=True)
class Reading:
    """
    One normalized row of the feed.

    adjusted_timestamp is None when the source timestamp could not be parsed;
    such a reading sorts as the oldest possible value.
    """
    ride_key: str
    wait_minutes: int
    last_update: str
    is_open: bool
    adjusted_timestamp: Optional[datetime]

    @property
    def hour_of_day(self) -> Optional[int]:
        """Wall-clock hour (0-23) of the adjusted timestamp."""
        if self.adjusted_timestamp is None:
            return None
        return self.adjusted_timestamp.hour

    @property
    def has_valid_timestamp(self) -> bool:
        return self.adjusted_timestamp is not None

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "Reading":
        """
        Build a Reading from a (timestamp, ride_name, wait_time,
        last_update, is_open) row.

        Short rows are padded with empty fields and extra fields ignored.
        """
        fields = list(row[:FEED_FIELD_COUNT])
        fields += [''] * (FEED_FIELD_COUNT - len(fields))
        timestamp, ride_name, wait_time, last_update, is_open = fields

        return cls(
            ride_key=ride_name.strip(),
            wait_minutes=_parse_wait_minutes(wait_time),
            last_update=last_update,
            is_open=_parse_open_flag(is_open),
            adjusted_timestamp=_adjust_feed_timestamp(timestamp)
        )


def _adjust_feed_timestamp(value: str) -> Optional[datetime]:
    """Parse and shift a feed timestamp; None if either step fails."""
    parsed = _parse_feed_timestamp(value)
    if parsed is None:
        return None
    try:
        return apply_feed_offset(parsed)
    except OverflowError:
        # 9999-12-31T23:xx has no representable next hour
        return None


def _parse_wait_minutes(value: str) -> int:
    """
    Parse the leading integer of a wait time field.

    Examples:
        >>> _parse_wait_minutes("45")
        45
        >>> _parse_wait_minutes("12.5")
        12
        >>> _parse_wait_minutes("abc")
        0
        >>> _parse_wait_minutes("-5")
        0
    """
    match = _LEADING_INT_RE.match(value or '')
    if not match:
        return 0
    return max(int(match.group(1)), 0)


def _parse_open_flag(value: str) -> bool:
    return (value or '').strip().lower() == 'true'


def _parse_feed_timestamp(value: str) -> Optional[datetime]:
    """
    Parse a feed timestamp into a naive wall-clock datetime.

    Offset-aware values are converted to UTC first so every reading stays
    comparable with the naive ones.

    Args:
        value: Timestamp string from the feed

    Returns:
        Parsed datetime or None
    """
    value = (value or '').strip()
    if not value:
        return None

    parsed = None
    formats = [
        "%Y/%m/%d %H:%M:%S",  # 2025/02/02 09:00:00
        "%Y/%m/%d %H:%M",     # 2025/02/02 09:00
    ]
    for fmt in formats:
        try:
            parsed = datetime.strptime(value, fmt)
            break
        except ValueError:
            continue

    if parsed is None:
        try:
            # Covers 2025-02-02T09:00:00, 2025-02-02 09:00:00.123, ...+01:00, ...Z
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            return None
    return parsed


def split_feed_line(line: str) -> List[str]:
    """
    Split one CSV line on commas outside double-quoted spans.

    Each field is stripped of surrounding whitespace and of one enclosing
    pair of double quotes.
    """
    fields = []
    for field in _FIELD_SPLIT_RE.split(line):
        field = field.strip()
        if len(field) >= 2 and field.startswith('"') and field.endswith('"'):
            field = field[1:-1]
        fields.append(field)
    return fields


def split_feed_rows(csv_text: str) -> List[List[str]]:
    """
    Split raw feed text into data rows, discarding the header line.

    Args:
        csv_text: Full CSV payload

    Returns:
        List of field lists, one per non-blank data line
    """
    lines = _LINE_SPLIT_RE.split((csv_text or '').strip())
    return [split_feed_line(line) for line in lines[1:] if line.strip()]


def normalize_row(row: Sequence[str]) -> Reading:
    """Normalize one split row into a Reading."""
    return Reading.from_row(row)


def parse_feed(csv_text: str) -> List[Reading]:
    """Split and normalize a whole feed, preserving source row order."""
    return [normalize_row(row) for row in split_feed_rows(csv_text)]
