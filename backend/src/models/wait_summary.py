"""
Theme Park Wait Summary - Summary Models
Immutable per-ride views produced by one aggregation pass over a feed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class LatestEntry:
    """
    Most recent reading seen for a ride.

    timestamp is None only when every reading for the ride had an
    unparseable timestamp.
    """
    ride_name: str
    wait_time: int
    last_update: str
    is_open: bool
    timestamp: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "ride_name": self.ride_name,
            "wait_time": self.wait_time,
            "last_update": self.last_update,
            "is_open": self.is_open,
            "timestamp": _isoformat(self.timestamp)
        }


@dataclass(frozen=True)
class PeakEntry:
    """Highest open wait of the day and when it was first reached."""
    ride_name: str
    max_wait_time: int
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "ride_name": self.ride_name,
            "max_wait_time": self.max_wait_time,
            "timestamp": _isoformat(self.timestamp)
        }


@dataclass(frozen=True)
class TroughEntry:
    """Lowest open wait between 10:00 and 18:00 and when it was first reached."""
    ride_name: str
    min_wait_time: int
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "ride_name": self.ride_name,
            "min_wait_time": self.min_wait_time,
            "timestamp": _isoformat(self.timestamp)
        }


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One chart point; wait_time is None while the ride is closed."""
    time: str  # "HH:MM", 24-hour
    wait_time: Optional[int]
    is_open: bool

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "wait_time": self.wait_time,
            "is_open": self.is_open
        }


@dataclass(frozen=True)
class WaitTimeSummary:
    """
    Result of aggregating one feed payload.

    Attributes:
        current: Latest entry per ride, in order of first appearance
        peaks: Peak entry per ride that had at least one open reading
        troughs: Trough entry per ride open at least once in the trough window
        time_series: Ride key -> chronologically sorted points
        latest_timestamp: Newest timestamp across all latest entries
    """
    current: Tuple[LatestEntry, ...] = ()
    peaks: Tuple[PeakEntry, ...] = ()
    troughs: Tuple[TroughEntry, ...] = ()
    time_series: Mapping[str, Tuple[TimeSeriesPoint, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    latest_timestamp: Optional[datetime] = None

    @classmethod
    def empty(cls) -> "WaitTimeSummary":
        return cls()

    @property
    def ride_names(self) -> Tuple[str, ...]:
        return tuple(entry.ride_name for entry in self.current)

    @property
    def is_empty(self) -> bool:
        return not self.current

    def to_dict(self) -> Dict:
        """
        Convert summary to a JSON-friendly dictionary.

        Returns:
            Dictionary with current_data, max_data, min_data, time_data and
            latest_timestamp keys
        """
        return {
            "current_data": [entry.to_dict() for entry in self.current],
            "max_data": [entry.to_dict() for entry in self.peaks],
            "min_data": [entry.to_dict() for entry in self.troughs],
            "time_data": {
                ride_key: [point.to_dict() for point in points]
                for ride_key, points in self.time_series.items()
            },
            "latest_timestamp": _isoformat(self.latest_timestamp)
        }
