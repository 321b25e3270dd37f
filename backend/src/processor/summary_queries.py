"""
Theme Park Wait Summary - Summary Queries
Stateless lookups over an assembled WaitTimeSummary.

The dashboard's search box and attraction panel used to read these from UI
state; here the selection and search term are plain arguments.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from models.wait_summary import (
    LatestEntry,
    PeakEntry,
    TroughEntry,
    TimeSeriesPoint,
    WaitTimeSummary
)
from processor.wait_categories import WaitCategory, categorize_wait_time


@dataclass(frozen=True)
class RideDetails:
    """Everything the attraction panel shows for one ride."""
    latest: LatestEntry
    peak: Optional[PeakEntry]
    trough: Optional[TroughEntry]
    time_series: Tuple[TimeSeriesPoint, ...]

    @property
    def category(self) -> WaitCategory:
        return categorize_wait_time(self.latest.wait_time, self.latest.is_open)

    def to_dict(self) -> dict:
        return {
            "ride_name": self.latest.ride_name,
            "current": self.latest.to_dict(),
            "peak": self.peak.to_dict() if self.peak else None,
            "trough": self.trough.to_dict() if self.trough else None,
            "time_series": [point.to_dict() for point in self.time_series],
            "category": self.category.value
        }


def filter_ride_names(summary: WaitTimeSummary, search_term: str = '') -> List[str]:
    """
    Ride names containing the search term, case-insensitively, sorted.

    An empty term matches every ride.
    """
    needle = (search_term or '').lower()
    return sorted(
        entry.ride_name for entry in summary.current
        if needle in entry.ride_name.lower()
    )


def find_latest(summary: WaitTimeSummary, ride_key: str) -> Optional[LatestEntry]:
    return next((e for e in summary.current if e.ride_name == ride_key), None)


def find_peak(summary: WaitTimeSummary, ride_key: str) -> Optional[PeakEntry]:
    return next((e for e in summary.peaks if e.ride_name == ride_key), None)


def find_trough(summary: WaitTimeSummary, ride_key: str) -> Optional[TroughEntry]:
    return next((e for e in summary.troughs if e.ride_name == ride_key), None)


def get_time_series(summary: WaitTimeSummary, ride_key: str) -> Tuple[TimeSeriesPoint, ...]:
    return summary.time_series.get(ride_key, ())


def get_ride_details(summary: WaitTimeSummary, ride_key: str) -> Optional[RideDetails]:
    """
    Collect the panel data for a selected ride.

    Args:
        summary: Summary to query
        ride_key: Exact (trimmed, case-sensitive) ride name

    Returns:
        RideDetails, or None if the ride is not in the summary
    """
    latest = find_latest(summary, ride_key)
    if latest is None:
        return None

    return RideDetails(
        latest=latest,
        peak=find_peak(summary, ride_key),
        trough=find_trough(summary, ride_key),
        time_series=get_time_series(summary, ride_key)
    )


def categorize_rides(summary: WaitTimeSummary) -> Dict[WaitCategory, List[LatestEntry]]:
    """
    Group latest entries by wait category.

    Every category is present (possibly empty), in display order
    Short, Medium, Long, Very Long, Closed; entries keep summary order.
    """
    categories: Dict[WaitCategory, List[LatestEntry]] = {
        category: [] for category in WaitCategory
    }
    for entry in summary.current:
        categories[categorize_wait_time(entry.wait_time, entry.is_open)].append(entry)
    return categories
