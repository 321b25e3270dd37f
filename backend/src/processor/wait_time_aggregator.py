"""
Theme Park Wait Summary - Wait Time Aggregator
Folds the readings of one feed payload into latest, peak, trough and
intraday time-series views per ride.

Windows (wall-clock hour of the adjusted timestamp):
- Display window [8, 21] inclusive: time-series points are kept
- Trough window [10, 18): open readings count towards the daily minimum

All comparisons are strict, so on ties the first-seen reading wins.
"""

from datetime import datetime
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Sequence

from importer.feed_parser import Reading, parse_feed
from models.wait_summary import (
    LatestEntry,
    PeakEntry,
    TroughEntry,
    TimeSeriesPoint,
    WaitTimeSummary
)
from utils.timezone import format_clock_label, parse_clock_label

DISPLAY_WINDOW_START_HOUR = 8
DISPLAY_WINDOW_END_HOUR = 21  # inclusive

TROUGH_WINDOW_START_HOUR = 10
TROUGH_WINDOW_END_HOUR = 18  # exclusive


def _timestamp_key(value: Optional[datetime]) -> datetime:
    # Invalid timestamps sort as the oldest possible value
    return value if value is not None else datetime.min


def in_display_window(hour: Optional[int]) -> bool:
    return hour is not None and DISPLAY_WINDOW_START_HOUR <= hour <= DISPLAY_WINDOW_END_HOUR


def in_trough_window(hour: Optional[int]) -> bool:
    return hour is not None and TROUGH_WINDOW_START_HOUR <= hour < TROUGH_WINDOW_END_HOUR


def sort_time_series(points: Iterable[TimeSeriesPoint]) -> List[TimeSeriesPoint]:
    """
    Order points by time of day.

    The sort is stable: points sharing a clock label keep their fold order.
    """
    return sorted(points, key=lambda point: parse_clock_label(point.time))


class WaitTimeAggregator:
    """
    Single-pass accumulator over feed readings.

    Each instance owns fresh accumulators; build_summary() returns an
    immutable snapshot, so the aggregator may keep folding afterwards
    without affecting summaries already handed out.
    """

    def __init__(self):
        self._latest: Dict[str, LatestEntry] = {}
        self._peaks: Dict[str, PeakEntry] = {}
        self._troughs: Dict[str, TroughEntry] = {}
        self._series: Dict[str, List[TimeSeriesPoint]] = {}
        self.readings_processed = 0

    def add(self, reading: Reading) -> None:
        """Fold one reading into all four accumulators."""
        self.readings_processed += 1
        self._update_latest(reading)
        self._update_series(reading)
        self._update_peak(reading)
        self._update_trough(reading)

    def add_all(self, readings: Iterable[Reading]) -> "WaitTimeAggregator":
        for reading in readings:
            self.add(reading)
        return self

    def _update_latest(self, reading: Reading) -> None:
        existing = self._latest.get(reading.ride_key)
        if existing is not None and (
            _timestamp_key(reading.adjusted_timestamp) <= _timestamp_key(existing.timestamp)
        ):
            return

        self._latest[reading.ride_key] = LatestEntry(
            ride_name=reading.ride_key,
            wait_time=reading.wait_minutes,
            last_update=reading.last_update,
            is_open=reading.is_open,
            timestamp=reading.adjusted_timestamp
        )

    def _update_series(self, reading: Reading) -> None:
        points = self._series.setdefault(reading.ride_key, [])
        if not in_display_window(reading.hour_of_day):
            return

        points.append(TimeSeriesPoint(
            time=format_clock_label(reading.adjusted_timestamp),
            wait_time=reading.wait_minutes if reading.is_open else None,
            is_open=reading.is_open
        ))

    def _update_peak(self, reading: Reading) -> None:
        if not reading.is_open or not reading.has_valid_timestamp:
            return

        existing = self._peaks.get(reading.ride_key)
        if existing is None or reading.wait_minutes > existing.max_wait_time:
            self._peaks[reading.ride_key] = PeakEntry(
                ride_name=reading.ride_key,
                max_wait_time=reading.wait_minutes,
                timestamp=reading.adjusted_timestamp
            )

    def _update_trough(self, reading: Reading) -> None:
        if not reading.is_open or not in_trough_window(reading.hour_of_day):
            return

        existing = self._troughs.get(reading.ride_key)
        if existing is None or reading.wait_minutes < existing.min_wait_time:
            self._troughs[reading.ride_key] = TroughEntry(
                ride_name=reading.ride_key,
                min_wait_time=reading.wait_minutes,
                timestamp=reading.adjusted_timestamp
            )

    def build_summary(self) -> WaitTimeSummary:
        """
        Assemble the immutable summary from the current accumulators.

        Returns:
            WaitTimeSummary with sorted time series and the newest valid
            timestamp across all latest entries (None if there is none)
        """
        valid_timestamps = [
            entry.timestamp for entry in self._latest.values()
            if entry.timestamp is not None
        ]

        return WaitTimeSummary(
            current=tuple(self._latest.values()),
            peaks=tuple(self._peaks.values()),
            troughs=tuple(self._troughs.values()),
            time_series=MappingProxyType({
                ride_key: tuple(sort_time_series(points))
                for ride_key, points in self._series.items()
            }),
            latest_timestamp=max(valid_timestamps) if valid_timestamps else None
        )


def aggregate_readings(readings: Sequence[Reading]) -> WaitTimeSummary:
    """Aggregate already-normalized readings in the given order."""
    return WaitTimeAggregator().add_all(readings).build_summary()


def aggregate_wait_times(csv_text: str) -> WaitTimeSummary:
    """
    Turn one queue_times.csv payload into a WaitTimeSummary.

    Pure function of its input: no clock access, no shared state, never
    raises on malformed rows.

    Args:
        csv_text: Raw CSV text, header line first

    Returns:
        WaitTimeSummary (empty when the payload has no data rows)

    Example:
        >>> summary = aggregate_wait_times(
        ...     "ts,name,wait,upd,open\\n"
        ...     "2025-02-02T11:00:00,Space Mountain,40,11:00,true"
        ... )
        >>> summary.peaks[0].max_wait_time
        40
    """
    return aggregate_readings(parse_feed(csv_text))
