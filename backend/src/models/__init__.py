# Theme Park Wait Summary - Models Package

from .wait_summary import (
    LatestEntry,
    PeakEntry,
    TroughEntry,
    TimeSeriesPoint,
    WaitTimeSummary
)

__all__ = [
    'LatestEntry',
    'PeakEntry',
    'TroughEntry',
    'TimeSeriesPoint',
    'WaitTimeSummary',
]
