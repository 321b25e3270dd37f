"""
Theme Park Wait Summary - Park Dashboard Service
Fetches a park's feed for the chosen day and aggregates it into a fresh
snapshot for display.

Every load replaces the previous snapshot wholesale; nothing is merged
across fetches.
"""

import time
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from collector.queue_feed_client import FeedFetchError, QueueFeedClient, get_queue_feed_client
from models.wait_summary import WaitTimeSummary
from processor.wait_time_aggregator import aggregate_wait_times
from utils.logger import (
    log_feed_fetch_start,
    log_feed_fetch_complete,
    log_feed_fetch_error,
    log_aggregation_complete
)
from utils.timezone import (
    DATE_MODE_TODAY,
    DATE_MODE_HISTORICAL,
    format_update_label,
    resolve_feed_date
)


@dataclass(frozen=True)
class DashboardSnapshot:
    """
    Result of one dashboard load.

    error is a human-readable message when the feed could not be fetched;
    summary is then empty. date_mode records how feed_date was chosen so a
    refresh of a "today" snapshot follows the park calendar.
    """
    park: str
    feed_date: date
    feed_url: str
    date_mode: str = DATE_MODE_HISTORICAL
    summary: WaitTimeSummary = field(default_factory=WaitTimeSummary.empty)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def last_updated(self) -> str:
        return format_update_label(self.summary.latest_timestamp)

    def to_dict(self) -> dict:
        return {
            "park": self.park,
            "feed_date": self.feed_date.isoformat(),
            "date_mode": self.date_mode,
            "feed_url": self.feed_url,
            "last_updated": self.last_updated,
            "error": self.error,
            "summary": self.summary.to_dict()
        }


class ParkDashboardService:
    """
    Loads per-park wait summaries.

    Transport failures are reported on the snapshot rather than raised, so a
    caller can show the message and offer a manual refresh. Location errors
    (unknown park, malformed historical date) still raise.
    """

    def __init__(self, client: Optional[QueueFeedClient] = None):
        self.client = client or get_queue_feed_client()

    def load(
        self,
        park: str,
        date_mode: str = DATE_MODE_TODAY,
        historical_date: Optional[str] = None,
        today: Optional[date] = None
    ) -> DashboardSnapshot:
        """
        Fetch and aggregate one park's feed.

        Args:
            park: Park key ('disneyland' or 'studios')
            date_mode: 'today' or 'historical'
            historical_date: "YYYY-MM-DD", used in historical mode
            today: Override for the current park date

        Returns:
            DashboardSnapshot with a fresh summary, or an error message
        """
        feed_date = resolve_feed_date(date_mode, historical_date, today=today)
        feed_url = self.client.feed_url(park, feed_date)

        log_feed_fetch_start(park, feed_url)
        started = time.monotonic()
        try:
            csv_text = self.client.fetch_feed_text(park, feed_date)
        except FeedFetchError as e:
            log_feed_fetch_error(e, park=park)
            return DashboardSnapshot(park=park, feed_date=feed_date, feed_url=feed_url,
                                     date_mode=date_mode, error=str(e))

        log_feed_fetch_complete(
            park,
            duration_seconds=round(time.monotonic() - started, 3),
            bytes_received=len(csv_text.encode('utf-8'))
        )

        summary = aggregate_wait_times(csv_text)
        log_aggregation_complete(
            park,
            rides_tracked=len(summary.current),
            latest_timestamp=_iso_or_none(summary.latest_timestamp)
        )

        return DashboardSnapshot(park=park, feed_date=feed_date, feed_url=feed_url,
                                 date_mode=date_mode, summary=summary)

    def refresh(self, snapshot: DashboardSnapshot, today: Optional[date] = None) -> DashboardSnapshot:
        """
        Re-run the load behind an earlier snapshot.

        A 'today' snapshot resolves the park date again, so a refresh after
        midnight in Paris loads the new day's feed. Historical snapshots
        re-fetch the same feed_date.
        """
        if snapshot.date_mode == DATE_MODE_TODAY:
            return self.load(snapshot.park, date_mode=DATE_MODE_TODAY, today=today)
        return self.load(
            snapshot.park,
            date_mode=DATE_MODE_HISTORICAL,
            historical_date=snapshot.feed_date.isoformat()
        )


def _iso_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
