"""
Theme Park Wait Summary - Queue-Time Feed Client
Downloads the per-park, per-day queue_times.csv payload.

Transient failures (timeouts, connection errors) are retried through tenacity
only when FEED_FETCH_MAX_ATTEMPTS > 1; by default a failed fetch is reported
once and the caller decides whether to try again.
"""

from datetime import date
from typing import Dict, Optional

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from utils.config import (
    FEED_BASE_URL,
    FEED_REQUEST_TIMEOUT_SECONDS,
    FEED_FETCH_MAX_ATTEMPTS,
    FEED_RETRY_BACKOFF_MULTIPLIER
)
from utils.logger import logger
from utils.timezone import format_feed_date_path

# Park key -> folder in the feed bucket
PARK_FEED_FOLDERS: Dict[str, str] = {
    'disneyland': 'Disneyland_Park_Paris',
    'studios': 'Walt_Disney_Studios_Paris',
}

FEED_FILE_NAME = 'queue_times.csv'


class FeedFetchError(Exception):
    """Raised when the feed cannot be downloaded."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnknownParkError(ValueError):
    """Raised for a park key with no feed folder."""
    pass


def build_feed_url(park: str, feed_date: date, base_url: str = FEED_BASE_URL) -> str:
    """
    Build the feed location for a park and calendar day.

    Args:
        park: Park key ('disneyland' or 'studios')
        feed_date: Day of the feed
        base_url: Bucket base URL

    Returns:
        URL like {base}/Disneyland_Park_Paris/2025/02/02/queue_times.csv

    Raises:
        UnknownParkError: If the park key is not known
    """
    folder = PARK_FEED_FOLDERS.get(park)
    if folder is None:
        raise UnknownParkError(
            f"Unknown park '{park}'. Expected one of: {', '.join(sorted(PARK_FEED_FOLDERS))}"
        )
    return f"{base_url.rstrip('/')}/{folder}/{format_feed_date_path(feed_date)}/{FEED_FILE_NAME}"


class QueueFeedClient:
    """
    HTTP client for the queue-time CSV feed.
    """

    def __init__(self, base_url: str = FEED_BASE_URL, timeout: float = FEED_REQUEST_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': 'ThemeParkWaitSummary/1.0',
            'Accept': 'text/csv, text/plain'
        })

    def feed_url(self, park: str, feed_date: date) -> str:
        return build_feed_url(park, feed_date, base_url=self.base_url)

    @retry(
        stop=stop_after_attempt(FEED_FETCH_MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=FEED_RETRY_BACKOFF_MULTIPLIER, min=1, max=30),
        retry=retry_if_exception_type((requests.Timeout, requests.ConnectionError)),
        reraise=True
    )
    def _get_text(self, url: str) -> str:
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def fetch_feed_text(self, park: str, feed_date: date) -> str:
        """
        Download the raw CSV text for a park and day.

        Args:
            park: Park key
            feed_date: Day of the feed

        Returns:
            CSV payload as text

        Raises:
            UnknownParkError: If the park key is not known
            FeedFetchError: On non-success status, timeout or network error
        """
        url = self.feed_url(park, feed_date)
        logger.debug(f"Fetching queue feed from {url}")

        try:
            return self._get_text(url)
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise FeedFetchError(f"HTTP error! status: {status_code}", status_code=status_code) from e
        except requests.RequestException as e:
            raise FeedFetchError(f"Failed to fetch feed from {url}: {e}") from e

    def close(self):
        """Close the HTTP session."""
        self.session.close()


# Singleton instance
_client: Optional[QueueFeedClient] = None


def get_queue_feed_client() -> QueueFeedClient:
    """
    Get or create singleton feed client.

    Returns:
        QueueFeedClient instance
    """
    global _client
    if _client is None:
        _client = QueueFeedClient()
    return _client
