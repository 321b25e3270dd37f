"""
Theme Park Wait Summary - pytest Configuration and Fixtures

Provides shared test fixtures for:
- Sample queue_times.csv payloads
- Mock feed clients
- Log capture for the application logger
"""

import logging
import pytest
from unittest.mock import Mock

from utils.logger import logger as app_logger


# ============================================================================
# Sample Feed Fixtures
# ============================================================================

FEED_HEADER = "timestamp,ride_name,wait_time,last_update,is_open"


@pytest.fixture
def feed_header():
    return FEED_HEADER


@pytest.fixture
def sample_feed_text():
    """
    A small day of readings for two rides (source timestamps, before +1h).

    Space Mountain: 10 @ 10:00, 40 @ 12:00, 5 @ 16:00 (adjusted)
    Big Thunder Mountain: closed @ 09:30, 25 @ 13:15, 60 @ 20:45 (adjusted)
    """
    return "\n".join([
        FEED_HEADER,
        "2025-02-02T09:00:00,Space Mountain,10,9:00,true",
        "2025-02-02T08:30:00,\"Big Thunder Mountain\",0,8:30,false",
        "2025-02-02T11:00:00,Space Mountain,40,11:00,true",
        "2025-02-02T12:15:00,Big Thunder Mountain,25,12:15,true",
        "2025-02-02T15:00:00,Space Mountain,5,15:00,true",
        "2025-02-02T19:45:00,Big Thunder Mountain,60,19:45,true",
    ])


@pytest.fixture
def header_only_feed_text():
    return FEED_HEADER


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_feed_client():
    """
    Mock QueueFeedClient returning a header-only feed.

    Returns:
        Mock QueueFeedClient
    """
    client = Mock()
    client.feed_url = Mock(
        side_effect=lambda park, feed_date: f"https://feeds.example.com/{park}/{feed_date.isoformat()}/queue_times.csv"
    )
    client.fetch_feed_text = Mock(return_value=FEED_HEADER)
    return client


@pytest.fixture
def app_log_records(caplog):
    """
    Capture records from the application logger.

    The application logger does not propagate to root, so caplog's handler
    is attached to it directly for the duration of the test.
    """
    app_logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=app_logger.name)
    yield caplog
    app_logger.removeHandler(caplog.handler)
