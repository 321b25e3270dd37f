"""
Theme Park Wait Summary - Wait Categories
Buckets a ride's current wait into the dashboard's display categories.
"""

from enum import Enum


class WaitCategory(str, Enum):
    SHORT = 'Short'
    MEDIUM = 'Medium'
    LONG = 'Long'
    VERY_LONG = 'Very Long'
    CLOSED = 'Closed'


# Upper bounds (inclusive, minutes); anything above LONG is VERY_LONG
SHORT_WAIT_MAX = 15
MEDIUM_WAIT_MAX = 30
LONG_WAIT_MAX = 45


def categorize_wait_time(wait_time: int, is_open: bool) -> WaitCategory:
    """
    Categorize a wait time for display.

    Logic:
    - closed ride → CLOSED, whatever the wait
    - wait <= 15 → SHORT
    - wait <= 30 → MEDIUM
    - wait <= 45 → LONG
    - otherwise → VERY_LONG

    Examples:
        >>> categorize_wait_time(10, True)
        <WaitCategory.SHORT: 'Short'>
        >>> categorize_wait_time(60, False)
        <WaitCategory.CLOSED: 'Closed'>
    """
    if not is_open:
        return WaitCategory.CLOSED
    if wait_time <= SHORT_WAIT_MAX:
        return WaitCategory.SHORT
    if wait_time <= MEDIUM_WAIT_MAX:
        return WaitCategory.MEDIUM
    if wait_time <= LONG_WAIT_MAX:
        return WaitCategory.LONG
    return WaitCategory.VERY_LONG
