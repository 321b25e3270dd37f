"""
Theme Park Wait Summary - Importer Module
Parsing of the per-day queue_times.csv feed.
"""

from importer.feed_parser import (
    Reading,
    split_feed_line,
    split_feed_rows,
    normalize_row,
    parse_feed
)

__all__ = [
    "Reading",
    "split_feed_line",
    "split_feed_rows",
    "normalize_row",
    "parse_feed",
]
