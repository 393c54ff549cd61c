"""Ranking comparator for stat tables.

Example:
    >>> from stats_engine.ranking import SortDirection, sort_lines
    >>> ranked = sort_lines(table, "efficiency", SortDirection.DESCENDING)
"""

from __future__ import annotations

from stats_engine.ranking.comparator import (
    NAME_FIELD,
    SortDirection,
    compare,
    sort_lines,
)

__all__ = [
    "NAME_FIELD",
    "SortDirection",
    "compare",
    "sort_lines",
]
