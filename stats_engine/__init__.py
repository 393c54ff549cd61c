"""Basketball team stats engine.

Aggregates per-game box-score rows into player and team lines, ranks them
for leaderboards, evaluates team goals against a metric catalog, and
classifies performance trends.

Example:
    >>> from stats_engine.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.goal_tolerance_pct)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Stats Engine Team"

# Public API exports
from stats_engine.config import Settings, get_settings

__all__ = [
    "Settings",
    "__author__",
    "__version__",
    "get_settings",
]
