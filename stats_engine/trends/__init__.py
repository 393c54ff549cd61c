"""Performance trend classification.

Example:
    >>> from stats_engine.trends import classify_trend
    >>> classify_trend([0, 5]).change_pct
    100
"""

from __future__ import annotations

from stats_engine.trends.classifier import (
    DECLINE_PCT,
    IMPROVEMENT_PCT,
    RAPID_IMPROVEMENT_PCT,
    Trend,
    TrendResult,
    classify_change,
    classify_player_trends,
    classify_trend,
    percent_change,
    series_for_player,
)

__all__ = [
    "DECLINE_PCT",
    "IMPROVEMENT_PCT",
    "RAPID_IMPROVEMENT_PCT",
    "Trend",
    "TrendResult",
    "classify_change",
    "classify_player_trends",
    "classify_trend",
    "percent_change",
    "series_for_player",
]
