"""Trend classification of a player's stat across games.

The trend compares the first and last value of a chronological series. It
is deliberately simple so it can be explained in one sentence: "points are
up 40% since the first game in this window".

Classification thresholds on change_pct:
    > 25   rapidly_improving
    > 5    improving
    < -25  declining
    else   steady

Example:
    >>> classify_trend([10, 14])
    TrendResult(trend=<Trend.RAPIDLY_IMPROVING: 'rapidly_improving'>, change_pct=40)
    >>> classify_trend([20, 14]).trend
    <Trend.DECLINING: 'declining'>
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from stats_engine.aggregate.players import id_sort_key
from stats_engine.aggregate.rows import COUNTING_STATS, StatRow
from stats_engine.numeric import is_number, round0
from stats_engine.types import GameId, InvalidInputError, PlayerId

# =============================================================================
# Constants
# =============================================================================

RAPID_IMPROVEMENT_PCT: int = 25
IMPROVEMENT_PCT: int = 5
DECLINE_PCT: int = -25
MIN_SERIES_LENGTH: int = 2


# =============================================================================
# Enums / Data Classes
# =============================================================================


class Trend(Enum):
    """Qualitative performance trend."""

    RAPIDLY_IMPROVING = "rapidly_improving"
    IMPROVING = "improving"
    STEADY = "steady"
    DECLINING = "declining"


@dataclass(frozen=True)
class TrendResult:
    """Trend label and the whole-number percent change behind it."""

    trend: Trend
    change_pct: int

    def to_dict(self) -> dict[str, object]:
        return {"trend": self.trend.value, "change_pct": self.change_pct}


STEADY_RESULT = TrendResult(Trend.STEADY, 0)


# =============================================================================
# Functions
# =============================================================================


def percent_change(first: float, last: float) -> int:
    """Whole-number percent change from ``first`` to ``last``.

    A zero starting point has no ratio: growth from 0 reads as +100%,
    a drop below 0 as -100%, and 0 to 0 as no change. Negative starting
    values are measured against their magnitude.

    Raises:
        InvalidInputError: If the ratio overflows to infinity.
    """
    if first == 0:
        if last > 0:
            return 100
        if last < 0:
            return -100
        return 0
    change = (last - first) / abs(first) * 100
    if not math.isfinite(change):
        raise InvalidInputError(f"Change from {first:g} to {last:g} is out of range")
    return int(round0(change))


def classify_change(change_pct: float) -> Trend:
    """Map a percent change onto a trend label."""
    if change_pct > RAPID_IMPROVEMENT_PCT:
        return Trend.RAPIDLY_IMPROVING
    if change_pct > IMPROVEMENT_PCT:
        return Trend.IMPROVING
    if change_pct < DECLINE_PCT:
        return Trend.DECLINING
    return Trend.STEADY


def classify_trend(series: Sequence[float]) -> TrendResult:
    """Classify a chronological series of one metric for one player.

    Args:
        series: Values ordered oldest game first.

    Returns:
        TrendResult; steady with 0% for fewer than two values.

    Raises:
        InvalidInputError: If any value is not a finite number.
    """
    for value in series:
        if not is_number(value):
            raise InvalidInputError(f"Trend series values must be numbers, got {value!r}")
    if len(series) < MIN_SERIES_LENGTH:
        return STEADY_RESULT

    change = percent_change(series[0], series[-1])
    return TrendResult(classify_change(change), change)


def series_for_player(
    rows: Iterable[StatRow],
    player_id: PlayerId,
    stat: str,
    game_order: Sequence[GameId],
) -> list[float]:
    """Build a player's chronological series for one counting stat.

    Games the player has no row for are left out rather than read as zero,
    and rows for games outside ``game_order`` are ignored.

    Args:
        rows: Stat rows for the window.
        player_id: Player to extract.
        stat: Counting stat column.
        game_order: Game ids, oldest first.

    Returns:
        One value per game played, oldest first.
    """
    if stat not in COUNTING_STATS:
        raise InvalidInputError(f"Unknown stat column: {stat!r}")

    by_game: dict[GameId, list[float]] = {}
    for row in rows:
        if row.player_id == player_id:
            by_game.setdefault(row.game_id, []).append(getattr(row, stat))

    return [math.fsum(by_game[game_id]) for game_id in game_order if game_id in by_game]


def classify_player_trends(
    rows: Sequence[StatRow],
    stat: str,
    game_order: Sequence[GameId],
) -> dict[PlayerId, TrendResult]:
    """Classify ``stat`` for every player in ``rows``, ordered by player id."""
    player_ids = sorted({row.player_id for row in rows}, key=id_sort_key)
    return {
        player_id: classify_trend(series_for_player(rows, player_id, stat, game_order))
        for player_id in player_ids
    }
