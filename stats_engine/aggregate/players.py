"""Per-player aggregation of box-score rows.

Rows are grouped by player, every counting stat is summed, and derived
fields (per-game averages, shooting percentages, efficiency) are computed
on demand. Aggregates are presented through two views over the same sums:

    totals:   rounded season sums
    averages: per-game values, one decimal

Efficiency Formula:
    eff = (pts + reb + ast + stl + blk - missed_fg - missed_ft - tov) / games
    where:
        missed_fg = fg_attempted - fg_made
        missed_ft = ft_attempted - ft_made

Example:
    >>> aggregates = aggregate_players(rows, names={7: "Jordan Lee"})
    >>> line = aggregates[0].view(AggregateMode.AVERAGES)
    >>> line.get("points"), line.get("fg_pct")
    (14.5, 47.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from stats_engine.aggregate.rows import (
    COUNTING_STATS,
    SHOOTING_SPLITS,
    StatRow,
    check_row_limit,
)
from stats_engine.logging import get_logger
from stats_engine.numeric import round0, round1, safe_divide
from stats_engine.types import OptionalStat, PlayerId

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

GAMES_PLAYED: str = "games_played"
EFFICIENCY: str = "efficiency"
PERCENTAGE_COLUMNS: tuple[str, ...] = tuple(split[0] for split in SHOOTING_SPLITS)

# Column order of a stat line
STAT_COLUMNS: tuple[str, ...] = (
    GAMES_PLAYED,
    *COUNTING_STATS,
    *PERCENTAGE_COLUMNS,
    EFFICIENCY,
)


# =============================================================================
# Enums
# =============================================================================


class AggregateMode(Enum):
    """Presentation mode for an aggregate."""

    TOTALS = "totals"
    AVERAGES = "averages"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class StatLine:
    """A display/export row over an aggregate.

    Attributes:
        player_id: Player the line belongs to (None for the summary row).
        name: Display name.
        mode: View the values were computed in.
        values: Column name to value; None means absent.
        is_summary: True only for the synthetic team summary row.
    """

    player_id: PlayerId | None
    name: str
    mode: AggregateMode
    values: Mapping[str, OptionalStat]
    is_summary: bool = False

    def get(self, column: str) -> OptionalStat:
        """Value of a column, None when absent or unknown."""
        return self.values.get(column)

    def to_dict(self) -> dict[str, object]:
        """Flatten to a plain dictionary for export."""
        return {
            "player_id": self.player_id,
            "name": self.name,
            "mode": self.mode.value,
            "is_summary": self.is_summary,
            **{column: self.values.get(column) for column in STAT_COLUMNS},
        }


@dataclass(frozen=True)
class PlayerAggregate:
    """Summed stats for one player over a window of games.

    Attributes:
        player_id: Player identifier.
        name: Display name.
        games_played: Number of stat rows aggregated.
        totals: Raw sum of each counting stat.
    """

    player_id: PlayerId
    name: str
    games_played: int
    totals: Mapping[str, float]

    def total(self, stat: str) -> float:
        """Raw sum of a counting stat."""
        return self.totals[stat]

    def average(self, stat: str) -> float:
        """Per-game average of a counting stat, 0.0 with no games."""
        value = safe_divide(self.totals[stat], self.games_played)
        return 0.0 if value is None else round1(value)

    def shooting_pct(self, made: str, attempted: str) -> OptionalStat:
        """Whole-number percentage of made over attempted, None with no attempts."""
        return shooting_percentage(self.totals[made], self.totals[attempted])

    @property
    def fg_pct(self) -> OptionalStat:
        return self.shooting_pct("fg_made", "fg_attempted")

    @property
    def three_pct(self) -> OptionalStat:
        return self.shooting_pct("three_made", "three_attempted")

    @property
    def ft_pct(self) -> OptionalStat:
        return self.shooting_pct("ft_made", "ft_attempted")

    @property
    def efficiency(self) -> OptionalStat:
        return efficiency_score(self.totals, self.games_played)

    def view(self, mode: AggregateMode) -> StatLine:
        """Render this aggregate as a stat line in the given mode."""
        values: dict[str, OptionalStat] = {GAMES_PLAYED: float(self.games_played)}
        for stat in COUNTING_STATS:
            if mode is AggregateMode.TOTALS:
                values[stat] = round0(self.totals[stat])
            else:
                values[stat] = self.average(stat)
        for column, made, attempted in SHOOTING_SPLITS:
            values[column] = self.shooting_pct(made, attempted)
        values[EFFICIENCY] = self.efficiency

        return StatLine(
            player_id=self.player_id,
            name=self.name,
            mode=mode,
            values=values,
        )


# =============================================================================
# Functions
# =============================================================================


def shooting_percentage(made: float, attempted: float) -> OptionalStat:
    """Return ``round0(made / attempted * 100)``, or None when attempted is 0."""
    ratio = safe_divide(made, attempted)
    if ratio is None:
        return None
    return round0(ratio * 100)


def efficiency_score(totals: Mapping[str, float], games_played: int) -> OptionalStat:
    """Composite per-game efficiency, None when it rounds to 0 or is undefined.

    Args:
        totals: Summed counting stats.
        games_played: Games the totals cover.

    Returns:
        Efficiency rounded to one decimal, or None.
    """
    positive = math.fsum(
        totals[stat] for stat in ("points", "rebounds", "assists", "steals", "blocks")
    )
    missed_fg = totals["fg_attempted"] - totals["fg_made"]
    missed_ft = totals["ft_attempted"] - totals["ft_made"]
    raw = safe_divide(positive - missed_fg - missed_ft - totals["turnovers"], games_played)
    if raw is None:
        return None
    score = round1(raw)
    return None if score == 0 else score


def id_sort_key(identifier: PlayerId) -> tuple[int, int | str]:
    """Sort key that orders integer ids numerically before string ids."""
    if isinstance(identifier, int):
        return (0, identifier)
    return (1, str(identifier))


def aggregate_players(
    rows: Iterable[StatRow],
    names: Mapping[PlayerId, str] | None = None,
    max_rows: int | None = None,
) -> list[PlayerAggregate]:
    """Fold stat rows into one aggregate per player.

    The result does not depend on input row order: sums are exact
    (``math.fsum``) and players are returned ordered by id.

    Args:
        rows: Already-resolved stat rows for the selected window.
        names: Optional display names keyed by player id.
        max_rows: Optional cap on the number of rows accepted.

    Returns:
        One PlayerAggregate per distinct player id.

    Raises:
        InputTooLargeError: If more than ``max_rows`` rows are supplied.
    """
    rows = list(rows)
    check_row_limit(len(rows), max_rows)
    names = names or {}

    grouped: dict[PlayerId, list[StatRow]] = {}
    for row in rows:
        grouped.setdefault(row.player_id, []).append(row)

    aggregates = [
        PlayerAggregate(
            player_id=player_id,
            name=names.get(player_id, str(player_id)),
            games_played=len(group),
            totals={
                stat: math.fsum(getattr(row, stat) for row in group)
                for stat in COUNTING_STATS
            },
        )
        for player_id, group in sorted(grouped.items(), key=lambda item: id_sort_key(item[0]))
    ]

    logger.debug("Aggregated {} rows into {} players", len(rows), len(aggregates))
    return aggregates
