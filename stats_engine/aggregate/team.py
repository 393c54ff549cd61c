"""Team-level summary over per-player stat lines.

Team values use the non-zero mean: only players who recorded a stat
contribute to its average, so bench players with no minutes don't drag the
team line toward zero. Shooting percentages are derived from the non-zero
mean made/attempted pair, never by averaging player percentages.

Example:
    >>> lines = [a.view(AggregateMode.TOTALS) for a in aggregate_players(rows)]
    >>> team = aggregate_team(lines)
    >>> team.value("points")
    10.0
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from stats_engine.aggregate.players import (
    EFFICIENCY,
    GAMES_PLAYED,
    STAT_COLUMNS,
    AggregateMode,
    StatLine,
)
from stats_engine.aggregate.rows import COUNTING_STATS, SHOOTING_SPLITS
from stats_engine.numeric import non_zero_mean, round0, round1, safe_divide
from stats_engine.types import InvalidInputError, OptionalStat

DEFAULT_SUMMARY_NAME: str = "Team"


@dataclass(frozen=True)
class TeamAggregate:
    """Team summary of a set of player stat lines.

    Attributes:
        mode: View the input lines were computed in.
        player_count: Number of player lines summarized.
        means: Non-zero mean of games played and each counting stat.
        percentages: Shooting percentages, None when no attempts.
        efficiency: Mean of the non-zero player efficiencies, None if none.
    """

    mode: AggregateMode
    player_count: int
    means: Mapping[str, float]
    percentages: Mapping[str, OptionalStat]
    efficiency: OptionalStat = None

    def value(self, column: str) -> OptionalStat:
        """Value of a stat-line column."""
        if column == EFFICIENCY:
            return self.efficiency
        if column in self.percentages:
            return self.percentages[column]
        return self.means.get(column)

    def to_line(self, name: str = DEFAULT_SUMMARY_NAME) -> StatLine:
        """Render as the synthetic summary row of a stat table."""
        return StatLine(
            player_id=None,
            name=name,
            mode=self.mode,
            values={column: self.value(column) for column in STAT_COLUMNS},
            is_summary=True,
        )


def aggregate_team(
    lines: Sequence[StatLine],
    mode: AggregateMode | None = None,
) -> TeamAggregate:
    """Summarize player stat lines into a team aggregate.

    The aggregator is mode-agnostic: pass lines from the view you want
    summarized (all totals or all averages). Summary lines in the input are
    ignored.

    Args:
        lines: Per-player stat lines.
        mode: Mode label for the result. Defaults to the lines' mode, or
            totals for empty input. Must match the lines' mode if given.

    Returns:
        TeamAggregate; all zeros (percentages absent) for empty input.

    Raises:
        InvalidInputError: If the lines mix totals and averages, or ``mode``
            contradicts them.
    """
    player_lines = [line for line in lines if not line.is_summary]
    modes = {line.mode for line in player_lines}
    if len(modes) > 1:
        raise InvalidInputError("Cannot summarize a mix of totals and averages")
    if mode is None:
        mode = modes.pop() if modes else AggregateMode.TOTALS
    elif modes and mode not in modes:
        raise InvalidInputError(
            f"Requested {mode.value} summary for {modes.pop().value} lines"
        )

    def column(name: str) -> list[OptionalStat]:
        return [line.get(name) for line in player_lines]

    means = {
        name: round1(non_zero_mean(column(name)))
        for name in (GAMES_PLAYED, *COUNTING_STATS)
    }

    percentages: dict[str, OptionalStat] = {}
    for pct_column, made, attempted in SHOOTING_SPLITS:
        ratio = safe_divide(non_zero_mean(column(made)), non_zero_mean(column(attempted)))
        percentages[pct_column] = None if ratio is None else round0(ratio * 100)

    efficiencies = [v for v in column(EFFICIENCY) if v is not None and v != 0]
    efficiency = round1(math.fsum(efficiencies) / len(efficiencies)) if efficiencies else None

    return TeamAggregate(
        mode=mode,
        player_count=len(player_lines),
        means=means,
        percentages=percentages,
        efficiency=efficiency or None,
    )
