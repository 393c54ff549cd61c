"""Stat tables: player lines plus an optional team summary row.

Example:
    >>> table = build_stat_table(aggregates, AggregateMode.AVERAGES)
    >>> frame = lines_to_frame(table)
    >>> frame.to_csv(index=False)  # absent values export as empty cells
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from stats_engine.aggregate.players import (
    STAT_COLUMNS,
    AggregateMode,
    PlayerAggregate,
    StatLine,
)
from stats_engine.aggregate.team import DEFAULT_SUMMARY_NAME, aggregate_team

IDENTITY_COLUMNS: tuple[str, ...] = ("player_id", "name", "mode", "is_summary")


def build_stat_table(
    aggregates: Sequence[PlayerAggregate],
    mode: AggregateMode,
    include_summary: bool = True,
    summary_name: str = DEFAULT_SUMMARY_NAME,
) -> list[StatLine]:
    """Render aggregates in one mode, with the team summary row last.

    Args:
        aggregates: Player aggregates for the window.
        mode: Totals or averages.
        include_summary: Append the team summary row.
        summary_name: Display name of the summary row.

    Returns:
        Player lines in aggregate order, followed by the summary line.
    """
    lines = [aggregate.view(mode) for aggregate in aggregates]
    if include_summary:
        lines.append(aggregate_team(lines, mode).to_line(summary_name))
    return lines


def lines_to_frame(lines: Sequence[StatLine]) -> pd.DataFrame:
    """Convert stat lines to a DataFrame for the export layer.

    Absent values become NaN, which pandas writes as empty CSV cells.
    """
    return pd.DataFrame(
        [line.to_dict() for line in lines],
        columns=[*IDENTITY_COLUMNS, *STAT_COLUMNS],
    )
