"""Player and team aggregation of box-score rows.

Submodules:
    rows: StatRow and coercion of upstream records
    players: Per-player sums, averages, percentages and efficiency
    team: Non-zero-mean team summary
    table: Stat tables and DataFrame export view

Key concepts:
    - Absent values (no attempts, no games) are None, never 0
    - Team values average only players who recorded the stat
    - Output is independent of input row order

Example:
    >>> from stats_engine.aggregate import coerce_stat_rows, aggregate_players
    >>> batch = coerce_stat_rows(records)
    >>> aggregates = aggregate_players(batch.rows)
"""

from __future__ import annotations

from stats_engine.aggregate.players import (
    STAT_COLUMNS,
    AggregateMode,
    PlayerAggregate,
    StatLine,
    aggregate_players,
    efficiency_score,
    id_sort_key,
    shooting_percentage,
)
from stats_engine.aggregate.rows import (
    COUNTING_STATS,
    RowBatch,
    StatRow,
    StatRowInput,
    coerce_stat_rows,
)
from stats_engine.aggregate.table import build_stat_table, lines_to_frame
from stats_engine.aggregate.team import TeamAggregate, aggregate_team
from stats_engine.numeric import non_zero_mean

__all__ = [
    "COUNTING_STATS",
    "STAT_COLUMNS",
    "AggregateMode",
    "PlayerAggregate",
    "RowBatch",
    "StatLine",
    "StatRow",
    "StatRowInput",
    "TeamAggregate",
    "aggregate_players",
    "aggregate_team",
    "build_stat_table",
    "coerce_stat_rows",
    "efficiency_score",
    "id_sort_key",
    "lines_to_frame",
    "non_zero_mean",
    "shooting_percentage",
]
