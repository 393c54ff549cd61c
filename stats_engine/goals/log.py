"""Append-only log of goal progress records."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from stats_engine.goals.models import GoalProgressRecord
from stats_engine.types import GameId, GoalId


def latest_progress(
    records: Iterable[GoalProgressRecord],
) -> dict[GoalId, GoalProgressRecord]:
    """Latest record per goal by ``calculated_at``.

    On equal timestamps the record that comes later in ``records`` wins.
    """
    latest: dict[GoalId, GoalProgressRecord] = {}
    for record in records:
        current = latest.get(record.goal_id)
        if current is None or record.calculated_at >= current.calculated_at:
            latest[record.goal_id] = record
    return latest


class ProgressLog:
    """Append-only store of goal progress records.

    Records are immutable and are never replaced or removed, so editing a
    goal leaves its evaluation history untouched.

    Example:
        >>> log = ProgressLog()
        >>> evaluator.record(goal, 72, game_id=12, log=log)
        >>> log.latest(goal.id).status
        <GoalStatus.ON_TRACK: 'on_track'>
    """

    def __init__(self, records: Iterable[GoalProgressRecord] = ()) -> None:
        self._records: list[GoalProgressRecord] = []
        for record in records:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[GoalProgressRecord]:
        return iter(tuple(self._records))

    def append(self, record: GoalProgressRecord) -> None:
        """Append a record to the log."""
        if not isinstance(record, GoalProgressRecord):
            raise TypeError(f"Expected GoalProgressRecord, got {type(record).__name__}")
        self._records.append(record)

    def history(self, goal_id: GoalId) -> tuple[GoalProgressRecord, ...]:
        """All records for a goal, in append order."""
        return tuple(r for r in self._records if r.goal_id == goal_id)

    def for_game(self, game_id: GameId) -> tuple[GoalProgressRecord, ...]:
        """All records evaluated against a game."""
        return tuple(r for r in self._records if r.game_id == game_id)

    def latest(self, goal_id: GoalId) -> GoalProgressRecord | None:
        """Latest record for a goal, or None if never evaluated."""
        return latest_progress(self.history(goal_id)).get(goal_id)

    def latest_by_goal(self) -> dict[GoalId, GoalProgressRecord]:
        """Latest record for every goal in the log."""
        return latest_progress(self._records)

    def actual_series(self, goal_id: GoalId) -> list[float]:
        """Chronological actual values recorded for a goal."""
        ordered = sorted(self.history(goal_id), key=lambda r: r.calculated_at)
        return [r.actual_value for r in ordered]
