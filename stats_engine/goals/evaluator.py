"""Goal progress evaluation.

Compares measured values against goal targets and classifies each goal as
on track, at risk or off track.

Status Rules:
    gte: on_track if actual >= target
         at_risk  if actual is below target by at most tolerance * |target|
         off_track otherwise
    lte: mirrored (at_risk band above the target)
    eq:  on_track only on an exact match, otherwise off_track

A target of 0 has an empty at_risk band.

Example:
    >>> evaluator = GoalProgressEvaluator(default_catalog(), tolerance_pct=0.10)
    >>> record = evaluator.evaluate(goal, 22, game_id=5)
    >>> record.status, record.delta
    (<GoalStatus.ON_TRACK: 'on_track'>, 2.0)
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from stats_engine.config import get_settings
from stats_engine.goals.models import (
    ComparisonOperator,
    Goal,
    GoalProgressRecord,
    GoalStatus,
    GoalSummary,
    PeriodType,
)
from stats_engine.logging import FAIL, get_logger
from stats_engine.metrics.catalog import CalculationType, MetricCatalog
from stats_engine.numeric import is_number, non_zero_mean, round1, safe_divide
from stats_engine.types import (
    ConfigurationError,
    GameId,
    GoalId,
    InvalidInputError,
)

if TYPE_CHECKING:
    from stats_engine.aggregate.rows import StatRow
    from stats_engine.goals.log import ProgressLog

logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class BatchEvaluation:
    """Result of evaluating several goals, best-effort per goal.

    Attributes:
        records: Records for goals that evaluated successfully.
        errors: Goal id to error message for goals that could not be
            evaluated.
    """

    records: list[GoalProgressRecord] = field(default_factory=list)
    errors: dict[GoalId, str] = field(default_factory=dict)


# =============================================================================
# Status Rules
# =============================================================================


def _require_number(value: object, label: str) -> float:
    if not is_number(value):
        raise InvalidInputError(f"{label} must be a finite number, got {value!r}")
    return float(value)


def meets_target(operator: ComparisonOperator, actual: float, target: float) -> bool:
    """Whether ``actual`` satisfies ``target`` under ``operator``."""
    if operator is ComparisonOperator.GTE:
        return actual >= target
    if operator is ComparisonOperator.LTE:
        return actual <= target
    if operator is ComparisonOperator.EQ:
        return actual == target
    raise InvalidInputError(f"Unsupported comparison operator: {operator!r}")


def classify_status(
    operator: ComparisonOperator,
    actual: float,
    target: float,
    tolerance_pct: float,
) -> GoalStatus:
    """Classify an actual value against a target.

    Args:
        operator: Goal comparison operator.
        actual: Measured value.
        target: Goal target.
        tolerance_pct: At-risk band width as a fraction of ``|target|``.

    Returns:
        GoalStatus for the comparison.
    """
    if meets_target(operator, actual, target):
        return GoalStatus.ON_TRACK
    if operator is ComparisonOperator.EQ:
        return GoalStatus.OFF_TRACK

    band = abs(target) * tolerance_pct
    if band > 0 and abs(actual - target) <= band:
        return GoalStatus.AT_RISK
    return GoalStatus.OFF_TRACK


def achieved_for_game(goal: Goal, game_actual: float) -> bool:
    """Point-in-time pass/fail check for the per-game checklist.

    Raises:
        InvalidInputError: If the target or actual value is not numeric.
    """
    actual = _require_number(game_actual, "Actual value")
    target = _require_number(goal.target_value, f"Goal {goal.id!r} target")
    return meets_target(goal.comparison_operator, actual, target)


# =============================================================================
# Period Resolution
# =============================================================================


def resolve_period_value(
    period_type: PeriodType,
    series: Sequence[float],
    calculation_type: CalculationType = CalculationType.SUM,
) -> float:
    """Reduce a chronological per-game series to the goal period's value.

    per_game takes the latest game. Rolling periods take the non-zero mean of
    the last N games (games without the stat don't count). season_total sums
    summable metrics and takes the non-zero mean of rates.

    Args:
        period_type: Goal period.
        series: Per-game values, oldest first.
        calculation_type: How the metric's per-game value was calculated.

    Returns:
        Period value, 0.0 for an empty series.

    Raises:
        InvalidInputError: If the series contains non-numeric values.
    """
    values = [_require_number(v, "Series value") for v in series]
    if not values:
        return 0.0

    if period_type is PeriodType.PER_GAME:
        return values[-1]
    if period_type.window is not None:
        return non_zero_mean(values[-period_type.window:])
    if calculation_type is CalculationType.SUM:
        return math.fsum(values)
    return non_zero_mean(values)


def progress_percentage(record: GoalProgressRecord) -> float:
    """Progress bar fill: ``actual / target * 100`` clamped to [0, 100]."""
    ratio = safe_divide(record.actual_value, record.target_value)
    if ratio is None:
        return 0.0
    return round1(min(max(ratio * 100, 0.0), 100.0))


# =============================================================================
# Summary
# =============================================================================


def summarize(
    goals: Sequence[Goal],
    latest: Mapping[GoalId, GoalProgressRecord],
) -> GoalSummary:
    """Count goals by their latest status.

    Goals that have never been evaluated count as off track, so the three
    counts always add up to ``total_goals``. Records for goals not in
    ``goals`` are ignored.
    """
    counts = {status: 0 for status in GoalStatus}
    for goal in goals:
        record = latest.get(goal.id)
        status = record.status if record is not None else GoalStatus.OFF_TRACK
        counts[status] += 1

    return GoalSummary(
        total_goals=len(goals),
        on_track=counts[GoalStatus.ON_TRACK],
        at_risk=counts[GoalStatus.AT_RISK],
        off_track=counts[GoalStatus.OFF_TRACK],
    )


# =============================================================================
# Main Evaluator Class
# =============================================================================


class GoalProgressEvaluator:
    """Evaluates goals against measured values.

    Attributes:
        catalog: Metric catalog goals are resolved against.
        tolerance_pct: At-risk band width as a fraction of the target.

    Example:
        >>> evaluator = GoalProgressEvaluator(default_catalog())
        >>> batch = evaluator.evaluate_all(goals, {1: 74.0, 2: 11.0}, game_id=9)
        >>> summarize(goals, latest_progress(batch.records))
    """

    def __init__(
        self,
        catalog: MetricCatalog,
        tolerance_pct: float | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize evaluator.

        Args:
            catalog: Metric catalog.
            tolerance_pct: At-risk band width, defaults to the
                GOAL_TOLERANCE_PCT setting.
            clock: Timestamp source for records, defaults to UTC now.
        """
        if tolerance_pct is None:
            tolerance_pct = get_settings().goal_tolerance_pct
        if not is_number(tolerance_pct) or not 0.0 <= tolerance_pct <= 1.0:
            raise InvalidInputError(
                f"tolerance_pct must be between 0 and 1, got {tolerance_pct!r}"
            )
        self.catalog = catalog
        self.tolerance_pct = float(tolerance_pct)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def evaluate(
        self,
        goal: Goal,
        actual_value: float,
        game_id: GameId | None = None,
    ) -> GoalProgressRecord:
        """Evaluate one goal against one measured value.

        Args:
            goal: Goal to evaluate.
            actual_value: Measured value for the goal's period.
            game_id: Game the value belongs to.

        Returns:
            Immutable progress record with the target snapshotted.

        Raises:
            MetricNotFoundError: If the goal's metric is not in the catalog.
            InvalidInputError: If the target or actual value is not numeric.
        """
        self.catalog.get_metric(goal.metric_id)
        target = _require_number(goal.target_value, f"Goal {goal.id!r} target")
        actual = _require_number(actual_value, "Actual value")

        status = classify_status(
            goal.comparison_operator, actual, target, self.tolerance_pct
        )
        return GoalProgressRecord(
            goal_id=goal.id,
            game_id=game_id,
            actual_value=actual,
            target_value=target,
            delta=actual - target,
            status=status,
            calculated_at=self._clock(),
        )

    def record(
        self,
        goal: Goal,
        actual_value: float,
        game_id: GameId | None,
        log: ProgressLog,
    ) -> GoalProgressRecord:
        """Evaluate a goal and append the result to ``log``."""
        progress = self.evaluate(goal, actual_value, game_id)
        log.append(progress)
        return progress

    def evaluate_series(
        self,
        goal: Goal,
        series: Sequence[float],
        game_id: GameId | None = None,
    ) -> GoalProgressRecord:
        """Evaluate a goal from its chronological per-game series.

        The series is reduced to the goal's period value first (latest game,
        rolling window, or season total).
        """
        metric = self.catalog.get_metric(goal.metric_id)
        actual = resolve_period_value(goal.period_type, series, metric.calculation_type)
        return self.evaluate(goal, actual, game_id)

    def evaluate_all(
        self,
        goals: Iterable[Goal],
        actuals: Mapping[GoalId, float],
        game_id: GameId | None = None,
    ) -> BatchEvaluation:
        """Evaluate many goals; one bad goal does not stop the rest.

        Args:
            goals: Goals to evaluate.
            actuals: Measured value per goal id.
            game_id: Game the values belong to.

        Returns:
            BatchEvaluation with records and per-goal errors.
        """
        batch = BatchEvaluation()
        for goal in goals:
            if goal.id not in actuals:
                batch.errors[goal.id] = "No actual value supplied"
                continue
            self._evaluate_into(batch, goal, self.evaluate, actuals[goal.id], game_id)
        return batch

    def evaluate_game(
        self,
        goals: Iterable[Goal],
        rows: Sequence[StatRow],
        game_id: GameId,
        history: Mapping[GoalId, Sequence[float]] | None = None,
    ) -> BatchEvaluation:
        """Evaluate goals against one game's stat rows.

        Each goal's metric is calculated from ``rows``; for rolling and
        season goals the value is appended to the goal's prior per-game
        ``history`` before the period is resolved.

        Args:
            goals: Goals to evaluate.
            rows: Stat rows of the game being evaluated.
            game_id: The game's id.
            history: Prior per-game metric values per goal, oldest first.

        Returns:
            BatchEvaluation with records and per-goal errors.
        """
        history = history or {}
        game_rows = [row for row in rows if row.game_id == game_id]
        batch = BatchEvaluation()
        for goal in goals:
            self._evaluate_into(
                batch, goal, self._evaluate_game_goal, game_rows, game_id, history
            )
        return batch

    def _evaluate_into(
        self,
        batch: BatchEvaluation,
        goal: Goal,
        evaluate: Callable[..., GoalProgressRecord],
        *args: object,
    ) -> None:
        try:
            batch.records.append(evaluate(goal, *args))
        except (ConfigurationError, InvalidInputError) as exc:
            logger.error(f"{FAIL} Goal {{}} not evaluated: {{}}", goal.id, exc)
            batch.errors[goal.id] = str(exc)

    def _evaluate_game_goal(
        self,
        goal: Goal,
        game_rows: Sequence[StatRow],
        game_id: GameId,
        history: Mapping[GoalId, Sequence[float]],
    ) -> GoalProgressRecord:
        metric = self.catalog.get_metric(goal.metric_id)
        value = metric.calculate(game_rows)
        series = [*history.get(goal.id, ()), value]
        return self.evaluate_series(goal, series, game_id)
