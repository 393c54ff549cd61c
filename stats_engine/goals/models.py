"""Goal definitions and progress records.

Example:
    >>> goal = Goal.from_dict(
    ...     {"id": 1, "metric_id": 1, "target_value": 70, "comparison_operator": "gte"}
    ... )
    >>> goal.comparison_operator
    <ComparisonOperator.GTE: 'gte'>
    >>> goal.describe(catalog.get_metric(1))
    'Points ≥ 70'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from stats_engine.types import GameId, GoalId, InvalidInputError, MetricId

if TYPE_CHECKING:
    from stats_engine.metrics.catalog import MetricDefinition

DEFAULT_SEASON: str = "2024-25"


# =============================================================================
# Enums
# =============================================================================


class ComparisonOperator(Enum):
    """How an actual value is compared against a goal target."""

    GTE = "gte"
    LTE = "lte"
    EQ = "eq"

    @property
    def symbol(self) -> str:
        return _OPERATOR_SYMBOLS[self]


_OPERATOR_SYMBOLS: dict[ComparisonOperator, str] = {
    ComparisonOperator.GTE: "≥",
    ComparisonOperator.LTE: "≤",
    ComparisonOperator.EQ: "=",
}


class PeriodType(Enum):
    """Window a goal's actual value is measured over."""

    PER_GAME = "per_game"
    SEASON_TOTAL = "season_total"
    ROLLING_5 = "rolling_5"
    ROLLING_10 = "rolling_10"

    @property
    def window(self) -> int | None:
        """Number of most recent games for rolling periods."""
        if self is PeriodType.ROLLING_5:
            return 5
        if self is PeriodType.ROLLING_10:
            return 10
        return None

    @property
    def label(self) -> str:
        return {
            PeriodType.PER_GAME: "per game",
            PeriodType.SEASON_TOTAL: "season total",
            PeriodType.ROLLING_5: "rolling 5 games",
            PeriodType.ROLLING_10: "rolling 10 games",
        }[self]


class GoalStatus(Enum):
    """Classification of an evaluated goal."""

    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    OFF_TRACK = "off_track"


def _parse_enum(enum_cls: type[Enum], value: Any, label: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidInputError(f"Invalid {label}: {value!r}") from None


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class Goal:
    """A numeric target on a catalog metric.

    String values for ``comparison_operator`` and ``period_type`` are
    converted to their enums on construction.

    Attributes:
        id: Stable goal identity, preserved across edits.
        metric_id: Catalog metric the goal tracks.
        target_value: Target the actual value is compared against.
        comparison_operator: gte, lte or eq.
        period_type: Window the actual value is measured over.
        season: Season label.
        notes: Optional free text.
    """

    id: GoalId
    metric_id: MetricId
    target_value: float
    comparison_operator: ComparisonOperator
    period_type: PeriodType = PeriodType.PER_GAME
    season: str = DEFAULT_SEASON
    notes: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "comparison_operator",
            _parse_enum(ComparisonOperator, self.comparison_operator, "comparison operator"),
        )
        object.__setattr__(
            self,
            "period_type",
            _parse_enum(PeriodType, self.period_type, "period type"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Goal:
        """Build a goal from an upstream record.

        Raises:
            InvalidInputError: If required keys are missing or the operator,
                period type or target are invalid.
        """
        missing = [
            key
            for key in ("id", "metric_id", "target_value", "comparison_operator")
            if data.get(key) is None
        ]
        if missing:
            raise InvalidInputError(f"Goal record missing {', '.join(missing)}")
        try:
            target = float(data["target_value"])
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"Goal {data['id']!r} has non-numeric target {data['target_value']!r}"
            ) from None
        return cls(
            id=data["id"],
            metric_id=data["metric_id"],
            target_value=target,
            comparison_operator=data["comparison_operator"],
            period_type=data.get("period_type") or PeriodType.PER_GAME,
            season=data.get("season") or DEFAULT_SEASON,
            notes=data.get("notes"),
        )

    def with_changes(self, **changes: Any) -> Goal:
        """Return an edited copy; the goal id cannot change."""
        if "id" in changes and changes["id"] != self.id:
            raise InvalidInputError("Goal id is immutable")
        return replace(self, **changes)

    def describe(self, metric: MetricDefinition) -> str:
        """Human-readable form, e.g. ``"Points ≥ 70"``."""
        return f"{metric.name} {self.comparison_operator.symbol} {self.target_value:g}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "id": self.id,
            "metric_id": self.metric_id,
            "target_value": self.target_value,
            "comparison_operator": self.comparison_operator.value,
            "period_type": self.period_type.value,
            "season": self.season,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class GoalProgressRecord:
    """One evaluation of a goal against one game.

    ``target_value`` is the goal's target at evaluation time; later edits to
    the goal do not change it.

    Attributes:
        goal_id: Evaluated goal.
        game_id: Game the actual value came from (None for ad-hoc checks).
        actual_value: Measured value.
        target_value: Target snapshot.
        delta: actual_value - target_value.
        status: Classification under the goal's operator.
        calculated_at: Evaluation timestamp.
    """

    goal_id: GoalId
    game_id: GameId | None
    actual_value: float
    target_value: float
    delta: float
    status: GoalStatus
    calculated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "goal_id": self.goal_id,
            "game_id": self.game_id,
            "actual_value": self.actual_value,
            "target_value": self.target_value,
            "delta": self.delta,
            "status": self.status.value,
            "calculated_at": self.calculated_at.isoformat(),
        }


@dataclass(frozen=True)
class GoalSummary:
    """Counts of goals by latest status.

    ``on_track + at_risk + off_track == total_goals`` always holds.
    """

    total_goals: int = 0
    on_track: int = 0
    at_risk: int = 0
    off_track: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to a plain dictionary."""
        return {
            "total_goals": self.total_goals,
            "on_track": self.on_track,
            "at_risk": self.at_risk,
            "off_track": self.off_track,
        }
