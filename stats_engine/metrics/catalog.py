"""Metric catalog: the static set of metrics that goals can track.

Each metric names the stat columns it reads and how a single game's value is
derived from them (sum, per-row average, made/attempted percentage, or a
ratio of two columns).

Example:
    >>> catalog = default_catalog()
    >>> metric = catalog.get_metric(1)
    >>> metric.name
    'Points'
    >>> sorted(catalog.group_by_category())
    ['defense', 'efficiency', 'offense', 'special']
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from stats_engine.types import ConfigurationError, MetricId, MetricNotFoundError

if TYPE_CHECKING:
    from stats_engine.aggregate.rows import StatRow


# =============================================================================
# Enums
# =============================================================================


class CalculationType(Enum):
    """How a metric's per-game value is computed from stat columns."""

    SUM = "sum"
    AVERAGE = "average"
    PERCENTAGE = "percentage"
    RATIO = "ratio"


# Calculation types that read a (numerator, denominator) column pair
PAIRED_CALCULATIONS: frozenset[CalculationType] = frozenset(
    {CalculationType.PERCENTAGE, CalculationType.RATIO}
)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class MetricDefinition:
    """A trackable metric.

    Attributes:
        id: Stable metric identifier referenced by goals.
        name: Display name.
        category: Grouping key (exact, case-sensitive match).
        unit: Display unit.
        calculation_type: How the per-game value is derived.
        stat_fields: StatRow columns read by the calculation. Percentage and
            ratio metrics take exactly two (numerator, denominator).
        description: Optional longer description.
        is_active: Inactive metrics stay resolvable but are hidden from
            pickers.
    """

    id: MetricId
    name: str
    category: str
    unit: str
    calculation_type: CalculationType
    stat_fields: tuple[str, ...] = ()
    description: str = ""
    is_active: bool = True

    def __post_init__(self) -> None:
        if (
            self.calculation_type in PAIRED_CALCULATIONS
            and len(self.stat_fields) != 2
        ):
            raise ConfigurationError(
                f"Metric {self.name!r} ({self.calculation_type.value}) needs "
                f"exactly two stat fields, got {len(self.stat_fields)}"
            )

    def calculate(self, rows: Sequence[StatRow]) -> float:
        """Compute this metric's value over one game's stat rows.

        Zero denominators yield 0.0, matching how goal actuals are recorded.

        Args:
            rows: Stat rows for a single game (one per player).

        Returns:
            Metric value for the game.
        """
        if not rows:
            return 0.0

        if self.calculation_type is CalculationType.SUM:
            return math.fsum(_row_sum(row, self.stat_fields) for row in rows)

        if self.calculation_type is CalculationType.AVERAGE:
            total = math.fsum(_row_sum(row, self.stat_fields) for row in rows)
            return total / len(rows)

        numerator_field, denominator_field = self.stat_fields
        numerator = math.fsum(getattr(row, numerator_field) for row in rows)
        denominator = math.fsum(getattr(row, denominator_field) for row in rows)
        if denominator == 0:
            return 0.0

        if self.calculation_type is CalculationType.PERCENTAGE:
            return numerator / denominator * 100
        return numerator / denominator

    def to_dict(self) -> dict[str, object]:
        """Convert to a plain dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "calculation_type": self.calculation_type.value,
            "stat_fields": list(self.stat_fields),
            "description": self.description,
            "is_active": self.is_active,
        }


def _row_sum(row: StatRow, fields: tuple[str, ...]) -> float:
    return math.fsum(getattr(row, name) for name in fields)


# =============================================================================
# Catalog
# =============================================================================


class MetricCatalog:
    """Read-only lookup over a fixed set of metric definitions.

    Example:
        >>> catalog = MetricCatalog(DEFAULT_METRICS)
        >>> catalog.find_metric(999) is None
        True
    """

    def __init__(self, metrics: Iterable[MetricDefinition]) -> None:
        self._metrics: dict[MetricId, MetricDefinition] = {}
        for metric in metrics:
            if metric.id in self._metrics:
                raise ConfigurationError(f"Duplicate metric id: {metric.id!r}")
            self._metrics[metric.id] = metric

    def __len__(self) -> int:
        return len(self._metrics)

    def __contains__(self, metric_id: object) -> bool:
        return metric_id in self._metrics

    def __iter__(self):
        return iter(self.all())

    def get_metric(self, metric_id: MetricId) -> MetricDefinition:
        """Look up a metric by id.

        Raises:
            MetricNotFoundError: If the id is not in the catalog.
        """
        try:
            return self._metrics[metric_id]
        except KeyError:
            raise MetricNotFoundError(metric_id) from None

    def find_metric(self, metric_id: MetricId) -> MetricDefinition | None:
        """Look up a metric by id, returning None when unknown."""
        return self._metrics.get(metric_id)

    def all(self) -> list[MetricDefinition]:
        """All metrics ordered by name."""
        return sorted(self._metrics.values(), key=lambda m: m.name)

    def active(self) -> list[MetricDefinition]:
        """Active metrics ordered by name."""
        return [m for m in self.all() if m.is_active]

    def by_category(self, category: str) -> list[MetricDefinition]:
        """Metrics whose category equals ``category`` exactly."""
        return [m for m in self.all() if m.category == category]

    def group_by_category(self) -> dict[str, list[MetricDefinition]]:
        """Group metrics by exact category string, each group ordered by name."""
        groups: dict[str, list[MetricDefinition]] = {}
        for metric in self.all():
            groups.setdefault(metric.category, []).append(metric)
        return groups


# =============================================================================
# Default Catalog
# =============================================================================

DEFAULT_METRICS: tuple[MetricDefinition, ...] = (
    MetricDefinition(1, "Points", "offense", "points", CalculationType.SUM, ("points",)),
    MetricDefinition(2, "Assists", "offense", "assists", CalculationType.SUM, ("assists",)),
    MetricDefinition(
        3, "Three Pointers Made", "offense", "shots", CalculationType.SUM, ("three_made",)
    ),
    MetricDefinition(
        4,
        "Field Goal Percentage",
        "efficiency",
        "%",
        CalculationType.PERCENTAGE,
        ("fg_made", "fg_attempted"),
    ),
    MetricDefinition(
        5,
        "Three Point Percentage",
        "efficiency",
        "%",
        CalculationType.PERCENTAGE,
        ("three_made", "three_attempted"),
    ),
    MetricDefinition(
        6,
        "Free Throw Percentage",
        "efficiency",
        "%",
        CalculationType.PERCENTAGE,
        ("ft_made", "ft_attempted"),
    ),
    MetricDefinition(
        7,
        "Assist to Turnover Ratio",
        "efficiency",
        "ratio",
        CalculationType.RATIO,
        ("assists", "turnovers"),
    ),
    MetricDefinition(8, "Rebounds", "defense", "rebounds", CalculationType.SUM, ("rebounds",)),
    MetricDefinition(9, "Steals", "defense", "steals", CalculationType.SUM, ("steals",)),
    MetricDefinition(10, "Blocks", "defense", "blocks", CalculationType.SUM, ("blocks",)),
    MetricDefinition(
        11,
        "Stocks",
        "defense",
        "plays",
        CalculationType.SUM,
        ("steals", "blocks"),
        description="Steals plus blocks",
    ),
    MetricDefinition(12, "Turnovers", "special", "turnovers", CalculationType.SUM, ("turnovers",)),
    MetricDefinition(
        13, "Fouls", "special", "fouls", CalculationType.SUM, ("fouls_committed",)
    ),
    MetricDefinition(
        14,
        "Points Per Player",
        "offense",
        "points",
        CalculationType.AVERAGE,
        ("points",),
        description="Average points per player who logged a stat line",
    ),
)


def default_catalog() -> MetricCatalog:
    """Build a catalog of the default metrics."""
    return MetricCatalog(DEFAULT_METRICS)
