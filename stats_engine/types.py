"""Type definitions and exceptions for the stats engine.

This module defines the id aliases, the shared optional-value alias used for
"absent" statistics, and the exception hierarchy raised across the
aggregation, goals and trends packages.

Example:
    >>> from stats_engine.types import ConfigurationError
    >>> try:
    ...     catalog.get_metric(999)
    ... except ConfigurationError as exc:
    ...     print(exc)
"""

from __future__ import annotations

# =============================================================================
# Type Aliases
# =============================================================================

PlayerId = int | str
GameId = int | str
GoalId = int | str
MetricId = int | str

# A derived statistic that may be absent (no attempts, no games). Absent is
# None, never an overloaded 0.
OptionalStat = float | None


# =============================================================================
# Exceptions
# =============================================================================


class StatsEngineError(Exception):
    """Base exception for stats engine errors."""


class ConfigurationError(StatsEngineError):
    """A goal or request references something that is not configured."""


class MetricNotFoundError(ConfigurationError):
    """Requested metric id is not in the catalog."""

    def __init__(self, metric_id: MetricId) -> None:
        self.metric_id = metric_id
        super().__init__(f"Unknown metric id: {metric_id!r}")


class MalformedInputError(StatsEngineError):
    """A stat record is missing identity fields or has unusable values."""


class InvalidInputError(StatsEngineError, ValueError):
    """A single-item input (goal target, trend series) is invalid."""


class InputTooLargeError(StatsEngineError):
    """A request carries more stat rows than the configured limit."""

    def __init__(self, row_count: int, limit: int) -> None:
        self.row_count = row_count
        self.limit = limit
        super().__init__(
            f"Request has {row_count} stat rows, limit is {limit}"
        )
