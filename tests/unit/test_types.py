"""Tests for type definitions module."""
from __future__ import annotations

import pytest

from stats_engine.types import (
    ConfigurationError,
    InputTooLargeError,
    InvalidInputError,
    MalformedInputError,
    MetricNotFoundError,
    StatsEngineError,
)


class TestExceptionHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_cls",
        [ConfigurationError, MalformedInputError, InvalidInputError],
    )
    def test_subclasses_of_base(self, exc_cls: type[Exception]) -> None:
        """Every engine error should derive from StatsEngineError."""
        assert issubclass(exc_cls, StatsEngineError)

    def test_metric_not_found_is_configuration_error(self) -> None:
        """Unknown metrics are a configuration problem."""
        assert issubclass(MetricNotFoundError, ConfigurationError)

    def test_invalid_input_is_value_error(self) -> None:
        """InvalidInputError should be catchable as ValueError."""
        with pytest.raises(ValueError):
            raise InvalidInputError("bad target")


class TestMetricNotFoundError:
    """Tests for MetricNotFoundError."""

    def test_carries_metric_id(self) -> None:
        """The missing id should be kept and named in the message."""
        exc = MetricNotFoundError(99)

        assert exc.metric_id == 99
        assert "99" in str(exc)


class TestInputTooLargeError:
    """Tests for InputTooLargeError."""

    def test_carries_counts(self) -> None:
        """Row count and limit should be kept and named in the message."""
        exc = InputTooLargeError(12, 10)

        assert exc.row_count == 12
        assert exc.limit == 10
        assert "12" in str(exc)
        assert "10" in str(exc)
        assert isinstance(exc, StatsEngineError)
