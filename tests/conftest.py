"""Shared pytest fixtures for stats engine tests.

This module contains fixtures used across multiple test modules:
- Configuration fixtures (test settings with environment reset)
- Sample data fixtures (stat rows, upstream records, goals)
- Catalog and clock fixtures

Example:
    def test_something(sample_rows, player_names):
        # sample_rows covers three players over two games
        # player 2 is a bench player with an all-zero line
        pass
"""
from __future__ import annotations

import os
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from stats_engine.aggregate.rows import StatRow
from stats_engine.config import Settings, reset_settings
from stats_engine.goals.models import ComparisonOperator, Goal, PeriodType
from stats_engine.metrics.catalog import MetricCatalog, default_catalog


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def tmp_data_dir(tmp_path: Path) -> Path:
    """Create and return temporary data directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def test_settings(tmp_data_dir: Path) -> Generator[Settings, None, None]:
    """Provide test settings with temporary directories.

    Automatically resets settings singleton after test.
    """
    os.environ["LOG_DIR"] = str(tmp_data_dir / "logs")
    os.environ["LOG_LEVEL"] = "DEBUG"
    os.environ["GOAL_TOLERANCE_PCT"] = "0.10"

    reset_settings()
    from stats_engine.config import get_settings

    settings = get_settings()
    settings.ensure_directories()

    yield settings

    # Cleanup
    reset_settings()
    for key in ["LOG_DIR", "LOG_LEVEL", "GOAL_TOLERANCE_PCT"]:
        os.environ.pop(key, None)


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def row_factory() -> Callable[..., StatRow]:
    """Return a helper that builds a StatRow with zero defaults."""

    def make(player_id: Any, game_id: Any, **stats: float) -> StatRow:
        return StatRow(player_id=player_id, game_id=game_id, **stats)

    return make


@pytest.fixture
def player_names() -> dict[int, str]:
    """Return display names for the sample players."""
    return {
        1: "Avery Cole",
        2: "Blake Moss",
        3: "Casey Reed",
    }


@pytest.fixture
def sample_rows(row_factory: Callable[..., StatRow]) -> list[StatRow]:
    """Return stat rows for three players over two games.

    Player totals:
        1: 2 GP, 24 pts, FG 10/20, 3P 3/7, FT 1/2, efficiency 16.0
        2: 1 GP, all zeros (bench)
        3: 2 GP, 12 pts, FG 5/11, 3P 0/0, FT 2/2, efficiency 7.5
    """
    return [
        row_factory(
            1, 1, points=10, rebounds=4, assists=3, steals=1, turnovers=2,
            fouls_committed=1, fg_made=4, fg_attempted=9, three_made=1,
            three_attempted=3, ft_made=1, ft_attempted=2,
        ),
        row_factory(2, 1),
        row_factory(
            3, 1, points=8, rebounds=2, assists=1, fg_made=3, fg_attempted=6,
            ft_made=2, ft_attempted=2,
        ),
        row_factory(
            1, 2, points=14, rebounds=6, assists=5, steals=2, blocks=1,
            turnovers=1, fouls_committed=2, fg_made=6, fg_attempted=11,
            three_made=2, three_attempted=4,
        ),
        row_factory(
            3, 2, points=4, rebounds=3, assists=2, blocks=2, turnovers=1,
            fg_made=2, fg_attempted=5,
        ),
    ]


@pytest.fixture
def three_player_rows(row_factory: Callable[..., StatRow]) -> list[StatRow]:
    """Return one game where players score 12, 0 and 8 points."""
    return [
        row_factory(1, 1, points=12),
        row_factory(2, 1, points=0),
        row_factory(3, 1, points=8),
    ]


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """Return upstream stat records with camelCase keys and names."""
    return [
        {"playerId": 1, "playerName": "Avery Cole", "gameId": 1, "points": 12,
         "fgMade": 5, "fgAttempted": 10},
        {"playerId": 2, "playerName": "Blake Moss", "gameId": 1, "points": 0},
        {"playerId": 3, "playerName": "Casey Reed", "gameId": 1, "points": 8,
         "fgMade": 3, "fgAttempted": 8},
    ]


# =============================================================================
# Catalog and Goals
# =============================================================================


@pytest.fixture
def catalog() -> MetricCatalog:
    """Return the default metric catalog."""
    return default_catalog()


@pytest.fixture
def sample_goals() -> list[Goal]:
    """Return one goal per comparison style."""
    return [
        Goal(id=1, metric_id=1, target_value=70, comparison_operator=ComparisonOperator.GTE),
        Goal(id=2, metric_id=12, target_value=15, comparison_operator=ComparisonOperator.LTE),
        Goal(
            id=3,
            metric_id=4,
            target_value=45,
            comparison_operator=ComparisonOperator.GTE,
            period_type=PeriodType.ROLLING_5,
        ),
    ]


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def frozen_now() -> datetime:
    """Return a fixed datetime for deterministic tests."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(frozen_now: datetime) -> Callable[[], datetime]:
    """Return a clock that always reads ``frozen_now``."""
    return lambda: frozen_now


# =============================================================================
# Marker Helpers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
