"""Tests for the team summary."""

from __future__ import annotations

import pytest

from stats_engine.aggregate.players import AggregateMode, StatLine, aggregate_players
from stats_engine.aggregate.rows import StatRow
from stats_engine.aggregate.team import aggregate_team
from stats_engine.types import InvalidInputError


def _lines(rows: list[StatRow], mode: AggregateMode) -> list[StatLine]:
    return [aggregate.view(mode) for aggregate in aggregate_players(rows)]


class TestAggregateTeam:
    """Tests for aggregate_team."""

    def test_non_zero_mean_excludes_bench(
        self, three_player_rows: list[StatRow]
    ) -> None:
        """Players scoring 12, 0 and 8 average 10, not 6.7."""
        team = aggregate_team(_lines(three_player_rows, AggregateMode.TOTALS))

        assert team.value("points") == 10.0
        assert team.player_count == 3

    def test_totals(self, sample_rows: list[StatRow]) -> None:
        """Team totals over the sample rows."""
        team = aggregate_team(_lines(sample_rows, AggregateMode.TOTALS))

        assert team.mode is AggregateMode.TOTALS
        assert team.value("points") == 18.0
        assert team.value("games_played") == 1.7
        assert team.value("steals") == 3.0

    def test_percentages_from_mean_pairs(self, sample_rows: list[StatRow]) -> None:
        """Percentages come from mean made over mean attempted."""
        team = aggregate_team(_lines(sample_rows, AggregateMode.TOTALS))

        # FG: mean made 7.5 / mean attempted 15.5
        assert team.value("fg_pct") == 48.0
        assert team.value("three_pct") == 43.0
        assert team.value("ft_pct") == 75.0

    def test_efficiency_mean_of_present(self, sample_rows: list[StatRow]) -> None:
        """Efficiency averages only players who have one."""
        team = aggregate_team(_lines(sample_rows, AggregateMode.TOTALS))

        # (16.0 + 7.5) / 2 = 11.75
        assert team.efficiency == 11.8

    def test_averages_mode(self, sample_rows: list[StatRow]) -> None:
        """The same rules apply to per-game lines."""
        team = aggregate_team(_lines(sample_rows, AggregateMode.AVERAGES))

        assert team.mode is AggregateMode.AVERAGES
        assert team.value("points") == 9.0

    def test_empty_input(self) -> None:
        """No players yields zeros with absent percentages."""
        team = aggregate_team([])

        assert team.player_count == 0
        assert team.value("points") == 0.0
        assert team.value("fg_pct") is None
        assert team.efficiency is None

    def test_no_attempts_is_absent(self, three_player_rows: list[StatRow]) -> None:
        """Without attempts the team percentage is absent."""
        team = aggregate_team(_lines(three_player_rows, AggregateMode.TOTALS))

        assert team.value("ft_pct") is None

    def test_ignores_summary_lines(self, three_player_rows: list[StatRow]) -> None:
        """A summary line in the input does not count as a player."""
        lines = _lines(three_player_rows, AggregateMode.TOTALS)
        lines.append(aggregate_team(lines).to_line())

        team = aggregate_team(lines)

        assert team.player_count == 3
        assert team.value("points") == 10.0

    def test_mixed_modes_rejected(self, sample_rows: list[StatRow]) -> None:
        """Totals and averages cannot be summarized together."""
        aggregates = aggregate_players(sample_rows)
        lines = [
            aggregates[0].view(AggregateMode.TOTALS),
            aggregates[1].view(AggregateMode.AVERAGES),
        ]

        with pytest.raises(InvalidInputError):
            aggregate_team(lines)

    def test_mode_must_match_lines(self, sample_rows: list[StatRow]) -> None:
        """A mode label that contradicts the lines is rejected."""
        lines = [a.view(AggregateMode.TOTALS) for a in aggregate_players(sample_rows)]

        with pytest.raises(InvalidInputError):
            aggregate_team(lines, mode=AggregateMode.AVERAGES)

        assert aggregate_team(lines, mode=AggregateMode.TOTALS).mode is AggregateMode.TOTALS


class TestTeamAggregateLine:
    """Tests for TeamAggregate.to_line."""

    def test_summary_line(self, three_player_rows: list[StatRow]) -> None:
        """The summary line is flagged and has no player id."""
        line = aggregate_team(_lines(three_player_rows, AggregateMode.TOTALS)).to_line()

        assert line.is_summary
        assert line.player_id is None
        assert line.name == "Team"
        assert line.get("points") == 10.0

    def test_custom_name(self, three_player_rows: list[StatRow]) -> None:
        """The summary row can be renamed."""
        team = aggregate_team(_lines(three_player_rows, AggregateMode.TOTALS))

        assert team.to_line("Team Average").name == "Team Average"
