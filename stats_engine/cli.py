"""CLI entrypoint using Typer.

This module defines the command-line interface for the stats engine.
Commands are organized into subcommand groups for the metric catalog,
stat aggregation, goal evaluation, and trend classification.

Input files are JSON: stat rows are an array of box-score records
(camelCase or snake_case keys), goals are an array of goal records, and
actuals map goal ids to measured values.

Example:
    $ stats-engine --help
    $ stats-engine metrics list --category defense
    $ stats-engine stats aggregate rows.json --mode totals --sort-by points
    $ stats-engine goals evaluate goals.json actuals.json --game-id 12
    $ stats-engine trend classify 10 12 14
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from stats_engine import __version__
from stats_engine.aggregate import (
    STAT_COLUMNS,
    AggregateMode,
    StatLine,
    aggregate_players,
    build_stat_table,
    coerce_stat_rows,
)
from stats_engine.config import get_settings
from stats_engine.goals import (
    Goal,
    GoalProgressEvaluator,
    GoalStatus,
    ProgressLog,
    progress_percentage,
    summarize,
)
from stats_engine.logging import setup_logging
from stats_engine.metrics import default_catalog
from stats_engine.ranking import NAME_FIELD, sort_lines
from stats_engine.trends import Trend, classify_player_trends, classify_trend
from stats_engine.types import InvalidInputError, PlayerId, StatsEngineError

# Initialize console for rich output
console = Console()

# Create main app
app = typer.Typer(
    name="stats-engine",
    help="Basketball team stats engine CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Create subcommand groups
metrics_app = typer.Typer(
    name="metrics",
    help="Metric catalog commands",
    no_args_is_help=True,
)
stats_app = typer.Typer(
    name="stats",
    help="Player and team aggregation commands",
    no_args_is_help=True,
)
goals_app = typer.Typer(
    name="goals",
    help="Goal evaluation commands",
    no_args_is_help=True,
)
trend_app = typer.Typer(
    name="trend",
    help="Performance trend commands",
    no_args_is_help=True,
)

# Register subcommand groups
app.add_typer(metrics_app, name="metrics")
app.add_typer(stats_app, name="stats")
app.add_typer(goals_app, name="goals")
app.add_typer(trend_app, name="trend")

STATUS_STYLES: dict[GoalStatus, str] = {
    GoalStatus.ON_TRACK: "green",
    GoalStatus.AT_RISK: "yellow",
    GoalStatus.OFF_TRACK: "red",
}

TREND_STYLES: dict[Trend, str] = {
    Trend.RAPIDLY_IMPROVING: "bold green",
    Trend.IMPROVING: "green",
    Trend.STEADY: "white",
    Trend.DECLINING: "red",
}

# (column, header) pairs shown in the stat table
DISPLAY_COLUMNS: tuple[tuple[str, str], ...] = (
    ("games_played", "GP"),
    ("points", "PTS"),
    ("rebounds", "REB"),
    ("assists", "AST"),
    ("steals", "STL"),
    ("blocks", "BLK"),
    ("fg_pct", "FG%"),
    ("three_pct", "3P%"),
    ("ft_pct", "FT%"),
    ("efficiency", "EFF"),
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]stats-engine[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Basketball team stats engine CLI.

    Aggregate box scores, rank players, evaluate team goals and classify
    performance trends.
    """
    setup_logging(level="DEBUG" if verbose else None)


# =============================================================================
# Helpers
# =============================================================================


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def _load_json(path: Path) -> Any:
    """Read a JSON input file, exiting with an error message on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        _fail(f"Cannot read {path}: {exc}")
    except json.JSONDecodeError as exc:
        _fail(f"{path} is not valid JSON: {exc}")


def _load_records(path: Path) -> list[Any]:
    records = _load_json(path)
    if not isinstance(records, list):
        _fail(f"{path} must contain a JSON array")
    return records


def _player_names(records: list[Any]) -> dict[PlayerId, str]:
    """Display names carried alongside upstream stat records."""
    names: dict[PlayerId, str] = {}
    for record in records:
        if not isinstance(record, dict):
            continue
        player_id = record.get("playerId", record.get("player_id"))
        name = record.get("playerName") or record.get("player_name")
        if player_id is not None and name:
            names[player_id] = str(name)
    return names


def _format_value(value: float | None) -> str:
    return "-" if value is None else f"{value:g}"


def _render_stat_table(lines: list[StatLine], mode: AggregateMode) -> None:
    table = Table(title=f"Player Stats ({mode.value})")
    table.add_column("Player", style="cyan")
    for _, header in DISPLAY_COLUMNS:
        table.add_column(header, justify="right")

    for line in lines:
        cells = [_format_value(line.get(column)) for column, _ in DISPLAY_COLUMNS]
        style = "bold" if line.is_summary else None
        table.add_row(line.name, *cells, style=style)

    console.print(table)


# =============================================================================
# Metrics Commands
# =============================================================================


@metrics_app.command("list")
def metrics_list(
    category: Annotated[
        str | None,
        typer.Option(
            "--category",
            "-c",
            help="Only show metrics in this category (exact match)",
        ),
    ] = None,
    include_inactive: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Include inactive metrics",
        ),
    ] = False,
) -> None:
    """List the metrics goals can track, ordered by name."""
    catalog = default_catalog()
    metrics = catalog.by_category(category) if category else catalog.all()
    if not include_inactive:
        metrics = [metric for metric in metrics if metric.is_active]

    if not metrics:
        console.print("[yellow]No metrics found[/yellow]")
        return

    table = Table(title="Metric Catalog")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Unit")
    table.add_column("Calculation")

    for metric in metrics:
        table.add_row(
            str(metric.id),
            metric.name,
            metric.category,
            metric.unit,
            metric.calculation_type.value,
        )

    console.print(table)


# =============================================================================
# Stats Commands
# =============================================================================


@stats_app.command("aggregate")
def stats_aggregate(
    rows_file: Annotated[
        Path,
        typer.Argument(help="JSON array of stat rows"),
    ],
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="totals or averages",
        ),
    ] = "averages",
    sort_by: Annotated[
        str,
        typer.Option(
            "--sort-by",
            "-s",
            help="Column to rank by, or 'name'",
        ),
    ] = "points",
    direction: Annotated[
        str,
        typer.Option(
            "--direction",
            "-d",
            help="asc or desc",
        ),
    ] = "desc",
    summary: Annotated[
        bool,
        typer.Option(
            "--summary/--no-summary",
            help="Append the team summary row",
        ),
    ] = True,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the table as JSON",
        ),
    ] = False,
) -> None:
    """Aggregate stat rows into a ranked player table.

    Zero or absent values rank below every non-zero value, and the team
    summary row always comes last.
    """
    settings = get_settings()

    try:
        aggregate_mode = AggregateMode(mode.strip().lower())
    except ValueError:
        _fail(f"Unknown mode {mode!r}, expected totals or averages")
    if sort_by != NAME_FIELD and sort_by not in STAT_COLUMNS:
        _fail(f"Unknown sort column {sort_by!r}")

    records = _load_records(rows_file)
    try:
        batch = coerce_stat_rows(records, max_rows=settings.max_stat_rows)
        aggregates = aggregate_players(batch.rows, names=_player_names(records))
        table = build_stat_table(aggregates, aggregate_mode, include_summary=summary)
        ranked = sort_lines(table, sort_by, direction)
    except StatsEngineError as exc:
        _fail(str(exc))

    if as_json:
        typer.echo(json.dumps([line.to_dict() for line in ranked], indent=2))
        return

    if batch.skipped:
        console.print(
            f"[yellow]Skipped {batch.skipped} malformed stat rows[/yellow]"
        )
    _render_stat_table(ranked, aggregate_mode)


# =============================================================================
# Goals Commands
# =============================================================================


@goals_app.command("evaluate")
def goals_evaluate(
    goals_file: Annotated[
        Path,
        typer.Argument(help="JSON array of goal records"),
    ],
    actuals_file: Annotated[
        Path,
        typer.Argument(help="JSON object mapping goal id to actual value"),
    ],
    game_id: Annotated[
        str | None,
        typer.Option(
            "--game-id",
            "-g",
            help="Game the actual values belong to",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print records and summary as JSON",
        ),
    ] = False,
) -> None:
    """Evaluate goals against measured values and summarize their status.

    Goals that cannot be evaluated (unknown metric, non-numeric values) are
    reported individually without stopping the rest.
    """
    raw_goals = _load_records(goals_file)
    raw_actuals = _load_json(actuals_file)
    if not isinstance(raw_actuals, dict):
        _fail(f"{actuals_file} must contain a JSON object")

    catalog = default_catalog()
    goals: list[Goal] = []
    errors: dict[str, str] = {}
    for index, record in enumerate(raw_goals):
        if not isinstance(record, dict):
            errors[f"#{index}"] = "Goal record must be a JSON object"
            continue
        try:
            goals.append(Goal.from_dict(record))
        except InvalidInputError as exc:
            errors[str(record.get("id", f"#{index}"))] = str(exc)

    actuals = {
        goal.id: raw_actuals[str(goal.id)]
        for goal in goals
        if str(goal.id) in raw_actuals
    }
    try:
        evaluator = GoalProgressEvaluator(catalog)
    except StatsEngineError as exc:
        _fail(str(exc))
    batch = evaluator.evaluate_all(goals, actuals, game_id)
    errors.update({str(goal_id): message for goal_id, message in batch.errors.items()})

    log = ProgressLog(batch.records)
    # Goals that errored are reported on their own, not as off track
    evaluated = [goal for goal in goals if goal.id not in batch.errors]
    goal_summary = summarize(evaluated, log.latest_by_goal())

    if as_json:
        payload = {
            "records": [record.to_dict() for record in batch.records],
            "errors": errors,
            "summary": goal_summary.to_dict(),
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    goals_by_id = {goal.id: goal for goal in goals}
    table = Table(title="Goal Progress")
    table.add_column("Goal", justify="right")
    table.add_column("Target", style="cyan")
    table.add_column("Actual", justify="right")
    table.add_column("Delta", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Status")

    for record in batch.records:
        goal = goals_by_id[record.goal_id]
        metric = catalog.find_metric(goal.metric_id)
        style = STATUS_STYLES[record.status]
        table.add_row(
            str(record.goal_id),
            goal.describe(metric) if metric else str(goal.metric_id),
            f"{record.actual_value:g}",
            f"{record.delta:+g}",
            f"{progress_percentage(record):g}%",
            f"[{style}]{record.status.value}[/{style}]",
        )

    console.print(table)
    console.print(
        Panel(
            f"[bold]Total:[/bold] {goal_summary.total_goals}\n"
            f"[green]On track:[/green] {goal_summary.on_track}\n"
            f"[yellow]At risk:[/yellow] {goal_summary.at_risk}\n"
            f"[red]Off track:[/red] {goal_summary.off_track}",
            title="Summary",
        )
    )
    for goal_id, message in errors.items():
        console.print(f"[red]Goal {goal_id}: {escape(message)}[/red]")


# =============================================================================
# Trend Commands
# =============================================================================


@trend_app.command("classify")
def trend_classify(
    values: Annotated[
        list[float],
        typer.Argument(help="Values oldest first (use -- before negative values)"),
    ],
) -> None:
    """Classify a series of values as improving, steady or declining."""
    try:
        result = classify_trend(values)
    except InvalidInputError as exc:
        _fail(str(exc))

    style = TREND_STYLES[result.trend]
    console.print(
        f"Trend: [{style}]{result.trend.value}[/{style}] ({result.change_pct:+d}%)"
    )


@trend_app.command("players")
def trend_players(
    rows_file: Annotated[
        Path,
        typer.Argument(help="JSON array of stat rows, oldest game first"),
    ],
    stat: Annotated[
        str,
        typer.Option(
            "--stat",
            "-s",
            help="Counting stat to classify",
        ),
    ] = "points",
) -> None:
    """Classify every player's trend for one stat.

    Games are ordered by their first appearance in the rows file.
    """
    settings = get_settings()
    records = _load_records(rows_file)
    try:
        batch = coerce_stat_rows(records, max_rows=settings.max_stat_rows)
        game_order = list(dict.fromkeys(row.game_id for row in batch.rows))
        trends = classify_player_trends(batch.rows, stat, game_order)
    except StatsEngineError as exc:
        _fail(str(exc))

    names = _player_names(records)
    table = Table(title=f"{stat} Trends")
    table.add_column("Player", style="cyan")
    table.add_column("Change", justify="right")
    table.add_column("Trend")

    for player_id, result in trends.items():
        style = TREND_STYLES[result.trend]
        table.add_row(
            names.get(player_id, str(player_id)),
            f"{result.change_pct:+d}%",
            f"[{style}]{result.trend.value}[/{style}]",
        )

    console.print(table)


if __name__ == "__main__":
    app()
