"""Goal tracking: definitions, evaluation and progress history.

Submodules:
    models: Goal, GoalProgressRecord, GoalSummary and their enums
    evaluator: Status classification, period resolution and summaries
    log: Append-only ProgressLog

Key concepts:
    - Records snapshot the target at evaluation time
    - Unknown metrics fail the goal's evaluation, never default to off_track
    - Batch evaluation is best-effort per goal

Example:
    >>> from stats_engine.goals import GoalProgressEvaluator, ProgressLog, summarize
    >>> evaluator = GoalProgressEvaluator(catalog)
    >>> log = ProgressLog()
    >>> evaluator.record(goal, 68, game_id=3, log=log)
    >>> summarize([goal], log.latest_by_goal()).to_dict()
"""

from __future__ import annotations

from stats_engine.goals.evaluator import (
    BatchEvaluation,
    GoalProgressEvaluator,
    achieved_for_game,
    classify_status,
    meets_target,
    progress_percentage,
    resolve_period_value,
    summarize,
)
from stats_engine.goals.log import ProgressLog, latest_progress
from stats_engine.goals.models import (
    DEFAULT_SEASON,
    ComparisonOperator,
    Goal,
    GoalProgressRecord,
    GoalStatus,
    GoalSummary,
    PeriodType,
)

__all__ = [
    "DEFAULT_SEASON",
    "BatchEvaluation",
    "ComparisonOperator",
    "Goal",
    "GoalProgressEvaluator",
    "GoalProgressRecord",
    "GoalStatus",
    "GoalSummary",
    "PeriodType",
    "ProgressLog",
    "achieved_for_game",
    "classify_status",
    "latest_progress",
    "meets_target",
    "progress_percentage",
    "resolve_period_value",
    "summarize",
]
