"""Box-score stat rows and coercion of upstream records.

Upstream providers hand over loosely-typed records (JSON objects with
camelCase or snake_case keys). This module validates them into immutable
``StatRow`` values. Records without player/game identity are skipped and
counted so callers can report the omission.

Example:
    >>> batch = coerce_stat_rows([
    ...     {"playerId": 7, "gameId": 1, "points": 12, "fgMade": 5, "fgAttempted": 9},
    ...     {"gameId": 1, "points": 4},
    ... ])
    >>> len(batch.rows), batch.skipped
    (1, 1)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from stats_engine.logging import WARN, get_logger
from stats_engine.types import (
    GameId,
    InputTooLargeError,
    MalformedInputError,
    PlayerId,
)

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

COUNTING_STATS: tuple[str, ...] = (
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "turnovers",
    "fouls_committed",
    "fg_made",
    "fg_attempted",
    "three_made",
    "three_attempted",
    "ft_made",
    "ft_attempted",
)

# (percentage column, made column, attempted column)
SHOOTING_SPLITS: tuple[tuple[str, str, str], ...] = (
    ("fg_pct", "fg_made", "fg_attempted"),
    ("three_pct", "three_made", "three_attempted"),
    ("ft_pct", "ft_made", "ft_attempted"),
)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class StatRow:
    """One player's box-score line for one game."""

    player_id: PlayerId
    game_id: GameId
    points: float = 0
    rebounds: float = 0
    assists: float = 0
    steals: float = 0
    blocks: float = 0
    turnovers: float = 0
    fouls_committed: float = 0
    fg_made: float = 0
    fg_attempted: float = 0
    three_made: float = 0
    three_attempted: float = 0
    ft_made: float = 0
    ft_attempted: float = 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> StatRow:
        """Validate a single upstream record.

        Raises:
            MalformedInputError: If identity fields are missing or a counting
                field is not numeric.
        """
        try:
            parsed = StatRowInput.model_validate(record)
        except ValidationError as exc:
            fields = sorted(
                {".".join(str(part) for part in err["loc"]) or "record" for err in exc.errors()}
            )
            raise MalformedInputError(
                f"Invalid stat record ({', '.join(fields)})"
            ) from exc
        return cls(**parsed.model_dump())

    def stat(self, name: str) -> float:
        """Value of a counting stat by column name."""
        if name not in COUNTING_STATS:
            raise KeyError(name)
        return getattr(self, name)


class StatRowInput(BaseModel):
    """Validation schema for upstream stat records.

    Accepts snake_case names or their camelCase aliases. Missing or null
    counting fields default to 0; NaN and infinite counts are rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        allow_inf_nan=False,
    )

    player_id: int | str
    game_id: int | str
    points: float = 0
    rebounds: float = 0
    assists: float = 0
    steals: float = 0
    blocks: float = 0
    turnovers: float = 0
    fouls_committed: float = 0
    fg_made: float = 0
    fg_attempted: float = 0
    three_made: float = 0
    three_attempted: float = 0
    ft_made: float = 0
    ft_attempted: float = 0

    @field_validator("player_id", "game_id")
    @classmethod
    def validate_identity(cls, v: int | str) -> int | str:
        """Reject blank identifiers."""
        if isinstance(v, str) and not v.strip():
            raise ValueError("identifier cannot be blank")
        return v

    @field_validator(*COUNTING_STATS, mode="before")
    @classmethod
    def default_missing_counts(cls, v: Any) -> Any:
        """Treat null counting fields as 0."""
        return 0 if v is None else v


@dataclass
class RowBatch:
    """Result of coercing a batch of upstream records.

    Attributes:
        rows: Valid stat rows, in input order.
        skipped: Number of records dropped as malformed.
        errors: One message per skipped record.
    """

    rows: list[StatRow] = field(default_factory=list)
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


# =============================================================================
# Functions
# =============================================================================


def check_row_limit(row_count: int, max_rows: int | None) -> None:
    """Raise InputTooLargeError when ``row_count`` exceeds ``max_rows``."""
    if max_rows is not None and row_count > max_rows:
        raise InputTooLargeError(row_count, max_rows)


def coerce_stat_rows(
    records: Iterable[Mapping[str, Any]],
    max_rows: int | None = None,
) -> RowBatch:
    """Validate upstream records into StatRows, best-effort per record.

    Args:
        records: Raw records from the upstream provider.
        max_rows: Optional cap on the number of records accepted.

    Returns:
        RowBatch with valid rows and a count of skipped records.

    Raises:
        InputTooLargeError: If more than ``max_rows`` records are supplied.
    """
    records = list(records)
    check_row_limit(len(records), max_rows)

    batch = RowBatch()
    for index, record in enumerate(records):
        try:
            batch.rows.append(StatRow.from_record(record))
        except MalformedInputError as exc:
            batch.skipped += 1
            batch.errors.append(f"record {index}: {exc}")

    if batch.skipped:
        logger.warning(
            f"{WARN} Skipped {{}} of {{}} stat records as malformed",
            batch.skipped,
            len(records),
        )
    logger.debug("Coerced {} stat rows", len(batch.rows))
    return batch
