"""Ordering of stat lines for leaderboards and stat tables.

Placement rules, in priority order:
    1. The team summary row is always last, whatever the field or direction.
    2. Zero or absent values sit below every non-zero value in both
       directions; two of them compare equal.
    3. Non-zero values compare numerically, inverted for descending.
    4. The "name" field compares display names lexicographically.

Sorting is stable, so ties keep their incoming order.

Example:
    >>> ranked = sort_lines(table, "points", SortDirection.DESCENDING)
    >>> [line.get("points") for line in ranked]
    [12.0, 8.0, 0.0, 10.0]  # last row is the team summary
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from functools import cmp_to_key

from stats_engine.aggregate.players import StatLine
from stats_engine.numeric import is_number
from stats_engine.types import InvalidInputError

NAME_FIELD: str = "name"


class SortDirection(Enum):
    """Requested sort direction."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    @classmethod
    def parse(cls, value: SortDirection | str) -> SortDirection:
        """Accept an enum member or its string value ("asc"/"desc" too)."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if normalized in (member.value, member.value[:3], member.value[:4]):
                return member
        raise InvalidInputError(f"Unknown sort direction: {value!r}")


def _sign(left: object, right: object) -> int:
    return (left > right) - (left < right)


def _rankable(value: object) -> float | None:
    """Numeric value that takes part in ranking, None for zero/absent."""
    if value is None or not is_number(value) or value == 0:
        return None
    return value


def compare(
    a: StatLine,
    b: StatLine,
    field: str,
    direction: SortDirection | str = SortDirection.DESCENDING,
) -> int:
    """Compare two stat lines for display order.

    Args:
        a: First line.
        b: Second line.
        field: Column to sort by, or "name".
        direction: Ascending or descending.

    Returns:
        -1 if ``a`` sorts first, 1 if ``b`` sorts first, 0 if tied.
    """
    direction = SortDirection.parse(direction)
    if a.is_summary or b.is_summary:
        return _sign(a.is_summary, b.is_summary)

    if field == NAME_FIELD:
        result = _sign(a.name, b.name)
        return -result if direction is SortDirection.DESCENDING else result

    left = _rankable(a.get(field))
    right = _rankable(b.get(field))
    if left is None or right is None:
        # Zero/absent anchors at the bottom regardless of direction
        return _sign(left is None, right is None)

    result = _sign(left, right)
    return -result if direction is SortDirection.DESCENDING else result


def sort_lines(
    lines: Iterable[StatLine],
    field: str,
    direction: SortDirection | str = SortDirection.DESCENDING,
) -> list[StatLine]:
    """Stable sort of stat lines by ``field`` using :func:`compare`."""
    direction = SortDirection.parse(direction)
    return sorted(
        lines,
        key=cmp_to_key(lambda a, b: compare(a, b, field, direction)),
    )
