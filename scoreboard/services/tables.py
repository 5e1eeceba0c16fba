# scoreboard/services/tables.py
import unicodedata
from dataclasses import dataclass
from typing import List, Sequence, TypeVar

from fastapi import HTTPException

Row = TypeVar("Row")

LEADERBOARD_SORT_FIELDS = (
    "name",
    "highest_score",
    "total_score",
    "average_score",
    "interviews_given",
    "last_interview_date",
)
ACTIVENESS_SORT_FIELDS = (
    "name",
    "total_score",
    "average_score",
    "modules_completed",
    "completion_percentage",
)


@dataclass(frozen=True)
class SortState:
    field: str
    descending: bool = True


LEADERBOARD_DEFAULT_SORT = SortState("average_score")
ACTIVENESS_DEFAULT_SORT = SortState("total_score")


def toggle_sort(state: SortState, field: str) -> SortState:
    """Clicking the current column flips direction, a new column starts descending."""
    if state.field == field:
        return SortState(field, not state.descending)
    return SortState(field, True)


def name_sort_key(name: str):
    """
    Collation key for student names: letters compare without accents or
    case first, then with accents, then as written.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (base.casefold(), decomposed.casefold(), name)


def filter_by_name(rows: Sequence[Row], search: str = "") -> List[Row]:
    needle = (search or "").lower()
    return [row for row in rows if needle in row.name.lower()]


def sort_rows(
    rows: Sequence[Row],
    field: str,
    descending: bool = True,
    allowed_fields: Sequence[str] = LEADERBOARD_SORT_FIELDS,
) -> List[Row]:
    """
    Sort table rows on one column.

    Python's sort is stable in both directions, so rows with equal keys keep
    their incoming order.
    """
    if field not in allowed_fields:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot sort by '{field}'. Choose one of: {', '.join(allowed_fields)}",
        )

    if field == "name":
        key = lambda row: name_sort_key(row.name)  # noqa: E731
    else:
        key = lambda row: getattr(row, field)  # noqa: E731

    return sorted(rows, key=key, reverse=descending)


def build_table(
    rows: Sequence[Row],
    search: str = "",
    sort: SortState = LEADERBOARD_DEFAULT_SORT,
    allowed_fields: Sequence[str] = LEADERBOARD_SORT_FIELDS,
) -> List[Row]:
    return sort_rows(
        filter_by_name(rows, search),
        sort.field,
        sort.descending,
        allowed_fields=allowed_fields,
    )
