"""Column filtering and sorting for list views."""
from typing import Any, Callable, Literal, Mapping, Sequence

SortDirection = Literal["asc", "desc"] | None


def next_sort_direction(current_field: str | None, current: SortDirection, field: str) -> SortDirection:
    """Clicking a column cycles asc -> desc -> unsorted; a new column starts at asc"""
    if current_field != field:
        return "asc"
    if current == "asc":
        return "desc"
    if current == "desc":
        return None
    return "asc"


def filter_rows(
    rows: Sequence[Mapping[str, Any]],
    filters: Mapping[str, str],
    values: Mapping[str, Callable[[Mapping[str, Any]], str]] | None = None,
) -> list[Mapping[str, Any]]:
    """Keep rows whose every filtered column contains the filter text, ignoring case"""
    values = values or {}
    active = {column: text.lower() for column, text in filters.items() if text}

    def matches(row: Mapping[str, Any]) -> bool:
        for column, text in active.items():
            getter = values.get(column)
            value = getter(row) if getter else row.get(column)
            if text not in ("" if value is None else str(value)).lower():
                return False
        return True

    return [row for row in rows if matches(row)]


def sort_rows(
    rows: Sequence[Mapping[str, Any]],
    field: str | None,
    direction: SortDirection,
    key: Callable[[Mapping[str, Any]], Any] | None = None,
) -> list[Mapping[str, Any]]:
    """Sort by one column; rows without a value always go last"""
    if not field or not direction:
        return list(rows)

    getter = key or (lambda row: row.get(field))
    present = [row for row in rows if getter(row) is not None]
    missing = [row for row in rows if getter(row) is None]
    present.sort(key=getter, reverse=direction == "desc")
    return present + missing
