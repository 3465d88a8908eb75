"""
Composable optional query predicates.

Every factory returns either a SQL expression or ``None``. ``None`` means the
filter value was absent and the predicate imposes no restriction; ``all_of``
drops those and ANDs whatever is left, so callers can pass every optional
search parameter straight through without branching.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from sqlalchemy import and_, func, select, true
from sqlalchemy.sql import ColumnElement

Predicate = Optional[ColumnElement[bool]]

_LIKE_ESCAPE = "\\"


def _is_absent(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def escape_like(text: str) -> str:
    return (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def equals(column, value: Any) -> Predicate:
    if _is_absent(value):
        return None
    return column == value


def contains_ci(column, text: Optional[str]) -> Predicate:
    """Case-insensitive substring match; blank text matches everything."""
    if _is_absent(text):
        return None
    pattern = f"%{escape_like(text.strip().casefold())}%"
    return func.lower(column).like(pattern, escape=_LIKE_ESCAPE)


def on_or_after(column, value: Any) -> Predicate:
    if _is_absent(value):
        return None
    return column >= value


def at_least(expr, value: Any) -> Predicate:
    if _is_absent(value):
        return None
    return expr >= value


def at_most(expr, value: Any) -> Predicate:
    if _is_absent(value):
        return None
    return expr <= value


def count_of(child_id_column, *where, correlate=None, joins=()):
    """Correlated ``SELECT count(child)`` for live child counts.

    ``joins`` is a sequence of ``(target, onclause)`` pairs for counts that
    reach the child through an intermediate table.
    """
    stmt = select(func.count(child_id_column))
    for target, onclause in joins:
        stmt = stmt.join(target, onclause)
    stmt = stmt.where(*where)
    if correlate is not None:
        stmt = stmt.correlate(correlate)
    return stmt.scalar_subquery()


def all_of(*predicates: Predicate) -> ColumnElement[bool]:
    present = [p for p in predicates if p is not None]
    if not present:
        return true()
    if len(present) == 1:
        return present[0]
    return and_(*present)


class FilterBuilder:
    """Collects optional predicates and combines them with AND.

        criteria = (
            FilterBuilder()
            .add(company_id, has_company_id)
            .add(name_filter, name_contains)
            .build()
        )
    """

    def __init__(self) -> None:
        self._predicates: list[Predicate] = []

    def add(self, value: Any, factory: Callable[[Any], Predicate]) -> "FilterBuilder":
        if not _is_absent(value):
            self._predicates.append(factory(value))
        return self

    def build(self) -> ColumnElement[bool]:
        return all_of(*self._predicates)
