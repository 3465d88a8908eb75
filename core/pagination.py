from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, List, Mapping, Sequence, TypeVar

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from core.config_loader import settings
from core.exceptions import InvalidSortError

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    size: int
    pages: int


@dataclass
class PageParams:
    page: int = 0
    size: int = settings.DEFAULT_PAGE_SIZE
    sort: List[str] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return self.page * self.size


def page_params(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"),
    sort: List[str] = Query([], description="property or property,asc|desc; repeatable"),
) -> PageParams:
    return PageParams(page=page, size=size, sort=sort)


def resolve_sort(sort: Sequence[str], sortable: Mapping[str, object], kind: str) -> list:
    """Turn ``["name,desc", "id"]`` into ORDER BY clauses over whitelisted columns."""
    clauses = []
    for raw in sort:
        prop, _, direction = raw.partition(",")
        prop = prop.strip()
        direction = direction.strip().lower() or "asc"
        if prop not in sortable:
            raise InvalidSortError(prop, kind)
        if direction not in ("asc", "desc"):
            raise InvalidSortError(prop, kind, direction=direction)
        column = sortable[prop]
        clauses.append(column.desc() if direction == "desc" else column.asc())
    return clauses


def paginate(
    db: Session,
    stmt: Select,
    params: PageParams,
    *,
    kind: str,
    sortable: Mapping[str, object],
    default_order: Sequence = (),
    id_column=None,
) -> dict:
    total = db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0

    order = resolve_sort(params.sort, sortable, kind) or list(default_order)
    if id_column is not None:
        # stable ordering across pages when the requested sort has ties
        order.append(id_column.asc())

    rows = list(db.scalars(stmt.order_by(*order).offset(params.offset).limit(params.size)))
    return page_of(rows, total, params)


def page_of(items: list, total: int, params: PageParams) -> dict:
    return {
        "items": items,
        "total": total,
        "page": params.page,
        "size": params.size,
        "pages": math.ceil(total / params.size) if params.size else 0,
    }
