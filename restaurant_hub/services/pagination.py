"""Offset pagination for list endpoints."""

from typing import Any

from sqlalchemy.orm import Query

from restaurant_hub.schemas.common import Pagination


def paginate(query: Query, page: int, limit: int) -> tuple[list[Any], Pagination]:
    """Return one page of rows plus the paging block for the full result."""
    total: int = query.order_by(None).count()
    offset: int = (page - 1) * limit
    rows: list[Any] = query.offset(offset).limit(limit).all()
    return rows, Pagination.build(page=page, limit=limit, total=total)
