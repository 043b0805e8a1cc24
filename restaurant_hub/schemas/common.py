"""Response envelope and shared field types."""

from decimal import Decimal
from math import ceil
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, PlainSerializer, StringConstraints

T = TypeVar("T")

Money = Annotated[Decimal, PlainSerializer(lambda value: float(value), return_type=float, when_used="json")]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def reject_null(value: Any) -> Any:
    """Partial updates may omit a NOT NULL field but never send it as null."""
    if value is None:
        raise ValueError("may not be null")
    return value


class Pagination(BaseModel):
    """Paging block attached to list responses."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=ceil(total / limit) if limit else 0)


class MessageResponse(BaseModel):
    """Success envelope without a payload."""

    success: bool = True
    message: str


class Envelope(BaseModel, Generic[T]):
    """Uniform success wrapper ``{success, data, message}``."""

    success: bool = True
    data: T
    message: str


class PaginatedEnvelope(Envelope[list[T]], Generic[T]):
    """Success wrapper for paged lists."""

    pagination: Pagination
