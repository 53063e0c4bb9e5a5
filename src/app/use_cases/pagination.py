import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from libs.result import Error
from src.app.errors import ValidationError

T = TypeVar("T")

MAX_PAGE_SIZE = 100


class Page(BaseModel, Generic[T]):
    """One page of a filtered listing"""

    items: List[T]
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, items: List[T], page: int, limit: int, total: int) -> "Page[T]":
        return cls(
            items=items,
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


def check_pagination(page: int, limit: int) -> Optional[Error]:
    if page < 1:
        return ValidationError("INVALID_PAGINATION", "page must be at least 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        return ValidationError(
            "INVALID_PAGINATION", f"limit must be between 1 and {MAX_PAGE_SIZE}"
        )
    return None
