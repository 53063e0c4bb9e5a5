"""
Response envelopes.

Success: {"success": true, "data": ..., "message": ...}
Lists add "pagination": {"page", "limit", "total", "totalPages"}.
Errors: {"success": false, "error": <kind>, "code": ..., "message": ...}
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from libs.result import Error
from src.app.errors import kind_of
from src.app.use_cases.pagination import Page

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(serialization_alias="totalPages")


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    message: Optional[str] = None
    pagination: Pagination


def ok(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    return {"success": True, "data": data, "message": message}


def paginated(page: Page, message: Optional[str] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "data": page.items,
        "message": message,
        "pagination": Pagination(
            page=page.page, limit=page.limit, total=page.total, total_pages=page.total_pages
        ),
    }


def error_body(error: Error, message: Optional[str] = None) -> Dict[str, Any]:
    return {
        "success": False,
        "error": kind_of(error).value,
        "code": error.code,
        "message": message or error.message,
    }
