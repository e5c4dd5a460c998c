"""
Pagination and filtering parameter types.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from .offering import ItemType


T = TypeVar('T')


@dataclass
class PaginationParams:
    """
    Page request.

    Attributes:
        page: 1-indexed page number
        page_size: Items per page
    """

    page: int = 1
    page_size: int = 10


@dataclass
class PaginatedResponse(Generic[T]):
    """One page of results plus totals over the whole filtered list."""

    data: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 1


@dataclass
class FilterOptions:
    """
    Optional filters accepted by list endpoints.

    Each endpoint applies only the filters that make sense for its entity
    and ignores the rest.
    """

    search: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    teacher_id: Optional[str] = None
    type: Optional[ItemType] = None
    drop_in_only: bool = False
    status: Optional[str] = None
