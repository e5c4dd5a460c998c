"""
Mock API plumbing shared by all services.

This module provides:
- ApiError, the single error type services raise (with an HTTP-like code)
- MockApi, which simulates network latency before running an operation
- Generic pagination and substring search helpers
"""

import logging
import math
import time
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from ..models.query import PaginatedResponse, PaginationParams


logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_DELAY_MS = 500


class ApiError(Exception):
    """
    Error raised by service operations.

    Attributes:
        message: Human-readable message
        status_code: 400 bad input, 401 no session, 403 forbidden,
            404 not found, 409 conflict, 500 anything else
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ApiError({self.message!r}, status_code={self.status_code})"


class MockApi:
    """
    Simulated network call wrapper.

    Every call sleeps first and runs the operation afterwards, so the
    operation always sees the store as it is after the delay.

    Examples:
        >>> api = MockApi(base_delay_ms=0)
        >>> api.call(lambda: 42)
        42
    """

    def __init__(self, base_delay_ms: int = DEFAULT_DELAY_MS):
        """
        Initialize MockApi.

        Args:
            base_delay_ms: Latency of a standard call. Calls that ask for a
                different nominal delay (login, logout) are scaled by
                base_delay_ms / 500.
        """
        self.base_delay_ms = base_delay_ms

    def _effective_delay(self, delay_ms: int) -> float:
        return delay_ms * self.base_delay_ms / DEFAULT_DELAY_MS / 1000.0

    def call(self, operation: Callable[[], T], delay_ms: int = DEFAULT_DELAY_MS) -> T:
        """
        Run operation after the simulated delay.

        Args:
            operation: Zero-argument callable doing the actual work
            delay_ms: Nominal delay for this call

        Returns:
            Whatever operation returns

        Raises:
            ApiError: Raised by operation, or wrapping any other exception
                with status 500
        """
        delay = self._effective_delay(delay_ms)
        if delay > 0:
            time.sleep(delay)

        try:
            return operation()
        except ApiError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in API call: {e}", exc_info=True)
            raise ApiError(str(e) or "Unknown error occurred", 500) from e


def paginate(data: Sequence[T], params: PaginationParams) -> PaginatedResponse[T]:
    """
    Slice one page out of data.

    Args:
        data: Full (already filtered) list
        params: 1-indexed page and page size

    Returns:
        PaginatedResponse; an out-of-range page has empty data but the
        same total

    Raises:
        ValueError: If page_size is not positive

    Examples:
        >>> page = paginate(list(range(1, 26)), PaginationParams(page=3, page_size=10))
        >>> page.data, page.total, page.total_pages
        ([21, 22, 23, 24, 25], 25, 3)
    """
    if params.page_size <= 0:
        raise ValueError(f"page_size must be positive, got {params.page_size}")

    if params.page < 1:
        page_data: List[T] = []
    else:
        start = (params.page - 1) * params.page_size
        page_data = list(data[start:start + params.page_size])

    return PaginatedResponse(
        data=page_data,
        total=len(data),
        page=params.page,
        page_size=params.page_size,
        total_pages=math.ceil(len(data) / params.page_size),
    )


def unpaginated(data: Sequence[T]) -> PaginatedResponse[T]:
    """Wrap a full list as a single page."""
    return PaginatedResponse(
        data=list(data),
        total=len(data),
        page=1,
        page_size=len(data),
        total_pages=1,
    )


def paginate_or_all(data: Sequence[T], params: Optional[PaginationParams]) -> PaginatedResponse[T]:
    if params is not None:
        return paginate(data, params)
    return unpaginated(data)


def _field_value(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def filter_by_search(data: List[T], term: Optional[str], search_fields: Iterable[str]) -> List[T]:
    """
    Case-insensitive substring search across the named fields.

    Args:
        data: Items (dataclasses or dicts)
        term: Search term; empty or None returns data unchanged
        search_fields: Attribute names to search

    Returns:
        Items where at least one field contains term. Empty (falsy) field
        values never match.

    Examples:
        >>> filter_by_search(courses, "studio b", ["location"])
    """
    if not term:
        return data

    needle = term.lower()
    search_fields = list(search_fields)
    return [
        item for item in data
        if any(
            _field_value(item, name) and needle in str(_field_value(item, name)).lower()
            for name in search_fields
        )
    ]


def merge_changes(entity: T, changes: Dict[str, Any], **pinned: Any) -> T:
    """
    Return a copy of entity with changes applied.

    Keys in pinned always win over changes (used to keep ids and roles
    fixed). updated_at is stamped when the entity has that field.

    Raises:
        ApiError: 400 if changes name a field the entity does not have
    """
    accepted = {f.name for f in fields(entity) if f.init}
    unknown = sorted(set(changes) - accepted)
    if unknown:
        raise ApiError(
            f"Unknown field(s) for {type(entity).__name__}: {', '.join(unknown)}",
            400
        )

    merged = dict(changes)
    merged.update(pinned)
    if "updated_at" in accepted:
        merged["updated_at"] = datetime.now()
    return replace(entity, **merged)
