"""
Result<T> wrapper for caller-facing operations.

Services raise ApiError; StudioClient catches it and hands back a Result so
that callers branch on is_success instead of wrapping every call in
try/except. The error (with its status code) stays attached to the failure.
"""

from dataclasses import dataclass
from typing import Optional, Generic, TypeVar, Callable
from enum import Enum


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of a studio operation.

    Attributes:
        status: SUCCESS or FAILURE
        value: Returned value on success
        error: Exception that caused the failure
        message: Human-readable outcome message

    Examples:
        >>> result = client.cancel_booking("booking-0001")
        >>> if result.is_success:
        ...     print(result.value.status)
        ... elif result.status_code == 403:
        ...     print("Not your booking")
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @property
    def status_code(self) -> Optional[int]:
        """HTTP-like status code of the failure, if the error carries one."""
        return getattr(self.error, "status_code", None)

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        return cls(
            status=ResultStatus.SUCCESS,
            value=value,
            message=message
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            error=error
        )

    def unwrap(self) -> T:
        """
        Unwrap the result value.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(
                f"Cannot unwrap failure result: {self.message}"
            )
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Map a function over the success value.

        Examples:
            >>> result = client.student_bookings("student-0001")
            >>> result.map(len).value
            2
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)

        try:
            new_value = func(self.value)
            return Result.success(new_value, self.message)
        except Exception as e:
            return Result.failure(str(e), e)
