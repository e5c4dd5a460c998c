"""
Mock studio API: services over the entity store.
"""

from .api import ApiError, MockApi, paginate, unpaginated, filter_by_search
from .user_service import UserService
from .offering_service import OfferingService
from .booking_service import BookingService
from .attendance_service import AttendanceService

__all__ = [
    "ApiError",
    "MockApi",
    "paginate",
    "unpaginated",
    "filter_by_search",
    "UserService",
    "OfferingService",
    "BookingService",
    "AttendanceService",
]
