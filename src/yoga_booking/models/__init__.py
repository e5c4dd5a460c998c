"""
Studio data models: users, offerings, bookings, payments and query types.
"""

from .user import User, Teacher, Student, EmergencyContact, user_from_dict
from .offering import YogaClass, Course, CourseSession, Event, Offering, generate_course_sessions
from .booking import Booking, Payment, Attendance, RevenueSummary
from .query import PaginationParams, PaginatedResponse, FilterOptions
from .result import Result, ResultStatus

__all__ = [
    "User",
    "Teacher",
    "Student",
    "EmergencyContact",
    "user_from_dict",
    "YogaClass",
    "Course",
    "CourseSession",
    "Event",
    "Offering",
    "generate_course_sessions",
    "Booking",
    "Payment",
    "Attendance",
    "RevenueSummary",
    "PaginationParams",
    "PaginatedResponse",
    "FilterOptions",
    "Result",
    "ResultStatus",
]
