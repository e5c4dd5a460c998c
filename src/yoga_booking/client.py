"""
Studio client.

This module provides the StudioClient class, the caller-facing facade over
the studio services. Every method returns a Result instead of raising, and
composite methods (dashboard, roster, reports) gather data from several
services before building the view.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .models.booking import Attendance, Booking, Payment, RevenueSummary
from .models.dates import DateLike
from .models.offering import Course, Event, Offering, YogaClass
from .models.query import FilterOptions, PaginatedResponse, PaginationParams
from .models.result import Result
from .models.user import Student, Teacher, User
from .services.api import ApiError
from .services.attendance_service import AttendanceService
from .services.booking_service import BookingService
from .services.offering_service import OfferingService
from .services.user_service import UserService
from .views.availability import available_spots, is_fully_booked
from .views.catalog import CatalogItem, browse_offerings
from .views.dashboard import DashboardState, get_dashboard_state
from .views.payments_report import PaymentRow, enrich_payments, filter_payments_by_status
from .views.roster import RosterEntry, students_with_bookings
from .views.timeline import BookingTimeline, split_bookings


logger = logging.getLogger(__name__)


class StudioClient:
    """
    Facade over the studio services.

    This class provides high-level methods for:
    - Authentication and profiles
    - Browsing and managing offerings
    - Booking, cancelling and paying
    - Teacher dashboard, roster and payment reports

    No call is retried; a failed call reports its ApiError through the
    Result and stops.

    Examples:
        >>> container = DIContainer()
        >>> configure_default_services(container)
        >>> client = container.resolve(StudioClient)
        >>>
        >>> result = client.login("kari.nordmann@yoga.no", "secret")
        >>> if result.is_success:
        ...     revenue = client.teacher_revenue("teacher-0001").value
        ...     print(revenue.paid)
    """

    def __init__(
        self,
        users: UserService,
        offerings: OfferingService,
        bookings: BookingService,
        attendance: AttendanceService,
        page_size: int = 10
    ):
        """
        Initialize StudioClient.

        Args:
            users: Profiles and authentication
            offerings: Classes, courses and events
            bookings: Bookings, payments and revenue
            attendance: Attendance records
            page_size: Page size for listings requested by page number
        """
        self.users = users
        self.offerings = offerings
        self.bookings = bookings
        self.attendance = attendance
        self.page_size = page_size

    def _page(self, pagination: Optional[PaginationParams], page: Optional[int]) -> Optional[PaginationParams]:
        if pagination is None and page is not None:
            return PaginationParams(page=page, page_size=self.page_size)
        return pagination

    def _call(self, operation: Callable[[], Any], action: str) -> Result:
        try:
            return Result.success(operation())
        except ApiError as e:
            logger.warning(f"{action} failed ({e.status_code}): {e.message}")
            return Result.failure(e.message, e)

    # ========== AUTHENTICATION AND PROFILES ==========

    def login(self, email: str, password: str) -> Result[User]:
        """
        Log in as a seeded user.

        Returns:
            Result[User]; failure with status 401 for an unknown email

        Examples:
            >>> result = client.login("emma.andresen@example.no", "pw")
            >>> result.value.role
            'student'
        """
        return self._call(lambda: self.users.login(email, password), "Login")

    def logout(self) -> Result[None]:
        return self._call(self.users.logout, "Logout")

    def current_user(self) -> Result[Optional[User]]:
        return self._call(self.users.get_current_user, "Current user lookup")

    def update_profile(self, changes: Dict[str, Any]) -> Result[User]:
        """
        Update the logged-in user's own profile.

        Returns:
            Result[User]; failure with status 401 when logged out
        """
        def operation():
            user = self.users.get_current_user()
            if user is None:
                raise ApiError("Unauthorized: Authentication required", 401)
            if user.is_teacher:
                return self.users.update_teacher(user.id, changes)
            return self.users.update_student(user.id, changes)

        return self._call(operation, "Profile update")

    def teachers(self) -> Result[List[Teacher]]:
        return self._call(self.users.get_teachers, "Teacher listing")

    def students(self) -> Result[List[Student]]:
        return self._call(self.users.get_students, "Student listing")

    # ========== OFFERINGS ==========

    def classes(
        self,
        filters: Optional[FilterOptions] = None,
        pagination: Optional[PaginationParams] = None,
        page: Optional[int] = None
    ) -> Result[PaginatedResponse[YogaClass]]:
        """
        List classes.

        Args:
            filters: Search and narrowing options
            pagination: Explicit page request
            page: Page number using the configured page size (ignored
                when pagination is given); all matches when both are omitted
        """
        pagination = self._page(pagination, page)
        return self._call(lambda: self.offerings.get_classes(filters, pagination), "Class listing")

    def courses(
        self,
        filters: Optional[FilterOptions] = None,
        pagination: Optional[PaginationParams] = None,
        page: Optional[int] = None
    ) -> Result[PaginatedResponse[Course]]:
        pagination = self._page(pagination, page)
        return self._call(lambda: self.offerings.get_courses(filters, pagination), "Course listing")

    def events(
        self,
        filters: Optional[FilterOptions] = None,
        pagination: Optional[PaginationParams] = None,
        page: Optional[int] = None
    ) -> Result[PaginatedResponse[Event]]:
        pagination = self._page(pagination, page)
        return self._call(lambda: self.offerings.get_events(filters, pagination), "Event listing")

    def offering(self, item_id: str, item_type: str) -> Result[Offering]:
        return self._call(lambda: self.offerings.get_offering(item_id, item_type), "Offering lookup")

    def create_course(self, course: Course) -> Result[Course]:
        return self._call(lambda: self.offerings.create_course(course), "Course creation")

    def create_event(self, event: Event) -> Result[Event]:
        return self._call(lambda: self.offerings.create_event(event), "Event creation")

    def update_course(self, course_id: str, changes: Dict[str, Any]) -> Result[Course]:
        return self._call(lambda: self.offerings.update_course(course_id, changes), "Course update")

    def update_event(self, event_id: str, changes: Dict[str, Any]) -> Result[Event]:
        return self._call(lambda: self.offerings.update_event(event_id, changes), "Event update")

    def _all_offerings(self) -> List[Offering]:
        return (
            self.offerings.get_classes().data
            + self.offerings.get_courses().data
            + self.offerings.get_events().data
        )

    def catalog(
        self,
        item_type: str = "all",
        search: str = "",
        sort_by: str = "date"
    ) -> Result[List[CatalogItem]]:
        """Browse every offering with spots left computed."""
        def operation():
            return browse_offerings(
                self.offerings.get_classes().data,
                self.offerings.get_courses().data,
                self.offerings.get_events().data,
                item_type=item_type,
                search=search,
                sort_by=sort_by,
            )

        return self._call(operation, "Catalog")

    # ========== BOOKINGS ==========

    def book_offering(
        self,
        student_id: str,
        offering: Offering,
        notes: Optional[str] = None
    ) -> Result[Booking]:
        """
        Book a seat, refusing offerings with no spots left.

        The spot check uses the offering as passed in; the booking itself
        does not change the offering's counter.

        Returns:
            Result[Booking]; failure with status 409 when the offering is
            full, or the service's error
        """
        if is_fully_booked(offering):
            error = ApiError(f"No available spots for {offering.name}", 409)
            logger.info(f"Booking refused for {offering.id}: {available_spots(offering)} spots left")
            return Result.failure(error.message, error)

        return self._call(
            lambda: self.bookings.create_booking(student_id, offering.id, offering.item_type, notes),
            "Booking"
        )

    def cancel_booking(self, booking_id: str) -> Result[Booking]:
        return self._call(lambda: self.bookings.cancel_booking(booking_id), "Cancellation")

    def student_bookings(self, student_id: str) -> Result[List[Booking]]:
        return self._call(lambda: self.bookings.get_bookings_by_student_id(student_id), "Booking listing")

    def booking_timeline(self, student_id: str, now: Optional[DateLike] = None) -> Result[BookingTimeline]:
        """Split a student's bookings into upcoming and past."""
        def operation():
            own = self.bookings.get_bookings_by_student_id(student_id)
            return split_bookings(own, self._all_offerings(), now)

        return self._call(operation, "Booking timeline")

    # ========== PAYMENTS ==========

    def teacher_payments(self, teacher_id: str) -> Result[List[Payment]]:
        return self._call(lambda: self.bookings.get_payments_by_teacher_id(teacher_id), "Payment listing")

    def mark_paid(self, payment_id: str, transaction_id: str, payment_method: str) -> Result[Payment]:
        return self._call(
            lambda: self.bookings.mark_payment_as_paid(payment_id, transaction_id, payment_method),
            "Payment update"
        )

    def teacher_revenue(self, teacher_id: str) -> Result[RevenueSummary]:
        return self._call(lambda: self.bookings.get_teacher_revenue(teacher_id), "Revenue lookup")

    def payment_report(self, teacher_id: str, status: str = "all") -> Result[List[PaymentRow]]:
        """
        Teacher's payments with student and item names.

        Args:
            teacher_id: Teacher whose payments to report (must be logged in)
            status: Payment status to keep, or "all"
        """
        def operation():
            payments = self.bookings.get_payments_by_teacher_id(teacher_id)
            rows = enrich_payments(
                payments,
                self.users.get_students(),
                self.bookings.get_bookings().data,
                self._all_offerings(),
            )
            return filter_payments_by_status(rows, status)

        return self._call(operation, "Payment report")

    # ========== TEACHER VIEWS ==========

    def dashboard(self, teacher_id: str, reference_date: Optional[DateLike] = None) -> Result[DashboardState]:
        """
        Dashboard state for a teacher's courses and events.

        Args:
            teacher_id: Teacher whose offerings to show
            reference_date: "Now" (default: current time)
        """
        def operation():
            filters = FilterOptions(teacher_id=teacher_id)
            return get_dashboard_state(
                self.offerings.get_courses(filters).data,
                self.offerings.get_events(filters).data,
                reference_date if reference_date is not None else datetime.now(),
            )

        return self._call(operation, "Dashboard")

    def roster(self, teacher_id: str) -> Result[List[RosterEntry]]:
        """Students who booked the teacher's offerings (requires a teacher session)."""
        def operation():
            return students_with_bookings(
                teacher_id,
                self.users.get_students(),
                self.bookings.get_bookings().data,
                self.offerings.get_classes().data,
                self.offerings.get_courses().data,
                self.offerings.get_events().data,
            )

        return self._call(operation, "Roster")

    def record_attendance(self, booking_id: str, attended: bool, notes: Optional[str] = None) -> Result[Attendance]:
        return self._call(
            lambda: self.attendance.record_attendance(booking_id, attended, notes),
            "Attendance"
        )
