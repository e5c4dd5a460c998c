"""
Attendance service: teachers record whether a booked student showed up.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..models.booking import Attendance
from ..store.entity_store import EntityStore
from ..store.session import AuthSession
from ..utils.ids import generate_id
from .api import ApiError, MockApi
from .guard import ensure_teacher


logger = logging.getLogger(__name__)


class AttendanceService:
    """
    Attendance records, one per booking.

    All operations require a teacher session.
    """

    def __init__(self, store: EntityStore, session: AuthSession, api: MockApi):
        self.store = store
        self.session = session
        self.api = api

    def get_attendance(
        self,
        class_id: Optional[str] = None,
        student_id: Optional[str] = None
    ) -> List[Attendance]:
        def operation():
            ensure_teacher(self.session.current_user(), "Only teachers can view attendance")
            records = self.store.attendance.list()
            if class_id:
                records = [a for a in records if a.class_id == class_id]
            if student_id:
                records = [a for a in records if a.student_id == student_id]
            return records

        return self.api.call(operation)

    def get_attendance_for_booking(self, booking_id: str) -> Optional[Attendance]:
        def operation():
            ensure_teacher(self.session.current_user(), "Only teachers can view attendance")
            return self.store.attendance.find_one(lambda a: a.booking_id == booking_id)

        return self.api.call(operation)

    def record_attendance(
        self,
        booking_id: str,
        attended: bool,
        notes: Optional[str] = None
    ) -> Attendance:
        """
        Record attendance for a booking.

        Student and offering ids are copied from the booking.

        Raises:
            ApiError: 403 for non-teachers, 404 for an unknown booking,
                409 when the booking already has a record
        """
        def operation():
            ensure_teacher(self.session.current_user(), "Only teachers can record attendance")

            booking = self.store.bookings.get(booking_id)
            if booking is None:
                raise ApiError("Booking not found", 404)

            if self.store.attendance.find_one(lambda a: a.booking_id == booking_id):
                raise ApiError("Attendance already recorded for this booking", 409)

            record = Attendance(
                id=generate_id(),
                booking_id=booking_id,
                student_id=booking.student_id,
                class_id=booking.item_id,
                attended=attended,
                notes=notes,
                recorded_at=datetime.now(),
            )
            self.store.attendance.add(record)
            logger.info(
                f"Attendance recorded: {booking_id} "
                f"({'attended' if attended else 'absent'})"
            )
            return record

        return self.api.call(operation)
