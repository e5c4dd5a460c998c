"""
Teacher's student roster.
"""

from dataclasses import dataclass
from typing import List

from ..models.booking import Booking
from ..models.offering import Course, Event, YogaClass
from ..models.user import Student


@dataclass
class RosterEntry:
    """A student who booked one of the teacher's offerings."""

    student: Student
    booking_count: int
    active_bookings: int


def students_with_bookings(
    teacher_id: str,
    students: List[Student],
    bookings: List[Booking],
    classes: List[YogaClass],
    courses: List[Course],
    events: List[Event]
) -> List[RosterEntry]:
    """
    List students with bookings for the teacher's classes, courses or events.

    Args:
        teacher_id: Teacher whose offerings count

    Returns:
        RosterEntry per student, most bookings first. active_bookings
        counts bookings that are not cancelled.
    """
    teacher_item_ids = {
        o.id for o in list(classes) + list(courses) + list(events)
        if o.teacher_id == teacher_id
    }
    teacher_bookings = [b for b in bookings if b.item_id in teacher_item_ids]

    entries = []
    for student in students:
        own = [b for b in teacher_bookings if b.student_id == student.id]
        if not own:
            continue
        entries.append(RosterEntry(
            student=student,
            booking_count=len(own),
            active_bookings=sum(1 for b in own if b.status != "cancelled"),
        ))

    entries.sort(key=lambda entry: entry.booking_count, reverse=True)
    return entries
