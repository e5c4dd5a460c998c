"""
Entity store: one repository per entity type.
"""

import logging
from dataclasses import dataclass, field

from ..models.booking import Attendance, Booking, Payment
from ..models.offering import Course, Event, YogaClass
from ..models.user import Student, Teacher
from .repository import InMemoryRepository, Repository


logger = logging.getLogger(__name__)


def _repo(name: str):
    return field(default_factory=lambda: InMemoryRepository(name))


@dataclass
class EntityStore:
    """
    All studio collections.

    Defaults to empty in-memory repositories; any field can be replaced by
    another Repository implementation.
    """

    teachers: Repository[Teacher] = _repo("teachers")
    students: Repository[Student] = _repo("students")
    classes: Repository[YogaClass] = _repo("classes")
    courses: Repository[Course] = _repo("courses")
    events: Repository[Event] = _repo("events")
    bookings: Repository[Booking] = _repo("bookings")
    payments: Repository[Payment] = _repo("payments")
    attendance: Repository[Attendance] = _repo("attendance")

    @classmethod
    def from_scenario(cls, data) -> "EntityStore":
        """
        Seed a store from fixture data.

        Args:
            data: ScenarioData (or anything with the same list attributes)

        Returns:
            New EntityStore holding copies of the fixture entities
        """
        store = cls(
            teachers=InMemoryRepository("teachers", data.teachers),
            students=InMemoryRepository("students", data.students),
            classes=InMemoryRepository("classes", data.classes),
            courses=InMemoryRepository("courses", data.courses),
            events=InMemoryRepository("events", data.events),
            bookings=InMemoryRepository("bookings", data.bookings),
            payments=InMemoryRepository("payments", data.payments),
            attendance=InMemoryRepository("attendance", data.attendance),
        )
        logger.info(f"Entity store seeded: {store.summary()}")
        return store

    def summary(self) -> dict:
        return {
            "teachers": self.teachers.count(),
            "students": self.students.count(),
            "classes": self.classes.count(),
            "courses": self.courses.count(),
            "events": self.events.count(),
            "bookings": self.bookings.count(),
            "payments": self.payments.count(),
            "attendance": self.attendance.count(),
        }
