"""
Offering data models.

An offering is anything a student can book: a single drop-in class
(YogaClass), a weekly recurring course (Course, with one CourseSession per
week) or an event. Every offering carries a capacity and a running counter
of taken spots; the counter is owned by the studio, not by clients.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Literal, Optional, Union

from .base import DictModel


ItemType = Literal["single", "course", "event"]

ITEM_TYPES = ("single", "course", "event")

_OFFERING_DATETIMES = ("created_at", "updated_at")


@dataclass
class YogaClass(DictModel):
    """
    Single-date class.

    Attributes:
        id: Unique class identifier
        teacher_id: Owning teacher
        name: Class name
        date: Class date
        start_time: Start time (HH:MM)
        duration: Duration in minutes
        capacity: Maximum number of bookings
        price: Price per booking
        location: Studio or venue
        drop_in_available: Whether drop-in attendance is allowed
        booked_count: Spots taken
    """

    DATETIME_FIELDS = ("date",) + _OFFERING_DATETIMES

    id: str
    teacher_id: str
    name: str
    date: datetime
    start_time: str
    duration: int
    capacity: int
    price: float
    location: str
    description: Optional[str] = None
    drop_in_available: bool = True
    booked_count: int = 0
    image_url: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    item_type: ItemType = field(default="single", init=False, repr=False)

    @property
    def display_date(self) -> datetime:
        return self.date

    @property
    def taken_spots(self) -> int:
        return self.booked_count


@dataclass
class CourseSession(DictModel):
    """One weekly meeting of a course."""

    DATETIME_FIELDS = ("date",)

    id: str
    course_id: str
    session_number: int
    date: datetime
    start_time: str
    duration: int
    topic: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class Course(DictModel):
    """
    Weekly recurring course.

    Attributes:
        number_of_weeks: Length of the series
        start_date: Date of the first session
        recurring_day_of_week: 0 = Sunday ... 6 = Saturday
        recurring_time: Start time of every session (HH:MM)
        sessions: Generated weekly sessions
        enrolled_count: Spots taken
    """

    DATETIME_FIELDS = ("start_date",) + _OFFERING_DATETIMES

    id: str
    teacher_id: str
    name: str
    number_of_weeks: int
    start_date: datetime
    recurring_day_of_week: int
    recurring_time: str
    duration: int
    capacity: int
    price: float
    location: str
    description: Optional[str] = None
    sessions: List[CourseSession] = field(default_factory=list)
    enrolled_count: int = 0
    image_url: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    item_type: ItemType = field(default="course", init=False, repr=False)

    @classmethod
    def from_dict(cls, d):
        data = dict(d)
        data["sessions"] = [
            s if isinstance(s, CourseSession) else CourseSession.from_dict(s)
            for s in data.get("sessions") or []
        ]
        return super().from_dict(data)

    @property
    def display_date(self) -> datetime:
        return self.start_date

    @property
    def end_date(self) -> datetime:
        """Date of the last weekly session."""
        weeks = max(self.number_of_weeks - 1, 0)
        return self.start_date + timedelta(weeks=weeks)

    @property
    def taken_spots(self) -> int:
        return self.enrolled_count


@dataclass
class Event(DictModel):
    """Single-date event with a category tag (workshop, retreat, ...)."""

    DATETIME_FIELDS = ("date",) + _OFFERING_DATETIMES

    id: str
    teacher_id: str
    name: str
    event_type: str
    date: datetime
    start_time: str
    duration: int
    capacity: int
    price: float
    location: str
    description: Optional[str] = None
    drop_in_available: bool = False
    booked_count: int = 0
    image_url: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    item_type: ItemType = field(default="event", init=False, repr=False)

    @property
    def display_date(self) -> datetime:
        return self.date

    @property
    def taken_spots(self) -> int:
        return self.booked_count


Offering = Union[YogaClass, Course, Event]


def generate_course_sessions(course: Course) -> List[CourseSession]:
    """
    Build one session per week starting at the course's start date.

    Args:
        course: Course to generate sessions for

    Returns:
        List of CourseSession, numbered from 1

    Examples:
        >>> sessions = generate_course_sessions(course)
        >>> sessions[0].id
        'course-0001-session-1'
    """
    return [
        CourseSession(
            id=f"{course.id}-session-{i + 1}",
            course_id=course.id,
            session_number=i + 1,
            date=course.start_date + timedelta(weeks=i),
            start_time=course.recurring_time,
            duration=course.duration,
            topic=f"Uke {i + 1}",
        )
        for i in range(course.number_of_weeks)
    ]
