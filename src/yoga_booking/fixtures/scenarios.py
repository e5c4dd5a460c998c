"""
Named development scenarios.

Each scenario is a table of courses, events and booking fills owned by
teacher-0001, laid out around the current week so the dashboard has
something interesting to show: everything full, nothing at all, only
events, lots of unpaid bills, and so on.

Scenario selection is a development affordance: the chosen name lives in a
local-storage-like SessionStorage under SCENARIO_STORAGE_KEY and is honoured
only in dev mode.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from ..models.booking import Booking, Payment
from ..models.dates import DateLike, start_of_day, start_of_week
from ..models.offering import Course, Event, generate_course_sessions
from ..models.user import Student
from ..store.session import SessionStorage
from .seed import DEFAULT_CURRENCY, ScenarioData, default_students, default_teachers


logger = logging.getLogger(__name__)

SCENARIO_STORAGE_KEY = "yoga_booking_dev_scenario"

SCENARIO_OWNER = "teacher-0001"


@dataclass
class CourseSpec:
    id: str
    name: str
    description: str
    capacity: int
    enrolled: int
    start: datetime
    time: str
    duration: int
    price: float
    location: str
    day_of_week: int
    weeks: int


@dataclass
class EventSpec:
    id: str
    name: str
    description: str
    event_type: str
    date: datetime
    time: str
    duration: int
    capacity: int
    booked: int
    price: float
    location: str
    drop_in: bool


@dataclass
class Fill:
    """
    Bookings (and payments) for one offering.

    Booking i goes to student (i + offset) mod len(students). Payment i is
    paid while i < paid, pending while i < pending_until (all remaining
    when None), overdue after that.

    Attributes:
        payments: Only the first N bookings get a payment (None: all)
        confirmed: Bookings from this index on are pending (None: all confirmed)
        overdue_due_in: Due-date offset in days for overdue payments
    """

    item_id: str
    item_type: str
    count: int
    amount: float
    paid: int
    offset: int = 0
    pending_until: Optional[int] = None
    payments: Optional[int] = None
    confirmed: Optional[int] = None
    overdue_due_in: Optional[int] = None

    def payment_status(self, i: int) -> str:
        if i < self.paid:
            return "paid"
        if self.pending_until is None or i < self.pending_until:
            return "pending"
        return "overdue"


@dataclass
class ScenarioLayout:
    courses: List[CourseSpec]
    events: List[EventSpec]
    fills: List[Fill]
    students: Callable[[List[Student]], List[Student]] = list


def _course(spec: CourseSpec, now: datetime) -> Course:
    course = Course(
        id=spec.id,
        teacher_id=SCENARIO_OWNER,
        name=spec.name,
        description=spec.description,
        number_of_weeks=spec.weeks,
        start_date=spec.start,
        recurring_day_of_week=spec.day_of_week,
        recurring_time=spec.time,
        duration=spec.duration,
        capacity=spec.capacity,
        price=spec.price,
        location=spec.location,
        enrolled_count=spec.enrolled,
        created_at=now,
        updated_at=now,
    )
    course.sessions = generate_course_sessions(course)
    return course


def _event(spec: EventSpec, now: datetime) -> Event:
    return Event(
        id=spec.id,
        teacher_id=SCENARIO_OWNER,
        name=spec.name,
        description=spec.description,
        event_type=spec.event_type,
        date=spec.date,
        start_time=spec.time,
        duration=spec.duration,
        capacity=spec.capacity,
        booked_count=spec.booked,
        price=spec.price,
        location=spec.location,
        drop_in_available=spec.drop_in,
        created_at=now,
        updated_at=now,
    )


def _fill(fill: Fill, students: List[Student], today: datetime, currency: str) -> Tuple[List[Booking], List[Payment]]:
    bookings: List[Booking] = []
    payments: List[Payment] = []
    booked_at = today - timedelta(days=7)

    for i in range(fill.count):
        status = "confirmed" if fill.confirmed is None or i < fill.confirmed else "pending"
        booking = Booking(
            id=f"booking-{fill.item_id}-{i + 1:03d}",
            student_id=students[(i + fill.offset) % len(students)].id,
            item_id=fill.item_id,
            item_type=fill.item_type,
            booking_date=booked_at,
            status=status,
            created_at=booked_at,
            updated_at=today,
        )
        bookings.append(booking)

        if fill.payments is not None and i >= fill.payments:
            continue

        payment_status = fill.payment_status(i)
        due = today + timedelta(days=7)
        if payment_status == "overdue" and fill.overdue_due_in is not None:
            due = today + timedelta(days=fill.overdue_due_in)
        paid = payment_status == "paid"
        payments.append(Payment(
            id=f"payment-{booking.id}",
            booking_id=booking.id,
            student_id=booking.student_id,
            teacher_id=SCENARIO_OWNER,
            amount=fill.amount,
            currency=currency,
            status=payment_status,
            payment_method="Vipps" if paid else None,
            paid_at=today if paid else None,
            due_date=due,
            created_at=booking.created_at,
            updated_at=today,
        ))
    return bookings, payments


def _with_second_copies(students: List[Student]) -> List[Student]:
    copies = [replace(s, id=f"{s.id}-2", email=f"2-{s.email}") for s in students]
    return list(students) + copies


def _layouts(today: datetime) -> Dict[str, ScenarioLayout]:
    monday = start_of_week(today)
    saturday = monday + timedelta(days=5)
    next_week = monday + timedelta(days=7)

    def days(n: int) -> datetime:
        return today + timedelta(days=n)

    return {
        "empty": ScenarioLayout([], [], [], students=lambda s: []),

        "fully_booked": ScenarioLayout(
            courses=[
                CourseSpec("course-full-1", "Hatha Yoga - Fullbooket", "Fullbooket kurs",
                           12, 12, monday, "18:00", 90, 1800, "Studio A", 1, 8),
                CourseSpec("course-full-2", "Vinyasa Flow - Fullbooket", "Fullbooket kurs",
                           15, 15, monday + timedelta(days=1), "19:00", 60, 1600, "Studio B", 2, 6),
            ],
            events=[
                EventSpec("event-full-1", "Yin Yoga Workshop - Fullbooket", "Fullbooket workshop",
                          "Workshop", days(5), "10:00", 180, 20, 20, 450, "Studio A", False),
            ],
            fills=[
                Fill("course-full-1", "course", 12, 1800, paid=8),
                Fill("course-full-2", "course", 15, 1600, paid=10),
                Fill("event-full-1", "event", 20, 450, paid=20),
            ],
        ),

        "partial_booked": ScenarioLayout(
            courses=[
                CourseSpec("course-partial-1", "Morgenyoga", "Start dagen med energi",
                           10, 6, monday, "07:00", 60, 1500, "Studio A", 1, 8),
                CourseSpec("course-partial-2", "Kundalini Yoga", "Kraftfull energi-yoga",
                           12, 4, monday + timedelta(days=1), "18:30", 90, 1900, "Studio B", 2, 6),
            ],
            events=[
                EventSpec("event-partial-1", "Meditasjon og Mindfulness", "Ro og fokus",
                          "Workshop", days(10), "18:00", 120, 15, 8, 350, "Studio A", True),
                EventSpec("event-partial-2", "Yoga Retreat Helg", "Helaften med yoga",
                          "Retreat", days(14), "10:00", 480, 25, 12, 2500, "Retreat Senter", False),
            ],
            fills=[
                Fill("course-partial-1", "course", 6, 1500, paid=4),
                Fill("course-partial-2", "course", 4, 1900, paid=4, offset=6),
                Fill("event-partial-1", "event", 8, 350, paid=8),
                Fill("event-partial-2", "event", 12, 2500, paid=8, confirmed=10),
            ],
        ),

        "no_courses": ScenarioLayout(
            courses=[],
            events=[
                EventSpec("event-only-1", "Breathwork Workshop", "Utforsk pusteteknikker",
                          "Workshop", days(2), "18:00", 120, 20, 15, 400, "Studio A", True),
                EventSpec("event-only-2", "Sound Bath Healing", "Healing med lyd",
                          "Workshop", days(7), "19:00", 90, 30, 22, 350, "Studio B", True),
                EventSpec("event-only-3", "Yoga Teacher Training Info", "Gratis informasjonsmøte",
                          "Info", days(14), "18:30", 60, 50, 35, 0, "Studio A", True),
            ],
            fills=[
                Fill("event-only-1", "event", 15, 400, paid=12, payments=12),
                Fill("event-only-2", "event", 22, 350, paid=18),
            ],
        ),

        "no_events": ScenarioLayout(
            courses=[
                CourseSpec("course-only-1", "Ashtanga Yoga Nybegynner", "Klassisk Ashtanga for nybegynnere",
                           8, 5, monday, "17:00", 90, 2200, "Studio A", 1, 10),
                CourseSpec("course-only-2", "Restorative Yoga", "Dyp avslapning",
                           10, 8, monday + timedelta(days=2), "19:00", 60, 1400, "Studio B", 3, 8),
                CourseSpec("course-only-3", "Power Yoga", "Intensiv styrketrening",
                           15, 10, monday + timedelta(days=1), "18:00", 90, 1800, "Studio C", 2, 12),
            ],
            events=[],
            fills=[
                Fill("course-only-1", "course", 5, 2200, paid=5),
                Fill("course-only-2", "course", 8, 1400, paid=6, offset=5),
                Fill("course-only-3", "course", 10, 1800, paid=10),
            ],
        ),

        "many_students": ScenarioLayout(
            courses=[
                CourseSpec("course-many-1", "Popular Morning Flow", "Populær morgentime",
                           20, 18, monday, "06:30", 60, 1600, "Studio A", 1, 20),
                CourseSpec("course-many-2", "Evening Relaxation", "Kveldsavslapning",
                           25, 22, monday, "20:00", 60, 1400, "Studio B", 1, 16),
            ],
            events=[
                EventSpec("event-many-1", "Community Yoga Day", "Fellesskap og yoga",
                          "Special", days(3), "10:00", 240, 50, 45, 100, "Park", True),
            ],
            fills=[
                Fill("course-many-1", "course", 18, 1600, paid=18),
                Fill("course-many-2", "course", 22, 1400, paid=20),
                Fill("event-many-1", "event", 45, 100, paid=45),
            ],
            students=_with_second_copies,
        ),

        "unpaid_bills": ScenarioLayout(
            courses=[
                CourseSpec("course-unpaid-1", "Premium Yoga Series", "Eksklusivt kurs",
                           10, 8, monday + timedelta(days=1), "18:00", 120, 3500, "Studio A", 2, 10),
            ],
            events=[
                EventSpec("event-unpaid-1", "Advanced Workshop", "Workshop for viderekomne",
                          "Workshop", days(-5), "10:00", 180, 15, 12, 800, "Studio B", False),
            ],
            fills=[
                Fill("course-unpaid-1", "course", 8, 3500, paid=2, pending_until=6),
                Fill("event-unpaid-1", "event", 12, 800, paid=3, pending_until=8, overdue_due_in=-3),
            ],
        ),

        "normal": ScenarioLayout(
            courses=[
                CourseSpec("course-normal-1", "Morgen Hatha Yoga",
                           "Start dagen med en rolig og styrkende yoga-praksis. Perfekt for alle nivåer.",
                           12, 8, monday, "07:00", 60, 1500, "Studio A", 1, 8),
                CourseSpec("course-normal-2", "Vinyasa Flow - Kveld",
                           "Dynamisk yoga-sekvens som bygger styrke og fleksibilitet. "
                           "For deg med litt erfaring.",
                           15, 11, monday + timedelta(days=1), "18:30", 90, 1800, "Studio B", 2, 10),
                CourseSpec("course-normal-3", "Yin Yoga & Meditasjon",
                           "Dyp avslapning og lange, rolige strekk. Perfekt for stressmestring og fleksibilitet.",
                           10, 7, monday + timedelta(days=2), "19:00", 90, 1600, "Studio C", 3, 8),
                CourseSpec("course-normal-4", "Nybegynner Yoga",
                           "Helt ny til yoga? Dette er kurset for deg! Vi går gjennom det "
                           "grunnleggende i et trygt tempo.",
                           12, 10, monday, "17:00", 75, 1400, "Studio A", 1, 6),
                CourseSpec("course-normal-5", "Power Yoga Weekend",
                           "Intensiv og utfordrende yoga for de som vil ha en real treningsøkt.",
                           15, 9, saturday, "10:00", 90, 1700, "Studio B", 6, 8),
            ],
            events=[
                EventSpec("event-normal-1", "Breathwork & Sound Bath",
                          "En transformerende opplevelse med pusteteknikker og healing lyder. "
                          "Inkluderer te og snacks.",
                          "Workshop", days(2), "18:00", 150, 20, 14, 450, "Studio A", True),
                EventSpec("event-normal-2", "Yoga for Løpere",
                          "Spesialtilpasset workshop for løpere. Fokus på strekk, styrke og skadeforebygging.",
                          "Workshop", saturday, "13:00", 120, 15, 8, 350, "Studio C", True),
                EventSpec("event-normal-3", "Intro til Ashtanga",
                          "Gratis introduksjonsklasse til Ashtanga yoga. Perfekt for nybegynnere!",
                          "Intro", next_week + timedelta(days=2), "19:00", 90, 20, 16, 0, "Studio B", True),
                EventSpec("event-normal-4", "Helaften: Yoga & Ayurveda",
                          "Lær om sammenhengen mellom yoga og ayurveda. Inkluderer yoga-praksis, "
                          "teori og ayurvedisk middag.",
                          "Workshop", next_week + timedelta(days=5), "16:00", 300, 25, 18, 850,
                          "Studio A + Restaurant", False),
                EventSpec("event-normal-5", "Søndag Slow Flow",
                          "Rolig og meditativ yoga for å avslutte helgen. Drop-in velkommen!",
                          "Special", saturday + timedelta(days=1), "10:00", 90, 12, 5, 200, "Studio C", True),
            ],
            fills=[
                Fill("course-normal-1", "course", 8, 1500, paid=6),
                Fill("course-normal-2", "course", 11, 1800, paid=9, offset=2),
                Fill("course-normal-3", "course", 7, 1600, paid=5, offset=5),
                Fill("course-normal-4", "course", 10, 1400, paid=8),
                Fill("course-normal-5", "course", 9, 1700, paid=7, offset=3),
                Fill("event-normal-1", "event", 14, 450, paid=10),
                Fill("event-normal-2", "event", 8, 350, paid=6, offset=4),
                Fill("event-normal-3", "event", 16, 0, paid=0, payments=0),
                Fill("event-normal-4", "event", 18, 850, paid=12),
                Fill("event-normal-5", "event", 5, 200, paid=4, offset=6),
            ],
        ),
    }


SCENARIO_NAMES = (
    "normal",
    "empty",
    "fully_booked",
    "partial_booked",
    "no_courses",
    "no_events",
    "many_students",
    "unpaid_bills",
)


def build_scenario(
    name: str,
    today: Optional[DateLike] = None,
    currency: str = DEFAULT_CURRENCY
) -> Optional[ScenarioData]:
    """
    Build a named scenario.

    Teachers are always the default teachers so every scenario can be
    logged into.

    Args:
        name: One of SCENARIO_NAMES
        today: Day the relative dates are computed from (default: today)
        currency: Currency for generated payments

    Returns:
        ScenarioData, or None for an unknown name

    Examples:
        >>> data = build_scenario("fully_booked")
        >>> [e.booked_count for e in data.events]
        [20]
    """
    day = start_of_day(today if today is not None else datetime.now())
    layout = _layouts(day).get(name)
    if layout is None:
        logger.warning(f"Unknown scenario: {name}")
        return None

    students = layout.students(default_students())
    bookings: List[Booking] = []
    payments: List[Payment] = []
    for fill in layout.fills:
        fill_bookings, fill_payments = _fill(fill, students, day, currency)
        bookings.extend(fill_bookings)
        payments.extend(fill_payments)

    data = ScenarioData(
        name=name,
        teachers=default_teachers(),
        students=students,
        courses=[_course(spec, day) for spec in layout.courses],
        events=[_event(spec, day) for spec in layout.events],
        bookings=bookings,
        payments=payments,
    )
    logger.debug(
        f"Scenario '{name}' built: {len(data.courses)} courses, "
        f"{len(data.events)} events, {len(bookings)} bookings"
    )
    return data


def active_scenario(storage: SessionStorage, dev_mode: bool) -> Optional[str]:
    """
    Scenario name selected in storage, honoured only in dev mode.
    """
    if not dev_mode:
        return None
    return storage.get_item(SCENARIO_STORAGE_KEY) or None


def select_scenario(storage: SessionStorage, name: Optional[str]):
    """Store (or with None, clear) the selected scenario name."""
    if name is None:
        storage.remove_item(SCENARIO_STORAGE_KEY)
    else:
        storage.set_item(SCENARIO_STORAGE_KEY, name)
