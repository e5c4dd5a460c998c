"""
Default studio fixtures.

Dates are relative to the given day so the data always looks current.
Bookings for single classes point at class ids that have no class record;
reports show them with the "unknown item" fallback.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from ..models.booking import Attendance, Booking, Payment
from ..models.dates import DateLike, start_of_day
from ..models.offering import Course, Event, YogaClass, generate_course_sessions
from ..models.user import EmergencyContact, Student, Teacher
from ..utils.ids import generate_sequential_id


DEFAULT_CURRENCY = "NOK"


@dataclass
class ScenarioData:
    """
    One complete data set for seeding an EntityStore.

    Attributes:
        name: Scenario name ("default" for the standard fixtures)
    """

    name: str
    teachers: List[Teacher] = field(default_factory=list)
    students: List[Student] = field(default_factory=list)
    classes: List[YogaClass] = field(default_factory=list)
    courses: List[Course] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    bookings: List[Booking] = field(default_factory=list)
    payments: List[Payment] = field(default_factory=list)
    attendance: List[Attendance] = field(default_factory=list)


def _day(value: str) -> datetime:
    return datetime.fromisoformat(value)


def default_teachers() -> List[Teacher]:
    rows = [
        ("kari.nordmann@yoga.no", "Kari Nordmann", "+47 900 12 345",
         "Sertifisert yogainstruktør med 10 års erfaring. Spesialiserer meg i Hatha og Vinyasa yoga.",
         ["Hatha Yoga", "Vinyasa Yoga", "Meditasjon"], "https://karinordmann-yoga.no",
         "2023-01-15", "2024-11-01"),
        ("lars.hansen@yoga.no", "Lars Hansen", "+47 900 23 456",
         "Yogainstruktør og fysioterapeut. Fokuserer på terapeutisk yoga og rehabilitering.",
         ["Terapeutisk Yoga", "Yin Yoga", "Restorative Yoga"], None,
         "2023-03-20", "2024-10-15"),
        ("anne.berg@yoga.no", "Anne Berg", "+47 900 34 567",
         "Lidenskapelig om dynamisk yoga og mindfulness. Holder regelmessige workshops og retreats.",
         ["Power Yoga", "Ashtanga Yoga", "Mindfulness"], "https://anneberg-yoga.no",
         "2023-06-10", "2024-11-05"),
        ("ole.jensen@yoga.no", "Ole Jensen", "+47 900 45 678",
         "Erfaren instruktør i klassisk yoga. Liker å jobbe med nybegynnere og seniorer.",
         ["Hatha Yoga", "Senioryoga", "Nybegynneryoga"], None,
         "2023-08-01", "2024-10-20"),
        ("mari.olsen@yoga.no", "Mari Olsen", "+47 900 56 789",
         "Spesialist i prenatal og postnatal yoga. Hjelper kvinner gjennom hele svangerskapet og etterpå.",
         ["Prenatal Yoga", "Postnatal Yoga", "Kvinners helse"], "https://mariolsen-yoga.no",
         "2023-09-15", "2024-11-03"),
    ]
    return [
        Teacher(
            id=generate_sequential_id("teacher", i + 1),
            email=email,
            name=name,
            phone=phone,
            bio=bio,
            specialties=specialties,
            website=website,
            created_at=_day(created),
            updated_at=_day(updated),
        )
        for i, (email, name, phone, bio, specialties, website, created, updated) in enumerate(rows)
    ]


def default_students() -> List[Student]:
    rows = [
        ("emma.andresen", "Emma Andresen", "+47 950 11 111",
         ("Per Andresen", "+47 950 22 222", "Ektefelle"), None, "2024-01-10", "2024-11-01"),
        ("noah.pedersen", "Noah Pedersen", "+47 950 33 333",
         ("Linda Pedersen", "+47 950 44 444", "Mor"), "Astma - har inhalator med seg",
         "2024-02-15", "2024-10-28"),
        ("sofia.kristiansen", "Sofia Kristiansen", "+47 950 55 555",
         ("Kristian Kristiansen", "+47 950 66 666", "Far"), None, "2024-03-05", "2024-11-02"),
        ("oliver.johansen", "Oliver Johansen", "+47 950 77 777",
         ("Maria Johansen", "+47 950 88 888", "Ektefelle"),
         "Tidligere ryggskade - trenger modifiserte stillinger", "2024-04-12", "2024-10-30"),
        ("maja.hansen", "Maja Hansen", "+47 950 99 999",
         ("Hans Hansen", "+47 951 11 111", "Bror"), None, "2024-05-20", "2024-11-04"),
        ("lucas.berg", "Lucas Berg", "+47 951 22 222",
         ("Siri Berg", "+47 951 33 333", "Mor"), None, "2024-06-08", "2024-11-05"),
        ("ella.nilsen", "Ella Nilsen", "+47 951 44 444",
         ("Tom Nilsen", "+47 951 55 555", "Partner"), None, "2024-07-14", "2024-11-06"),
        ("william.larsen", "William Larsen", "+47 951 66 666",
         ("Eva Larsen", "+47 951 77 777", "Søster"), "Høyt blodtrykk - unngå intense økter",
         "2024-08-22", "2024-11-07"),
        ("alma.olsen", "Alma Olsen", "+47 951 88 888",
         ("Ola Olsen", "+47 951 99 999", "Far"), None, "2024-09-10", "2024-11-08"),
        ("aksel.jensen", "Aksel Jensen", "+47 952 11 111",
         ("Kari Jensen", "+47 952 22 222", "Mor"), None, "2024-10-01", "2024-11-09"),
    ]
    return [
        Student(
            id=generate_sequential_id("student", i + 1),
            email=f"{local}@example.no",
            name=name,
            phone=phone,
            emergency_contact=EmergencyContact(*contact),
            medical_notes=notes,
            created_at=_day(created),
            updated_at=_day(updated),
        )
        for i, (local, name, phone, contact, notes, created, updated) in enumerate(rows)
    ]


def default_courses(today: datetime) -> List[Course]:
    rows = [
        ("teacher-0001", "Nybegynner Hatha Yoga - 6 uker",
         "Perfekt for deg som er helt ny til yoga. Vi går gjennom grunnleggende stillinger, "
         "pust og meditasjon over 6 uker.",
         6, 7, 2, "18:00", 75, 12, 1200, "Studio A", 8, "2024-09-15", "2024-11-01"),
        ("teacher-0003", "Ashtanga Yoga Fundamentals - 8 uker",
         "Lær den tradisjonelle Ashtanga-serien. Strukturert opplegg over 8 uker for å "
         "bygge styrke og fleksibilitet.",
         8, 10, 4, "19:00", 90, 10, 1800, "Studio B", 6, "2024-09-20", "2024-11-02"),
        ("teacher-0005", "Prenatal Yoga - 4 uker",
         "Yoga spesielt tilpasset gravide. Fokus på å styrke kroppen og forberede til fødsel.",
         4, 5, 6, "11:00", 60, 8, 900, "Studio C", 5, "2024-10-01", "2024-11-03"),
    ]
    courses = []
    for i, (teacher_id, name, description, weeks, offset, weekday, time, duration,
            capacity, price, location, enrolled, created, updated) in enumerate(rows):
        course = Course(
            id=generate_sequential_id("course", i + 1),
            teacher_id=teacher_id,
            name=name,
            description=description,
            number_of_weeks=weeks,
            start_date=today + timedelta(days=offset),
            recurring_day_of_week=weekday,
            recurring_time=time,
            duration=duration,
            capacity=capacity,
            price=price,
            location=location,
            enrolled_count=enrolled,
            created_at=_day(created),
            updated_at=_day(updated),
        )
        course.sessions = generate_course_sessions(course)
        courses.append(course)
    return courses


def default_events(today: datetime) -> List[Event]:
    rows = [
        ("teacher-0001", "Workshop: Avanserte balanser",
         "En 3-timers workshop der vi jobber med utfordrende balanseposisjoner. "
         "For øvede praktiserende.",
         "Workshop", 14, "13:00", 180, 15, 600, "Studio A", False, 11, "2024-10-15", "2024-11-01"),
        ("teacher-0002", "Yoga & Mindfulness Retreat",
         "Heldags retreat med yoga, meditasjon og mindfulness-øvelser. Inkluderer vegetarisk lunsj.",
         "Retreat", 21, "09:00", 480, 20, 1500, "Retreat-senteret", False, 15,
         "2024-10-20", "2024-11-02"),
        ("teacher-0003", "Julespecial: Restorative Yoga",
         "Kom og slapp av før julestresset. Rolig restorative yoga med tente lys og varme tepper.",
         "Spesialarrangement", 30, "18:00", 90, 18, 350, "Studio A", True, 6,
         "2024-10-25", "2024-11-03"),
    ]
    return [
        Event(
            id=generate_sequential_id("event", i + 1),
            teacher_id=teacher_id,
            name=name,
            description=description,
            event_type=event_type,
            date=today + timedelta(days=offset),
            start_time=time,
            duration=duration,
            capacity=capacity,
            price=price,
            location=location,
            drop_in_available=drop_in,
            booked_count=booked,
            created_at=_day(created),
            updated_at=_day(updated),
        )
        for i, (teacher_id, name, description, event_type, offset, time, duration,
                capacity, price, location, drop_in, booked, created, updated) in enumerate(rows)
    ]


# (student, item, item type, days ago, status, teacher, amount, payment method, transaction id, due in days)
_BOOKINGS = [
    ("student-0001", "class-0001", "single", 2, "confirmed", "teacher-0001", 250, "Vipps", "VIPPS-12345", None),
    ("student-0002", "class-0001", "single", 1, "confirmed", "teacher-0001", 250, "Kort", "CARD-67890", None),
    ("student-0003", "class-0002", "single", 3, "confirmed", "teacher-0003", 300, "Vipps", "VIPPS-11111", None),
    ("student-0004", "class-0002", "single", 2, "confirmed", "teacher-0003", 300, "Vipps", "VIPPS-22222", None),
    ("student-0005", "class-0003", "single", 0, "pending", "teacher-0002", 280, None, None, 1),
    ("student-0001", "course-0001", "course", 10, "confirmed", "teacher-0001", 1200, "Bankkort", "CARD-33333", None),
    ("student-0006", "course-0001", "course", 8, "confirmed", "teacher-0001", 1200, "Vipps", "VIPPS-44444", None),
    ("student-0007", "course-0002", "course", 5, "confirmed", "teacher-0003", 1800, "Kort", "CARD-55555", None),
    ("student-0002", "event-0001", "event", 7, "confirmed", "teacher-0001", 600, "Vipps", "VIPPS-66666", None),
    ("student-0008", "event-0002", "event", 4, "confirmed", "teacher-0002", 1500, "Bankkort", "CARD-77777", None),
    ("student-0009", "event-0003", "event", 0, "pending", "teacher-0003", 350, None, None, 2),
]


def default_bookings_and_payments(today: datetime, currency: str = DEFAULT_CURRENCY):
    """
    Build the seeded bookings and their payments.

    Confirmed bookings are paid on the booking day; pending ones have an
    open payment due a day or two from today.

    Returns:
        Tuple of (bookings, payments)
    """
    bookings: List[Booking] = []
    payments: List[Payment] = []
    for i, (student_id, item_id, item_type, days_ago, status, teacher_id,
            amount, method, transaction_id, due_in) in enumerate(_BOOKINGS):
        booking_id = generate_sequential_id("booking", i + 1)
        payment_id = generate_sequential_id("payment", i + 1)
        booked_at = today - timedelta(days=days_ago)
        paid = transaction_id is not None

        bookings.append(Booking(
            id=booking_id,
            student_id=student_id,
            item_id=item_id,
            item_type=item_type,
            booking_date=booked_at,
            status=status,
            payment_id=payment_id,
            created_at=booked_at,
            updated_at=booked_at,
        ))
        payments.append(Payment(
            id=payment_id,
            booking_id=booking_id,
            student_id=student_id,
            teacher_id=teacher_id,
            amount=amount,
            currency=currency,
            status="paid" if paid else "pending",
            payment_method=method,
            transaction_id=transaction_id,
            paid_at=booked_at if paid else None,
            due_date=booked_at if paid else today + timedelta(days=due_in),
            created_at=booked_at,
            updated_at=booked_at,
        ))
    return bookings, payments


def default_attendance(today: datetime) -> List[Attendance]:
    yesterday = today - timedelta(days=1)
    return [
        Attendance(id="attendance-0001", booking_id="booking-0001", student_id="student-0001",
                   class_id="class-0001", attended=True, recorded_at=yesterday),
        Attendance(id="attendance-0002", booking_id="booking-0002", student_id="student-0002",
                   class_id="class-0001", attended=True, recorded_at=yesterday),
        Attendance(id="attendance-0003", booking_id="booking-0003", student_id="student-0003",
                   class_id="class-0002", attended=False, notes="Syk", recorded_at=today),
    ]


def default_fixtures(today: Optional[DateLike] = None, currency: str = DEFAULT_CURRENCY):
    """
    Build the default studio data set.

    Args:
        today: Day the relative dates are computed from (default: today)
        currency: Currency for seeded payments

    Returns:
        ScenarioData with 5 teachers, 10 students, 3 courses, 3 events,
        11 bookings, 11 payments and 3 attendance records
    """
    day = start_of_day(today if today is not None else datetime.now())
    bookings, payments = default_bookings_and_payments(day, currency)
    return ScenarioData(
        name="default",
        teachers=default_teachers(),
        students=default_students(),
        courses=default_courses(day),
        events=default_events(day),
        bookings=bookings,
        payments=payments,
        attendance=default_attendance(day),
    )
