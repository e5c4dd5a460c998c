"""
Teacher dashboard state.

This module derives everything the dashboard shows from plain lists of
courses and events:
- The chronologically sorted upcoming sessions, split into the next
  session and the rest
- Norwegian labels for item kind and day
- Today / tomorrow / later-this-week grouping
- Weekly totals

All functions are pure; pass reference dates explicitly for deterministic
results.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Literal, Optional, Union

from ..models.dates import DateLike, start_of_day, start_of_week
from ..models.offering import Course, Event


DashboardItemType = Literal["course", "event"]

WEEKDAYS_NO = ["mandag", "tirsdag", "onsdag", "torsdag", "fredag", "lørdag", "søndag"]

LABEL_TODAY = "I dag"
LABEL_TOMORROW = "I morgen"
LABEL_LATER_THIS_WEEK = "Senere denne uken"


@dataclass
class DashboardItem:
    """
    Course or event in the common dashboard shape.

    Attributes:
        type: "course" or "event"
        data: Source course or event
        date: Course start date or event date
        time: Start time (HH:MM)
        location: Venue
        enrolled: Spots taken
        capacity: Maximum spots
    """

    type: DashboardItemType
    data: Union[Course, Event]
    date: datetime
    time: str
    location: str
    enrolled: int
    capacity: int


@dataclass
class DashboardState:
    """
    Upcoming sessions split for display.

    Invariants:
        next_session is None exactly when all_upcoming is empty, and is
        all_upcoming[0] otherwise; remaining_upcoming is all_upcoming[1:].
    """

    all_upcoming: List[DashboardItem] = field(default_factory=list)
    next_session: Optional[DashboardItem] = None
    remaining_upcoming: List[DashboardItem] = field(default_factory=list)
    has_upcoming: bool = False


@dataclass
class UpcomingGroup:
    label: str
    items: List[DashboardItem]


@dataclass
class WeeklyStats:
    total_offerings: int = 0
    total_enrollments: int = 0
    revenue_estimate: float = 0


def course_to_item(course: Course) -> DashboardItem:
    return DashboardItem(
        type="course",
        data=course,
        date=course.start_date,
        time=course.recurring_time,
        location=course.location,
        enrolled=course.enrolled_count,
        capacity=course.capacity,
    )


def event_to_item(event: Event) -> DashboardItem:
    return DashboardItem(
        type="event",
        data=event,
        date=event.date,
        time=event.start_time,
        location=event.location,
        enrolled=event.booked_count,
        capacity=event.capacity,
    )


def get_dashboard_state(
    courses: List[Course],
    events: List[Event],
    reference_date: Optional[DateLike] = None
) -> DashboardState:
    """
    Derive the dashboard state from courses and events.

    Items are sorted ascending by date (courses before events on equal
    dates) and kept when their calendar day is on or after the reference
    day.

    Args:
        courses: Courses to show
        events: Events to show
        reference_date: "Now"; defaults to the current time

    Returns:
        DashboardState

    Examples:
        >>> state = get_dashboard_state(
        ...     [course_starting_2025_01_13],
        ...     [event_2025_01_09, event_2025_01_15],
        ...     datetime(2025, 1, 10),
        ... )
        >>> [item.type for item in state.all_upcoming]
        ['course', 'event']
    """
    today = start_of_day(reference_date if reference_date is not None else datetime.now())

    items = [course_to_item(c) for c in courses] + [event_to_item(e) for e in events]
    items.sort(key=lambda item: item.date)

    upcoming = [item for item in items if start_of_day(item.date) >= today]

    return DashboardState(
        all_upcoming=upcoming,
        next_session=upcoming[0] if upcoming else None,
        remaining_upcoming=upcoming[1:],
        has_upcoming=len(upcoming) > 0,
    )


def item_label(item: DashboardItem) -> str:
    return "Kurs" if item.type == "course" else "Arrangement"


def item_name(item: DashboardItem) -> str:
    return item.data.name


def date_label(item: DashboardItem, today: Optional[DateLike] = None) -> str:
    """
    Short day label: "i dag" or the Norwegian weekday name.

    Examples:
        >>> date_label(item_on_2025_01_13, today=datetime(2025, 1, 10))
        'mandag'
    """
    today = start_of_day(today if today is not None else datetime.now())
    if start_of_day(item.date) == today:
        return "i dag"
    return WEEKDAYS_NO[item.date.weekday()]


def group_upcoming(items: List[DashboardItem], today: Optional[DateLike] = None) -> List[UpcomingGroup]:
    """
    Group items into today, tomorrow and the rest of the week.

    The week ends on Sunday (weeks start Monday). Items outside the
    current week are left out and empty groups are dropped.

    Args:
        items: Sorted dashboard items (e.g. DashboardState.all_upcoming)
        today: Reference day; defaults to the current date

    Returns:
        Non-empty groups in display order
    """
    today = start_of_day(today if today is not None else datetime.now())
    tomorrow = today + timedelta(days=1)
    end_of_week = start_of_week(today) + timedelta(days=6)

    today_items = []
    tomorrow_items = []
    later_items = []
    for item in items:
        day = start_of_day(item.date)
        if day == today:
            today_items.append(item)
        elif day == tomorrow:
            tomorrow_items.append(item)
        elif tomorrow < day <= end_of_week:
            later_items.append(item)

    groups = [
        UpcomingGroup(LABEL_TODAY, today_items),
        UpcomingGroup(LABEL_TOMORROW, tomorrow_items),
        UpcomingGroup(LABEL_LATER_THIS_WEEK, later_items),
    ]
    return [group for group in groups if group.items]


def weekly_stats(courses: List[Course], events: List[Event]) -> WeeklyStats:
    """
    Totals for a week's offerings.

    revenue_estimate assumes every taken spot pays the full price.
    """
    counts = [c.enrolled_count or 0 for c in courses] + [e.booked_count or 0 for e in events]
    revenue = (
        sum((c.enrolled_count or 0) * c.price for c in courses)
        + sum((e.booked_count or 0) * e.price for e in events)
    )
    return WeeklyStats(
        total_offerings=len(courses) + len(events),
        total_enrollments=sum(counts),
        revenue_estimate=revenue,
    )
