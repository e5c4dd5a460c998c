"""
Student booking timeline: upcoming and past bookings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..models.booking import Booking
from ..models.dates import DateLike, to_datetime
from ..models.offering import Offering


ITEM_TYPE_NAMES = {
    "single": "Time",
    "course": "Kurs",
    "event": "Arrangement",
}


@dataclass
class TimelineEntry:
    booking: Booking
    offering: Offering

    @property
    def item_type_name(self) -> str:
        return ITEM_TYPE_NAMES.get(self.booking.item_type, "")

    @property
    def date(self) -> datetime:
        return self.offering.display_date


@dataclass
class BookingTimeline:
    upcoming: List[TimelineEntry] = field(default_factory=list)
    past: List[TimelineEntry] = field(default_factory=list)


def split_bookings(
    bookings: List[Booking],
    offerings: List[Offering],
    now: Optional[DateLike] = None
) -> BookingTimeline:
    """
    Split a student's bookings into upcoming and past.

    Upcoming: the offering's date is at or after now and the booking is
    neither cancelled nor completed. Past: everything else. Bookings whose
    offering cannot be found are left out. Both lists are ordered by
    booking date, most recent first.

    Args:
        bookings: Bookings to split
        offerings: Classes, courses and events to resolve booking targets
        now: Reference time; defaults to the current time
    """
    now = to_datetime(now) if now is not None else datetime.now()
    by_key: Dict[Tuple[str, str], Offering] = {
        (o.item_type, o.id): o for o in offerings
    }

    entries = []
    for booking in bookings:
        offering = by_key.get((booking.item_type, booking.item_id))
        if offering is not None:
            entries.append(TimelineEntry(booking=booking, offering=offering))
    entries.sort(key=lambda entry: entry.booking.booking_date, reverse=True)

    timeline = BookingTimeline()
    for entry in entries:
        closed = entry.booking.status in ("cancelled", "completed")
        if entry.date >= now and not closed:
            timeline.upcoming.append(entry)
        else:
            timeline.past.append(entry)
    return timeline
