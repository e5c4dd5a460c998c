"""
Booking, payment and attendance data models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional

from .base import DictModel
from .offering import ItemType


# Type aliases for status values
BookingStatus = Literal["pending", "confirmed", "cancelled", "completed"]
PaymentStatus = Literal["pending", "paid", "overdue", "refunded"]

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed")
PAYMENT_STATUSES = ("pending", "paid", "overdue", "refunded")

# Documented booking lifecycle; anything else is allowed but unexpected
BOOKING_TRANSITIONS = {
    "pending": ("confirmed", "cancelled"),
    "confirmed": ("cancelled", "completed"),
    "cancelled": (),
    "completed": (),
}


def is_expected_transition(current: str, new: str) -> bool:
    """
    Check whether a booking status change follows the documented lifecycle.

    Examples:
        >>> is_expected_transition("pending", "confirmed")
        True
        >>> is_expected_transition("completed", "pending")
        False
    """
    if current == new:
        return True
    return new in BOOKING_TRANSITIONS.get(current, ())


@dataclass
class Booking(DictModel):
    """
    A student's claim on a seat in one offering.

    Attributes:
        id: Unique booking identifier
        student_id: Booking student
        item_id: Booked offering id
        item_type: Discriminator for item_id ("single", "course", "event")
        booking_date: When the booking was made
        status: pending/confirmed/cancelled/completed
        payment_id: Linked payment, if any
        notes: Free-text notes
    """

    DATETIME_FIELDS = ("booking_date", "created_at", "updated_at")

    id: str
    student_id: str
    item_id: str
    item_type: ItemType
    booking_date: datetime
    status: BookingStatus = "pending"
    payment_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass
class Payment(DictModel):
    """
    Payment for a booking.

    Attributes:
        id: Unique payment identifier
        booking_id: Paid booking (not enforced to exist)
        student_id: Paying student
        teacher_id: Receiving teacher
        amount: Amount in currency units
        currency: ISO currency code
        status: pending/paid/overdue/refunded
        payment_method: e.g. "Vipps", "Kort"
        transaction_id: Provider reference, set when paid
        paid_at: Time of payment
        due_date: Payment deadline
    """

    DATETIME_FIELDS = ("paid_at", "due_date", "created_at", "updated_at")

    id: str
    booking_id: str
    student_id: str
    teacher_id: str
    amount: float
    currency: str
    status: PaymentStatus = "pending"
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    paid_at: Optional[datetime] = None
    due_date: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass
class Attendance(DictModel):
    """Attendance record for one booking, written once after the session."""

    DATETIME_FIELDS = ("recorded_at",)

    id: str
    booking_id: str
    student_id: str
    class_id: str
    attended: bool
    notes: Optional[str] = None
    recorded_at: datetime = field(default_factory=datetime.now)


@dataclass
class RevenueSummary(DictModel):
    """Per-status payment totals for one teacher."""

    total: float = 0
    paid: float = 0
    pending: float = 0
    overdue: float = 0
