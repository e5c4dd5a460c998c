"""
Teacher payment report.

This module enriches payments with readable student and item names and
exports them with pandas.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from ..models.booking import Booking, Payment
from ..models.dates import format_datetime
from ..models.offering import Offering
from ..models.user import Student
from ..utils.file_utils import save_csv


logger = logging.getLogger(__name__)

UNKNOWN_ITEM = "Ukjent"
UNKNOWN_STUDENT = "Ukjent student"
UNKNOWN_BY_TYPE = {
    "single": "Ukjent time",
    "course": "Ukjent kurs",
    "event": "Ukjent event",
}

REPORT_COLUMNS = [
    "id",
    "student_name",
    "item_name",
    "amount",
    "currency",
    "status",
    "payment_method",
    "transaction_id",
    "due_date",
    "paid_at",
    "created_at",
]


@dataclass
class PaymentRow:
    """Payment plus display names."""

    payment: Payment
    student_name: str
    item_name: str

    @property
    def status(self) -> str:
        return self.payment.status

    @property
    def amount(self) -> float:
        return self.payment.amount

    def to_record(self) -> Dict[str, Any]:
        p = self.payment
        return {
            "id": p.id,
            "student_name": self.student_name,
            "item_name": self.item_name,
            "amount": p.amount,
            "currency": p.currency,
            "status": p.status,
            "payment_method": p.payment_method,
            "transaction_id": p.transaction_id,
            "due_date": format_datetime(p.due_date),
            "paid_at": format_datetime(p.paid_at),
            "created_at": format_datetime(p.created_at),
        }


def enrich_payments(
    payments: List[Payment],
    students: List[Student],
    bookings: List[Booking],
    offerings: List[Offering]
) -> List[PaymentRow]:
    """
    Attach student and item names to payments.

    Names fall back to "Ukjent student", and to "Ukjent" when the booking
    is missing or "Ukjent time/kurs/event" when the booked item is.
    """
    student_names = {s.id: s.name for s in students}
    bookings_by_id = {b.id: b for b in bookings}
    offering_names = {(o.item_type, o.id): o.name for o in offerings}

    rows = []
    for payment in payments:
        booking = bookings_by_id.get(payment.booking_id)
        if booking is None:
            name = UNKNOWN_ITEM
        else:
            name = offering_names.get(
                (booking.item_type, booking.item_id),
                UNKNOWN_BY_TYPE.get(booking.item_type, UNKNOWN_ITEM)
            )

        rows.append(PaymentRow(
            payment=payment,
            student_name=student_names.get(payment.student_id, UNKNOWN_STUDENT),
            item_name=name,
        ))
    return rows


def filter_payments_by_status(rows: List[PaymentRow], status: str = "all") -> List[PaymentRow]:
    if status == "all":
        return rows
    return [row for row in rows if row.status == status]


def total_amount(rows: List[PaymentRow]) -> float:
    return sum(row.amount for row in rows)


def payments_dataframe(rows: List[PaymentRow]) -> pd.DataFrame:
    """
    Build a report DataFrame.

    Returns:
        DataFrame with REPORT_COLUMNS, one row per payment (empty frame
        with the same columns when rows is empty)
    """
    return pd.DataFrame([row.to_record() for row in rows], columns=REPORT_COLUMNS)


def export_payments_csv(rows: List[PaymentRow], filepath: Path) -> bool:
    """
    Write the payment report to CSV.

    Returns:
        True if the file was written
    """
    df = payments_dataframe(rows)
    saved = save_csv(df, Path(filepath))
    if saved:
        logger.info(f"Exported {len(df)} payments to {filepath}")
    return saved
