"""
Unit tests for BookingService: bookings, payments and revenue.
"""

import logging
import pytest
import sys
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from yoga_booking.models.query import FilterOptions, PaginationParams
from yoga_booking.services import ApiError, BookingService
from yoga_booking.views.availability import make_spots_lookup


def status_of(call, *args):
    with pytest.raises(ApiError) as exc_info:
        call(*args)
    return exc_info.value.status_code


class TestBookingQueries:
    """Test cases for reading bookings."""

    def test_list_all_is_unguarded(self, bookings):
        page = bookings.get_bookings()

        assert page.total == 11

    def test_filter_by_status(self, bookings):
        page = bookings.get_bookings(FilterOptions(status="pending"))

        assert [b.id for b in page.data] == ["booking-0005", "booking-0011"]

    def test_filter_by_booking_date(self, bookings, today):
        page = bookings.get_bookings(FilterOptions(date_from=today - timedelta(days=1)))

        assert {b.id for b in page.data} == {"booking-0002", "booking-0005", "booking-0011"}

    def test_filter_by_aware_booking_date(self, bookings, today):
        """Test a timezone-aware bound is compared in local time."""
        since = (today - timedelta(days=1)).astimezone()

        page = bookings.get_bookings(FilterOptions(date_from=since))

        assert {b.id for b in page.data} == {"booking-0002", "booking-0005", "booking-0011"}

    def test_filter_payments_by_aware_date(self, bookings, today):
        until = (today - timedelta(days=9)).astimezone(timezone.utc)

        page = bookings.get_payments(FilterOptions(date_to=until))

        assert [p.id for p in page.data] == ["payment-0006"]

    def test_paginated(self, bookings):
        page = bookings.get_bookings(pagination=PaginationParams(page=2, page_size=5))

        assert [b.id for b in page.data] == [f"booking-{n:04d}" for n in range(6, 11)]
        assert page.total_pages == 3

    def test_own_bookings(self, bookings, as_student):
        own = bookings.get_bookings_by_student_id("student-0001")

        assert [b.id for b in own] == ["booking-0001", "booking-0006"]

    def test_other_students_bookings_forbidden(self, bookings, as_student):
        assert status_of(bookings.get_bookings_by_student_id, "student-0002") == 403

    def test_teacher_sees_any_student(self, bookings, as_teacher):
        assert [b.id for b in bookings.get_bookings_by_student_id("student-0002")] == [
            "booking-0002", "booking-0009"
        ]

    def test_get_booking_by_id(self, bookings, as_student):
        assert bookings.get_booking_by_id("booking-0006").item_id == "course-0001"
        assert status_of(bookings.get_booking_by_id, "booking-0002") == 403
        assert status_of(bookings.get_booking_by_id, "booking-9999") == 404

    def test_get_booking_without_session(self, bookings):
        assert status_of(bookings.get_booking_by_id, "booking-0001") == 401


class TestCreateBooking:
    """Test cases for create_booking."""

    def test_creates_pending_booking(self, bookings, as_student):
        before = datetime.now()

        booking = bookings.create_booking("student-0001", "event-0001", "event", "Første gang")

        assert booking.status == "pending"
        assert booking.payment_id is None
        assert booking.notes == "Første gang"
        assert booking.booking_date >= before
        assert bookings.get_booking_by_id(booking.id).item_id == "event-0001"

    def test_ids_unique(self, bookings, as_student):
        first = bookings.create_booking("student-0001", "event-0001", "event")
        second = bookings.create_booking("student-0001", "event-0001", "event")

        assert first.id != second.id
        assert bookings.get_bookings().total == 13

    def test_counter_untouched(self, bookings, offerings, as_student):
        """Test booking does not change the offering's spot counter."""
        bookings.create_booking("student-0001", "course-0001", "course")

        assert offerings.get_course_by_id("course-0001").enrolled_count == 8

    def test_book_for_other_student_forbidden(self, bookings, as_student):
        assert status_of(bookings.create_booking, "student-0002", "event-0001", "event") == 403

    def test_without_session(self, bookings):
        assert status_of(bookings.create_booking, "student-0001", "event-0001", "event") == 401

    def test_full_offering_accepted_by_default(self, bookings, store, as_student):
        """Test capacity is not enforced without a spots lookup."""
        event = store.events.get("event-0001")
        store.events.replace(replace(event, booked_count=event.capacity))

        booking = bookings.create_booking("student-0001", "event-0001", "event")

        assert booking.status == "pending"

    def test_full_offering_rejected_with_lookup(self, store, session, api, offerings, as_student):
        """Test the optional capacity check returns 409."""
        guarded = BookingService(store, session, api, spots_lookup=make_spots_lookup(offerings.find_offering))
        event = store.events.get("event-0001")
        store.events.replace(replace(event, booked_count=event.capacity))

        with pytest.raises(ApiError, match="No available spots") as exc_info:
            guarded.create_booking("student-0001", "event-0001", "event")

        assert exc_info.value.status_code == 409
        assert guarded.get_bookings().total == 11

    def test_lookup_ignores_unknown_offering(self, store, session, api, offerings, as_student):
        guarded = BookingService(store, session, api, spots_lookup=make_spots_lookup(offerings.find_offering))

        booking = guarded.create_booking("student-0001", "class-0001", "single")

        assert booking.item_type == "single"


class TestUpdateBooking:
    """Test cases for update, cancel and delete."""

    def test_cancel_own_booking(self, bookings, as_student):
        cancelled = bookings.cancel_booking("booking-0006")

        assert cancelled.status == "cancelled"
        assert bookings.get_booking_by_id("booking-0006").status == "cancelled"

    def test_cancel_other_students_booking(self, bookings, as_student):
        with pytest.raises(ApiError, match="You can only update your own bookings") as exc_info:
            bookings.cancel_booking("booking-0002")
        assert exc_info.value.status_code == 403

    def test_teacher_confirms_booking(self, bookings, as_teacher):
        confirmed = bookings.update_booking("booking-0005", {"status": "confirmed"})

        assert confirmed.status == "confirmed"
        assert confirmed.id == "booking-0005"

    def test_unexpected_transition_logged(self, bookings, as_teacher, caplog):
        """Test lifecycle violations are applied but logged."""
        with caplog.at_level(logging.WARNING, logger="yoga_booking.services.booking_service"):
            bookings.cancel_booking("booking-0001")
            reopened = bookings.update_booking("booking-0001", {"status": "pending"})

        assert reopened.status == "pending"
        assert "Unexpected booking transition cancelled -> pending" in caplog.text

    def test_unknown_field(self, bookings, as_teacher):
        assert status_of(bookings.update_booking, "booking-0001", {"seat": 4}) == 400

    def test_delete_booking(self, bookings, as_teacher):
        bookings.delete_booking("booking-0003")

        assert status_of(bookings.get_booking_by_id, "booking-0003") == 404

    def test_delete_missing(self, bookings, as_teacher):
        assert status_of(bookings.delete_booking, "booking-9999") == 404


class TestPayments:
    """Test cases for payments and revenue."""

    def test_get_payments_filters(self, bookings):
        page = bookings.get_payments(FilterOptions(teacher_id="teacher-0003"))

        assert [p.id for p in page.data] == ["payment-0003", "payment-0004", "payment-0008", "payment-0011"]

    def test_payments_by_teacher(self, bookings, as_teacher):
        payments = bookings.get_payments_by_teacher_id("teacher-0001")

        assert len(payments) == 5
        assert all(p.teacher_id == "teacher-0001" for p in payments)

    def test_payments_forbidden_for_students(self, bookings, as_student):
        with pytest.raises(ApiError, match="Students cannot view teacher payments") as exc_info:
            bookings.get_payments_by_teacher_id("teacher-0001")
        assert exc_info.value.status_code == 403

    def test_payments_of_other_teacher(self, bookings, as_teacher):
        assert status_of(bookings.get_payments_by_teacher_id, "teacher-0002") == 403

    def test_get_payment_by_id(self, bookings):
        assert bookings.get_payment_by_id("payment-0005").status == "pending"
        assert status_of(bookings.get_payment_by_id, "payment-9999") == 404

    def test_create_payment(self, store, session, api):
        eur = BookingService(store, session, api, currency="EUR")

        payment = eur.create_payment("booking-0001", "student-0001", "teacher-0001", 25, datetime(2025, 2, 1))

        assert payment.status == "pending"
        assert payment.currency == "EUR"
        assert payment.due_date == datetime(2025, 2, 1)
        assert eur.get_payment_by_id(payment.id).amount == 25

    def test_mark_paid(self, bookings):
        paid = bookings.mark_payment_as_paid("payment-0005", "VIPPS-99999", "Vipps")

        assert paid.status == "paid"
        assert paid.transaction_id == "VIPPS-99999"
        assert paid.payment_method == "Vipps"
        assert paid.paid_at is not None

    def test_update_payment_pins_id(self, bookings):
        updated = bookings.update_payment("payment-0011", {"status": "overdue", "id": "payment-x"})

        assert updated.id == "payment-0011"
        assert updated.status == "overdue"

    def test_revenue(self, bookings, as_teacher):
        revenue = bookings.get_teacher_revenue("teacher-0001")

        assert revenue.total == 3500
        assert revenue.paid == 3500
        assert revenue.pending == 0
        assert revenue.overdue == 0

    def test_revenue_by_status(self, bookings, store, session):
        """Test totals split by payment status."""
        session.store_user(store.teachers.get("teacher-0003"))
        bookings.update_payment("payment-0004", {"status": "overdue"})

        revenue = bookings.get_teacher_revenue("teacher-0003")

        assert revenue.total == 2750
        assert revenue.paid == 2100
        assert revenue.pending == 350
        assert revenue.overdue == 300

    def test_revenue_total_includes_refunded(self, bookings, as_teacher):
        bookings.update_payment("payment-0001", {"status": "refunded"})

        revenue = bookings.get_teacher_revenue("teacher-0001")

        assert revenue.total == 3500
        assert revenue.paid == 3250

    def test_revenue_guarded(self, bookings, as_student):
        assert status_of(bookings.get_teacher_revenue, "teacher-0001") == 403


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
