"""
Unit tests for seed fixtures and development scenarios.
"""

import pytest
import sys
from collections import Counter
from datetime import datetime, timedelta
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from yoga_booking.fixtures import (
    SCENARIO_NAMES,
    SCENARIO_STORAGE_KEY,
    active_scenario,
    build_scenario,
    default_fixtures,
    select_scenario,
)
from yoga_booking.store import SessionStorage


class TestDefaultFixtures:
    """Test cases for default_fixtures."""

    @pytest.fixture
    def data(self, today):
        return default_fixtures(today)

    def test_counts(self, data):
        assert data.name == "default"
        assert len(data.teachers) == 5
        assert len(data.students) == 10
        assert len(data.courses) == 3
        assert len(data.events) == 3
        assert len(data.bookings) == 11
        assert len(data.payments) == 11
        assert len(data.attendance) == 3
        assert data.classes == []

    def test_dates_relative_to_today(self, data, today):
        course = data.courses[0]

        assert course.start_date == today + timedelta(days=7)
        assert len(course.sessions) == 6
        assert course.sessions[-1].date == course.end_date

    def test_time_of_day_ignored(self, today):
        late = default_fixtures(today + timedelta(hours=15))

        assert late.events[0].date == today + timedelta(days=14)

    def test_bookings_linked_to_payments(self, data):
        payments = {p.id: p for p in data.payments}

        for booking in data.bookings:
            assert payments[booking.payment_id].booking_id == booking.id

    def test_pending_bookings_have_open_payments(self, data, today):
        payment = next(p for p in data.payments if p.id == "payment-0011")

        assert payment.status == "pending"
        assert payment.paid_at is None
        assert payment.due_date == today + timedelta(days=2)

    def test_currency(self, today):
        data = default_fixtures(today, currency="EUR")

        assert {p.currency for p in data.payments} == {"EUR"}


class TestScenarios:
    """Test cases for build_scenario."""

    def test_all_names_build(self, today):
        for name in SCENARIO_NAMES:
            data = build_scenario(name, today)
            assert data is not None
            assert data.name == name
            assert [t.id for t in data.teachers][0] == "teacher-0001"

    def test_unknown_name(self, today):
        assert build_scenario("nonexistent", today) is None

    def test_empty(self, today):
        data = build_scenario("empty", today)

        assert data.courses == []
        assert data.events == []
        assert data.students == []
        assert data.bookings == []
        assert len(data.teachers) == 5

    def test_fully_booked(self, today):
        data = build_scenario("fully_booked", today)

        for offering in data.courses + data.events:
            assert offering.taken_spots == offering.capacity
        assert Counter(b.item_id for b in data.bookings) == {
            "course-full-1": 12, "course-full-2": 15, "event-full-1": 20
        }

    def test_deterministic_ids(self, today):
        data = build_scenario("fully_booked", today)

        assert data.bookings[0].id == "booking-course-full-1-001"
        assert data.payments[0].id == "payment-booking-course-full-1-001"
        assert data.payments[0].booking_id == data.bookings[0].id

    def test_scenarios_owned_by_first_teacher(self, today):
        data = build_scenario("normal", today)

        assert {o.teacher_id for o in data.courses + data.events} == {"teacher-0001"}
        assert {p.teacher_id for p in data.payments} == {"teacher-0001"}

    def test_normal_layout_in_current_week(self, today):
        data = build_scenario("normal", today)
        monday = datetime(2025, 1, 6)

        assert data.courses[0].start_date == monday
        assert len(data.courses) == 5
        assert len(data.events) == 5

    def test_unpaid_bills_statuses(self, today):
        """Test paid, pending and overdue splits per offering."""
        data = build_scenario("unpaid_bills", today)

        course = Counter(p.status for p in data.payments if p.booking_id.startswith("booking-course"))
        event = [p for p in data.payments if p.booking_id.startswith("booking-event")]

        assert course == {"paid": 2, "pending": 4, "overdue": 2}
        assert Counter(p.status for p in event) == {"paid": 3, "pending": 5, "overdue": 4}
        overdue = [p for p in event if p.status == "overdue"]
        assert all(p.due_date == today - timedelta(days=3) for p in overdue)

    def test_partial_payments(self, today):
        data = build_scenario("no_courses", today)

        bookings = [b for b in data.bookings if b.item_id == "event-only-1"]
        payments = [p for p in data.payments if p.booking_id.startswith("booking-event-only-1-")]
        assert len(bookings) == 15
        assert len(payments) == 12

    def test_counters_are_explicit(self, today):
        """Test counters come from the layout, not from booking counts."""
        data = build_scenario("no_courses", today)
        info_event = next(e for e in data.events if e.id == "event-only-3")

        assert info_event.booked_count == 35
        assert not [b for b in data.bookings if b.item_id == "event-only-3"]

    def test_pending_bookings(self, today):
        data = build_scenario("partial_booked", today)

        retreat = [b for b in data.bookings if b.item_id == "event-partial-2"]
        assert Counter(b.status for b in retreat) == {"confirmed": 10, "pending": 2}

    def test_many_students(self, today):
        data = build_scenario("many_students", today)

        assert len(data.students) == 20
        assert len({s.email for s in data.students}) == 20
        assert len(data.bookings) == 18 + 22 + 45


class TestScenarioSelection:
    """Test cases for the dev scenario storage key."""

    def test_select_and_read(self):
        storage = SessionStorage()
        select_scenario(storage, "empty")

        assert storage.get_item(SCENARIO_STORAGE_KEY) == "empty"
        assert active_scenario(storage, dev_mode=True) == "empty"

    def test_ignored_outside_dev_mode(self):
        storage = SessionStorage({SCENARIO_STORAGE_KEY: "empty"})

        assert active_scenario(storage, dev_mode=False) is None

    def test_clear_selection(self):
        storage = SessionStorage({SCENARIO_STORAGE_KEY: "normal"})
        select_scenario(storage, None)

        assert active_scenario(storage, dev_mode=True) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
