"""
Unit tests for the teacher dashboard state.
"""

import pytest
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from yoga_booking.models.dates import start_of_day
from yoga_booking.models.offering import Course, Event
from yoga_booking.views.dashboard import (
    LABEL_LATER_THIS_WEEK,
    LABEL_TODAY,
    LABEL_TOMORROW,
    date_label,
    event_to_item,
    get_dashboard_state,
    group_upcoming,
    item_label,
    item_name,
    weekly_stats,
)


def make_course(course_id, start, enrolled=0, price=1000):
    return Course(
        id=course_id,
        teacher_id="teacher-0001",
        name=f"Kurs {course_id}",
        number_of_weeks=4,
        start_date=start,
        recurring_day_of_week=1,
        recurring_time="18:00",
        duration=60,
        capacity=12,
        price=price,
        location="Studio A",
        enrolled_count=enrolled,
    )


def make_event(event_id, date, booked=0, price=300):
    return Event(
        id=event_id,
        teacher_id="teacher-0001",
        name=f"Arrangement {event_id}",
        event_type="Workshop",
        date=date,
        start_time="10:00",
        duration=120,
        capacity=20,
        price=price,
        location="Studio B",
        booked_count=booked,
    )


class TestGetDashboardState:
    """Test cases for get_dashboard_state."""

    def test_reference_example(self):
        """Test Friday 2025-01-10 with one past and one future event."""
        course = make_course("course-1", datetime(2025, 1, 13))
        past = make_event("event-1", datetime(2025, 1, 9))
        future = make_event("event-2", datetime(2025, 1, 15))

        state = get_dashboard_state([course], [past, future], datetime(2025, 1, 10))

        assert [item.data.id for item in state.all_upcoming] == ["course-1", "event-2"]
        assert [item.type for item in state.all_upcoming] == ["course", "event"]
        assert state.next_session.data is course
        assert [item.data.id for item in state.remaining_upcoming] == ["event-2"]
        assert state.has_upcoming

    def test_empty(self):
        state = get_dashboard_state([], [], datetime(2025, 1, 10))

        assert state.all_upcoming == []
        assert state.next_session is None
        assert state.remaining_upcoming == []
        assert not state.has_upcoming

    def test_earlier_today_counts_as_upcoming(self):
        """Test filtering is by calendar day, not by time."""
        event = make_event("event-1", datetime(2025, 1, 10, 8, 0))

        state = get_dashboard_state([], [event], datetime(2025, 1, 10, 18, 0))

        assert state.next_session.data is event

    def test_courses_before_events_on_same_date(self):
        day = datetime(2025, 1, 20)
        state = get_dashboard_state(
            [make_course("course-1", day)],
            [make_event("event-1", day)],
            datetime(2025, 1, 10),
        )

        assert [item.type for item in state.all_upcoming] == ["course", "event"]

    def test_invariants_hold_for_random_input(self):
        """Test next/remaining split and date filter on random data."""
        rng = random.Random(20250110)
        base = datetime(2025, 1, 1)

        for _ in range(200):
            courses = [
                make_course(f"course-{i}", base + timedelta(days=rng.randint(0, 40), hours=rng.randint(0, 23)))
                for i in range(rng.randint(0, 5))
            ]
            events = [
                make_event(f"event-{i}", base + timedelta(days=rng.randint(0, 40), hours=rng.randint(0, 23)))
                for i in range(rng.randint(0, 5))
            ]
            reference = base + timedelta(days=rng.randint(0, 40), hours=rng.randint(0, 23))

            state = get_dashboard_state(courses, events, reference)

            if state.all_upcoming:
                assert state.next_session is state.all_upcoming[0]
            else:
                assert state.next_session is None
            assert len(state.remaining_upcoming) == max(len(state.all_upcoming) - 1, 0)
            assert all(item.date >= start_of_day(reference) for item in state.all_upcoming)
            dates = [item.date for item in state.all_upcoming]
            assert dates == sorted(dates)


class TestLabels:
    """Test cases for labels and grouping."""

    @pytest.fixture
    def friday(self):
        return datetime(2025, 1, 10)

    def test_item_label_and_name(self):
        course_item = get_dashboard_state([make_course("course-1", datetime(2025, 1, 13))], [], datetime(2025, 1, 10)).next_session
        event_item = event_to_item(make_event("event-1", datetime(2025, 1, 13)))

        assert item_label(course_item) == "Kurs"
        assert item_label(event_item) == "Arrangement"
        assert item_name(event_item) == "Arrangement event-1"

    def test_date_label(self, friday):
        """Test "i dag" for today and weekday names otherwise."""
        assert date_label(event_to_item(make_event("e", friday)), friday) == "i dag"
        assert date_label(event_to_item(make_event("e", datetime(2025, 1, 13))), friday) == "mandag"
        assert date_label(event_to_item(make_event("e", datetime(2025, 1, 12))), friday) == "søndag"

    def test_group_upcoming(self, friday):
        """Test today, tomorrow and rest-of-week buckets (week ends Sunday)."""
        items = [
            event_to_item(make_event("today", friday + timedelta(hours=18))),
            event_to_item(make_event("tomorrow", datetime(2025, 1, 11))),
            event_to_item(make_event("sunday", datetime(2025, 1, 12))),
            event_to_item(make_event("next-week", datetime(2025, 1, 13))),
        ]

        groups = group_upcoming(items, friday)

        assert [g.label for g in groups] == [LABEL_TODAY, LABEL_TOMORROW, LABEL_LATER_THIS_WEEK]
        assert [[i.data.id for i in g.items] for g in groups] == [["today"], ["tomorrow"], ["sunday"]]

    def test_empty_groups_dropped(self, friday):
        groups = group_upcoming([event_to_item(make_event("e", datetime(2025, 1, 12)))], friday)

        assert [g.label for g in groups] == [LABEL_LATER_THIS_WEEK]

    def test_weekly_stats(self):
        stats = weekly_stats(
            [make_course("course-1", datetime(2025, 1, 13), enrolled=8, price=1200)],
            [make_event("event-1", datetime(2025, 1, 15), booked=11, price=600)],
        )

        assert stats.total_offerings == 2
        assert stats.total_enrollments == 19
        assert stats.revenue_estimate == 16200


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
