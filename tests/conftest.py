"""
Shared fixtures: a studio seeded with the default fixtures on a fixed day,
wired with a zero-latency mock API.
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from yoga_booking.fixtures import default_fixtures
from yoga_booking.services import AttendanceService, BookingService, MockApi, OfferingService, UserService
from yoga_booking.store import AuthSession, EntityStore, SessionStorage


# A Friday
TODAY = datetime(2025, 1, 10)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def store():
    """Entity store seeded with the default fixtures."""
    return EntityStore.from_scenario(default_fixtures(TODAY))


@pytest.fixture
def storage():
    return SessionStorage()


@pytest.fixture
def session(storage):
    return AuthSession(storage)


@pytest.fixture
def api():
    return MockApi(base_delay_ms=0)


@pytest.fixture
def users(store, session, api):
    return UserService(store, session, api)


@pytest.fixture
def offerings(store, api):
    return OfferingService(store, api)


@pytest.fixture
def bookings(store, session, api):
    return BookingService(store, session, api)


@pytest.fixture
def attendance(store, session, api):
    return AttendanceService(store, session, api)


@pytest.fixture
def as_teacher(store, session):
    """Log teacher-0001 (Kari Nordmann) in."""
    teacher = store.teachers.get("teacher-0001")
    session.store_user(teacher)
    return teacher


@pytest.fixture
def as_student(store, session):
    """Log student-0001 (Emma Andresen) in."""
    student = store.students.get("student-0001")
    session.store_user(student)
    return student
