"""
Unit tests for the DI container and default service wiring.
"""

import logging
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from yoga_booking.client import StudioClient
from yoga_booking.fixtures import select_scenario
from yoga_booking.services import BookingService, MockApi, UserService
from yoga_booking.store import AuthSession, EntityStore, SessionStorage
from yoga_booking.utils.config import Config
from yoga_booking.utils.di_container import DIContainer, configure_default_services


class TestDIContainer:
    """Test cases for DIContainer."""

    def test_transient(self):
        container = DIContainer()
        container.register(list, list)

        assert container.resolve(list) is not container.resolve(list)

    def test_singleton(self):
        container = DIContainer()
        container.register(dict, dict, singleton=True)

        assert container.resolve(dict) is container.resolve(dict)

    def test_singleton_may_be_none(self):
        """Test a factory returning None is still created only once."""
        calls = []
        container = DIContainer()
        container.register(type(None), lambda: calls.append(1), singleton=True)

        container.resolve(type(None))
        container.resolve(type(None))

        assert calls == [1]

    def test_reregister_replaces_singleton(self):
        container = DIContainer()
        container.register(dict, lambda: {"a": 1}, singleton=True)
        container.resolve(dict)
        container.register(dict, lambda: {"b": 2}, singleton=True)

        assert container.resolve(dict) == {"b": 2}

    def test_unregistered(self):
        container = DIContainer()
        container.register(dict, dict)

        with pytest.raises(ValueError, match="Service not registered: list"):
            container.resolve(list)

    def test_clear(self):
        container = DIContainer()
        container.register(dict, dict)
        container.clear()

        assert not container.is_registered(dict)
        assert container.get_registered_services() == []


class TestConfigureDefaultServices:
    """Test cases for configure_default_services."""

    @pytest.fixture
    def container(self, today):
        container = DIContainer()
        configure_default_services(container, today=today, delay_ms=0)
        return container

    def test_registers_studio(self, container):
        names = container.get_registered_services()

        for name in ["Config", "Logger", "EntityStore", "MockApi", "UserService", "StudioClient"]:
            assert name in names

    def test_shared_store_and_session(self, container):
        """Test every service sees the same store and session."""
        store = container.resolve(EntityStore)
        client = container.resolve(StudioClient)

        assert client.users.store is store
        assert client.bookings.store is store
        assert client.users.session is container.resolve(AuthSession)
        assert client.bookings.session is client.users.session

    def test_delay_override(self, container):
        assert container.resolve(MockApi).base_delay_ms == 0

    def test_default_fixtures_seeded(self, container):
        assert container.resolve(EntityStore).summary()["bookings"] == 11

    def test_logger(self, container):
        logger = container.resolve(logging.Logger)

        assert logger.name == "yoga_booking"

    def test_scenario(self, today):
        container = DIContainer()
        configure_default_services(container, scenario="fully_booked", today=today, delay_ms=0)

        store = container.resolve(EntityStore)

        assert [e.id for e in store.events.list()] == ["event-full-1"]

    def test_unknown_scenario_falls_back(self, today):
        container = DIContainer()
        configure_default_services(container, scenario="nonexistent", today=today, delay_ms=0)

        assert container.resolve(EntityStore).summary()["courses"] == 3

    def test_capacity_off_by_default(self, container):
        assert container.resolve(BookingService).spots_lookup is None

    def test_capacity_enforced_from_config(self, container, monkeypatch):
        """Test YOGA_ENFORCE_CAPACITY turns on the server-side check."""
        monkeypatch.setenv("YOGA_ENFORCE_CAPACITY", "true")
        container.register(Config, Config, singleton=True)

        bookings = container.resolve(BookingService)

        assert bookings.spots_lookup is not None
        assert bookings.spots_lookup("event-0001", "event") == 4

    def test_stored_scenario_in_dev_mode(self, container, monkeypatch):
        """Test a scenario picked in session storage seeds the store in dev mode."""
        monkeypatch.setenv("YOGA_DEV_MODE", "true")
        container.register(Config, Config, singleton=True)
        select_scenario(container.resolve(SessionStorage), "no_events")

        store = container.resolve(EntityStore)

        assert store.events.count() == 0
        assert store.courses.count() > 0

    def test_stored_scenario_ignored_outside_dev_mode(self, container):
        select_scenario(container.resolve(SessionStorage), "no_events")

        assert container.resolve(EntityStore).events.count() == 3

    def test_page_size_from_config(self, container, monkeypatch):
        monkeypatch.setenv("YOGA_DEFAULT_PAGE_SIZE", "2")
        container.register(Config, Config, singleton=True)

        client = container.resolve(StudioClient)

        assert client.page_size == 2
        assert len(client.classes(page=1).value.data) == 0
        assert len(client.courses(page=1).value.data) == 2

    def test_dev_mode_from_config(self, container, monkeypatch):
        monkeypatch.setenv("YOGA_DEV_MODE", "true")
        container.register(Config, Config, singleton=True)

        users = container.resolve(UserService)

        assert users.dev_mode
        assert users.get_current_user().id == "teacher-0001"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
