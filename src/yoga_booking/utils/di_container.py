"""
Dependency Injection Container.

This module provides a simple DI container that wires the studio
services together: one store, one session and one set of services per
container.
"""

import logging
from typing import Dict, Type, Callable, Any, Optional

from ..models.dates import DateLike


logger = logging.getLogger(__name__)


class DIContainer:
    """
    Simple dependency injection container.

    Supports:
    - Service registration with factory functions
    - Singleton pattern for shared instances
    - Service resolution
    - Clear error messages for missing services

    Examples:
        >>> # Create container
        >>> container = DIContainer()

        >>> # Register services
        >>> container.register(Logger, lambda: setup_logger("app"))
        >>> container.register(Config, lambda: Config(), singleton=True)

        >>> # Resolve services
        >>> logger = container.resolve(Logger)
        >>> config = container.resolve(Config)

        >>> # Register with dependencies
        >>> def create_api():
        ...     config = container.resolve(Config)
        ...     return MockApi(config.api_delay_ms)
        >>> container.register(MockApi, create_api, singleton=True)
    """

    def __init__(self):
        """Initialize empty container."""
        self._services: Dict[Type, Callable] = {}
        self._singletons: Dict[Type, Any] = {}
        self._singleton_flags: Dict[Type, bool] = {}

        logger.debug("DI Container initialized")

    def register(
        self,
        interface: Type,
        implementation: Callable,
        singleton: bool = False
    ):
        """
        Register a service in the container.

        Args:
            interface: Service interface or type
            implementation: Factory function that creates the service
            singleton: Whether to create a single shared instance

        Examples:
            >>> # Transient (new instance each time)
            >>> container.register(Logger, lambda: setup_logger())

            >>> # Singleton (shared instance)
            >>> container.register(Config, lambda: Config(), singleton=True)
        """
        self._services[interface] = implementation
        self._singleton_flags[interface] = singleton

        # Re-registering replaces any cached singleton
        self._singletons.pop(interface, None)

        logger.debug(
            f"Registered service: {interface.__name__} "
            f"(singleton={singleton})"
        )

    def resolve(self, interface: Type) -> Any:
        """
        Resolve a service from the container.

        Args:
            interface: Service interface or type to resolve

        Returns:
            Service instance

        Raises:
            ValueError: If service is not registered

        Examples:
            >>> config = container.resolve(Config)
            >>> api = container.resolve(MockApi)
        """
        # Check if service is registered
        if interface not in self._services:
            raise ValueError(
                f"Service not registered: {interface.__name__}. "
                f"Available services: {', '.join(s.__name__ for s in self._services.keys())}"
            )

        # Singleton: return cached instance or create new one
        if self._singleton_flags.get(interface, False):
            if interface not in self._singletons:
                logger.debug(f"Creating singleton instance: {interface.__name__}")
                self._singletons[interface] = self._services[interface]()
            return self._singletons[interface]

        # Transient: create new instance
        logger.debug(f"Creating transient instance: {interface.__name__}")
        return self._services[interface]()

    def is_registered(self, interface: Type) -> bool:
        """
        Check if a service is registered.

        Args:
            interface: Service interface or type

        Returns:
            True if service is registered
        """
        return interface in self._services

    def clear(self):
        """Clear all registered services."""
        self._services.clear()
        self._singletons.clear()
        self._singleton_flags.clear()
        logger.debug("DI Container cleared")

    def get_registered_services(self) -> list:
        """
        Get list of all registered service types.

        Returns:
            List of registered service type names
        """
        return [service.__name__ for service in self._services.keys()]


def configure_default_services(
    container: DIContainer,
    scenario: Optional[str] = None,
    today: Optional[DateLike] = None,
    delay_ms: Optional[int] = None
):
    """
    Configure the studio services.

    Registers Config, the package logger, session storage, the entity
    store, the mock API, every service and the StudioClient, all as
    singletons so they share one store and one session.

    Args:
        container: DI container to configure
        scenario: Scenario to seed (default: the scenario selected in
            session storage, then Config.scenario, else the default fixtures)
        today: Day fixture dates are computed from (default: today)
        delay_ms: Simulated latency override (default: Config.api_delay_ms)

    Examples:
        >>> container = DIContainer()
        >>> configure_default_services(container, scenario="fully_booked", delay_ms=0)
        >>> client = container.resolve(StudioClient)
    """
    from ..client import StudioClient
    from ..fixtures import active_scenario, build_scenario, default_fixtures
    from ..services import AttendanceService, BookingService, MockApi, OfferingService, UserService
    from ..store import AuthSession, EntityStore, SessionStorage
    from ..views.availability import make_spots_lookup
    from .config import Config, config
    from .logger import setup_logger

    container.register(Config, lambda: config, singleton=True)

    container.register(
        logging.Logger,
        lambda: setup_logger(
            "yoga_booking",
            level=getattr(logging, container.resolve(Config).log_level, logging.INFO)
        ),
        singleton=True
    )

    container.register(SessionStorage, SessionStorage, singleton=True)
    container.register(
        AuthSession,
        lambda: AuthSession(container.resolve(SessionStorage)),
        singleton=True
    )

    def create_store() -> EntityStore:
        cfg = container.resolve(Config)
        name = (
            scenario
            or active_scenario(container.resolve(SessionStorage), cfg.dev_mode)
            or cfg.scenario
        )
        data = build_scenario(name, today, cfg.currency) if name else None
        if data is None:
            data = default_fixtures(today, cfg.currency)
        return EntityStore.from_scenario(data)

    container.register(EntityStore, create_store, singleton=True)

    container.register(
        MockApi,
        lambda: MockApi(delay_ms if delay_ms is not None else container.resolve(Config).api_delay_ms),
        singleton=True
    )

    container.register(
        UserService,
        lambda: UserService(
            container.resolve(EntityStore),
            container.resolve(AuthSession),
            container.resolve(MockApi),
            dev_mode=container.resolve(Config).dev_mode
        ),
        singleton=True
    )

    container.register(
        OfferingService,
        lambda: OfferingService(container.resolve(EntityStore), container.resolve(MockApi)),
        singleton=True
    )

    def create_booking_service() -> BookingService:
        cfg = container.resolve(Config)
        spots_lookup = None
        if cfg.enforce_capacity:
            spots_lookup = make_spots_lookup(container.resolve(OfferingService).find_offering)
        return BookingService(
            container.resolve(EntityStore),
            container.resolve(AuthSession),
            container.resolve(MockApi),
            currency=cfg.currency,
            spots_lookup=spots_lookup
        )

    container.register(BookingService, create_booking_service, singleton=True)

    container.register(
        AttendanceService,
        lambda: AttendanceService(
            container.resolve(EntityStore),
            container.resolve(AuthSession),
            container.resolve(MockApi)
        ),
        singleton=True
    )

    container.register(
        StudioClient,
        lambda: StudioClient(
            container.resolve(UserService),
            container.resolve(OfferingService),
            container.resolve(BookingService),
            container.resolve(AttendanceService),
            page_size=container.resolve(Config).default_page_size
        ),
        singleton=True
    )

    logger.info("Default services configured")
