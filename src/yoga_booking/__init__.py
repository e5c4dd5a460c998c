"""
Yoga studio booking, payment and availability service layer.

Usage:
    >>> from yoga_booking import DIContainer, StudioClient, configure_default_services
    >>>
    >>> container = DIContainer()
    >>> configure_default_services(container, delay_ms=0)
    >>> client = container.resolve(StudioClient)
    >>> client.login("kari.nordmann@yoga.no", "").is_success
    True
"""

from .client import StudioClient
from .models.result import Result
from .services.api import ApiError
from .utils.di_container import DIContainer, configure_default_services

__all__ = [
    "StudioClient",
    "Result",
    "ApiError",
    "DIContainer",
    "configure_default_services",
]

__version__ = "0.1.0"
