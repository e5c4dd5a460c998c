"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation and type safety.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables and provides
    validated access to configuration values.

    Attributes:
        api_delay_ms: Simulated latency per service call (milliseconds)
        currency: Currency code stamped on new payments
        default_page_size: Page size used when callers do not pass one
        dev_mode: Enables scenario switching and auto-login
        scenario: Scenario to seed in dev mode
        enforce_capacity: Reject bookings for full offerings
        output_dir: Directory for exported reports
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Payments in {config.currency}")
    """

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        # Load .env file if it exists
        load_dotenv()

        # Mock API settings
        self._api_delay_ms = int(os.getenv("YOGA_API_DELAY_MS", "500"))
        self._currency = os.getenv("YOGA_CURRENCY", "NOK").upper()
        self._default_page_size = int(os.getenv("YOGA_DEFAULT_PAGE_SIZE", "10"))

        # Development affordances
        self._dev_mode = _env_bool("YOGA_DEV_MODE")
        self._scenario = os.getenv("YOGA_SCENARIO") or None

        # Booking rules
        self._enforce_capacity = _env_bool("YOGA_ENFORCE_CAPACITY")

        # Output settings
        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def api_delay_ms(self) -> int:
        """Get simulated latency in milliseconds."""
        return self._api_delay_ms

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def default_page_size(self) -> int:
        return self._default_page_size

    @property
    def dev_mode(self) -> bool:
        return self._dev_mode

    @property
    def scenario(self) -> Optional[str]:
        """
        Get the scenario name to seed.

        Only honoured in dev mode; production always seeds the default
        fixtures.
        """
        return self._scenario if self._dev_mode else None

    @property
    def enforce_capacity(self) -> bool:
        return self._enforce_capacity

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if self._api_delay_ms < 0:
            errors.append("YOGA_API_DELAY_MS must not be negative")

        if len(self._currency) != 3 or not self._currency.isalpha():
            errors.append("YOGA_CURRENCY must be a 3-letter currency code")

        if self._default_page_size <= 0:
            errors.append("YOGA_DEFAULT_PAGE_SIZE must be positive")

        if self._log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True

    def create_output_directories(self):
        """Create output directories if they don't exist."""
        directories = [
            self.output_dir / "reports",
            self.output_dir / "logs",
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)


# Singleton instance
config = Config()
