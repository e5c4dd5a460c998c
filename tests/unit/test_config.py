"""
Unit tests for Config.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from yoga_booking.utils.config import Config


ENV_VARS = [
    "YOGA_API_DELAY_MS",
    "YOGA_CURRENCY",
    "YOGA_DEFAULT_PAGE_SIZE",
    "YOGA_DEV_MODE",
    "YOGA_SCENARIO",
    "YOGA_ENFORCE_CAPACITY",
    "OUTPUT_DIR",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self):
        cfg = Config()

        assert cfg.api_delay_ms == 500
        assert cfg.currency == "NOK"
        assert cfg.default_page_size == 10
        assert not cfg.dev_mode
        assert cfg.scenario is None
        assert not cfg.enforce_capacity
        assert cfg.output_dir == Path("output")
        assert cfg.log_level == "INFO"
        assert cfg.validate()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("YOGA_API_DELAY_MS", "0")
        monkeypatch.setenv("YOGA_CURRENCY", "eur")
        monkeypatch.setenv("YOGA_ENFORCE_CAPACITY", "yes")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        cfg = Config()

        assert cfg.api_delay_ms == 0
        assert cfg.currency == "EUR"
        assert cfg.enforce_capacity
        assert cfg.log_level == "DEBUG"

    def test_scenario_ignored_outside_dev_mode(self, monkeypatch):
        monkeypatch.setenv("YOGA_SCENARIO", "fully_booked")

        assert Config().scenario is None

    def test_scenario_in_dev_mode(self, monkeypatch):
        monkeypatch.setenv("YOGA_SCENARIO", "fully_booked")
        monkeypatch.setenv("YOGA_DEV_MODE", "true")

        assert Config().scenario == "fully_booked"

    def test_validate_collects_errors(self, monkeypatch):
        """Test every invalid value is reported in one error."""
        monkeypatch.setenv("YOGA_API_DELAY_MS", "-1")
        monkeypatch.setenv("YOGA_CURRENCY", "KRONER")
        monkeypatch.setenv("YOGA_DEFAULT_PAGE_SIZE", "0")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValueError) as exc_info:
            Config().validate()

        message = str(exc_info.value)
        assert "YOGA_API_DELAY_MS" in message
        assert "YOGA_CURRENCY" in message
        assert "YOGA_DEFAULT_PAGE_SIZE" in message
        assert "LOG_LEVEL" in message

    def test_create_output_directories(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))

        Config().create_output_directories()

        assert (tmp_path / "out" / "reports").is_dir()
        assert (tmp_path / "out" / "logs").is_dir()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
