"""
Unit tests for logging utilities.
"""

import logging
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from yoga_booking.utils.logger import SensitiveDataFilter, mask_email, setup_logger


def make_record(msg, *args):
    return logging.LogRecord("yoga_booking.test", logging.INFO, __file__, 1, msg, args, None)


class TestMaskEmail:
    """Test cases for mask_email."""

    def test_masks_local_part(self):
        assert mask_email("kari.nordmann@yoga.no") == "k***@yoga.no"

    def test_invalid(self):
        assert mask_email("invalid") == "***"
        assert mask_email("") == "***"


class TestSensitiveDataFilter:
    """Test cases for SensitiveDataFilter."""

    def test_masks_password(self):
        record = make_record("login password=hemmelig123 accepted")

        assert SensitiveDataFilter().filter(record)
        assert "hemmelig123" not in record.getMessage()
        assert "password: ********" in record.getMessage()

    def test_masks_email_in_args(self):
        """Test addresses passed as format arguments are masked too."""
        record = make_record("Login failed for %s", "emma.andresen@example.no")

        SensitiveDataFilter().filter(record)

        assert record.getMessage() == "Login failed for e***@example.no"

    def test_masked_email_untouched(self):
        record = make_record("Session started for k***@yoga.no (teacher)")

        SensitiveDataFilter().filter(record)

        assert record.getMessage() == "Session started for k***@yoga.no (teacher)"


class TestSetupLogger:
    """Test cases for setup_logger."""

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "studio.log"

        logger = setup_logger("yoga_booking_file_test", level=logging.DEBUG, log_file=str(log_file))
        logger.info("Booking created for lucas.berg@example.no")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "l***@example.no" in content
        assert "lucas.berg@" not in content

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_no_duplicate_handlers(self):
        first = setup_logger("yoga_booking_dup_test")
        second = setup_logger("yoga_booking_dup_test", level=logging.ERROR)

        assert first is second
        assert len(second.handlers) == 1
        assert second.level == logging.ERROR


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
