"""
Logging utilities with security features.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Sensitive data masking (passwords, emails)
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s'
PASSWORD_PATTERN = re.compile(r"\b(password|pass|pwd)[\"']?\s*[:=]\s*[\"']?[^\"'\s,]+", re.IGNORECASE)
# Already-masked addresses (k***@yoga.no) are left alone
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


def mask_email(email: str) -> str:
    """
    Mask email address for safe logging.

    Args:
        email: Email address to mask

    Returns:
        Masked email (e.g., "k***@yoga.no")

    Examples:
        >>> mask_email("kari.nordmann@yoga.no")
        'k***@yoga.no'
        >>> mask_email("invalid")
        '***'
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.split("@", 1)
    masked_local = local[0] + "***" if len(local) > 0 else "***"
    return f"{masked_local}@{domain}"


class SensitiveDataFilter(logging.Filter):
    """
    Masks passwords and raw email addresses before a record is emitted.

    Services already log emails through mask_email; this catches anything
    that slips through, such as an exception message quoting a login.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = PASSWORD_PATTERN.sub(r"\1: ********", record.getMessage())
        record.msg = EMAIL_PATTERN.sub(lambda m: mask_email(m.group(0)), message)
        record.args = None
        return True


def setup_logger(
    name: str = "yoga_booking",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Module loggers (logging.getLogger(__name__)) under the package name
    propagate to the logger configured here.

    Args:
        name: Logger name (default: "yoga_booking")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger(level=logging.DEBUG, log_file="output/logs/studio.log")
        >>> logger.info("Studio started")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    logger.addHandler(console_handler)

    # File handler with rotation (if log file specified)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        logger.addHandler(file_handler)

    return logger
