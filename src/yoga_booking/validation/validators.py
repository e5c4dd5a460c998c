"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface over studio entities
- ValidationResult for consistent validation reporting
- Field-level checks shared by the entity validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


@dataclass
class ValidationResult:
    """
    Result of entity validation.

    Attributes:
        is_valid: Whether validation passed (warnings do not fail it)
        errors: List of error messages
        warnings: List of warning messages (non-fatal)
    """

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """
        Add an error message and mark the result invalid.

        Returns:
            Self for method chaining

        Examples:
            >>> result = ValidationResult()
            >>> result.add_error("capacity must be positive").is_valid
            False
        """
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        self.warnings.append(message)
        return self

    def add_if(self, message: Optional[str]) -> 'ValidationResult':
        """Add message as an error when it is not None."""
        if message is not None:
            self.add_error(message)
        return self

    def merge(self, other: 'ValidationResult', prefix: str = "") -> 'ValidationResult':
        """
        Fold another result into this one.

        Args:
            other: Result to merge
            prefix: Prepended to each merged message (e.g. "booking-0001: ")
        """
        for error in other.errors:
            self.add_error(f"{prefix}{error}")
        for warning in other.warnings:
            self.add_warning(f"{prefix}{warning}")
        return self

    @property
    def has_errors(self) -> bool:
        """Check if there are errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are warnings."""
        return len(self.warnings) > 0

    def get_summary(self) -> str:
        """
        Get validation summary.

        Returns:
            Human-readable summary of validation results
        """
        if self.is_valid and not self.has_warnings:
            return "Validation passed"

        parts = []

        if self.has_errors:
            parts.append(f"Errors ({len(self.errors)}):")
            for error in self.errors:
                parts.append(f"  - {error}")

        if self.has_warnings:
            parts.append(f"Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                parts.append(f"  - {warning}")

        return "\n".join(parts)


def as_dict(data: Any) -> Dict[str, Any]:
    """Entities are validated in their dictionary form."""
    if isinstance(data, dict):
        return data
    return data.to_dict()


class Validator(ABC):
    """
    Abstract base class for entity validators.

    Subclasses implement validate() for one entity type. They accept
    either the entity dataclass or its to_dict() form and report problems
    instead of raising, so a whole store can be audited in one pass.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate one entity.

        Args:
            data: Entity or its dictionary form

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: dict,
        required_fields: Iterable[str]
    ) -> List[str]:
        """
        Validate that required fields are present and not None.

        Returns:
            List of error messages for missing fields
        """
        errors = []
        for name in required_fields:
            if name not in data or data[name] is None:
                errors.append(f"Missing required field: {name}")
        return errors

    def validate_time_format(
        self,
        value: str,
        field_name: str = "start_time"
    ) -> Optional[str]:
        """
        Validate a 24-hour HH:MM time.

        Returns:
            Error message if invalid, None if valid
        """
        if not isinstance(value, str) or not TIME_PATTERN.match(value):
            return f"Invalid {field_name} format: {value} (expected HH:MM)"
        return None

    def validate_positive_number(
        self,
        value: Any,
        field_name: str
    ) -> Optional[str]:
        """
        Validate that value is a positive number.

        Returns:
            Error message if invalid, None if valid
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"{field_name} must be a number, got {type(value).__name__}"

        if value <= 0:
            return f"{field_name} must be positive, got {value}"

        return None

    def validate_non_negative_number(
        self,
        value: Any,
        field_name: str
    ) -> Optional[str]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"{field_name} must be a number, got {type(value).__name__}"

        if value < 0:
            return f"{field_name} must not be negative, got {value}"

        return None

    def validate_choice(
        self,
        value: Any,
        choices: Iterable[str],
        field_name: str
    ) -> Optional[str]:
        """
        Validate that value is one of a fixed set.

        Returns:
            Error message if invalid, None if valid
        """
        choices = list(choices)
        if value not in choices:
            return f"Invalid {field_name}: {value!r} (expected one of {', '.join(choices)})"
        return None

    def validate_email_format(
        self,
        email: str,
        field_name: str = "email"
    ) -> Optional[str]:
        """
        Validate email format.

        Returns:
            Error message if invalid, None if valid
        """
        if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
            return f"Invalid {field_name} format: {email}"
        return None

    def validate_string_length(
        self,
        value: str,
        field_name: str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None
    ) -> Optional[str]:
        """
        Validate string length.

        Args:
            value: String to validate
            field_name: Name of the field (for error message)
            min_length: Minimum length (optional)
            max_length: Maximum length (optional)

        Returns:
            Error message if invalid, None if valid
        """
        if not isinstance(value, str):
            return f"{field_name} must be a string, got {type(value).__name__}"

        length = len(value)

        if min_length is not None and length < min_length:
            return f"{field_name} must be at least {min_length} characters, got {length}"

        if max_length is not None and length > max_length:
            return f"{field_name} must be at most {max_length} characters, got {length}"

        return None
