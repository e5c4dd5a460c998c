"""
Booking and payment validators.
"""

from typing import Any

from ..models.booking import BOOKING_STATUSES, PAYMENT_STATUSES
from ..models.offering import ITEM_TYPES
from .validators import ValidationResult, Validator, as_dict


class BookingValidator(Validator):
    """
    Validator for bookings.

    Validates:
    - Required fields
    - Status and item type domains
    """

    REQUIRED_FIELDS = ["id", "student_id", "item_id", "item_type", "booking_date", "status"]

    def validate(self, data: Any) -> ValidationResult:
        data = as_dict(data)
        result = ValidationResult()

        for error in self.validate_required_fields(data, self.REQUIRED_FIELDS):
            result.add_error(error)

        if not result.is_valid:
            return result

        result.add_if(self.validate_choice(data["status"], BOOKING_STATUSES, "status"))
        result.add_if(self.validate_choice(data["item_type"], ITEM_TYPES, "item_type"))
        return result


class PaymentValidator(Validator):
    """
    Validator for payments.

    Validates:
    - Required fields
    - Status domain
    - Non-negative amount (free events are paid with 0)
    - 3-letter currency code
    - Paid payments carry a payment time

    Examples:
        >>> result = PaymentValidator().validate(payment)
        >>> result.is_valid
        True
    """

    REQUIRED_FIELDS = ["id", "booking_id", "student_id", "teacher_id", "amount", "currency", "status"]

    def validate(self, data: Any) -> ValidationResult:
        data = as_dict(data)
        result = ValidationResult()

        for error in self.validate_required_fields(data, self.REQUIRED_FIELDS):
            result.add_error(error)

        if not result.is_valid:
            return result

        result.add_if(self.validate_choice(data["status"], PAYMENT_STATUSES, "status"))
        result.add_if(self.validate_non_negative_number(data["amount"], "amount"))

        currency = data["currency"]
        if not isinstance(currency, str) or len(currency) != 3 or not currency.isalpha():
            result.add_error(f"Invalid currency: {currency!r} (expected 3-letter code)")

        if data["status"] == "paid" and not data.get("paid_at"):
            result.add_warning("Payment is marked paid but has no paid_at")

        return result
