"""
Entity validation and store audit.
"""

from .validators import Validator, ValidationResult
from .offering_validator import OfferingValidator
from .booking_validator import BookingValidator, PaymentValidator
from .audit import audit_store

__all__ = [
    "Validator",
    "ValidationResult",
    "OfferingValidator",
    "BookingValidator",
    "PaymentValidator",
    "audit_store",
]
