"""
Store-wide integrity audit.

The studio does not enforce capacity or referential integrity, so this
audit reports what it finds and changes nothing.
"""

import logging

from ..store.entity_store import EntityStore
from .booking_validator import BookingValidator, PaymentValidator
from .offering_validator import OfferingValidator
from .validators import ValidationResult


logger = logging.getLogger(__name__)


def audit_store(store: EntityStore) -> ValidationResult:
    """
    Validate every offering, booking and payment in a store.

    Besides per-entity checks, bookings whose offering is missing and
    payments whose booking is missing are reported as warnings.

    Args:
        store: Store to audit

    Returns:
        Combined ValidationResult; messages are prefixed with the entity id
    """
    result = ValidationResult()
    offering_validator = OfferingValidator()
    booking_validator = BookingValidator()
    payment_validator = PaymentValidator()

    offering_keys = set()
    for repo in (store.classes, store.courses, store.events):
        for offering in repo.list():
            offering_keys.add((offering.item_type, offering.id))
            result.merge(offering_validator.validate(offering), prefix=f"{offering.id}: ")

    booking_ids = set()
    for booking in store.bookings.list():
        booking_ids.add(booking.id)
        result.merge(booking_validator.validate(booking), prefix=f"{booking.id}: ")
        if (booking.item_type, booking.item_id) not in offering_keys:
            result.add_warning(f"{booking.id}: booked {booking.item_type} {booking.item_id} does not exist")

    for payment in store.payments.list():
        result.merge(payment_validator.validate(payment), prefix=f"{payment.id}: ")
        if payment.booking_id not in booking_ids:
            result.add_warning(f"{payment.id}: booking {payment.booking_id} does not exist")

    logger.info(
        f"Store audit finished: {len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    return result
