"""
Booking service: bookings, payments and teacher revenue.

Booking a seat does not touch the offering's spot counter, and by default
nothing stops a booking for a full offering; the client checks availability
before calling create_booking. Passing a spots lookup turns on a
server-side capacity check.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..models.booking import Booking, Payment, RevenueSummary, is_expected_transition
from ..models.dates import to_datetime
from ..models.offering import ItemType
from ..models.query import FilterOptions, PaginatedResponse, PaginationParams
from ..store.entity_store import EntityStore
from ..store.session import AuthSession
from ..utils.ids import generate_id
from .api import ApiError, MockApi, merge_changes, paginate_or_all
from .guard import ensure_booking_access, ensure_teacher_self, require_actor


logger = logging.getLogger(__name__)

# (item_id, item_type) -> remaining spots, or None when the item is unknown
SpotsLookup = Callable[[str, str], Optional[int]]


class BookingService:
    """
    Bookings and payments against the entity store.

    Examples:
        >>> bookings = BookingService(store, session, MockApi(0))
        >>> booking = bookings.create_booking("student-0001", "course-0001", "course")
        >>> booking.status
        'pending'
    """

    def __init__(
        self,
        store: EntityStore,
        session: AuthSession,
        api: MockApi,
        currency: str = "NOK",
        spots_lookup: Optional[SpotsLookup] = None
    ):
        """
        Initialize BookingService.

        Args:
            store: Entity store holding bookings and payments
            session: Session identifying the actor
            api: Mock API call wrapper
            currency: Currency stamped on new payments
            spots_lookup: When given, create_booking rejects items with no
                remaining spots (409)
        """
        self.store = store
        self.session = session
        self.api = api
        self.currency = currency
        self.spots_lookup = spots_lookup

    # ========== BOOKINGS ==========

    def get_bookings(
        self,
        filters: Optional[FilterOptions] = None,
        pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[Booking]:
        """
        List all bookings.

        Args:
            filters: status, date_from/date_to on booking_date
            pagination: Page to return; all matches when omitted
        """
        def operation():
            items = self.store.bookings.list()
            if filters is not None:
                if filters.status:
                    items = [b for b in items if b.status == filters.status]
                if filters.date_from is not None:
                    items = [b for b in items if b.booking_date >= to_datetime(filters.date_from)]
                if filters.date_to is not None:
                    items = [b for b in items if b.booking_date <= to_datetime(filters.date_to)]
            return paginate_or_all(items, pagination)

        return self.api.call(operation)

    def get_bookings_by_student_id(self, student_id: str) -> List[Booking]:
        def operation():
            ensure_booking_access(self.session.current_user(), student_id, "view")
            return self.store.bookings.find(lambda b: b.student_id == student_id)

        return self.api.call(operation)

    def _get_booking(self, booking_id: str) -> Booking:
        booking = self.store.bookings.get(booking_id)
        if booking is None:
            raise ApiError("Booking not found", 404)
        return booking

    def get_booking_by_id(self, booking_id: str) -> Booking:
        def operation():
            actor = require_actor(self.session.current_user())
            booking = self._get_booking(booking_id)
            ensure_booking_access(actor, booking.student_id, "view")
            return booking

        return self.api.call(operation)

    def create_booking(
        self,
        student_id: str,
        item_id: str,
        item_type: ItemType,
        notes: Optional[str] = None
    ) -> Booking:
        """
        Create a pending booking.

        Args:
            student_id: Booking student; a student actor may only book for
                themselves
            item_id: Offering id
            item_type: "single", "course" or "event"
            notes: Optional free text

        Returns:
            New booking with a fresh id, status "pending" and no payment

        Raises:
            ApiError: 401/403 from the guard; 409 when capacity checking
                is on and the offering is full
        """
        def operation():
            ensure_booking_access(self.session.current_user(), student_id, "create")

            if self.spots_lookup is not None:
                spots = self.spots_lookup(item_id, item_type)
                if spots is not None and spots <= 0:
                    raise ApiError("No available spots for this offering", 409)

            now = datetime.now()
            booking = Booking(
                id=generate_id(),
                student_id=student_id,
                item_id=item_id,
                item_type=item_type,
                booking_date=now,
                status="pending",
                payment_id=None,
                notes=notes,
                created_at=now,
                updated_at=now,
            )
            self.store.bookings.add(booking)
            logger.info(f"Booking created: {booking.id} ({student_id} -> {item_type} {item_id})")
            return booking

        return self.api.call(operation)

    def update_booking(self, booking_id: str, changes: Dict[str, Any]) -> Booking:
        """
        Merge changes into a booking.

        Status changes outside the documented lifecycle are applied but
        logged as warnings.
        """
        def operation():
            actor = require_actor(self.session.current_user())
            booking = self._get_booking(booking_id)
            ensure_booking_access(actor, booking.student_id, "update")

            new_status = changes.get("status")
            if new_status and not is_expected_transition(booking.status, new_status):
                logger.warning(
                    f"Unexpected booking transition {booking.status} -> {new_status} "
                    f"for {booking_id}"
                )

            updated = merge_changes(booking, changes, id=booking_id)
            self.store.bookings.replace(updated)
            return updated

        return self.api.call(operation)

    def cancel_booking(self, booking_id: str) -> Booking:
        return self.update_booking(booking_id, {"status": "cancelled"})

    def delete_booking(self, booking_id: str):
        def operation():
            actor = require_actor(self.session.current_user())
            booking = self._get_booking(booking_id)
            ensure_booking_access(actor, booking.student_id, "delete")
            self.store.bookings.delete(booking_id)
            logger.info(f"Booking deleted: {booking_id}")

        self.api.call(operation)

    # ========== PAYMENTS ==========

    def get_payments(
        self,
        filters: Optional[FilterOptions] = None,
        pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[Payment]:
        """
        List all payments.

        Args:
            filters: status, teacher_id, date_from/date_to on created_at
            pagination: Page to return; all matches when omitted
        """
        def operation():
            items = self.store.payments.list()
            if filters is not None:
                if filters.status:
                    items = [p for p in items if p.status == filters.status]
                if filters.teacher_id:
                    items = [p for p in items if p.teacher_id == filters.teacher_id]
                if filters.date_from is not None:
                    items = [p for p in items if p.created_at >= to_datetime(filters.date_from)]
                if filters.date_to is not None:
                    items = [p for p in items if p.created_at <= to_datetime(filters.date_to)]
            return paginate_or_all(items, pagination)

        return self.api.call(operation)

    def get_payments_by_teacher_id(self, teacher_id: str) -> List[Payment]:
        def operation():
            ensure_teacher_self(self.session.current_user(), teacher_id, "payments")
            return self.store.payments.find(lambda p: p.teacher_id == teacher_id)

        return self.api.call(operation)

    def _get_payment(self, payment_id: str) -> Payment:
        payment = self.store.payments.get(payment_id)
        if payment is None:
            raise ApiError("Payment not found", 404)
        return payment

    def get_payment_by_id(self, payment_id: str) -> Payment:
        return self.api.call(lambda: self._get_payment(payment_id))

    def create_payment(
        self,
        booking_id: str,
        student_id: str,
        teacher_id: str,
        amount: float,
        due_date: Optional[datetime] = None,
        payment_method: Optional[str] = None
    ) -> Payment:
        """
        Create a pending payment in the configured currency.

        The booking is not checked for existence.
        """
        def operation():
            now = datetime.now()
            payment = Payment(
                id=generate_id(),
                booking_id=booking_id,
                student_id=student_id,
                teacher_id=teacher_id,
                amount=amount,
                currency=self.currency,
                status="pending",
                payment_method=payment_method,
                due_date=to_datetime(due_date) if due_date is not None else None,
                created_at=now,
                updated_at=now,
            )
            self.store.payments.add(payment)
            logger.info(f"Payment created: {payment.id} ({amount} {self.currency} to {teacher_id})")
            return payment

        return self.api.call(operation)

    def update_payment(self, payment_id: str, changes: Dict[str, Any]) -> Payment:
        def operation():
            payment = self._get_payment(payment_id)
            updated = merge_changes(payment, changes, id=payment_id)
            self.store.payments.replace(updated)
            return updated

        return self.api.call(operation)

    def mark_payment_as_paid(self, payment_id: str, transaction_id: str, payment_method: str) -> Payment:
        updated = self.update_payment(payment_id, {
            "status": "paid",
            "paid_at": datetime.now(),
            "transaction_id": transaction_id,
            "payment_method": payment_method,
        })
        logger.info(f"Payment marked as paid: {payment_id} via {payment_method}")
        return updated

    def get_teacher_revenue(self, teacher_id: str) -> RevenueSummary:
        """
        Sum a teacher's payment amounts by status.

        Returns:
            RevenueSummary; total covers every payment, refunded included

        Raises:
            ApiError: 401 without session, 403 for students and other teachers
        """
        def operation():
            ensure_teacher_self(self.session.current_user(), teacher_id, "revenue")
            payments = self.store.payments.find(lambda p: p.teacher_id == teacher_id)

            def amount_with(status: str) -> float:
                return sum(p.amount for p in payments if p.status == status)

            return RevenueSummary(
                total=sum(p.amount for p in payments),
                paid=amount_with("paid"),
                pending=amount_with("pending"),
                overdue=amount_with("overdue"),
            )

        return self.api.call(operation)
