"""
Offering service: CRUD and filtered listing for classes, courses and events.

Spot counters (booked_count / enrolled_count) belong to the studio: new
offerings start at zero and updates cannot overwrite them.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..models.dates import to_datetime
from ..models.offering import Course, Event, Offering, YogaClass, generate_course_sessions
from ..models.query import FilterOptions, PaginatedResponse, PaginationParams
from ..store.entity_store import EntityStore
from ..store.repository import Repository
from ..utils.ids import generate_id
from .api import ApiError, MockApi, filter_by_search, merge_changes, paginate_or_all


logger = logging.getLogger(__name__)

CLASS_SEARCH_FIELDS = ("name", "description", "location")
COURSE_SEARCH_FIELDS = ("name", "description", "location")
EVENT_SEARCH_FIELDS = ("name", "description", "location", "event_type")


class OfferingService:
    """
    Classes, courses and events.

    Examples:
        >>> offerings = OfferingService(store, MockApi(0))
        >>> page = offerings.get_courses(FilterOptions(teacher_id="teacher-0001"))
        >>> [c.id for c in page.data]
        ['course-0001']
    """

    def __init__(self, store: EntityStore, api: MockApi):
        self.store = store
        self.api = api

    # ========== SHARED ==========

    def _get(self, repo: Repository, entity_id: str, label: str):
        entity = repo.get(entity_id)
        if entity is None:
            raise ApiError(f"{label} not found", 404)
        return entity

    def _update(self, repo: Repository, entity_id: str, changes: Dict[str, Any], label: str, counter: str):
        def operation():
            current = self._get(repo, entity_id, label)
            updated = merge_changes(
                current, changes,
                id=entity_id,
                **{counter: getattr(current, counter)}
            )
            repo.replace(updated)
            logger.info(f"{label} updated: {entity_id}")
            return updated

        return self.api.call(operation)

    def _delete(self, repo: Repository, entity_id: str, label: str):
        def operation():
            if not repo.delete(entity_id):
                raise ApiError(f"{label} not found", 404)
            logger.info(f"{label} deleted: {entity_id}")

        self.api.call(operation)

    def _create(self, repo: Repository, entity, counter: str, prepare: Optional[Callable] = None):
        def operation():
            now = datetime.now()
            created = replace(
                entity,
                id=generate_id(),
                created_at=now,
                updated_at=now,
                **{counter: 0}
            )
            if prepare is not None:
                created = prepare(created)
            repo.add(created)
            logger.info(f"{type(created).__name__} created: {created.id} ({created.name})")
            return created

        return self.api.call(operation)

    @staticmethod
    def _filter_dated(items: List, filters: FilterOptions, date_attr: str) -> List:
        if filters.date_from is not None:
            items = [i for i in items if getattr(i, date_attr) >= to_datetime(filters.date_from)]
        if filters.date_to is not None:
            items = [i for i in items if getattr(i, date_attr) <= to_datetime(filters.date_to)]
        return items

    # ========== CLASSES ==========

    def get_classes(
        self,
        filters: Optional[FilterOptions] = None,
        pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[YogaClass]:
        """
        List single classes.

        Args:
            filters: search (name, description, location), teacher_id,
                date_from/date_to on the class date, drop_in_only
            pagination: Page to return; all matches when omitted

        Returns:
            PaginatedResponse of classes
        """
        def operation():
            items = self.store.classes.list()
            if filters is not None:
                items = filter_by_search(items, filters.search, CLASS_SEARCH_FIELDS)
                if filters.teacher_id:
                    items = [c for c in items if c.teacher_id == filters.teacher_id]
                items = self._filter_dated(items, filters, "date")
                if filters.drop_in_only:
                    items = [c for c in items if c.drop_in_available]
            return paginate_or_all(items, pagination)

        return self.api.call(operation)

    def get_class_by_id(self, class_id: str) -> YogaClass:
        return self.api.call(lambda: self._get(self.store.classes, class_id, "Class"))

    def create_class(self, yoga_class: YogaClass) -> YogaClass:
        """Store a new class under a fresh id with booked_count 0."""
        return self._create(self.store.classes, yoga_class, "booked_count")

    def update_class(self, class_id: str, changes: Dict[str, Any]) -> YogaClass:
        return self._update(self.store.classes, class_id, changes, "Class", "booked_count")

    def delete_class(self, class_id: str):
        self._delete(self.store.classes, class_id, "Class")

    # ========== COURSES ==========

    def get_courses(
        self,
        filters: Optional[FilterOptions] = None,
        pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[Course]:
        """
        List courses.

        A course matches date_from while any of its sessions falls on or
        after that date (its end_date), and date_to while it starts on or
        before that date.
        """
        def operation():
            items = self.store.courses.list()
            if filters is not None:
                items = filter_by_search(items, filters.search, COURSE_SEARCH_FIELDS)
                if filters.teacher_id:
                    items = [c for c in items if c.teacher_id == filters.teacher_id]
                if filters.date_from is not None:
                    items = [c for c in items if c.end_date >= to_datetime(filters.date_from)]
                if filters.date_to is not None:
                    items = [c for c in items if c.start_date <= to_datetime(filters.date_to)]
            return paginate_or_all(items, pagination)

        return self.api.call(operation)

    def get_course_by_id(self, course_id: str) -> Course:
        return self.api.call(lambda: self._get(self.store.courses, course_id, "Course"))

    def create_course(self, course: Course) -> Course:
        """
        Store a new course under a fresh id with enrolled_count 0.

        Weekly sessions are generated when the course has none.
        """
        def with_sessions(created: Course) -> Course:
            if created.sessions:
                return created
            return replace(created, sessions=generate_course_sessions(created))

        return self._create(self.store.courses, course, "enrolled_count", with_sessions)

    def update_course(self, course_id: str, changes: Dict[str, Any]) -> Course:
        return self._update(self.store.courses, course_id, changes, "Course", "enrolled_count")

    def delete_course(self, course_id: str):
        self._delete(self.store.courses, course_id, "Course")

    # ========== EVENTS ==========

    def get_events(
        self,
        filters: Optional[FilterOptions] = None,
        pagination: Optional[PaginationParams] = None
    ) -> PaginatedResponse[Event]:
        def operation():
            items = self.store.events.list()
            if filters is not None:
                items = filter_by_search(items, filters.search, EVENT_SEARCH_FIELDS)
                if filters.teacher_id:
                    items = [e for e in items if e.teacher_id == filters.teacher_id]
                items = self._filter_dated(items, filters, "date")
                if filters.drop_in_only:
                    items = [e for e in items if e.drop_in_available]
            return paginate_or_all(items, pagination)

        return self.api.call(operation)

    def get_event_by_id(self, event_id: str) -> Event:
        return self.api.call(lambda: self._get(self.store.events, event_id, "Event"))

    def create_event(self, event: Event) -> Event:
        return self._create(self.store.events, event, "booked_count")

    def update_event(self, event_id: str, changes: Dict[str, Any]) -> Event:
        return self._update(self.store.events, event_id, changes, "Event", "booked_count")

    def delete_event(self, event_id: str):
        self._delete(self.store.events, event_id, "Event")

    # ========== LOOKUP ==========

    def find_offering(self, item_id: str, item_type: str) -> Optional[Offering]:
        """
        Resolve a booking target directly from the store (no delay).

        Returns:
            The offering, or None when it does not exist

        Raises:
            ApiError: 400 for an unknown item type
        """
        repos = {
            "single": self.store.classes,
            "course": self.store.courses,
            "event": self.store.events,
        }
        if item_type not in repos:
            raise ApiError(f"Unknown item type: {item_type}", 400)
        return repos[item_type].get(item_id)

    def get_offering(self, item_id: str, item_type: str) -> Offering:
        def operation():
            offering = self.find_offering(item_id, item_type)
            if offering is None:
                raise ApiError("Offering not found", 404)
            return offering

        return self.api.call(operation)
