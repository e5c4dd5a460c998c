"""
User service: teacher and student profiles plus mock authentication.
"""

import logging
from typing import Any, Dict, List, Optional

from ..models.user import Student, Teacher, User, STUDENT, TEACHER
from ..store.entity_store import EntityStore
from ..store.session import AuthSession
from ..utils.logger import mask_email
from .api import ApiError, MockApi, merge_changes
from .guard import ensure_self, ensure_teacher


logger = logging.getLogger(__name__)

LOGIN_DELAY_MS = 1000
SESSION_DELAY_MS = 300


class UserService:
    """
    Profiles and login against the seeded users.

    Login checks only that the email belongs to a seeded user; passwords
    are accepted as-is.

    Examples:
        >>> users = UserService(store, session, MockApi(0))
        >>> users.login("kari.nordmann@yoga.no", "anything").name
        'Kari Nordmann'
    """

    def __init__(
        self,
        store: EntityStore,
        session: AuthSession,
        api: MockApi,
        dev_mode: bool = False
    ):
        """
        Initialize UserService.

        Args:
            store: Entity store holding teachers and students
            session: Session tracking the current user
            api: Mock API call wrapper
            dev_mode: Auto-login a seeded user when no session exists
        """
        self.store = store
        self.session = session
        self.api = api
        self.dev_mode = dev_mode

    # ========== TEACHERS ==========

    def get_teachers(self) -> List[Teacher]:
        return self.api.call(self.store.teachers.list)

    def get_teacher_by_id(self, teacher_id: str) -> Teacher:
        def operation():
            teacher = self.store.teachers.get(teacher_id)
            if teacher is None:
                raise ApiError("Teacher not found", 404)
            return teacher

        return self.api.call(operation)

    def get_teacher_by_email(self, email: str) -> Teacher:
        def operation():
            teacher = self.store.teachers.find_one(lambda t: t.email == email)
            if teacher is None:
                raise ApiError("Teacher not found", 404)
            return teacher

        return self.api.call(operation)

    def update_teacher(self, teacher_id: str, changes: Dict[str, Any]) -> Teacher:
        """
        Update a teacher's own profile.

        Args:
            teacher_id: Teacher to update; must be the current user
            changes: Fields to overwrite (id and role are ignored)

        Raises:
            ApiError: 401 without session, 403 for anyone else, 404 if the
                teacher does not exist, 400 for unknown fields
        """
        def operation():
            ensure_self(self.session.current_user(), teacher_id)

            teacher = self.store.teachers.get(teacher_id)
            if teacher is None:
                raise ApiError("Teacher not found", 404)

            updated = merge_changes(teacher, changes, id=teacher_id, role=TEACHER)
            self.store.teachers.replace(updated)
            logger.info(f"Teacher profile updated: {teacher_id}")
            return updated

        return self.api.call(operation)

    # ========== STUDENTS ==========

    def get_students(self) -> List[Student]:
        def operation():
            ensure_teacher(self.session.current_user(), "Only teachers can view all students")
            return self.store.students.list()

        return self.api.call(operation)

    def get_student_by_id(self, student_id: str) -> Student:
        def operation():
            student = self.store.students.get(student_id)
            if student is None:
                raise ApiError("Student not found", 404)
            return student

        return self.api.call(operation)

    def get_student_by_email(self, email: str) -> Student:
        def operation():
            student = self.store.students.find_one(lambda s: s.email == email)
            if student is None:
                raise ApiError("Student not found", 404)
            return student

        return self.api.call(operation)

    def update_student(self, student_id: str, changes: Dict[str, Any]) -> Student:
        """Update a student's own profile. Same rules as update_teacher."""
        def operation():
            ensure_self(self.session.current_user(), student_id)

            student = self.store.students.get(student_id)
            if student is None:
                raise ApiError("Student not found", 404)

            updated = merge_changes(student, changes, id=student_id, role=STUDENT)
            self.store.students.replace(updated)
            logger.info(f"Student profile updated: {student_id}")
            return updated

        return self.api.call(operation)

    # ========== AUTHENTICATION ==========

    def _find_user_by_email(self, email: str) -> Optional[User]:
        teacher = self.store.teachers.find_one(lambda t: t.email == email)
        if teacher is not None:
            return teacher
        return self.store.students.find_one(lambda s: s.email == email)

    def login(self, email: str, password: str) -> User:
        """
        Log in as a seeded teacher or student.

        Args:
            email: Email of a seeded user (teachers are checked first)
            password: Not verified

        Returns:
            The logged-in user, also stored in the session

        Raises:
            ApiError: 401 "Invalid credentials" for an unknown email
        """
        def operation():
            user = self._find_user_by_email(email)
            if user is None:
                logger.warning(f"Login failed for {mask_email(email)}")
                raise ApiError("Invalid credentials", 401)

            self.session.store_user(user)
            return user

        return self.api.call(operation, LOGIN_DELAY_MS)

    def logout(self):
        self.api.call(self.session.clear, SESSION_DELAY_MS)

    def get_current_user(self) -> Optional[User]:
        """
        Read the current user from the session.

        In dev mode with no session, the first teacher is logged in
        automatically (or the first student when the stored role
        preference is "student").

        Returns:
            Current user, or None when logged out
        """
        def operation():
            user = self.session.current_user()
            if user is not None or not self.dev_mode:
                return user

            if self.session.role_preference() == STUDENT:
                candidates = self.store.students.list()
            else:
                candidates = self.store.teachers.list()

            if not candidates:
                return None

            user = candidates[0]
            logger.debug(f"Dev auto-login as {user.id}")
            self.session.store_user(user)
            return user

        return self.api.call(operation, SESSION_DELAY_MS)
