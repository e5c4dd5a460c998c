"""
Unit tests for UserService: profiles, login and session handling.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from yoga_booking.models.user import Student, Teacher
from yoga_booking.services import ApiError, UserService
from yoga_booking.store.session import ROLE_PREFERENCE_KEY, SESSION_KEY


class TestTeachers:
    """Test cases for teacher profile operations."""

    def test_get_teachers_is_public(self, users):
        """Test anyone can list teachers."""
        teachers = users.get_teachers()

        assert [t.id for t in teachers] == [
            "teacher-0001", "teacher-0002", "teacher-0003", "teacher-0004", "teacher-0005"
        ]

    def test_get_teacher_by_id(self, users):
        assert users.get_teacher_by_id("teacher-0003").name == "Anne Berg"

    def test_get_teacher_by_email(self, users):
        assert users.get_teacher_by_email("lars.hansen@yoga.no").id == "teacher-0002"

    def test_missing_teacher(self, users):
        with pytest.raises(ApiError, match="Teacher not found") as exc_info:
            users.get_teacher_by_id("teacher-9999")
        assert exc_info.value.status_code == 404

    def test_update_own_profile(self, users, as_teacher):
        """Test id and role cannot be changed through an update."""
        updated = users.update_teacher("teacher-0001", {
            "bio": "Ny bio",
            "id": "teacher-9999",
            "role": "student",
        })

        assert updated.bio == "Ny bio"
        assert updated.id == "teacher-0001"
        assert updated.role == "teacher"
        assert users.get_teacher_by_id("teacher-0001").bio == "Ny bio"

    def test_update_other_teacher_forbidden(self, users, as_teacher):
        with pytest.raises(ApiError) as exc_info:
            users.update_teacher("teacher-0002", {"bio": "x"})
        assert exc_info.value.status_code == 403

    def test_update_without_session(self, users):
        with pytest.raises(ApiError) as exc_info:
            users.update_teacher("teacher-0001", {"bio": "x"})
        assert exc_info.value.status_code == 401

    def test_update_unknown_field(self, users, as_teacher):
        with pytest.raises(ApiError) as exc_info:
            users.update_teacher("teacher-0001", {"favourite_pose": "crow"})
        assert exc_info.value.status_code == 400


class TestStudents:
    """Test cases for student profile operations."""

    def test_student_cannot_list_students(self, users, as_student):
        with pytest.raises(ApiError) as exc_info:
            users.get_students()

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Unauthorized: Only teachers can view all students"

    def test_teacher_lists_students(self, users, as_teacher):
        students = users.get_students()

        assert len(students) == 10
        assert all(isinstance(s, Student) for s in students)

    def test_list_students_without_session(self, users):
        with pytest.raises(ApiError) as exc_info:
            users.get_students()
        assert exc_info.value.status_code == 401

    def test_null_session_blob_is_unauthorized(self, users, storage):
        """Test a stored JSON null counts as no session, not a server error."""
        storage.set_item(SESSION_KEY, "null")

        with pytest.raises(ApiError) as exc_info:
            users.get_students()
        assert exc_info.value.status_code == 401

    def test_get_student_lookups(self, users):
        assert users.get_student_by_id("student-0004").name == "Oliver Johansen"
        assert users.get_student_by_email("ella.nilsen@example.no").id == "student-0007"

    def test_update_own_student_profile(self, users, as_student):
        updated = users.update_student("student-0001", {"phone": "+47 999 99 999"})

        assert updated.phone == "+47 999 99 999"
        assert updated.role == "student"

    def test_student_cannot_update_other(self, users, as_student):
        with pytest.raises(ApiError) as exc_info:
            users.update_student("student-0002", {"phone": "x"})
        assert exc_info.value.status_code == 403


class TestAuthentication:
    """Test cases for login, logout and current user."""

    def test_login_teacher(self, users, session):
        user = users.login("kari.nordmann@yoga.no", "anything")

        assert isinstance(user, Teacher)
        assert session.current_user().id == "teacher-0001"

    def test_login_student(self, users):
        user = users.login("noah.pedersen@example.no", "")

        assert isinstance(user, Student)
        assert user.id == "student-0002"

    def test_login_unknown_email(self, users, session):
        with pytest.raises(ApiError, match="Invalid credentials") as exc_info:
            users.login("nobody@example.no", "secret")

        assert exc_info.value.status_code == 401
        assert session.current_user() is None

    def test_logout(self, users, as_teacher):
        users.logout()

        assert users.get_current_user() is None

    def test_current_user(self, users, as_student):
        assert users.get_current_user().id == "student-0001"

    def test_no_auto_login_outside_dev_mode(self, users):
        assert users.get_current_user() is None

    def test_dev_auto_login_teacher(self, store, session, api):
        """Test dev mode logs in the first teacher."""
        dev_users = UserService(store, session, api, dev_mode=True)

        assert dev_users.get_current_user().id == "teacher-0001"
        assert session.current_user().id == "teacher-0001"

    def test_dev_auto_login_student_preference(self, store, storage, session, api):
        storage.set_item(ROLE_PREFERENCE_KEY, "student")
        dev_users = UserService(store, session, api, dev_mode=True)

        assert dev_users.get_current_user().id == "student-0001"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
