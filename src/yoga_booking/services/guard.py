"""
Authorization guard.

Rules, checked against the actor (the session's current user):

    update own profile                 same user id only
    list all students                  teachers only
    view/create/update/delete booking  the booking's student, or any teacher
    teacher payments and revenue       that teacher only; never students

No actor means 401; a wrong identity or role means 403.
"""

from typing import Optional

from ..models.user import User
from .api import ApiError


def require_actor(actor: Optional[User]) -> User:
    if actor is None:
        raise ApiError("Unauthorized: Authentication required", 401)
    return actor


def ensure_self(actor: Optional[User], user_id: str) -> User:
    actor = require_actor(actor)
    if actor.id != user_id:
        raise ApiError("Unauthorized: You can only update your own profile", 403)
    return actor


def ensure_teacher(actor: Optional[User], message: str = "Only teachers can do this") -> User:
    actor = require_actor(actor)
    if not actor.is_teacher:
        raise ApiError(f"Unauthorized: {message}", 403)
    return actor


def ensure_booking_access(actor: Optional[User], student_id: str, action: str) -> User:
    """
    Allow a student to touch only their own bookings; teachers touch any.

    Args:
        actor: Current user
        student_id: Student who owns (or would own) the booking
        action: Verb for the error message ("view", "create", "update", ...)
    """
    actor = require_actor(actor)
    if actor.is_student and actor.id != student_id:
        raise ApiError(
            f"Unauthorized: You can only {action} your own bookings",
            403
        )
    return actor


def ensure_teacher_self(actor: Optional[User], teacher_id: str, subject: str) -> User:
    """
    Allow only the teacher themselves to see their payments or revenue.

    Args:
        subject: "payments" or "revenue", used in the error message
    """
    actor = require_actor(actor)
    if actor.is_student:
        raise ApiError(f"Unauthorized: Students cannot view teacher {subject}", 403)
    if actor.id != teacher_id:
        raise ApiError(f"Unauthorized: You can only view your own {subject}", 403)
    return actor
