"""
User data models.

Teachers and students share the base User fields; each role adds its own
profile data. Users are serialized to JSON for the session blob, so every
model round-trips through to_dict()/from_dict().
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from .base import DictModel


UserRole = Literal["teacher", "student"]

TEACHER: UserRole = "teacher"
STUDENT: UserRole = "student"


@dataclass
class User(DictModel):
    """
    Base user account.

    Attributes:
        id: Unique user identifier (e.g. "teacher-0001")
        email: Login email
        name: Display name
        role: "teacher" or "student"
        phone: Optional phone number
        avatar: Optional avatar URL
        created_at: Creation timestamp
        updated_at: Last profile update timestamp
    """

    DATETIME_FIELDS = ("created_at", "updated_at")

    id: str
    email: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_teacher(self) -> bool:
        return self.role == TEACHER

    @property
    def is_student(self) -> bool:
        return self.role == STUDENT


@dataclass
class Teacher(User):
    """Teacher profile with bio, specialties and website."""

    role: UserRole = TEACHER
    bio: Optional[str] = None
    specialties: List[str] = field(default_factory=list)
    website: Optional[str] = None


@dataclass
class EmergencyContact:
    """Student's emergency contact."""

    name: str
    phone: str
    relationship: str


@dataclass
class Student(User):
    """Student profile with emergency contact and medical notes."""

    role: UserRole = STUDENT
    emergency_contact: Optional[EmergencyContact] = None
    medical_notes: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Student":
        data = dict(d)
        contact = data.get("emergency_contact")
        if isinstance(contact, dict):
            data["emergency_contact"] = EmergencyContact(**contact)
        return super().from_dict(data)


def user_from_dict(d: Dict[str, Any]) -> User:
    """
    Rebuild a Teacher or Student from its dictionary form.

    Args:
        d: Dictionary produced by User.to_dict()

    Returns:
        Teacher or Student instance, depending on the "role" key

    Raises:
        ValueError: If the role is missing or unknown
    """
    role = d.get("role")
    if role == TEACHER:
        return Teacher.from_dict(d)
    if role == STUDENT:
        return Student.from_dict(d)
    raise ValueError(f"Unknown user role: {role!r}")
