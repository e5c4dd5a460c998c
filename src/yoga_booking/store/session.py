"""
Session storage and current-user tracking.

SessionStorage is a string key/value store with the same contract as a
browser's sessionStorage/localStorage. AuthSession keeps the logged-in user
in it as a JSON blob under SESSION_KEY. The blob is writable by anyone with
access to the storage, so it identifies the actor but proves nothing.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from ..models.user import User, user_from_dict
from ..utils.logger import mask_email


logger = logging.getLogger(__name__)

SESSION_KEY = "yoga_booking_user"
ROLE_PREFERENCE_KEY = "yoga_booking_role_preference"


class SessionStorage:
    """
    In-memory string key/value storage.

    Examples:
        >>> storage = SessionStorage()
        >>> storage.set_item("yoga_booking_dev_scenario", "empty")
        >>> storage.get_item("yoga_booking_dev_scenario")
        'empty'
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str):
        self._items[key] = str(value)

    def remove_item(self, key: str):
        self._items.pop(key, None)

    def clear(self):
        self._items.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._items


class SessionState(Enum):
    """Session states."""

    NOT_LOGGED_IN = "not_logged_in"
    LOGGED_IN = "logged_in"


class AuthSession:
    """
    Tracks the current user through a SessionStorage blob.

    current_user() re-reads the storage on every call, so a blob written by
    someone else (or corrupted) is picked up immediately.

    Examples:
        >>> session = AuthSession(SessionStorage())
        >>> session.store_user(teacher)
        >>> session.current_user().id
        'teacher-0001'
    """

    def __init__(self, storage: SessionStorage):
        """
        Initialize AuthSession.

        Args:
            storage: Storage holding the session blob
        """
        self.storage = storage
        self._login_time: Optional[datetime] = None
        self._last_activity: Optional[datetime] = None

    @property
    def state(self) -> SessionState:
        if self.current_user() is None:
            return SessionState.NOT_LOGGED_IN
        return SessionState.LOGGED_IN

    @property
    def is_logged_in(self) -> bool:
        return self.state == SessionState.LOGGED_IN

    def current_user(self) -> Optional[User]:
        """
        Read the current user from storage.

        Returns:
            User, or None when there is no blob. A blob that cannot be
            parsed is removed and also yields None.
        """
        stored = self.storage.get_item(SESSION_KEY)
        if not stored:
            return None

        try:
            data = json.loads(stored)
            if not isinstance(data, dict):
                raise ValueError(f"expected a user object, got {type(data).__name__}")
            user = user_from_dict(data)
        except (ValueError, TypeError) as e:
            logger.warning(f"Clearing unreadable session blob: {e}")
            self.storage.remove_item(SESSION_KEY)
            return None

        self._last_activity = datetime.now()
        return user

    def store_user(self, user: User):
        """
        Write user as the current session user.

        Call this after a successful login.
        """
        self.storage.set_item(SESSION_KEY, json.dumps(user.to_dict()))
        now = datetime.now()
        self._login_time = now
        self._last_activity = now
        logger.info(f"Session started for {mask_email(user.email)} ({user.role})")

    def clear(self):
        """Remove the session blob (logout)."""
        self.storage.remove_item(SESSION_KEY)
        self._login_time = None
        self._last_activity = None
        logger.info("Session cleared")

    def role_preference(self) -> Optional[str]:
        return self.storage.get_item(ROLE_PREFERENCE_KEY)

    def get_session_info(self) -> dict:
        """
        Get session information for debugging.

        Returns:
            Dictionary with session details
        """
        user = self.current_user()
        return {
            "state": self.state.value,
            "logged_in": user is not None,
            "user_id": user.id if user else None,
            "role": user.role if user else None,
            "login_time": self._login_time.isoformat() if self._login_time else None,
            "last_activity": self._last_activity.isoformat() if self._last_activity else None,
        }
