"""
In-memory entity store and session storage.
"""

from .repository import Repository, InMemoryRepository
from .entity_store import EntityStore
from .session import SessionStorage, AuthSession, SessionState, SESSION_KEY

__all__ = [
    "Repository",
    "InMemoryRepository",
    "EntityStore",
    "SessionStorage",
    "AuthSession",
    "SessionState",
    "SESSION_KEY",
]
