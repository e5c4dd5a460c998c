"""
Repository interface and in-memory implementation.

Services depend on the abstract Repository so the backing store can be
swapped (or mocked in tests) without touching service logic.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, List, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar('T')


class Repository(ABC, Generic[T]):
    """
    Abstract collection of entities keyed by their ``id`` attribute.

    Implementations must return copies, never live references, so that
    mutating a returned entity has no effect until it is passed back
    through replace().
    """

    @abstractmethod
    def list(self) -> List[T]:
        """Return all entities in insertion order."""
        pass

    @abstractmethod
    def get(self, entity_id: str) -> Optional[T]:
        """Return the entity with the given id, or None."""
        pass

    @abstractmethod
    def add(self, entity: T) -> T:
        """Append an entity and return a copy of it."""
        pass

    @abstractmethod
    def replace(self, entity: T) -> Optional[T]:
        """
        Overwrite the stored entity with the same id.

        Returns:
            Copy of the stored entity, or None if no entity has that id
        """
        pass

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """Remove an entity; returns False if it did not exist."""
        pass

    @abstractmethod
    def clear(self):
        """Remove all entities."""
        pass

    def find(self, predicate: Callable[[T], bool]) -> List[T]:
        return [entity for entity in self.list() if predicate(entity)]

    def find_one(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for entity in self.list():
            if predicate(entity):
                return entity
        return None

    def exists(self, entity_id: str) -> bool:
        return self.get(entity_id) is not None

    def count(self) -> int:
        return len(self.list())


class InMemoryRepository(Repository[T]):
    """
    List-backed repository.

    Lookups are linear scans; fine for fixture-sized data. State lives only
    as long as the instance.

    Examples:
        >>> bookings = InMemoryRepository("bookings", seed=fixtures.bookings)
        >>> bookings.get("booking-0001").status
        'confirmed'
    """

    def __init__(self, name: str, seed: Optional[Iterable[T]] = None):
        self.name = name
        self._items: List[T] = [copy.deepcopy(item) for item in (seed or [])]
        logger.debug(f"Repository '{name}' seeded with {len(self._items)} items")

    def _index_of(self, entity_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                return index
        return -1

    def list(self) -> List[T]:
        return copy.deepcopy(self._items)

    def get(self, entity_id: str) -> Optional[T]:
        index = self._index_of(entity_id)
        if index == -1:
            return None
        return copy.deepcopy(self._items[index])

    def find(self, predicate: Callable[[T], bool]) -> List[T]:
        return [copy.deepcopy(item) for item in self._items if predicate(item)]

    def find_one(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for item in self._items:
            if predicate(item):
                return copy.deepcopy(item)
        return None

    def add(self, entity: T) -> T:
        self._items.append(copy.deepcopy(entity))
        return copy.deepcopy(entity)

    def replace(self, entity: T) -> Optional[T]:
        index = self._index_of(entity.id)
        if index == -1:
            return None
        self._items[index] = copy.deepcopy(entity)
        return copy.deepcopy(entity)

    def delete(self, entity_id: str) -> bool:
        index = self._index_of(entity_id)
        if index == -1:
            return False
        del self._items[index]
        return True

    def clear(self):
        self._items.clear()

    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)
