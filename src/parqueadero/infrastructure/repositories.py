# File: src/parqueadero/infrastructure/repositories.py
"""
Repository Pattern Implementation for the Parqueadero Management System

Repositories provide a collection-like interface for accessing domain
aggregates while hiding how they are stored. Only in-memory storage is
provided; lots live for the lifetime of the process.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional, Dict
import logging

from ..domain.aggregates import ParkingLot

# Type variables for generic repositories
T = TypeVar('T')  # Entity type
ID = TypeVar('ID')  # ID type


# ============================================================================
# REPOSITORY INTERFACES
# ============================================================================

class Repository(ABC, Generic[T, ID]):
    """Base repository interface"""

    @abstractmethod
    def add(self, entity: T) -> T:
        """Add an entity to the repository"""
        pass

    @abstractmethod
    def get(self, id: ID) -> Optional[T]:
        """Get an entity by ID"""
        pass

    @abstractmethod
    def count(self) -> int:
        """Count all entities"""
        pass


# ============================================================================
# IN-MEMORY REPOSITORIES
# ============================================================================

class InMemoryRepository(Repository[T, str]):
    """In-memory repository keyed by entity id, in insertion order"""

    def __init__(self):
        self._storage: Dict[str, T] = {}
        self._logger = logging.getLogger(self.__class__.__name__)

    def add(self, entity: T) -> T:
        entity_id = getattr(entity, 'id')
        if entity_id in self._storage:
            raise KeyError(f"Entity {entity_id} already exists")

        self._storage[entity_id] = entity
        self._logger.debug(f"Added entity {entity_id}")
        return entity

    def get(self, id: str) -> Optional[T]:
        return self._storage.get(id)

    def count(self) -> int:
        return len(self._storage)


class InMemoryParkingLotRepository(InMemoryRepository[ParkingLot]):
    """In-memory repository for parking lots"""

    def find_by_name(self, name: str) -> Optional[ParkingLot]:
        """Find the first lot registered with the given name"""
        for lot in self._storage.values():
            if lot.name == name:
                return lot
        return None
