"""
Generic keyed entity store with insertion-ordered iteration.
"""

from __future__ import annotations

from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from .errors import DuplicateKeyError

T = TypeVar("T")


class EntityStore(Generic[T]):
    """
    Keyed collection backing every directory and engine.

    Iteration, ``get_all`` and ``search`` follow insertion order. Updating a
    key keeps its original position. Lookups by key are O(1); predicate
    search is a linear scan. Not safe for concurrent mutation.
    """

    def __init__(self) -> None:
        self._entities: Dict[str, T] = {}

    def add(self, key: str, entity: T) -> None:
        if key in self._entities:
            raise DuplicateKeyError(key)
        self._entities[key] = entity

    def get(self, key: str) -> Optional[T]:
        return self._entities.get(key)

    def get_all(self) -> List[T]:
        return list(self._entities.values())

    def search(self, predicate: Callable[[T], bool]) -> List[T]:
        return [entity for entity in self._entities.values() if predicate(entity)]

    def update(self, key: str, entity: T) -> bool:
        if key not in self._entities:
            return False
        self._entities[key] = entity
        return True

    def delete(self, key: str) -> bool:
        if key not in self._entities:
            return False
        del self._entities[key]
        return True

    def exists(self, key: str) -> bool:
        return key in self._entities

    def size(self) -> int:
        return len(self._entities)

    def clear(self) -> None:
        self._entities.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._entities.values()))
