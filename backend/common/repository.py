"""Generic in-memory repository with per-collection id allocation."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Optional, TypeVar

from backend.common.models import Record

T = TypeVar("T", bound=Record)


class Repository(Generic[T]):
    """
    Holds one entity collection keyed by integer id.

    Ids are issued as ``max(existing id) + 1`` (``1`` when empty). There is
    no delete, so the allocator only ever moves forward. No validation
    happens here; callers hold the store lock around mutations.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._rows: dict[int, T] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self.all())

    @property
    def next_id(self) -> int:
        return self._next_id

    def insert(self, entity: T) -> T:
        entity.id = self._next_id
        self._rows[entity.id] = entity
        self._next_id += 1
        return entity

    def get(self, entity_id: Optional[int]) -> Optional[T]:
        if entity_id is None:
            return None
        return self._rows.get(entity_id)

    def exists(self, entity_id: Optional[int]) -> bool:
        return self.get(entity_id) is not None

    def all(self) -> list[T]:
        return sorted(self._rows.values(), key=lambda e: e.id)

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [e for e in self.all() if predicate(e)]

    def load(self, entities: Iterable[T]) -> None:
        """Replace the collection with persisted rows, keeping their ids."""
        rows = {e.id: e for e in entities}
        self._rows = rows
        self._next_id = max(rows) + 1 if rows else 1
