# suggest/DB/memory_store.py
from __future__ import annotations
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional
from ..models import Item


class MemoryStore:
    """In-memory catalog in insertion order. Lookups by id are linear scans."""
    def __init__(self, items: Optional[Iterable[Item]] = None) -> None:
        self._rows: List[Item] = list(items) if items else []

    # C
    def create(self, item: Item) -> None:
        self._rows.append(item)

    def bulk_create(self, items: Iterable[Item]) -> int:
        n = 0
        for it in items:
            self._rows.append(it)
            n += 1
        return n

    # R
    def find(self, item_id: str) -> Optional[Item]:
        for it in self._rows:
            if it.id == item_id:
                return it
        return None

    def count(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._rows)

    def snapshot(self) -> tuple[Item, ...]:
        return tuple(self._rows)

    # U
    def update_popularity(self, item_id: str, popularity: float) -> Optional[Item]:
        """Swap in a copy of the row with the new popularity; None when the id is unknown."""
        for i, it in enumerate(self._rows):
            if it.id == item_id:
                self._rows[i] = replace(it, popularity=popularity)
                return self._rows[i]
        return None
