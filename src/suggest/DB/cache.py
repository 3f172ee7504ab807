from __future__ import annotations
import logging
from collections import OrderedDict
from typing import Dict, Generic, Hashable, Optional, TypeVar

log = logging.getLogger(__name__)

V = TypeVar("V")


class ResultCache(Generic[V]):
    """
    Bounded LRU map from a query signature to a finished result list.

    Both get() and set() mark the key as most recently used; inserting past
    capacity evicts the least recently used entry.
    """
    def __init__(self, capacity: int = 100) -> None:
        self.capacity = max(1, int(capacity))
        self._data: "OrderedDict[Hashable, V]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[V]:
        if key in self._data:
            self._data.move_to_end(key)
            self.hits += 1
            return self._data[key]
        self.misses += 1
        return None

    def set(self, key: Hashable, value: V) -> None:
        if key in self._data:
            self._data.move_to_end(key)
        elif len(self._data) >= self.capacity:
            old, _ = self._data.popitem(last=False)
            log.debug("cache evict %r", old)
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()

    def stats(self) -> Dict[str, float]:
        total = self.hits + self.misses
        return {
            "size": len(self._data),
            "capacity": self.capacity,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / total if total else 0.0,
        }

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._data
