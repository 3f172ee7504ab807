from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple
from ..models import Item, CategoryCount
from .. import config as CFG

log = logging.getLogger(__name__)


class CategoryIndex:
    """
    Category name -> items, in insertion order.

    Every item sits in its own category's bucket and, when it declares one,
    in its parent category's bucket too. Looking up a parent therefore
    returns its children without walking the catalog. Buckets hold
    references; the catalog owns the items.
    """
    def __init__(self) -> None:
        self._buckets: Dict[str, List[Item]] = {}

    # ---- Build ----
    def build(self, items: Iterable[Item]) -> None:
        buckets: Dict[str, List[Item]] = {}
        n = 0
        for it in items:
            self._insert(buckets, it)
            n += 1
        self._buckets = buckets
        log.info("Category index built: items=%d categories=%d", n, len(buckets))
        if CFG.VERBOSE:
            print(f"[index] items={n:,} categories={len(buckets):,}")

    def extend(self, item: Item) -> None:
        self._insert(self._buckets, item)

    @staticmethod
    def _insert(buckets: Dict[str, List[Item]], item: Item) -> None:
        buckets.setdefault(item.category, []).append(item)
        if item.parent_category and item.parent_category != item.category:
            buckets.setdefault(item.parent_category, []).append(item)

    # ---- Query ----
    def get(self, category: str) -> Tuple[Item, ...]:
        return tuple(self._buckets.get(category, ()))

    def get_with_subcategories(self, category: str) -> List[Item]:
        """
        Items whose own category is `category` plus items whose parent is
        `category`, each id at most once.
        """
        out: List[Item] = []
        seen: Set[str] = set()
        for it in self._buckets.get(category, ()):
            if it.category != category and it.parent_category != category:
                continue
            if it.id in seen:
                continue
            seen.add(it.id)
            out.append(it)
        return out

    def get_many(self, categories: Iterable[str]) -> List[Item]:
        """Union of several buckets in request order, deduplicated by id."""
        out: List[Item] = []
        seen: Set[str] = set()
        for c in categories:
            for it in self._buckets.get(c, ()):
                if it.id not in seen:
                    seen.add(it.id)
                    out.append(it)
        return out

    # ---- Getters ----
    def categories(self) -> List[str]:
        return list(self._buckets)

    def bucket_sizes(self) -> List[CategoryCount]:
        return [CategoryCount(c, len(items)) for c, items in self._buckets.items()]

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, category: Optional[str]) -> bool:
        return category in self._buckets
