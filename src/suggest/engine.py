# suggest/engine.py
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import fields, replace
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from . import config as CFG
from .config import SearchConfig
from .models import (
    CategoryCount,
    EngineStats,
    Item,
    MatchType,
    RankedResult,
    SearchOptions,
    SearchWithStats,
)
from .matcher import classify
from .scorer import final_score
from .loader import item_from_record
from .phonetic import PhoneticProvider, PinyinProvider
from .DB.cache import ResultCache
from .DB.index import CategoryIndex
from .DB.memory_store import MemoryStore

log = logging.getLogger(__name__)

ItemLike = Union[Item, Mapping[str, Any]]
OptionsLike = Union[SearchOptions, Mapping[str, Any], None]
Results = Tuple[RankedResult, ...]

_CONFIG_FIELDS = frozenset(f.name for f in fields(SearchConfig))


class Engine:
    """
    Suggestion search engine over an in-memory catalog.

    Glues together:
      - the catalog (MemoryStore), which owns copies of the caller's items,
      - the category index (CategoryIndex) used to narrow candidates,
      - the matcher / scorer pipeline,
      - an LRU result cache keyed on (query, options).

    Public API (used by CLI/Flask):
      * search(query, options):                   ranked top-N suggestions
      * search_with_category_stats(query, options): same + per-category counts
      * update_config(...), clear_cache()
      * add_item(item), add_items(items), update_popularity(id, value)
      * get_item(id), stats()

    Not thread-safe: the host must serialize every call.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        items: Iterable[ItemLike] = (),
        config: Union[SearchConfig, Mapping[str, Any], None] = None,
        *,
        provider: Optional[PhoneticProvider] = None,
        cache_size: int = CFG.CACHE_SIZE,
    ) -> None:
        self._provider: PhoneticProvider = provider if provider is not None else PinyinProvider()
        self._config = _merge_config(SearchConfig(), config)
        self._store = MemoryStore()
        self._index = CategoryIndex()
        self._cache: ResultCache[Results] = ResultCache(cache_size)

        self._store.bulk_create(self._ingest(it, pos) for pos, it in enumerate(items))
        self._index.build(self._store)
        log.info("Engine ready: items=%d categories=%d", self._store.count(), len(self._index))

    # ------------- query -------------

    # /* ~~~ Ranked top-N suggestions; blank query -> most popular items ~~~ */
    def search(self, query: str, options: OptionsLike = None) -> Results:
        opts = _coerce_options(options)
        q = (query or "").strip()
        if not q:
            return tuple(self._hot(opts)[: self._limit()])

        key = cache_key(q, opts)
        cached = self._cache.get(key)
        if cached is not None:
            log.debug("cache hit %r", key)
            return cached

        log.debug("cache miss %r", key)
        top = tuple(self._rank(q, opts)[: self._limit()])
        self._cache.set(key, top)
        return top

    # /* ~~~ Same ranking, plus per-category counts over every match (uncached) ~~~ */
    def search_with_category_stats(self, query: str, options: OptionsLike = None) -> SearchWithStats:
        opts = _coerce_options(options)
        q = (query or "").strip()
        rows = self._rank(q, opts) if q else self._hot(opts)
        return SearchWithStats(
            results=tuple(rows[: self._limit()]),
            category_stats=_category_counts(rows),
        )

    def get_item(self, item_id: str) -> Optional[Item]:
        return self._store.find(item_id)

    def stats(self) -> EngineStats:
        return EngineStats(
            total_items=self._store.count(),
            total_categories=len(self._index),
            cache_size=len(self._cache),
            cache_hits=self._cache.hits,
            cache_misses=self._cache.misses,
            categories=tuple(self._index.bucket_sizes()),
        )

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def items(self) -> Tuple[Item, ...]:
        return self._store.snapshot()

    # ------------- mutation -------------

    def update_config(self, partial: Union[SearchConfig, Mapping[str, Any], None] = None, **overrides: Any) -> None:
        cfg = _merge_config(self._config, partial)
        self._config = _merge_config(cfg, overrides)
        log.info("Config updated: %s", self._config)
        self.clear_cache()

    def add_item(self, item: ItemLike) -> Item:
        stored = self._ingest(item)
        self._store.create(stored)
        self._index.extend(stored)
        self.clear_cache()
        return stored

    # /* ~~~ Batch add: one full index rebuild instead of N incremental inserts ~~~ */
    def add_items(self, items: Iterable[ItemLike]) -> int:
        n = self._store.bulk_create(self._ingest(it, pos) for pos, it in enumerate(items))
        self._index.build(self._store)
        self.clear_cache()
        log.info("Added %d items (catalog=%d)", n, self._store.count())
        return n

    def update_popularity(self, item_id: str, popularity: float) -> None:
        if self._store.update_popularity(item_id, popularity) is None:
            log.debug("update_popularity: unknown id %r ignored", item_id)
            return
        # items are frozen; the index still points at the replaced row
        self._index.build(self._store)
        self.clear_cache()

    def clear_cache(self) -> None:
        self._cache.clear()

    # ------------- internals -------------

    def _ingest(self, item: ItemLike, pos: int = 0) -> Item:
        """Copy the caller's record and derive any missing phonetic forms once."""
        if not isinstance(item, Item):
            item = item_from_record(item, pos)
        return replace(
            item,
            phonetic=item.phonetic if item.phonetic else self._provider.to_phonetic(item.text),
            phonetic_initials=(
                item.phonetic_initials if item.phonetic_initials else self._provider.to_initials(item.text)
            ),
        )

    def _limit(self) -> int:
        return max(0, int(self._config.top_n))

    def _candidates(self, opts: SearchOptions) -> Sequence[Item]:
        if opts.categories:
            return self._index.get_many(opts.categories)
        if opts.category:
            if opts.include_subcategories:
                return self._index.get_with_subcategories(opts.category)
            return self._index.get(opts.category)
        return self._store.snapshot()

    def _hot(self, opts: SearchOptions) -> List[RankedResult]:
        ranked = sorted(self._candidates(opts), key=lambda it: it.popularity, reverse=True)
        return [RankedResult(it, MatchType.PREFIX, 0, it.popularity) for it in ranked]

    def _rank(self, q: str, opts: SearchOptions) -> List[RankedResult]:
        cfg = self._config
        rows: List[RankedResult] = []
        for it in self._candidates(opts):
            m = classify(
                it.text,
                q,
                phonetic=it.phonetic,
                phonetic_initials=it.phonetic_initials,
                enable_phonetic=cfg.enable_phonetic,
                enable_fuzzy=cfg.enable_fuzzy,
            )
            if not m.raw_score > cfg.min_raw_score:
                continue
            score = final_score(m.raw_score, it.popularity, m.match_type, cfg.match_weight, cfg.popularity_weight)
            rows.append(RankedResult(it, m.match_type, m.raw_score, score))
        # stable: equal scores keep candidate order
        rows.sort(key=lambda r: r.final_score, reverse=True)
        return rows


def cache_key(query: str, options: SearchOptions) -> str:
    """
    Canonical signature of a search, e.g.:
      "phone", "phone|c:Phones|sub:1", "charger|cs:Accessories,Phones"
    """
    parts = [query.strip()]
    if options.category:
        parts.append(f"c:{options.category}")
    if options.categories:
        parts.append("cs:" + ",".join(sorted(options.categories)))
    if options.include_subcategories:
        parts.append("sub:1")
    return "|".join(parts)


def _category_counts(rows: Iterable[RankedResult]) -> Tuple[CategoryCount, ...]:
    counts = Counter(r.item.category for r in rows)
    # most_common keeps first-seen order among equal counts
    return tuple(CategoryCount(c, n) for c, n in counts.most_common())


def _coerce_options(options: OptionsLike) -> SearchOptions:
    if options is None:
        return SearchOptions()
    if isinstance(options, SearchOptions):
        opts = options
    else:
        opts = SearchOptions(
            category=options.get("category"),
            categories=options.get("categories"),
            include_subcategories=bool(
                options.get("include_subcategories", options.get("includeSubCategories", False))
            ),
        )
    cats = opts.categories
    if isinstance(cats, str):
        opts = replace(opts, categories=(cats,))
    elif cats is not None and not isinstance(cats, tuple):
        opts = replace(opts, categories=tuple(cats))
    return opts


def _merge_config(base: SearchConfig, partial: Union[SearchConfig, Mapping[str, Any], None]) -> SearchConfig:
    if partial is None:
        return base
    if isinstance(partial, SearchConfig):
        return partial
    unknown = set(partial) - _CONFIG_FIELDS
    if unknown:
        raise ValueError(f"unknown config field(s): {', '.join(sorted(unknown))}")
    return replace(base, **partial)
