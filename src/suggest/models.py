# src/suggest/models.py
"""
Data models for the suggestion engine.

- Item: one catalog entry (display text, popularity, category tags) plus the
  phonetic forms derived once at ingestion time.
- MatchType / MatchOutcome: which strategy matched a query, and how strongly.
- RankedResult: the object returned to callers, one per suggestion.
- SearchOptions: category filters for a single search call.
- CategoryCount, SearchWithStats, EngineStats: reporting shapes.

These classes carry no business logic; matching, scoring and indexing live
in their own modules.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Item:
    """
    A single suggestion in the catalog.

    Attributes
    ----------
    id : str
        Caller-assigned identifier. Uniqueness is the caller's job; the engine
        only deduplicates by id when merging several category buckets.
    text : str
        Display text, and the string every strategy matches against.
    popularity : float
        Hotness in [0, 100]. Blended into the final score and used alone to
        order suggestions for an empty query.
    category : str
        The item's own category bucket.
    parent_category : Optional[str]
        Optional parent bucket. The item is indexed under it as well, so a
        lookup of the parent transparently includes its children.
    phonetic : Optional[str]
        Romanized reading of `text`. Filled in by the engine when absent.
    phonetic_initials : Optional[str]
        First letters of the romanized reading. Filled in when absent.
    description : Optional[str]
        Free text for display only; never matched.
    """
    id: str
    text: str
    popularity: float = 0
    category: str = ""
    parent_category: Optional[str] = None
    phonetic: Optional[str] = None
    phonetic_initials: Optional[str] = None
    description: Optional[str] = None


class MatchType(str, Enum):
    """Strategy that produced a match, in priority order."""
    PREFIX = "prefix"
    CONTAINS = "contains"
    PHONETIC = "phonetic"
    PHONETIC_INITIALS = "phonetic_initials"
    FUZZY = "fuzzy"


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    match_type: MatchType
    raw_score: float


@dataclass(frozen=True, slots=True)
class RankedResult:
    """
    One ranked suggestion.

    Attributes
    ----------
    item : Item
        The catalog entry (a reference into the engine's catalog).
    match_type : MatchType
        Strategy that matched. Empty-query results report PREFIX.
    raw_score : float
        Strategy score in [0, 100]; 0 for empty-query results.
    final_score : float
        Weighted blend of raw_score and popularity; the sort key.
    """
    item: Item
    match_type: MatchType
    raw_score: float
    final_score: float


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """
    Category filters for one search.

    A non-empty `categories` wins over `category`. `include_subcategories`
    only applies to the single `category` filter.
    """
    category: Optional[str] = None
    categories: Optional[Tuple[str, ...]] = None
    include_subcategories: bool = False


@dataclass(frozen=True, slots=True)
class CategoryCount:
    category: str
    count: int


@dataclass(frozen=True, slots=True)
class SearchWithStats:
    results: Tuple[RankedResult, ...]
    category_stats: Tuple[CategoryCount, ...]


@dataclass(frozen=True, slots=True)
class EngineStats:
    total_items: int
    total_categories: int
    cache_size: int
    cache_hits: int
    cache_misses: int
    categories: Tuple[CategoryCount, ...]
