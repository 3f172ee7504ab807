"""
Suggestion Search Engine

Ranks a fixed in-memory catalog of short text items against a user-typed
query and returns a score-ordered top-N list for search-as-you-type UIs.

Pipeline:
- Category index narrows the candidate set (with parent -> child containment)
- Matcher classifies each candidate: prefix, contains, pinyin, pinyin
  initials, fuzzy subsequence
- Scorer blends strategy strength with item popularity
- Bounded LRU cache keyed on query + category options

Main entry points:
    Engine(items, config): build an engine over a catalog
    Engine.search(query, options): ranked suggestions
    load_catalog(path): read items from JSON / JSON Lines

Example Usage:
    from suggest import Engine, load_catalog

    engine = Engine(load_catalog("catalog.json"))
    for r in engine.search("iph"):
        print(f"{r.final_score:6.1f}  {r.match_type.value:<10} {r.item.text}")
"""

# src/suggest/__init__.py
from .config import SearchConfig
from .engine import Engine
from .loader import load_catalog
from .models import Item, MatchType, RankedResult, SearchOptions

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "SearchConfig",
    "SearchOptions",
    "Item",
    "MatchType",
    "RankedResult",
    "load_catalog",
]
