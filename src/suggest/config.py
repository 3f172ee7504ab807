from __future__ import annotations
import os
from dataclasses import dataclass

# Result list length
TOP_N: int = 10

# Blend of match strength vs. popularity in the final score
MATCH_WEIGHT: float = 0.6
POPULARITY_WEIGHT: float = 0.4

ENABLE_PHONETIC: bool = True
ENABLE_FUZZY: bool = True

# Results must score strictly above this raw score
MIN_RAW_SCORE: float = 0

# Consumed by the UI layer only
DEBOUNCE_MILLIS: int = 300

# Max cached (query, options) -> results entries per engine
CACHE_SIZE: int = 100

# Progress logging (set SUGGEST_VERBOSE=1 to enable)
VERBOSE = os.environ.get("SUGGEST_VERBOSE") == "1"


@dataclass(frozen=True)
class SearchConfig:
    """
    Per-engine search configuration.

    Values are applied as given; nothing here is validated. Weights outside
    [0, 1] or a non-positive top_n produce odd rankings, not errors.
    """
    top_n: int = TOP_N
    match_weight: float = MATCH_WEIGHT
    popularity_weight: float = POPULARITY_WEIGHT
    enable_phonetic: bool = ENABLE_PHONETIC
    enable_fuzzy: bool = ENABLE_FUZZY
    min_raw_score: float = MIN_RAW_SCORE
    debounce_millis: int = DEBOUNCE_MILLIS
