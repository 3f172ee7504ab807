from __future__ import annotations
from .models import MatchType

# Strategy weight applied to the raw score before blending
TYPE_WEIGHTS = {
    MatchType.PREFIX: 1.2,
    MatchType.CONTAINS: 1.0,
    MatchType.PHONETIC: 0.9,
    MatchType.PHONETIC_INITIALS: 0.8,
    MatchType.FUZZY: 0.7,
}


def type_weight(match_type: MatchType) -> float:
    return TYPE_WEIGHTS.get(match_type, 1.0)


def final_score(
    raw_score: float,
    popularity: float,
    match_type: MatchType,
    match_weight: float,
    popularity_weight: float,
) -> float:
    """
    final = raw * type_weight * match_weight + popularity * popularity_weight

    Not clamped: a prefix hit can exceed 100 with the default weights
    (100 * 1.2 * 0.6 + 90 * 0.4 == 108).
    """
    return (raw_score * type_weight(match_type)) * match_weight + popularity * popularity_weight
