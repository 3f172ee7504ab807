from __future__ import annotations
from typing import Callable, List, Optional, Tuple
from .models import MatchOutcome, MatchType

# Raw score per strategy
PREFIX_SCORE = 100
CONTAINS_SCORE = 80
PHONETIC_SCORE = 70
PHONETIC_INITIALS_SCORE = 60
FUZZY_SCORE = 40

_NO_MATCH = MatchOutcome(MatchType.FUZZY, 0)
_EMPTY_QUERY = MatchOutcome(MatchType.PREFIX, 0)


def is_subsequence(text: str, query: str) -> bool:
    """
    True iff every char of query appears in text in order (gaps allowed).
    Single forward scan: the text cursor always advances, the query cursor
    only on a hit. Both sides are expected to be casefolded already.
    """
    if len(query) > len(text):
        return False
    qi = 0
    for ch in text:
        if qi == len(query):
            break
        if ch == query[qi]:
            qi += 1
    return qi == len(query)


# /* ~~~ strategy table: (type, raw score, predicate(text, phonetic, initials, query)) ~~~ */
_Predicate = Callable[[str, str, str, str], bool]


def _prefix(text: str, phonetic: str, initials: str, q: str) -> bool:
    return text.startswith(q)


def _contains(text: str, phonetic: str, initials: str, q: str) -> bool:
    return q in text


def _phonetic(text: str, phonetic: str, initials: str, q: str) -> bool:
    return bool(phonetic) and q in phonetic


def _initials(text: str, phonetic: str, initials: str, q: str) -> bool:
    return bool(initials) and q in initials


def _fuzzy(text: str, phonetic: str, initials: str, q: str) -> bool:
    return is_subsequence(text, q)


def _build_table(enable_phonetic: bool, enable_fuzzy: bool) -> Tuple[Tuple[MatchType, int, _Predicate], ...]:
    table: List[Tuple[MatchType, int, _Predicate]] = [
        (MatchType.PREFIX, PREFIX_SCORE, _prefix),
        (MatchType.CONTAINS, CONTAINS_SCORE, _contains),
    ]
    if enable_phonetic:
        table.append((MatchType.PHONETIC, PHONETIC_SCORE, _phonetic))
        table.append((MatchType.PHONETIC_INITIALS, PHONETIC_INITIALS_SCORE, _initials))
    if enable_fuzzy:
        table.append((MatchType.FUZZY, FUZZY_SCORE, _fuzzy))
    return tuple(table)


# one table per (enable_phonetic, enable_fuzzy) combination
_TABLES = {(p, f): _build_table(p, f) for p in (True, False) for f in (True, False)}


def classify(
    text: str,
    query: str,
    *,
    phonetic: Optional[str] = None,
    phonetic_initials: Optional[str] = None,
    enable_phonetic: bool = True,
    enable_fuzzy: bool = True,
) -> MatchOutcome:
    """
    Classify how `query` matches `text` (case-insensitive).

    Strategies run in fixed priority order and the first hit wins:
    prefix (100), contains (80), phonetic (70), phonetic initials (60),
    fuzzy subsequence (40). A miss is reported as (FUZZY, 0); an empty
    query as (PREFIX, 0).
    """
    if not query:
        return _EMPTY_QUERY

    q = query.casefold()
    t = text.casefold()
    ph = phonetic.casefold() if phonetic else ""
    ini = phonetic_initials.casefold() if phonetic_initials else ""

    for match_type, score, hit in _TABLES[(bool(enable_phonetic), bool(enable_fuzzy))]:
        if hit(t, ph, ini, q):
            return MatchOutcome(match_type, score)
    return _NO_MATCH
