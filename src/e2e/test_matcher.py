# src/e2e/test_matcher.py

import pytest

from suggest.matcher import classify, is_subsequence
from suggest.models import MatchType


@pytest.mark.parametrize("text,query", [
    ("iPhone 15", "iph"),
    ("iPhone 15", "IPHONE"),
    ("MacBook", "macbook"),
])
def test_case_insensitive_prefix_scores_100(text, query):
    out = classify(text, query)
    assert out.match_type is MatchType.PREFIX
    assert out.raw_score == 100


def test_substring_not_at_start_is_contains():
    out = classify("MacBook Pro", "book")
    assert (out.match_type, out.raw_score) == (MatchType.CONTAINS, 80)


def test_prefix_wins_over_contains():
    # "book" is both a prefix and a substring of "bookshelf"; highest priority wins
    assert classify("Bookshelf", "book").match_type is MatchType.PREFIX


def test_phonetic_full_reading():
    out = classify("苹果手机", "pingguo", phonetic="pingguoshouji", phonetic_initials="pgsj")
    assert (out.match_type, out.raw_score) == (MatchType.PHONETIC, 70)


def test_phonetic_initials():
    out = classify("苹果手机", "PGSJ", phonetic="pingguoshouji", phonetic_initials="pgsj")
    assert (out.match_type, out.raw_score) == (MatchType.PHONETIC_INITIALS, 60)


def test_phonetic_disabled_skips_both_phonetic_strategies():
    out = classify("苹果手机", "pgsj", phonetic="pingguoshouji", phonetic_initials="pgsj",
                   enable_phonetic=False)
    assert (out.match_type, out.raw_score) == (MatchType.FUZZY, 0)


def test_missing_phonetic_forms_never_match_phonetically():
    assert classify("苹果手机", "pingguo").raw_score == 0


def test_fuzzy_subsequence_scores_fixed_40():
    out = classify("MacBook", "mcbk")
    assert (out.match_type, out.raw_score) == (MatchType.FUZZY, 40)
    # density/position do not matter
    assert classify("m-a-c-b-o-o-k", "mk").raw_score == 40


def test_fuzzy_disabled_reports_failed_fuzzy():
    out = classify("MacBook", "mcbk", enable_fuzzy=False)
    assert (out.match_type, out.raw_score) == (MatchType.FUZZY, 0)


def test_query_longer_than_text_fails():
    out = classify("abc", "abcd")
    assert (out.match_type, out.raw_score) == (MatchType.FUZZY, 0)


def test_out_of_order_chars_do_not_match():
    assert classify("iPad Air", "iph").raw_score == 0


def test_empty_query_is_prefix_zero():
    out = classify("anything", "")
    assert (out.match_type, out.raw_score) == (MatchType.PREFIX, 0)


@pytest.mark.parametrize("text,query,expected", [
    ("macbook", "mcbk", True),
    ("macbook", "macbook", True),
    ("macbook", "", True),
    ("macbook", "kbm", False),
    ("ab", "abc", False),
    ("aab", "ab", True),
])
def test_is_subsequence(text, query, expected):
    assert is_subsequence(text, query) is expected
