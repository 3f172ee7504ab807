from __future__ import annotations
from typing import Protocol

from pypinyin import Style, lazy_pinyin


class PhoneticProvider(Protocol):
    """Pure, total transliteration used for the phonetic strategies."""
    def to_phonetic(self, text: str) -> str: ...
    def to_initials(self, text: str) -> str: ...


class PinyinProvider:
    """
    Mandarin pinyin via pypinyin, tone marks dropped.

    Syllables are joined without separators so "苹果手机" reads
    "pingguoshouji" and its initials "pgsj". Runs of non-Han characters are
    passed through unchanged.
    """
    def to_phonetic(self, text: str) -> str:
        return "".join(lazy_pinyin(text, style=Style.NORMAL)).lower()

    def to_initials(self, text: str) -> str:
        return "".join(lazy_pinyin(text, style=Style.FIRST_LETTER)).lower()
