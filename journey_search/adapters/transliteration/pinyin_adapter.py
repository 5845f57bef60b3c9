"""Pinyin transliteration for Chinese city and station names.

Wraps pypinyin with tones stripped and syllables separated by spaces,
so '北京南' becomes 'bei jing nan'. Characters pypinyin cannot convert
are kept as they are.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from pypinyin import Style, lazy_pinyin


@lru_cache(maxsize=4096)
def _to_pinyin(name: str, separator: str) -> str:
    return separator.join(lazy_pinyin(name, style=Style.NORMAL))


@dataclass(frozen=True)
class PinyinTransliterator:
    """TransliteratorPort backed by pypinyin.

    Attributes:
        separator: String placed between syllables
    """

    separator: str = " "

    def transliterate(self, name: str) -> str:
        return _to_pinyin(name, self.separator)

    def __call__(self, name: str) -> str:
        return self.transliterate(name)
