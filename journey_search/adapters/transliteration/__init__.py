"""Transliteration adapters - Implementations of the TransliteratorPort.

Available implementations:
- PinyinTransliterator: tone-stripped pinyin (pypinyin)
- AsciiFoldTransliterator: diacritic folding for latin names
"""

from .ascii_fold import AsciiFoldTransliterator
from .pinyin_adapter import PinyinTransliterator

__all__ = ["PinyinTransliterator", "AsciiFoldTransliterator"]
