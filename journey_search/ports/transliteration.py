"""Transliteration port - Phonetic keys for display names."""

from __future__ import annotations

from typing import Protocol


class TransliteratorPort(Protocol):
    """Port for a deterministic, tone-insensitive phonetic key generator.

    Any ``str -> str`` function satisfies the contract as long as the same
    name always yields the same key.

    Implementations:
    - adapters/transliteration/pinyin_adapter.py (PinyinTransliterator)
    - adapters/transliteration/ascii_fold.py (AsciiFoldTransliterator)
    """

    def transliterate(self, name: str) -> str:
        ...
