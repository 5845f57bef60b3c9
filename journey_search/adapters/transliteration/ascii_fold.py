"""Accent-folding transliteration for latin-script names.

'Saint-Étienne' becomes 'saint etienne'.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass


def fold(text: str) -> str:
    """Normalize text for matching (remove accents/punctuation)."""
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")
    normalized = normalized.lower()
    normalized = re.sub(r"[^a-z0-9]+", " ", normalized)
    return normalized.strip()


@dataclass(frozen=True)
class AsciiFoldTransliterator:
    """TransliteratorPort that strips diacritics and punctuation."""

    def transliterate(self, name: str) -> str:
        return fold(name)

    def __call__(self, name: str) -> str:
        return self.transliterate(name)
