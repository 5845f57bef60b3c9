"""Phonetic prefix index over city or station names.

For every registered name, each of its prefixes maps to the name's
transliteration, and each transliteration maps back to the names that
share it (homophones). Lookups are read-only; the only way to change an
index is to build a new one.

Example
-------
    >>> index = PhoneticIndex.build({"江苏": ["南京", "南通"]}, transliterate)
    >>> index.candidates("南")
    ['nan jing', 'nan tong']
    >>> index.suggest("南")
    ['南京', '南通']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from ..domain.models import NameGroup

logger = logging.getLogger(__name__)

Transliterate = Callable[[str], str]


@dataclass(frozen=True)
class PhoneticIndex:
    """Prefix -> transliterations and transliteration -> names maps.

    Attributes:
        prefix_index: Raw-name prefix -> transliterations, insertion order,
            duplicates kept
        reverse_index: Transliteration -> raw names sharing it
        name_set: Every registered raw name
        transliterations: Distinct transliteration keys in first-seen order
    """

    prefix_index: Dict[str, List[str]] = field(default_factory=dict)
    reverse_index: Dict[str, List[str]] = field(default_factory=dict)
    name_set: FrozenSet[str] = frozenset()
    transliterations: Tuple[str, ...] = ()

    @classmethod
    def build(cls, groups: NameGroup, transliterate: Transliterate) -> PhoneticIndex:
        """Index every name of every group.

        Args:
            groups: Grouping key -> ordered raw names.
            transliterate: Deterministic name -> phonetic key function.

        Returns:
            A fresh index. Building twice from the same groups yields
            equal indexes.
        """
        prefix_index: Dict[str, List[str]] = {}
        reverse_index: Dict[str, List[str]] = {}
        names: set[str] = set()

        for names_in_group in groups.values():
            for name in names_in_group:
                key = transliterate(name)
                for i in range(1, len(name) + 1):
                    prefix_index.setdefault(name[:i], []).append(key)
                reverse_index.setdefault(key, []).append(name)
                names.add(name)

        logger.debug(
            "Phonetic index built",
            extra={
                "groups": len(groups),
                "names": len(names),
                "prefixes": len(prefix_index),
            },
        )
        return cls(
            prefix_index=prefix_index,
            reverse_index=reverse_index,
            name_set=frozenset(names),
            transliterations=tuple(reverse_index),
        )

    def __contains__(self, name: object) -> bool:
        return name in self.name_set

    def __len__(self) -> int:
        return len(self.name_set)

    def candidates(self, prefix: str) -> List[str]:
        """Transliterations of every name starting with ``prefix``."""
        return list(self.prefix_index.get(prefix, ()))

    def names_for(self, transliteration: str) -> List[str]:
        """Raw names sharing ``transliteration``."""
        return list(self.reverse_index.get(transliteration, ()))

    def suggest(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        """Autocomplete names for a raw-name or transliteration prefix.

        A raw-name prefix goes prefix -> transliterations -> names. When
        nothing is registered under it, the prefix is matched against the
        transliteration keys instead, so latin input finds names too.
        Results are deduplicated and keep insertion order.
        """
        prefix = prefix.strip()
        if not prefix:
            return []

        keys = self.prefix_index.get(prefix)
        if keys is None:
            folded = prefix.casefold()
            keys = [
                key
                for key in self.transliterations
                if key.casefold().startswith(folded)
                or key.replace(" ", "").casefold().startswith(folded)
            ]

        suggestions: List[str] = []
        seen: set[str] = set()
        for key in keys:
            for name in self.reverse_index.get(key, ()):
                if limit is not None and len(suggestions) >= limit:
                    return suggestions
                # Homophones of a matching name are suggested too.
                if name in seen:
                    continue
                seen.add(name)
                suggestions.append(name)
        return suggestions
