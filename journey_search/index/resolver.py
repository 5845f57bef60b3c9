"""Free-text location resolution.

Turns what the user typed into a city or station token. Resolution is a
priority chain, not a set union:

1. Input ending with the station marker is a station or nothing.
2. A known city name is a city, even if a station shares the name.
3. Input that becomes a known station once the marker is appended is
   that station.
4. Anything else is unresolved (``None``).

The directory may spell station names with the marker ("北京南站") or
without it ("北京南"). Both spellings are looked up through the bare
name, so a station resolves whether it is typed with or without the
marker, and whichever way the directory stores it. Tokens carry the
bare name as ``canonical`` and the directory's spelling for the query.

Close matches for unresolved input are found with rapidfuzz so the
validation message can offer a correction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rapidfuzz import fuzz, process

from ..domain.models import LocationKind, LocationToken
from .phonetic_index import PhoneticIndex

DEFAULT_STATION_MARKER = "站"

# Minimum similarity score (0-100) to offer a correction
MIN_SIMILARITY_SCORE = 70


@dataclass
class LocationResolver:
    """Resolve user input against city and station indexes.

    Attributes:
        cities: Index over city names
        stations: Index over station names, with or without the marker
        marker: Single trailing character meaning "station"
        min_similarity: rapidfuzz score cutoff for did_you_mean
    """

    cities: PhoneticIndex
    stations: PhoneticIndex
    marker: str = DEFAULT_STATION_MARKER
    min_similarity: int = MIN_SIMILARITY_SCORE

    _station_spelling: Dict[str, str] = field(default_factory=dict, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.marker) != 1:
            raise ValueError(f"Station marker must be one character, got {self.marker!r}")
        self._logger = logging.getLogger(__name__)
        # Bare name -> directory spelling; the marked spelling wins a tie.
        for name in self.stations.name_set:
            if name.endswith(self.marker):
                self._station_spelling[name[: -len(self.marker)]] = name
            else:
                self._station_spelling.setdefault(name, name)

    def _station(self, bare: str) -> Optional[LocationToken]:
        spelling = self._station_spelling.get(bare)
        if spelling is None:
            return None
        return LocationToken(LocationKind.STATION, bare, directory_name=spelling)

    def resolve(self, text: str) -> Optional[LocationToken]:
        """Resolve input to a location token.

        Args:
            text: What the user typed.

        Returns:
            A CITY or STATION token, or None when the input is unresolved.
        """
        text = text.strip()
        if not text:
            return None

        if text.endswith(self.marker):
            token = self._station(text[: -len(self.marker)])
            if token is None:
                self._logger.debug("Marked station not found", extra={"input": text})
            return token

        if text in self.cities:
            return LocationToken(LocationKind.CITY, text)

        token = self._station(text)
        if token is None:
            self._logger.debug("Location unresolved", extra={"input": text})
        return token

    def suggest(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        """Autocomplete candidates: cities first, then stations."""
        suggestions = self.cities.suggest(prefix)
        seen = set(suggestions)
        for name in self.stations.suggest(prefix):
            if name not in seen:
                seen.add(name)
                suggestions.append(name)
        return suggestions[:limit] if limit is not None else suggestions

    def did_you_mean(self, text: str, limit: int = 3) -> List[str]:
        """Known names closest to ``text``, best match first.

        Args:
            text: Input that failed to resolve.
            limit: Maximum number of corrections.

        Returns:
            Up to ``limit`` city or station names scoring at least
            ``min_similarity``.
        """
        text = text.strip()
        if not text:
            return []

        choices = sorted(self.cities.name_set | self.stations.name_set)
        matches = process.extract(
            text,
            choices,
            scorer=fuzz.ratio,
            score_cutoff=self.min_similarity,
            limit=limit,
        )
        return [match[0] for match in matches]
