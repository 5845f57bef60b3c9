"""Location service - owns the location indexes for one UI session.

Fetches the city/station groupings (through the cache), builds one
phonetic index per grouping and exposes resolution and autocomplete.
Build is explicit and idempotent; ``invalidate`` drops the cached
groupings so the next build refetches, ``discard`` tears everything down.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..domain.errors import QueryValidationError
from ..domain.models import LocationGroups, LocationToken
from ..index import DEFAULT_STATION_MARKER, LocationResolver, PhoneticIndex
from ..ports.cache import CachePort
from ..ports.directory import LocationDirectoryPort
from ..ports.transliteration import TransliteratorPort

GROUPS_CACHE_KEY = "location_groups"


@dataclass
class LocationService:
    """Resolution and autocomplete over the directory's names.

    Attributes:
        directory: Source of city and station groupings
        transliterator: Phonetic key generator for the indexes
        cache: Cache for fetched groupings
        marker: Station marker character
        suggestion_limit: Default cap on autocomplete results
        fuzzy_min_score: rapidfuzz cutoff for correction suggestions
    """

    directory: LocationDirectoryPort
    transliterator: TransliteratorPort
    cache: CachePort[Any]
    marker: str = DEFAULT_STATION_MARKER
    suggestion_limit: int = 10
    fuzzy_min_score: int = 70

    _resolver: Optional[LocationResolver] = field(default=None, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def is_built(self) -> bool:
        return self._resolver is not None

    def build(self) -> LocationResolver:
        """Build (or rebuild) the city and station indexes.

        Raises:
            DirectoryError: If the groupings are not cached and the
                directory cannot be reached.
        """
        groups: LocationGroups = self.cache.get_or_compute(
            GROUPS_CACHE_KEY, self.directory.fetch_location_groups
        )
        transliterate = self.transliterator.transliterate
        self._resolver = LocationResolver(
            cities=PhoneticIndex.build(groups.cities, transliterate),
            stations=PhoneticIndex.build(groups.stations, transliterate),
            marker=self.marker,
            min_similarity=self.fuzzy_min_score,
        )
        self._logger.info(
            "Location indexes built",
            extra={
                "cities": len(self._resolver.cities),
                "stations": len(self._resolver.stations),
            },
        )
        return self._resolver

    @property
    def resolver(self) -> LocationResolver:
        """The current resolver, building it on first use."""
        if self._resolver is None:
            return self.build()
        return self._resolver

    def invalidate(self) -> None:
        """Forget cached groupings; the next use refetches and rebuilds."""
        self.cache.invalidate(GROUPS_CACHE_KEY)
        self._resolver = None
        self._logger.debug("Location indexes invalidated")

    def discard(self) -> None:
        """Tear down the indexes without touching the cache."""
        self._resolver = None

    def resolve(self, text: str) -> Optional[LocationToken]:
        """Resolve input; None means unresolved."""
        return self.resolver.resolve(text)

    def suggest(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        """Autocomplete names for what the user has typed so far."""
        return self.resolver.suggest(prefix, limit if limit is not None else self.suggestion_limit)

    def require(self, text: str, field_name: str) -> LocationToken:
        """Resolve input or raise a validation error carrying corrections.

        Args:
            text: What the user typed.
            field_name: Query field the input belongs to.

        Raises:
            QueryValidationError: If the input does not resolve.
        """
        token = self.resolve(text)
        if token is not None:
            return token

        suggestions = tuple(self.resolver.did_you_mean(text))
        self._logger.info(
            "Location input unresolved",
            extra={"field": field_name, "input": text, "suggestions": list(suggestions)},
        )
        raise QueryValidationError(
            f"Unknown city or station: {text!r}",
            field_name=field_name,
            suggestions=suggestions,
        )
