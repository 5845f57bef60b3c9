"""Ports layer - Abstract interfaces (Protocols) for the package.

Ports define the contracts between the search core and the external
collaborators: the location directory, the transliteration function,
the remote schedule search and caching.
"""

from .cache import CachePort
from .directory import LocationDirectoryPort
from .schedule import ScheduleQueryPort
from .transliteration import TransliteratorPort

__all__ = [
    "CachePort",
    "LocationDirectoryPort",
    "ScheduleQueryPort",
    "TransliteratorPort",
]
