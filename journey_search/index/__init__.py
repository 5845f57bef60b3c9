"""Location index - phonetic prefix index and free-text resolution."""

from .phonetic_index import PhoneticIndex
from .resolver import DEFAULT_STATION_MARKER, LocationResolver

__all__ = ["PhoneticIndex", "LocationResolver", "DEFAULT_STATION_MARKER"]
