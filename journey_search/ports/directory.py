"""Directory port - Where city and station names come from."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import LocationGroups


class LocationDirectoryPort(Protocol):
    """Port for the remote location directory.

    Implementation: adapters/api/directory_adapter.py
    """

    def fetch_location_groups(self) -> LocationGroups:
        """Fetch province -> cities and city -> stations groupings.

        Returns:
            LocationGroups with both groupings.

        Raises:
            DirectoryError: If the directory cannot be reached or answers
                with a non-success code.
        """
        ...
