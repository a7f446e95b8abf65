"""
Geocoder Port

Abstract interface for address search.
"""

from abc import ABC, abstractmethod
from typing import List

from ..entities.schedule import Place


class GeocoderPort(ABC):
    """Port (interface) for free-text address lookup."""

    @abstractmethod
    def search(self, query: str) -> List[Place]:
        """
        Find places matching a city or address.

        Returns:
            Matching places, best first. Empty for a blank query.

        Raises:
            GeocodingError: If the lookup service fails
        """
        pass
