"""
Google Maps Geocoder

City and address search for the profile location field, using the
Geocoding API over plain HTTP.
"""

from typing import List, Optional, Dict, Any
import logging

import requests

from ...domain.ports.geocoder import GeocoderPort
from ...domain.entities.schedule import Place
from ...domain.exceptions import GeocodingError


logger = logging.getLogger(__name__)


class GoogleMapsGeocoder(GeocoderPort):
    """
    Geocoder backed by the Google Geocoding API.

    Without an API key the query is passed through as a single place with
    no coordinates, so the profile form still works offline.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = "https://maps.googleapis.com/maps/api/geocode/json",
        timeout: int = 10,
        max_results: int = 5,
        session: Optional[requests.Session] = None
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._max_results = max_results
        self._session = session or requests.Session()

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @staticmethod
    def _to_place(result: Dict[str, Any]) -> Place:
        title = result.get("formatted_address", "")
        components = result.get("address_components") or []
        name = components[0].get("long_name") if components else None
        location = (result.get("geometry") or {}).get("location") or {}
        return Place(
            name=name or title.split(",")[0],
            title=title,
            latitude=location.get("lat"),
            longitude=location.get("lng"),
        )

    def search(self, query: str) -> List[Place]:
        query = (query or "").strip()
        if not query:
            return []

        if not self._api_key:
            self.logger.debug("No GOOGLE_MAPS_API_KEY set; passing query through")
            return [Place(name=query, title=query)]

        try:
            response = self._session.get(
                self._base_url,
                params={"address": query, "key": self._api_key},
                timeout=self._timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise GeocodingError(f"Geocoding request failed: {e}")

        status = data.get("status")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            raise GeocodingError(f"Geocoding failed: {status}", status=status)

        places = [self._to_place(r) for r in data.get("results", [])[:self._max_results]]
        self.logger.info(f"Found {len(places)} places for '{query}'")
        return places
