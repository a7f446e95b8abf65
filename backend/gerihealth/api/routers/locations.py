"""
Locations Router

City and address search for the profile form.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_geocoder
from ..schemas import PlaceResponse
from ...domain.ports.geocoder import GeocoderPort


router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get("/search", response_model=List[PlaceResponse])
def search_locations(
    q: str = Query("", max_length=200),
    geocoder: GeocoderPort = Depends(get_geocoder)
):
    return [PlaceResponse(**place.to_dict()) for place in geocoder.search(q)]
