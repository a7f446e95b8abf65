"""
Schedule and Place Entities

Plain values returned by the schedule and address lookup operations.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


@dataclass(frozen=True)
class DaySchedule:
    """Dose times for one weekday."""

    day: str
    times: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"day": self.day, "times": list(self.times)}


@dataclass(frozen=True)
class Place:
    """
    An address lookup match.

    Attributes:
        name: Short place name
        title: Full formatted address, used as the profile location
        latitude: Latitude if known
        longitude: Longitude if known
    """

    name: str
    title: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
