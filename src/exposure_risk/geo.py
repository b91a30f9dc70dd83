"""
Nearest-city matching over the static city table.

Distances are great-circle (haversine) distances in kilometres. A match is
only accepted inside the configured radius; the distance to the closest
city is reported either way so callers can show it.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .datasets import CITIES, get_city  # noqa: F401  (re-exported)
from .models import City

EARTH_RADIUS_KM = 6371.0
DEFAULT_MATCH_RADIUS_KM = 100.0


@dataclass(frozen=True)
class CityMatch:
    """Result of a nearest-city lookup."""

    city: Optional[City]
    distance_km: float

    @property
    def matched(self) -> bool:
        return self.city is not None


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points given in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def find_nearest_city(
    lat: float,
    lng: float,
    cities: Sequence[City] = CITIES,
    max_distance_km: float = DEFAULT_MATCH_RADIUS_KM,
) -> CityMatch:
    """
    Find the closest city to a coordinate.

    Equidistant cities resolve to the first one in table order. If the
    closest city is farther than max_distance_km, no city is returned.
    """
    nearest = None
    min_distance = math.inf
    for city in cities:
        distance = haversine_km(lat, lng, city.lat, city.lng)
        if distance < min_distance:
            min_distance = distance
            nearest = city

    if nearest is not None and min_distance <= max_distance_km:
        return CityMatch(city=nearest, distance_km=min_distance)
    return CityMatch(city=None, distance_km=min_distance)


def group_cities_by_state(cities: Sequence[City] = CITIES) -> Dict[str, List[City]]:
    """Cities grouped by state; states sorted, cities in table order."""
    groups: Dict[str, List[City]] = {}
    for city in cities:
        groups.setdefault(city.state, []).append(city)
    return {state: groups[state] for state in sorted(groups)}
