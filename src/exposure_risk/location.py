"""
Location detection.

A position is read from a sensor in two attempts (high accuracy, then low
accuracy if the first read timed out). If the sensor fails or is absent the
caller's approximate position is looked up from its IP address. Whatever
position is found is then matched to the nearest city in the table.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

import httpx

from .datasets import CITIES
from .errors import GeolocationError
from .geo import DEFAULT_MATCH_RADIUS_KM, CityMatch, find_nearest_city
from .models import City

logger = logging.getLogger(__name__)

DEFAULT_IP_LOOKUP_URL = "https://ipapi.co"
DEFAULT_IP_LOOKUP_TIMEOUT = 5.0
HIGH_ACCURACY_TIMEOUT_SECONDS = 8.0
LOW_ACCURACY_TIMEOUT_SECONDS = 15.0

SOURCE_SENSOR = "sensor"
SOURCE_IP = "ip"

ERROR_MESSAGES = {
    GeolocationError.PERMISSION_DENIED: (
        "Location access was denied. Please enable location permissions and try again."
    ),
    GeolocationError.POSITION_UNAVAILABLE: (
        "Location information is unavailable. "
        "Please check your internet connection or select a city manually."
    ),
    GeolocationError.TIMEOUT: (
        "Location request timed out. Please try again or select a city manually."
    ),
}


class PositionSensor(Protocol):
    def read_position(self, high_accuracy: bool, timeout_s: float) -> Tuple[float, float]:
        """Return (lat, lng) or raise GeolocationError."""
        ...


class IPLocator:
    """
    Approximate position from the caller's IP address via ipapi.co.

    locate() never raises; any transport, status or payload problem is
    logged and reported as None.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_IP_LOOKUP_URL,
        timeout: float = DEFAULT_IP_LOOKUP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def lookup_url(self, ip: Optional[str] = None) -> str:
        if ip:
            return f"{self.base_url}/{ip}/json/"
        return f"{self.base_url}/json/"

    async def locate(self, ip: Optional[str] = None) -> Optional[Tuple[float, float]]:
        url = self.lookup_url(ip)
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            ) as client:
                response = await client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            logger.warning(f"[LOCATION] IP lookup failed: {e}")
            return None

        if response.status_code != 200:
            logger.warning(f"[LOCATION] IP lookup returned status {response.status_code}")
            return None

        try:
            data = response.json()
            lat = data.get("latitude")
            lng = data.get("longitude")
            if lat is None or lng is None:
                logger.warning("[LOCATION] IP lookup response has no coordinates")
                return None
            return float(lat), float(lng)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"[LOCATION] Unreadable IP lookup response: {e}")
            return None


@dataclass
class LocationResult:
    """Outcome of a location detection attempt."""

    coordinates: Optional[Tuple[float, float]]
    match: Optional[CityMatch]
    source: Optional[str]
    message: str
    error_code: Optional[str] = None

    @property
    def city(self) -> Optional[City]:
        return self.match.city if self.match else None

    def to_dict(self) -> dict:
        return {
            "coordinates": (
                {"lat": self.coordinates[0], "lng": self.coordinates[1]}
                if self.coordinates else None
            ),
            "city_id": self.city.id if self.city else None,
            "distance_km": self.match.distance_km if self.match else None,
            "source": self.source,
            "message": self.message,
            "error_code": self.error_code,
        }


def read_sensor(
    sensor: PositionSensor,
    high_accuracy_timeout: float = HIGH_ACCURACY_TIMEOUT_SECONDS,
    low_accuracy_timeout: float = LOW_ACCURACY_TIMEOUT_SECONDS,
) -> Tuple[float, float]:
    """High-accuracy read, retried once at low accuracy on timeout."""
    try:
        return sensor.read_position(True, high_accuracy_timeout)
    except GeolocationError as e:
        if e.code != GeolocationError.TIMEOUT:
            raise
        logger.info("[LOCATION] High accuracy read timed out, trying low accuracy")
    return sensor.read_position(False, low_accuracy_timeout)


def error_message(error: Optional[GeolocationError]) -> str:
    """User-facing message for a failed detection."""
    prefix = "Unable to get your location. "
    if error is None:
        return prefix + "Please select a city manually."
    return prefix + ERROR_MESSAGES.get(error.code, "Please select a city manually.")


def match_message(match: CityMatch, coordinates: Tuple[float, float], source: str) -> str:
    lat, lng = coordinates
    if match.city is None:
        return (
            f"Location detected ({lat:.4f}, {lng:.4f}) but no nearby city found. "
            "Please select the closest city manually."
        )
    where = f"{match.city.name}, {match.city.state}"
    if source == SOURCE_IP:
        return (
            f"Location detected via IP: {where} "
            f"(approximate location, distance {match.distance_km:.1f}km)"
        )
    return f"Location detected: {where}. Distance: {match.distance_km:.1f}km"


async def detect_location(
    sensor: Optional[PositionSensor],
    ip_locator: Optional[IPLocator] = None,
    cities: Sequence[City] = CITIES,
    max_distance_km: float = DEFAULT_MATCH_RADIUS_KM,
    high_accuracy_timeout: float = HIGH_ACCURACY_TIMEOUT_SECONDS,
    low_accuracy_timeout: float = LOW_ACCURACY_TIMEOUT_SECONDS,
    ip: Optional[str] = None,
) -> LocationResult:
    """
    Find the user's position and the nearest city.

    Order: sensor (high accuracy, then low accuracy on timeout), then IP
    lookup. If both fail the result carries no coordinates and a message
    telling the user what to do.
    """
    coordinates = None
    source = None
    sensor_error = None

    if sensor is not None:
        try:
            coordinates = read_sensor(sensor, high_accuracy_timeout, low_accuracy_timeout)
            source = SOURCE_SENSOR
        except GeolocationError as e:
            logger.warning(f"[LOCATION] Sensor failed ({e.code}): {e}")
            sensor_error = e
    else:
        logger.info("[LOCATION] No position sensor available")

    if coordinates is None and ip_locator is not None:
        coordinates = await ip_locator.locate(ip)
        if coordinates is not None:
            source = SOURCE_IP

    if coordinates is None:
        return LocationResult(
            coordinates=None,
            match=None,
            source=None,
            message=error_message(sensor_error),
            error_code=sensor_error.code if sensor_error else None,
        )

    match = find_nearest_city(coordinates[0], coordinates[1], cities, max_distance_km)
    if match.matched:
        logger.info(
            f"[LOCATION] Matched {match.city.id} at {match.distance_km:.1f}km via {source}"
        )
    else:
        logger.info(f"[LOCATION] No city within {max_distance_km}km via {source}")

    return LocationResult(
        coordinates=coordinates,
        match=match,
        source=source,
        message=match_message(match, coordinates, source),
        error_code=sensor_error.code if sensor_error else None,
    )
