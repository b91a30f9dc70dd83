"""Location API routes.

Browsers read their own position and post it to /match; /ip is the
approximate fallback when no position is available.
"""
import ipaddress
import logging
from fastapi import APIRouter, Depends, Query, Request
from typing import Optional

from exposure_risk.geo import find_nearest_city
from exposure_risk.location import IPLocator, LocationResult, detect_location, match_message, SOURCE_SENSOR

from ..config import get_settings
from ..models.timer import CoordinatesModel, LocationMatchRequest, LocationMatchResponse, TimerStatus
from ..services.exposure_session import ExposureSession, get_exposure_session
from .cities import _city_to_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/location", tags=["Location"])


def get_ip_locator() -> IPLocator:
    settings = get_settings()
    return IPLocator(base_url=settings.ip_lookup_url, timeout=settings.ip_lookup_timeout)


def caller_ip(request: Request) -> Optional[str]:
    """
    Public address of the caller, from X-Forwarded-For or the socket peer.

    Private, loopback and unparseable addresses give None; those callers
    share the server's network, so the server's own address is the best
    approximation.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        host = forwarded.split(",")[0].strip()
    elif request.client is not None:
        host = request.client.host
    else:
        return None

    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return None
    if address.is_private or address.is_loopback or address.is_link_local:
        return None
    return str(address)


def _to_response(
    result: LocationResult,
    session: ExposureSession,
    auto_start: bool,
) -> LocationMatchResponse:
    timer = None
    if result.city is not None:
        timer = TimerStatus(**session.select_city(result.city, auto_start=auto_start))

    return LocationMatchResponse(
        matched=result.city is not None,
        city=_city_to_model(result.city) if result.city else None,
        distance_km=result.match.distance_km if result.match else 0.0,
        coordinates=(
            CoordinatesModel(lat=result.coordinates[0], lng=result.coordinates[1])
            if result.coordinates else None
        ),
        source=result.source,
        message=result.message,
        timer=timer,
    )


@router.post("/match", response_model=LocationMatchResponse)
async def match_location(
    request: LocationMatchRequest,
    session: ExposureSession = Depends(get_exposure_session),
):
    """
    Match a device position to the nearest city within range.

    With autoStart the exposure countdown is restarted for the matched city.
    """
    if request.profile is not None or request.exposure is not None:
        session.configure(
            request.profile or session.profile,
            request.exposure or session.exposure,
        )

    coordinates = (request.lat, request.lng)
    match = find_nearest_city(
        request.lat, request.lng, max_distance_km=get_settings().match_radius_km
    )
    result = LocationResult(
        coordinates=coordinates,
        match=match,
        source=SOURCE_SENSOR,
        message=match_message(match, coordinates, SOURCE_SENSOR),
    )
    return _to_response(result, session, request.auto_start)


@router.get("/ip", response_model=LocationMatchResponse)
async def locate_by_ip(
    request: Request,
    ip: Optional[str] = Query(default=None, description="Address to look up; defaults to the caller's"),
    auto_start: bool = Query(default=False, alias="autoStart"),
    locator: IPLocator = Depends(get_ip_locator),
    session: ExposureSession = Depends(get_exposure_session),
):
    """Approximate the position from an IP address and match it to a city."""
    settings = get_settings()
    result = await detect_location(
        sensor=None,
        ip_locator=locator,
        max_distance_km=settings.match_radius_km,
        ip=ip or caller_ip(request),
    )
    if result.coordinates is None:
        logger.info("[LOCATION] IP lookup gave no position")
    return _to_response(result, session, auto_start)
