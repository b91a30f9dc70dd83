"""Exposure timer and location models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from .city import CityModel, RiskPredictionModel


class TimerStateModel(BaseModel):
    """Raw countdown state in milliseconds."""

    model_config = ConfigDict(populate_by_name=True)

    start_time: int = Field(serialization_alias="startTime")
    elapsed_time: int = Field(serialization_alias="elapsedTime")
    is_running: bool = Field(serialization_alias="isRunning")
    total_duration: int = Field(serialization_alias="totalDuration")
    remaining: int
    progress_percent: float = Field(serialization_alias="progressPercent")
    phase: str
    alert_active: bool = Field(serialization_alias="alertActive")


class TimerStatus(BaseModel):
    """Countdown state with the risks it has reached."""

    model_config = ConfigDict(populate_by_name=True)

    state: TimerStateModel
    remaining_clock: str = Field(serialization_alias="remainingClock")
    exposure_time: str = Field(serialization_alias="exposureTime")
    city_id: Optional[str] = Field(default=None, serialization_alias="cityId")
    profile: str
    exposure: str
    current_risks: list[RiskPredictionModel] = Field(serialization_alias="currentRisks")
    next_risk: Optional[RiskPredictionModel] = Field(default=None, serialization_alias="nextRisk")
    hours_until_next: Optional[int] = Field(default=None, serialization_alias="hoursUntilNext")
    alert_message: Optional[str] = Field(default=None, serialization_alias="alertMessage")


class DurationRequest(BaseModel):
    """New countdown length."""

    hours: float = Field(gt=0, le=24 * 365)


class LocationMatchRequest(BaseModel):
    """Coordinates to match against the city table."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    auto_start: bool = Field(default=False, alias="autoStart")
    profile: Optional[str] = None
    exposure: Optional[str] = None


class CoordinatesModel(BaseModel):
    lat: float
    lng: float


class LocationMatchResponse(BaseModel):
    """Nearest city for a coordinate, if one is within range."""

    model_config = ConfigDict(populate_by_name=True)

    matched: bool
    city: Optional[CityModel] = None
    distance_km: float = Field(serialization_alias="distanceKm")
    coordinates: Optional[CoordinatesModel] = None
    source: Optional[str] = None
    message: str
    timer: Optional[TimerStatus] = None
