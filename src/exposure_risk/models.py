"""
Domain models for environmental health risk data.

Static records (diseases, cities) are frozen dataclasses so the lookup
tables cannot be modified after import. Persisted records (profile and
exposure history) serialize to the camelCase JSON layout kept in the
key-value store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from .errors import InvalidEnumError


class _ParseableEnum(str, Enum):
    """String enum with a strict parser for raw category values."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        raise InvalidEnumError(cls.__name__, value, [m.value for m in cls])


class Severity(_ParseableEnum):
    """Disease severity, used for display and the severity sort."""

    MILD = "Mild"
    MODERATE = "Moderate"
    SEVERE = "Severe"
    CRITICAL = "Critical"


# Risk table ordering. Not interchangeable with DURATION_LEVEL_RANK.
SEVERITY_RANK = {
    Severity.MILD: 1,
    Severity.MODERATE: 2,
    Severity.SEVERE: 3,
    Severity.CRITICAL: 4,
}


class ExposureType(_ParseableEnum):
    """Exposure pathway of a disease."""

    AIR_ONLY = "Poor AQI"
    WATER_ONLY = "Contaminated Water"
    COMBINED = "Combined AQI + Water"


class ExposureFilter(_ParseableEnum):
    """Exposure selector used by the timeline and assessment views."""

    AIR = "air"
    WATER = "water"
    BOTH = "both"

    def includes(self, exposure_type: ExposureType) -> bool:
        """Return True if a disease of this exposure type passes the filter."""
        return exposure_type in EXPOSURE_FILTER_MEMBERS[self]


EXPOSURE_FILTER_MEMBERS = {
    ExposureFilter.AIR: frozenset({ExposureType.AIR_ONLY, ExposureType.COMBINED}),
    ExposureFilter.WATER: frozenset({ExposureType.WATER_ONLY, ExposureType.COMBINED}),
    ExposureFilter.BOTH: frozenset(ExposureType),
}


class HealthProfile(_ParseableEnum):
    """Population group whose onset estimates are used."""

    HEALTHY = "healthy"
    VULNERABLE = "vulnerable"


class WaterQuality(_ParseableEnum):
    """Water quality category of a city."""

    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"
    VERY_POOR = "Very Poor"


class VulnerabilityLevel(_ParseableEnum):
    """Questionnaire tier."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class ActivityExposure(_ParseableEnum):
    """Exposure type recorded against a logged activity."""

    AIR = "air"
    WATER = "water"
    COMBINED = "combined"


@dataclass(frozen=True)
class HealthRisk:
    """One row of the disease table."""

    disease: str
    exposure_type: ExposureType
    duration_to_risk: str
    severity: Severity
    healthy_onset: str
    vulnerable_onset: str

    def onset_for(self, profile: HealthProfile) -> str:
        """Onset text for the given population group."""
        if profile is HealthProfile.HEALTHY:
            return self.healthy_onset
        if profile is HealthProfile.VULNERABLE:
            return self.vulnerable_onset
        raise InvalidEnumError("HealthProfile", profile)


@dataclass(frozen=True)
class RiskFactors:
    """City risk factors, each on a 1-10 scale."""

    air_pollution: int
    water_contamination: int
    industrial_activity: int


@dataclass(frozen=True)
class City:
    """One row of the city table."""

    id: str
    name: str
    state: str
    aqi: int
    water_quality: WaterQuality
    lat: float
    lng: float
    population: int
    risk_factors: RiskFactors


@dataclass(frozen=True)
class AQILevel:
    """AQI band with its display label and description."""

    band: str
    label: str
    description: str


@dataclass(frozen=True)
class RiskPrediction:
    """Predicted time to onset for one disease in one city."""

    condition: str
    time_to_risk: int  # hours
    severity: Severity
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "condition": self.condition,
            "time_to_risk": self.time_to_risk,
            "severity": self.severity.value,
            "recommendation": self.recommendation,
        }


@dataclass
class UserProfile:
    """Profile saved after a completed questionnaire."""

    id: str
    age_group: str
    health_conditions: List[str]
    vulnerability_level: VulnerabilityLevel
    created_at: str
    last_updated: str

    def to_dict(self) -> dict:
        """Convert to the stored JSON layout."""
        return {
            "id": self.id,
            "ageGroup": self.age_group,
            "healthConditions": list(self.health_conditions),
            "vulnerabilityLevel": self.vulnerability_level.value,
            "createdAt": self.created_at,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        return cls(
            id=str(data["id"]),
            age_group=data["ageGroup"],
            health_conditions=list(data.get("healthConditions", [])),
            vulnerability_level=VulnerabilityLevel.parse(data["vulnerabilityLevel"]),
            created_at=data["createdAt"],
            last_updated=data["lastUpdated"],
        )


@dataclass
class ExposureActivity:
    """A logged exposure event. Entries are never edited once stored."""

    id: str
    date: str  # YYYY-MM-DD
    location: str
    exposure_type: ActivityExposure
    duration: float  # hours
    aqi: Optional[int] = None
    water_quality: Optional[str] = None
    symptoms: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the stored JSON layout, omitting empty optionals."""
        result = {
            "id": self.id,
            "date": self.date,
            "location": self.location,
            "exposureType": self.exposure_type.value,
            "duration": self.duration,
        }
        if self.aqi is not None:
            result["aqi"] = self.aqi
        if self.water_quality:
            result["waterQuality"] = self.water_quality
        if self.symptoms:
            result["symptoms"] = list(self.symptoms)
        if self.notes:
            result["notes"] = self.notes
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "ExposureActivity":
        """Rebuild a stored entry. Raises ValueError when a field has the wrong type."""
        for key in ("date", "location"):
            if not isinstance(data[key], str):
                raise ValueError(f"{key} must be a string, got {type(data[key]).__name__}")
        aqi = data.get("aqi")
        if aqi is not None and (isinstance(aqi, bool) or not isinstance(aqi, int)):
            raise ValueError(f"aqi must be an integer, got {type(aqi).__name__}")

        return cls(
            id=str(data["id"]),
            date=data["date"],
            location=data["location"],
            exposure_type=ActivityExposure.parse(data["exposureType"]),
            duration=float(data["duration"]),
            aqi=aqi,
            water_quality=data.get("waterQuality"),
            symptoms=list(data.get("symptoms") or []),
            notes=data.get("notes"),
        )
