"""
Risk Scoring Module.

Pure functions that turn city records and onset-duration text into scores,
AQI bands and per-disease onset predictions. All rounding is half-up so the
numbers agree with the published dashboard figures.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from .datasets import HEALTH_RISKS
from .errors import InvalidEnumError
from .models import (
    SEVERITY_RANK,
    AQILevel,
    City,
    ExposureFilter,
    ExposureType,
    HealthProfile,
    HealthRisk,
    RiskPrediction,
    Severity,
    WaterQuality,
)

logger = logging.getLogger(__name__)

WATER_QUALITY_SCORES = {
    WaterQuality.GOOD: 2,
    WaterQuality.MODERATE: 5,
    WaterQuality.POOR: 8,
    WaterQuality.VERY_POOR: 10,
}

# (upper bound inclusive, level); anything above the last bound is hazardous
AQI_BANDS = (
    (50, AQILevel("good", "Good", "Air quality is satisfactory")),
    (100, AQILevel("moderate", "Moderate", "Air quality is acceptable for most people")),
    (150, AQILevel(
        "unhealthy_for_sensitive",
        "Unhealthy for Sensitive Groups",
        "Members of sensitive groups may experience health effects",
    )),
    (200, AQILevel("unhealthy", "Unhealthy", "Everyone may begin to experience health effects")),
    (300, AQILevel("very_unhealthy", "Very Unhealthy", "Health warnings of emergency conditions")),
)
AQI_HAZARDOUS = AQILevel(
    "hazardous",
    "Hazardous",
    "Health alert: everyone may experience serious health effects",
)

# Checked in this order; the first keyword present decides the unit.
DURATION_UNITS = (
    ("hour", 1),
    ("day", 24),
    ("week", 168),
    ("month", 720),
    ("year", 8760),
)
DEFAULT_DURATION_HOURS = 24

RECOMMEND_IMMEDIATE = "Seek immediate medical attention"
RECOMMEND_MONITOR = "Monitor symptoms closely"
RECOMMEND_CONSULT = "Consider medical consultation"
RECOMMEND_CONTINUE = "Continue monitoring and take preventive measures"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves towards positive infinity."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def calculate_risk_score(city: City) -> float:
    """
    Combined environmental risk score for a city, one decimal place.

    Averages the normalized AQI (capped at 10), the water quality score and
    the three 1-10 risk factors.
    """
    try:
        water_score = WATER_QUALITY_SCORES[city.water_quality]
    except KeyError:
        raise InvalidEnumError(
            "WaterQuality", city.water_quality, [q.value for q in WaterQuality]
        ) from None

    aqi_score = min(city.aqi / 50, 10)
    factors = city.risk_factors
    total = (
        aqi_score
        + water_score
        + factors.air_pollution
        + factors.water_contamination
        + factors.industrial_activity
    )
    return round_half_up(total / 5, 1)


def classify_aqi(aqi: int) -> AQILevel:
    """Map an AQI reading to its band."""
    if aqi < 0:
        raise ValueError(f"AQI cannot be negative: {aqi}")
    for upper, level in AQI_BANDS:
        if aqi <= upper:
            return level
    return AQI_HAZARDOUS


def parse_risk_duration(duration: str) -> int:
    """
    Convert an onset text such as "12–24 hours" to hours.

    The first unit keyword found (checked in DURATION_UNITS order) wins, and
    the first integer in the text is multiplied by that unit. Text with no
    unit keyword or no number falls back to 24 hours.
    """
    text = duration.lower()
    for keyword, hours in DURATION_UNITS:
        if keyword in text:
            match = re.search(r"(\d+)", text)
            if match:
                return int(match.group(1)) * hours
            break
    logger.debug(f"[SCORING] No duration in {duration!r}, defaulting to {DEFAULT_DURATION_HOURS}h")
    return DEFAULT_DURATION_HOURS


def get_recommendation(severity: Severity, hours: int) -> str:
    """Recommendation tier for a predicted onset."""
    if hours <= 24 and severity in (Severity.SEVERE, Severity.CRITICAL):
        return RECOMMEND_IMMEDIATE
    if hours <= 72 and severity is Severity.MODERATE:
        return RECOMMEND_MONITOR
    if hours <= 168:
        return RECOMMEND_CONSULT
    return RECOMMEND_CONTINUE


def predict_risk_timeline(
    city: City,
    profile: HealthProfile,
    exposure: ExposureFilter,
    risks: Sequence[HealthRisk] = HEALTH_RISKS,
) -> List[RiskPrediction]:
    """
    Predict hours to onset for each relevant disease in a city.

    A riskier city shortens every onset proportionally to its risk score.
    The result is sorted by onset; ties keep table order.
    """
    profile = HealthProfile.parse(profile)
    exposure = ExposureFilter.parse(exposure)
    risk_multiplier = calculate_risk_score(city) / 5

    predictions = []
    for risk in risks:
        if not exposure.includes(risk.exposure_type):
            continue
        base_hours = parse_risk_duration(risk.onset_for(profile))
        adjusted_hours = max(1, int(round_half_up(base_hours / risk_multiplier)))
        predictions.append(
            RiskPrediction(
                condition=risk.disease,
                time_to_risk=adjusted_hours,
                severity=risk.severity,
                recommendation=get_recommendation(risk.severity, adjusted_hours),
            )
        )
    return sorted(predictions, key=lambda p: p.time_to_risk)


# ---------------------------------------------------------------------------
# Duration-based assessment
# ---------------------------------------------------------------------------


class DurationBucket(str, Enum):
    """How long the user has been exposed."""

    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class DurationLevel(str, Enum):
    """Current risk level from the duration assessment."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Duration assessment ordering. Not interchangeable with SEVERITY_RANK.
DURATION_LEVEL_RANK = {
    DurationLevel.LOW: 1,
    DurationLevel.MEDIUM: 2,
    DurationLevel.HIGH: 3,
}

# bucket -> (onset substrings, level, recommendation)
DURATION_RULES = {
    DurationBucket.HOURS: (("hour", "12-24"), DurationLevel.HIGH, RECOMMEND_IMMEDIATE),
    DurationBucket.DAYS: (("day", "1-", "2-"), DurationLevel.MEDIUM, RECOMMEND_MONITOR),
    DurationBucket.WEEKS: (("week", "7-", "30-"), DurationLevel.MEDIUM, RECOMMEND_CONSULT),
    DurationBucket.MONTHS: (("month",), DurationLevel.HIGH, "Medical evaluation recommended"),
    DurationBucket.YEARS: ((), DurationLevel.LOW, "Continue monitoring"),
}


@dataclass(frozen=True)
class DurationAssessment:
    """Assessment of one disease for a given exposure duration."""

    risk: HealthRisk
    level: DurationLevel
    recommendation: str


def assess_exposure_duration(
    exposure: ExposureFilter,
    profile: HealthProfile,
    bucket: DurationBucket,
    risks: Sequence[HealthRisk] = HEALTH_RISKS,
) -> List[DurationAssessment]:
    """Rate each relevant disease for the given exposure duration, highest first."""
    exposure = ExposureFilter.parse(exposure)
    profile = HealthProfile.parse(profile)
    if not isinstance(bucket, DurationBucket):
        try:
            bucket = DurationBucket(bucket)
        except ValueError:
            raise InvalidEnumError(
                "DurationBucket", bucket, [b.value for b in DurationBucket]
            ) from None

    markers, matched_level, matched_recommendation = DURATION_RULES[bucket]
    results = []
    for risk in risks:
        if not exposure.includes(risk.exposure_type):
            continue
        onset = risk.onset_for(profile)
        if any(marker in onset for marker in markers):
            level, recommendation = matched_level, matched_recommendation
        else:
            level, recommendation = DurationLevel.LOW, "Continue monitoring"
        results.append(DurationAssessment(risk, level, recommendation))

    return sorted(results, key=lambda r: -DURATION_LEVEL_RANK[r.level])


# ---------------------------------------------------------------------------
# Disease table filtering
# ---------------------------------------------------------------------------


def filter_health_risks(
    search: str = "",
    severity: Optional[Severity] = None,
    exposure_type: Optional[ExposureType] = None,
    risks: Iterable[HealthRisk] = HEALTH_RISKS,
) -> List[HealthRisk]:
    """Filter the disease table. None means no filter on that field."""
    needle = (search or "").lower()
    severity = Severity.parse(severity) if severity is not None else None
    exposure_type = ExposureType.parse(exposure_type) if exposure_type is not None else None

    return [
        risk
        for risk in risks
        if needle in risk.disease.lower()
        and (severity is None or risk.severity is severity)
        and (exposure_type is None or risk.exposure_type is exposure_type)
    ]


def sort_by_severity(risks: Iterable[HealthRisk], descending: bool = True) -> List[HealthRisk]:
    """Order diseases by severity rank; ties keep their input order."""
    sign = -1 if descending else 1
    return sorted(risks, key=lambda r: sign * SEVERITY_RANK[r.severity])
