"""
Exposure Risk Module.

Environmental health risk scoring for Indian cities: city risk scores,
disease onset predictions, an exposure countdown, a vulnerability
questionnaire and persisted exposure records.
"""

from .errors import ExternalLookupError, GeolocationError, InvalidEnumError
from .geo import CityMatch, find_nearest_city, group_cities_by_state, haversine_km
from .location import IPLocator, LocationResult, detect_location
from .questionnaire import QuestionnaireAnswers, build_profile, score_vulnerability
from .scoring import (
    assess_exposure_duration,
    calculate_risk_score,
    classify_aqi,
    filter_health_risks,
    get_recommendation,
    parse_risk_duration,
    predict_risk_timeline,
    sort_by_severity,
)
from .storage import HealthRecordStore, InMemoryKeyValueStore, SqliteKeyValueStore
from .timer import ExposureTimer

__all__ = [
    "ExternalLookupError",
    "GeolocationError",
    "InvalidEnumError",
    "CityMatch",
    "find_nearest_city",
    "group_cities_by_state",
    "haversine_km",
    "IPLocator",
    "LocationResult",
    "detect_location",
    "QuestionnaireAnswers",
    "build_profile",
    "score_vulnerability",
    "assess_exposure_duration",
    "calculate_risk_score",
    "classify_aqi",
    "filter_health_risks",
    "get_recommendation",
    "parse_risk_duration",
    "predict_risk_timeline",
    "sort_by_severity",
    "HealthRecordStore",
    "InMemoryKeyValueStore",
    "SqliteKeyValueStore",
    "ExposureTimer",
]
