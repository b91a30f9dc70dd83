"""Pydantic models for exposure risk API requests and responses."""
from .city import CityModel, CityPredictions, CityCharts, RiskPredictionModel
from .risk import HealthRiskModel, RiskOverview, DurationAssessmentModel
from .timer import TimerStatus, DurationRequest, LocationMatchRequest, LocationMatchResponse
from .profile import (
    ProfileModel,
    ExposureActivityRequest,
    ExposureActivityModel,
    ProfileInsights,
    AssessmentRequest,
    AssessmentResponse,
)

__all__ = [
    "CityModel",
    "CityPredictions",
    "CityCharts",
    "RiskPredictionModel",
    "HealthRiskModel",
    "RiskOverview",
    "DurationAssessmentModel",
    "TimerStatus",
    "DurationRequest",
    "LocationMatchRequest",
    "LocationMatchResponse",
    "ProfileModel",
    "ExposureActivityRequest",
    "ExposureActivityModel",
    "ProfileInsights",
    "AssessmentRequest",
    "AssessmentResponse",
]
