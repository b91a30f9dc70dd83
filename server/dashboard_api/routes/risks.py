"""Disease table API routes."""
from fastapi import APIRouter, Query
from typing import Literal, Optional

from exposure_risk.models import ExposureFilter, HealthProfile, HealthRisk
from exposure_risk.scoring import assess_exposure_duration, filter_health_risks, sort_by_severity
from exposure_risk.stats import risk_overview

from ..models.risk import DurationAssessmentModel, HealthRiskModel, RiskOverview

router = APIRouter(prefix="/api/risks", tags=["Risks"])


def _risk_to_model(risk: HealthRisk) -> HealthRiskModel:
    """Convert a HealthRisk to its API model."""
    return HealthRiskModel(
        disease=risk.disease,
        exposure_type=risk.exposure_type.value,
        duration_to_risk=risk.duration_to_risk,
        severity=risk.severity.value,
        healthy_onset=risk.healthy_onset,
        vulnerable_onset=risk.vulnerable_onset,
    )


@router.get("", response_model=list[HealthRiskModel])
async def list_risks(
    search: str = Query(default="", description="Case-insensitive disease name filter"),
    severity: Optional[str] = Query(default=None, description="Mild, Moderate, Severe or Critical"),
    exposure_type: Optional[str] = Query(
        default=None, alias="exposureType", description="Exposure pathway"
    ),
    sort: Optional[Literal["severity", "severity_asc"]] = Query(default=None),
):
    """Get the disease table, optionally filtered and sorted by severity."""
    risks = filter_health_risks(search=search, severity=severity, exposure_type=exposure_type)
    if sort == "severity":
        risks = sort_by_severity(risks)
    elif sort == "severity_asc":
        risks = sort_by_severity(risks, descending=False)
    return [_risk_to_model(r) for r in risks]


@router.get("/overview", response_model=RiskOverview)
async def get_risk_overview():
    """Get disease totals by severity and exposure pathway."""
    return RiskOverview(**risk_overview())


@router.get("/assessment", response_model=list[DurationAssessmentModel])
async def get_duration_assessment(
    duration: str = Query(default="days", description="hours, days, weeks, months or years"),
    profile: str = Query(default="healthy", description="healthy or vulnerable"),
    exposure: str = Query(default="both", description="air, water or both"),
):
    """Rate each disease for how long the user has been exposed, highest risk first."""
    profile = HealthProfile.parse(profile)
    results = assess_exposure_duration(ExposureFilter.parse(exposure), profile, duration)
    return [
        DurationAssessmentModel(
            disease=r.risk.disease,
            severity=r.risk.severity.value,
            exposure_type=r.risk.exposure_type.value,
            onset=r.risk.onset_for(profile),
            level=r.level.value,
            recommendation=r.recommendation,
        )
        for r in results
    ]
