"""Disease table models."""
from pydantic import BaseModel, Field, ConfigDict


class HealthRiskModel(BaseModel):
    """One disease with its onset timelines."""

    model_config = ConfigDict(populate_by_name=True)

    disease: str
    exposure_type: str = Field(serialization_alias="exposureType")
    duration_to_risk: str = Field(serialization_alias="durationToRisk")
    severity: str
    healthy_onset: str = Field(serialization_alias="healthyOnset")
    vulnerable_onset: str = Field(serialization_alias="vulnerableOnset")


class ExposureCounts(BaseModel):
    air: int
    water: int
    combined: int


class RiskOverview(BaseModel):
    """Totals for the overview cards."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    severity_counts: dict[str, int] = Field(serialization_alias="severityCounts")
    exposure_counts: ExposureCounts = Field(serialization_alias="exposureCounts")


class DurationAssessmentModel(BaseModel):
    """Risk level of one disease for an exposure duration."""

    model_config = ConfigDict(populate_by_name=True)

    disease: str
    severity: str
    exposure_type: str = Field(serialization_alias="exposureType")
    onset: str
    level: str
    recommendation: str
