"""City and risk prediction models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class AQILevelModel(BaseModel):
    """AQI band with display label."""

    band: str
    label: str
    description: str


class RiskFactorsModel(BaseModel):
    """City risk factors on a 1-10 scale."""

    model_config = ConfigDict(populate_by_name=True)

    air_pollution: int = Field(serialization_alias="airPollution")
    water_contamination: int = Field(serialization_alias="waterContamination")
    industrial_activity: int = Field(serialization_alias="industrialActivity")


class CityModel(BaseModel):
    """City with its composite risk score."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str
    state: str
    aqi: int
    water_quality: str = Field(serialization_alias="waterQuality")
    lat: float
    lng: float
    population: int
    risk_factors: RiskFactorsModel = Field(serialization_alias="riskFactors")
    risk_score: float = Field(serialization_alias="riskScore")
    aqi_level: AQILevelModel = Field(serialization_alias="aqiLevel")


class RiskPredictionModel(BaseModel):
    """Predicted hours to onset for one condition."""

    model_config = ConfigDict(populate_by_name=True)

    condition: str
    time_to_risk: int = Field(serialization_alias="timeToRisk")
    severity: str
    recommendation: str


class CityPredictions(BaseModel):
    """Risk timeline for a city."""

    model_config = ConfigDict(populate_by_name=True)

    city_id: str = Field(serialization_alias="cityId")
    profile: str
    exposure: str
    risk_score: float = Field(serialization_alias="riskScore")
    predictions: list[RiskPredictionModel]
    risk_profile: dict[str, float] = Field(serialization_alias="riskProfile")


class CityComparisonRow(BaseModel):
    """One bar of the city comparison chart."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    aqi: int
    risk_score: float = Field(serialization_alias="riskScore")
    population_millions: int = Field(serialization_alias="populationMillions")
    air_pollution: int = Field(serialization_alias="airPollution")
    water_contamination: int = Field(serialization_alias="waterContamination")
    industrial_activity: int = Field(serialization_alias="industrialActivity")


class DistributionBucket(BaseModel):
    """Count of cities in one chart bucket."""

    name: str
    count: int
    band: Optional[str] = None


class CityCharts(BaseModel):
    """Data behind the city charts."""

    model_config = ConfigDict(populate_by_name=True)

    comparison: list[CityComparisonRow]
    aqi_distribution: list[DistributionBucket] = Field(serialization_alias="aqiDistribution")
    water_quality_distribution: list[DistributionBucket] = Field(
        serialization_alias="waterQualityDistribution"
    )
