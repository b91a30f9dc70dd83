"""Profile, exposure log and questionnaire models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class ProfileModel(BaseModel):
    """Stored user profile."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    age_group: str = Field(serialization_alias="ageGroup")
    health_conditions: list[str] = Field(serialization_alias="healthConditions")
    vulnerability_level: str = Field(serialization_alias="vulnerabilityLevel")
    created_at: str = Field(serialization_alias="createdAt")
    last_updated: str = Field(serialization_alias="lastUpdated")


class ExposureActivityRequest(BaseModel):
    """A new exposure log entry."""

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    location: str = Field(min_length=1)
    exposure_type: str = Field(alias="exposureType")
    duration: float = Field(gt=0)
    aqi: Optional[int] = Field(default=None, ge=0)
    water_quality: Optional[str] = Field(default=None, alias="waterQuality")
    symptoms: list[str] = []
    notes: Optional[str] = None


class ExposureActivityModel(BaseModel):
    """Stored exposure log entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: str
    location: str
    exposure_type: str = Field(serialization_alias="exposureType")
    duration: float
    aqi: Optional[int] = None
    water_quality: Optional[str] = Field(default=None, serialization_alias="waterQuality")
    symptoms: list[str] = []
    notes: Optional[str] = None


class HistorySummaryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    recent: int
    high_risk: int = Field(serialization_alias="highRisk")
    average_duration: float = Field(serialization_alias="averageDuration")
    top_location: str = Field(serialization_alias="topLocation")
    pattern: str


class TrendModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    average_duration: float = Field(serialization_alias="averageDuration")
    risk_trend_percent: int = Field(serialization_alias="riskTrendPercent")
    total_exposures: int = Field(serialization_alias="totalExposures")


class EquipmentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: str
    name: str
    description: str
    priority: str
    price_range: str = Field(serialization_alias="priceRange")
    where: str


class ContactModel(BaseModel):
    type: str
    title: str
    description: str
    contact: str
    when: str


class LocationAlertModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cities: list[str]
    high_alert: bool = Field(serialization_alias="highAlert")
    messages: list[str]


class EquipmentPriorityModel(BaseModel):
    tier: str
    items: list[str]


class ProfileInsights(BaseModel):
    """Profile combined with exposure history analysis."""

    model_config = ConfigDict(populate_by_name=True)

    profile: Optional[ProfileModel] = None
    summary: Optional[HistorySummaryModel] = None
    trend: Optional[TrendModel] = None
    equipment_priority: Optional[EquipmentPriorityModel] = Field(
        default=None, serialization_alias="equipmentPriority"
    )
    location_alert: Optional[LocationAlertModel] = Field(
        default=None, serialization_alias="locationAlert"
    )


class AssessmentRequest(BaseModel):
    """Questionnaire answers as option texts."""

    model_config = ConfigDict(populate_by_name=True)

    age_group: str = Field(alias="ageGroup")
    health_conditions: str = Field(alias="healthConditions")
    pregnancy_status: str = Field(alias="pregnancyStatus")
    smoking_status: str = Field(alias="smokingStatus")
    location_exposure: str = Field(default="", alias="locationExposure")


class AssessmentResponse(BaseModel):
    """Scored questionnaire with the saved profile and guidance."""

    model_config = ConfigDict(populate_by_name=True)

    score: int
    level: str
    factors: list[str]
    health_conditions: list[str] = Field(serialization_alias="healthConditions")
    location_score: int = Field(serialization_alias="locationScore")
    high_risk_cities: list[str] = Field(serialization_alias="highRiskCities")
    profile: ProfileModel
    equipment: list[EquipmentModel]
    contacts: list[ContactModel]
    location_alert: LocationAlertModel = Field(serialization_alias="locationAlert")
    equipment_priority: EquipmentPriorityModel = Field(serialization_alias="equipmentPriority")
