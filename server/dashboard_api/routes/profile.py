"""Stored profile and exposure log API routes."""
import uuid
from fastapi import APIRouter, Depends
from typing import Optional

from exposure_risk.guidance import equipment_priority, location_risk_alert
from exposure_risk.history import summarize_exposure_history, trend_analysis
from exposure_risk.models import ActivityExposure, ExposureActivity, UserProfile
from exposure_risk.storage import HealthRecordStore

from ..database import get_record_store
from ..models.profile import (
    EquipmentPriorityModel,
    ExposureActivityModel,
    ExposureActivityRequest,
    HistorySummaryModel,
    LocationAlertModel,
    ProfileInsights,
    ProfileModel,
    TrendModel,
)

router = APIRouter(prefix="/api/profile", tags=["Profile"])


def _profile_to_model(profile: UserProfile) -> ProfileModel:
    return ProfileModel(
        id=profile.id,
        age_group=profile.age_group,
        health_conditions=profile.health_conditions,
        vulnerability_level=profile.vulnerability_level.value,
        created_at=profile.created_at,
        last_updated=profile.last_updated,
    )


def _activity_to_model(activity: ExposureActivity) -> ExposureActivityModel:
    return ExposureActivityModel(
        id=activity.id,
        date=activity.date,
        location=activity.location,
        exposure_type=activity.exposure_type.value,
        duration=activity.duration,
        aqi=activity.aqi,
        water_quality=activity.water_quality,
        symptoms=activity.symptoms,
        notes=activity.notes,
    )


@router.get("", response_model=Optional[ProfileModel])
async def get_profile(store: HealthRecordStore = Depends(get_record_store)):
    """Get the saved profile, or null if the questionnaire was never completed."""
    profile = store.load_profile()
    return _profile_to_model(profile) if profile else None


@router.delete("")
async def delete_profile(store: HealthRecordStore = Depends(get_record_store)):
    """Remove the profile and the exposure history."""
    store.reset()
    return {"status": "deleted"}


@router.get("/exposures", response_model=list[ExposureActivityModel])
async def list_exposures(store: HealthRecordStore = Depends(get_record_store)):
    """Get logged exposures, oldest first."""
    return [_activity_to_model(a) for a in store.load_history()]


@router.post("/exposures", response_model=ExposureActivityModel, status_code=201)
async def log_exposure(
    request: ExposureActivityRequest,
    store: HealthRecordStore = Depends(get_record_store),
):
    """Append an exposure to the history."""
    activity = ExposureActivity(
        id=uuid.uuid4().hex,
        date=request.date,
        location=request.location,
        exposure_type=ActivityExposure.parse(request.exposure_type),
        duration=request.duration,
        aqi=request.aqi,
        water_quality=request.water_quality,
        symptoms=request.symptoms,
        notes=request.notes,
    )
    store.append_exposure(activity)
    return _activity_to_model(activity)


@router.get("/insights", response_model=ProfileInsights)
async def get_insights(store: HealthRecordStore = Depends(get_record_store)):
    """
    Get history analysis for the saved profile.

    Sections that need data the user has not provided yet are null.
    """
    profile = store.load_profile()
    history = store.load_history()
    summary = summarize_exposure_history(history)
    trend = trend_analysis(history)

    insights = ProfileInsights(
        profile=_profile_to_model(profile) if profile else None,
        summary=HistorySummaryModel(**summary.to_dict()) if summary else None,
        trend=TrendModel(**trend.to_dict()) if trend else None,
    )

    if profile:
        priority = equipment_priority(profile.vulnerability_level, history)
        insights.equipment_priority = EquipmentPriorityModel(tier=priority.tier, items=priority.items)

    if history:
        alert = location_risk_alert(" ".join(a.location for a in history))
        insights.location_alert = LocationAlertModel(
            cities=alert.cities, high_alert=alert.high_alert, messages=alert.messages
        )

    return insights
