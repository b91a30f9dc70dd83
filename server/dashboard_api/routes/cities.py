"""City API routes."""
from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from exposure_risk.datasets import CITIES, get_city
from exposure_risk.geo import group_cities_by_state
from exposure_risk.models import City, ExposureFilter, HealthProfile
from exposure_risk.scoring import calculate_risk_score, classify_aqi, predict_risk_timeline
from exposure_risk.stats import (
    aqi_distribution,
    city_comparison,
    city_risk_profile,
    water_quality_distribution,
)

from ..models.city import (
    AQILevelModel,
    CityCharts,
    CityModel,
    CityPredictions,
    RiskFactorsModel,
    RiskPredictionModel,
)

router = APIRouter(prefix="/api/cities", tags=["Cities"])


def _city_to_model(city: City) -> CityModel:
    """Convert a City to its API model."""
    level = classify_aqi(city.aqi)
    return CityModel(
        id=city.id,
        name=city.name,
        state=city.state,
        aqi=city.aqi,
        water_quality=city.water_quality.value,
        lat=city.lat,
        lng=city.lng,
        population=city.population,
        risk_factors=RiskFactorsModel(
            air_pollution=city.risk_factors.air_pollution,
            water_contamination=city.risk_factors.water_contamination,
            industrial_activity=city.risk_factors.industrial_activity,
        ),
        risk_score=calculate_risk_score(city),
        aqi_level=AQILevelModel(band=level.band, label=level.label, description=level.description),
    )


def _lookup_city(city_id: str) -> City:
    try:
        return get_city(city_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown city: {city_id}")


@router.get("", response_model=list[CityModel])
async def list_cities(
    state: Optional[str] = Query(default=None, description="Only cities in this state"),
):
    """Get all cities in table order."""
    cities = [c for c in CITIES if state is None or c.state.lower() == state.lower()]
    return [_city_to_model(c) for c in cities]


@router.get("/by-state", response_model=dict[str, list[CityModel]])
async def list_cities_by_state():
    """Get cities grouped by state, states in alphabetical order."""
    return {
        state: [_city_to_model(c) for c in cities]
        for state, cities in group_cities_by_state().items()
    }


@router.get("/charts", response_model=CityCharts)
async def get_city_charts():
    """Get the data behind the city comparison and distribution charts."""
    return CityCharts(
        comparison=city_comparison(),
        aqi_distribution=aqi_distribution(),
        water_quality_distribution=water_quality_distribution(),
    )


@router.get("/{city_id}", response_model=CityModel)
async def get_city_detail(city_id: str):
    """Get a single city."""
    return _city_to_model(_lookup_city(city_id))


@router.get("/{city_id}/predictions", response_model=CityPredictions)
async def get_city_predictions(
    city_id: str,
    profile: str = Query(default="healthy", description="healthy or vulnerable"),
    exposure: str = Query(default="both", description="air, water or both"),
):
    """
    Get the risk timeline for a city.

    Onset times are shortened in proportion to the city's risk score and
    sorted soonest first.
    """
    city = _lookup_city(city_id)
    profile = HealthProfile.parse(profile)
    exposure = ExposureFilter.parse(exposure)
    predictions = predict_risk_timeline(city, profile, exposure)
    return CityPredictions(
        city_id=city.id,
        profile=profile.value,
        exposure=exposure.value,
        risk_score=calculate_risk_score(city),
        predictions=[RiskPredictionModel(**p.to_dict()) for p in predictions],
        risk_profile=city_risk_profile(city),
    )
