"""Aggregate figures for the overview cards and city charts."""

from typing import Dict, List, Sequence

from .datasets import CITIES, HEALTH_RISKS
from .models import City, ExposureFilter, HealthRisk, Severity, WaterQuality
from .scoring import calculate_risk_score

# (key, display name, lower bound exclusive, upper bound inclusive)
AQI_DISTRIBUTION_BANDS = (
    ("good", "Good (0-50)", None, 50),
    ("moderate", "Moderate (51-100)", 50, 100),
    ("unhealthy_for_sensitive", "Unhealthy for Sensitive (101-150)", 100, 150),
    ("unhealthy", "Unhealthy (151-200)", 150, 200),
    ("very_unhealthy", "Very Unhealthy (201-300)", 200, 300),
    ("hazardous", "Hazardous (>300)", 300, None),
)


def risk_overview(risks: Sequence[HealthRisk] = HEALTH_RISKS) -> dict:
    """Totals by severity and exposure pathway.

    Combined-exposure diseases count towards the air and water totals too.
    """
    severity_counts = {s.value: 0 for s in Severity}
    for risk in risks:
        severity_counts[risk.severity.value] += 1

    return {
        "total": len(risks),
        "severity_counts": severity_counts,
        "exposure_counts": {
            "air": sum(1 for r in risks if ExposureFilter.AIR.includes(r.exposure_type)),
            "water": sum(1 for r in risks if ExposureFilter.WATER.includes(r.exposure_type)),
            "combined": sum(
                1 for r in risks
                if ExposureFilter.AIR.includes(r.exposure_type)
                and ExposureFilter.WATER.includes(r.exposure_type)
            ),
        },
    }


def city_comparison(cities: Sequence[City] = CITIES) -> List[dict]:
    """One row per city, highest AQI first."""
    rows = [
        {
            "id": city.id,
            "name": city.name,
            "aqi": city.aqi,
            "risk_score": calculate_risk_score(city),
            "population_millions": int(city.population / 1_000_000 + 0.5),
            "air_pollution": city.risk_factors.air_pollution,
            "water_contamination": city.risk_factors.water_contamination,
            "industrial_activity": city.risk_factors.industrial_activity,
        }
        for city in cities
    ]
    return sorted(rows, key=lambda row: -row["aqi"])


def aqi_distribution(cities: Sequence[City] = CITIES) -> List[dict]:
    """City counts per AQI band, empty bands omitted."""
    result = []
    for key, name, lower, upper in AQI_DISTRIBUTION_BANDS:
        count = sum(
            1 for c in cities
            if (lower is None or c.aqi > lower) and (upper is None or c.aqi <= upper)
        )
        if count:
            result.append({"band": key, "name": name, "count": count})
    return result


def water_quality_distribution(cities: Sequence[City] = CITIES) -> List[dict]:
    """City counts per water quality category, empty categories omitted."""
    result = []
    for quality in WaterQuality:
        count = sum(1 for c in cities if c.water_quality is quality)
        if count:
            result.append({"name": quality.value, "count": count})
    return result


def city_risk_profile(city: City) -> Dict[str, float]:
    """Five factors on a 0-10 scale for the radar chart."""
    return {
        "Air Pollution": city.risk_factors.air_pollution,
        "Water Contamination": city.risk_factors.water_contamination,
        "Industrial Activity": city.risk_factors.industrial_activity,
        "AQI Level": min(city.aqi / 50, 10),
        "Population Density": min(city.population / 5_000_000, 10),
    }
