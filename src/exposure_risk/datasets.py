"""
Static lookup tables.

The disease table and the city table are hand-curated and never change at
runtime. Both are exposed as tuples of frozen dataclasses.
"""

from typing import Dict, Tuple

from .models import (
    City,
    ExposureType,
    HealthRisk,
    RiskFactors,
    Severity,
    WaterQuality,
)

HEALTH_RISKS: Tuple[HealthRisk, ...] = (
    HealthRisk(
        disease="Acute Respiratory Infection",
        exposure_type=ExposureType.AIR_ONLY,
        duration_to_risk="1–3 days",
        severity=Severity.MODERATE,
        healthy_onset="3–5 days of continuous exposure",
        vulnerable_onset="12–24 hours of exposure",
    ),
    HealthRisk(
        disease="Asthma Exacerbation",
        exposure_type=ExposureType.AIR_ONLY,
        duration_to_risk="Hours to 2 days",
        severity=Severity.SEVERE,
        healthy_onset="2–3 days in high AQI zones",
        vulnerable_onset="4–6 hours in hazardous AQI",
    ),
    HealthRisk(
        disease="Chronic Bronchitis",
        exposure_type=ExposureType.AIR_ONLY,
        duration_to_risk="3+ months",
        severity=Severity.SEVERE,
        healthy_onset="90+ days of exposure",
        vulnerable_onset="30–60 days of exposure",
    ),
    HealthRisk(
        disease="Lung Cancer",
        exposure_type=ExposureType.AIR_ONLY,
        duration_to_risk="Years",
        severity=Severity.CRITICAL,
        healthy_onset="2–5 years of chronic exposure",
        vulnerable_onset="1–3 years of chronic exposure",
    ),
    HealthRisk(
        disease="Cardiovascular Disease",
        exposure_type=ExposureType.AIR_ONLY,
        duration_to_risk="Weeks to years",
        severity=Severity.SEVERE,
        healthy_onset="6+ months of exposure",
        vulnerable_onset="1–3 months of exposure",
    ),
    HealthRisk(
        disease="Skin Rashes/Infections",
        exposure_type=ExposureType.WATER_ONLY,
        duration_to_risk="1–3 days",
        severity=Severity.MILD,
        healthy_onset="3–5 days of contact",
        vulnerable_onset="1–2 days of contact",
    ),
    HealthRisk(
        disease="Diarrhea/Dysentery",
        exposure_type=ExposureType.WATER_ONLY,
        duration_to_risk="1–3 days",
        severity=Severity.MODERATE,
        healthy_onset="2–4 days of ingestion/contact",
        vulnerable_onset="12–24 hours of ingestion/contact",
    ),
    HealthRisk(
        disease="Typhoid/Cholera",
        exposure_type=ExposureType.WATER_ONLY,
        duration_to_risk="3–7 days",
        severity=Severity.SEVERE,
        healthy_onset="5–7 days of exposure",
        vulnerable_onset="2–3 days of exposure",
    ),
    HealthRisk(
        disease="Arsenic/Lead Poisoning",
        exposure_type=ExposureType.WATER_ONLY,
        duration_to_risk="Months to years",
        severity=Severity.CRITICAL,
        healthy_onset="6–12 months of exposure",
        vulnerable_onset="3–6 months of exposure",
    ),
    HealthRisk(
        disease="Neurological Disorders",
        exposure_type=ExposureType.WATER_ONLY,
        duration_to_risk="Years",
        severity=Severity.CRITICAL,
        healthy_onset="2–4 years of exposure",
        vulnerable_onset="1–2 years of exposure",
    ),
    HealthRisk(
        disease="Multi-organ Stress",
        exposure_type=ExposureType.COMBINED,
        duration_to_risk="Weeks to months",
        severity=Severity.SEVERE,
        healthy_onset="30–60 days of dual exposure",
        vulnerable_onset="7–14 days of dual exposure",
    ),
    HealthRisk(
        disease="Premature Mortality",
        exposure_type=ExposureType.COMBINED,
        duration_to_risk="Years",
        severity=Severity.CRITICAL,
        healthy_onset="3–5 years of chronic exposure",
        vulnerable_onset="1–2 years of chronic exposure",
    ),
)


def _city(city_id, name, state, aqi, water, lat, lng, population, air, contamination, industry) -> City:
    return City(
        id=city_id,
        name=name,
        state=state,
        aqi=aqi,
        water_quality=WaterQuality.parse(water),
        lat=lat,
        lng=lng,
        population=population,
        risk_factors=RiskFactors(
            air_pollution=air,
            water_contamination=contamination,
            industrial_activity=industry,
        ),
    )


# id, name, state, aqi, water quality, lat, lng, population, air, water, industry
CITIES: Tuple[City, ...] = (
    _city("delhi", "Delhi", "Delhi", 342, "Poor", 28.6139, 77.2090, 32900000, 9, 7, 8),
    _city("mumbai", "Mumbai", "Maharashtra", 178, "Moderate", 19.0760, 72.8777, 20700000, 6, 5, 7),
    _city("kolkata", "Kolkata", "West Bengal", 198, "Poor", 22.5726, 88.3639, 14850000, 7, 8, 6),
    _city("chennai", "Chennai", "Tamil Nadu", 145, "Moderate", 13.0827, 80.2707, 11000000, 5, 6, 5),
    _city("bangalore", "Bangalore", "Karnataka", 134, "Moderate", 12.9716, 77.5946, 13600000, 4, 5, 6),
    _city("hyderabad", "Hyderabad", "Telangana", 156, "Moderate", 17.3850, 78.4867, 10500000, 5, 4, 5),
    _city("ahmedabad", "Ahmedabad", "Gujarat", 189, "Poor", 23.0225, 72.5714, 8400000, 6, 6, 7),
    _city("pune", "Pune", "Maharashtra", 167, "Moderate", 18.5204, 73.8567, 7400000, 5, 4, 6),
    _city("kanpur", "Kanpur", "Uttar Pradesh", 278, "Very Poor", 26.4499, 80.3319, 3700000, 8, 9, 8),
    _city("lucknow", "Lucknow", "Uttar Pradesh", 234, "Poor", 26.8467, 80.9462, 3400000, 7, 7, 6),
    # Good air and water
    _city("chandigarh", "Chandigarh", "Chandigarh", 42, "Good", 30.7333, 76.7794, 1160000, 2, 2, 3),
    _city("shimla", "Shimla", "Himachal Pradesh", 35, "Good", 31.1048, 77.1734, 220000, 1, 1, 2),
    _city("manali", "Manali", "Himachal Pradesh", 28, "Good", 32.2396, 77.1887, 45000, 1, 1, 1),
    _city("gangtok", "Gangtok", "Sikkim", 31, "Good", 27.3389, 88.6065, 110000, 1, 2, 2),
    _city("coimbatore", "Coimbatore", "Tamil Nadu", 48, "Good", 11.0168, 76.9558, 2200000, 2, 2, 3),
    # Moderate conditions
    _city("kochi", "Kochi", "Kerala", 68, "Good", 9.9312, 76.2673, 2200000, 3, 2, 4),
    _city("mysore", "Mysore", "Karnataka", 55, "Good", 12.2958, 76.6394, 920000, 2, 2, 3),
    _city("trivandrum", "Trivandrum", "Kerala", 52, "Good", 8.5241, 76.9366, 1700000, 2, 3, 3),
    _city("bhubaneswar", "Bhubaneswar", "Odisha", 89, "Moderate", 20.2961, 85.8245, 880000, 3, 4, 4),
    _city("guwahati", "Guwahati", "Assam", 76, "Moderate", 26.1445, 91.7362, 960000, 3, 4, 3),
    _city("indore", "Indore", "Madhya Pradesh", 118, "Moderate", 22.7196, 75.8577, 3300000, 4, 4, 5),
    _city("jaipur", "Jaipur", "Rajasthan", 142, "Moderate", 26.9124, 75.7873, 3900000, 5, 4, 5),
    _city("udaipur", "Udaipur", "Rajasthan", 78, "Good", 24.5854, 73.7125, 475000, 3, 2, 3),
    _city("pondicherry", "Pondicherry", "Puducherry", 61, "Good", 11.9416, 79.8083, 650000, 2, 3, 3),
    _city("dehradun", "Dehradun", "Uttarakhand", 87, "Good", 30.3165, 78.0322, 800000, 3, 2, 4),
    _city("shillong", "Shillong", "Meghalaya", 39, "Good", 25.5788, 91.8933, 145000, 1, 2, 2),
    _city("aizawl", "Aizawl", "Mizoram", 33, "Good", 23.7307, 92.7173, 295000, 1, 2, 1),
    _city("imphal", "Imphal", "Manipur", 44, "Good", 24.8170, 93.9368, 270000, 2, 2, 2),
    _city("panaji", "Panaji", "Goa", 47, "Good", 15.4909, 73.8278, 115000, 2, 2, 3),
    _city("srinagar", "Srinagar", "Jammu and Kashmir", 65, "Good", 34.0837, 74.7973, 1250000, 2, 3, 3),
)

CITIES_BY_ID: Dict[str, City] = {city.id: city for city in CITIES}

if len(CITIES_BY_ID) != len(CITIES):
    raise RuntimeError("City ids must be unique")


def get_city(city_id: str) -> City:
    """Look up a city by id. Raises KeyError for unknown ids."""
    try:
        return CITIES_BY_ID[city_id]
    except KeyError:
        raise KeyError(f"Unknown city: {city_id}") from None
