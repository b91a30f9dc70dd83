"""
Protective equipment, contacts and location alerts for a vulnerability tier.
"""

from dataclasses import asdict, dataclass
from typing import List, Sequence

from .models import ExposureActivity, VulnerabilityLevel

HIGH_AQI_THRESHOLD = 150

# Broader than the questionnaire's scoring list; used for alerts only.
ALERT_CITIES = ("Delhi", "Kanpur", "Lucknow", "Kolkata", "Ahmedabad", "Patna", "Agra")

_ELEVATED = (VulnerabilityLevel.HIGH, VulnerabilityLevel.CRITICAL)


@dataclass(frozen=True)
class EquipmentRecommendation:
    category: str  # masks, airPurifiers, waterFilters, monitoring, emergency
    name: str
    description: str
    priority: str  # essential, recommended, optional
    price_range: str
    where: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ProfessionalContact:
    type: str  # emergency, specialist, general, telehealth
    title: str
    description: str
    contact: str
    when: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LocationAlert:
    cities: List[str]
    high_alert: bool
    messages: List[str]


@dataclass(frozen=True)
class EquipmentPriority:
    tier: str  # critical, high, recommended
    items: List[str]


def equipment_recommendations(level: VulnerabilityLevel) -> List[EquipmentRecommendation]:
    """Equipment to buy for a vulnerability tier."""
    level = VulnerabilityLevel.parse(level)
    recommendations = []

    if level in _ELEVATED:
        recommendations.append(EquipmentRecommendation(
            category="masks",
            name="N95/N99 Respirator Masks",
            description="Professional-grade masks that filter 95-99% of airborne particles",
            priority="essential",
            price_range="₹50-150 per mask",
            where="Medical stores, Amazon, Flipkart",
        ))
        recommendations.append(EquipmentRecommendation(
            category="airPurifiers",
            name="HEPA Air Purifier",
            description="Removes particles and improves indoor air quality",
            priority="essential",
            price_range="₹15,000-50,000",
            where="Croma, Amazon, local electronics stores",
        ))

    recommendations.append(EquipmentRecommendation(
        category="waterFilters",
        name="RO + UV Water Purifier",
        description="Comprehensive water purification system",
        priority="essential" if level in _ELEVATED else "recommended",
        price_range="₹8,000-25,000",
        where="Aquaguard, Kent, local dealers",
    ))
    return recommendations


def professional_contacts(level: VulnerabilityLevel) -> List[ProfessionalContact]:
    """Who to contact. The same three contacts apply at every tier."""
    VulnerabilityLevel.parse(level)
    return [
        ProfessionalContact(
            type="emergency",
            title="Emergency Medical Services",
            description="For immediate life-threatening situations",
            contact="108 (National Emergency Number)",
            when="Severe breathing difficulty, chest pain, loss of consciousness",
        ),
        ProfessionalContact(
            type="general",
            title="General Practitioner (GP)",
            description="Primary care physician for regular monitoring",
            contact="Local clinics, family doctors",
            when="Regular check-ups, mild symptoms, health advice",
        ),
        ProfessionalContact(
            type="telehealth",
            title="Telehealth Consultation",
            description="Online medical consultation for non-emergency issues",
            contact="Practo, DocsApp, 1mg, Tata Health",
            when="Initial consultation, follow-ups, medication advice",
        ),
    ]


def location_risk_alert(location_text: str) -> LocationAlert:
    """Warn about heavily polluted cities mentioned in a location history."""
    lowered = (location_text or "").lower()
    cities = [city for city in ALERT_CITIES if city.lower() in lowered]

    if not cities:
        return LocationAlert(
            cities=[],
            high_alert=False,
            messages=[
                "Based on your location history, you primarily visit areas with moderate environmental conditions",
                "Continue monitoring for any changes in air/water quality in your areas",
            ],
        )

    return LocationAlert(
        cities=cities,
        high_alert=True,
        messages=[
            f"HIGH ALERT: You have significant exposure to {', '.join(cities)} - among India's most polluted cities",
            "Critical concern: These locations have AQI levels frequently exceeding 200-400",
            "Water quality risk: Industrial contamination documented in these areas",
            "Immediate action needed: Your exposure to these locations significantly elevates your risk profile",
        ],
    )


def equipment_priority(
    level: VulnerabilityLevel,
    history: Sequence[ExposureActivity] = (),
) -> EquipmentPriority:
    """Prioritised shopping list combining the tier with logged exposures."""
    level = VulnerabilityLevel.parse(level)
    high_risk = sum(1 for a in history if (a.aqi or 0) > HIGH_AQI_THRESHOLD)
    frequent = len(history) > 5

    if level is VulnerabilityLevel.CRITICAL or high_risk > 3:
        return EquipmentPriority("critical", [
            "N99 Respirator Masks - Essential for your exposure pattern (₹100-200 each)",
            "HEPA Air Purifier - Mandatory for indoor protection (₹20,000-60,000)",
            "Personal AQI Monitor - Track real-time exposure (₹3,000-10,000)",
            "Emergency Inhaler - Keep readily available (Consult doctor)",
        ])

    if level is VulnerabilityLevel.HIGH or frequent:
        return EquipmentPriority("high", [
            "N95 Masks - For outdoor protection (₹50-150 each)",
            "Air Purifier - For your most-used room (₹8,000-25,000)",
            "Water Purifier Upgrade - Enhanced filtration needed (₹10,000-30,000)",
        ])

    return EquipmentPriority("recommended", [
        "KN95 Masks - For moderate protection (₹30-80 each)",
        "Basic Air Purifier - For improved indoor air (₹5,000-15,000)",
        "UV Water Purifier - Standard protection (₹4,000-12,000)",
    ])
