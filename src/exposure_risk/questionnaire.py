"""
Vulnerability Questionnaire Scoring.

Five answers (age group, health conditions, pregnancy, smoking and a free
text description of where the user lives and travels) are turned into an
additive vulnerability score and a tier. Every category answer must be one
of the closed options below; anything else raises InvalidEnumError rather
than silently scoring zero. The free text is scanned with a fixed,
case-insensitive keyword table.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .errors import InvalidEnumError
from .models import UserProfile, VulnerabilityLevel

logger = logging.getLogger(__name__)


class _AnswerEnum(str, Enum):
    """Closed answer set. parse() accepts the option text or its keyword."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        for keyword, member in ANSWER_KEYWORDS.get(cls, ()):
            if keyword in text:
                return member
        raise InvalidEnumError(cls.__name__, value, [m.value for m in cls])


class AgeGroup(_AnswerEnum):
    UNDER_18 = "Under 18"
    AGE_18_35 = "18-35"
    AGE_36_50 = "36-50"
    AGE_51_65 = "51-65"
    OVER_65 = "Over 65"


class HealthCondition(_AnswerEnum):
    NONE = "None - I'm generally healthy"
    RESPIRATORY = "Respiratory conditions (Asthma, COPD, bronchitis)"
    HEART = "Heart disease or cardiovascular conditions"
    DIABETES = "Diabetes or metabolic disorders"
    IMMUNE = "Immune system disorders"
    MULTIPLE = "Multiple conditions from above"


class PregnancyStatus(_AnswerEnum):
    NO = "No"
    PREGNANT = "Yes, pregnant"
    BREASTFEEDING = "Yes, breastfeeding"
    UNDISCLOSED = "Prefer not to answer"


class SmokingStatus(_AnswerEnum):
    NEVER = "Never smoked"
    FORMER = "Former smoker"
    CURRENT = "Current smoker"
    SECONDHAND = "Exposed to secondhand smoke regularly"


# Checked in order after an exact match fails.
ANSWER_KEYWORDS = {
    HealthCondition: (
        ("multiple conditions", HealthCondition.MULTIPLE),
        ("respiratory", HealthCondition.RESPIRATORY),
        ("heart disease", HealthCondition.HEART),
        ("diabetes", HealthCondition.DIABETES),
        ("immune system", HealthCondition.IMMUNE),
        ("none", HealthCondition.NONE),
    ),
    PregnancyStatus: (
        ("pregnant", PregnancyStatus.PREGNANT),
        ("breastfeeding", PregnancyStatus.BREASTFEEDING),
        ("prefer not", PregnancyStatus.UNDISCLOSED),
    ),
    SmokingStatus: (
        ("current", SmokingStatus.CURRENT),
        ("former", SmokingStatus.FORMER),
        ("secondhand", SmokingStatus.SECONDHAND),
        ("never", SmokingStatus.NEVER),
    ),
}

# answer -> (points, factor label)
AGE_RULES: Dict[AgeGroup, Tuple[int, Optional[str]]] = {
    AgeGroup.UNDER_18: (2, "Age group (higher risk)"),
    AgeGroup.AGE_18_35: (0, None),
    AgeGroup.AGE_36_50: (0, None),
    AgeGroup.AGE_51_65: (1, "Age group (moderate risk)"),
    AgeGroup.OVER_65: (2, "Age group (higher risk)"),
}

# answer -> (points, factor label, condition tags)
CONDITION_RULES: Dict[HealthCondition, Tuple[int, Optional[str], Tuple[str, ...]]] = {
    HealthCondition.NONE: (0, None, ()),
    HealthCondition.RESPIRATORY: (2, "Respiratory conditions", ("respiratory",)),
    HealthCondition.HEART: (2, "Cardiovascular conditions", ("cardiovascular",)),
    HealthCondition.DIABETES: (2, "Diabetes", ("diabetes",)),
    HealthCondition.IMMUNE: (2, "Immune system disorders", ("immune",)),
    HealthCondition.MULTIPLE: (
        3,
        "Multiple pre-existing conditions",
        ("respiratory", "cardiovascular", "diabetes", "immune"),
    ),
}

PREGNANCY_RULES: Dict[PregnancyStatus, Tuple[int, Optional[str]]] = {
    PregnancyStatus.NO: (0, None),
    PregnancyStatus.PREGNANT: (2, "Pregnancy/breastfeeding status"),
    PregnancyStatus.BREASTFEEDING: (2, "Pregnancy/breastfeeding status"),
    PregnancyStatus.UNDISCLOSED: (0, None),
}

SMOKING_RULES: Dict[SmokingStatus, Tuple[int, Optional[str]]] = {
    SmokingStatus.NEVER: (0, None),
    SmokingStatus.FORMER: (1, "Smoking exposure"),
    SmokingStatus.CURRENT: (2, "Current smoking"),
    SmokingStatus.SECONDHAND: (1, "Smoking exposure"),
}

for _rules, _enum in (
    (AGE_RULES, AgeGroup),
    (CONDITION_RULES, HealthCondition),
    (PREGNANCY_RULES, PregnancyStatus),
    (SMOKING_RULES, SmokingStatus),
):
    if set(_rules) != set(_enum):
        raise RuntimeError(f"Scoring table for {_enum.__name__} does not cover every answer")

# Each mentioned city adds one point.
HIGH_RISK_CITIES = ("Delhi", "Kanpur", "Lucknow", "Kolkata", "Ahmedabad")

# (keywords, points, factor); only the first matching rule of a group counts
DURATION_KEYWORD_RULES = (
    (("years", "live"), 2, "Long-term exposure (years)"),
    (("months",), 1, "Medium-term exposure (months)"),
)
FREQUENCY_KEYWORD_RULES = (
    (("daily", "regularly"), 2, "Daily/regular exposure"),
    (("weekly", "monthly"), 1, "Frequent exposure (weekly/monthly)"),
)

# (minimum score, level), highest first
LEVEL_THRESHOLDS = (
    (7, VulnerabilityLevel.CRITICAL),
    (5, VulnerabilityLevel.HIGH),
    (3, VulnerabilityLevel.MODERATE),
)

QUESTIONS = [
    {
        "id": "age_group",
        "type": "radio",
        "question": "What's your age group?",
        "options": [a.value for a in AgeGroup],
    },
    {
        "id": "health_conditions",
        "type": "radio",
        "question": "Do you have any of these pre-existing health conditions?",
        "options": [c.value for c in HealthCondition],
    },
    {
        "id": "pregnancy_status",
        "type": "radio",
        "question": "Are you currently pregnant or breastfeeding?",
        "options": [p.value for p in PregnancyStatus],
    },
    {
        "id": "smoking_status",
        "type": "radio",
        "question": "What's your smoking status?",
        "options": [s.value for s in SmokingStatus],
    },
    {
        "id": "location_exposure",
        "type": "textarea",
        "question": (
            "Please describe your recent location history and exposure patterns. "
            "Include cities you've visited or lived in, duration of stay, and frequency of visits."
        ),
        "placeholder": (
            "e.g., I live in Delhi for 2 years, visit Mumbai monthly for work "
            "(2-3 days each), traveled to Shimla last month for a week..."
        ),
    },
]


@dataclass
class QuestionnaireAnswers:
    """A complete set of questionnaire answers."""

    age_group: AgeGroup
    health_condition: HealthCondition
    pregnancy_status: PregnancyStatus
    smoking_status: SmokingStatus
    location_exposure: str = ""

    @classmethod
    def from_raw(
        cls,
        age_group: str,
        health_condition: str,
        pregnancy_status: str,
        smoking_status: str,
        location_exposure: str = "",
    ) -> "QuestionnaireAnswers":
        """Parse option texts. Raises InvalidEnumError on unknown answers."""
        return cls(
            age_group=AgeGroup.parse(age_group),
            health_condition=HealthCondition.parse(health_condition),
            pregnancy_status=PregnancyStatus.parse(pregnancy_status),
            smoking_status=SmokingStatus.parse(smoking_status),
            location_exposure=location_exposure or "",
        )


@dataclass
class LocationExposure:
    """Points scored from the free-text location history."""

    score: int = 0
    factors: List[str] = field(default_factory=list)
    cities: List[str] = field(default_factory=list)


@dataclass
class VulnerabilityAssessment:
    """Outcome of scoring a questionnaire."""

    score: int
    level: VulnerabilityLevel
    factors: List[str]
    health_conditions: List[str]
    location_exposure: LocationExposure

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.value,
            "factors": list(self.factors),
            "health_conditions": list(self.health_conditions),
            "location_score": self.location_exposure.score,
            "high_risk_cities": list(self.location_exposure.cities),
        }


def analyze_location_exposure(text: str) -> LocationExposure:
    """Score a free-text location history by exact keyword membership."""
    lowered = (text or "").lower()
    result = LocationExposure()

    mentioned = [city for city in HIGH_RISK_CITIES if city.lower() in lowered]
    if mentioned:
        result.score += len(mentioned)
        result.cities = mentioned
        result.factors.append(f"High-risk location exposure: {', '.join(mentioned)}")

    for rules in (DURATION_KEYWORD_RULES, FREQUENCY_KEYWORD_RULES):
        for keywords, points, factor in rules:
            if any(keyword in lowered for keyword in keywords):
                result.score += points
                result.factors.append(factor)
                break

    return result


def vulnerability_level(score: int) -> VulnerabilityLevel:
    """Map a cumulative score to its tier."""
    for minimum, level in LEVEL_THRESHOLDS:
        if score >= minimum:
            return level
    return VulnerabilityLevel.LOW


def score_vulnerability(answers: QuestionnaireAnswers) -> VulnerabilityAssessment:
    """Add up the points for each answer and classify the total."""
    score = 0
    factors: List[str] = []

    for points, factor in (
        AGE_RULES[AgeGroup.parse(answers.age_group)],
        CONDITION_RULES[HealthCondition.parse(answers.health_condition)][:2],
        PREGNANCY_RULES[PregnancyStatus.parse(answers.pregnancy_status)],
        SMOKING_RULES[SmokingStatus.parse(answers.smoking_status)],
    ):
        score += points
        if factor:
            factors.append(factor)

    condition_tags = CONDITION_RULES[HealthCondition.parse(answers.health_condition)][2]

    location = analyze_location_exposure(answers.location_exposure)
    score += location.score
    factors.extend(location.factors)

    level = vulnerability_level(score)
    logger.info(f"[ASSESSMENT] Vulnerability score={score}, level={level.value}")

    return VulnerabilityAssessment(
        score=score,
        level=level,
        factors=factors,
        health_conditions=list(condition_tags),
        location_exposure=location,
    )


def build_profile(
    assessment: VulnerabilityAssessment,
    answers: QuestionnaireAnswers,
    now: Optional[datetime] = None,
) -> UserProfile:
    """Create the profile stored after a completed questionnaire."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return UserProfile(
        id=uuid.uuid4().hex,
        age_group=AgeGroup.parse(answers.age_group).value,
        health_conditions=list(assessment.health_conditions),
        vulnerability_level=assessment.level,
        created_at=timestamp,
        last_updated=timestamp,
    )
