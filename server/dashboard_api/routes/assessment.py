"""Vulnerability questionnaire API routes."""
from fastapi import APIRouter, Depends

from exposure_risk.guidance import (
    equipment_priority,
    equipment_recommendations,
    location_risk_alert,
    professional_contacts,
)
from exposure_risk.questionnaire import (
    QUESTIONS,
    QuestionnaireAnswers,
    build_profile,
    score_vulnerability,
)
from exposure_risk.storage import HealthRecordStore

from ..database import get_record_store
from ..models.profile import (
    AssessmentRequest,
    AssessmentResponse,
    ContactModel,
    EquipmentModel,
    EquipmentPriorityModel,
    LocationAlertModel,
    ProfileModel,
)

router = APIRouter(prefix="/api/assessment", tags=["Assessment"])


@router.get("/questions")
async def get_questions():
    """Get the questionnaire with its answer options."""
    return QUESTIONS


@router.post("", response_model=AssessmentResponse)
async def submit_assessment(
    request: AssessmentRequest,
    store: HealthRecordStore = Depends(get_record_store),
):
    """
    Score a completed questionnaire and save the resulting profile.

    Answers must be one of the listed options (or contain its keyword);
    anything else is rejected with 422.
    """
    answers = QuestionnaireAnswers.from_raw(
        age_group=request.age_group,
        health_condition=request.health_conditions,
        pregnancy_status=request.pregnancy_status,
        smoking_status=request.smoking_status,
        location_exposure=request.location_exposure,
    )
    assessment = score_vulnerability(answers)
    profile = build_profile(assessment, answers)
    store.save_profile(profile)

    alert = location_risk_alert(answers.location_exposure)
    priority = equipment_priority(assessment.level, store.load_history())
    result = assessment.to_dict()

    return AssessmentResponse(
        score=result["score"],
        level=result["level"],
        factors=result["factors"],
        health_conditions=result["health_conditions"],
        location_score=result["location_score"],
        high_risk_cities=result["high_risk_cities"],
        profile=ProfileModel(
            id=profile.id,
            age_group=profile.age_group,
            health_conditions=profile.health_conditions,
            vulnerability_level=profile.vulnerability_level.value,
            created_at=profile.created_at,
            last_updated=profile.last_updated,
        ),
        equipment=[EquipmentModel(**e.to_dict()) for e in equipment_recommendations(assessment.level)],
        contacts=[ContactModel(**c.to_dict()) for c in professional_contacts(assessment.level)],
        location_alert=LocationAlertModel(
            cities=alert.cities, high_alert=alert.high_alert, messages=alert.messages
        ),
        equipment_priority=EquipmentPriorityModel(tier=priority.tier, items=priority.items),
    )
