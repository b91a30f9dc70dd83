"""
Unit tests for the vulnerability questionnaire.
"""
import pytest
from datetime import datetime, timezone

from exposure_risk.errors import InvalidEnumError
from exposure_risk.models import VulnerabilityLevel
from exposure_risk.questionnaire import (
    QUESTIONS,
    AgeGroup,
    HealthCondition,
    PregnancyStatus,
    QuestionnaireAnswers,
    SmokingStatus,
    analyze_location_exposure,
    build_profile,
    score_vulnerability,
    vulnerability_level,
)


def _answers(**overrides) -> QuestionnaireAnswers:
    values = {
        "age_group": AgeGroup.AGE_18_35,
        "health_condition": HealthCondition.NONE,
        "pregnancy_status": PregnancyStatus.NO,
        "smoking_status": SmokingStatus.NEVER,
        "location_exposure": "",
    }
    values.update(overrides)
    return QuestionnaireAnswers(**values)


class TestScoreVulnerability:
    """Test additive scoring and tiers."""

    def test_critical_example(self):
        """Over 65 (2) + multiple conditions (3) + Delhi (1) + years (2) + daily (2) = 10."""
        answers = QuestionnaireAnswers.from_raw(
            age_group="Over 65",
            health_condition="Multiple conditions from above",
            pregnancy_status="No",
            smoking_status="Never smoked",
            location_exposure="I have lived in Delhi for years and commute daily",
        )
        result = score_vulnerability(answers)
        assert result.score == 10
        assert result.level is VulnerabilityLevel.CRITICAL
        assert "Multiple pre-existing conditions" in result.factors
        assert result.location_exposure.cities == ["Delhi"]
        assert set(result.health_conditions) == {"respiratory", "cardiovascular", "diabetes", "immune"}

    def test_healthy_adult_is_low(self):
        result = score_vulnerability(_answers())
        assert result.score == 0
        assert result.level is VulnerabilityLevel.LOW
        assert result.factors == []
        assert result.health_conditions == []

    def test_pregnant_current_smoker(self):
        result = score_vulnerability(
            _answers(pregnancy_status=PregnancyStatus.PREGNANT, smoking_status=SmokingStatus.CURRENT)
        )
        assert result.score == 4
        assert result.level is VulnerabilityLevel.MODERATE
        assert result.factors == ["Pregnancy/breastfeeding status", "Current smoking"]

    def test_unknown_answer_raises(self):
        with pytest.raises(InvalidEnumError):
            QuestionnaireAnswers.from_raw(
                age_group="Ancient",
                health_condition="None - I'm generally healthy",
                pregnancy_status="No",
                smoking_status="Never smoked",
            )

    def test_keyword_answers_accepted(self):
        answers = QuestionnaireAnswers.from_raw(
            age_group="51-65",
            health_condition="I have asthma, a respiratory condition",
            pregnancy_status="yes, breastfeeding",
            smoking_status="former",
        )
        assert answers.health_condition is HealthCondition.RESPIRATORY
        assert answers.pregnancy_status is PregnancyStatus.BREASTFEEDING
        assert answers.smoking_status is SmokingStatus.FORMER
        assert score_vulnerability(answers).score == 1 + 2 + 2 + 1


class TestVulnerabilityLevel:
    @pytest.mark.parametrize(
        "score,level",
        [
            (0, VulnerabilityLevel.LOW),
            (2, VulnerabilityLevel.LOW),
            (3, VulnerabilityLevel.MODERATE),
            (4, VulnerabilityLevel.MODERATE),
            (5, VulnerabilityLevel.HIGH),
            (6, VulnerabilityLevel.HIGH),
            (7, VulnerabilityLevel.CRITICAL),
            (15, VulnerabilityLevel.CRITICAL),
        ],
    )
    def test_thresholds(self, score, level):
        assert vulnerability_level(score) is level


class TestLocationExposure:
    def test_each_city_scores_one(self):
        result = analyze_location_exposure("Trips to Kanpur and Lucknow, sometimes Kolkata")
        assert result.score == 3
        assert result.cities == ["Kanpur", "Lucknow", "Kolkata"]

    def test_duration_keywords_count_once(self):
        """'years' and 'months' both present: only the first rule scores."""
        result = analyze_location_exposure("lived here for years, visited for months")
        assert result.score == 2
        assert result.factors == ["Long-term exposure (years)"]

    def test_frequency_keywords(self):
        result = analyze_location_exposure("I go there weekly")
        assert result.score == 1
        assert result.factors == ["Frequent exposure (weekly/monthly)"]

    def test_case_insensitive(self):
        result = analyze_location_exposure("DELHI DAILY")
        assert result.score == 3

    def test_empty_text(self):
        result = analyze_location_exposure("")
        assert result.score == 0
        assert result.factors == []


class TestBuildProfile:
    def test_profile_fields(self):
        answers = _answers(age_group=AgeGroup.OVER_65, health_condition=HealthCondition.HEART)
        assessment = score_vulnerability(answers)
        now = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        profile = build_profile(assessment, answers, now=now)

        assert profile.age_group == "Over 65"
        assert profile.health_conditions == ["cardiovascular"]
        assert profile.vulnerability_level is VulnerabilityLevel.MODERATE
        assert profile.created_at == profile.last_updated == now.isoformat()
        assert profile.id

    def test_ids_are_unique(self):
        answers = _answers()
        assessment = score_vulnerability(answers)
        assert build_profile(assessment, answers).id != build_profile(assessment, answers).id


class TestQuestions:
    def test_option_lists_match_enums(self):
        by_id = {q["id"]: q for q in QUESTIONS}
        assert by_id["age_group"]["options"] == [a.value for a in AgeGroup]
        assert by_id["location_exposure"]["type"] == "textarea"
