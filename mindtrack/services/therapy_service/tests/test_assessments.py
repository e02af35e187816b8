"""Tests for assessment scoring and escalation."""
import pytest

from mindtrack.platform import WellnessPlatform
from mindtrack.shared.config import DeploymentConfig
from mindtrack.shared.models import ErrorCode, InterventionLevel

ALICE = "wallet_1"
BOB = "wallet_2"


@pytest.fixture
def platform():
    return WellnessPlatform(DeploymentConfig(
        privileged_principal="deployer",
        pii_salt="test_salt_that_is_at_least_32_characters_long",
    ))


class TestConductAssessment:

    def test_severe_phq9_returns_high(self, platform):
        result = platform.assessments.conduct_assessment(ALICE, "PHQ-9", 9, 9, 25)
        assert result.ok is True
        assert result.value is InterventionLevel.HIGH
        assert int(result.value) == 3

    def test_severe_phq9_records_intervention(self, platform):
        platform.assessments.conduct_assessment(ALICE, "PHQ-9", 9, 9, 25)
        intervention = platform.interventions.get_crisis_intervention(ALICE, 3)
        assert intervention is not None
        assert intervention.trigger_reason == "assessment:PHQ-9"

    def test_gad7_returns_assessment_id(self, platform):
        result = platform.assessments.conduct_assessment(ALICE, "GAD-7", 7, 7, 20)
        assert result.ok is True
        assert result.value == 0
        assert not isinstance(result.value, InterventionLevel)
        assert platform.interventions.get_crisis_intervention(ALICE, 3) is None

    def test_stored_with_level(self, platform):
        assessment_id = platform.assessments.conduct_assessment(ALICE, "GAD-7", 7, 7, 20).value
        assessment = platform.assessments.get_assessment(ALICE, assessment_id)
        assert assessment.intervention_level is InterventionLevel.MEDIUM
        assert assessment.normalized_score == pytest.approx(20 / 27)

    def test_escalated_assessment_still_consumes_id(self, platform):
        platform.assessments.conduct_assessment(ALICE, "PHQ-9", 9, 9, 25)
        assert platform.assessments.get_assessment_counter() == 1
        assert platform.assessments.get_assessment(ALICE, 0).intervention_level is InterventionLevel.HIGH

    @pytest.mark.parametrize("answered,total,raw", [
        (10, 9, 5),    # more answered than asked
        (9, 9, 28),    # above 9 x 3
        (0, 0, 0),     # no questions
        (9, 9, -1),
    ])
    def test_invalid_submissions(self, platform, answered, total, raw):
        result = platform.assessments.conduct_assessment(ALICE, "PHQ-9", answered, total, raw)
        assert result.error == ErrorCode.INVALID_INPUT
        assert platform.assessments.get_assessment_counter() == 0

    def test_other_user_cannot_read(self, platform):
        assessment_id = platform.assessments.conduct_assessment(ALICE, "GAD-7", 7, 7, 5).value
        assert platform.assessments.get_assessment(BOB, assessment_id) is None
