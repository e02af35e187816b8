"""Tests for payload validators."""
import pytest

from mindtrack.shared.models import InvalidInputError, RiskLabel
from mindtrack.shared.validation import (
    LIMITS,
    MOOD_SCORE_FIELDS,
    require_items,
    require_length,
    require_range,
    validate_assessment,
    validate_contribution,
    validate_conversation,
    validate_crisis_plan,
    validate_goal_progress,
    validate_insight_request,
    validate_mood_entry,
    validate_resource,
    validate_risk_label,
    validate_session_end,
    validate_session_start,
    validate_wellness_goal,
)


def valid_scores(**overrides):
    scores = dict.fromkeys(MOOD_SCORE_FIELDS, 5)
    scores.update(overrides)
    return scores


class TestPrimitives:

    def test_range_bounds_are_inclusive(self):
        require_range("x", 0, 0, 10)
        require_range("x", 10, 0, 10)

    @pytest.mark.parametrize("value", [-1, 11])
    def test_range_rejects_outside(self, value):
        with pytest.raises(InvalidInputError) as exc:
            require_range("x", value, 0, 10)
        assert exc.value.field == "x"

    @pytest.mark.parametrize("value", [True, 5.0, "5", None])
    def test_range_rejects_non_integers(self, value):
        with pytest.raises(InvalidInputError):
            require_range("x", value, 0, 10)

    def test_length(self):
        require_length("s", "abc", 3)
        with pytest.raises(InvalidInputError):
            require_length("s", "abcd", 3)
        with pytest.raises(InvalidInputError):
            require_length("s", "", 3, min_length=1)
        with pytest.raises(InvalidInputError):
            require_length("s", 42, 3)

    def test_items(self):
        require_items("l", ["a", "b"], 2, 5)
        require_items("l", (), 2, 5)
        with pytest.raises(InvalidInputError):
            require_items("l", ["a", "b", "c"], 2, 5)
        with pytest.raises(InvalidInputError):
            require_items("l", ["toolong"], 2, 5)
        with pytest.raises(InvalidInputError):
            require_items("l", "ab", 2, 5)
        with pytest.raises(InvalidInputError):
            require_items("l", [""], 2, 5)


class TestMoodEntry:

    def test_valid_entry(self):
        validate_mood_entry(valid_scores(), "Feeling good", ["work-stress"], ["exercise"], [])

    @pytest.mark.parametrize("field", MOOD_SCORE_FIELDS)
    @pytest.mark.parametrize("value", [-1, 11])
    def test_each_score_checked(self, field, value):
        with pytest.raises(InvalidInputError) as exc:
            validate_mood_entry(valid_scores(**{field: value}), "", [], [], [])
        assert exc.value.field == field

    @pytest.mark.parametrize("value", [0, 10])
    def test_score_extremes_accepted(self, value):
        validate_mood_entry(dict.fromkeys(MOOD_SCORE_FIELDS, value), "", [], [], [])

    def test_missing_score_rejected(self):
        scores = valid_scores()
        del scores["sleep_quality"]
        with pytest.raises(InvalidInputError):
            validate_mood_entry(scores, "", [], [], [])

    def test_notes_too_long(self):
        with pytest.raises(InvalidInputError):
            validate_mood_entry(valid_scores(), "x" * (LIMITS.NOTES_MAX + 1), [], [], [])

    def test_too_many_medications(self):
        meds = ["med"] * (LIMITS.MEDICATIONS_MAX_ITEMS + 1)
        with pytest.raises(InvalidInputError):
            validate_mood_entry(valid_scores(), "", [], [], meds)


class TestInsightRequest:

    def test_valid(self):
        validate_insight_request([0, 1, 2])

    @pytest.mark.parametrize("entry_ids", [[], [1, 1], "12", [0.5]])
    def test_invalid(self, entry_ids):
        with pytest.raises(InvalidInputError):
            validate_insight_request(entry_ids)

    def test_too_many(self):
        with pytest.raises(InvalidInputError):
            validate_insight_request(list(range(LIMITS.INSIGHT_MAX_ENTRIES + 1)))


class TestWellnessGoal:

    def test_valid_goal(self):
        validate_wellness_goal("daily-meditation", 30, 1000, [7, 14, 21])

    def test_empty_name(self):
        with pytest.raises(InvalidInputError):
            validate_wellness_goal("", 30, 1000, [])

    def test_zero_target(self):
        with pytest.raises(InvalidInputError):
            validate_wellness_goal("goal", 0, 1000, [])

    def test_negative_date(self):
        with pytest.raises(InvalidInputError):
            validate_wellness_goal("goal", 10, -1, [])

    def test_milestones_must_ascend(self):
        with pytest.raises(InvalidInputError):
            validate_wellness_goal("goal", 30, 1000, [14, 7])

    def test_milestone_beyond_target(self):
        with pytest.raises(InvalidInputError):
            validate_wellness_goal("goal", 10, 1000, [20])

    @pytest.mark.parametrize("progress", [0, 50, 100])
    def test_progress_in_range(self, progress):
        validate_goal_progress(progress)

    @pytest.mark.parametrize("progress", [-1, 101])
    def test_progress_out_of_range(self, progress):
        with pytest.raises(InvalidInputError):
            validate_goal_progress(progress)


class TestCrisisPlan:

    def test_valid(self):
        validate_crisis_plan(["emergency-contact-1"], ["crisis-hotline"], "My safety plan", ["therapist"])

    def test_too_many_contacts(self):
        with pytest.raises(InvalidInputError):
            validate_crisis_plan(["c"] * 6, [], "", [])

    def test_plan_text_too_long(self):
        with pytest.raises(InvalidInputError):
            validate_crisis_plan([], [], "x" * (LIMITS.PLAN_TEXT_MAX + 1), [])

    @pytest.mark.parametrize("label", ["low", "medium", "high"])
    def test_risk_labels(self, label):
        assert validate_risk_label(label) == RiskLabel(label)

    @pytest.mark.parametrize("label", ["HIGH", "critical", "", None])
    def test_unknown_risk_label(self, label):
        with pytest.raises(InvalidInputError):
            validate_risk_label(label)


class TestTherapy:

    def test_session_start(self):
        validate_session_start("anxiety-management", 6, "CBT")

    def test_session_start_mood_out_of_range(self):
        with pytest.raises(InvalidInputError):
            validate_session_start("depression-support", 15, "DBT")

    def test_session_end(self):
        validate_session_end(7, ["anxiety", "breathing"], "notes", "homework", 4)

    @pytest.mark.parametrize("rating", [0, 6])
    def test_session_end_rating_out_of_range(self, rating):
        with pytest.raises(InvalidInputError):
            validate_session_end(7, [], "", "", rating)

    def test_conversation_requires_input(self):
        with pytest.raises(InvalidInputError):
            validate_conversation("", "response", "", "", "")

    def test_conversation_sentiment_too_long(self):
        with pytest.raises(InvalidInputError):
            validate_conversation("hi", "", "", "", "x" * (LIMITS.SENTIMENT_MAX + 1))


class TestAssessment:

    def test_valid(self):
        validate_assessment("PHQ-9", 9, 9, 25)

    def test_answered_exceeds_total(self):
        with pytest.raises(InvalidInputError) as exc:
            validate_assessment("PHQ-9", 10, 9, 5)
        assert exc.value.field == "questions_answered"

    def test_zero_total(self):
        with pytest.raises(InvalidInputError):
            validate_assessment("PHQ-9", 0, 0, 0)

    def test_raw_score_above_instrument_maximum(self):
        with pytest.raises(InvalidInputError):
            validate_assessment("GAD-7", 7, 7, 22)

    def test_partial_answers_allowed(self):
        validate_assessment("Beck-Depression", 15, 21, 30)


class TestResourcesAndResearch:

    def test_resource_valid(self):
        validate_resource("meditation", "Guided Meditation", "Audio", "mindfulness", 8, "all-levels", ["anxiety"])

    def test_resource_rating_out_of_range(self):
        with pytest.raises(InvalidInputError):
            validate_resource("c", "n", "", "", 11, "", [])

    def test_contribution(self):
        validate_contribution(7, "2024-Q1")
        with pytest.raises(InvalidInputError):
            validate_contribution(11, "2024-Q1")
        with pytest.raises(InvalidInputError):
            validate_contribution(5, "")
