"""Tests for mood insights."""
import pytest

from mindtrack.platform import WellnessPlatform
from mindtrack.shared.config import DeploymentConfig
from mindtrack.shared.models import ErrorCode, MoodTrend

ALICE = "wallet_1"
BOB = "wallet_2"


@pytest.fixture
def platform():
    return WellnessPlatform(DeploymentConfig(
        privileged_principal="deployer",
        pii_salt="test_salt_that_is_at_least_32_characters_long",
    ))


def log_entry(platform, caller=ALICE, mood=5, stress=5, anxiety=5, sleep=5, activity=5):
    return platform.mood_entries.log_mood_entry(
        caller,
        mood_score=mood,
        energy_level=5,
        stress_level=stress,
        anxiety_level=anxiety,
        sleep_quality=sleep,
        social_interaction=5,
        physical_activity=activity,
    ).value


class TestGenerateInsight:

    def test_returns_insight_id(self, platform):
        ids = [log_entry(platform) for _ in range(2)]
        result = platform.insights.generate_mood_insight(ALICE, ids)
        assert result.ok is True
        assert result.value == 0
        assert platform.insights.get_insight_counter() == 1

    def test_averages_and_score(self, platform):
        ids = [log_entry(platform, mood=4), log_entry(platform, mood=6)]
        insight_id = platform.insights.generate_mood_insight(ALICE, ids).value

        insight = platform.insights.get_mood_insight(ALICE, insight_id)
        assert insight.average_mood == 5
        assert insight.entry_ids == tuple(ids)
        assert 0 <= insight.wellness_score <= 100

    def test_all_neutral_scores_give_fifty(self, platform):
        insight_id = platform.insights.generate_mood_insight(ALICE, [log_entry(platform)]).value
        assert platform.insights.get_mood_insight(ALICE, insight_id).wellness_score == 50

    def test_improving_trend(self, platform):
        ids = [log_entry(platform, mood=m) for m in (2, 3, 7, 8)]
        insight_id = platform.insights.generate_mood_insight(ALICE, ids).value
        assert platform.insights.get_mood_insight(ALICE, insight_id).trend is MoodTrend.IMPROVING

    def test_declining_trend_ignores_request_order(self, platform):
        ids = [log_entry(platform, mood=m) for m in (8, 7, 3, 2)]
        insight_id = platform.insights.generate_mood_insight(ALICE, list(reversed(ids))).value
        insight = platform.insights.get_mood_insight(ALICE, insight_id)
        assert insight.trend is MoodTrend.DECLINING
        assert "therapy session" in insight.recommendation

    def test_single_entry_is_stable(self, platform):
        insight_id = platform.insights.generate_mood_insight(ALICE, [log_entry(platform)]).value
        assert platform.insights.get_mood_insight(ALICE, insight_id).trend is MoodTrend.STABLE

    def test_high_stress_recommendation(self, platform):
        insight_id = platform.insights.generate_mood_insight(ALICE, [log_entry(platform, stress=9)]).value
        assert "relaxation" in platform.insights.get_mood_insight(ALICE, insight_id).recommendation

    def test_poor_sleep_recommendation(self, platform):
        insight_id = platform.insights.generate_mood_insight(ALICE, [log_entry(platform, sleep=2)]).value
        assert "sleep" in platform.insights.get_mood_insight(ALICE, insight_id).recommendation


class TestInsightIsolation:

    def test_foreign_entry_is_not_found(self, platform):
        foreign = log_entry(platform, caller=BOB)
        result = platform.insights.generate_mood_insight(ALICE, [foreign])
        assert result.error == ErrorCode.NOT_FOUND
        assert platform.insights.get_insight_counter() == 0

    def test_unknown_entry_is_not_found(self, platform):
        assert platform.insights.generate_mood_insight(ALICE, [42]).error == ErrorCode.NOT_FOUND

    def test_empty_request_invalid(self, platform):
        assert platform.insights.generate_mood_insight(ALICE, []).error == ErrorCode.INVALID_INPUT

    def test_other_user_cannot_read_insight(self, platform):
        insight_id = platform.insights.generate_mood_insight(ALICE, [log_entry(platform)]).value
        assert platform.insights.get_mood_insight(BOB, insight_id) is None
