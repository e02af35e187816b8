"""Tests for mood entry logging and per-user isolation."""
import itertools

import pytest

from mindtrack.platform import WellnessPlatform
from mindtrack.shared.config import DeploymentConfig
from mindtrack.shared.models import ErrorCode, MoodEntry
from mindtrack.shared.validation import MOOD_SCORE_FIELDS

ALICE = "wallet_1"
BOB = "wallet_2"


@pytest.fixture
def platform():
    return WellnessPlatform(DeploymentConfig(
        privileged_principal="deployer",
        pii_salt="test_salt_that_is_at_least_32_characters_long",
    ))


def log_entry(platform, caller=ALICE, **overrides):
    scores = dict(
        mood_score=7, energy_level=6, stress_level=4, anxiety_level=3,
        sleep_quality=8, social_interaction=7, physical_activity=5,
    )
    scores.update(overrides)
    return platform.mood_entries.log_mood_entry(caller, **scores)


class TestInitialization:

    def test_counters_start_at_zero(self, platform):
        assert platform.mood_entries.get_entry_counter() == 0
        assert platform.goals.get_goal_counter() == 0
        assert platform.insights.get_insight_counter() == 0


class TestLogMoodEntry:

    def test_logs_valid_entry(self, platform):
        result = platform.mood_entries.log_mood_entry(
            ALICE, 7, 6, 4, 3, 8, 7, 5,
            notes="Feeling good today",
            triggers=["work-stress"],
            activities=["exercise", "meditation"],
            medications=[],
        )
        assert result.ok is True
        assert result.value == 0

    def test_rejects_invalid_mood_score(self, platform):
        result = log_entry(platform, mood_score=11)
        assert result.ok is False
        assert result.error == ErrorCode.INVALID_INPUT
        assert int(result.error) == 400

    @pytest.mark.parametrize("field", MOOD_SCORE_FIELDS)
    def test_rejects_any_score_out_of_range(self, platform, field):
        assert log_entry(platform, **{field: 11}).error == ErrorCode.INVALID_INPUT
        assert log_entry(platform, **{field: -1}).error == ErrorCode.INVALID_INPUT

    def test_rejection_does_not_consume_id(self, platform):
        log_entry(platform, stress_level=42)
        assert platform.mood_entries.get_entry_counter() == 0
        assert log_entry(platform).value == 0

    def test_boundary_combinations_accepted(self, platform):
        for combo in itertools.product([0, 10], repeat=3):
            result = log_entry(platform, mood_score=combo[0], sleep_quality=combo[1], physical_activity=combo[2])
            assert result.ok is True

    def test_ids_increase_by_one(self, platform):
        ids = [log_entry(platform).value for _ in range(3)]
        assert ids == [0, 1, 2]
        assert platform.mood_entries.get_entry_counter() == 3


class TestReadMoodEntry:

    def test_owner_reads_entry(self, platform):
        entry_id = log_entry(platform, notes="Test entry").value
        entry = platform.mood_entries.get_mood_entry(ALICE, entry_id)
        assert isinstance(entry, MoodEntry)
        assert entry.owner == ALICE
        assert entry.notes == "Test entry"
        assert entry.mood_score == 7

    def test_other_user_gets_none(self, platform):
        entry_id = log_entry(platform, notes="Private entry").value
        assert platform.mood_entries.get_mood_entry(BOB, entry_id) is None

    def test_unknown_id_gets_none(self, platform):
        assert platform.mood_entries.get_mood_entry(ALICE, 99) is None

    def test_lists_stored_as_tuples(self, platform):
        triggers = ["work-stress"]
        entry_id = platform.mood_entries.log_mood_entry(
            ALICE, 5, 5, 5, 5, 5, 5, 5, triggers=triggers
        ).value
        triggers.append("mutated-after-logging")
        assert platform.mood_entries.get_mood_entry(ALICE, entry_id).triggers == ("work-stress",)
