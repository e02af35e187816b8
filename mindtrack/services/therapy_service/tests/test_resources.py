"""Tests for the therapeutic resource catalogue."""
import pytest

from mindtrack.platform import WellnessPlatform
from mindtrack.shared.config import DeploymentConfig
from mindtrack.shared.models import ErrorCode

DEPLOYER = "deployer"
ALICE = "wallet_1"


@pytest.fixture
def platform():
    return WellnessPlatform(DeploymentConfig(
        privileged_principal=DEPLOYER,
        pii_salt="test_salt_that_is_at_least_32_characters_long",
    ))


def add(platform, caller=DEPLOYER, category="anxiety", rating=8):
    return platform.resources.add_therapeutic_resource(
        caller,
        category,
        "Deep Breathing",
        "Breathing technique for anxiety",
        "breathing",
        rating,
        "easy",
        ["anxiety", "stress"],
    )


class TestAddResource:

    def test_privileged_principal_can_add(self, platform):
        result = add(platform)
        assert result.ok is True
        assert result.value == 0

    def test_other_caller_not_authorized(self, platform):
        result = add(platform, caller=ALICE)
        assert result.error == ErrorCode.NOT_AUTHORIZED
        assert platform.resources.get_resource_counter() == 0

    def test_authorization_checked_before_validation(self, platform):
        assert add(platform, caller=ALICE, rating=99).error == ErrorCode.NOT_AUTHORIZED

    def test_invalid_rating_rejected(self, platform):
        assert add(platform, rating=11).error == ErrorCode.INVALID_INPUT

    def test_ids_shared_across_categories(self, platform):
        assert add(platform, category="anxiety").value == 0
        assert add(platform, category="sleep").value == 1
        assert platform.resources.get_resource_counter() == 2


class TestReadResource:

    def test_public_read_by_category_and_id(self, platform):
        resource_id = add(platform, category="sleep").value
        resource = platform.resources.get_therapeutic_resource("sleep", resource_id)
        assert resource.name == "Deep Breathing"
        assert resource.applies_to == ("anxiety", "stress")
        assert resource.added_by == DEPLOYER

    def test_wrong_category_is_none(self, platform):
        resource_id = add(platform, category="sleep").value
        assert platform.resources.get_therapeutic_resource("anxiety", resource_id) is None
