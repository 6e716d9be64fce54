"""Tests for the Profile entity."""

import pytest

from nanobio.domain.common.exceptions import InvariantViolationError, ValidationError
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progression.entities.profile import MAX_FIELD_LENGTH, Profile, level_for_xp


class TestLevelForXp:
    @pytest.mark.parametrize(
        ("xp", "level"), [(0, 1), (499, 1), (500, 2), (999, 2), (1000, 3), (2600, 6)]
    )
    def test_steps(self, xp: int, level: int) -> None:
        assert level_for_xp(xp) == level


class TestProfileAward:
    def test_award_adds_experience(self) -> None:
        profile = Profile(id=UserId("u"), xp=120, level=1, streak=4)
        awarded = profile.awarded(50)

        assert awarded.xp == 170
        assert awarded.level == 1
        assert awarded.streak == 4
        assert profile.xp == 120

    def test_award_crossing_threshold_raises_level(self) -> None:
        awarded = Profile(id=UserId("u"), xp=480).awarded(50)
        assert (awarded.xp, awarded.level) == (530, 2)

    def test_award_never_lowers_level(self) -> None:
        awarded = Profile(id=UserId("u"), xp=0, level=7).awarded(50)
        assert awarded.level == 7

    def test_zero_award_is_allowed(self) -> None:
        assert Profile(id=UserId("u"), xp=10).awarded(0).xp == 10

    def test_negative_award_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Profile(id=UserId("u")).awarded(-1)


class TestProfileInvariants:
    def test_negative_xp(self) -> None:
        with pytest.raises(InvariantViolationError):
            Profile(id=UserId("u"), xp=-5)

    def test_level_below_one(self) -> None:
        with pytest.raises(InvariantViolationError):
            Profile(id=UserId("u"), level=0)


class TestProfileDetails:
    def test_update_details_strips_and_blanks(self) -> None:
        profile = Profile.create(UserId("u"), full_name="Ada")
        profile.update_details(full_name="  Ada Lovelace ", institution="", role=None)

        assert profile.full_name == "Ada Lovelace"
        assert profile.institution is None
        assert profile.role is None

    def test_update_details_too_long(self) -> None:
        profile = Profile.create(UserId("u"))
        with pytest.raises(ValidationError):
            profile.update_details(role="x" * (MAX_FIELD_LENGTH + 1))
