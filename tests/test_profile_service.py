"""Tests for onboarding and calorie targets."""

import pytest

from fitness_tracker.domain.profile import Goal
from fitness_tracker.errors import ValidationError
from fitness_tracker.services.profile import (
    calculate_calorie_target,
    complete_onboarding,
)


@pytest.mark.parametrize(
    ("goal", "expected"),
    [(Goal.MAINTAIN, 2267), (Goal.LOSE, 1767), (Goal.GAIN, 2767)],
)
def test_calorie_target_by_goal(goal: Goal, expected: int) -> None:
    assert calculate_calorie_target(70, 175, 30, goal) == expected


def test_calorie_target_rounds_half_up() -> None:
    # bmr = 10 * 60.4 + 6.25 * 160 - 5 * 25 + 5 = 1484, tdee = 2040.5
    assert calculate_calorie_target(60.4, 160, 25, Goal.MAINTAIN) == 2041


def test_complete_onboarding_builds_profile() -> None:
    profile = complete_onboarding(
        name="  Sam ", weight_kg=60, height_cm=160, age_years=25, goal="lose"
    )

    assert profile.name == "Sam"
    assert profile.goal is Goal.LOSE
    assert profile.calorie_target == 1535


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"name": ""}, "name"),
        ({"name": None}, "name"),
        ({"weight_kg": 0}, "weight_kg"),
        ({"height_cm": -170}, "height_cm"),
        ({"age_years": None}, "age_years"),
        ({"age_years": 30.5}, "age_years"),
        ({"age_years": True}, "age_years"),
        ({"weight_kg": True}, "weight_kg"),
        ({"height_cm": "160"}, "height_cm"),
        ({"goal": None}, "goal"),
        ({"goal": "bulk"}, "goal"),
    ],
)
def test_complete_onboarding_rejects_invalid_fields(
    overrides: dict[str, object], field: str
) -> None:
    values: dict[str, object] = {
        "name": "Sam",
        "weight_kg": 60,
        "height_cm": 160,
        "age_years": 25,
        "goal": "maintain",
    }
    values.update(overrides)

    with pytest.raises(ValidationError) as excinfo:
        complete_onboarding(**values)

    assert field in excinfo.value.errors
