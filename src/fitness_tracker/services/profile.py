"""Onboarding and calorie target calculation."""

import math

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from fitness_tracker.domain.profile import Goal, Profile
from fitness_tracker.errors import ValidationError

ACTIVITY_FACTOR = 1.375
GOAL_ADJUSTMENT_KCAL = 500

_FIELD_MESSAGES = {
    "name": "Enter your name.",
    "weight_kg": "Weight must be a positive number.",
    "height_cm": "Height must be a positive number.",
    "age_years": "Age must be a positive whole number.",
    "goal": "Goal must be one of: lose, maintain, gain.",
}


class OnboardingForm(BaseModel):
    """Raw onboarding input."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    weight_kg: float = Field(gt=0, allow_inf_nan=False, strict=True)
    height_cm: float = Field(gt=0, allow_inf_nan=False, strict=True)
    age_years: int = Field(gt=0, strict=True)
    goal: Goal


def complete_onboarding(
    name: object,
    weight_kg: object,
    height_cm: object,
    age_years: object,
    goal: object,
) -> Profile:
    """Validate onboarding input and build the session profile.

    Raises ValidationError with a per-field message mapping when any field is
    missing or malformed; no partial profile is ever returned.
    """
    try:
        form = OnboardingForm.model_validate(
            {
                "name": name,
                "weight_kg": weight_kg,
                "height_cm": height_cm,
                "age_years": age_years,
                "goal": goal,
            }
        )
    except PydanticValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "form"
            errors.setdefault(field, _FIELD_MESSAGES.get(field, error["msg"]))
        raise ValidationError(errors) from exc

    return Profile(
        name=form.name,
        weight_kg=form.weight_kg,
        height_cm=form.height_cm,
        age_years=form.age_years,
        goal=form.goal,
        calorie_target=calculate_calorie_target(
            form.weight_kg, form.height_cm, form.age_years, form.goal
        ),
    )


def calculate_calorie_target(
    weight_kg: float, height_cm: float, age_years: int, goal: Goal
) -> int:
    """Return the daily calorie target (Mifflin-St Jeor, lightly active)."""
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age_years + 5
    tdee = bmr * ACTIVITY_FACTOR
    if goal is Goal.LOSE:
        tdee -= GOAL_ADJUSTMENT_KCAL
    elif goal is Goal.GAIN:
        tdee += GOAL_ADJUSTMENT_KCAL
    return _round_half_up(tdee)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
