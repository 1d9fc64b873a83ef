"""Domain models for the user profile."""

from dataclasses import dataclass
from enum import Enum


class Goal(str, Enum):
    """Weight goal selected during onboarding."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class Profile:
    """Static user attributes and the derived daily calorie target."""

    name: str
    weight_kg: float
    height_cm: float
    age_years: int
    goal: Goal
    calorie_target: int
