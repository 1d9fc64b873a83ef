"""Pydantic models for API request payloads."""

from typing import Any, Literal

from pydantic import BaseModel


class OnboardingRequest(BaseModel):
    """Onboarding form payload; checked by the profile service, not here."""

    name: Any = None
    weight_kg: Any = None
    height_cm: Any = None
    age_years: Any = None
    goal: Any = None


class NavigateRequest(BaseModel):
    """Navigation action from the dashboard or a logger view."""

    action: Literal["start_food_log", "start_exercise_log", "back"]


class FoodImageRequest(BaseModel):
    """Selected food photo, as base64 or a base64 data URL."""

    image_base64: str


class ExerciseTextRequest(BaseModel):
    """Free-text workout description."""

    text: str
