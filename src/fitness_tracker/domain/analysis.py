"""Models for AI analysis results."""

from pydantic import BaseModel, ConfigDict, Field


class FoodAnalysis(BaseModel):
    """Structured nutrition estimate for a food photo."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    calories: float = Field(ge=0, allow_inf_nan=False, strict=True)
    protein_g: float = Field(alias="protein", ge=0, allow_inf_nan=False, strict=True)
    carbs_g: float = Field(alias="carbs", ge=0, allow_inf_nan=False, strict=True)
    fat_g: float = Field(alias="fat", ge=0, allow_inf_nan=False, strict=True)


class ExerciseAnalysis(BaseModel):
    """Structured estimate extracted from a workout description."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    activity: str = Field(min_length=1)
    duration_minutes: float = Field(
        alias="durationMinutes", ge=0, allow_inf_nan=False, strict=True
    )
    calories_burned: float = Field(
        alias="caloriesBurned", ge=0, allow_inf_nan=False, strict=True
    )
