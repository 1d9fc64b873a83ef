"""AI analysis service for food photos, workouts and daily insights."""

import base64
import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from fitness_tracker.domain.analysis import ExerciseAnalysis, FoodAnalysis
from fitness_tracker.domain.stats import DailyStats
from fitness_tracker.errors import AnalysisError

logger = logging.getLogger(__name__)

EMPTY_INSIGHT_FALLBACK = "Keep pushing towards your goals!"
FAILED_INSIGHT_FALLBACK = "Stay consistent and healthy!"

FOOD_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {
            "type": "string",
            "description": "Short descriptive name of the food",
        },
        "calories": {"type": "number", "description": "Estimated calories"},
        "protein": {"type": "number", "description": "Estimated protein in grams"},
        "carbs": {
            "type": "number",
            "description": "Estimated carbohydrates in grams",
        },
        "fat": {"type": "number", "description": "Estimated fat in grams"},
    },
    "required": ["name", "calories", "protein", "carbs", "fat"],
    "additionalProperties": False,
}

EXERCISE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "activity": {
            "type": "string",
            "description": "Standardized name of the activity",
        },
        "durationMinutes": {"type": "number", "description": "Duration in minutes"},
        "caloriesBurned": {
            "type": "number",
            "description": "Estimated calories burned based on weight and duration",
        },
    },
    "required": ["activity", "durationMinutes", "caloriesBurned"],
    "additionalProperties": False,
}

FOOD_PROMPT = (
    "Analyze this image. Identify the main food item and estimate its "
    "nutritional content (calories, protein, carbs, fat). Be realistic."
)

_CODE_FENCE_START = re.compile(r"^```(?:json)?\s*", flags=re.IGNORECASE)
_CODE_FENCE_END = re.compile(r"\s*```$")


class CompletionClient(Protocol):
    """Interface for a generative text/image completion backend."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        image_data_url: str | None = None,
        schema: dict[str, object] | None = None,
        schema_name: str | None = None,
    ) -> str:
        """Return the raw text output for the prompt."""


@dataclass
class AnalysisService:
    """Service that builds analysis prompts and validates model output."""

    client: CompletionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze_food_image(self, image_bytes: bytes) -> FoodAnalysis:
        """Estimate nutrition for the main food item in a photo."""
        try:
            raw = await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=FOOD_PROMPT,
                image_data_url=to_data_url(image_bytes),
                schema=FOOD_SCHEMA,
                schema_name="food_analysis",
            )
            return FoodAnalysis.model_validate(parse_json_output(raw))
        except Exception as exc:
            logger.exception("Food analysis failed")
            raise AnalysisError("food") from exc

    async def analyze_exercise_text(
        self, description: str, user_weight_kg: float
    ) -> ExerciseAnalysis:
        """Extract activity, duration and weight-adjusted calories burned."""
        prompt = (
            f"User weight: {user_weight_kg:g}kg. "
            f'User input: "{description}". '
            "Extract the activity, duration, and estimate calories burned."
        )
        try:
            raw = await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=EXERCISE_SCHEMA,
                schema_name="exercise_analysis",
            )
            return ExerciseAnalysis.model_validate(parse_json_output(raw))
        except Exception as exc:
            logger.exception("Exercise analysis failed")
            raise AnalysisError("exercise") from exc

    async def get_daily_insight(self, stats: DailyStats, goal: str) -> str:
        """Return a one-sentence tip; never raises."""
        prompt = (
            f"Data: Consumed {stats.calories_consumed:g}kcal, "
            f"Burned {stats.calories_burned:g}kcal. "
            f"Macros: P:{stats.protein_g:g}g, C:{stats.carbs_g:g}g, "
            f"F:{stats.fat_g:g}g. User Goal: {goal}. "
            "Give a 1-sentence motivational insight or tip based on today's "
            "performance. Keep it friendly and concise."
        )
        try:
            text = await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
            )
        except Exception:
            logger.warning("Daily insight failed, using fallback", exc_info=True)
            return FAILED_INSIGHT_FALLBACK
        return text.strip() if text and text.strip() else EMPTY_INSIGHT_FALLBACK


def parse_json_output(text: str) -> object:
    """Parse model output as JSON, dropping a surrounding Markdown code fence."""
    cleaned = _CODE_FENCE_START.sub("", text.strip())
    cleaned = _CODE_FENCE_END.sub("", cleaned)
    return json.loads(cleaned)


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
