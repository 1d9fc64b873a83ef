"""Domain models for statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyStats:
    """Daily totals derived from the logged entries."""

    calories_consumed: float
    calories_burned: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class MacroShare:
    """Single macro value for charting."""

    name: str
    grams: float
