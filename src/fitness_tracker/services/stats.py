"""Daily statistics derived from the entry log."""

from collections.abc import Iterable

from fitness_tracker.domain.entries import ExerciseEntry, FoodEntry
from fitness_tracker.domain.stats import DailyStats, MacroShare

EMPTY_STATS = DailyStats(
    calories_consumed=0, calories_burned=0, protein_g=0, carbs_g=0, fat_g=0
)


def compute(
    food_entries: Iterable[FoodEntry], exercise_entries: Iterable[ExerciseEntry]
) -> DailyStats:
    """Reduce the current entries into daily totals."""
    foods = list(food_entries)
    return DailyStats(
        calories_consumed=sum(entry.calories for entry in foods),
        calories_burned=sum(entry.calories_burned for entry in exercise_entries),
        protein_g=sum(entry.protein_g for entry in foods),
        carbs_g=sum(entry.carbs_g for entry in foods),
        fat_g=sum(entry.fat_g for entry in foods),
    )


def remaining_calories(calorie_target: int, stats: DailyStats) -> float:
    """Return calories left for the day; negative once over target."""
    return calorie_target - stats.calories_consumed + stats.calories_burned


def progress_fraction(calorie_target: int, stats: DailyStats) -> float:
    """Return consumed calories as a fraction of the budget, capped at 1.0."""
    budget = calorie_target + stats.calories_burned
    if budget <= 0:
        return 0.0
    return min(stats.calories_consumed / budget, 1.0)


def has_macro_data(stats: DailyStats) -> bool:
    return stats.protein_g > 0 or stats.carbs_g > 0 or stats.fat_g > 0


def macro_breakdown(stats: DailyStats) -> list[MacroShare]:
    return [
        MacroShare(name="Protein", grams=stats.protein_g),
        MacroShare(name="Carbs", grams=stats.carbs_g),
        MacroShare(name="Fat", grams=stats.fat_g),
    ]
