"""Domain models for logged food and exercise entries."""

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Discriminant for log entries."""

    FOOD = "food"
    EXERCISE = "exercise"


@dataclass(frozen=True)
class FoodEntry:
    """A logged meal with estimated macros."""

    id: str
    timestamp: int
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    image_ref: str | None = None


@dataclass(frozen=True)
class ExerciseEntry:
    """A logged workout with estimated energy expenditure."""

    id: str
    timestamp: int
    activity: str
    duration_minutes: float
    calories_burned: float


@dataclass(frozen=True)
class LogEntry:
    """Tagged entry used for the combined activity feed.

    Exactly one of ``food`` or ``exercise`` is set, matching ``kind``.
    """

    kind: EntryKind
    food: FoodEntry | None = None
    exercise: ExerciseEntry | None = None

    @classmethod
    def of_food(cls, entry: FoodEntry) -> "LogEntry":
        return cls(kind=EntryKind.FOOD, food=entry)

    @classmethod
    def of_exercise(cls, entry: ExerciseEntry) -> "LogEntry":
        return cls(kind=EntryKind.EXERCISE, exercise=entry)

    @property
    def timestamp(self) -> int:
        if self.kind is EntryKind.FOOD:
            return self.food.timestamp  # type: ignore[union-attr]
        return self.exercise.timestamp  # type: ignore[union-attr]
