"""Append-only store for the session's food and exercise entries."""

import time
from dataclasses import dataclass, field
from uuid import uuid4

from fitness_tracker.domain.analysis import ExerciseAnalysis, FoodAnalysis
from fitness_tracker.domain.entries import ExerciseEntry, FoodEntry, LogEntry


@dataclass
class EntryStore:
    """In-memory entry log for a single session.

    Entries are kept in one insertion-ordered sequence so the combined feed
    can break timestamp ties by insertion order.
    """

    _entries: list[LogEntry] = field(default_factory=list)

    def add_food(self, entry: FoodEntry) -> None:
        """Append a food entry."""
        self._entries.append(LogEntry.of_food(entry))

    def add_exercise(self, entry: ExerciseEntry) -> None:
        """Append an exercise entry."""
        self._entries.append(LogEntry.of_exercise(entry))

    @property
    def food_entries(self) -> tuple[FoodEntry, ...]:
        return tuple(entry.food for entry in self._entries if entry.food is not None)

    @property
    def exercise_entries(self) -> tuple[ExerciseEntry, ...]:
        return tuple(
            entry.exercise for entry in self._entries if entry.exercise is not None
        )

    def list_combined_sorted(self) -> list[LogEntry]:
        """Return all entries, newest first; equal timestamps keep insertion order."""
        return sorted(self._entries, key=lambda entry: entry.timestamp, reverse=True)

    def __len__(self) -> int:
        return len(self._entries)


def new_food_entry(
    analysis: FoodAnalysis, image_ref: str | None = None, timestamp: int | None = None
) -> FoodEntry:
    """Build a food entry from an analysis result with a fresh id."""
    return FoodEntry(
        id=uuid4().hex,
        timestamp=_now_millis() if timestamp is None else timestamp,
        name=analysis.name,
        calories=analysis.calories,
        protein_g=analysis.protein_g,
        carbs_g=analysis.carbs_g,
        fat_g=analysis.fat_g,
        image_ref=image_ref,
    )


def new_exercise_entry(
    analysis: ExerciseAnalysis, timestamp: int | None = None
) -> ExerciseEntry:
    """Build an exercise entry from an analysis result with a fresh id."""
    return ExerciseEntry(
        id=uuid4().hex,
        timestamp=_now_millis() if timestamp is None else timestamp,
        activity=analysis.activity,
        duration_minutes=analysis.duration_minutes,
        calories_burned=analysis.calories_burned,
    )


def _now_millis() -> int:
    return time.time_ns() // 1_000_000
