"""View coordinator: the session state machine for onboarding and logging."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from fitness_tracker.domain.entries import ExerciseEntry, FoodEntry, LogEntry
from fitness_tracker.domain.profile import Profile
from fitness_tracker.domain.stats import DailyStats
from fitness_tracker.errors import (
    AnalysisError,
    FlowBusyError,
    MissingInputError,
    NavigationError,
)
from fitness_tracker.services import profile as profile_service
from fitness_tracker.services import stats as stats_service
from fitness_tracker.services.analysis import AnalysisService, to_data_url
from fitness_tracker.services.entries import (
    EntryStore,
    new_exercise_entry,
    new_food_entry,
)

logger = logging.getLogger(__name__)

FOOD_ERROR_MESSAGE = (
    "Could not analyze food. Please try again or ensure the photo is clear."
)
EXERCISE_ERROR_MESSAGE = (
    "Could not log exercise. Try being more specific (e.g., 'Ran 5km in 30 mins')."
)
INSIGHT_PLACEHOLDER = "Analyzing your data..."
EXERCISE_EXAMPLES = (
    "Ran 5km in 25 mins",
    "30 mins yoga",
    "High intensity interval training 20m",
)


class AppView(str, Enum):
    """Screens the session can show."""

    ONBOARDING = "ONBOARDING"
    DASHBOARD = "DASHBOARD"
    FOOD_LOG = "FOOD_LOG"
    EXERCISE_LOG = "EXERCISE_LOG"


class FlowStatus(str, Enum):
    """Submission state of a logger view."""

    IDLE = "idle"
    SUBMITTING = "submitting"


@dataclass
class LoggerFlow:
    """Draft input and submission state of one logger view."""

    status: FlowStatus = FlowStatus.IDLE
    error: str | None = None
    image: bytes | None = None
    text: str = ""

    @property
    def submitting(self) -> bool:
        return self.status is FlowStatus.SUBMITTING


@dataclass
class SessionState:
    """Everything the active view renders from."""

    view: AppView = AppView.ONBOARDING
    profile: Profile | None = None
    store: EntryStore = field(default_factory=EntryStore)
    stats: DailyStats = stats_service.EMPTY_STATS
    food_flow: LoggerFlow = field(default_factory=LoggerFlow)
    exercise_flow: LoggerFlow = field(default_factory=LoggerFlow)
    insight: str = INSIGHT_PLACEHOLDER
    insight_stats: DailyStats | None = None


_TRANSITIONS: dict[tuple[AppView, str], AppView] = {
    (AppView.ONBOARDING, "onboarding_complete"): AppView.DASHBOARD,
    (AppView.DASHBOARD, "start_food_log"): AppView.FOOD_LOG,
    (AppView.DASHBOARD, "start_exercise_log"): AppView.EXERCISE_LOG,
    (AppView.FOOD_LOG, "entry_logged"): AppView.DASHBOARD,
    (AppView.FOOD_LOG, "back"): AppView.DASHBOARD,
    (AppView.EXERCISE_LOG, "entry_logged"): AppView.DASHBOARD,
    (AppView.EXERCISE_LOG, "back"): AppView.DASHBOARD,
}


@dataclass
class SessionService:
    """Routes user actions into the profile, entry store and view state."""

    analysis_service: AnalysisService
    state: SessionState = field(default_factory=SessionState)

    @property
    def view(self) -> AppView:
        return self.state.view

    @property
    def profile(self) -> Profile | None:
        return self.state.profile

    @property
    def stats(self) -> DailyStats:
        return self.state.stats

    def complete_onboarding(  # noqa: PLR0913
        self,
        name: object,
        weight_kg: object,
        height_cm: object,
        age_years: object,
        goal: object,
    ) -> Profile:
        """Create the profile and move to the dashboard."""
        if self.state.view is not AppView.ONBOARDING:
            raise NavigationError("Onboarding is already complete.")
        created = profile_service.complete_onboarding(
            name, weight_kg, height_cm, age_years, goal
        )
        self.state.profile = created
        self._transition("onboarding_complete")
        return created

    def start_food_log(self) -> None:
        self._transition("start_food_log")
        self.state.food_flow = LoggerFlow()

    def start_exercise_log(self) -> None:
        self._transition("start_exercise_log")
        self.state.exercise_flow = LoggerFlow()

    def back(self) -> None:
        """Leave the active logger; not allowed while a submission is pending."""
        flow = self._active_flow()
        if flow is not None and flow.submitting:
            raise FlowBusyError("Wait for the current analysis to finish.")
        self._transition("back")

    def select_food_image(self, image_bytes: bytes) -> None:
        flow = self._require_flow(AppView.FOOD_LOG)
        flow.image = image_bytes
        flow.error = None

    def clear_food_image(self) -> None:
        flow = self._require_flow(AppView.FOOD_LOG)
        flow.image = None
        flow.error = None

    def set_exercise_text(self, text: str) -> None:
        flow = self._require_flow(AppView.EXERCISE_LOG)
        flow.text = text

    async def submit_food(self) -> FoodEntry | None:
        """Analyze the selected photo and log it.

        Returns None when analysis fails; the flow then carries the error
        message and still holds the photo for a retry.
        """
        flow = self._require_flow(AppView.FOOD_LOG)
        if flow.image is None:
            raise MissingInputError("Select a photo first.")
        image = flow.image
        self._begin(flow)
        try:
            analysis = await self.analysis_service.analyze_food_image(image)
        except AnalysisError:
            flow.error = FOOD_ERROR_MESSAGE
            return None
        finally:
            flow.status = FlowStatus.IDLE
        entry = new_food_entry(analysis, image_ref=to_data_url(image))
        self.add_food(entry)
        self.state.food_flow = LoggerFlow()
        self._transition("entry_logged")
        return entry

    async def submit_exercise(self) -> ExerciseEntry | None:
        """Analyze the workout description and log it.

        Returns None when analysis fails; the text is kept for editing.
        """
        flow = self._require_flow(AppView.EXERCISE_LOG)
        description = flow.text.strip()
        if not description:
            raise MissingInputError("Describe your workout first.")
        weight_kg = self._require_profile().weight_kg
        self._begin(flow)
        try:
            analysis = await self.analysis_service.analyze_exercise_text(
                description, weight_kg
            )
        except AnalysisError:
            flow.error = EXERCISE_ERROR_MESSAGE
            return None
        finally:
            flow.status = FlowStatus.IDLE
        entry = new_exercise_entry(analysis)
        self.add_exercise(entry)
        self.state.exercise_flow = LoggerFlow()
        self._transition("entry_logged")
        return entry

    def add_food(self, entry: FoodEntry) -> DailyStats:
        """Append a food entry and republish the stats."""
        self.state.store.add_food(entry)
        return self._recompute()

    def add_exercise(self, entry: ExerciseEntry) -> DailyStats:
        """Append an exercise entry and republish the stats."""
        self.state.store.add_exercise(entry)
        return self._recompute()

    def entries(self) -> list[LogEntry]:
        return self.state.store.list_combined_sorted()

    async def daily_insight(self) -> str:
        """Return the insight for the current stats, refreshing it when they changed."""
        current_profile = self._require_profile()
        stats = self.state.stats
        if self.state.insight_stats != stats:
            insight = await self.analysis_service.get_daily_insight(
                stats, current_profile.goal.value
            )
            # Stats may have moved on while awaiting; keep the newest result only.
            if self.state.stats == stats:
                self.state.insight = insight
                self.state.insight_stats = stats
            return insight
        return self.state.insight

    def _recompute(self) -> DailyStats:
        store = self.state.store
        self.state.stats = stats_service.compute(
            store.food_entries, store.exercise_entries
        )
        return self.state.stats

    def _transition(self, action: str) -> None:
        target = _TRANSITIONS.get((self.state.view, action))
        if target is None:
            raise NavigationError(
                f"Cannot {action.replace('_', ' ')} from {self.state.view.value}."
            )
        if target is not AppView.ONBOARDING and self.state.profile is None:
            raise NavigationError("Complete onboarding first.")
        logger.info("View %s -> %s", self.state.view.value, target.value)
        self.state.view = target

    def _require_profile(self) -> Profile:
        if self.state.profile is None:
            raise NavigationError("Complete onboarding first.")
        return self.state.profile

    def _active_flow(self) -> LoggerFlow | None:
        if self.state.view is AppView.FOOD_LOG:
            return self.state.food_flow
        if self.state.view is AppView.EXERCISE_LOG:
            return self.state.exercise_flow
        return None

    def _require_flow(self, view: AppView) -> LoggerFlow:
        if self.state.view is not view:
            raise NavigationError(f"Open {view.value} first.")
        flow = self._active_flow()
        if flow is None:
            raise NavigationError(f"Open {view.value} first.")
        if flow.submitting:
            raise FlowBusyError("An analysis is already in progress.")
        return flow

    @staticmethod
    def _begin(flow: LoggerFlow) -> None:
        flow.status = FlowStatus.SUBMITTING
        flow.error = None
