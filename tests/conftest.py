"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.services.analysis import AnalysisService, CompletionClient
from fitness_tracker.services.session import SessionService


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client returning canned outputs per request type."""

    food_output: str = field(
        default_factory=lambda: json.dumps(
            {
                "name": "Chicken salad",
                "calories": 500,
                "protein": 30,
                "carbs": 50,
                "fat": 10,
            }
        )
    )
    exercise_output: str = field(
        default_factory=lambda: json.dumps(
            {"activity": "Running", "durationMinutes": 30, "caloriesBurned": 200}
        )
    )
    insight_output: str = "Great job staying on track today!"
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "image_data_url": image_data_url,
                "schema": schema,
                "schema_name": schema_name,
            }
        )
        if self.error is not None:
            raise self.error
        if schema_name == "food_analysis":
            return self.food_output
        if schema_name == "exercise_analysis":
            return self.exercise_output
        return self.insight_output


def make_analysis_service(client: FakeCompletionClient) -> AnalysisService:
    return AnalysisService(
        client=client, model="gpt-5.2", reasoning_effort=None, store=False
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def analysis_service(completion_client: FakeCompletionClient) -> AnalysisService:
    return make_analysis_service(completion_client)


@pytest.fixture
def session_service(analysis_service: AnalysisService) -> SessionService:
    return SessionService(analysis_service=analysis_service)


@pytest.fixture
def onboarded_session(session_service: SessionService) -> SessionService:
    session_service.complete_onboarding(
        name="Alex", weight_kg=70, height_cm=175, age_years=30, goal="maintain"
    )
    return session_service


@pytest.fixture
def container(
    settings: Settings,
    analysis_service: AnalysisService,
    session_service: SessionService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        session_service=session_service,
        close_resources=close_resources,
    )
