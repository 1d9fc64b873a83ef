"""Tests for the AI analysis service."""

import asyncio
import json

import pytest

from fitness_tracker.domain.stats import DailyStats
from fitness_tracker.errors import AnalysisError
from fitness_tracker.services.analysis import (
    EMPTY_INSIGHT_FALLBACK,
    EXERCISE_SCHEMA,
    FAILED_INSIGHT_FALLBACK,
    FOOD_SCHEMA,
    parse_json_output,
    to_data_url,
)
from tests.conftest import FakeCompletionClient, make_analysis_service

STATS = DailyStats(
    calories_consumed=500, calories_burned=200, protein_g=30, carbs_g=50, fat_g=10
)


def test_analyze_food_image_returns_structured_result() -> None:
    client = FakeCompletionClient()
    service = make_analysis_service(client)

    result = asyncio.run(service.analyze_food_image(b"\x89PNG\r\n\x1a\nrest"))

    assert result.name == "Chicken salad"
    assert result.calories == 500
    assert result.protein_g == 30
    assert client.calls[0]["schema"] is FOOD_SCHEMA
    assert str(client.calls[0]["image_data_url"]).startswith("data:image/png;base64,")


def test_analyze_food_image_strips_code_fence() -> None:
    payload = {"name": "Pizza", "calories": 285, "protein": 12, "carbs": 36, "fat": 10}
    client = FakeCompletionClient(food_output=f"```json\n{json.dumps(payload)}\n```")
    service = make_analysis_service(client)

    result = asyncio.run(service.analyze_food_image(b"image"))

    assert result.name == "Pizza"
    assert result.fat_g == 10


@pytest.mark.parametrize(
    "output",
    [
        "not json",
        "```json\n{broken\n```",
        json.dumps({"name": "Soup", "calories": 100, "protein": 5, "carbs": 10}),
        json.dumps({"name": "", "calories": 1, "protein": 1, "carbs": 1, "fat": 1}),
        json.dumps({"name": "Soup", "calories": -5, "protein": 1, "carbs": 1, "fat": 1}),
        json.dumps(["Soup", 100]),
        json.dumps({"name": "X", "calories": "500", "protein": 1, "carbs": 1, "fat": 1}),
        json.dumps({"name": "X", "calories": 500, "protein": True, "carbs": 1, "fat": 1}),
    ],
)
def test_analyze_food_image_rejects_bad_output(output: str) -> None:
    service = make_analysis_service(FakeCompletionClient(food_output=output))

    with pytest.raises(AnalysisError) as excinfo:
        asyncio.run(service.analyze_food_image(b"image"))

    assert excinfo.value.kind == "food"


def test_analyze_food_image_normalizes_client_errors() -> None:
    client = FakeCompletionClient(error=RuntimeError("connection reset"))
    service = make_analysis_service(client)

    with pytest.raises(AnalysisError) as excinfo:
        asyncio.run(service.analyze_food_image(b"image"))

    assert excinfo.value.kind == "food"
    assert "connection reset" not in str(excinfo.value)


def test_analyze_exercise_text_includes_weight() -> None:
    client = FakeCompletionClient()
    service = make_analysis_service(client)

    result = asyncio.run(service.analyze_exercise_text("ran for half an hour", 72.5))

    assert result.activity == "Running"
    assert result.duration_minutes == 30
    assert result.calories_burned == 200
    assert "72.5kg" in str(client.calls[0]["prompt"])
    assert "ran for half an hour" in str(client.calls[0]["prompt"])
    assert client.calls[0]["schema"] is EXERCISE_SCHEMA
    assert client.calls[0]["image_data_url"] is None


@pytest.mark.parametrize(
    "output",
    [
        json.dumps({"activity": "Yoga", "durationMinutes": 30}),
        json.dumps({"activity": "Yoga", "durationMinutes": "30", "caloriesBurned": 90}),
    ],
)
def test_analyze_exercise_text_rejects_bad_output(output: str) -> None:
    service = make_analysis_service(FakeCompletionClient(exercise_output=output))

    with pytest.raises(AnalysisError) as excinfo:
        asyncio.run(service.analyze_exercise_text("yoga", 60))

    assert excinfo.value.kind == "exercise"


def test_get_daily_insight_returns_text() -> None:
    client = FakeCompletionClient(insight_output="  Nice protein intake today!  ")
    service = make_analysis_service(client)

    insight = asyncio.run(service.get_daily_insight(STATS, "lose"))

    assert insight == "Nice protein intake today!"
    prompt = str(client.calls[0]["prompt"])
    assert "Consumed 500kcal" in prompt
    assert "User Goal: lose" in prompt
    assert client.calls[0]["schema"] is None


def test_get_daily_insight_falls_back_on_failure() -> None:
    client = FakeCompletionClient(error=TimeoutError("slow"))
    service = make_analysis_service(client)

    insight = asyncio.run(service.get_daily_insight(STATS, "gain"))

    assert insight == FAILED_INSIGHT_FALLBACK


def test_get_daily_insight_falls_back_on_empty_text() -> None:
    service = make_analysis_service(FakeCompletionClient(insight_output="   "))

    insight = asyncio.run(service.get_daily_insight(STATS, "maintain"))

    assert insight == EMPTY_INSIGHT_FALLBACK


def test_parse_json_output_handles_plain_fence() -> None:
    assert parse_json_output('```\n{"a": 1}\n```') == {"a": 1}
    assert parse_json_output('  {"a": 2}  ') == {"a": 2}


def test_to_data_url_defaults_to_jpeg() -> None:
    assert to_data_url(b"unknown").startswith("data:image/jpeg;base64,")
