"""Tests for the OpenAI completion adapter."""

import asyncio

import pytest

from fitness_tracker.adapters.openai_completion_client import OpenAICompletionClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = '{"name": "Egg"}') -> None:
        self.responses = _FakeResponses(output_text)


def test_structured_request_includes_schema_and_image() -> None:
    fake = _FakeOpenAI()
    client = OpenAICompletionClient(client=fake)

    result = asyncio.run(
        client.complete(
            model="gpt-5.2",
            reasoning_effort="low",
            store=False,
            prompt="Analyze this image.",
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            schema={"type": "object"},
            schema_name="food_analysis",
        )
    )

    payload = fake.responses.last_payload
    assert result == '{"name": "Egg"}'
    assert payload["text"]["format"]["name"] == "food_analysis"
    assert payload["text"]["format"]["strict"] is True
    assert payload["reasoning"] == {"effort": "low"}
    content = payload["input"][0]["content"]
    assert content[1] == {
        "type": "input_image",
        "image_url": "data:image/jpeg;base64,ZmFrZQ==",
    }


def test_free_text_request_has_no_format() -> None:
    fake = _FakeOpenAI("Keep it up!")
    client = OpenAICompletionClient(client=fake)

    result = asyncio.run(
        client.complete(
            model="gpt-5.2", reasoning_effort=None, store=False, prompt="Tip?"
        )
    )

    payload = fake.responses.last_payload
    assert result == "Keep it up!"
    assert "text" not in payload
    assert "reasoning" not in payload
    assert len(payload["input"][0]["content"]) == 1


def test_empty_output_raises() -> None:
    client = OpenAICompletionClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.complete(
                model="gpt-5.2", reasoning_effort=None, store=False, prompt="Tip?"
            )
        )


def test_create_disables_sdk_retries() -> None:
    client = OpenAICompletionClient.create(api_key="key", timeout_seconds=5)

    assert client.client.max_retries == 0
    asyncio.run(client.close())
