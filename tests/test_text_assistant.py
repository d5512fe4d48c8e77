"""Tests for the OpenAI-backed assistant and the bounded call helpers."""

import asyncio
from types import SimpleNamespace

import pytest

from src.assistant.text_assistant import OpenAIAssistant, ask_bounded, extract_bounded
from src.errors import AssistantUnavailable, ExtractionFailure
from tests.conftest import FakeAssistant


class FakeCompletions:
    """Stands in for ``client.chat.completions`` and records each request."""

    def __init__(self, content):
        self.content = content
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(content):
    completions = FakeCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


class TestOpenAIAssistantAsk:
    @pytest.mark.asyncio
    async def test_sends_system_and_user_messages(self):
        client, completions = _client("  Mop is in the store room.  ")
        assistant = OpenAIAssistant(client=client, model="test-model")

        reply = await assistant.ask("Where is the mop?", "Be brief.")

        assert reply == "Mop is in the store room."
        request = completions.requests[0]
        assert request["model"] == "test-model"
        assert request["messages"] == [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "Where is the mop?"},
        ]

    @pytest.mark.asyncio
    async def test_without_system_prompt(self):
        client, completions = _client("ok")
        await OpenAIAssistant(client=client).ask("hi")
        assert completions.requests[0]["messages"] == [{"role": "user", "content": "hi"}]

    @pytest.mark.asyncio
    async def test_empty_content_is_unavailable(self):
        client, _ = _client(None)
        with pytest.raises(AssistantUnavailable):
            await OpenAIAssistant(client=client).ask("hi")


class TestOpenAIAssistantExtract:
    @pytest.mark.asyncio
    async def test_parses_json_object(self):
        client, completions = _client('{"customers": 100, "avgSpend": 10, "sales": 900}')
        data = await OpenAIAssistant(client=client).extract("Extract.", "{}", "100 at 10, 900")
        assert data == {"customers": 100, "avgSpend": 10, "sales": 900}
        request = completions.requests[0]
        assert request["response_format"] == {"type": "json_object"}
        assert request["messages"][1] == {"role": "user", "content": "100 at 10, 900"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["not json", "[1, 2, 3]", None])
    async def test_rejects_non_object(self, content):
        client, _ = _client(content)
        with pytest.raises(ExtractionFailure):
            await OpenAIAssistant(client=client).extract("Extract.", "{}", "text")


class TestAskBounded:
    @pytest.mark.asyncio
    async def test_returns_stripped_reply(self):
        assert await ask_bounded(FakeAssistant(reply=" hello "), "hi") == "hello"

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        with pytest.raises(AssistantUnavailable, match="timed out"):
            await ask_bounded(FakeAssistant(delay=1.0), "hi", timeout=0.01)

    @pytest.mark.asyncio
    async def test_other_errors_are_unavailable(self):
        with pytest.raises(AssistantUnavailable, match="rate limited"):
            await ask_bounded(FakeAssistant(fail=RuntimeError("rate limited")), "hi")

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        assistant = FakeAssistant()
        assistant.gate = asyncio.Event()
        task = asyncio.create_task(ask_bounded(assistant, "hi"))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task


class TestExtractBounded:
    @pytest.mark.asyncio
    async def test_returns_mapping(self):
        assistant = FakeAssistant(extractions={"x": {"customers": 1}})
        assert await extract_bounded(assistant, "Extract.", "{}", "x") == {"customers": 1}

    @pytest.mark.asyncio
    async def test_timeout_is_extraction_failure(self):
        assistant = FakeAssistant(extractions={"x": {}}, delay=1.0)
        with pytest.raises(ExtractionFailure, match="timed out"):
            await extract_bounded(assistant, "Extract.", "{}", "x", timeout=0.01)

    @pytest.mark.asyncio
    async def test_unavailable_is_extraction_failure(self):
        with pytest.raises(ExtractionFailure):
            await extract_bounded(FakeAssistant(), "Extract.", "{}", "unscripted")
