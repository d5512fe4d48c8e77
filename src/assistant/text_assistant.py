"""
Text assistant capability used for free-text answers and structured extraction.

Flows depend only on the ``TextAssistant`` protocol. ``OpenAIAssistant`` is
the production implementation; tests and the console demo plug in their own.
Every call a flow makes goes through ``ask_bounded`` / ``extract_bounded`` so
that a slow or failing assistant always surfaces as ``AssistantUnavailable``
within the configured time budget.

Usage:
    assistant = OpenAIAssistant()
    reply = await ask_bounded(assistant, "Where is the mop?")
"""

import asyncio
import json
import logging
from typing import Any, Optional, Protocol

from src.config import settings
from src.errors import AssistantUnavailable, ExtractionFailure

logger = logging.getLogger(__name__)


class TextAssistant(Protocol):
    """Natural-language capability consumed by the flows."""

    async def ask(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        ...

    async def extract(
        self, instruction_prompt: str, schema_hint: str, user_text: str
    ) -> dict[str, Any]:
        ...


class OpenAIAssistant:
    """TextAssistant backed by the OpenAI chat completions API."""

    def __init__(self, client: Any = None, model: Optional[str] = None) -> None:
        if client is None:
            from openai import AsyncOpenAI

            client = AsyncOpenAI(timeout=settings.model.assistant_timeout_sec)
        self._client = client
        self._model = model or settings.model.llm_model

    async def ask(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        completion = await self._client.chat.completions.create(
            model=self._model,
            messages=messages,
            temperature=settings.model.llm_temperature,
        )
        content = completion.choices[0].message.content
        if not content:
            raise AssistantUnavailable("Assistant returned an empty reply")
        return content.strip()

    async def extract(
        self, instruction_prompt: str, schema_hint: str, user_text: str
    ) -> dict[str, Any]:
        completion = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {
                    "role": "system",
                    "content": f"{instruction_prompt.strip()}\nSchema: {schema_hint}",
                },
                {"role": "user", "content": user_text},
            ],
            response_format={"type": "json_object"},
            temperature=0,
        )
        content = completion.choices[0].message.content or ""
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            raise ExtractionFailure(f"Extraction was not valid JSON: {content!r}") from None
        if not isinstance(data, dict):
            raise ExtractionFailure(f"Extraction was not a JSON object: {content!r}")
        return data


async def ask_bounded(
    assistant: TextAssistant,
    prompt: str,
    system_prompt: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """Call ``assistant.ask`` within the time budget.

    Raises:
        AssistantUnavailable: On timeout, on any assistant error, or on an empty reply.
    """
    budget = timeout if timeout is not None else settings.model.assistant_timeout_sec
    try:
        reply = await asyncio.wait_for(assistant.ask(prompt, system_prompt), timeout=budget)
    except asyncio.TimeoutError:
        logger.warning("Assistant ask timed out after %.1fs", budget)
        raise AssistantUnavailable("Assistant timed out") from None
    except AssistantUnavailable:
        raise
    except Exception as exc:
        logger.warning("Assistant ask failed: %r", exc)
        raise AssistantUnavailable(str(exc)) from exc
    if not reply or not reply.strip():
        raise AssistantUnavailable("Assistant returned an empty reply")
    return reply.strip()


async def extract_bounded(
    assistant: TextAssistant,
    instruction_prompt: str,
    schema_hint: str,
    user_text: str,
    timeout: Optional[float] = None,
) -> dict[str, Any]:
    """Call ``assistant.extract`` within the time budget.

    Raises:
        ExtractionFailure: On timeout, on any assistant error, or on a non-object result.
    """
    budget = timeout if timeout is not None else settings.model.assistant_timeout_sec
    try:
        data = await asyncio.wait_for(
            assistant.extract(instruction_prompt, schema_hint, user_text), timeout=budget
        )
    except asyncio.TimeoutError:
        logger.warning("Assistant extract timed out after %.1fs", budget)
        raise ExtractionFailure("Extraction timed out") from None
    except ExtractionFailure:
        raise
    except Exception as exc:
        logger.warning("Assistant extract failed: %r", exc)
        raise ExtractionFailure(str(exc)) from exc
    if not isinstance(data, dict):
        raise ExtractionFailure(f"Extraction returned {type(data).__name__}, expected object")
    return data
