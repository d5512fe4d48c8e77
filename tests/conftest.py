"""Shared test fixtures and helpers."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from src.conversation.engine import TurnEngine
from src.conversation.locale_resolver import LocaleResolver
from src.conversation.router import IntentRouter
from src.conversation.session_store import SessionStore
from src.errors import AssistantUnavailable
from src.schemas.session_schema import Session
from src.schemas.turn_schema import InboundMessage, TurnReply

SENDER = "+447700900123"
SHIFT_START = datetime(2025, 3, 15, 9, 0, tzinfo=timezone.utc)


class FakeAssistant:
    """In-process TextAssistant with scripted replies and extractions.

    ``extractions`` maps a user message to the dict returned for it (or an
    exception instance to raise). ``delay`` makes every call suspend, and
    ``gate`` (an asyncio.Event) holds calls until the test releases it.
    """

    def __init__(
        self,
        reply: str = "Assistant reply",
        extractions: Optional[dict[str, Any]] = None,
        delay: float = 0.0,
        fail: Optional[Exception] = None,
    ) -> None:
        self.reply = reply
        self.extractions = extractions or {}
        self.delay = delay
        self.fail = fail
        self.gate: Optional[asyncio.Event] = None
        self.asked: list[tuple[str, Optional[str]]] = []
        self.extracted: list[str] = []

    async def _pause(self) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)

    async def ask(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        self.asked.append((prompt, system_prompt))
        await self._pause()
        if self.fail is not None:
            raise self.fail
        return self.reply

    async def extract(
        self, instruction_prompt: str, schema_hint: str, user_text: str
    ) -> dict[str, Any]:
        self.extracted.append(user_text)
        await self._pause()
        if self.fail is not None:
            raise self.fail
        result = self.extractions.get(user_text)
        if result is None:
            raise AssistantUnavailable(f"No scripted extraction for {user_text!r}")
        if isinstance(result, Exception):
            raise result
        return result


DAY_1 = {"customers": 100, "avgSpend": 10, "sales": 900}
DAY_2 = {"customers": 120, "avgSpend": 9, "sales": 1000}
DAY_3 = {"customers": 90, "avgSpend": 11, "sales": 950}

FORECAST_EXTRACTIONS = {
    "day one: 100 customers at 10 each, 900 sales": DAY_1,
    "day two: 120 customers at 9 each, 1000 sales": DAY_2,
    "day three: 90 customers at 11 each, 950 sales": DAY_3,
    "no idea sorry": {"customers": None, "avgSpend": None, "sales": None},
    "lots of people": {"customers": "lots", "avgSpend": 10, "sales": 900},
}


@pytest.fixture
def assistant():
    return FakeAssistant(extractions=dict(FORECAST_EXTRACTIONS))


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def router():
    return IntentRouter()


@pytest.fixture
def locale_resolver():
    return LocaleResolver()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def engine(assistant, store):
    return TurnEngine(assistant=assistant, store=store)


async def send(
    engine: TurnEngine,
    text: str,
    at: Optional[datetime] = None,
    sender: str = SENDER,
) -> TurnReply:
    """Deliver one message to the engine and return its reply."""
    return await engine.handle(
        InboundMessage(sender_id=sender, text=text, received_at=at or SHIFT_START)
    )


async def send_all(engine: TurnEngine, texts: list[str], sender: str = SENDER) -> list[TurnReply]:
    """Deliver messages one after another, a minute apart."""
    replies = []
    for minute, text in enumerate(texts):
        replies.append(
            await send(engine, text, SHIFT_START + timedelta(minutes=minute), sender)
        )
    return replies


def session_of(engine: TurnEngine, sender: str = SENDER) -> Session:
    """Current session for a sender (re-fetched, since failed turns restore a copy)."""
    return engine.store.get_or_create(sender)
