"""Shared turn context and the base class every flow implements."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from src.assistant.text_assistant import TextAssistant
from src.conversation.session_store import SessionStore
from src.schemas.session_schema import Locale, Session
from src.schemas.turn_schema import FlowId


@dataclass
class TurnContext:
    """Everything a flow may read or touch while handling one turn."""
    sender_id: str
    session: Session
    flow: FlowId
    raw_text: str
    text: str
    received_at: datetime
    store: SessionStore
    assistant: TextAssistant

    @property
    def locale(self) -> Optional[Locale]:
        return self.session.locale

    @property
    def now(self) -> datetime:
        """The turn's single clock reading, always timezone-aware."""
        if self.received_at.tzinfo is None:
            return self.received_at.replace(tzinfo=timezone.utc)
        return self.received_at


class Flow:
    """
    Base class for a flow handler.

    A flow is stateless; all state lives on the session. Flows that call
    the text assistant do so before mutating the session, then commit their
    changes and build the reply without awaiting again.
    """

    handles: tuple[FlowId, ...] = ()

    async def handle(self, ctx: TurnContext) -> str:
        raise NotImplementedError
