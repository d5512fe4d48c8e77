"""Inbound message and reply schemas exchanged with the transport."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from src.schemas.session_schema import Locale


class FlowId(str, Enum):
    """Every behavior a turn can be dispatched to."""
    RESET = "reset"
    ONBOARDING_START = "onboarding_start"
    ONBOARDING = "onboarding"
    CLOCKING = "clocking"
    CHECKLIST_START = "checklist_start"
    CHECKLIST = "checklist"
    FORECAST_START = "forecast_start"
    FORECAST = "forecast"
    MAINTENANCE = "maintenance"
    DEFAULT = "default"


class InboundMessage(BaseModel):
    """A single turn handed over by the transport."""

    sender_id: str = Field(min_length=1)
    text: str = ""
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RouteDecision(BaseModel):
    """Outcome of the intent router for one turn."""

    flow: FlowId
    text: str
    rule: str


class TurnReply(BaseModel):
    """The single reply produced for a turn, plus the sender's resolved locale."""

    text: str
    locale: Optional[Locale] = None
    flow: Optional[FlowId] = None
