"""Per-sender session state and forecast day records."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.config import settings


class Locale(str, Enum):
    EN = "en"
    RO = "ro"


class ActiveFlow(str, Enum):
    """Long-running flow currently owning the conversation, if any."""
    NONE = "none"
    CHECKLIST = "checklist"
    FORECAST = "forecast"


class OnboardingStep(IntEnum):
    """Named onboarding states. IDLE means not onboarding or finished."""
    IDLE = 0
    AWAIT_NAME = 1
    AWAIT_DOCS_ACK = 2
    AWAIT_HANDBOOK_ACK = 3
    AWAIT_FINAL_ACK = 4


# Keeps customers x avg_spend well inside the default 28-digit decimal context.
MAX_DAY_FIGURE = Decimal("1e9")


class DayRecord(BaseModel):
    """One day of forecast input as extracted from free text."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customers: Decimal = Field(ge=0, le=MAX_DAY_FIGURE, allow_inf_nan=False)
    avg_spend: Decimal = Field(alias="avgSpend", ge=0, le=MAX_DAY_FIGURE, allow_inf_nan=False)
    sales: Decimal = Field(ge=0, le=MAX_DAY_FIGURE, allow_inf_nan=False)


def _default_wage() -> Decimal:
    return settings.business.default_hourly_wage


@dataclass
class Session:
    """
    Per-sender conversational state shared across all flows.

    Lives in the SessionStore for the process lifetime. Flows read and
    write it only while the store grants exclusive access for the turn.
    """
    name: Optional[str] = None
    locale: Optional[Locale] = None
    hourly_wage: Decimal = field(default_factory=_default_wage)
    clock_in_at: Optional[datetime] = None
    onboarding_step: OnboardingStep = OnboardingStep.IDLE
    active_flow: ActiveFlow = ActiveFlow.NONE
    checklist_kind: Optional[str] = None
    checklist_progress: int = 0
    forecast_days: list[DayRecord] = field(default_factory=list)

    @property
    def is_clocked_in(self) -> bool:
        return self.clock_in_at is not None

    def clear_flow(self) -> None:
        """Leave any checklist or forecast in progress."""
        self.active_flow = ActiveFlow.NONE
        self.checklist_kind = None
        self.checklist_progress = 0
        self.forecast_days = []

    def check_invariants(self) -> list[str]:
        """Return a description of every broken consistency rule (empty if none)."""
        problems: list[str] = []
        if self.checklist_kind is not None and self.active_flow != ActiveFlow.CHECKLIST:
            problems.append("checklist_kind set outside CHECKLIST flow")
        if self.active_flow == ActiveFlow.CHECKLIST and self.checklist_kind is None:
            problems.append("CHECKLIST flow without checklist_kind")
        if self.forecast_days and self.active_flow != ActiveFlow.FORECAST:
            problems.append("forecast_days set outside FORECAST flow")
        if len(self.forecast_days) >= settings.flows.forecast_days:
            problems.append(f"{len(self.forecast_days)} forecast days retained")
        if self.checklist_progress < 0:
            problems.append("negative checklist_progress")
        return problems
