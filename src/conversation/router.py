"""
Ordered intent router deciding which flow handles a turn.

The precedence ladder is an explicit list of rules evaluated top to bottom;
the first matching rule wins and the last rule always matches, so every
message maps to exactly one flow. Session-lifecycle overrides (reset, start
onboarding) come first, and clocking is checked before any checklist or
forecast continuation so a worker can always clock out mid-flow.

Usage:
    router = IntentRouter()
    decision = router.route(session, "clock out")
    assert decision.flow == FlowId.CLOCKING
"""

import logging
from dataclasses import dataclass
from typing import Callable

from src.catalog.checklists import match_checklist
from src.schemas.session_schema import ActiveFlow, OnboardingStep, Session
from src.schemas.turn_schema import FlowId, RouteDecision
from src.utils import normalize_command

logger = logging.getLogger(__name__)

RESET_COMMAND = "reset"
START_ONBOARDING_COMMAND = "start onboarding"
CLOCK_COMMANDS = ("clock in", "clock out")

FORECAST_TRIGGERS = (
    "forecast", "make a forecast",
    "prognoză", "prognoza", "previziune",
)

MAINTENANCE_TRIGGERS = (
    "broken", "not working", "fryer", "leaking", "out of order",
    "stricat", "stricată", "nu merge", "nu funcționează", "nu functioneaza",
    "friteuză", "friteuza",
)


@dataclass(frozen=True)
class Rule:
    """One rung of the precedence ladder."""
    name: str
    flow: FlowId
    predicate: Callable[[Session, str], bool]


def _always(session: Session, text: str) -> bool:
    return True


def _contains_any(triggers: tuple[str, ...]) -> Callable[[Session, str], bool]:
    def predicate(session: Session, text: str) -> bool:
        return any(trigger in text for trigger in triggers)

    return predicate


class IntentRouter:
    """Fixed, total precedence ladder from (session, text) to a flow."""

    RULES: list[Rule] = [
        Rule("reset", FlowId.RESET,
             lambda s, t: t == RESET_COMMAND),
        Rule("start_onboarding", FlowId.ONBOARDING_START,
             lambda s, t: t == START_ONBOARDING_COMMAND),
        Rule("onboarding_in_progress", FlowId.ONBOARDING,
             lambda s, t: s.onboarding_step != OnboardingStep.IDLE),
        Rule("clocking", FlowId.CLOCKING,
             lambda s, t: t in CLOCK_COMMANDS),
        Rule("checklist_start", FlowId.CHECKLIST_START,
             lambda s, t: match_checklist(t) is not None),
        Rule("checklist_active", FlowId.CHECKLIST,
             lambda s, t: s.active_flow == ActiveFlow.CHECKLIST),
        Rule("forecast_start", FlowId.FORECAST_START,
             _contains_any(FORECAST_TRIGGERS)),
        Rule("forecast_active", FlowId.FORECAST,
             lambda s, t: s.active_flow == ActiveFlow.FORECAST),
        Rule("maintenance", FlowId.MAINTENANCE,
             _contains_any(MAINTENANCE_TRIGGERS)),
        Rule("fallback", FlowId.DEFAULT, _always),
    ]

    def __init__(self) -> None:
        self.rules: list[Rule] = list(self.RULES)

    def route(self, session: Session, text: str) -> RouteDecision:
        """
        Select the flow for one turn.

        Args:
            session: The sender's current session (read only).
            text: The raw message text.

        Returns:
            The matched flow, the normalized text it was matched on, and the rule name.
        """
        normalized = normalize_command(text)
        for rule in self.rules:
            if rule.predicate(session, normalized):
                logger.debug("Routed to %s (rule: %s)", rule.flow.value, rule.name)
                return RouteDecision(flow=rule.flow, text=normalized, rule=rule.name)
        raise AssertionError("Router ladder must end with an always-matching rule")
