"""
Onboarding flow: name, right-to-work documents, handbook acknowledgement.

Runs on the onboarding state machine. Once started it owns every message
until it finishes; input that has no valid transition (anything but "done"
at an acknowledgement step) re-sends the current prompt unchanged.
"""

from typing import Optional

from src.config import settings
from src.conversation.state_machine import OnboardingStateMachine, OnboardingTrigger
from src.flows.base import Flow, TurnContext
from src.logging_context import get_turn_logger
from src.prompts.messages import get_message
from src.schemas.session_schema import OnboardingStep
from src.schemas.turn_schema import FlowId

logger = get_turn_logger(__name__)

DONE_COMMAND = "done"

PROMPT_FOR_STATE: dict[OnboardingStep, str] = {
    OnboardingStep.AWAIT_NAME: "onboarding_welcome",
    OnboardingStep.AWAIT_DOCS_ACK: "onboarding_docs",
    OnboardingStep.AWAIT_HANDBOOK_ACK: "onboarding_handbook",
    OnboardingStep.AWAIT_FINAL_ACK: "onboarding_final",
    OnboardingStep.IDLE: "onboarding_complete",
}


class OnboardingFlow(Flow):
    """Multi-step onboarding driven by the onboarding state machine."""

    handles = (FlowId.ONBOARDING_START, FlowId.ONBOARDING)

    def __init__(self, policy: Optional[str] = None) -> None:
        self._policy = policy or settings.flows.onboarding_policy

    async def handle(self, ctx: TurnContext) -> str:
        session = ctx.session
        sm = OnboardingStateMachine(session.onboarding_step, self._policy)

        if ctx.flow == FlowId.ONBOARDING_START:
            trigger = OnboardingTrigger.START
            session.clear_flow()
        elif ctx.text == DONE_COMMAND:
            trigger = OnboardingTrigger.DONE
        else:
            trigger = OnboardingTrigger.TEXT

        if not sm.can_transition(trigger):
            logger.debug("Onboarding re-prompt at %s", sm.current_state.name)
            return self._prompt(ctx, sm.current_state)

        if sm.current_state == OnboardingStep.AWAIT_NAME and trigger != OnboardingTrigger.START:
            session.name = ctx.raw_text
        session.onboarding_step = sm.transition(trigger)

        if sm.is_terminal():
            logger.info("Onboarding complete for %s", session.name)
        return self._prompt(ctx, session.onboarding_step)

    @staticmethod
    def _prompt(ctx: TurnContext, state: OnboardingStep) -> str:
        biz = settings.business
        return get_message(
            PROMPT_FOR_STATE[state],
            ctx.locale,
            business=biz.name,
            name=ctx.session.name,
            currency=biz.currency_symbol,
            wage=f"{ctx.session.hourly_wage:.2f}",
            handbook_url=biz.handbook_url,
        )
