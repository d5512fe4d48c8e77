"""
Finite state machine for the onboarding flow.

Defines the named onboarding states and the explicit transitions between
them. The transition table depends on the configured onboarding policy:
``single_done`` finishes on the handbook acknowledgement, ``double_done``
asks for one more acknowledgement before finishing.

Usage:
    sm = OnboardingStateMachine(OnboardingStep.IDLE)
    sm.transition(OnboardingTrigger.START)
    assert sm.current_state == OnboardingStep.AWAIT_NAME
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.config import settings
from src.schemas.session_schema import OnboardingStep

logger = logging.getLogger(__name__)


class OnboardingTrigger(str, Enum):
    """Events that cause onboarding transitions."""
    START = "start"
    TEXT = "text"
    DONE = "done"


@dataclass(frozen=True)
class Transition:
    """A single valid state transition."""
    from_state: OnboardingStep
    to_state: OnboardingStep
    trigger: OnboardingTrigger


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


_COMMON_TRANSITIONS: list[Transition] = [
    # Any state may restart onboarding
    *[Transition(step, OnboardingStep.AWAIT_NAME, OnboardingTrigger.START)
      for step in OnboardingStep],

    # Free-text steps accept anything, including "done"
    Transition(OnboardingStep.AWAIT_NAME, OnboardingStep.AWAIT_DOCS_ACK,
               OnboardingTrigger.TEXT),
    Transition(OnboardingStep.AWAIT_NAME, OnboardingStep.AWAIT_DOCS_ACK,
               OnboardingTrigger.DONE),
    Transition(OnboardingStep.AWAIT_DOCS_ACK, OnboardingStep.AWAIT_HANDBOOK_ACK,
               OnboardingTrigger.TEXT),
    Transition(OnboardingStep.AWAIT_DOCS_ACK, OnboardingStep.AWAIT_HANDBOOK_ACK,
               OnboardingTrigger.DONE),

    # Final acknowledgement always finishes
    Transition(OnboardingStep.AWAIT_FINAL_ACK, OnboardingStep.IDLE,
               OnboardingTrigger.DONE),
]

POLICY_TRANSITIONS: dict[str, list[Transition]] = {
    "single_done": _COMMON_TRANSITIONS + [
        Transition(OnboardingStep.AWAIT_HANDBOOK_ACK, OnboardingStep.IDLE,
                   OnboardingTrigger.DONE),
    ],
    "double_done": _COMMON_TRANSITIONS + [
        Transition(OnboardingStep.AWAIT_HANDBOOK_ACK, OnboardingStep.AWAIT_FINAL_ACK,
                   OnboardingTrigger.DONE),
    ],
}


class OnboardingStateMachine:
    """
    Deterministic state machine for onboarding steps.

    Every transition must be explicitly defined. Input with no matching
    transition (e.g. free text at an acknowledgement step) is rejected so
    the caller can re-prompt without changing state.
    """

    def __init__(self, state: OnboardingStep, policy: Optional[str] = None) -> None:
        self._current_state = state
        self._policy = policy or settings.flows.onboarding_policy
        self.transitions = POLICY_TRANSITIONS[self._policy]

    @property
    def current_state(self) -> OnboardingStep:
        return self._current_state

    @property
    def policy(self) -> str:
        return self._policy

    def can_transition(self, trigger: OnboardingTrigger) -> bool:
        return trigger in self.get_valid_triggers()

    def transition(self, trigger: OnboardingTrigger) -> OnboardingStep:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new onboarding state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.transitions:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state
                logger.debug(
                    "Onboarding transition: %s -> %s (trigger: %s)",
                    old_state.name, self._current_state.name, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.name}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[OnboardingTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.transitions if t.from_state == self._current_state]

    def is_terminal(self) -> bool:
        return self._current_state == OnboardingStep.IDLE
