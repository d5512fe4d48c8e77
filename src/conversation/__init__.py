from src.conversation.locale_resolver import LocaleResolver
from src.conversation.router import IntentRouter, Rule
from src.conversation.session_store import SessionStore
from src.conversation.state_machine import (
    OnboardingStateMachine,
    OnboardingTrigger,
)

__all__ = [
    "IntentRouter",
    "Rule",
    "LocaleResolver",
    "SessionStore",
    "OnboardingStateMachine",
    "OnboardingTrigger",
]
