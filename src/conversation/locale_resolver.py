"""
Keyword-based locale detection, sticky once set on a session.

The first locale whose marker set matches the message wins; English is the
default. Markers of two letters or fewer ("da", "nu") only match as whole
words so that ordinary English such as "today" or "number" is not misread.
"""

import logging
import re
from typing import Optional

from src.schemas.session_schema import Locale, Session

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = Locale.EN

LOCALE_MARKERS: dict[Locale, tuple[str, ...]] = {
    Locale.RO: (
        "bună", "buna", "salut", "mulțumesc", "multumesc", "mersi",
        "vă rog", "va rog", "te rog", "vreau", "când",
        "ziua", "prognoză", "prognoza", "stricat", "nu merge",
        "da", "nu",
    ),
}

GREETINGS: frozenset[str] = frozenset({
    "hi", "hello", "hey", "hiya", "salut", "bună", "buna", "bună ziua", "buna ziua",
})

_SHORT_MARKER_LENGTH = 2


def _marker_matches(marker: str, text: str) -> bool:
    if len(marker) <= _SHORT_MARKER_LENGTH:
        return re.search(rf"\b{re.escape(marker)}\b", text) is not None
    return marker in text


class LocaleResolver:
    """Classifies free text into a supported locale."""

    def __init__(
        self,
        markers: Optional[dict[Locale, tuple[str, ...]]] = None,
        default: Locale = DEFAULT_LOCALE,
    ) -> None:
        self._markers = markers if markers is not None else LOCALE_MARKERS
        self._default = default

    def resolve(self, text: str) -> Locale:
        lower = text.lower()
        for locale, markers in self._markers.items():
            if any(_marker_matches(marker, lower) for marker in markers):
                return locale
        return self._default

    @staticmethod
    def is_greeting(text: str) -> bool:
        return text.strip(" !.?,").lower() in GREETINGS

    def apply(self, session: Session, text: str) -> Optional[Locale]:
        """Update ``session.locale`` for an inbound message and return it.

        A bare greeting sets the locale from the greeting itself for this
        turn only; ``end_turn`` clears it again so the next message is
        classified afresh. Otherwise the locale is resolved only if unset.
        """
        if self.is_greeting(text):
            session.locale = self.resolve(text)
            logger.debug("Greeting received, locale %s for this turn", session.locale.value)
            return session.locale
        if session.locale is None:
            session.locale = self.resolve(text)
            logger.info("Locale resolved: %s", session.locale.value)
        return session.locale

    def end_turn(self, session: Session, text: str) -> None:
        """Forget a locale that was only chosen for a greeting turn."""
        if self.is_greeting(text):
            session.locale = None
