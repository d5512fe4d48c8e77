"""Error kinds raised by flows and recovered by the turn engine.

None of these is fatal: the engine turns each one into a reply for the
sender and the session is left exactly as it was before the turn.
"""


class ShiftAssistantError(Exception):
    """Base class for all recoverable turn errors."""


class NotClockedIn(ShiftAssistantError):
    """Clock-out requested while no clock-in is recorded."""


class ExtractionFailure(ShiftAssistantError):
    """Structured extraction returned missing or unusable fields."""


class InvalidTransitionInput(ExtractionFailure):
    """Input out of schema for a structured step (e.g. non-numeric or negative)."""


class AssistantUnavailable(ShiftAssistantError):
    """The text assistant failed, timed out, or returned nothing."""
