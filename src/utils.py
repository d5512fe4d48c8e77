"""Shared utilities used across the shift assistant."""

import re
from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("0.01")


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Messaging providers prefix the sender with a channel tag
    (``whatsapp:+44...``); the tag is dropped so one person maps to one session.

    Examples:
        >>> normalize_phone("+44 7700 900123")
        '+447700900123'
        >>> normalize_phone("whatsapp:+44 (7700) 900-123")
        '+447700900123'
    """
    value = value.strip()
    if ":" in value:
        value = value.split(":", 1)[1].strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def normalize_command(text: str) -> str:
    """Lowercase and collapse whitespace so commands compare exactly.

    Examples:
        >>> normalize_command("  Clock   IN ")
        'clock in'
    """
    return " ".join(text.split()).lower()


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, half up.

    Examples:
        >>> round_money(Decimal("2.005"))
        Decimal('2.01')
    """
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)
