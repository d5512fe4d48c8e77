"""TwiML response envelope for the messaging channel."""

from typing import Optional
from xml.sax.saxutils import escape

from src.schemas.session_schema import Locale

TWIML_MEDIA_TYPE = "application/xml"


def twiml(message: str) -> str:
    """Wrap a plain-text reply in a TwiML <Message> response.

    Examples:
        >>> twiml("Fish & chips <3")
        '<?xml version="1.0" encoding="UTF-8"?><Response><Message>Fish &amp; chips &lt;3</Message></Response>'
    """
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f"<Response><Message>{escape(message)}</Message></Response>"
    )


def response_headers(locale: Optional[Locale]) -> dict[str, str]:
    """HTTP headers that accompany the envelope."""
    return {"Content-Language": (locale or Locale.EN).value}
