"""
FastAPI webhook for the messaging provider.

Receives form-encoded inbound messages (``From``/``Body``), hands each one
to the turn engine, and answers with a TwiML envelope. The engine instance
lives on ``app.state`` so tests and the entry point can supply their own.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response

from src.assistant.text_assistant import OpenAIAssistant
from src.config import settings
from src.conversation.engine import TurnEngine
from src.schemas.turn_schema import InboundMessage
from src.transport.formatter import TWIML_MEDIA_TYPE, response_headers, twiml

logger = logging.getLogger(__name__)


def create_app(engine: Optional[TurnEngine] = None) -> FastAPI:
    """Build the webhook app around a turn engine."""
    app = FastAPI(title=f"{settings.business.name} Shift Assistant")
    app.state.engine = engine

    def get_engine() -> TurnEngine:
        if app.state.engine is None:
            app.state.engine = TurnEngine(assistant=OpenAIAssistant())
        return app.state.engine

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health endpoint to confirm the service is up."""
        return {"status": "ok"}

    @app.post("/webhook")
    async def webhook(request: Request) -> Response:
        """Inbound message endpoint - one request is one turn."""
        received_at = datetime.now(timezone.utc)
        form = await request.form()
        sender_id = str(form.get("From", "")).strip()
        body = str(form.get("Body", "")).strip()

        if not sender_id:
            logger.warning("Inbound message without sender ignored")
            return Response(status_code=400)

        reply = await get_engine().handle(
            InboundMessage(sender_id=sender_id, text=body, received_at=received_at)
        )
        return Response(
            content=twiml(reply.text),
            media_type=TWIML_MEDIA_TYPE,
            headers=response_headers(reply.locale),
        )

    return app
