"""
Shift assistant entry point.

Serves the messaging webhook backed by the OpenAI text assistant, or runs
the offline console demo for development.

Usage:
    Webhook server: python main.py
    Console mode:   python main.py console
"""

import logging
import sys

from src.config import settings

logger = logging.getLogger(__name__)


def _run_server_mode() -> None:
    """Start the webhook server (requires OPENAI_API_KEY)."""
    import uvicorn

    from src.assistant.text_assistant import OpenAIAssistant
    from src.conversation.engine import TurnEngine
    from src.transport.webhook import create_app

    app = create_app(TurnEngine(assistant=OpenAIAssistant()))
    logger.info("Shift assistant listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def _run_console_mode() -> None:
    """Start the offline console demo (no API keys required)."""
    from console_demo import ConsoleSession

    session = ConsoleSession()
    session.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "console":
        _run_console_mode()
    else:
        _run_server_mode()
