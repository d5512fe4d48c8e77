"""Fallback flow and the session reset command."""

from src.assistant.text_assistant import ask_bounded
from src.flows.base import Flow, TurnContext
from src.logging_context import get_turn_logger
from src.prompts.messages import get_message
from src.prompts.system_prompts import DEFAULT_SYSTEM_PROMPT, with_locale
from src.schemas.turn_schema import FlowId

logger = get_turn_logger(__name__)


class DefaultFlow(Flow):
    """Forwards the raw message to the text assistant."""

    handles = (FlowId.DEFAULT,)

    async def handle(self, ctx: TurnContext) -> str:
        return await ask_bounded(
            ctx.assistant, ctx.raw_text, with_locale(DEFAULT_SYSTEM_PROMPT, ctx.locale)
        )


class ResetFlow(Flow):
    """Replaces the sender's session with a fresh default one."""

    handles = (FlowId.RESET,)

    async def handle(self, ctx: TurnContext) -> str:
        reply = get_message("reset", ctx.locale)
        ctx.session = ctx.store.reset(ctx.sender_id)
        return reply
