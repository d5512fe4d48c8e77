"""One-shot maintenance report. Never touches the session."""

from src.assistant.text_assistant import ask_bounded
from src.flows.base import Flow, TurnContext
from src.logging_context import get_turn_logger
from src.prompts.messages import get_message
from src.prompts.prompt_templates import build_maintenance_prompt
from src.prompts.system_prompts import MAINTENANCE_SYSTEM_PROMPT, with_locale
from src.schemas.turn_schema import FlowId

logger = get_turn_logger(__name__)


class MaintenanceFlow(Flow):
    """Turns a fault report into a maintenance-log confirmation."""

    handles = (FlowId.MAINTENANCE,)

    async def handle(self, ctx: TurnContext) -> str:
        logger.info("Maintenance issue reported: %s", ctx.raw_text)
        reply = await ask_bounded(
            ctx.assistant,
            build_maintenance_prompt(ctx.raw_text),
            with_locale(MAINTENANCE_SYSTEM_PROMPT, ctx.locale),
        )
        return f"{get_message('maintenance_prefix', ctx.locale)} {reply}"
