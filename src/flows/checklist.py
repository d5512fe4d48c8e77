"""
Checklist walk-through.

"done" advances to the next task. Any other text while a checklist is
active goes to the text assistant with the current task as context, and
the assistant's answer is returned as-is; progress does not move.
"""

from src.assistant.text_assistant import ask_bounded
from src.catalog.checklists import get_tasks, match_checklist
from src.flows.base import Flow, TurnContext
from src.logging_context import get_turn_logger
from src.prompts.messages import get_message
from src.prompts.prompt_templates import build_checklist_prompt
from src.prompts.system_prompts import CHECKLIST_SYSTEM_PROMPT, with_locale
from src.schemas.session_schema import ActiveFlow
from src.schemas.turn_schema import FlowId

logger = get_turn_logger(__name__)

DONE_COMMAND = "done"


class ChecklistFlow(Flow):
    """Steps through one named checklist at a time."""

    handles = (FlowId.CHECKLIST_START, FlowId.CHECKLIST)

    async def handle(self, ctx: TurnContext) -> str:
        if ctx.flow == FlowId.CHECKLIST_START:
            return self.start(ctx)
        if ctx.text == DONE_COMMAND:
            return self.advance(ctx)
        return await self.narrate(ctx)

    def start(self, ctx: TurnContext) -> str:
        name = match_checklist(ctx.text)
        if name is None:
            raise ValueError(f"No checklist matches {ctx.text!r}")
        tasks = get_tasks(name)

        session = ctx.session
        session.clear_flow()
        session.active_flow = ActiveFlow.CHECKLIST
        session.checklist_kind = name
        session.checklist_progress = 0
        logger.info("Checklist started: %s (%d tasks)", name, len(tasks))
        return get_message("checklist_start", ctx.locale, checklist=name, task=tasks[0])

    def advance(self, ctx: TurnContext) -> str:
        session = ctx.session
        tasks = get_tasks(session.checklist_kind)
        progress = session.checklist_progress + 1

        if progress < len(tasks):
            session.checklist_progress = progress
            return get_message(
                "checklist_next", ctx.locale,
                number=progress + 1, total=len(tasks), task=tasks[progress],
            )

        logger.info("Checklist complete: %s", session.checklist_kind)
        session.clear_flow()
        return get_message("checklist_complete", ctx.locale)

    async def narrate(self, ctx: TurnContext) -> str:
        session = ctx.session
        tasks = get_tasks(session.checklist_kind)
        progress = session.checklist_progress
        prompt = build_checklist_prompt(
            session.checklist_kind, progress + 1, tasks[progress], ctx.raw_text
        )
        return await ask_bounded(
            ctx.assistant, prompt, with_locale(CHECKLIST_SYSTEM_PROMPT, ctx.locale)
        )
