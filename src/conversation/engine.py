"""
Turn engine — the single entry point for inbound messages.

One call to ``handle`` is one turn: it takes exclusive access to the
sender's session, resolves the locale, routes the message, runs the
selected flow, and returns exactly one reply. Every error kind is turned
into a reply here; nothing escapes to the transport. If a turn fails or
runs past its time budget the session is restored to its state at the
start of the flow, so no half-applied change survives.

Usage:
    engine = TurnEngine(assistant=OpenAIAssistant())
    reply = await engine.handle(InboundMessage(sender_id="+447700900123", text="clock in"))
"""

import asyncio
import copy
from typing import Optional

from src.assistant.text_assistant import TextAssistant
from src.config import settings
from src.conversation.locale_resolver import LocaleResolver
from src.conversation.router import IntentRouter
from src.conversation.session_store import SessionStore
from src.errors import AssistantUnavailable, ExtractionFailure, NotClockedIn
from src.flows.base import Flow, TurnContext
from src.flows.registry import build_flow_table
from src.logging_context import get_turn_logger, set_sender_id
from src.prompts.messages import get_message
from src.schemas.session_schema import Session
from src.schemas.turn_schema import FlowId, InboundMessage, TurnReply
from src.utils import normalize_phone

logger = get_turn_logger(__name__)


class TurnEngine:
    """Serializes turns per sender and dispatches each to one flow."""

    def __init__(
        self,
        assistant: TextAssistant,
        store: Optional[SessionStore] = None,
        router: Optional[IntentRouter] = None,
        locale_resolver: Optional[LocaleResolver] = None,
        flows: Optional[dict[FlowId, Flow]] = None,
        turn_timeout: Optional[float] = None,
    ) -> None:
        self.assistant = assistant
        self.store = store or SessionStore()
        self.router = router or IntentRouter()
        self.locale_resolver = locale_resolver or LocaleResolver()
        self.flows = flows or build_flow_table()
        self.turn_timeout = turn_timeout or settings.model.turn_timeout_sec

    async def handle(self, message: InboundMessage) -> TurnReply:
        """Process one inbound message and return its reply."""
        sender_id = normalize_phone(message.sender_id) or message.sender_id
        set_sender_id(sender_id)

        async with self.store.exclusive(sender_id):
            session = self.store.get_or_create(sender_id)
            self.locale_resolver.apply(session, message.text)
            decision = self.router.route(session, message.text)
            snapshot = copy.deepcopy(session)

            ctx = TurnContext(
                sender_id=sender_id,
                session=session,
                flow=decision.flow,
                raw_text=message.text,
                text=decision.text,
                received_at=message.received_at,
                store=self.store,
                assistant=self.assistant,
            )
            text = await self._run_flow(ctx, snapshot)

            final = self.store.get_or_create(sender_id)
            reply_locale = final.locale
            self.locale_resolver.end_turn(final, message.text)
            problems = final.check_invariants()
            if problems:
                logger.error("Session invariants broken after %s: %s", decision.rule, problems)
            logger.info("Turn handled (flow: %s, rule: %s)", decision.flow.value, decision.rule)
            return TurnReply(text=text, locale=reply_locale, flow=decision.flow)

    async def _run_flow(self, ctx: TurnContext, snapshot: Session) -> str:
        flow = self.flows[ctx.flow]
        try:
            return await asyncio.wait_for(flow.handle(ctx), timeout=self.turn_timeout)
        except NotClockedIn:
            self._restore(ctx, snapshot)
            logger.info("Clock-out rejected: not clocked in")
            return get_message("not_clocked_in", snapshot.locale)
        except ExtractionFailure as exc:
            self._restore(ctx, snapshot)
            logger.info("Forecast extraction failed, re-prompting: %s", exc)
            return get_message(
                "forecast_retry", snapshot.locale, day=len(snapshot.forecast_days) + 1
            )
        except AssistantUnavailable as exc:
            self._restore(ctx, snapshot)
            logger.warning("Assistant unavailable for %s: %s", ctx.flow.value, exc)
            return get_message("apology", snapshot.locale)
        except asyncio.TimeoutError:
            self._restore(ctx, snapshot)
            logger.warning("Turn exceeded %.1fs budget in %s", self.turn_timeout, ctx.flow.value)
            return get_message("apology", snapshot.locale)
        except Exception:
            self._restore(ctx, snapshot)
            logger.exception("Unexpected error in flow %s", ctx.flow.value)
            return get_message("apology", snapshot.locale)

    def _restore(self, ctx: TurnContext, snapshot: Session) -> None:
        """Put the pre-flow session back so a failed turn commits nothing."""
        self.store.replace(ctx.sender_id, snapshot)
