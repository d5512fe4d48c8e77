"""
Clock-in / clock-out with hours and pay.

The turn's receipt time is the only clock reading used, so a given
request always computes the same hours. Money and hours are Decimals
rounded half up to two places.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from zoneinfo import ZoneInfo

from src.config import settings
from src.errors import NotClockedIn
from src.flows.base import Flow, TurnContext
from src.logging_context import get_turn_logger
from src.prompts.messages import get_message
from src.schemas.session_schema import Session
from src.schemas.turn_schema import FlowId
from src.utils import round_money

logger = get_turn_logger(__name__)

CLOCK_IN_COMMAND = "clock in"
CLOCK_OUT_COMMAND = "clock out"

_SECONDS_PER_HOUR = Decimal(3600)


def compute_shift_pay(
    clock_in_at: datetime, clock_out_at: datetime, hourly_wage: Decimal
) -> tuple[Decimal, Decimal]:
    """Return (hours_worked, pay), both rounded to 2 dp.

    Elapsed time is clamped at zero so an out-of-order delivery can never
    produce negative hours.

    Examples:
        >>> from datetime import timedelta
        >>> start = datetime(2025, 3, 15, 9, 0)
        >>> compute_shift_pay(start, start + timedelta(hours=2), Decimal("14.50"))
        (Decimal('2.00'), Decimal('29.00'))
    """
    elapsed = max((clock_out_at - clock_in_at).total_seconds(), 0.0)
    hours = Decimal(str(elapsed)) / _SECONDS_PER_HOUR
    return round_money(hours), round_money(hours * hourly_wage)


def format_local_time(moment: datetime) -> str:
    """Render a timestamp in the restaurant's time zone."""
    return moment.astimezone(ZoneInfo(settings.business.timezone)).strftime("%H:%M")


class ClockingFlow(Flow):
    """Records shift start and end on the session."""

    handles = (FlowId.CLOCKING,)

    def __init__(self, policy: Optional[str] = None) -> None:
        self._policy = policy or settings.flows.clock_in_policy

    async def handle(self, ctx: TurnContext) -> str:
        if ctx.text == CLOCK_OUT_COMMAND:
            return self.clock_out(ctx)
        return self.clock_in(ctx)

    def _display_name(self, ctx: TurnContext) -> str:
        return ctx.session.name or get_message("team_member", ctx.locale)

    def clock_in(self, ctx: TurnContext) -> str:
        session: Session = ctx.session
        if session.clock_in_at is not None and self._policy == "keep_first":
            logger.info("Clock-in ignored, already clocked in since %s", session.clock_in_at)
            return get_message(
                "clock_in_kept", ctx.locale,
                time=format_local_time(session.clock_in_at), name=self._display_name(ctx),
            )
        if session.clock_in_at is not None:
            logger.info("Clock-in overwrites previous clock-in at %s", session.clock_in_at)

        session.clock_in_at = ctx.now
        logger.info("Clocked in at %s", ctx.now.isoformat())
        return get_message(
            "clock_in", ctx.locale,
            time=format_local_time(ctx.now), name=self._display_name(ctx),
        )

    def clock_out(self, ctx: TurnContext) -> str:
        session: Session = ctx.session
        if session.clock_in_at is None:
            raise NotClockedIn("Clock-out without a recorded clock-in")

        hours, pay = compute_shift_pay(session.clock_in_at, ctx.now, session.hourly_wage)
        session.clock_in_at = None
        logger.info("Clocked out: %s hours, pay %s", hours, pay)
        return get_message(
            "clock_out", ctx.locale,
            name=self._display_name(ctx),
            hours=hours,
            currency=settings.business.currency_symbol,
            pay=pay,
        )
