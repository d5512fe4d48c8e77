"""
Multi-day sales forecast collected through structured extraction.

Each message while the forecast is active is sent to the text assistant
for extraction into a DayRecord. A failed extraction leaves the collected
days untouched, so the same day can be retried any number of times. The
last day produces the summary and closes the flow in the same commit.
"""

from typing import Any, Optional

from pydantic import ValidationError

from src.assistant.text_assistant import extract_bounded
from src.config import settings
from src.errors import InvalidTransitionInput
from src.flows.base import Flow, TurnContext
from src.logging_context import get_turn_logger
from src.prompts.messages import get_message
from src.prompts.system_prompts import FORECAST_EXTRACTION_PROMPT, FORECAST_SCHEMA_HINT
from src.schemas.session_schema import ActiveFlow, DayRecord, Locale
from src.schemas.turn_schema import FlowId
from src.utils import round_money

logger = get_turn_logger(__name__)


def parse_day_record(data: dict[str, Any]) -> DayRecord:
    """Validate extracted fields into a DayRecord.

    Raises:
        InvalidTransitionInput: If a field is missing, non-numeric, negative, or too large.
    """
    try:
        return DayRecord.model_validate(data)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise InvalidTransitionInput(f"Unusable forecast fields: {fields}") from None


def build_summary(days: list[DayRecord], locale: Optional[Locale] = None) -> str:
    """Render one projected-vs-reported line per day."""
    currency = settings.business.currency_symbol
    lines = [
        get_message(
            "forecast_line", locale,
            day=number,
            currency=currency,
            projected=round_money(day.customers * day.avg_spend),
            sales=day.sales,
        )
        for number, day in enumerate(days, start=1)
    ]
    return get_message("forecast_summary", locale, summary="\n".join(lines))


class ForecastFlow(Flow):
    """Collects one DayRecord per message until the forecast is complete."""

    handles = (FlowId.FORECAST_START, FlowId.FORECAST)

    def __init__(self, days_required: int = 0) -> None:
        self._days_required = days_required or settings.flows.forecast_days

    async def handle(self, ctx: TurnContext) -> str:
        if ctx.flow == FlowId.FORECAST_START:
            return self.start(ctx)
        return await self.collect_day(ctx)

    def start(self, ctx: TurnContext) -> str:
        session = ctx.session
        session.clear_flow()
        session.active_flow = ActiveFlow.FORECAST
        logger.info("Forecast started")
        return get_message("forecast_start", ctx.locale, days=self._days_required)

    async def collect_day(self, ctx: TurnContext) -> str:
        day_number = len(ctx.session.forecast_days) + 1
        data = await extract_bounded(
            ctx.assistant, FORECAST_EXTRACTION_PROMPT, FORECAST_SCHEMA_HINT, ctx.raw_text
        )
        record = parse_day_record(data)

        # Commit: no awaits past this point.
        session = ctx.session
        days = [*session.forecast_days, record]
        logger.info("Forecast day %d recorded", day_number)

        if len(days) < self._days_required:
            session.forecast_days = days
            return get_message("forecast_next", ctx.locale, day=len(days) + 1)

        session.clear_flow()
        logger.info("Forecast complete (%d days)", len(days))
        return build_summary(days, ctx.locale)
