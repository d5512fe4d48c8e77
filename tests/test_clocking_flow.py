"""Tests for clock-in / clock-out and pay computation."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.conversation.engine import TurnEngine
from src.flows.clocking import ClockingFlow, compute_shift_pay, format_local_time
from src.flows.registry import build_flow_table
from src.schemas.turn_schema import FlowId
from tests.conftest import SHIFT_START, send, session_of

WAGE = Decimal("14.50")


class TestComputeShiftPay:
    def test_two_hours(self):
        hours, pay = compute_shift_pay(SHIFT_START, SHIFT_START + timedelta(hours=2), WAGE)
        assert str(hours) == "2.00"
        assert str(pay) == "29.00"

    def test_rounds_half_up(self):
        # 1h01m = 1.01666.. hours -> 1.02; pay 14.74166.. -> 14.74
        hours, pay = compute_shift_pay(SHIFT_START, SHIFT_START + timedelta(minutes=61), WAGE)
        assert hours == Decimal("1.02")
        assert pay == Decimal("14.74")

    def test_pay_uses_unrounded_hours(self):
        # 20 min = 0.3333h; pay = 4.8333.. -> 4.83 (not 0.33 * 14.50 = 4.785 -> 4.79)
        hours, pay = compute_shift_pay(SHIFT_START, SHIFT_START + timedelta(minutes=20), WAGE)
        assert hours == Decimal("0.33")
        assert pay == Decimal("4.83")

    def test_negative_elapsed_is_clamped(self):
        hours, pay = compute_shift_pay(SHIFT_START, SHIFT_START - timedelta(hours=1), WAGE)
        assert hours == Decimal("0.00")
        assert pay == Decimal("0.00")


class TestClockOutWithoutClockIn:
    @pytest.mark.asyncio
    async def test_warns_and_leaves_state(self, engine):
        reply = await send(engine, "clock out")
        assert "haven't clocked in" in reply.text
        assert reply.flow == FlowId.CLOCKING
        assert session_of(engine).clock_in_at is None

    @pytest.mark.asyncio
    async def test_second_clock_out_warns(self, engine):
        await send(engine, "clock in", SHIFT_START)
        await send(engine, "clock out", SHIFT_START + timedelta(hours=1))
        reply = await send(engine, "clock out", SHIFT_START + timedelta(hours=2))
        assert "haven't clocked in" in reply.text


class TestClockInOut:
    @pytest.mark.asyncio
    async def test_clock_in_records_receipt_time(self, engine):
        reply = await send(engine, "clock in", SHIFT_START)
        assert session_of(engine).clock_in_at == SHIFT_START
        assert "Clock-in recorded" in reply.text
        assert format_local_time(SHIFT_START) in reply.text

    @pytest.mark.asyncio
    async def test_two_hour_shift_pays_29(self, engine):
        await send(engine, "clock in", SHIFT_START)
        reply = await send(engine, "clock out", SHIFT_START + timedelta(hours=2))
        assert "2.00 hours" in reply.text
        assert "£29.00" in reply.text
        assert session_of(engine).clock_in_at is None

    @pytest.mark.asyncio
    async def test_uses_name_from_onboarding(self, engine):
        await send(engine, "start onboarding")
        await send(engine, "Ana")
        await send(engine, "ok")
        await send(engine, "done")
        reply = await send(engine, "clock in")
        assert "Ana" in reply.text

    @pytest.mark.asyncio
    async def test_falls_back_to_team_member(self, engine):
        reply = await send(engine, "clock in")
        assert "team member" in reply.text

    @pytest.mark.asyncio
    async def test_naive_timestamp_treated_as_utc(self, engine):
        naive = datetime(2025, 3, 15, 9, 0)
        await send(engine, "clock in", naive)
        assert session_of(engine).clock_in_at == naive.replace(tzinfo=timezone.utc)


class TestClockInPolicy:
    @pytest.mark.asyncio
    async def test_overwrite_is_last_write_wins(self, engine):
        await send(engine, "clock in", SHIFT_START)
        later = SHIFT_START + timedelta(hours=1)
        await send(engine, "clock in", later)
        assert session_of(engine).clock_in_at == later

    @pytest.mark.asyncio
    async def test_keep_first_is_idempotent(self, assistant, store):
        engine = TurnEngine(
            assistant=assistant,
            store=store,
            flows=build_flow_table(ClockingFlow(policy="keep_first")),
        )
        await send(engine, "clock in", SHIFT_START)
        reply = await send(engine, "clock in", SHIFT_START + timedelta(hours=1))
        assert session_of(engine).clock_in_at == SHIFT_START
        assert "already clocked in" in reply.text


class TestClockingMidFlow:
    @pytest.mark.asyncio
    async def test_clock_out_mid_checklist_keeps_checklist(self, engine):
        await send(engine, "clock in", SHIFT_START)
        await send(engine, "start kitchen checklist")
        await send(engine, "done")
        reply = await send(engine, "clock out", SHIFT_START + timedelta(hours=2))
        session = session_of(engine)
        assert "£29.00" in reply.text
        assert session.checklist_kind == "kitchen checklist"
        assert session.checklist_progress == 1
