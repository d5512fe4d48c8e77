"""
Offline console demo — runs full shift conversations without any API keys.

Drives the real turn engine, router, session store and flows. The text
assistant is replaced by an offline one that pulls numbers out of the
message for forecasts and echoes a canned answer otherwise. No LLM, no
network calls. Designed for live demo walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --scenario forecast
    python console_demo.py --scenario shift
"""

import argparse
import asyncio
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from src.config import settings
from src.conversation.engine import TurnEngine
from src.schemas.turn_schema import InboundMessage

BLUE = "\033[94m"
GREEN = "\033[92m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

_NUMBER = re.compile(r"\d+(?:\.\d+)?")


class OfflineAssistant:
    """Deterministic text assistant for demos: no model, no network."""

    async def ask(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        last_line = prompt.strip().splitlines()[-1]
        return f"(offline assistant) Noted: {last_line}"

    async def extract(
        self, instruction_prompt: str, schema_hint: str, user_text: str
    ) -> dict[str, Any]:
        numbers = _NUMBER.findall(user_text)
        if len(numbers) < 3:
            return {"customers": None, "avgSpend": None, "sales": None}
        customers, avg_spend, sales = numbers[:3]
        return {"customers": customers, "avgSpend": avg_spend, "sales": sales}


class ConsoleSession:
    """Simulates one staff member texting the assistant from the terminal."""

    SENDER_ID = "+447700900000"
    MAX_INPUT_LENGTH = 500

    # Pre-scripted scenarios for --scenario flag, as (minutes after start, message)
    SCENARIOS: dict[str, list[tuple[int, str]]] = {
        "onboarding": [
            (0, "start onboarding"),
            (1, "Maria Popescu"),
            (2, "uploaded"),
            (5, "done"),
        ],
        "shift": [
            (0, "clock in"),
            (5, "start kitchen checklist"),
            (20, "done"),
            (30, "the fridge is at 7 degrees"),
            (35, "done"),
            (480, "clock out"),
        ],
        "forecast": [
            (0, "make a forecast"),
            (1, "100 customers, 10 avg spend, 900 sales"),
            (2, "no idea"),
            (3, "120 customers, 9 avg spend, 1000 sales"),
            (4, "90 customers, 11 avg spend, 950 sales"),
        ],
        "maintenance": [
            (0, "the fryer is broken again"),
        ],
    }

    def __init__(self) -> None:
        self.engine = TurnEngine(assistant=OfflineAssistant())
        self._loop = asyncio.new_event_loop()
        self._started_at = datetime.now(timezone.utc)

    def assistant_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[Assistant]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _send(self, text: str, received_at: Optional[datetime] = None) -> None:
        message = InboundMessage(
            sender_id=self.SENDER_ID,
            text=text,
            received_at=received_at or datetime.now(timezone.utc),
        )
        reply = self._loop.run_until_complete(self.engine.handle(message))
        self.assistant_say(reply.text)
        session = self.engine.store.get_or_create(self.SENDER_ID)
        self.system_log(
            f"flow={reply.flow.value if reply.flow else '-'} "
            f"onboarding={session.onboarding_step.name} "
            f"active={session.active_flow.value} "
            f"forecast_days={len(session.forecast_days)}"
        )

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  SHIFT ASSISTANT - Scenario: {scenario}{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

        for minutes, text in steps:
            print(f"\n{BLUE}[Staff +{minutes}m] {RESET}{text}")
            self._send(text, self._started_at + timedelta(minutes=minutes))

        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def run(self) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  SHIFT ASSISTANT - Console Demo{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}  Type 'quit' to exit{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

        while True:
            user_input = input(f"\n{BLUE}[Staff] {RESET}").strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.assistant_say("That was quite long. Could you keep it brief for me?")
                continue
            self._send(user_input)


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
