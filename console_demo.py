"""
Offline console demo: talk to Saathi by typing instead of speaking.

Drives the real dialog manager, session store, and earnings lookup. No
speech front end and no network calls; what you type is treated exactly
like a speech-to-text transcript.

Usage:
    python console_demo.py
    python console_demo.py --scenario form
    python console_demo.py --scenario earnings --driver-id D2
"""

import argparse
import json
import sys
from typing import Optional

from saathi.config import settings
from saathi.conversation.dialog_manager import DialogManager
from saathi.schemas.dialog_schema import InterpretRequest, InterpretResponse

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleSession:
    """Runs a single driver conversation in the terminal."""

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "earnings": [
            "Aaj ka net kamai kitni hai",
            "pichle hafta ki kamai batao",
        ],
        "form": [
            "Mujhe onboarding form bharna hai",
            "Ramesh Kumar",
            "MH12AB1234",
            "call me at 98765 43210",
        ],
        "sahayata": [
            "madad chahiye, accident ho gaya",
        ],
        "compare": [
            "Is hafte ka business behtar hai kya",
        ],
    }

    def __init__(self, manager: DialogManager, driver_id: Optional[str] = None) -> None:
        self.manager = manager
        self.driver_id = driver_id
        self.session_id: Optional[str] = None

    def saathi_say(self, response: InterpretResponse) -> None:
        print(f"{GREEN}{BOLD}[Saathi]{RESET} {GREEN}{response.response_text}{RESET}")
        if response.card is not None:
            print(f"  {YELLOW}{BOLD}{response.card.title}{RESET}")
            for bullet in response.card.bullets:
                print(f"  {YELLOW}- {bullet}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  PORTER SAATHI - {title}{RESET}")
        print(f"{BOLD}  Driver: {self.driver_id or settings.dialog.default_driver_id}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def process(self, text: str) -> InterpretResponse:
        response = self.manager.handle(
            InterpretRequest(transcript=text, session_id=self.session_id, driver_id=self.driver_id)
        )
        self.session_id = response.session_id
        self.saathi_say(response)
        action = response.action.model_dump(mode="json") if response.action else None
        self.system_log(f"Intent: {response.intent.value}  Entities: {response.entities}")
        self.system_log(f"Action: {json.dumps(action, ensure_ascii=False)}")
        return response

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        for step in steps:
            print(f"\n{BLUE}[Driver] {RESET}{step}")
            self.process(step)

        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{DIM}  Session: {self.session_id}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def run(self) -> None:
        self._banner("Console Demo")
        print(f"{DIM}  Type 'quit' to exit{RESET}")

        while True:
            try:
                user_input = input(f"\n{BLUE}[Driver] {RESET}").strip()
            except EOFError:
                user_input = "quit"
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            self.process(user_input)


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    parser.add_argument("--driver-id", default=None, help="Driver whose earnings are queried")
    args = parser.parse_args()

    session = ConsoleSession(DialogManager.from_config(), driver_id=args.driver_id)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    sys.exit(main())
