"""
Saathi dialog core entry point.

Loads the earnings dataset once, before any turn is served, then either
runs the console demo or interprets a single utterance and prints the
response envelope as JSON.

Usage:
    Console mode:   python main.py console
    Scenario:       python main.py scenario form
    One utterance:  python main.py interpret "Aaj ka net kamai kitni hai" --driver-id D1
    Start a form:   python main.py start-form onboard_doc
"""

import argparse
import json
import logging
import sys
from typing import Optional

from saathi.conversation.dialog_manager import DialogManager
from saathi.schemas.dialog_schema import InterpretRequest
from saathi.tools.earnings import DatasetLoadError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Porter Saathi dialog core")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("console", help="Interactive text console")

    scenario = sub.add_parser("scenario", help="Auto-play a scripted conversation")
    scenario.add_argument("name")
    scenario.add_argument("--driver-id", default=None)

    interpret = sub.add_parser("interpret", help="Interpret one utterance and print JSON")
    interpret.add_argument("transcript", nargs="?", default="")
    interpret.add_argument("--session-id", default=None)
    interpret.add_argument("--driver-id", default=None)

    start_form = sub.add_parser("start-form", help="Start a named form and print its prompt")
    start_form.add_argument("form_id", nargs="?", default=None)
    start_form.add_argument("--session-id", default=None)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        manager = DialogManager.from_config()
    except DatasetLoadError as exc:
        logger.critical("Startup aborted: %s", exc)
        return 1

    if args.command == "interpret":
        response = manager.handle(
            InterpretRequest(
                transcript=args.transcript,
                session_id=args.session_id,
                driver_id=args.driver_id,
            )
        )
        print(json.dumps(response.to_envelope(), ensure_ascii=False, indent=2))
        return 0

    if args.command == "start-form":
        started = manager.start_form(args.form_id, args.session_id)
        print(json.dumps(started.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    from console_demo import ConsoleSession

    if args.command == "scenario":
        ConsoleSession(manager, driver_id=args.driver_id).run_scenario(args.name)
    else:
        ConsoleSession(manager).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
