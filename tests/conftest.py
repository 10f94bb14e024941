"""Shared test fixtures and helpers."""

from typing import Optional

import pytest

from saathi.conversation.dialog_manager import DialogManager
from saathi.conversation.session_store import NoEviction, SessionStore
from saathi.schemas.dialog_schema import InterpretRequest, InterpretResponse
from saathi.schemas.earnings_schema import EarningsRecord
from saathi.tools.earnings import EarningsLookup


class FakeClock:
    """Manually advanced monotonic clock for eviction tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_record(
    driver_id: str = "D1",
    gross: float = 1000,
    expenses: float = 200,
    penalties: Optional[list[float]] = None,
    rewards: Optional[list[float]] = None,
    reason: str = "",
) -> EarningsRecord:
    """Helper to create an EarningsRecord from plain amounts."""
    return EarningsRecord.model_validate({
        "driver_id": driver_id,
        "gross_earnings": gross,
        "expenses": expenses,
        "penalties": [{"amount": a} for a in (penalties if penalties is not None else [50])],
        "rewards": [{"amount": a} for a in (rewards if rewards is not None else [20])],
        "reason": reason,
    })


@pytest.fixture
def earnings_records():
    return [
        make_record("D1", 1000, 200, [50], [20], reason="Late delivery penalty"),
        make_record("D9", 100, 300, [25], [], reason="Fuel heavy day"),
    ]


@pytest.fixture
def lookup(earnings_records):
    return EarningsLookup(earnings_records)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(NoEviction(), clock=clock)


@pytest.fixture
def manager(lookup, store):
    return DialogManager(lookup, store)


@pytest.fixture
def say(manager):
    """Send utterances through one conversation, threading the session id."""
    state: dict[str, Optional[str]] = {"session_id": None}

    def _say(text: str, driver_id: Optional[str] = None) -> InterpretResponse:
        response = manager.handle(
            InterpretRequest(transcript=text, session_id=state["session_id"], driver_id=driver_id)
        )
        state["session_id"] = response.session_id
        return response

    return _say
