"""
Slot definitions for the onboarding form.

Each slot maps a form stage to its display name, the prompt asked when
the form arrives at it, and the normalizer applied to the driver's answer.
Name and vehicle number are stored exactly as spoken; the phone slot keeps
only the digits, falling back to the raw answer when there are none.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from saathi.schemas.session_schema import FormStage
from saathi.utils import extract_digits

logger = logging.getLogger(__name__)


def _keep_as_entered(value: str) -> str:
    return value


def _phone_digits(value: str) -> str:
    return extract_digits(value) or value


@dataclass(frozen=True)
class SlotDefinition:
    """Schema for a single form field to collect."""

    stage: FormStage
    display_name: str
    prompt: str
    normalizer: Callable[[str], str] = _keep_as_entered


ONBOARDING_SLOTS: list[SlotDefinition] = [
    SlotDefinition(
        stage=FormStage.NAME,
        display_name="Naam",
        prompt="Aapka poora naam bataiye.",
    ),
    SlotDefinition(
        stage=FormStage.VEHICLE_REGISTRATION,
        display_name="Vehicle",
        prompt="Ab vehicle registration number bataiye.",
    ),
    SlotDefinition(
        stage=FormStage.PHONE,
        display_name="Phone",
        prompt="Ab phone number bataiye.",
        normalizer=_phone_digits,
    ),
]


def get_slot_definition(stage: FormStage) -> Optional[SlotDefinition]:
    """Return the slot collected at a stage, or None for the terminal stage."""
    for defn in ONBOARDING_SLOTS:
        if defn.stage == stage:
            return defn
    return None


def normalize_slot(stage: FormStage, raw_value: str) -> str:
    """Apply the slot-specific normalization rule."""
    defn = get_slot_definition(stage)
    if defn is None:
        raise ValueError(f"No slot is collected at stage '{stage.value}'")
    return defn.normalizer(raw_value)


def get_confirmation_summary(values: dict[str, str]) -> str:
    """Read-back of every collected slot, in form order."""
    parts = [
        f"{defn.display_name}: {values[defn.stage.value]}"
        for defn in ONBOARDING_SLOTS
        if defn.stage.value in values
    ]
    return ", ".join(parts)
