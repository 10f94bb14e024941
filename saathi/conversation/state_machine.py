"""
Finite state machine for the onboarding form.

A form moves forward through name -> vehicle_registration -> phone ->
completed, one answered field per step. Stages never regress, and a
completed form accepts no further writes.

The transition function is pure: it returns a new FormState together with
the effect of the step, leaving the caller to store it.

Usage:
    form = new_form("onboard_doc")
    form, effect = advance_form(form, "Ramesh Kumar")
    assert form.current_field == FormStage.VEHICLE_REGISTRATION
"""

import logging
from dataclasses import dataclass

from saathi.conversation.slot_manager import normalize_slot
from saathi.schemas.session_schema import FormStage, FormState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormTransition:
    """A single valid stage transition."""
    from_stage: FormStage
    to_stage: FormStage


@dataclass(frozen=True)
class FormEffect:
    """What one step wrote into the form."""
    field: FormStage
    value: str
    next_stage: FormStage

    @property
    def completed(self) -> bool:
        return self.next_stage == FormStage.COMPLETED


class InvalidTransitionError(Exception):
    """Raised when no transition leaves the form's current stage."""


class FormCompletedError(InvalidTransitionError):
    """Raised when an answer arrives for a form that is already complete."""


FORM_TRANSITIONS: list[FormTransition] = [
    FormTransition(FormStage.NAME, FormStage.VEHICLE_REGISTRATION),
    FormTransition(FormStage.VEHICLE_REGISTRATION, FormStage.PHONE),
    FormTransition(FormStage.PHONE, FormStage.COMPLETED),
]


def new_form(form_id: str) -> FormState:
    """Create an empty form waiting for its first field."""
    return FormState(form_id=form_id, current_field=FormStage.NAME, values={})


def advance_form(form: FormState, answer: str) -> tuple[FormState, FormEffect]:
    """
    Record an answer for the current field and move to the next stage.

    Args:
        form: Current form state. Not modified.
        answer: The driver's raw answer text.

    Returns:
        (next form state, effect of this step)

    Raises:
        FormCompletedError: If the form is already complete.
        InvalidTransitionError: If no transition exists from the current stage.
    """
    if form.completed:
        raise FormCompletedError(
            f"Form '{form.form_id}' is already completed; refusing to overwrite values."
        )

    for t in FORM_TRANSITIONS:
        if t.from_stage != form.current_field:
            continue

        value = normalize_slot(t.from_stage, answer)
        values = dict(form.values)
        values[t.from_stage.value] = value
        next_form = FormState(form_id=form.form_id, current_field=t.to_stage, values=values)

        logger.debug(
            "Form '%s' transition: %s -> %s",
            form.form_id, t.from_stage.value, t.to_stage.value,
        )
        return next_form, FormEffect(field=t.from_stage, value=value, next_stage=t.to_stage)

    raise InvalidTransitionError(
        f"No valid transition for form '{form.form_id}' "
        f"from stage '{form.current_field.value}'."
    )
