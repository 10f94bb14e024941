"""Per-session dialog state and the onboarding form it may carry."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from saathi.schemas.dialog_schema import Intent


class FormStage(str, Enum):
    """Stages of the onboarding form, in the only order they may be visited."""
    NAME = "name"
    VEHICLE_REGISTRATION = "vehicle_registration"
    PHONE = "phone"
    COMPLETED = "completed"


@dataclass
class FormState:
    """An in-progress (or finished) onboarding form."""
    form_id: str
    current_field: FormStage = FormStage.NAME
    values: dict[str, str] = field(default_factory=dict)

    @property
    def completed(self) -> bool:
        return self.current_field == FormStage.COMPLETED


@dataclass
class Session:
    """
    Server-side state for one conversation.

    Created on the first utterance that references an unknown or absent
    session id and mutated by the dialog manager on every turn.
    """
    session_id: str
    form_state: Optional[FormState] = None
    last_intent: Optional[Intent] = None
    locale: str = "hi-IN"
