"""Intent tags, entities, and the request/response envelope of a dialog turn."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Intent(str, Enum):
    SAHAYATA = "sahayata"
    START_FORM = "start_form"
    QUERY_EARNINGS = "query_earnings"
    COMPARE_PERIOD = "compare_period"
    FORM_FIELD_ANSWER = "form_field_answer"
    SMALL_TALK = "small_talk"


class DateRange(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_WEEK = "last_week"


class ActionType(str, Enum):
    """Directive types the presentation layer understands."""
    SHOW_CARD = "show_card"
    START_FORM = "start_form"
    FORM_NEXT = "form_next"
    FORM_COMPLETED = "form_completed"
    SAHAYATA_PROMPT = "sahayata_prompt"
    COMPARE = "compare"


class InterpretRequest(BaseModel):
    """One utterance from the driver. A missing transcript is treated as empty."""

    transcript: str = ""
    session_id: Optional[str] = None
    driver_id: Optional[str] = None

    @field_validator("transcript", mode="before")
    @classmethod
    def _coerce_transcript(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("session_id", "driver_id", mode="before")
    @classmethod
    def _blank_id_is_missing(cls, value: Any) -> Any:
        # Scalars such as a JSON number keep their identity as text.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            return None
        return value


class Card(BaseModel):
    """Structured summary rendered next to the spoken reply."""
    title: str
    bullets: list[str] = Field(default_factory=list)


class Action(BaseModel):
    """UI directive. Directive-specific fields ride along as extras."""
    model_config = ConfigDict(extra="allow")

    type: ActionType


class InterpretResponse(BaseModel):
    """Outward envelope for a single dialog turn."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str
    intent: Intent
    entities: dict[str, Any] = Field(default_factory=dict)
    response_text: str = Field(alias="responseText")
    card: Optional[Card] = None
    action: Optional[Action] = None

    def to_envelope(self) -> dict[str, Any]:
        """Serialize with the wire field names."""
        return self.model_dump(mode="json", by_alias=True)


class FormStartResponse(BaseModel):
    """Reply to an externally triggered form start."""
    session_id: str
    form_id: str
    prompt: str
