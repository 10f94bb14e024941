"""
Dialog manager: one utterance in, one response envelope out.

For each turn it classifies the utterance, resolves the session under its
per-session lock, runs the handler for the intent, and records the intent
on the session. Bad user input never raises; every path yields a
well-formed InterpretResponse.

Usage:
    manager = DialogManager(EarningsLookup.from_file(path))
    response = manager.handle(InterpretRequest(transcript="Aaj ki kamai kitni hai"))
    response.to_envelope()
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from saathi.config import AppConfig, DialogConfig, settings
from saathi.conversation.intent_classifier import ClassificationResult, classify
from saathi.conversation.session_store import SessionStore, build_eviction_policy
from saathi.conversation.state_machine import (
    FormCompletedError,
    InvalidTransitionError,
    advance_form,
    new_form,
)
from saathi.logging_context import session_context
from saathi.prompts import responses
from saathi.schemas.dialog_schema import (
    Action,
    ActionType,
    Card,
    DateRange,
    FormStartResponse,
    Intent,
    InterpretRequest,
    InterpretResponse,
)
from saathi.schemas.session_schema import FormStage, Session
from saathi.tools.earnings import EarningsLookup

logger = logging.getLogger(__name__)


@dataclass
class TurnReply:
    """Handler output before it is wrapped into the envelope."""
    text: str
    card: Optional[Card] = None
    action: Optional[Action] = None


@dataclass
class Turn:
    """Everything a handler needs to know about the current turn."""
    session: Session
    request: InterpretRequest
    result: ClassificationResult
    transcript: str


class DialogManager:
    """Routes classified utterances through per-session dialog state."""

    def __init__(
        self,
        lookup: EarningsLookup,
        store: Optional[SessionStore] = None,
        config: DialogConfig = settings.dialog,
    ) -> None:
        self._lookup = lookup
        self._store = store if store is not None else SessionStore()
        self._config = config
        self._handlers: dict[Intent, Callable[[Turn], TurnReply]] = {
            Intent.SAHAYATA: self._handle_sahayata,
            Intent.START_FORM: self._handle_start_form,
            Intent.QUERY_EARNINGS: self._handle_query_earnings,
            Intent.COMPARE_PERIOD: self._handle_compare,
            Intent.FORM_FIELD_ANSWER: self._handle_form_field_answer,
            Intent.SMALL_TALK: self._handle_small_talk,
        }

    @classmethod
    def from_config(cls, config: AppConfig = settings) -> "DialogManager":
        """Build a manager from configuration, loading the earnings dataset eagerly.

        Raises:
            DatasetLoadError: If the dataset cannot be loaded. Startup must stop.
        """
        lookup = EarningsLookup.from_file(config.data.earnings_path)
        store = SessionStore(
            build_eviction_policy(config.session),
            default_locale=config.dialog.default_locale,
        )
        return cls(lookup, store, config.dialog)

    # ------------------------------------------------------------------ #
    # Entry points
    # ------------------------------------------------------------------ #

    def interpret(self, payload: Any) -> InterpretResponse:
        """Handle a loosely shaped request mapping (e.g. a decoded JSON body)."""
        if not isinstance(payload, Mapping):
            logger.warning("Request payload is not a mapping; treating it as empty")
            payload = {}
        return self.handle(InterpretRequest.model_validate(dict(payload)))

    def handle(self, request: InterpretRequest) -> InterpretResponse:
        """Process one turn to completion."""
        transcript = request.transcript
        result = classify(transcript)

        with self._store.checkout(request.session_id) as (session_id, session):
            with session_context(session_id):
                intent = result.intent

                # Unmatched text is the answer to the open form field, if any.
                if intent == Intent.SMALL_TALK and _form_in_progress(session):
                    intent = Intent.FORM_FIELD_ANSWER
                    result = ClassificationResult(intent=intent, raw=transcript)

                session.last_intent = intent
                reply = self._handlers[intent](
                    Turn(session=session, request=request, result=result, transcript=transcript)
                )
                logger.info(
                    "Turn handled: intent=%s action=%s",
                    intent.value, reply.action.type.value if reply.action else None,
                )

        return InterpretResponse(
            session_id=session_id,
            intent=intent,
            entities=dict(result.entities),
            response_text=reply.text,
            card=reply.card,
            action=reply.action,
        )

    def start_form(
        self, form_id: Optional[str] = None, session_id: Optional[str] = None
    ) -> FormStartResponse:
        """Start a named form outside the classified-intent path."""
        form_id = form_id or self._config.default_form_id
        with self._store.checkout(session_id) as (resolved_id, session):
            with session_context(resolved_id):
                session.form_state = new_form(form_id)
                session.last_intent = Intent.START_FORM
                logger.info("Form '%s' started externally", form_id)

        return FormStartResponse(
            session_id=resolved_id,
            form_id=form_id,
            prompt=responses.FORM_START_PROMPT,
        )

    # ------------------------------------------------------------------ #
    # Intent handlers
    # ------------------------------------------------------------------ #

    def _handle_sahayata(self, turn: Turn) -> TurnReply:
        logger.info("Sahayata prompt issued")
        return TurnReply(
            text=responses.SAHAYATA_REPLY,
            action=Action(type=ActionType.SAHAYATA_PROMPT),
        )

    def _handle_start_form(self, turn: Turn) -> TurnReply:
        turn.session.form_state = new_form(self._config.default_form_id)
        return TurnReply(
            text=responses.FORM_STARTED_REPLY,
            action=Action(type=ActionType.START_FORM, field=FormStage.NAME.value),
        )

    def _handle_query_earnings(self, turn: Turn) -> TurnReply:
        driver_id = turn.request.driver_id or self._config.default_driver_id
        date_range = DateRange(turn.result.entities.get("date_range", DateRange.TODAY.value))
        # after_expenses is classified but the reply always narrates the full breakdown.
        summary = self._lookup.summarize(driver_id, date_range)
        if not summary.found or summary.breakdown is None:
            return TurnReply(text=responses.EARNINGS_NOT_FOUND_REPLY)

        return TurnReply(
            text=responses.build_earnings_reply(summary.breakdown),
            card=responses.build_earnings_card(summary.breakdown),
            action=Action(type=ActionType.SHOW_CARD),
        )

    def _handle_compare(self, turn: Turn) -> TurnReply:
        return TurnReply(text=responses.COMPARE_REPLY, action=Action(type=ActionType.COMPARE))

    def _handle_form_field_answer(self, turn: Turn) -> TurnReply:
        form = turn.session.form_state
        if form is None:
            return TurnReply(text=responses.NO_ACTIVE_FORM_REPLY)

        answer = turn.result.raw if turn.result.raw is not None else turn.transcript
        try:
            next_form, effect = advance_form(form, answer)
        except FormCompletedError:
            logger.info("Answer ignored: form '%s' already completed", form.form_id)
            return TurnReply(text=responses.FORM_ALREADY_COMPLETED_REPLY)
        except InvalidTransitionError as exc:
            logger.warning("Form answer not applied: %s", exc)
            return TurnReply(text=responses.FIELD_NOT_UNDERSTOOD_REPLY)

        turn.session.form_state = next_form
        if effect.completed:
            logger.info("Form '%s' completed", next_form.form_id)
            return TurnReply(
                text=responses.build_form_completed_reply(next_form.values),
                action=Action(type=ActionType.FORM_COMPLETED, values=dict(next_form.values)),
            )

        return TurnReply(
            text=responses.build_field_recorded_reply(effect.field, effect.value, effect.next_stage),
            action=Action(type=ActionType.FORM_NEXT, nextField=effect.next_stage.value),
        )

    def _handle_small_talk(self, turn: Turn) -> TurnReply:
        return TurnReply(text=responses.FALLBACK_REPLY)


def _form_in_progress(session: Session) -> bool:
    return session.form_state is not None and not session.form_state.completed
