from saathi.conversation.dialog_manager import DialogManager
from saathi.conversation.intent_classifier import ClassificationResult, classify
from saathi.conversation.session_store import (
    LRUEviction,
    NoEviction,
    SessionStore,
    TTLEviction,
)
from saathi.conversation.state_machine import (
    FormCompletedError,
    InvalidTransitionError,
    advance_form,
    new_form,
)

__all__ = [
    "DialogManager",
    "ClassificationResult",
    "classify",
    "SessionStore",
    "TTLEviction",
    "LRUEviction",
    "NoEviction",
    "advance_form",
    "new_form",
    "InvalidTransitionError",
    "FormCompletedError",
]
