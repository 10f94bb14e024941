"""
Rule-based intent classifier for short Hindi/English driver utterances.

Rules are evaluated in a fixed priority order and the first match wins.
The order matters because keyword sets overlap: a help request that also
mentions a number must still route to sahayata, and "pichle hafta ki kamai"
is an earnings query, not a comparison.

Usage:
    result = classify("Aaj ka net kamai kitni hai")
    assert result.intent == Intent.QUERY_EARNINGS
    assert result.entities == {"date_range": "today", "after_expenses": True}
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from saathi.conversation.entities import detect_date_range
from saathi.schemas.dialog_schema import Intent

logger = logging.getLogger(__name__)

HELP_KEYWORDS = ("help", "sahayata", "emergency", "madad")
FORM_KEYWORDS = ("form", "onboard", "onboarding", "form bhar")
EARNINGS_KEYWORDS = (
    "earn", "kamai", "kitni", "net ka", "net kamai", "after expenses", "baad",
)
AFTER_EXPENSES_KEYWORDS = ("after expenses", "baad", "net")
COMPARE_KEYWORDS = ("compare", "behtar", "pichle", "better")

VEHICLE_REGISTRATION_PATTERN = re.compile(
    r"[a-z]{2}\d{1,2}[a-z]{1,2}\d{1,4}", re.IGNORECASE
)
FOUR_DIGIT_PATTERN = re.compile(r"\d{4}")
DIGIT_RUN_PATTERN = re.compile(r"\d+")

EntityExtractor = Callable[[str], dict[str, Any]]


@dataclass(frozen=True)
class ClassificationResult:
    """Intent tag plus the entities extracted for it."""
    intent: Intent
    entities: dict[str, Any] = field(default_factory=dict)
    raw: Optional[str] = None


@dataclass(frozen=True)
class IntentRule:
    """One entry in the priority list: a predicate on lowered text and its intent."""
    name: str
    predicate: Callable[[str], bool]
    intent: Intent
    extractor: Optional[EntityExtractor] = None
    carries_raw: bool = False


def _contains_any(keywords: tuple[str, ...]) -> Callable[[str], bool]:
    return lambda text: any(keyword in text for keyword in keywords)


def _looks_like_field_answer(text: str) -> bool:
    return bool(
        VEHICLE_REGISTRATION_PATTERN.search(text)
        or FOUR_DIGIT_PATTERN.search(text)
        or DIGIT_RUN_PATTERN.search(text)
    )


def _earnings_entities(text: str) -> dict[str, Any]:
    return {
        "date_range": detect_date_range(text).value,
        "after_expenses": any(k in text for k in AFTER_EXPENSES_KEYWORDS),
    }


def _compare_entities(text: str) -> dict[str, Any]:
    return {"date_range": detect_date_range(text).value}


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule("help", _contains_any(HELP_KEYWORDS), Intent.SAHAYATA),
    IntentRule("form", _contains_any(FORM_KEYWORDS), Intent.START_FORM),
    IntentRule(
        "earnings", _contains_any(EARNINGS_KEYWORDS), Intent.QUERY_EARNINGS,
        extractor=_earnings_entities,
    ),
    IntentRule(
        "compare", _contains_any(COMPARE_KEYWORDS), Intent.COMPARE_PERIOD,
        extractor=_compare_entities,
    ),
    IntentRule(
        "field_answer", _looks_like_field_answer, Intent.FORM_FIELD_ANSWER,
        carries_raw=True,
    ),
)


def classify(utterance: str, rules: tuple[IntentRule, ...] = INTENT_RULES) -> ClassificationResult:
    """
    Classify an utterance into an intent with entities.

    Args:
        utterance: Raw driver text. Case is ignored for matching; the
            original text is kept as ``raw`` for field answers.
        rules: Priority-ordered rule list.

    Returns:
        The first matching rule's result, or small_talk with no entities.
    """
    lower = utterance.lower()
    for rule in rules:
        if not rule.predicate(lower):
            continue
        entities = rule.extractor(lower) if rule.extractor else {}
        logger.debug("Utterance matched rule '%s' -> %s", rule.name, rule.intent.value)
        return ClassificationResult(
            intent=rule.intent,
            entities=entities,
            raw=utterance if rule.carries_raw else None,
        )
    return ClassificationResult(intent=Intent.SMALL_TALK)
