"""Layered rule matching from normalized input to a single response."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .knowledge import KnowledgeBase
from .normalizer import NormalizedInput

FALLBACK_RESPONSE = (
    "I'm sorry, I don't have a specific answer for that. "
    "Try asking about 'Java', 'OOP', or say 'hello'."
)

RULE_TOKEN = "token"
RULE_PHRASE = "phrase"
RULE_CONTAINS = "contains"
RULE_FALLBACK = "fallback"

RULES = (RULE_TOKEN, RULE_PHRASE, RULE_CONTAINS, RULE_FALLBACK)


@dataclass(frozen=True)
class MatchDecision:
    response: str
    rule: str
    key: Optional[str] = None


def match(
    normalized: NormalizedInput,
    kb: KnowledgeBase,
    fallback: str = FALLBACK_RESPONSE,
) -> MatchDecision:
    """Run the rules in order and stop at the first hit.

    1. token: the earliest token that is a key.
    2. phrase: the whole joined input is a key.
    3. contains: the first multi-word key found inside the joined input.
       Plain substring test, so "so how are you doing" hits "how are you".
    4. fallback.

    Callers are expected to reject input without tokens beforehand.
    """
    for token in normalized.tokens:
        response = kb.lookup(token)
        if response is not None:
            return MatchDecision(response=response, rule=RULE_TOKEN, key=token)

    response = kb.lookup(normalized.joined)
    if response is not None:
        return MatchDecision(response=response, rule=RULE_PHRASE, key=normalized.joined)

    # single-word keys never take part here
    for key in kb.phrase_keys():
        if key in normalized.joined:
            return MatchDecision(response=kb.lookup(key), rule=RULE_CONTAINS, key=key)

    return MatchDecision(response=fallback, rule=RULE_FALLBACK)


def respond(
    normalized: NormalizedInput,
    kb: KnowledgeBase,
    fallback: str = FALLBACK_RESPONSE,
) -> str:
    return match(normalized, kb, fallback).response
