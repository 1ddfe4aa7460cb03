"""FallbackInterpreter — last tier: offline keyword and regex heuristics.

Each check is independent; every one that fires contributes concepts in
the order below.  Nothing firing means no interpretation.
"""

from __future__ import annotations

import re

from aacboard.domain.models import Concept, SemanticInterpretation
from aacboard.domain.types import InterpretationSource

FALLBACK_CONFIDENCE = 0.5

_PERCENT_OFF_RE = re.compile(r"(\d+)\s*%\s*off")
_FREE_RE = re.compile(r"\bfree\b")
_BUY_RE = re.compile(r"\bbuy\b")
_NUMBER_RE = re.compile(r"\b(\d+)\b")
_ITEM_RE = re.compile(r"\b(?:items?|products?)\b")


class FallbackInterpreter:
    """Pure, deterministic heuristics used when both other tiers fail."""

    source = InterpretationSource.FALLBACK

    def concepts_for(self, phrase: str) -> list[Concept]:
        text = phrase.lower().strip()
        concepts: list[Concept] = []

        percent = _PERCENT_OFF_RE.search(text)
        if percent:
            concepts.append(Concept(type="benefit", value="discount"))
            concepts.append(Concept(type="modifier", value=f"{percent.group(1)}_percent_off"))

        if _FREE_RE.search(text):
            concepts.append(Concept(type="benefit", value="free"))

        if _BUY_RE.search(text):
            concepts.append(Concept(type="action", value="buy"))

        number = _NUMBER_RE.search(text)
        if number and not percent:
            concepts.append(Concept(type="quantity", value=int(number.group(1))))

        if _ITEM_RE.search(text):
            concepts.append(Concept(type="item", value="item"))

        return concepts

    def interpret(self, phrase: str) -> SemanticInterpretation | None:
        concepts = self.concepts_for(phrase)
        if not concepts:
            return None
        return SemanticInterpretation(
            intent="purchase",
            concepts=tuple(concepts),
            source=InterpretationSource.FALLBACK,
            confidence=FALLBACK_CONFIDENCE,
        )

    fallback = interpret
