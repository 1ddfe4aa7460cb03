"""Concept taxonomy and interpretation provenance enums."""

from __future__ import annotations

from enum import StrEnum


class ConceptType(StrEnum):
    """The six concept types an AAC board can express."""

    ACTION = "action"
    QUANTITY = "quantity"
    PAYMENT = "payment"
    BENEFIT = "benefit"
    ITEM = "item"
    MODIFIER = "modifier"


class InterpretationSource(StrEnum):
    """Which interpreter tier produced an interpretation."""

    LIBRARY = "library"
    EXTERNAL = "external"
    FALLBACK = "fallback"


class ResultSource(StrEnum):
    """Provenance reported to callers; ``error`` when no board was built."""

    LIBRARY = "library"
    EXTERNAL = "external"
    FALLBACK = "fallback"
    ERROR = "error"


class AacPriority(StrEnum):
    """How strongly a catalog entry should be surfaced."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


CONCEPT_TYPES: frozenset[str] = frozenset(t.value for t in ConceptType)
