"""AAC safety rules for concepts.

Rule 1: only the six concrete concept types are allowed.
Rule 2: quantities must be explicit numbers.
Rule 3: a value is never empty.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from aacboard.domain.models import Concept
from aacboard.domain.types import CONCEPT_TYPES, ConceptType


@dataclass
class ValidationResult:
    """Result of a concept validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def is_number(value: object) -> bool:
    """True for finite int/float values; bools are not quantities."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def check_concepts(concepts: Iterable[Concept]) -> ValidationResult:
    """Collect every rule violation across *concepts*."""
    errors: list[str] = []
    for index, concept in enumerate(concepts):
        if concept.type not in CONCEPT_TYPES:
            errors.append(f"concept {index}: invalid type {concept.type!r}")
            continue
        if concept.value is None or concept.value == "":
            errors.append(f"concept {index}: value cannot be empty")
            continue
        if isinstance(concept.value, float) and not math.isfinite(concept.value):
            errors.append(f"concept {index}: value must be finite, got {concept.value!r}")
            continue
        if concept.type == ConceptType.QUANTITY and not is_number(concept.value):
            errors.append(f"concept {index}: quantity must be a number, got {concept.value!r}")
    return ValidationResult(valid=not errors, errors=errors)


def validate_concepts(concepts: Iterable[Concept]) -> bool:
    """Whether every concept follows the AAC safety rules."""
    return check_concepts(concepts).valid
