"""PromotionMatcher — fuzzy lookup of a phrase in the promotion catalog.

Scoring per pattern, against the normalized phrase:

- exact equality                    → 1.0
- substring containment either way  → 0.9
- otherwise normalized Levenshtein similarity

The single best (entry, score) wins; ties keep the earliest pattern in
catalog order.  Scores below the threshold are rejected.  The matcher
holds only read-only state and is safe to share between threads.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from aacboard.domain.catalog import PROMOTION_MAPPINGS
from aacboard.domain.models import PromotionMapping, SemanticInterpretation
from aacboard.domain.text import normalize_phrase, similarity
from aacboard.domain.types import InterpretationSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.7
EXACT_SCORE = 1.0
CONTAINS_SCORE = 0.9


def score_pattern(normalized_phrase: str, pattern: str) -> float:
    """Confidence that *normalized_phrase* means *pattern*."""
    normalized_pattern = normalize_phrase(pattern)
    if normalized_phrase == normalized_pattern:
        return EXACT_SCORE
    if normalized_pattern in normalized_phrase or normalized_phrase in normalized_pattern:
        return CONTAINS_SCORE
    return similarity(normalized_phrase, normalized_pattern)


class PromotionMatcher:
    """Deterministic first tier: match a phrase against the static catalog."""

    source = InterpretationSource.LIBRARY

    def __init__(
        self,
        catalog: Sequence[PromotionMapping] = PROMOTION_MAPPINGS,
        *,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    ) -> None:
        self._catalog = tuple(catalog)
        self._threshold = confidence_threshold

    @property
    def confidence_threshold(self) -> float:
        return self._threshold

    def best_candidate(self, phrase: str) -> tuple[PromotionMapping, float] | None:
        """Highest-scoring catalog entry regardless of threshold.

        Returns None when the phrase normalizes to nothing; an empty string
        would otherwise be "contained" in every pattern.
        """
        normalized = normalize_phrase(phrase)
        if not normalized:
            return None

        best: tuple[PromotionMapping, float] | None = None
        for mapping in self._catalog:
            for pattern in mapping.patterns:
                score = score_pattern(normalized, pattern)
                if best is None or score > best[1]:
                    best = (mapping, score)
        return best

    def match(self, phrase: str) -> SemanticInterpretation | None:
        """Interpret *phrase* from the catalog, or None below the threshold."""
        candidate = self.best_candidate(phrase)
        if candidate is None:
            return None

        mapping, confidence = candidate
        if confidence < self._threshold:
            logger.debug(
                "No catalog match for %r (best %s at %.2f)", phrase, mapping.id, confidence
            )
            return None

        logger.debug("Catalog match %s for %r at %.2f", mapping.id, phrase, confidence)
        return SemanticInterpretation(
            intent="purchase",
            concepts=mapping.concepts,
            source=InterpretationSource.LIBRARY,
            confidence=confidence,
        )

    interpret = match
