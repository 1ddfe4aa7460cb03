"""CatalogService — read-only views of the promotion catalog."""

from __future__ import annotations

from typing import Any

from aacboard.domain.catalog import PROMOTION_MAPPINGS, all_patterns, promotion_by_id
from aacboard.domain.models import PromotionMapping
from aacboard.services.contracts import PatternListData, PromotionData, dump_validated
from aacboard.services.matcher import DEFAULT_CONFIDENCE_THRESHOLD, PromotionMatcher
from aacboard.services.result import ServiceResult


def _promotion_payload(mapping: PromotionMapping) -> dict[str, Any]:
    return dump_validated(PromotionData, mapping.model_dump(mode="json"))


class CatalogService:
    """Pattern suggestions, entry lookup, and matcher-only diagnostics."""

    def __init__(self, *, confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD) -> None:
        self._matcher = PromotionMatcher(
            PROMOTION_MAPPINGS, confidence_threshold=confidence_threshold
        )

    def patterns(self) -> ServiceResult:
        items = all_patterns()
        data = dump_validated(PatternListData, {"count": len(items), "items": items})
        return ServiceResult(ok=True, op="patterns", data=data)

    def show(self, promotion_id: str) -> ServiceResult:
        mapping = promotion_by_id(promotion_id) or promotion_by_id(promotion_id.upper())
        if mapping is None:
            return ServiceResult.failure(
                "show_promotion",
                "NOT_FOUND",
                f"No promotion with id: {promotion_id}",
                available=[m.id for m in PROMOTION_MAPPINGS],
            )
        return ServiceResult(ok=True, op="show_promotion", data=_promotion_payload(mapping))

    def match(self, phrase: str) -> ServiceResult:
        """Run only the catalog tier and report the best candidate."""
        candidate = self._matcher.best_candidate(phrase)
        interpretation = self._matcher.match(phrase)
        data: dict[str, Any] = {
            "phrase": phrase,
            "matched": interpretation is not None,
            "threshold": self._matcher.confidence_threshold,
        }
        if candidate is not None:
            mapping, score = candidate
            data["best_id"] = mapping.id
            data["confidence"] = round(score, 4)
        if interpretation is not None:
            data["concepts"] = [c.model_dump(mode="json") for c in interpretation.concepts]
        return ServiceResult(ok=True, op="match", data=data)
