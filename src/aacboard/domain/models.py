"""Value models flowing through the interpretation pipeline.

All models are frozen.  ``Concept`` is deliberately permissive about the
*meaning* of its fields (any string type, any scalar value) so that the
safety rules in :mod:`aacboard.domain.rules` can be applied, and fail
observably, at every tier boundary.  Types are strict: ``"2"`` is never
coerced into a number and ``True`` is never accepted as a quantity.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

from aacboard.domain.types import AacPriority, InterpretationSource

ConceptValue = StrictInt | StrictFloat | StrictStr


class Concept(BaseModel):
    """Smallest unit of meaning: a typed, concrete value."""

    model_config = {"frozen": True}

    type: StrictStr
    value: ConceptValue


class Card(BaseModel):
    """A symbol card, either from the user's vocabulary or minted for one board.

    Permanent cards carry positive ids owned by the vocabulary store.
    Temporary cards carry negative ids and remember the concept they
    were minted from.
    """

    model_config = {"frozen": True}

    id: int
    text: str
    symbol: str
    category: str
    color: str
    temporary: bool = False
    concept_type: str | None = None
    concept_value: ConceptValue | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize without the optional fields that are unset."""
        data = self.model_dump(mode="json", exclude_none=True)
        if not self.temporary:
            data.pop("temporary", None)
        return data


class NewCard(BaseModel):
    """Card fields a vocabulary store needs to persist a new permanent card."""

    model_config = {"frozen": True}

    text: str
    symbol: str
    category: str
    color: str


class SemanticInterpretation(BaseModel):
    """What a phrase means, as an ordered list of concepts."""

    model_config = {"frozen": True}

    intent: str
    concepts: tuple[Concept, ...]
    source: InterpretationSource
    confidence: float = Field(ge=0.0, le=1.0)


class PromotionMapping(BaseModel):
    """One catalog entry: phrasings of a promotion and the concepts it means."""

    model_config = {"frozen": True}

    id: str
    patterns: tuple[str, ...]
    concepts: tuple[Concept, ...]
    priority: AacPriority = AacPriority.MEDIUM
    visual_hints: tuple[str, ...] = ()


class ContextBoard(BaseModel):
    """The bounded, ordered set of cards offered after one interpretation."""

    model_config = {"frozen": True}

    id: str
    name: str
    phrase: str
    interpretation: SemanticInterpretation
    cards: tuple[Card, ...]
    created_at: str

    def replace_card(self, card_id: int, replacement: Card) -> Self:
        """Return a copy with the card *card_id* swapped for *replacement*.

        Used after a temporary card has been saved: the persisted card takes
        the temporary card's slot so board order is unchanged.
        """
        cards = tuple(replacement if c.id == card_id else c for c in self.cards)
        return self.model_copy(update={"cards": cards})

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phrase": self.phrase,
            "interpretation": self.interpretation.model_dump(mode="json"),
            "cards": [c.to_payload() for c in self.cards],
            "created_at": self.created_at,
        }
