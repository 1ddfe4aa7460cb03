"""Concept-to-card mapping.

For each concept, in order:

1. reuse a card from the user's vocabulary when one means the same thing
   (exact text, then value containment, then a synonym);
2. otherwise mint a temporary card with a negative id.

Reused cards appear once per result even if several concepts map to
them.  Temporary ids count down from -1 within one call, so they can
never collide with persisted (positive) ids.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Sequence

from aacboard.domain.lexicon import SYNONYMS, color_for, display_text, symbol_for, value_key
from aacboard.domain.models import Card, Concept, NewCard


def find_matching_card(concept: Concept, vocabulary: Sequence[Card]) -> Card | None:
    """The vocabulary card that already expresses *concept*, if any."""
    concept_text = display_text(concept).lower()
    for card in vocabulary:
        if card.text.lower() == concept_text:
            return card

    value_text = value_key(concept.value).lower().replace("_", " ")
    for card in vocabulary:
        if value_text in card.text.lower():
            return card

    synonyms = SYNONYMS.get(value_key(concept.value).lower())
    if synonyms:
        for card in vocabulary:
            if card.text.lower() in synonyms:
                return card
    return None


def make_temporary_card(concept: Concept, card_id: int) -> Card:
    """Mint a board-only card for a concept the vocabulary lacks."""
    return Card(
        id=card_id,
        text=display_text(concept),
        symbol=symbol_for(concept),
        category=concept.type.capitalize(),
        color=color_for(concept.type),
        temporary=True,
        concept_type=concept.type,
        concept_value=concept.value,
    )


def map_concepts_to_cards(concepts: Iterable[Concept], vocabulary: Sequence[Card]) -> list[Card]:
    """Cards for *concepts*, in concept order, reusing vocabulary where possible."""
    result: list[Card] = []
    seen_ids: set[int] = set()
    temp_ids = itertools.count(-1, -1)

    for concept in concepts:
        existing = find_matching_card(concept, vocabulary)
        if existing is None:
            result.append(make_temporary_card(concept, next(temp_ids)))
        elif existing.id not in seen_ids:
            seen_ids.add(existing.id)
            result.append(existing)
    return result


def is_temporary(card: Card) -> bool:
    return card.temporary


def to_permanent_card(card: Card) -> NewCard:
    """Fields to submit when a user saves a temporary card to their vocabulary."""
    return NewCard(text=card.text, symbol=card.symbol, category=card.category, color=card.color)
