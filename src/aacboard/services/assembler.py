"""Context board assembly — concept cards plus essentials, bounded in size.

Concept cards always come first; essentials fill the remaining slots.
Apart from the board id and timestamp the result is a pure function of
its inputs.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from aacboard.domain.lexicon import ESSENTIAL_PHRASES
from aacboard.domain.models import Card, ContextBoard, SemanticInterpretation

MAX_BOARD_SIZE = 12
BOARD_NAME_PREFIX = "Context: "
BOARD_NAME_MAX_CHARS = 30
ELLIPSIS = "..."


def select_essential_cards(
    vocabulary: Sequence[Card], phrases: Sequence[str] = ESSENTIAL_PHRASES
) -> list[Card]:
    """Vocabulary cards whose text is one of the essential phrases, in phrase order."""
    result: list[Card] = []
    for phrase in phrases:
        wanted = phrase.lower()
        match = next((card for card in vocabulary if card.text.lower() == wanted), None)
        if match is not None:
            result.append(match)
    return result


def board_name(
    phrase: str, *, prefix: str = BOARD_NAME_PREFIX, max_chars: int = BOARD_NAME_MAX_CHARS
) -> str:
    """Fixed prefix plus the phrase, shortened with an ellipsis past *max_chars*."""
    if len(phrase) > max_chars:
        return f"{prefix}{phrase[:max_chars]}{ELLIPSIS}"
    return f"{prefix}{phrase}"


def new_board_id() -> str:
    return f"ctx_{uuid.uuid4().hex[:12]}"


def combine_cards(
    concept_cards: Sequence[Card],
    essentials: Sequence[Card],
    *,
    max_board_size: int = MAX_BOARD_SIZE,
) -> list[Card]:
    """Concept cards, then essentials not already present, truncated to the limit."""
    cards = list(concept_cards)
    present = {card.id for card in cards}
    for card in essentials:
        if card.id not in present:
            present.add(card.id)
            cards.append(card)
    return cards[:max_board_size]


def assemble(
    phrase: str,
    interpretation: SemanticInterpretation,
    concept_cards: Sequence[Card],
    vocabulary: Sequence[Card],
    *,
    max_board_size: int = MAX_BOARD_SIZE,
    name_prefix: str = BOARD_NAME_PREFIX,
    name_max_chars: int = BOARD_NAME_MAX_CHARS,
    name: str | None = None,
) -> ContextBoard:
    """Build the board offered for one interpretation."""
    if name is None:
        name = board_name(phrase, prefix=name_prefix, max_chars=name_max_chars)
    cards = combine_cards(
        concept_cards,
        select_essential_cards(vocabulary),
        max_board_size=max_board_size,
    )
    return ContextBoard(
        id=new_board_id(),
        name=name,
        phrase=phrase,
        interpretation=interpretation,
        cards=tuple(cards),
        created_at=datetime.now(UTC).isoformat(),
    )
