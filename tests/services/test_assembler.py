"""Tests for context board assembly."""

import re

import pytest

from aacboard.domain.models import Card, Concept, SemanticInterpretation
from aacboard.domain.types import InterpretationSource
from aacboard.services.assembler import (
    MAX_BOARD_SIZE,
    assemble,
    board_name,
    combine_cards,
    new_board_id,
    select_essential_cards,
)
from aacboard.services.mapper import make_temporary_card

INTERP = SemanticInterpretation(
    intent="purchase",
    concepts=(Concept(type="benefit", value="free"),),
    source=InterpretationSource.FALLBACK,
    confidence=0.5,
)


def _temps(count: int) -> list[Card]:
    return [make_temporary_card(Concept(type="quantity", value=n), -n) for n in range(1, count + 1)]


class TestSelectEssentialCards:
    def test_phrase_order(self, starter_vocabulary: list[Card]) -> None:
        texts = [c.text for c in select_essential_cards(starter_vocabulary)]
        assert texts == ["Please", "Thank you", "Yes", "No", "Help"]

    def test_case_insensitive(self) -> None:
        vocab = [Card(id=9, text="i WANT", symbol="🙋", category="x", color="#FFF")]
        assert select_essential_cards(vocab) == vocab

    def test_empty_vocabulary(self) -> None:
        assert select_essential_cards([]) == []


class TestBoardName:
    def test_short_phrase(self) -> None:
        assert board_name("bogo") == "Context: bogo"

    def test_exactly_limit(self) -> None:
        phrase = "x" * 30
        assert board_name(phrase) == f"Context: {phrase}"

    def test_truncated(self) -> None:
        phrase = "buy one get one free on all summer items"
        assert board_name(phrase) == f"Context: {phrase[:30]}..."

    def test_custom_prefix(self) -> None:
        assert board_name("abc", prefix="Board: ", max_chars=2) == "Board: ab..."


class TestCombineCards:
    def test_concepts_first_then_essentials(self, starter_vocabulary: list[Card]) -> None:
        essentials = select_essential_cards(starter_vocabulary)
        cards = combine_cards(_temps(2), essentials)
        assert [c.id for c in cards] == [-1, -2, 2, 3, 7, 8, 6]

    def test_no_duplicate_ids(self, starter_vocabulary: list[Card]) -> None:
        essentials = select_essential_cards(starter_vocabulary)
        please = essentials[0]
        cards = combine_cards([please], essentials)
        assert [c.id for c in cards].count(please.id) == 1

    def test_capped(self, starter_vocabulary: list[Card]) -> None:
        essentials = select_essential_cards(starter_vocabulary)
        cards = combine_cards(_temps(10), essentials)
        assert len(cards) == MAX_BOARD_SIZE
        assert [c.id for c in cards][:10] == list(range(-1, -11, -1))

    def test_concept_cards_truncated_past_limit(self) -> None:
        assert len(combine_cards(_temps(15), [])) == MAX_BOARD_SIZE


class TestAssemble:
    def test_board_fields(self, starter_vocabulary: list[Card]) -> None:
        board = assemble("free", INTERP, _temps(1), starter_vocabulary)
        assert re.fullmatch(r"ctx_[0-9a-f]{12}", board.id)
        assert board.name == "Context: free"
        assert board.phrase == "free"
        assert board.interpretation == INTERP
        assert board.created_at.endswith("+00:00")
        assert len(board.cards) == 6

    def test_explicit_name(self) -> None:
        board = assemble("", INTERP, _temps(1), [], name="🛒 Shopping")
        assert board.name == "🛒 Shopping"

    @pytest.mark.parametrize("size", [1, 5, 12])
    def test_size_limit(self, size: int, starter_vocabulary: list[Card]) -> None:
        board = assemble("x", INTERP, _temps(8), starter_vocabulary, max_board_size=size)
        assert len(board.cards) == size

    def test_same_inputs_same_cards(self, starter_vocabulary: list[Card]) -> None:
        first = assemble("free", INTERP, _temps(3), starter_vocabulary)
        second = assemble("free", INTERP, _temps(3), starter_vocabulary)
        assert first.cards == second.cards
        assert first.id != second.id


class TestNewBoardId:
    def test_unique(self) -> None:
        assert len({new_board_id() for _ in range(50)}) == 50
