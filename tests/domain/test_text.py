"""Tests for phrase normalization and edit-distance similarity."""

import pytest

from aacboard.domain.text import edit_distance, normalize_phrase, similarity


class TestNormalizePhrase:
    def test_lowercases(self) -> None:
        assert normalize_phrase("BOGO") == "bogo"

    def test_strips_punctuation(self) -> None:
        assert normalize_phrase("Buy one, get one free!!") == "buy one get one free"

    def test_strips_quotes(self) -> None:
        assert normalize_phrase("it's \"free\"") == "its free"

    def test_collapses_whitespace(self) -> None:
        assert normalize_phrase("  buy   one\tget  one ") == "buy one get one"

    def test_keeps_percent_sign(self) -> None:
        assert normalize_phrase("50% OFF") == "50% off"

    def test_punctuation_only_is_empty(self) -> None:
        assert normalize_phrase("?!.") == ""


class TestEditDistance:
    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("", "", 0),
            ("abc", "", 3),
            ("", "abc", 3),
            ("kitten", "sitting", 3),
            ("bogo", "bogo", 0),
            ("flaw", "lawn", 2),
        ],
    )
    def test_known_distances(self, a: str, b: str, expected: int) -> None:
        assert edit_distance(a, b) == expected

    def test_symmetric(self) -> None:
        assert edit_distance("free gift", "free shipping") == edit_distance(
            "free shipping", "free gift"
        )


class TestSimilarity:
    def test_identical(self) -> None:
        assert similarity("half off", "half off") == 1.0

    def test_both_empty(self) -> None:
        assert similarity("", "") == 1.0

    def test_completely_different(self) -> None:
        assert similarity("abc", "xyz") == 0.0

    def test_one_typo(self) -> None:
        # one insertion over eight characters
        assert similarity("half of", "half off") == pytest.approx(1 - 1 / 8)
