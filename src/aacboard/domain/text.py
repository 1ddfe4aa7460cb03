"""Phrase normalization and string similarity for catalog matching."""

from __future__ import annotations

import re

_PUNCTUATION_RE = re.compile(r"[.,!?;:'\"]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_phrase(phrase: str) -> str:
    """Normalize a phrase for matching.

    Lowercases, trims, removes ``. , ! ? ; : ' "`` and collapses
    whitespace runs to a single space.
    """
    text = phrase.lower().strip()
    text = _PUNCTUATION_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (insert, delete, substitute all cost 1)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity in ``[0, 1]``."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - edit_distance(a, b) / longest
