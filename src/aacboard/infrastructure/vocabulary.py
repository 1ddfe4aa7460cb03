"""Read a user's vocabulary snapshot from a JSON file.

Accepts either a bare array of cards or an object with a ``cards`` key
(the shape the card-listing API returns).  The pipeline never writes
vocabulary; persisting cards belongs to the vocabulary store.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from aacboard.domain.models import Card

_CARDS = TypeAdapter(list[Card])


class VocabularyError(ValueError):
    """The vocabulary snapshot is missing or malformed."""


def parse_vocabulary(raw: str) -> list[Card]:
    """Parse card JSON text into :class:`Card` models."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise VocabularyError(f"Invalid JSON: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("cards")
    if not isinstance(data, list):
        raise VocabularyError("Expected a list of cards or an object with a 'cards' list")

    try:
        return _CARDS.validate_python(data)
    except ValidationError as exc:
        raise VocabularyError(f"Invalid card data: {exc.error_count()} error(s)") from exc


def load_vocabulary(path: Path) -> list[Card]:
    """Load a vocabulary snapshot file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VocabularyError(f"Cannot read {path}: {exc}") from exc
    return parse_vocabulary(raw)
