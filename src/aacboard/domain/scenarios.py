"""Predefined context boards and the starter vocabulary."""

from __future__ import annotations

from typing import Any

from aacboard.domain.models import Card, Concept

PREDEFINED_CONTEXTS: dict[str, dict[str, Any]] = {
    "shopping": {
        "name": "🛒 Shopping",
        "concepts": (
            Concept(type="action", value="buy"),
            Concept(type="action", value="want"),
            Concept(type="item", value="item"),
        ),
    },
    "restaurant": {
        "name": "🍽️ Restaurant",
        "concepts": (
            Concept(type="action", value="want"),
            Concept(type="item", value="item"),
            Concept(type="action", value="pay"),
        ),
    },
    "help": {
        "name": "🆘 Help Needed",
        "concepts": (
            Concept(type="action", value="need"),
            Concept(type="benefit", value="free"),
        ),
    },
}

_STARTER_CARDS: list[tuple[str, str, str, str]] = [
    ("Hello", "👋", "Greetings", "#FFE4E1"),
    ("Please", "🙏", "Politeness", "#E1F5FE"),
    ("Thank you", "❤️", "Politeness", "#E8F5E8"),
    ("Water", "💧", "Needs", "#E3F2FD"),
    ("Food", "🍎", "Needs", "#FFF3E0"),
    ("Help", "🆘", "Emergency", "#FFEBEE"),
    ("Yes", "✅", "Responses", "#E8F5E8"),
    ("No", "❌", "Responses", "#FFEBEE"),
]

STARTER_VOCABULARY: tuple[Card, ...] = tuple(
    Card(id=index, text=text, symbol=symbol, category=category, color=color)
    for index, (text, symbol, category, color) in enumerate(_STARTER_CARDS, start=1)
)
