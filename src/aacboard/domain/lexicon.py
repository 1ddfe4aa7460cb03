"""Lookup tables for rendering concepts as cards.

Tables are nested ``type -> value -> entry`` maps.  A ``"default"`` key
inside a type is that type's fallback; :data:`DEFAULT_SYMBOL` covers
unknown types.  Keys are the string form of a concept value.
"""

from __future__ import annotations

import re

from aacboard.domain.models import Concept
from aacboard.domain.types import ConceptType

DEFAULT_SYMBOL = "❓"
DEFAULT_COLOR = "#FFFFFF"

CONCEPT_SYMBOLS: dict[str, dict[str, str]] = {
    "action": {
        "buy": "🛒",
        "get": "📦",
        "pay": "💳",
        "take": "✋",
        "give": "🤲",
        "want": "🙋",
        "need": "❗",
        "default": "▶️",
    },
    "quantity": {
        "1": "1️⃣",
        "2": "2️⃣",
        "3": "3️⃣",
        "4": "4️⃣",
        "5": "5️⃣",
        "6": "6️⃣",
        "7": "7️⃣",
        "8": "8️⃣",
        "9": "9️⃣",
        "10": "🔟",
        "default": "#️⃣",
    },
    "payment": {
        "pay_for_one": "💰1",
        "pay_for_two": "💰2",
        "pay_one_and_half": "💰½",
        "pay_less": "💵⬇️",
        "no_payment": "🚫💰",
        "default": "💳",
    },
    "benefit": {
        "free": "🆓",
        "discount": "🏷️",
        "second_item_free": "2️⃣🆓",
        "third_item_free": "3️⃣🆓",
        "second_item_discount": "2️⃣🏷️",
        "big_discount": "🏷️🏷️",
        "bigger_discount": "🏷️📈",
        "default": "⭐",
    },
    "item": {
        "item": "📦",
        "product": "🏷️",
        "shipping": "🚚",
        "gift": "🎁",
        "sample": "🧪",
        "all_items": "📦📦",
        "default": "📦",
    },
    "modifier": {
        "half_price": "½💰",
        "quarter_off": "¼🏷️",
        "limited_time": "⏰",
        "more": "➕",
        "second": "2️⃣",
        "extra": "➕",
        "default": "🔹",
    },
}

# Light pastel per type, matching the vocabulary board palette.
CONCEPT_COLORS: dict[str, str] = {
    "action": "#E3F2FD",
    "quantity": "#FFF3E0",
    "payment": "#E8F5E9",
    "benefit": "#FCE4EC",
    "item": "#F3E5F5",
    "modifier": "#FFFDE7",
}

CONCEPT_TEXT_TEMPLATES: dict[str, dict[str, str]] = {
    "action": {
        "buy": "Buy",
        "get": "Get",
        "pay": "Pay",
        "take": "Take",
        "give": "Give",
        "want": "I want",
        "need": "I need",
    },
    "payment": {
        "pay_for_one": "Pay for 1",
        "pay_for_two": "Pay for 2",
        "pay_one_and_half": "Pay 1½",
        "pay_less": "Pay less",
        "no_payment": "No payment",
    },
    "benefit": {
        "free": "Free",
        "discount": "Discount",
        "second_item_free": "2nd free",
        "third_item_free": "3rd free",
        "second_item_discount": "2nd discount",
        "big_discount": "Big sale",
        "bigger_discount": "More savings",
    },
    "item": {
        "item": "Item",
        "product": "Product",
        "shipping": "Shipping",
        "gift": "Gift",
        "sample": "Sample",
        "all_items": "All items",
    },
    "modifier": {
        "half_price": "Half price",
        "quarter_off": "25% off",
        "limited_time": "Limited time",
        "more": "More",
        "second": "Second",
        "extra": "Extra",
        "twenty_percent_off": "20% off",
    },
}

# Concept value -> card texts a user's own card may use for it.
SYNONYMS: dict[str, tuple[str, ...]] = {
    "buy": ("buy", "purchase", "shop", "get"),
    "want": ("want", "i want", "need", "i need"),
    "free": ("free", "no cost", "nothing"),
    "pay": ("pay", "money", "cost"),
    "yes": ("yes", "ok", "okay", "agree"),
    "no": ("no", "not", "nope", "disagree"),
}

_WORD_START_RE = re.compile(r"\b\w")

ESSENTIAL_PHRASES: tuple[str, ...] = ("I want", "Please", "Thank you", "Yes", "No", "Help")


def value_key(value: object) -> str:
    """String key for a concept value (``2.0`` and ``2`` share a key)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def display_text(concept: Concept) -> str:
    """Canonical card text for a concept."""
    if concept.type == ConceptType.QUANTITY:
        count = value_key(concept.value)
        return f"{count} item{'' if count == '1' else 's'}"

    template = CONCEPT_TEXT_TEMPLATES.get(concept.type, {}).get(value_key(concept.value))
    if template:
        return template
    words = value_key(concept.value).replace("_", " ")
    return _WORD_START_RE.sub(lambda m: m.group().upper(), words)


def symbol_for(concept: Concept) -> str:
    """Emoji for a concept: exact value, then type default, then global default."""
    table = CONCEPT_SYMBOLS.get(concept.type)
    if table is None:
        return DEFAULT_SYMBOL
    return table.get(value_key(concept.value)) or table.get("default") or DEFAULT_SYMBOL


def color_for(concept_type: str) -> str:
    """Palette entry for a concept type."""
    return CONCEPT_COLORS.get(concept_type, DEFAULT_COLOR)
