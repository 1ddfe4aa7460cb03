"""Promotion catalog — AAC-safe, deterministic phrase → concept table.

Map meaning, not words: every entry resolves to concrete, countable,
visual concepts.  Entry order is load-bearing.  The matcher keeps the
first of equally scored candidates, so reordering entries changes results.

The table is plain data, validated once at import and never mutated.
"""

from __future__ import annotations

from typing import Any

from aacboard.domain.models import PromotionMapping

_CATALOG_DATA: list[dict[str, Any]] = [
    {
        "id": "BOGO",
        "patterns": [
            "buy one get one free",
            "buy 1 get 1 free",
            "bogo",
            "b1g1",
            "buy one get one",
            "two for the price of one",
            "2 for 1",
            "two for one",
        ],
        "concepts": [
            {"type": "action", "value": "buy"},
            {"type": "quantity", "value": 2},
            {"type": "payment", "value": "pay_for_one"},
            {"type": "benefit", "value": "second_item_free"},
        ],
        "priority": "high",
        "visual_hints": ["two_items", "pay_once", "free_item"],
    },
    {
        "id": "HALF_PRICE",
        "patterns": ["50% off", "50 percent off", "half price", "half off", "50% discount"],
        "concepts": [
            {"type": "benefit", "value": "discount"},
            {"type": "modifier", "value": "half_price"},
        ],
        "priority": "high",
        "visual_hints": ["half", "discount", "save_money"],
    },
    {
        "id": "THREE_FOR_TWO",
        "patterns": [
            "3 for 2",
            "3 for the price of 2",
            "three for two",
            "three for the price of two",
            "buy 2 get 1 free",
            "buy two get one free",
        ],
        "concepts": [
            {"type": "action", "value": "buy"},
            {"type": "quantity", "value": 3},
            {"type": "payment", "value": "pay_for_two"},
            {"type": "benefit", "value": "third_item_free"},
        ],
        "priority": "high",
        "visual_hints": ["three_items", "pay_twice", "free_item"],
    },
    {
        "id": "QUARTER_OFF",
        "patterns": ["25% off", "25 percent off", "quarter off", "25% discount"],
        "concepts": [
            {"type": "benefit", "value": "discount"},
            {"type": "modifier", "value": "quarter_off"},
        ],
        "priority": "medium",
        "visual_hints": ["discount", "save_money"],
    },
    {
        "id": "FREE_SHIPPING",
        "patterns": ["free shipping", "free delivery", "no shipping cost", "shipping free"],
        "concepts": [
            {"type": "benefit", "value": "free"},
            {"type": "item", "value": "shipping"},
        ],
        "priority": "medium",
        "visual_hints": ["free", "delivery"],
    },
    {
        "id": "BUY_MORE_SAVE_MORE",
        "patterns": [
            "buy more save more",
            "the more you buy the more you save",
            "bulk discount",
            "quantity discount",
        ],
        "concepts": [
            {"type": "action", "value": "buy"},
            {"type": "modifier", "value": "more"},
            {"type": "benefit", "value": "bigger_discount"},
        ],
        "priority": "medium",
        "visual_hints": ["many_items", "save_more"],
    },
    {
        "id": "CLEARANCE",
        "patterns": [
            "clearance",
            "clearance sale",
            "final sale",
            "last chance",
            "everything must go",
        ],
        "concepts": [
            {"type": "benefit", "value": "big_discount"},
            {"type": "modifier", "value": "limited_time"},
        ],
        "priority": "medium",
        "visual_hints": ["sale", "discount", "hurry"],
    },
    {
        "id": "SECOND_HALF_OFF",
        "patterns": [
            "second item half off",
            "second item 50% off",
            "2nd item half price",
            "second one half off",
        ],
        "concepts": [
            {"type": "action", "value": "buy"},
            {"type": "quantity", "value": 2},
            {"type": "payment", "value": "pay_one_and_half"},
            {"type": "benefit", "value": "second_item_discount"},
        ],
        "priority": "high",
        "visual_hints": ["two_items", "discount_second"],
    },
    {
        "id": "FREE_GIFT",
        "patterns": [
            "free gift",
            "free gift with purchase",
            "bonus gift",
            "gift with purchase",
            "gwp",
        ],
        "concepts": [
            {"type": "action", "value": "buy"},
            {"type": "benefit", "value": "free"},
            {"type": "item", "value": "gift"},
        ],
        "priority": "medium",
        "visual_hints": ["gift", "free", "bonus"],
    },
    {
        "id": "LIMITED_TIME",
        "patterns": [
            "limited time offer",
            "limited time only",
            "today only",
            "one day sale",
            "flash sale",
            "hurry ends soon",
        ],
        "concepts": [
            {"type": "benefit", "value": "discount"},
            {"type": "modifier", "value": "limited_time"},
        ],
        "priority": "medium",
        "visual_hints": ["clock", "hurry", "sale"],
    },
]

PROMOTION_MAPPINGS: tuple[PromotionMapping, ...] = tuple(
    PromotionMapping.model_validate(entry) for entry in _CATALOG_DATA
)


def all_patterns() -> list[str]:
    """Every catalog pattern, de-duplicated and sorted (suggestion source)."""
    return sorted({p for mapping in PROMOTION_MAPPINGS for p in mapping.patterns})


def promotion_by_id(promotion_id: str) -> PromotionMapping | None:
    """Look up a catalog entry by id (exact, case-sensitive)."""
    for mapping in PROMOTION_MAPPINGS:
        if mapping.id == promotion_id:
            return mapping
    return None
