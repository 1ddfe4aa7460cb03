"""ExternalInterpreter — second tier, backed by an external language model.

The model is only asked to decompose a phrase into concepts.  Its reply
is untrusted text: JSON is extracted defensively, checked against the
AAC safety rules, and anything off-contract is discarded.  Every failure
(network, status, parse, validation) is absorbed here and reported as
``None`` so the orchestrator can move on to the next tier.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

import httpx

from aacboard.domain.models import Concept, SemanticInterpretation
from aacboard.domain.rules import is_number
from aacboard.domain.types import CONCEPT_TYPES, ConceptType, InterpretationSource
from aacboard.infrastructure.gemini import ExternalServiceError

if TYPE_CHECKING:
    from aacboard.infrastructure.gemini import GeminiClient

logger = logging.getLogger(__name__)

# The model reports no score of its own.
EXTERNAL_CONFIDENCE = 0.75

SYSTEM_PROMPT = """\
You are an AAC (Augmentative and Alternative Communication) semantic interpreter.

Your ONLY task is to convert promotional or complex phrases into structured, AAC-safe concepts.

STRICT RULES:
1. Output ONLY valid JSON - no text before or after
2. Use ONLY these concept types: action, quantity, payment, benefit, item, modifier
3. Use concrete, visualizable values
4. NO sentences, idioms, or abstract language
5. NO emotional or marketing language
6. Quantities must be explicit numbers

OUTPUT FORMAT (JSON only):
{
  "intent": "purchase|information|request",
  "concepts": [
    { "type": "action|quantity|payment|benefit|item|modifier", "value": "string or number" }
  ]
}

EXAMPLES:

Input: "buy one get one free"
Output: {"intent":"purchase","concepts":[{"type":"action","value":"buy"},\
{"type":"quantity","value":2},{"type":"payment","value":"pay_for_one"},\
{"type":"benefit","value":"second_item_free"}]}

Input: "20% off all items"
Output: {"intent":"purchase","concepts":[{"type":"benefit","value":"discount"},\
{"type":"modifier","value":"twenty_percent_off"},{"type":"item","value":"all_items"}]}

Input: "free sample"
Output: {"intent":"purchase","concepts":[{"type":"benefit","value":"free"},\
{"type":"item","value":"sample"}]}"""

_FENCED_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
_SENTENCE_MARKERS = (". ", "! ")

_MISSING = object()


def _reject_constant(name: str) -> Any:
    raise json.JSONDecodeError(f"non-standard constant {name}", name, 0)


# NaN and Infinity are not JSON; a reply using them is rejected like any other.
_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


def build_prompt(phrase: str) -> str:
    """Fixed instruction followed by the phrase to decompose."""
    return f"{SYSTEM_PROMPT}\n\nInput: {json.dumps(phrase, ensure_ascii=False)}\nOutput:"


def extract_json(text: str) -> Any:
    """Pull a JSON value out of free-form reply text.

    Tries, in order: a fenced code block, the first brace-delimited
    object, then the whole text.  Returns ``_MISSING`` if none parse.
    """
    fenced = _FENCED_RE.search(text)
    if fenced:
        try:
            return _DECODER.decode(fenced.group(1))
        except json.JSONDecodeError:
            pass

    start = text.find("{")
    if start != -1:
        try:
            value, _end = _DECODER.raw_decode(text, start)
            return value
        except json.JSONDecodeError:
            pass

    try:
        return _DECODER.decode(text)
    except json.JSONDecodeError:
        return _MISSING


def response_errors(response: Any) -> list[str]:
    """AAC safety violations in a parsed reply (empty list means valid)."""
    if not isinstance(response, dict):
        return ["response is not an object"]
    if not isinstance(response.get("intent"), str):
        return ["intent must be a string"]
    concepts = response.get("concepts")
    if not isinstance(concepts, list):
        return ["concepts must be a list"]

    errors: list[str] = []
    for index, raw in enumerate(concepts):
        if not isinstance(raw, dict):
            errors.append(f"concept {index}: not an object")
            continue
        ctype, value = raw.get("type"), raw.get("value")
        if not isinstance(ctype, str) or ctype not in CONCEPT_TYPES:
            errors.append(f"concept {index}: invalid type {ctype!r}")
        elif not (isinstance(value, str) or is_number(value)):
            errors.append(f"concept {index}: value must be a string or number")
        elif ctype == ConceptType.QUANTITY and not is_number(value):
            errors.append(f"concept {index}: quantity must be a number, got {value!r}")
        elif value == "":
            errors.append(f"concept {index}: value cannot be empty")
    if errors:
        return errors

    serialized = json.dumps(response, ensure_ascii=False, separators=(",", ":"))
    if any(marker in serialized for marker in _SENTENCE_MARKERS):
        return ["response contains sentence-like content"]
    return []


class ExternalInterpreter:
    """Interpret a phrase with an external model, or return None.

    With no client configured (for example no API key) the tier is
    skipped and always yields None.
    """

    source = InterpretationSource.EXTERNAL

    def __init__(self, client: GeminiClient | None) -> None:
        self._client = client

    def interpret(self, phrase: str) -> SemanticInterpretation | None:
        if self._client is None:
            logger.debug("External interpreter disabled; skipping")
            return None

        try:
            text = self._client.generate(build_prompt(phrase))
        except (httpx.HTTPError, ExternalServiceError) as exc:
            logger.warning("External interpretation failed: %s", exc)
            return None
        except Exception:
            logger.warning("External interpretation failed unexpectedly", exc_info=True)
            return None

        parsed = extract_json(text)
        if parsed is _MISSING:
            logger.warning("No JSON found in external reply")
            return None

        errors = response_errors(parsed)
        if errors:
            logger.warning("External reply rejected: %s", "; ".join(errors))
            return None

        return SemanticInterpretation(
            intent=parsed["intent"],
            concepts=tuple(
                Concept(type=c["type"], value=c["value"]) for c in parsed["concepts"]
            ),
            source=InterpretationSource.EXTERNAL,
            confidence=EXTERNAL_CONFIDENCE,
        )
