"""InterpretationOrchestrator — ordered chain of interpreters.

Tiers run strictly in order (catalog → external model → heuristics) and
the first acceptable interpretation wins.  An interpretation from any
tier but the last must pass the concept safety rules; one that fails is
treated as no result and the chain continues.  A failing interpretation
from the last tier ends the chain with ``VALIDATION_FAILED``, which is
reported separately from ``UNINTERPRETABLE``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal, Protocol

from aacboard.domain.models import SemanticInterpretation
from aacboard.domain.rules import check_concepts
from aacboard.domain.types import InterpretationSource
from aacboard.services.result import ServiceError
from aacboard.services.telemetry import trace_span

logger = logging.getLogger(__name__)

EMPTY_PHRASE_MESSAGE = "Please enter a phrase to interpret"
UNINTERPRETABLE_MESSAGE = (
    "Could not interpret this phrase. Try a different wording or add cards manually."
)
VALIDATION_FAILED_MESSAGE = (
    "The interpretation failed validation. The phrase may be too complex."
)


class Interpreter(Protocol):
    """One tier: ``phrase -> SemanticInterpretation | None``, never raising."""

    source: InterpretationSource

    def interpret(self, phrase: str) -> SemanticInterpretation | None: ...


@dataclass(frozen=True)
class TierAttempt:
    """What one tier did with the phrase."""

    source: InterpretationSource
    outcome: Literal["accepted", "no_result", "invalid"]


@dataclass(frozen=True)
class Resolution:
    """Outcome of running the chain: an interpretation or an error."""

    interpretation: SemanticInterpretation | None = None
    error: ServiceError | None = None
    attempts: list[TierAttempt] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.interpretation is not None


class InterpretationOrchestrator:
    """Run interpreters in priority order and keep the first good answer."""

    def __init__(self, interpreters: Sequence[Interpreter]) -> None:
        self._interpreters = tuple(interpreters)

    @property
    def interpreters(self) -> tuple[Interpreter, ...]:
        return self._interpreters

    def resolve(self, phrase: str) -> Resolution:
        if not phrase.strip():
            return Resolution(error=ServiceError(code="EMPTY_PHRASE", message=EMPTY_PHRASE_MESSAGE))

        attempts: list[TierAttempt] = []
        last_index = len(self._interpreters) - 1

        for index, interpreter in enumerate(self._interpreters):
            with trace_span(f"tier.{interpreter.source}") as span:
                result = interpreter.interpret(phrase)

                if result is None:
                    attempts.append(TierAttempt(interpreter.source, "no_result"))
                    if span:
                        span.annotate("outcome", "no_result")
                    logger.debug("Tier %s: no result", interpreter.source)
                    continue

                validation = check_concepts(result.concepts)
                if not validation.valid:
                    attempts.append(TierAttempt(interpreter.source, "invalid"))
                    if span:
                        span.annotate("outcome", "invalid")
                    logger.warning(
                        "Tier %s produced invalid concepts: %s",
                        interpreter.source,
                        "; ".join(validation.errors),
                    )
                    if index == last_index:
                        return Resolution(
                            error=ServiceError(
                                code="VALIDATION_FAILED",
                                message=VALIDATION_FAILED_MESSAGE,
                                detail={
                                    "source": str(interpreter.source),
                                    "errors": validation.errors,
                                },
                            ),
                            attempts=attempts,
                        )
                    continue

                attempts.append(TierAttempt(interpreter.source, "accepted"))
                if span:
                    span.annotate("outcome", "accepted")
                    span.annotate("confidence", result.confidence)
                if result.source != interpreter.source:
                    result = result.model_copy(update={"source": interpreter.source})
                return Resolution(interpretation=result, attempts=attempts)

        return Resolution(
            error=ServiceError(code="UNINTERPRETABLE", message=UNINTERPRETABLE_MESSAGE),
            attempts=attempts,
        )
