"""ContextBoardService — phrase in, bounded context board out.

Pipeline: RESOLVE → MAP → ASSEMBLE → LOG

- RESOLVE: the orchestrator runs catalog, external model and heuristic
  interpreters in order and returns the first acceptable interpretation.
- MAP: concepts become cards, reusing the user's vocabulary.
- ASSEMBLE: essentials are appended and the board is capped.
- LOG: one structured explainability record per interpretation.

The vocabulary is a read-only snapshot supplied by the caller; nothing
here writes to a card store.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import httpx
import structlog

from aacboard.domain.models import Card, Concept, ContextBoard, SemanticInterpretation
from aacboard.domain.scenarios import PREDEFINED_CONTEXTS
from aacboard.domain.types import InterpretationSource, ResultSource
from aacboard.infrastructure.gemini import GeminiClient
from aacboard.services.assembler import (
    BOARD_NAME_MAX_CHARS,
    BOARD_NAME_PREFIX,
    MAX_BOARD_SIZE,
    assemble,
)
from aacboard.services.contracts import BoardResultData, ContextBoardResult, dump_validated
from aacboard.services.external import ExternalInterpreter
from aacboard.services.fallback import FallbackInterpreter
from aacboard.services.mapper import is_temporary, map_concepts_to_cards, to_permanent_card
from aacboard.services.matcher import DEFAULT_CONFIDENCE_THRESHOLD, PromotionMatcher
from aacboard.services.orchestrator import InterpretationOrchestrator, Interpreter
from aacboard.services.result import ServiceResult
from aacboard.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from aacboard.config.settings import AacSettings

logger = logging.getLogger(__name__)


def log_interpretation(
    phrase: str, interpretation: SemanticInterpretation | None, source: str
) -> None:
    """Emit the explainability record for one interpretation."""
    log = structlog.get_logger("aacboard.interpretation")
    if interpretation is None:
        log.info("interpretation.complete", phrase=phrase, source=source, interpreted=False)
        return
    log.info(
        "interpretation.complete",
        phrase=phrase,
        source=source,
        intent=interpretation.intent,
        confidence=round(interpretation.confidence, 2),
        concepts=[f"[{c.type}] {c.value}" for c in interpretation.concepts],
    )


class ContextBoardService:
    """Interpret phrases and build context boards from a user's vocabulary."""

    def __init__(
        self,
        interpreters: Sequence[Interpreter],
        *,
        max_board_size: int = MAX_BOARD_SIZE,
        board_name_prefix: str = BOARD_NAME_PREFIX,
        board_name_max_chars: int = BOARD_NAME_MAX_CHARS,
    ) -> None:
        self._orchestrator = InterpretationOrchestrator(interpreters)
        self._max_board_size = max_board_size
        self._name_prefix = board_name_prefix
        self._name_max_chars = board_name_max_chars

    @classmethod
    def default(
        cls,
        *,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        client: GeminiClient | None = None,
    ) -> ContextBoardService:
        """Standard three-tier chain: catalog, external model, heuristics."""
        return cls(
            [
                PromotionMatcher(confidence_threshold=confidence_threshold),
                ExternalInterpreter(client),
                FallbackInterpreter(),
            ]
        )

    @classmethod
    def from_settings(
        cls,
        settings: AacSettings,
        *,
        offline: bool = False,
        transport: httpx.BaseTransport | None = None,
    ) -> ContextBoardService:
        """Build the chain described by *settings*.

        The external tier is dropped when *offline*, when disabled in
        ``[interpret]``, or when no API key is available.
        """
        cfg = settings.interpret
        interpreters: list[Interpreter] = [
            PromotionMatcher(confidence_threshold=cfg.confidence_threshold)
        ]

        api_key = settings.external_api_key()
        if offline or not cfg.external_enabled:
            logger.debug("External interpreter turned off")
        elif api_key is None:
            logger.debug("No external API key configured; external tier skipped")
        else:
            ext = settings.external
            client = GeminiClient(
                api_key,
                model=ext.model,
                base_url=ext.base_url,
                timeout=ext.timeout_seconds,
                generation_config=ext.generation_config(),
                transport=transport,
            )
            interpreters.append(ExternalInterpreter(client))

        if cfg.fallback_enabled:
            interpreters.append(FallbackInterpreter())

        svc = cls(
            interpreters,
            max_board_size=cfg.max_board_size,
            board_name_prefix=cfg.board_name_prefix,
            board_name_max_chars=cfg.board_name_max_chars,
        )
        logger.debug("Interpreter chain: %s", " -> ".join(svc.tiers))
        return svc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def tiers(self) -> tuple[InterpretationSource, ...]:
        """Sources of the configured interpreters, in the order they run."""
        return tuple(i.source for i in self._orchestrator.interpreters)

    def interpret(self, phrase: str, vocabulary: Sequence[Card]) -> ContextBoardResult:
        """Interpret *phrase* into a context board built from *vocabulary*."""
        resolution = self._orchestrator.resolve(phrase)
        if resolution.interpretation is None:
            assert resolution.error is not None
            logger.info("Interpretation failed (%s): %r", resolution.error.code, phrase)
            log_interpretation(phrase, None, ResultSource.ERROR)
            return ContextBoardResult.failed(resolution.error)

        interpretation = resolution.interpretation
        with trace_span("map_concepts") as span:
            concept_cards = map_concepts_to_cards(interpretation.concepts, vocabulary)
            if span:
                span.annotate("temporary", sum(1 for c in concept_cards if c.temporary))

        board = assemble(
            phrase,
            interpretation,
            concept_cards,
            vocabulary,
            max_board_size=self._max_board_size,
            name_prefix=self._name_prefix,
            name_max_chars=self._name_max_chars,
        )
        source = ResultSource(interpretation.source)
        log_interpretation(phrase, interpretation, source)
        return ContextBoardResult(success=True, board=board, source=source)

    @traced
    def interpret_phrase(self, phrase: str, vocabulary: Sequence[Card]) -> ServiceResult:
        """:meth:`interpret` wrapped in a ServiceResult for the CLI."""
        result = self.interpret(phrase, vocabulary)
        warnings: list[str] = []
        if result.board is not None:
            temporary = sum(1 for c in result.board.cards if c.temporary)
            if temporary:
                warnings.append(f"{temporary} temporary card(s) not in vocabulary")
        return result.to_service_result("interpret", warnings=warnings)

    def create_board_from_concepts(
        self, name: str, concepts: Sequence[Concept], vocabulary: Sequence[Card]
    ) -> ContextBoard:
        """Board for a fixed concept list, with no phrase to interpret."""
        interpretation = SemanticInterpretation(
            intent="custom",
            concepts=tuple(concepts),
            source=InterpretationSource.LIBRARY,
            confidence=1.0,
        )
        cards = map_concepts_to_cards(concepts, vocabulary)[: self._max_board_size]
        return assemble(
            "",
            interpretation,
            cards,
            (),
            max_board_size=self._max_board_size,
            name=name,
        )

    @traced
    def predefined_board(self, key: str, vocabulary: Sequence[Card]) -> ServiceResult:
        """Board for one of the built-in scenarios (shopping, restaurant, help)."""
        op = "predefined_board"
        context = PREDEFINED_CONTEXTS.get(key)
        if context is None:
            return ServiceResult.failure(
                op,
                "UNKNOWN_CONTEXT",
                f"No predefined context named {key!r}",
                available=sorted(PREDEFINED_CONTEXTS),
            )
        board = self.create_board_from_concepts(context["name"], context["concepts"], vocabulary)
        data = dump_validated(
            BoardResultData, {"source": ResultSource.LIBRARY, **board.to_payload()}
        )
        return ServiceResult(ok=True, op=op, data=data)

    def promote_card(self, card: Card) -> ServiceResult:
        """Payload a vocabulary store should persist for a temporary card."""
        op = "promote_card"
        if not is_temporary(card):
            return ServiceResult.failure(
                op, "NOT_TEMPORARY", f"Card {card.id} is already part of the vocabulary"
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"replaces": card.id, **to_permanent_card(card).model_dump()},
        )
