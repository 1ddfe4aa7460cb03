"""Typed result and payload contracts at the service boundary."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from aacboard.domain.models import ContextBoard
from aacboard.domain.types import ResultSource
from aacboard.services.result import ServiceError, ServiceResult

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class ContextBoardResult(BaseModel):
    """Outcome of interpreting one phrase into a context board.

    ``board`` is set exactly when ``success`` is True; otherwise ``error``
    holds a user-facing message and ``error_code`` its stable code.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    board: ContextBoard | None = None
    error: str | None = None
    error_code: str | None = None
    source: ResultSource

    @classmethod
    def failed(cls, error: ServiceError) -> ContextBoardResult:
        return cls(
            success=False,
            error=error.message,
            error_code=error.code,
            source=ResultSource.ERROR,
        )

    def to_service_result(
        self, op: str = "interpret", *, warnings: list[str] | None = None
    ) -> ServiceResult:
        """Wrap for the CLI's ServiceResult rendering."""
        if not self.success or self.board is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=self.error_code or "UNINTERPRETABLE",
                    message=self.error or "Failed to interpret phrase",
                ),
            )
        data = dump_validated(
            BoardResultData,
            {"source": self.source, **self.board.to_payload()},
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings or [])


class BoardCard(BaseModel):
    """One card in a board payload."""

    model_config = ConfigDict(extra="allow")

    id: int
    text: str
    symbol: str
    category: str
    color: str


class BoardInterpretation(BaseModel):
    intent: str
    concepts: list[dict[str, Any]]
    source: str
    confidence: float


class BoardResultData(BaseModel):
    """Payload contract for board-producing operations."""

    source: str
    id: str
    name: str
    phrase: str
    interpretation: BoardInterpretation
    cards: list[BoardCard]
    created_at: str


class PatternListData(BaseModel):
    """Payload contract for ``CatalogService.patterns``."""

    count: int
    items: list[str]


class PromotionData(BaseModel):
    """Payload contract for catalog entry lookups."""

    id: str
    patterns: list[str]
    concepts: list[dict[str, Any]]
    priority: str
    visual_hints: list[str]
