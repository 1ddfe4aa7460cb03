"""Tests for ServiceResult and ServiceError."""

import pytest
from pydantic import ValidationError

from aacboard.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="interpret")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure(self) -> None:
        result = ServiceResult(
            ok=False,
            op="interpret",
            error=ServiceError(code="EMPTY_PHRASE", message="Please enter a phrase"),
        )
        assert result.error is not None
        assert result.error.code == "EMPTY_PHRASE"
        assert result.error.detail == {}

    def test_failure_constructor(self) -> None:
        result = ServiceResult.failure(
            "predefined_board", "UNKNOWN_CONTEXT", "No such context", available=["help"]
        )
        assert not result.ok
        assert result.op == "predefined_board"
        assert result.data == {}
        assert result.error == ServiceError(
            code="UNKNOWN_CONTEXT", message="No such context", detail={"available": ["help"]}
        )

    def test_failure_without_detail(self) -> None:
        result = ServiceResult.failure("promote_card", "NOT_TEMPORARY", "Card 3 is permanent")
        assert result.error is not None
        assert result.error.detail == {}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="patterns")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_round_trip(self) -> None:
        result = ServiceResult(ok=True, op="match", data={"matched": True}, warnings=["w"])
        assert ServiceResult.model_validate_json(result.model_dump_json()) == result
