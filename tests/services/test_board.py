"""Tests for ContextBoardService — end-to-end phrase to board."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from structlog.testing import capture_logs

from aacboard.config.settings import AacSettings
from aacboard.domain.models import Card, Concept
from aacboard.domain.types import InterpretationSource, ResultSource
from aacboard.services.board import ContextBoardService, log_interpretation
from aacboard.services.external import ExternalInterpreter
from aacboard.services.mapper import make_temporary_card
from aacboard.services.matcher import PromotionMatcher
from aacboard.services.telemetry import enable_telemetry

LIB = InterpretationSource.LIBRARY
EXT = InterpretationSource.EXTERNAL
FB = InterpretationSource.FALLBACK


def _gemini(reply: dict[str, Any]) -> httpx.MockTransport:
    body = {"candidates": [{"content": {"parts": [{"text": json.dumps(reply)}]}}]}
    return httpx.MockTransport(lambda request: httpx.Response(200, json=body))


class TestInterpret:
    def test_bogo_library_board(self, starter_vocabulary: list[Card]) -> None:
        result = ContextBoardService.default().interpret("buy one get one free", starter_vocabulary)
        assert result.success
        assert result.source == ResultSource.LIBRARY
        assert result.board is not None
        board = result.board
        assert board.interpretation.confidence == 1.0
        assert board.name == "Context: buy one get one free"
        texts = [c.text for c in board.cards]
        assert texts[:4] == ["Buy", "2 items", "Pay for 1", "2nd free"]
        assert texts[4:] == ["Please", "Thank you", "Yes", "No", "Help"]
        assert [c.id for c in board.cards[:4]] == [-1, -2, -3, -4]

    def test_noisy_phrase_same_board(self, starter_vocabulary: list[Card]) -> None:
        svc = ContextBoardService.default()
        clean = svc.interpret("buy one get one free", starter_vocabulary).board
        noisy = svc.interpret("  BUY ONE GET ONE FREE!!", starter_vocabulary).board
        assert clean is not None and noisy is not None
        assert [c.text for c in clean.cards] == [c.text for c in noisy.cards]
        assert clean.interpretation.concepts == noisy.interpretation.concepts

    def test_gibberish_fails(self, starter_vocabulary: list[Card]) -> None:
        result = ContextBoardService.default().interpret("asdkjasd", starter_vocabulary)
        assert not result.success
        assert result.board is None
        assert result.source == ResultSource.ERROR
        assert result.error_code == "UNINTERPRETABLE"
        assert result.error

    def test_empty_phrase(self, starter_vocabulary: list[Card]) -> None:
        result = ContextBoardService.default().interpret("", starter_vocabulary)
        assert not result.success
        assert result.error_code == "EMPTY_PHRASE"

    def test_reuses_vocabulary_card(self) -> None:
        vocab = [Card(id=10, text="Buy", symbol="🛒", category="Shopping", color="#E3F2FD")]
        board = ContextBoardService.default().interpret("bogo", vocab).board
        assert board is not None
        assert board.cards[0].id == 10
        assert not board.cards[0].temporary

    def test_fallback_source(self, starter_vocabulary: list[Card]) -> None:
        result = ContextBoardService.default().interpret("20% off all items", starter_vocabulary)
        assert result.success
        assert result.source == ResultSource.FALLBACK

    def test_board_never_exceeds_limit(self, make_stub: Callable[..., Any]) -> None:
        concepts = [Concept(type="quantity", value=n) for n in range(1, 20)]
        svc = ContextBoardService([make_stub(FB, concepts)])
        board = svc.interpret("lots", []).board
        assert board is not None
        assert len(board.cards) == 12

    def test_external_reply_with_word_quantity_falls_through(
        self, make_stub: Callable[..., Any], starter_vocabulary: list[Card]
    ) -> None:
        from aacboard.infrastructure.gemini import GeminiClient

        reply = {"intent": "purchase", "concepts": [{"type": "quantity", "value": "two"}]}
        client = GeminiClient("key", transport=_gemini(reply))
        mock = make_stub(FB, [Concept(type="benefit", value="free")])
        svc = ContextBoardService([PromotionMatcher(), ExternalInterpreter(client), mock])
        result = svc.interpret("two things for nothing", starter_vocabulary)
        assert result.success
        assert result.source == ResultSource.FALLBACK
        assert mock.calls == ["two things for nothing"]

    def test_logs_explainability_record(self, starter_vocabulary: list[Card]) -> None:
        with capture_logs() as logs:
            ContextBoardService.default().interpret("bogo", starter_vocabulary)
        [record] = [e for e in logs if e["event"] == "interpretation.complete"]
        assert record["phrase"] == "bogo"
        assert record["source"] == "library"
        assert record["confidence"] == 1.0
        assert record["concepts"][0] == "[action] buy"


class TestInterpretPhrase:
    def test_service_result(self, starter_vocabulary: list[Card]) -> None:
        result = ContextBoardService.default().interpret_phrase("bogo", starter_vocabulary)
        assert result.ok
        assert result.op == "interpret"
        assert result.data["source"] == "library"
        assert result.data["cards"][0]["temporary"] is True
        assert result.warnings == ["4 temporary card(s) not in vocabulary"]

    def test_error_result(self, starter_vocabulary: list[Card]) -> None:
        result = ContextBoardService.default().interpret_phrase("asdkjasd", starter_vocabulary)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNINTERPRETABLE"

    def test_telemetry_attached_when_enabled(self, starter_vocabulary: list[Card]) -> None:
        enable_telemetry()
        result = ContextBoardService.default().interpret_phrase("asdkjasd", starter_vocabulary)
        assert result.meta is not None
        names = [c["name"] for c in result.meta["telemetry"]["children"]]
        assert names == ["tier.library", "tier.external", "tier.fallback"]


class TestPredefinedBoard:
    def test_shopping(self, starter_vocabulary: list[Card]) -> None:
        result = ContextBoardService.default().predefined_board("shopping", starter_vocabulary)
        assert result.ok
        assert result.data["name"] == "🛒 Shopping"
        assert result.data["interpretation"]["intent"] == "custom"
        assert result.data["interpretation"]["confidence"] == 1.0
        assert [c["text"] for c in result.data["cards"]] == ["Buy", "I want", "Item"]

    def test_uses_vocabulary(self) -> None:
        vocab = [Card(id=4, text="Free", symbol="🆓", category="x", color="#FFF")]
        result = ContextBoardService.default().predefined_board("help", vocab)
        assert [c["text"] for c in result.data["cards"]] == ["I need", "Free"]
        assert result.data["cards"][1]["id"] == 4
        assert "temporary" not in result.data["cards"][1]

    def test_unknown(self) -> None:
        result = ContextBoardService.default().predefined_board("library", [])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_CONTEXT"
        assert result.error.detail["available"] == ["help", "restaurant", "shopping"]


class TestCreateBoardFromConcepts:
    def test_no_essentials(self, starter_vocabulary: list[Card]) -> None:
        board = ContextBoardService.default().create_board_from_concepts(
            "Mine", [Concept(type="action", value="want")], starter_vocabulary
        )
        assert board.name == "Mine"
        assert [c.text for c in board.cards] == ["I want"]


class TestPromoteCard:
    def test_temporary(self) -> None:
        temp = make_temporary_card(Concept(type="item", value="gift"), -3)
        result = ContextBoardService.default().promote_card(temp)
        assert result.ok
        assert result.data == {
            "replaces": -3,
            "text": "Gift",
            "symbol": "🎁",
            "category": "Item",
            "color": "#F3E5F5",
        }

    def test_permanent_rejected(self, starter_vocabulary: list[Card]) -> None:
        result = ContextBoardService.default().promote_card(starter_vocabulary[0])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_TEMPORARY"


class TestFromSettings:
    def test_default_chain(self) -> None:
        assert ContextBoardService.default().tiers == (LIB, EXT, FB)

    def test_offline(self) -> None:
        settings = AacSettings.from_cli()
        svc = ContextBoardService.from_settings(settings, offline=True)
        assert svc.tiers == (LIB, FB)

    def test_no_key_skips_external(self) -> None:
        svc = ContextBoardService.from_settings(AacSettings.from_cli())
        assert svc.tiers == (LIB, FB)

    def test_env_key_enables_external(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        svc = ContextBoardService.from_settings(AacSettings.from_cli())
        assert svc.tiers == (LIB, EXT, FB)

    def test_nan_quantity_falls_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        reply = {"intent": "purchase", "concepts": [{"type": "quantity", "value": float("nan")}]}
        svc = ContextBoardService.from_settings(AacSettings.from_cli(), transport=_gemini(reply))
        banana = Card(id=20, text="Banana", symbol="🍌", category="Food", color="#FFF8DC")
        result = svc.interpret("buy some bananas", [banana])
        assert result.source == ResultSource.FALLBACK
        assert result.board is not None
        assert banana not in result.board.cards

    def test_toml_section_overrides(self, tmp_path: Path) -> None:
        (tmp_path / "aacboard.toml").write_text(
            '[interpret]\nfallback_enabled = false\nmax_board_size = 3\n'
            '[external]\napi_key = "k"\n'
        )
        reply = {"intent": "purchase", "concepts": [{"type": "benefit", "value": "free"}]}
        svc = ContextBoardService.from_settings(
            AacSettings.from_cli(start=tmp_path), transport=_gemini(reply)
        )
        assert svc.tiers == (LIB, EXT)
        result = svc.interpret("something unusual", [])
        assert result.source == ResultSource.EXTERNAL
        assert result.board is not None
        assert len(result.board.cards) == 1


def test_log_interpretation_failure() -> None:
    with capture_logs() as logs:
        log_interpretation("asdkjasd", None, ResultSource.ERROR)
    assert logs[0]["event"] == "interpretation.complete"
    assert logs[0]["interpreted"] is False
    assert logs[0]["source"] == "error"
