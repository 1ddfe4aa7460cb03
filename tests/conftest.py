"""Shared pytest fixtures for aacboard tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from aacboard.domain.models import Card, Concept, SemanticInterpretation
from aacboard.domain.scenarios import STARTER_VOCABULARY
from aacboard.domain.types import InterpretationSource
from aacboard.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run every test from an empty directory with no aacboard env and clean global state.

    Keeps a developer's ``aacboard.toml`` and ``GEMINI_API_KEY`` from leaking
    into tests, and resets logging and telemetry that the CLI configures.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    for name in list(os.environ):
        if name.startswith("AACBOARD_"):
            monkeypatch.delenv(name)

    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def starter_vocabulary() -> list[Card]:
    """The eight built-in starter cards (ids 1..8)."""
    return list(STARTER_VOCABULARY)


@pytest.fixture
def vocabulary_file(tmp_path: Path) -> Path:
    """Vocabulary snapshot on disk that includes a ``Buy`` card."""
    path = tmp_path / "cards.json"
    path.write_text(
        '{"cards": ['
        '{"id": 10, "text": "Buy", "symbol": "🛒", "category": "Shopping", "color": "#E3F2FD"},'
        '{"id": 11, "text": "Yes", "symbol": "✅", "category": "Responses", "color": "#E8F5E8"}'
        "]}",
        encoding="utf-8",
    )
    return path


class StubInterpreter:
    """Interpreter double that returns a canned interpretation and counts calls."""

    def __init__(
        self,
        source: InterpretationSource,
        concepts: list[Concept] | None = None,
        *,
        confidence: float = 0.6,
    ) -> None:
        self.source = source
        self._concepts = concepts
        self._confidence = confidence
        self.calls: list[str] = []

    def interpret(self, phrase: str) -> SemanticInterpretation | None:
        self.calls.append(phrase)
        if self._concepts is None:
            return None
        return SemanticInterpretation(
            intent="purchase",
            concepts=tuple(self._concepts),
            source=self.source,
            confidence=self._confidence,
        )


@pytest.fixture
def make_stub() -> Callable[..., StubInterpreter]:
    """Factory for :class:`StubInterpreter` instances."""
    return StubInterpreter
