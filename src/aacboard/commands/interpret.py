"""Standalone command: interpret a phrase into a context board."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from aacboard.commands._base import AacCommand
from aacboard.services.board import ContextBoardService

if TYPE_CHECKING:
    from aacboard.commands._context import AppContext


@click.command(
    cls=AacCommand,
    examples="""\
  aacboard interpret "buy one get one free"
  aacboard interpret "20% off all items" --offline
  aacboard interpret "free shipping" --vocab my-cards.json
  aacboard --json interpret "3 for 2"
  aacboard -v interpret "flash sale" --offline""",
)
@click.argument("phrase")
@click.option(
    "--vocab",
    "vocab_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON vocabulary snapshot (defaults to the starter cards).",
)
@click.option("--offline", is_flag=True, help="Skip the external language model tier.")
@click.pass_obj
def interpret(app: AppContext, phrase: str, vocab_path: str | None, offline: bool) -> None:
    """Interpret PHRASE and show the resulting context board."""
    vocabulary = app.vocabulary(vocab_path)
    svc = ContextBoardService.from_settings(app.settings, offline=offline)
    app.emit(svc.interpret_phrase(phrase, vocabulary))
