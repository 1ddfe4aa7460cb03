"""Command group: predefined boards and temporary-card promotion."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from aacboard.commands._base import AacGroup
from aacboard.domain.models import Card
from aacboard.domain.scenarios import PREDEFINED_CONTEXTS
from aacboard.services.board import ContextBoardService
from aacboard.services.result import ServiceResult

if TYPE_CHECKING:
    from aacboard.commands._context import AppContext


@click.group(
    cls=AacGroup,
    examples="""\
  aacboard board predefined shopping
  aacboard board predefined restaurant --vocab my-cards.json
  aacboard board promote "$(cat temporary-card.json)\"""",
)
@click.pass_obj
def board(app: AppContext) -> None:
    """Build fixed boards and promote temporary cards."""


@board.command(
    examples="""\
  aacboard board predefined shopping
  aacboard --json board predefined help"""
)
@click.argument("key", type=click.Choice(sorted(PREDEFINED_CONTEXTS)))
@click.option(
    "--vocab",
    "vocab_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON vocabulary snapshot (defaults to the starter cards).",
)
@click.pass_obj
def predefined(app: AppContext, key: str, vocab_path: str | None) -> None:
    """Show the built-in board for KEY."""
    vocabulary = app.vocabulary(vocab_path)
    svc = ContextBoardService.from_settings(app.settings, offline=True)
    app.emit(svc.predefined_board(key, vocabulary))


@board.command(
    examples="""\
  aacboard board promote "$(cat temporary-card.json)"
  aacboard --json board promote "$(cat temporary-card.json)\""""
)
@click.argument("card_json")
@click.pass_obj
def promote(app: AppContext, card_json: str) -> None:
    """Turn the temporary card CARD_JSON into a new vocabulary entry."""
    try:
        card = Card.model_validate_json(card_json)
    except ValidationError as exc:
        app.emit(
            ServiceResult.failure(
                "promote_card",
                "INVALID_CARD",
                "Card JSON is not a valid card",
                errors=[e["msg"] for e in exc.errors()],
            )
        )
        return
    svc = ContextBoardService.from_settings(app.settings, offline=True)
    app.emit(svc.promote_card(card))
