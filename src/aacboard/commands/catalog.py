"""Command group: browse the promotion catalog and test phrases against it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from aacboard.commands._base import AacGroup
from aacboard.services.catalog import CatalogService

if TYPE_CHECKING:
    from aacboard.commands._context import AppContext

_CATALOG_EXAMPLES = """\
  aacboard catalog patterns
  aacboard catalog show BOGO
  aacboard catalog match "buy 1 get 1 free"
  aacboard --json catalog match "half off everything" """


@click.group(cls=AacGroup, examples=_CATALOG_EXAMPLES)
@click.pass_obj
def catalog(app: AppContext) -> None:
    """Browse the promotion catalog."""


def _service(app: AppContext) -> CatalogService:
    return CatalogService(confidence_threshold=app.settings.interpret.confidence_threshold)


@catalog.command(
    examples="""\
  aacboard catalog patterns
  aacboard -q catalog patterns"""
)
@click.pass_obj
def patterns(app: AppContext) -> None:
    """List every known promotion phrasing."""
    app.emit(_service(app).patterns())


@catalog.command(
    examples="""\
  aacboard catalog show BOGO
  aacboard --json catalog show free_shipping"""
)
@click.argument("promotion_id")
@click.pass_obj
def show(app: AppContext, promotion_id: str) -> None:
    """Show one catalog entry by PROMOTION_ID."""
    app.emit(_service(app).show(promotion_id))


@catalog.command(
    examples="""\
  aacboard catalog match "bogo"
  aacboard catalog match "buy one get one fre" """
)
@click.argument("phrase")
@click.pass_obj
def match(app: AppContext, phrase: str) -> None:
    """Score PHRASE against the catalog only."""
    app.emit(_service(app).match(phrase))
