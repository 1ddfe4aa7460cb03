"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Resolves the vocabulary snapshot and centralizes
result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from aacboard.output.formatters import OutputSettings, format_result
from aacboard.services.result import ServiceResult

if TYPE_CHECKING:
    from aacboard.config.settings import AacSettings
    from aacboard.domain.models import Card


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: AacSettings) -> None:
        self.settings = settings

        from aacboard.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from aacboard.services.telemetry import enable_telemetry

            enable_telemetry()

    def vocabulary(self, path: str | None = None) -> list[Card]:
        """The user's vocabulary snapshot.

        Uses *path*, then ``[vocabulary] path``, then the starter cards (if
        enabled).  An unreadable snapshot is reported and exits with code 1.
        """
        from aacboard.domain.scenarios import STARTER_VOCABULARY
        from aacboard.infrastructure.vocabulary import VocabularyError, load_vocabulary

        source = path or self.settings.vocabulary.path
        if source is None:
            return list(STARTER_VOCABULARY) if self.settings.vocabulary.use_starter_cards else []

        try:
            return load_vocabulary(Path(source))
        except VocabularyError as exc:
            self.emit(
                ServiceResult.failure(
                    "load_vocabulary", "INVALID_VOCABULARY", str(exc), path=str(source)
                )
            )
            raise  # unreachable: emit() exits on failure

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, returns normally.  Warnings go to stderr so they
          don't pollute piped output.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
