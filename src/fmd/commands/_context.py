"""AppContext: settings plus result emission for the fmd command.

Routes output the way a find-like tool should: matches on stdout,
warnings, summaries and errors on stderr, exit code 1 on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fmd.output.formatters import OutputSettings, format_result
from fmd.output.renderers import render_error, render_summary, render_warnings

if TYPE_CHECKING:
    from fmd.config.settings import FmdSettings
    from fmd.services.result import ServiceResult


class AppContext:
    """Per-invocation context built from resolved settings."""

    def __init__(self, settings: FmdSettings) -> None:
        self.settings = settings

        from fmd.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: paths (or JSON) to stdout. Warnings go to stderr; in
          JSON mode they are already in the payload. With ``--verbose`` a
          summary line follows on stderr.
        * Failure: error to stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            nul=self.settings.output.nul,
        )
        if not result.ok:
            if settings.json_output:
                click.echo(result.model_dump_json(indent=2), err=True)
            else:
                click.echo(render_error(result, verbose=self.settings.verbose), err=True)
            raise SystemExit(1)

        click.echo(format_result(result, settings=settings), nl=False)
        if settings.json_output:
            return
        if result.warnings:
            click.echo(render_warnings(result), err=True)
        if self.settings.verbose:
            click.echo(render_summary(result), err=True)
