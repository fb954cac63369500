"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Opens the Workspace lazily and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chainvertex.config.logging import configure_logging
from chainvertex.infrastructure.snapshot import SnapshotError
from chainvertex.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from chainvertex.config.settings import ChainSettings
    from chainvertex.infrastructure.workspace import Workspace
    from chainvertex.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace opens on first use so ``--help`` and ``--version``
    never read the state file.
    """

    def __init__(self, settings: ChainSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        """The workspace (created on first access)."""
        if self._workspace is None:
            from chainvertex.infrastructure.workspace import Workspace

            try:
                self._workspace = Workspace(self.settings)
            except SnapshotError as exc:
                raise click.ClickException(str(exc)) from exc
            self._workspace.init_event_bus()
            ctx = click.get_current_context(silent=True)
            if ctx is not None:
                ctx.call_on_close(self.close)
        return self._workspace

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
