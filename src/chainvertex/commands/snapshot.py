"""Standalone command: dump the store as a snapshot document."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from chainvertex.commands._base import CvCommand
from chainvertex.services.graph import GraphService

if TYPE_CHECKING:
    from chainvertex.commands._context import AppContext


@click.command(
    cls=CvCommand,
    examples="""\
  chainvertex --state graph.json snapshot
  chainvertex --state graph.json snapshot --output backup.json
  chainvertex --state graph.json --json snapshot""",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the snapshot JSON to this file.",
)
@click.pass_obj
def snapshot(app: AppContext, output: Path | None) -> None:
    """Summarize the store image, optionally writing it to a file."""
    app.emit(GraphService(app.workspace).snapshot(output=output))
