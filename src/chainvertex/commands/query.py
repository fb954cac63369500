"""Command group: store-wide queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chainvertex.commands._base import CvGroup
from chainvertex.services.graph import GraphService

if TYPE_CHECKING:
    from chainvertex.commands._context import AppContext

_QUERY_EXAMPLES = """\
  chainvertex query owner
  chainvertex query owner alice
  chainvertex --json query stats"""


@click.group(cls=CvGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """Query ownership and store totals."""


@query.command(
    examples="""\
  chainvertex query owner
  chainvertex -q query owner alice"""
)
@click.argument("identity", required=False)
@click.pass_obj
def owner(app: AppContext, identity: str | None) -> None:
    """List vertex ids created by IDENTITY (default: the current caller)."""
    app.emit(GraphService(app.workspace).user_vertices(identity))


@query.command(
    examples="""\
  chainvertex query stats
  chainvertex --json query stats"""
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show total vertices and edges ever created."""
    app.emit(GraphService(app.workspace).stats())
