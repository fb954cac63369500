"""Command group: directed edges."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chainvertex.commands._base import CvGroup
from chainvertex.services.graph import GraphService

if TYPE_CHECKING:
    from chainvertex.commands._context import AppContext

_EDGE_EXAMPLES = """\
  chainvertex --state graph.json edge create 0 1 --weight 100 --type connection
  chainvertex --state graph.json edge get 0 1"""


@click.group(cls=CvGroup, examples=_EDGE_EXAMPLES)
@click.pass_obj
def edge(app: AppContext) -> None:
    """Create and inspect directed, weighted edges."""


@edge.command(
    examples="""\
  chainvertex edge create 0 1 --weight 100 --type connection
  chainvertex --json edge create 1 2 -w 5 -t linked"""
)
@click.argument("from_id", type=click.IntRange(min=0))
@click.argument("to_id", type=click.IntRange(min=0))
@click.option("-w", "--weight", type=int, required=True, help="Positive edge weight.")
@click.option("-t", "--type", "edge_type", required=True, help="Edge label.")
@click.pass_obj
def create(app: AppContext, from_id: int, to_id: int, weight: int, edge_type: str) -> None:
    """Create an edge FROM_ID -> TO_ID."""
    app.emit(
        GraphService(app.workspace).create_edge(
            from_id, to_id, weight=weight, edge_type=edge_type
        )
    )


@edge.command(
    examples="""\
  chainvertex edge get 0 1
  chainvertex --json edge get 0 1"""
)
@click.argument("from_id", type=click.IntRange(min=0))
@click.argument("to_id", type=click.IntRange(min=0))
@click.pass_obj
def get(app: AppContext, from_id: int, to_id: int) -> None:
    """Show the edge FROM_ID -> TO_ID."""
    app.emit(GraphService(app.workspace).get_edge(from_id, to_id))
