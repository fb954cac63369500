"""Command group: vertex lifecycle and per-vertex queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chainvertex.commands._base import CvGroup
from chainvertex.services.graph import GraphService

if TYPE_CHECKING:
    from chainvertex.commands._context import AppContext

_VERTEX_EXAMPLES = """\
  chainvertex --state graph.json vertex create "Vertex 1"
  chainvertex --state graph.json vertex get 0
  chainvertex --state graph.json vertex adjacent 0
  chainvertex --state graph.json --caller alice vertex delete 0
  chainvertex --state graph.json vertex exists 0"""


@click.group(cls=CvGroup, examples=_VERTEX_EXAMPLES)
@click.pass_obj
def vertex(app: AppContext) -> None:
    """Create, inspect and delete vertices."""


@vertex.command(
    examples="""\
  chainvertex vertex create "Test Vertex"
  chainvertex --caller alice --json vertex create 'owned by alice'"""
)
@click.argument("data")
@click.pass_obj
def create(app: AppContext, data: str) -> None:
    """Create a vertex holding DATA, owned by the current caller."""
    app.emit(GraphService(app.workspace).create_vertex(data))


@vertex.command(
    examples="""\
  chainvertex vertex get 0
  chainvertex --json vertex get 3"""
)
@click.argument("vertex_id", type=click.IntRange(min=0))
@click.pass_obj
def get(app: AppContext, vertex_id: int) -> None:
    """Show a vertex record, including deleted ones."""
    app.emit(GraphService(app.workspace).get_vertex(vertex_id))


@vertex.command(
    examples="""\
  chainvertex vertex delete 0
  chainvertex --caller alice vertex delete 2"""
)
@click.argument("vertex_id", type=click.IntRange(min=0))
@click.pass_obj
def delete(app: AppContext, vertex_id: int) -> None:
    """Mark a vertex deleted. Only its owner may do this."""
    app.emit(GraphService(app.workspace).delete_vertex(vertex_id))


@vertex.command(
    examples="""\
  chainvertex vertex exists 0
  chainvertex -q vertex exists 7"""
)
@click.argument("vertex_id", type=click.IntRange(min=0))
@click.pass_obj
def exists(app: AppContext, vertex_id: int) -> None:
    """Report whether a vertex is live."""
    app.emit(GraphService(app.workspace).exists(vertex_id))


@vertex.command(
    examples="""\
  chainvertex vertex adjacent 0
  chainvertex -q vertex adjacent 0"""
)
@click.argument("vertex_id", type=click.IntRange(min=0))
@click.pass_obj
def adjacent(app: AppContext, vertex_id: int) -> None:
    """List destinations of a vertex's outgoing edges."""
    app.emit(GraphService(app.workspace).adjacent(vertex_id))
