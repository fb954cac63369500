"""Subcommand modules for chainvertex.

Provides register_commands(), which uses deferred imports to keep
``chainvertex --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root group."""
    from chainvertex.commands.edge import edge
    from chainvertex.commands.query import query
    from chainvertex.commands.snapshot import snapshot
    from chainvertex.commands.vertex import vertex

    cli.add_command(vertex)
    cli.add_command(edge)
    cli.add_command(query)
    cli.add_command(snapshot)
