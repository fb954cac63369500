"""Pluggy hook specifications for graph store notifications.

One hook per notification kind. ``edge_deleted`` completes the contract
shape but no store operation emits it.
"""

from __future__ import annotations

from collections.abc import Hashable

import pluggy

hookspec = pluggy.HookspecMarker("chainvertex")

NOTIFICATION_HOOKS = ("vertex_created", "edge_created", "vertex_deleted", "edge_deleted")


class ChainVertexHookSpec:
    """Hook specifications for the chainvertex plugin system."""

    @hookspec
    def vertex_created(
        self,
        vertex_id: int,
        owner: Hashable,
        data: str,
        timestamp: int,
    ) -> None:
        """Called after a vertex is stored."""

    @hookspec
    def edge_created(
        self,
        from_id: int,
        to_id: int,
        weight: int,
        edge_type: str,
    ) -> None:
        """Called after an edge is stored."""

    @hookspec
    def vertex_deleted(self, vertex_id: int, owner: Hashable) -> None:
        """Called after a vertex is marked not-live."""

    @hookspec
    def edge_deleted(self, from_id: int, to_id: int) -> None:
        """Reserved. Never dispatched."""
