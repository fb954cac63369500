"""GraphService — store operations wrapped in the ServiceResult contract.

Mutations run inside ``Workspace.transaction()`` so they are serialized
and persisted; queries run inside ``Workspace.read()``. Store errors
become ``ok=False`` results carrying the error's code, and so does a
state file that cannot be written (the mutation is rolled back).
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

from chainvertex.domain.errors import GraphStoreError
from chainvertex.infrastructure.snapshot import SnapshotWriteError, save_snapshot
from chainvertex.services.base import BaseService
from chainvertex.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from chainvertex.domain.types import Vertex


class GraphService(BaseService):
    """Vertex and edge operations plus ownership and adjacency queries."""

    def _caller(self, caller: Hashable | None) -> Hashable:
        return self._workspace.caller if caller is None else caller

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_vertex(self, data: str, *, caller: Hashable | None = None) -> ServiceResult:
        """Create a vertex owned by *caller* (default: the configured caller)."""
        op = "create_vertex"
        owner = self._caller(caller)
        try:
            with self._workspace.transaction() as store:
                vertex_id = store.create_vertex(owner, data)
                vertex = store.get_vertex(vertex_id)
        except (GraphStoreError, SnapshotWriteError) as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=_vertex_data(vertex))

    def create_edge(
        self,
        from_id: int,
        to_id: int,
        *,
        weight: int,
        edge_type: str,
    ) -> ServiceResult:
        op = "create_edge"
        try:
            with self._workspace.transaction() as store:
                store.create_edge(from_id, to_id, weight, edge_type)
                edge = store.get_edge(from_id, to_id)
                warnings = [
                    f"Vertex {vid} is not live"
                    for vid in (from_id, to_id)
                    if not store.vertex_exists(vid)
                ]
        except (GraphStoreError, SnapshotWriteError) as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True, op=op, data=edge.model_dump(mode="json"), warnings=warnings
        )

    def delete_vertex(self, vertex_id: int, *, caller: Hashable | None = None) -> ServiceResult:
        """Soft-delete a vertex. Only its owner may do so."""
        op = "delete_vertex"
        try:
            with self._workspace.transaction() as store:
                store.delete_vertex(self._caller(caller), vertex_id)
                vertex = store.get_vertex(vertex_id)
        except (GraphStoreError, SnapshotWriteError) as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=_vertex_data(vertex))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_vertex(self, vertex_id: int) -> ServiceResult:
        op = "get_vertex"
        try:
            with self._workspace.read() as store:
                vertex = store.get_vertex(vertex_id)
        except GraphStoreError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=_vertex_data(vertex))

    def get_edge(self, from_id: int, to_id: int) -> ServiceResult:
        op = "get_edge"
        try:
            with self._workspace.read() as store:
                edge = store.get_edge(from_id, to_id)
        except GraphStoreError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=edge.model_dump(mode="json"))

    def adjacent(self, vertex_id: int) -> ServiceResult:
        """Outgoing destinations of *vertex_id*, in creation order."""
        op = "adjacent"
        try:
            with self._workspace.read() as store:
                ids = store.get_adjacent_vertices(vertex_id)
        except GraphStoreError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"vertex_id": vertex_id, "count": len(ids), "items": _id_items(ids)},
        )

    def user_vertices(self, owner: Hashable | None = None) -> ServiceResult:
        """Vertex ids created by *owner*. Unknown owners yield an empty list."""
        owner = self._caller(owner)
        with self._workspace.read() as store:
            ids = store.get_user_vertices(owner)
        return ServiceResult(
            ok=True,
            op="user_vertices",
            data={"owner": _jsonable_owner(owner), "count": len(ids), "items": _id_items(ids)},
        )

    def exists(self, vertex_id: int) -> ServiceResult:
        """Liveness of *vertex_id*. Never fails, even for unknown ids."""
        with self._workspace.read() as store:
            live = store.vertex_exists(vertex_id)
        return ServiceResult(ok=True, op="exists", data={"vertex_id": vertex_id, "exists": live})

    def stats(self) -> ServiceResult:
        """Vertex and edge counters (successful creates, not live records)."""
        with self._workspace.read() as store:
            data = {
                "total_vertices": store.get_total_vertices(),
                "total_edges": store.get_total_edges(),
            }
        return ServiceResult(ok=True, op="stats", data=data)

    def snapshot(self, *, output: Path | None = None) -> ServiceResult:
        """Full store image in the snapshot JSON shape.

        With *output*, the snapshot is also written there as JSON.
        """
        op = "snapshot"
        try:
            with self._workspace.read() as store:
                snap = store.snapshot()
            if output is not None:
                save_snapshot(output, snap)
        except (GraphStoreError, SnapshotWriteError) as exc:
            return self._failure(op, exc)
        meta: dict[str, Any] = {"vertices": len(snap.vertices), "edges": len(snap.edges)}
        if output is not None:
            meta["output"] = str(output)
        return ServiceResult(ok=True, op=op, data=snap.model_dump(mode="json"), meta=meta)


def _vertex_data(vertex: Vertex) -> dict[str, Any]:
    return vertex.model_dump(mode="json")


def _id_items(ids: list[int]) -> list[dict[str, int]]:
    return [{"id": vertex_id} for vertex_id in ids]


def _jsonable_owner(owner: Hashable) -> Any:
    if isinstance(owner, (str, int, float, bool)):
        return owner
    return repr(owner)
