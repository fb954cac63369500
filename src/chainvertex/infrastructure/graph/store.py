"""GraphStore — the authoritative in-memory vertex/edge engine.

Edges and adjacency live in a NetworkX ``DiGraph``: each allocated vertex
id is a node, each edge record hangs off its ``(from, to)`` pair under the
``record`` attribute. ``DiGraph`` keeps one edge per ordered pair and
yields successors in insertion order, which is exactly the append-only
adjacency list the query surface exposes. Vertex records, owner lists and
both counters are plain fields beside it.

INVARIANT: Every operation checks all of its preconditions before it
applies any effect. A failing call leaves the store untouched.

INVARIANT: Vertices are soft-deleted only. Owner and adjacency lists are
never pruned, and the counters never decrease.

The engine assumes sequential application of operations. Callers running
it under parallel threads serialize through :class:`Workspace`.
"""

from __future__ import annotations

import copy
import itertools
import logging
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING, Any

import networkx as nx

from chainvertex.domain.clock import LogicalClock
from chainvertex.domain.errors import AlreadyExists, InvalidArgument, NotFound, PermissionDenied
from chainvertex.domain.types import MAX_DATA_LENGTH, Edge, Vertex
from chainvertex.infrastructure.snapshot import SNAPSHOT_FORMAT_VERSION, GraphSnapshot, OwnerVertices

if TYPE_CHECKING:
    from chainvertex.domain.clock import Clock

logger = logging.getLogger(__name__)

type Sink = Callable[[str, dict[str, Any]], None]
type _Graph = nx.DiGraph


class GraphStore:
    """Vertex/edge store with ownership tracking and adjacency queries.

    Parameters:
        clock: Timestamp provider for ``Vertex.created_at``. Defaults to a
            fresh :class:`LogicalClock`.
        sink: Notification sink called as ``sink(hook_name, payload)``
            after each successful mutation.
    """

    def __init__(self, *, clock: Clock | None = None, sink: Sink | None = None) -> None:
        self._clock: Clock = clock if clock is not None else LogicalClock()
        self._sink = sink
        self._graph: _Graph = nx.DiGraph()
        self._vertices: dict[int, Vertex] = {}
        self._owners: dict[Hashable, list[int]] = {}
        self._next_vertex_id = 0
        self._edge_count = 0

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_vertex(self, caller: Hashable, data: str) -> int:
        """Store a new live vertex owned by *caller* and return its id.

        Raises:
            InvalidArgument: If *data* is empty or longer than 500 characters.
        """
        if not data:
            raise InvalidArgument("Data cannot be empty")
        if len(data) > MAX_DATA_LENGTH:
            raise InvalidArgument(
                f"Data exceeds maximum length of {MAX_DATA_LENGTH}",
                length=len(data),
            )

        vertex_id = self._next_vertex_id
        vertex = Vertex(id=vertex_id, owner=caller, data=data, created_at=self._clock())

        self._next_vertex_id += 1
        self._vertices[vertex_id] = vertex
        self._graph.add_node(vertex_id)
        self._owners.setdefault(caller, []).append(vertex_id)
        logger.debug("Created vertex %d for %r", vertex_id, caller)

        self._emit(
            "vertex_created",
            {
                "vertex_id": vertex_id,
                "owner": caller,
                "data": data,
                "timestamp": vertex.created_at,
            },
        )
        return vertex_id

    def create_edge(self, from_id: int, to_id: int, weight: int, edge_type: str) -> None:
        """Store a directed edge and append *to_id* to *from_id*'s adjacency.

        Checks run in a fixed order and the first failure wins. Endpoints
        need only exist; a soft-deleted vertex still qualifies.

        Raises:
            NotFound: If either endpoint was never allocated.
            InvalidArgument: On a non-positive weight, empty type or self-loop.
            AlreadyExists: If an edge for the ordered pair is already stored.
        """
        if from_id not in self._vertices or to_id not in self._vertices:
            raise NotFound("Vertex does not exist", from_id=from_id, to_id=to_id)
        if weight <= 0:
            raise InvalidArgument("Weight must be positive", weight=weight)
        if not edge_type:
            raise InvalidArgument("Edge type cannot be empty")
        if from_id == to_id:
            raise InvalidArgument("Cannot create self-loops", vertex_id=from_id)
        if self._graph.has_edge(from_id, to_id):
            raise AlreadyExists("Edge already exists", from_id=from_id, to_id=to_id)

        edge = Edge(from_id=from_id, to_id=to_id, weight=weight, edge_type=edge_type)
        self._graph.add_edge(from_id, to_id, record=edge)
        self._edge_count += 1
        logger.debug("Created edge %d -> %d (%s, %d)", from_id, to_id, edge_type, weight)

        self._emit(
            "edge_created",
            {"from_id": from_id, "to_id": to_id, "weight": weight, "edge_type": edge_type},
        )

    def delete_vertex(self, caller: Hashable, vertex_id: int) -> None:
        """Mark a vertex not-live. Edges, lists and counters are untouched.

        Raises:
            NotFound: If *vertex_id* was never allocated.
            PermissionDenied: If *caller* is not the vertex owner.
        """
        vertex = self._require_vertex(vertex_id)
        if vertex.owner != caller:
            raise PermissionDenied("Not vertex owner", vertex_id=vertex_id)

        self._vertices[vertex_id] = vertex.model_copy(update={"live": False})
        logger.debug("Deleted vertex %d", vertex_id)

        self._emit("vertex_deleted", {"vertex_id": vertex_id, "owner": vertex.owner})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_vertex(self, vertex_id: int) -> Vertex:
        """Return the vertex record, live or not."""
        return self._require_vertex(vertex_id)

    def get_edge(self, from_id: int, to_id: int) -> Edge:
        """Return the edge stored for the ordered pair."""
        if not self._graph.has_edge(from_id, to_id):
            raise NotFound("Edge does not exist", from_id=from_id, to_id=to_id)
        return self._graph.edges[from_id, to_id]["record"]

    def get_adjacent_vertices(self, vertex_id: int) -> list[int]:
        """Destinations of *vertex_id*'s edges in creation order, unfiltered."""
        self._require_vertex(vertex_id)
        return list(self._graph.successors(vertex_id))

    def get_user_vertices(self, owner: Hashable) -> list[int]:
        """Ids created by *owner* in creation order. Unknown owners get ``[]``."""
        return list(self._owners.get(owner, ()))

    def get_total_vertices(self) -> int:
        return self._next_vertex_id

    def get_total_edges(self) -> int:
        return self._edge_count

    def is_vertex_exists(self, vertex_id: int) -> bool:
        """Current liveness flag; ``False`` for ids never allocated."""
        vertex = self._vertices.get(vertex_id)
        return vertex is not None and vertex.live

    vertex_exists = is_vertex_exists

    # ------------------------------------------------------------------
    # Snapshot / restore
    # ------------------------------------------------------------------

    def copy(self) -> GraphStore:
        """Independent copy of the store, sharing only the frozen records.

        The clock is copied too, so stamps issued by one copy never advance
        the other. Both copies keep the same sink.
        """
        clone = GraphStore(clock=copy.copy(self._clock), sink=self._sink)
        clone._graph = self._graph.copy()
        clone._vertices = dict(self._vertices)
        clone._owners = {owner: list(ids) for owner, ids in self._owners.items()}
        clone._next_vertex_id = self._next_vertex_id
        clone._edge_count = self._edge_count
        return clone

    def snapshot(self) -> GraphSnapshot:
        """Capture records, indices and counters as a frozen snapshot.

        Raises:
            InvalidArgument: If an owner is not a JSON scalar, since the
                snapshot could not be written and read back.
        """
        for owner in self._owners:
            if not _is_json_scalar(owner):
                raise InvalidArgument(
                    "Owner identity cannot be stored in a snapshot", owner=repr(owner)
                )
        edges = [
            self._graph.edges[from_id, to_id]["record"]
            for from_id in self._vertices
            for to_id in self._graph.successors(from_id)
        ]
        return GraphSnapshot(
            next_vertex_id=self._next_vertex_id,
            total_edges=self._edge_count,
            vertices=list(self._vertices.values()),
            edges=edges,
            owners=[
                OwnerVertices(owner=owner, vertex_ids=list(ids))
                for owner, ids in self._owners.items()
            ],
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: GraphSnapshot,
        *,
        clock: Clock | None = None,
        sink: Sink | None = None,
    ) -> GraphStore:
        """Rebuild a store from *snapshot* without emitting notifications.

        When no *clock* is given, a :class:`LogicalClock` resumes after the
        newest ``created_at`` in the snapshot.

        Raises:
            InvalidArgument: If the snapshot's indices disagree with its records.
        """
        _validate_snapshot(snapshot)

        if clock is None:
            clock = LogicalClock(max((v.created_at for v in snapshot.vertices), default=0))
        store = cls(clock=clock, sink=sink)

        for vertex in snapshot.vertices:
            store._vertices[vertex.id] = vertex
            store._graph.add_node(vertex.id)
        # Edges are listed grouped by source in adjacency order.
        for edge in snapshot.edges:
            store._graph.add_edge(edge.from_id, edge.to_id, record=edge)
        for entry in snapshot.owners:
            store._owners[entry.owner] = list(entry.vertex_ids)

        store._next_vertex_id = snapshot.next_vertex_id
        store._edge_count = snapshot.total_edges
        logger.debug(
            "Restored store with %d vertices and %d edges",
            store._next_vertex_id,
            store._edge_count,
        )
        return store

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _require_vertex(self, vertex_id: int) -> Vertex:
        vertex = self._vertices.get(vertex_id)
        if vertex is None:
            raise NotFound("Vertex does not exist", vertex_id=vertex_id)
        return vertex

    def _emit(self, hook_name: str, payload: dict[str, Any]) -> None:
        """Hand a notification to the sink. The mutation is already applied.

        INVARIANT: Sink failures are logged, never raised to the caller.
        """
        if self._sink is None:
            return
        try:
            self._sink(hook_name, payload)
        except Exception:
            logger.warning("Notification sink failed for %s", hook_name, exc_info=True)


def _validate_snapshot(snapshot: GraphSnapshot) -> None:
    """Reject snapshots whose counters or indices don't match the records."""
    if snapshot.format_version != SNAPSHOT_FORMAT_VERSION:
        raise InvalidArgument(
            f"Unsupported snapshot format version {snapshot.format_version}",
            expected=SNAPSHOT_FORMAT_VERSION,
        )

    ids = [v.id for v in snapshot.vertices]
    if ids != list(range(len(ids))) or snapshot.next_vertex_id != len(ids):
        raise InvalidArgument("Snapshot vertex ids are not dense from 0")
    if snapshot.total_edges != len(snapshot.edges):
        raise InvalidArgument("Snapshot edge counter does not match edge records")

    seen: set[tuple[int, int]] = set()
    last_source = -1
    for edge in snapshot.edges:
        if edge.from_id >= len(ids) or edge.to_id >= len(ids):
            raise InvalidArgument("Snapshot edge references a missing vertex", edge=edge.key)
        if edge.from_id == edge.to_id or edge.weight <= 0 or not edge.edge_type:
            raise InvalidArgument("Snapshot contains a malformed edge", edge=edge.key)
        if edge.key in seen:
            raise InvalidArgument("Snapshot contains a duplicate edge", edge=edge.key)
        if edge.from_id < last_source:
            raise InvalidArgument("Snapshot edges are not grouped by source", edge=edge.key)
        seen.add(edge.key)
        last_source = edge.from_id

    listed: list[int] = []
    owners_seen: set[Hashable] = set()
    for entry in snapshot.owners:
        if entry.owner in owners_seen:
            raise InvalidArgument(
                "Snapshot lists an owner more than once", owner=repr(entry.owner)
            )
        owners_seen.add(entry.owner)
        if any(a >= b for a, b in itertools.pairwise(entry.vertex_ids)):
            raise InvalidArgument(
                "Snapshot owner list is not in creation order", owner=repr(entry.owner)
            )
        for vertex_id in entry.vertex_ids:
            if not 0 <= vertex_id < len(ids):
                raise InvalidArgument("Snapshot owner list references a missing vertex")
            if snapshot.vertices[vertex_id].owner != entry.owner:
                raise InvalidArgument("Snapshot owner list disagrees with vertex owners")
        listed.extend(entry.vertex_ids)
    if sorted(listed) != ids:
        raise InvalidArgument("Snapshot owner lists do not cover every vertex exactly once")


def _is_json_scalar(value: object) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))
