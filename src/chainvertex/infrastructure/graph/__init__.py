"""In-memory graph storage engine."""

from chainvertex.infrastructure.graph.store import GraphStore

__all__ = ["GraphStore"]
