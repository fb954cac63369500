"""Vertex and edge records plus the limits that govern them.

Records are frozen. The store never edits one in place; flipping the
liveness flag swaps in a copy, so a record handed out by a query is a
stable snapshot of the moment it was read.
"""

from __future__ import annotations

from collections.abc import Hashable

from pydantic import BaseModel, Field

MAX_DATA_LENGTH = 500

# Opaque actor reference. The store only hashes and compares it.
type CallerIdentity = Hashable


class Vertex(BaseModel):
    """A stored data node with an owner and a text payload."""

    model_config = {"frozen": True}

    id: int = Field(ge=0)
    owner: Hashable
    data: str
    created_at: int
    live: bool = True


class Edge(BaseModel):
    """A directed, weighted, typed connection between two vertices."""

    model_config = {"frozen": True}

    from_id: int = Field(ge=0)
    to_id: int = Field(ge=0)
    weight: int
    edge_type: str
    live: bool = True

    @property
    def key(self) -> tuple[int, int]:
        return (self.from_id, self.to_id)
