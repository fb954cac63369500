"""Tests for Vertex/Edge records and error kinds."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chainvertex.domain.errors import (
    AlreadyExists,
    GraphStoreError,
    InvalidArgument,
    NotFound,
    PermissionDenied,
)
from chainvertex.domain.types import Edge, Vertex


class TestVertex:
    def test_defaults_live(self) -> None:
        vertex = Vertex(id=0, owner="alice", data="V1", created_at=1)
        assert vertex.live is True

    def test_frozen(self) -> None:
        vertex = Vertex(id=0, owner="alice", data="V1", created_at=1)
        with pytest.raises(ValidationError):
            vertex.live = False  # type: ignore[misc]

    def test_negative_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Vertex(id=-1, owner="alice", data="V1", created_at=1)

    def test_unhashable_owner_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Vertex(id=0, owner=["not", "hashable"], data="V1", created_at=1)

    def test_json_round_trip(self) -> None:
        vertex = Vertex(id=3, owner="alice", data="V1", created_at=9, live=False)
        assert Vertex.model_validate_json(vertex.model_dump_json()) == vertex


class TestEdge:
    def test_key(self) -> None:
        edge = Edge(from_id=2, to_id=5, weight=1, edge_type="x")
        assert edge.key == (2, 5)

    def test_dump_shape(self) -> None:
        edge = Edge(from_id=0, to_id=1, weight=100, edge_type="connection")
        assert edge.model_dump() == {
            "from_id": 0,
            "to_id": 1,
            "weight": 100,
            "edge_type": "connection",
            "live": True,
        }


class TestErrors:
    @pytest.mark.parametrize(
        ("cls", "code"),
        [
            (InvalidArgument, "INVALID_ARGUMENT"),
            (NotFound, "NOT_FOUND"),
            (AlreadyExists, "ALREADY_EXISTS"),
            (PermissionDenied, "PERMISSION_DENIED"),
        ],
    )
    def test_codes(self, cls: type[GraphStoreError], code: str) -> None:
        exc = cls("boom", vertex_id=3)
        assert isinstance(exc, GraphStoreError)
        assert exc.code == code
        assert exc.message == "boom"
        assert exc.detail == {"vertex_id": 3}
        assert str(exc) == "boom"
