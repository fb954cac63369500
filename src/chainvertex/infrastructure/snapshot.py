"""GraphSnapshot — serializable image of a GraphStore.

The store itself is in-memory only. A collaborator that wants state to
outlive the process (the CLI's ``--state`` file) captures a snapshot,
writes it as JSON, and restores it on the next run.

Owner lists are stored as ``(owner, vertex_ids)`` pairs rather than a JSON
object because caller identities may be any JSON scalar, not only strings.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Hashable
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from chainvertex.domain.types import Edge, Vertex

SNAPSHOT_FORMAT_VERSION = 1

logger = logging.getLogger(__name__)


class OwnerVertices(BaseModel):
    """One owner's vertex ids in creation order."""

    model_config = {"frozen": True}

    owner: Hashable
    vertex_ids: list[int] = Field(default_factory=list)


class GraphSnapshot(BaseModel):
    """Records, indices and counters of a store at one instant.

    ``edges`` are grouped by source vertex, each group in adjacency order,
    so replaying them rebuilds the adjacency lists exactly.
    """

    model_config = {"frozen": True}

    format_version: int = SNAPSHOT_FORMAT_VERSION
    next_vertex_id: int = 0
    total_edges: int = 0
    vertices: list[Vertex] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    owners: list[OwnerVertices] = Field(default_factory=list)


class SnapshotError(Exception):
    """A snapshot file could not be read or parsed."""

    summary = "Invalid snapshot"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{self.summary} {path}: {reason}")
        self.path = path
        self.reason = reason


class SnapshotWriteError(SnapshotError):
    """A snapshot file could not be written."""

    summary = "Cannot write snapshot"


def save_snapshot(path: Path, snapshot: GraphSnapshot) -> None:
    """Write *snapshot* to *path* as JSON.

    Writes to a sibling temp file and renames it into place, so a crash
    mid-write leaves the previous snapshot intact.

    Raises:
        SnapshotWriteError: If the directory or file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise SnapshotWriteError(path, str(exc)) from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(snapshot.model_dump_json(indent=2))
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise SnapshotWriteError(path, str(exc)) from exc
    logger.debug("Saved snapshot to %s", path)


def load_snapshot(path: Path) -> GraphSnapshot | None:
    """Read a snapshot from *path*. Returns None if the file does not exist.

    Raises:
        SnapshotError: If the file exists but is not a valid snapshot.
    """
    if not path.is_file():
        return None
    raw = path.read_text(encoding="utf-8")
    try:
        return GraphSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotError(path, str(exc)) from exc
