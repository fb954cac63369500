"""Error kinds raised by the graph store.

Every failure is request-scoped: the operation that raises has applied
none of its effects. ``code`` is the stable identifier the service layer
copies into ``ServiceError.code``.
"""

from __future__ import annotations

from typing import Any


class GraphStoreError(Exception):
    """Base class for all store precondition failures."""

    code = "GRAPH_STORE_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidArgument(GraphStoreError):
    """Malformed input: bad payload, zero weight, empty type, self-loop."""

    code = "INVALID_ARGUMENT"


class NotFound(GraphStoreError):
    """Reference to an unallocated vertex id or a missing edge pair."""

    code = "NOT_FOUND"


class AlreadyExists(GraphStoreError):
    """Duplicate edge for an ordered (from, to) pair."""

    code = "ALREADY_EXISTS"


class PermissionDenied(GraphStoreError):
    """Caller is not the owner of the vertex it tried to mutate."""

    code = "PERMISSION_DENIED"
