"""Result envelope returned by every GraphService method.

A service call never raises for a store precondition failure or a state
file that cannot be written. It returns ``ok=False`` with a
:class:`ServiceError` whose ``code`` is one of the store error codes
(``INVALID_ARGUMENT``, ``NOT_FOUND``, ``ALREADY_EXISTS``,
``PERMISSION_DENIED``) or ``STATE_WRITE_FAILED``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed: stable code, human message, JSON detail."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation, named by ``op`` (``"create_edge"``, ``"stats"``...).

    ``data`` holds the record or query answer on success. ``warnings``
    carry non-fatal notes such as an edge touching a deleted vertex.
    ``meta`` holds counts and output paths that only verbose rendering shows.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls, op: str, code: str, message: str, detail: dict[str, Any] | None = None
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )

    @property
    def item_ids(self) -> list[int] | None:
        """Ids of an id-list answer (``adjacent``, ``user_vertices``), else None."""
        items = self.data.get("items")
        if not isinstance(items, list):
            return None
        return [item["id"] for item in items]
