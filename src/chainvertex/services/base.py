"""BaseService — shared foundation for chainvertex services.

Every service receives a :class:`Workspace` at construction time and
reaches the store only through ``transaction()`` or ``read()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chainvertex.infrastructure.snapshot import SnapshotWriteError
from chainvertex.services.result import ServiceResult

if TYPE_CHECKING:
    from chainvertex.domain.errors import GraphStoreError
    from chainvertex.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)

STATE_WRITE_FAILED = "STATE_WRITE_FAILED"


class BaseService:
    """Base for service-layer classes.

    Usage::

        class GraphService(BaseService):
            def create_vertex(self, data: str) -> ServiceResult:
                try:
                    with self._workspace.transaction() as store:
                        ...
                except (GraphStoreError, SnapshotWriteError) as exc:
                    return self._failure("create_vertex", exc)
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @staticmethod
    def _failure(op: str, exc: GraphStoreError | SnapshotWriteError) -> ServiceResult:
        """Translate a store error or a failed state write into a failed ServiceResult."""
        if isinstance(exc, SnapshotWriteError):
            logger.info("%s rolled back: %s", op, exc)
            return ServiceResult.failure(op, STATE_WRITE_FAILED, str(exc), {"path": str(exc.path)})
        logger.debug("%s failed: %s (%s)", op, exc.message, exc.code)
        return ServiceResult.failure(
            op, exc.code, exc.message, {k: _jsonable(v) for k, v in exc.detail.items()}
        )


def _jsonable(value: object) -> object:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, tuple):
        return list(value)
    return repr(value)
