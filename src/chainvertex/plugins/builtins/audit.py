"""Built-in audit plugin: one log line per store notification.

Registered by the Workspace unless ``[plugins] audit = false``. Lines go
to the ``chainvertex.audit`` logger so they can be routed separately.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable

import pluggy

hookimpl = pluggy.HookimplMarker("chainvertex")

logger = logging.getLogger("chainvertex.audit")


class AuditPlugin:
    """Logs every notification at INFO level."""

    @hookimpl
    def vertex_created(
        self,
        vertex_id: int,
        owner: Hashable,
        data: str,
        timestamp: int,
    ) -> None:
        logger.info(
            "vertex_created id=%d owner=%r length=%d timestamp=%d",
            vertex_id,
            owner,
            len(data),
            timestamp,
        )

    @hookimpl
    def edge_created(self, from_id: int, to_id: int, weight: int, edge_type: str) -> None:
        logger.info(
            "edge_created %d -> %d type=%s weight=%d", from_id, to_id, edge_type, weight
        )

    @hookimpl
    def vertex_deleted(self, vertex_id: int, owner: Hashable) -> None:
        logger.info("vertex_deleted id=%d owner=%r", vertex_id, owner)
