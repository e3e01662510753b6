"""Per-run memo of schemas computed for resource types."""

from typing import Callable, Hashable

import structlog

from openapi_autodoc.schema.models import SchemaNode

logger = structlog.get_logger()


class ShapeCache:
    """Write-once mapping from a resource type to its schema.

    Created at the start of a run and passed to whatever needs it; a schema
    is never recomputed once stored.
    """

    def __init__(self) -> None:
        self._shapes: dict[Hashable, SchemaNode] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._shapes

    def __len__(self) -> int:
        return len(self._shapes)

    def get(self, key: Hashable) -> SchemaNode | None:
        return self._shapes.get(key)

    def get_or_compute(self, key: Hashable, compute: Callable[[], SchemaNode]) -> SchemaNode:
        if key in self._shapes:
            return self._shapes[key]
        logger.debug("Computing schema", key=getattr(key, "__qualname__", repr(key)))
        node = compute()
        self._shapes[key] = node
        return node
