"""
In-memory storage for development and tests.

Works without any external services. Data lives for the lifetime of the
process.
"""

from __future__ import annotations

import copy
from typing import Any

from finflow.storage.base import DuplicateKeyError, MetadataStorage


class InMemoryMetadataStorage(MetadataStorage):
    """In-memory document storage with unique index support."""

    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
        self._unique: dict[str, list[tuple[str, ...]]] = {}

    async def ensure_unique(self, collection: str, fields: tuple[str, ...]) -> None:
        indexes = self._unique.setdefault(collection, [])
        if fields not in indexes:
            indexes.append(fields)

    def _check_unique(self, collection: str, id: str, data: dict[str, Any]) -> None:
        for fields in self._unique.get(collection, []):
            key = tuple(data.get(f) for f in fields)
            # NULLs never collide, as in SQL
            if any(v is None for v in key):
                continue
            for other_id, doc in self._data.get(collection, {}).items():
                if other_id != id and tuple(doc.get(f) for f in fields) == key:
                    raise DuplicateKeyError(collection, fields)

    async def insert(self, collection: str, id: str, data: dict[str, Any]) -> None:
        docs = self._data.setdefault(collection, {})
        if id in docs:
            raise DuplicateKeyError(collection, ("id",))
        self._check_unique(collection, id, data)
        docs[id] = copy.deepcopy(data)

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        doc = self._data.get(collection, {}).get(id)
        return copy.deepcopy(doc) if doc is not None else None

    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        results = []
        for doc in self._data.get(collection, {}).values():
            if filters and any(doc.get(k) != v for k, v in filters.items()):
                continue
            results.append(copy.deepcopy(doc))
        return results

    async def replace(self, collection: str, id: str, data: dict[str, Any]) -> bool:
        docs = self._data.get(collection, {})
        if id not in docs:
            return False
        self._check_unique(collection, id, data)
        docs[id] = copy.deepcopy(data)
        return True

    async def delete(self, collection: str, id: str) -> bool:
        docs = self._data.get(collection, {})
        if id in docs:
            del docs[id]
            return True
        return False


def create_local_storage() -> InMemoryMetadataStorage:
    """Create the default development storage backend."""
    return InMemoryMetadataStorage()
