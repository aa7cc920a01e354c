"""
Storage abstraction layer.

All persistence goes through MetadataStorage. The application only ever
talks to the repositories in finflow.storage.repositories, which map
domain models to documents on top of this interface.

Consistency rules (unique emails, unique wallet names per owner...) are
declared as unique indexes and enforced by the storage backend, not by
services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StorageError(Exception):
    """Base exception for storage failures."""
    pass


class DuplicateKeyError(StorageError):
    """A write would violate a unique index."""

    def __init__(self, collection: str, fields: tuple[str, ...]):
        self.collection = collection
        self.fields = fields
        super().__init__(f"duplicate key in {collection}: {', '.join(fields)}")


# =============================================================================
# Storage Interface
# =============================================================================


class MetadataStorage(ABC):
    """
    Storage for structured documents, one collection per record type.

    Local Implementation: in-memory (finflow.storage.local)
    """

    @abstractmethod
    async def ensure_unique(self, collection: str, fields: tuple[str, ...]) -> None:
        """Declare a unique index over `fields`. Idempotent."""
        pass

    @abstractmethod
    async def insert(self, collection: str, id: str, data: dict[str, Any]) -> None:
        """Store a new document. Raises DuplicateKeyError."""
        pass

    @abstractmethod
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        """Get a document by ID."""
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Documents whose fields equal every value in `filters`."""
        pass

    @abstractmethod
    async def replace(self, collection: str, id: str, data: dict[str, Any]) -> bool:
        """Overwrite an existing document. False if absent. Raises DuplicateKeyError."""
        pass

    @abstractmethod
    async def delete(self, collection: str, id: str) -> bool:
        """Delete a document. False if absent."""
        pass


# =============================================================================
# Collection Names
# =============================================================================


class Collections:
    """Standard collection names."""

    USERS = "users"
    CATEGORIES = "categories"
    WALLETS = "wallets"
