"""
Repositories - domain models in, domain models out.

Each repository owns one collection and its unique indexes, and turns
storage-level DuplicateKeyError into a ConflictError with a message fit
for clients. Repositories never decide who may see a record: get_by_id()
returns whatever is stored and the services compare owners.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from finflow.core.errors import ConflictError, NotFoundError
from finflow.core.models import Category, User, Wallet
from finflow.storage.base import Collections, DuplicateKeyError, MetadataStorage

ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(Generic[ModelT]):
    """Shared CRUD over a single collection."""

    collection: str
    model: type[ModelT]
    unique_indexes: tuple[tuple[str, ...], ...] = ()
    conflict_message = "Resource already exists"
    not_found_message = "Resource not found"

    def __init__(self, storage: MetadataStorage):
        self.storage = storage
        self._indexes_ready = False

    async def _ensure_indexes(self) -> None:
        if self._indexes_ready:
            return
        for fields in self.unique_indexes:
            await self.storage.ensure_unique(self.collection, fields)
        self._indexes_ready = True

    def _to_doc(self, record: ModelT) -> dict[str, Any]:
        return record.model_dump()

    def _from_doc(self, doc: dict[str, Any]) -> ModelT:
        return self.model.model_validate(doc)

    async def create(self, record: ModelT) -> None:
        await self._ensure_indexes()
        try:
            await self.storage.insert(self.collection, record.id, self._to_doc(record))
        except DuplicateKeyError as e:
            raise ConflictError(self.conflict_message) from e

    async def get_by_id(self, id: str) -> ModelT | None:
        doc = await self.storage.get(self.collection, id)
        return self._from_doc(doc) if doc is not None else None

    async def update(self, record: ModelT) -> None:
        await self._ensure_indexes()
        try:
            found = await self.storage.replace(self.collection, record.id, self._to_doc(record))
        except DuplicateKeyError as e:
            raise ConflictError(self.conflict_message) from e
        if not found:
            raise NotFoundError(self.not_found_message)

    async def _query(self, **filters: Any) -> list[ModelT]:
        docs = await self.storage.query(self.collection, filters or None)
        records = [self._from_doc(d) for d in docs]
        # Newest first
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records


class OwnedRepository(Repository[ModelT]):
    """Records with a `user_id` owner column."""

    async def list(self, owner_id: str) -> list[ModelT]:
        return await self._query(user_id=owner_id)

    async def delete(self, id: str, owner_id: str) -> None:
        """Delete a record belonging to `owner_id`."""
        doc = await self.storage.get(self.collection, id)
        if doc is None or doc.get("user_id") != owner_id:
            raise NotFoundError(self.not_found_message)
        await self.storage.delete(self.collection, id)


# =============================================================================
# Users
# =============================================================================


class UserRepository(Repository[User]):
    collection = Collections.USERS
    model = User
    unique_indexes = (("email",), ("auth_id",))
    conflict_message = "An account with this email address already exists"
    not_found_message = "User not found"

    async def get_by_email(self, email: str) -> User | None:
        users = await self._query(email=email.lower())
        return users[0] if users else None

    async def get_by_auth_id(self, auth_id: str) -> User | None:
        users = await self._query(auth_id=auth_id)
        return users[0] if users else None

    async def list_all(self) -> list[User]:
        return await self._query()

    async def delete(self, id: str) -> None:
        if not await self.storage.delete(self.collection, id):
            raise NotFoundError(self.not_found_message)


# =============================================================================
# Categories
# =============================================================================


class CategoryRepository(OwnedRepository[Category]):
    collection = Collections.CATEGORIES
    model = Category
    unique_indexes = (("user_id", "name"),)
    conflict_message = "A category with this name already exists"
    not_found_message = "Category not found"


# =============================================================================
# Wallets
# =============================================================================


class WalletRepository(OwnedRepository[Wallet]):
    collection = Collections.WALLETS
    model = Wallet
    unique_indexes = (("user_id", "name"),)
    conflict_message = "A wallet with this name already exists"
    not_found_message = "Wallet not found"
