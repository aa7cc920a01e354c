"""
Base class for services over user-owned records.

Every read or write of an owned record goes through load_owned():

    1. resolve the caller from the AuthContext  -> UnauthenticatedError
    2. load the record by id                     -> NotFoundError
    3. compare record.user_id with the caller    -> ForbiddenError

The owner is compared after loading, never pushed into the lookup, so
"does not exist" and "belongs to someone else" stay distinct outcomes.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from finflow.auth.context import AuthContext
from finflow.core.errors import ForbiddenError, NotFoundError
from finflow.core.models import Entity
from finflow.storage.repositories import OwnedRepository

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Entity)


class OwnedResourceService(Generic[RecordT]):
    """Shared ownership enforcement for categories and wallets."""

    # Used in client-facing messages, e.g. "wallet"
    resource_name: str = "resource"

    def __init__(self, repository: OwnedRepository[RecordT], system_user: str):
        self.repository = repository
        self.system_user = system_user

    async def load_owned(self, ctx: AuthContext, record_id: str, action: str = "access") -> RecordT:
        """
        Load a record the caller owns.

        Args:
            ctx: Caller identity
            record_id: Record to load
            action: Verb for the forbidden message ("access", "update", "delete")
        """
        user_id = ctx.require_user()

        record = await self.repository.get_by_id(record_id)
        if record is None:
            raise NotFoundError(f"{self.resource_name.capitalize()} not found")

        if record.user_id != user_id:
            logger.warning(
                f"User {user_id} tried to {action} {self.resource_name} {record_id} "
                f"owned by another user"
            )
            raise ForbiddenError(
                f"You do not have permission to {action} this {self.resource_name}"
            )

        return record

    async def get(self, ctx: AuthContext, record_id: str) -> RecordT:
        return await self.load_owned(ctx, record_id, "access")

    async def list(self, ctx: AuthContext) -> list[RecordT]:
        """All records owned by the caller, newest first."""
        user_id = ctx.require_user()
        return await self.repository.list(user_id)

    async def delete(self, ctx: AuthContext, record_id: str) -> None:
        record = await self.load_owned(ctx, record_id, "delete")
        await self.repository.delete(record.id, record.user_id)
