"""
Category service.
"""

from __future__ import annotations

from finflow.auth.context import AuthContext
from finflow.core.errors import InvalidTypeError
from finflow.core.models import Category, CategoryType
from finflow.services.base import OwnedResourceService

INVALID_CATEGORY_TYPE = (
    "Invalid category type. Must be 0 (Expense), 1 (Income), or 2 (Investment)"
)


def parse_category_type(value: int) -> CategoryType:
    if not CategoryType.is_valid(value):
        raise InvalidTypeError(INVALID_CATEGORY_TYPE)
    return CategoryType(value)


class CategoryService(OwnedResourceService[Category]):
    resource_name = "category"

    async def create(self, ctx: AuthContext, *, name: str, type: int) -> Category:
        user_id = ctx.require_user()
        category = Category(
            user_id=user_id,
            name=name,
            type=parse_category_type(type),
            created_by=self.system_user,
        )
        await self.repository.create(category)
        return category

    async def update(
        self,
        ctx: AuthContext,
        category_id: str,
        *,
        name: str,
        type: int,
    ) -> Category:
        category = await self.load_owned(ctx, category_id, "update")
        category_type = parse_category_type(type)

        category.name = name
        category.type = category_type
        category.update_modified(self.system_user)

        await self.repository.update(category)
        return category
