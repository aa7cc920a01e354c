# =============================================================================
# Category API Routes
# =============================================================================
#
# All endpoints require a session token. Records are scoped to their owner:
# someone else's category answers 403, a missing one 404.
#
# =============================================================================

from fastapi import APIRouter, Depends, Request

from finflow.api.errors import success
from finflow.api.schemas import (
    CategoryRequest,
    CategoryResponse,
    ErrorResponse,
    MessageResponse,
    parse_body,
)
from finflow.auth.context import AuthContext
from finflow.auth.policies import require_auth
from finflow.container import Container, get_container

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


@router.post("", response_model=MessageResponse)
async def create_category(
    request: Request,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    body = await parse_body(request, CategoryRequest)
    await container.categories.create(ctx, name=body.name, type=body.type)
    return success("Category created successfully")


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    """Categories owned by the caller, newest first."""
    categories = await container.categories.list(ctx)
    return [CategoryResponse.from_category(c) for c in categories]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: str,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    category = await container.categories.get(ctx, category_id)
    return CategoryResponse.from_category(category)


@router.put("/{category_id}", response_model=MessageResponse)
async def update_category(
    category_id: str,
    request: Request,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    body = await parse_body(request, CategoryRequest)
    await container.categories.update(ctx, category_id, name=body.name, type=body.type)
    return success("Category updated successfully")


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: str,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    await container.categories.delete(ctx, category_id)
    return success("Category deleted successfully")
