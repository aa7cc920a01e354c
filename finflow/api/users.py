# =============================================================================
# User API Routes
# =============================================================================
#
# Endpoints:
#   POST   /users          - Register a password account (public)
#   POST   /users/sync     - Find-or-create from an external identity token
#   GET    /users          - List users
#   GET    /users/{id}     - Own profile
#   PUT    /users/{id}     - Update own profile
#   DELETE /users/{id}     - Delete own account
#
# =============================================================================

from fastapi import APIRouter, Depends, Request

from finflow.api.errors import success
from finflow.api.schemas import (
    ErrorResponse,
    MessageResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
    parse_body,
)
from finflow.auth.context import AuthContext
from finflow.auth.external import ExternalIdentity, require_external_identity
from finflow.auth.policies import require_auth
from finflow.container import Container, get_container

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


# =============================================================================
# Public Endpoints
# =============================================================================

@router.post("", response_model=MessageResponse)
async def create_user(
    body: UserCreateRequest,
    container: Container = Depends(get_container),
):
    """Register a new account."""
    await container.users.register(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password=body.password,
    )
    return success("User account created successfully")


@router.post("/sync", response_model=UserResponse)
async def sync_user(
    identity: ExternalIdentity = Depends(require_external_identity),
    container: Container = Depends(get_container),
):
    """
    Link the caller's external identity to a local user.

    The token is trusted as-is (see finflow.auth.external).
    """
    user = await container.users.sync_external(identity)
    return UserResponse.from_user(user)


# =============================================================================
# Authenticated Endpoints
# =============================================================================

@router.get("", response_model=list[UserResponse])
async def list_users(
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    users = await container.users.list(ctx)
    return [UserResponse.from_user(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    user = await container.users.get(ctx, user_id)
    return UserResponse.from_user(user)


@router.put("/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: str,
    request: Request,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    body = await parse_body(request, UserUpdateRequest)
    await container.users.update(
        ctx,
        user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
    )
    return success("User profile updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    await container.users.delete(ctx, user_id)
    return success("User account deleted successfully")
