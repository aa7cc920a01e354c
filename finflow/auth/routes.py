# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /auth/login - Exchange email + password for a session token
#
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from finflow.api.schemas import UserResponse
from finflow.auth.jwt import TokenSigningError
from finflow.container import Container, get_container
from finflow.core.errors import InternalError, InvalidInputError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# Request/Response Models
# =============================================================================

class LoginRequest(BaseModel):
    # Missing fields fail as bad credentials, not as a bad body
    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


# =============================================================================
# Public Endpoints
# =============================================================================

@router.post("/login", response_model=LoginResponse)
async def login(request: Request, container: Container = Depends(get_container)):
    """
    Authenticate and get a session token.
    """
    try:
        data = LoginRequest.model_validate_json(await request.body())
    except ValidationError:
        raise InvalidInputError("Invalid request body")

    user = await container.users.authenticate(data.email, data.password)

    try:
        token = container.tokens.issue(user.id)
    except TokenSigningError as e:
        logger.error(f"Token signing failed for user {user.id}: {e}")
        raise InternalError("Failed to generate token") from e

    return LoginResponse(token=token, user=UserResponse.from_user(user))
