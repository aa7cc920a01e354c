"""
Request and response models for the HTTP API.

Request models check presence and length rules and report the first
problem with a client-facing message. Enumerated values (category type,
wallet type, currency) are range-checked by the services so the same
rule applies no matter how a service is called.
"""

from __future__ import annotations

from datetime import datetime
from typing import TypeVar

from pydantic import BaseModel, ValidationError, model_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError
from starlette.requests import Request

from finflow.api.errors import validation_message
from finflow.core.errors import InvalidInputError
from finflow.core.models import Category, User, Wallet

MAX_LENGTH = 255

RequestT = TypeVar("RequestT", bound=BaseModel)


# =============================================================================
# Validation helpers
# =============================================================================


def _check_name(value: str | None, label: str) -> str:
    """Trim and length-check a required name. Raises ValueError."""
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) < 2:
        raise ValueError(f"{label} must be at least 2 characters long")
    if len(value) > MAX_LENGTH:
        raise ValueError(f"{label} must not exceed {MAX_LENGTH} characters")
    return value


def _check_email(value: str | None) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("Email address is required")
    if len(value) > MAX_LENGTH:
        raise ValueError(f"Email address must not exceed {MAX_LENGTH} characters")
    try:
        validate_email(value)
    except PydanticCustomError:
        raise ValueError("Invalid email address format") from None
    return value


# =============================================================================
# Body parsing
# =============================================================================


async def parse_body(request: Request, model: type[RequestT]) -> RequestT:
    """
    Validate the JSON body against `model`.

    Authenticated routes call this from the handler instead of declaring a
    body parameter, so the body is only read once the caller is known.
    """
    try:
        return model.model_validate_json(await request.body())
    except ValidationError as e:
        raise InvalidInputError(validation_message(e.errors())) from None


# =============================================================================
# Common
# =============================================================================


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


# =============================================================================
# Users
# =============================================================================


class UserCreateRequest(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str | None = None

    @model_validator(mode="after")
    def _validate(self) -> "UserCreateRequest":
        self.first_name = _check_name(self.first_name, "First name")
        self.last_name = _check_name(self.last_name, "Last name")
        self.email = _check_email(self.email)

        if not self.password:
            raise ValueError("Password is required")
        if len(self.password) < 8:
            raise ValueError("Password must be at least 8 characters long")
        if len(self.password) > MAX_LENGTH:
            raise ValueError(f"Password must not exceed {MAX_LENGTH} characters")
        return self


class UserUpdateRequest(BaseModel):
    """Profile fields a user may change. Passwords are not changed here."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None

    @model_validator(mode="after")
    def _validate(self) -> "UserUpdateRequest":
        self.first_name = _check_name(self.first_name, "First name")
        self.last_name = _check_name(self.last_name, "Last name")
        self.email = _check_email(self.email)
        return self


class UserResponse(BaseModel):
    """User data returned to clients (no credentials)."""

    id: str
    first_name: str
    last_name: str
    email: str | None = None

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
        )


# =============================================================================
# Categories
# =============================================================================


class CategoryRequest(BaseModel):
    name: str | None = None
    type: int | None = None

    @model_validator(mode="after")
    def _validate(self) -> "CategoryRequest":
        self.name = _check_name(self.name, "Category name")
        if self.type is None:
            raise ValueError("Category type is required")
        return self


class CategoryResponse(BaseModel):
    id: str
    name: str
    type: int
    type_name: str
    created_at: datetime
    updated_at: datetime
    created_by: str
    updated_by: str

    @classmethod
    def from_category(cls, category: Category) -> CategoryResponse:
        return cls(
            id=category.id,
            name=category.name,
            type=category.type.value,
            type_name=category.type.label,
            created_at=category.created_at,
            updated_at=category.modified_at,
            created_by=category.created_by,
            updated_by=category.modified_by,
        )


# =============================================================================
# Wallets
# =============================================================================


class WalletRequest(BaseModel):
    name: str | None = None
    type: int | None = None
    balance: float | None = None
    currency: str | None = None

    @model_validator(mode="after")
    def _validate(self) -> "WalletRequest":
        self.name = _check_name(self.name, "Wallet name")
        if self.type is None:
            raise ValueError("Wallet type is required")
        if self.balance is None:
            raise ValueError("Balance is required")
        if self.currency is None:
            raise ValueError("Currency is required")
        return self


class WalletResponse(BaseModel):
    id: str
    name: str
    type: int
    type_name: str
    balance: float
    currency: str
    created_at: datetime
    updated_at: datetime
    created_by: str
    updated_by: str

    @classmethod
    def from_wallet(cls, wallet: Wallet) -> WalletResponse:
        return cls(
            id=wallet.id,
            name=wallet.name,
            type=wallet.type.value,
            type_name=wallet.type.label,
            balance=wallet.balance,
            currency=wallet.currency.value,
            created_at=wallet.created_at,
            updated_at=wallet.modified_at,
            created_by=wallet.created_by,
            updated_by=wallet.modified_by,
        )


class CurrenciesResponse(BaseModel):
    fiat: list[str]
    crypto: list[str]


class WalletTypeResponse(BaseModel):
    value: int
    name: str
