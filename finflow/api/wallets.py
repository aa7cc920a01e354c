# =============================================================================
# Wallet API Routes
# =============================================================================
#
# Endpoints:
#   GET    /wallets/currencies  - Supported currency codes (public)
#   GET    /wallets/types       - Supported wallet types (public)
#   POST   /wallets             - Create a wallet
#   GET    /wallets             - Caller's wallets
#   GET    /wallets/{id}        - One wallet
#   PUT    /wallets/{id}        - Update a wallet
#   DELETE /wallets/{id}        - Delete a wallet
#
# The lookup routes are declared before /{wallet_id} so they are not
# captured as ids.
#
# =============================================================================

from fastapi import APIRouter, Depends, Request

from finflow.api.errors import success
from finflow.api.schemas import (
    CurrenciesResponse,
    ErrorResponse,
    MessageResponse,
    WalletRequest,
    WalletResponse,
    WalletTypeResponse,
    parse_body,
)
from finflow.auth.context import AuthContext
from finflow.auth.policies import require_auth
from finflow.container import Container, get_container
from finflow.core.models import Currency, WalletType

router = APIRouter(
    prefix="/wallets",
    tags=["wallets"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


# =============================================================================
# Lookups
# =============================================================================

@router.get("/currencies", response_model=CurrenciesResponse)
async def list_currencies():
    return CurrenciesResponse(**Currency.grouped())


@router.get("/types", response_model=list[WalletTypeResponse])
async def list_wallet_types():
    return [WalletTypeResponse(**choice) for choice in WalletType.choices()]


# =============================================================================
# Wallets
# =============================================================================

@router.post("", response_model=MessageResponse)
async def create_wallet(
    request: Request,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    body = await parse_body(request, WalletRequest)
    await container.wallets.create(
        ctx,
        name=body.name,
        type=body.type,
        balance=body.balance,
        currency=body.currency,
    )
    return success("Wallet created successfully")


@router.get("", response_model=list[WalletResponse])
async def list_wallets(
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    wallets = await container.wallets.list(ctx)
    return [WalletResponse.from_wallet(w) for w in wallets]


@router.get("/{wallet_id}", response_model=WalletResponse)
async def get_wallet(
    wallet_id: str,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    wallet = await container.wallets.get(ctx, wallet_id)
    return WalletResponse.from_wallet(wallet)


@router.put("/{wallet_id}", response_model=MessageResponse)
async def update_wallet(
    wallet_id: str,
    request: Request,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    body = await parse_body(request, WalletRequest)
    await container.wallets.update(
        ctx,
        wallet_id,
        name=body.name,
        type=body.type,
        balance=body.balance,
        currency=body.currency,
    )
    return success("Wallet updated successfully")


@router.delete("/{wallet_id}", response_model=MessageResponse)
async def delete_wallet(
    wallet_id: str,
    ctx: AuthContext = Depends(require_auth),
    container: Container = Depends(get_container),
):
    await container.wallets.delete(ctx, wallet_id)
    return success("Wallet deleted successfully")
