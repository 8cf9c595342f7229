"""CRUD API for exchange wallets, plus used/available balance summaries."""

from decimal import Decimal

from fastapi import APIRouter, Depends

from journal.api.deps import get_wallet_service
from journal.schemas.wallet import WalletCreate, WalletRead, WalletSummaryRead, WalletUpdate
from journal.services.wallet_service import WalletService

router = APIRouter(prefix="/api/wallets", tags=["wallets"])


@router.get("", response_model=list[WalletRead])
def list_wallets(service: WalletService = Depends(get_wallet_service)):
    return service.list_wallets()


@router.post("", response_model=WalletRead, status_code=201)
def create_wallet(data: WalletCreate, service: WalletService = Depends(get_wallet_service)):
    return service.create_wallet(data)


@router.get("/summaries", response_model=list[WalletSummaryRead])
def wallet_summaries(service: WalletService = Depends(get_wallet_service)):
    return service.list_wallet_summaries()


@router.get("/total-balance", response_model=Decimal)
def total_balance(service: WalletService = Depends(get_wallet_service)):
    return service.total_balance()


@router.get("/exchange/{exchange_name}", response_model=WalletRead)
def get_wallet_by_exchange(exchange_name: str, service: WalletService = Depends(get_wallet_service)):
    return service.get_wallet_by_exchange(exchange_name)


@router.get("/{wallet_id}", response_model=WalletRead)
def get_wallet(wallet_id: int, service: WalletService = Depends(get_wallet_service)):
    return service.get_wallet(wallet_id)


@router.put("/{wallet_id}", response_model=WalletRead)
def update_wallet(
    wallet_id: int,
    data: WalletUpdate,
    service: WalletService = Depends(get_wallet_service),
):
    return service.update_wallet(wallet_id, data)


@router.delete("/{wallet_id}", status_code=204)
def delete_wallet(wallet_id: int, service: WalletService = Depends(get_wallet_service)):
    service.delete_wallet(wallet_id)


@router.get("/{wallet_id}/summary", response_model=WalletSummaryRead)
def wallet_summary(wallet_id: int, service: WalletService = Depends(get_wallet_service)):
    return service.get_wallet_summary(wallet_id)
