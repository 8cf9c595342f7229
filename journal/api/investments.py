"""Investments added to a trade after entry."""

from decimal import Decimal

from fastapi import APIRouter, Depends

from journal.api.deps import get_investment_service
from journal.schemas.investment import InvestmentCreate, InvestmentRead, InvestmentUpdate
from journal.services.investment_service import InvestmentService

router = APIRouter(prefix="/api/trades/{trade_id}/investments", tags=["investments"])


@router.get("", response_model=list[InvestmentRead])
def list_investments(trade_id: int, service: InvestmentService = Depends(get_investment_service)):
    return service.list_investments(trade_id)


@router.post("", response_model=InvestmentRead, status_code=201)
def add_investment(
    trade_id: int,
    data: InvestmentCreate,
    service: InvestmentService = Depends(get_investment_service),
):
    return service.add_investment(trade_id, data)


@router.get("/total", response_model=Decimal)
def total_invested(trade_id: int, service: InvestmentService = Depends(get_investment_service)):
    return service.total_invested(trade_id)


@router.get("/{investment_id}", response_model=InvestmentRead)
def get_investment(
    trade_id: int,
    investment_id: int,
    service: InvestmentService = Depends(get_investment_service),
):
    return service.get_investment(trade_id, investment_id)


@router.put("/{investment_id}", response_model=InvestmentRead)
def update_investment(
    trade_id: int,
    investment_id: int,
    data: InvestmentUpdate,
    service: InvestmentService = Depends(get_investment_service),
):
    return service.update_investment(trade_id, investment_id, data)


@router.delete("/{investment_id}", status_code=204)
def delete_investment(
    trade_id: int,
    investment_id: int,
    service: InvestmentService = Depends(get_investment_service),
):
    service.delete_investment(trade_id, investment_id)
