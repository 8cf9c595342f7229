"""Trade journal API."""

from datetime import date

from fastapi import APIRouter, Depends

from journal.api.deps import get_trade_service
from journal.models.trade import TradeStatus, TradeType
from journal.schemas.trade import CurrentPriceUpdate, TradeClose, TradeCreate, TradeRead, TradeUpdate
from journal.services.trade_service import TradeService

router = APIRouter(prefix="/api/trades", tags=["trades"])


@router.get("", response_model=list[TradeRead])
def list_trades(
    coin: str | None = None,
    status: TradeStatus | None = None,
    trade_type: TradeType | None = None,
    exchange: str | None = None,
    service: TradeService = Depends(get_trade_service),
):
    return service.list_trades(coin=coin, status=status, trade_type=trade_type, exchange=exchange)


@router.post("", response_model=TradeRead, status_code=201)
def create_trade(data: TradeCreate, service: TradeService = Depends(get_trade_service)):
    return service.create_trade(data)


@router.get("/date-range", response_model=list[TradeRead])
def trades_by_date_range(
    start_date: date,
    end_date: date,
    service: TradeService = Depends(get_trade_service),
):
    return service.list_trades_between(start_date, end_date)


@router.get("/coins", response_model=list[str])
def unique_coins(service: TradeService = Depends(get_trade_service)):
    return service.unique_coins()


@router.get("/exchanges", response_model=list[str])
def unique_exchanges(service: TradeService = Depends(get_trade_service)):
    return service.unique_exchanges()


@router.get("/{trade_id}", response_model=TradeRead)
def get_trade(trade_id: int, service: TradeService = Depends(get_trade_service)):
    return service.get_trade(trade_id)


@router.put("/{trade_id}", response_model=TradeRead)
def update_trade(
    trade_id: int,
    data: TradeUpdate,
    service: TradeService = Depends(get_trade_service),
):
    return service.update_trade(trade_id, data)


@router.delete("/{trade_id}", status_code=204)
def delete_trade(trade_id: int, service: TradeService = Depends(get_trade_service)):
    service.delete_trade(trade_id)


@router.post("/{trade_id}/close", response_model=TradeRead)
def close_trade(
    trade_id: int,
    data: TradeClose,
    service: TradeService = Depends(get_trade_service),
):
    return service.close_trade(trade_id, data.exit_price, data.close_reason)


@router.put("/{trade_id}/current-price", response_model=TradeRead)
def set_current_price(
    trade_id: int,
    data: CurrentPriceUpdate,
    service: TradeService = Depends(get_trade_service),
):
    """Record a manually refreshed price; re-marks the trade's investments."""
    return service.set_current_price(trade_id, data.current_price)
