"""Dashboard API: portfolio summary and realized P&L."""

from datetime import date, datetime
from decimal import Decimal

from fastapi import APIRouter, Depends

from journal.api.deps import get_trade_service
from journal.schemas.trade import TradeSummaryRead
from journal.services.trade_service import TradeService
from journal.utils.dates import strip_tz

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=TradeSummaryRead)
def dashboard_summary(service: TradeService = Depends(get_trade_service)):
    """Aggregated stats across all trades. Day windows follow the server's local date."""
    return service.get_summary(date.today())


@router.get("/realized-pnl", response_model=Decimal)
def realized_pnl(
    start: datetime | None = None,
    end: datetime | None = None,
    service: TradeService = Depends(get_trade_service),
):
    """Realized P&L of trades closed between start and end (inclusive).

    Offsets on the bounds are dropped, matching how close dates are stored.
    """
    return service.realized_profit_loss(strip_tz(start), strip_tz(end))
