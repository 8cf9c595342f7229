"""Trade operations: create, edit, close, delete, query and report.

Each mutating operation runs in one transaction: lock the trade row, apply
the change, re-derive its valuation, write it back, commit.
"""

import logging
from datetime import date, datetime, time
from decimal import Decimal

from pydantic import ValidationError
from sqlmodel import Session

from journal.database import transaction
from journal.errors import NotFoundError, ValidationFailure
from journal.models.trade import CloseReason, Trade, TradeStatus, TradeType
from journal.repositories.investments import InvestmentRepository
from journal.repositories.trades import TradeRepository
from journal.schemas.trade import TradeCreate, TradeUpdate
from journal.services.portfolio import TradeSummary, summarize_trades
from journal.services.positions import PositionAggregator, recompute_trade

logger = logging.getLogger(__name__)

# Fields that change how investments are marked to market
_INVESTMENT_INPUTS = ("current_price", "leverage", "trade_type")


def close_flags(close_reason: CloseReason | None) -> tuple[bool, bool]:
    """(tp_hit, liquidated) implied by a close reason."""
    return close_reason == CloseReason.TP_HIT, close_reason == CloseReason.LIQUIDATED


def check_lifecycle(fields: dict) -> None:
    """Enforce the OPEN/CLOSED invariant on a full set of trade fields.

    CLOSED needs an exit price, a close date and a close reason; OPEN allows
    none of them. The tp_hit / liquidated flags may not contradict the reason.
    """
    status = fields.get("status") or TradeStatus.OPEN
    reason = fields.get("close_reason")

    if status == TradeStatus.CLOSED:
        for name in ("exit_price", "close_date", "close_reason"):
            if fields.get(name) is None:
                raise ValidationFailure(name, "is required when status is CLOSED")
    else:
        for name in ("exit_price", "close_date", "close_reason"):
            if fields.get(name) is not None:
                raise ValidationFailure(name, "must be empty while status is OPEN")

    tp_hit, liquidated = fields.get("tp_hit"), fields.get("liquidated")
    if tp_hit and liquidated:
        raise ValidationFailure("tp_hit", "tp_hit and liquidated cannot both be set")
    if tp_hit and reason != CloseReason.TP_HIT:
        raise ValidationFailure("tp_hit", "requires close_reason TP_HIT")
    if liquidated and reason != CloseReason.LIQUIDATED:
        raise ValidationFailure("liquidated", "requires close_reason LIQUIDATED")


class TradeService:
    def __init__(self, session: Session):
        self.session = session
        self.trades = TradeRepository(session)
        self.investments = InvestmentRepository(session)
        self.positions = PositionAggregator(self.trades, self.investments)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_trade(self, trade_id: int) -> Trade:
        trade = self.trades.get(trade_id)
        if trade is None:
            raise NotFoundError("Trade", trade_id)
        return trade

    def list_trades(
        self,
        coin: str | None = None,
        status: TradeStatus | None = None,
        trade_type: TradeType | None = None,
        exchange: str | None = None,
    ) -> list[Trade]:
        return self.trades.find(coin=coin, status=status, trade_type=trade_type, exchange=exchange)

    def list_trades_between(self, start_date: date, end_date: date) -> list[Trade]:
        """Trades entered on any day from start_date through end_date."""
        if start_date > end_date:
            raise ValidationFailure("start_date", "must not be after end_date")
        return self.trades.find_by_trade_date_between(
            datetime.combine(start_date, time.min),
            datetime.combine(end_date, time.max),
        )

    def get_summary(self, today: date) -> TradeSummary:
        """Portfolio statistics, with today/week/month windows anchored on `today`."""
        return summarize_trades(self.trades.list_all(), today)

    def realized_profit_loss(self, start: datetime | None = None, end: datetime | None = None) -> Decimal:
        if start is not None and end is not None and start > end:
            raise ValidationFailure("start", "must not be after end")
        return self.trades.sum_closed_profit_loss(start, end)

    def unique_coins(self) -> list[str]:
        return self.trades.distinct_coins()

    def unique_exchanges(self) -> list[str]:
        return self.trades.distinct_exchanges()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_trade(self, data: TradeCreate) -> Trade:
        fields = data.model_dump()
        if fields["status"] == TradeStatus.CLOSED and fields["close_date"] is None:
            fields["close_date"] = datetime.now()
        check_lifecycle(fields)

        with transaction(self.session):
            trade = Trade(**fields)
            trade.tp_hit, trade.liquidated = close_flags(trade.close_reason)
            recompute_trade(trade)
            self.trades.add(trade)

        self.session.refresh(trade)
        logger.info(
            f"Trade {trade.id} created: {trade.trade_type.value} {trade.coin} "
            f"x{trade.leverage} @ {trade.entry_price} ({trade.status.value})"
        )
        return trade

    def update_trade(self, trade_id: int, data: TradeUpdate) -> Trade:
        """Apply a partial edit, then re-derive the trade and its investments."""
        with transaction(self.session):
            trade = self._get_for_update(trade_id)
            update_data = data.model_dump(exclude_unset=True)

            # Validate the merged record so a partial edit cannot break field rules.
            # Stored flags are derived, so only explicitly sent flags are checked.
            merged = {**trade.model_dump(exclude={"tp_hit", "liquidated"}), **update_data}
            try:
                fields = TradeCreate.model_validate(merged).model_dump()
            except ValidationError as e:
                raise ValidationFailure.from_pydantic(e)
            if fields["status"] == TradeStatus.CLOSED and fields["close_date"] is None:
                fields["close_date"] = datetime.now()
            check_lifecycle(fields)

            revalue = any(fields[name] != getattr(trade, name) for name in _INVESTMENT_INPUTS)
            for key, value in fields.items():
                setattr(trade, key, value)
            trade.tp_hit, trade.liquidated = close_flags(trade.close_reason)
            trade.updated_at = datetime.now()

            if revalue:
                self.positions.revalue_investments(trade)
            self.positions.resync(trade)

        self.session.refresh(trade)
        logger.info(f"Trade {trade.id} updated: {sorted(update_data)}")
        return trade

    def set_current_price(self, trade_id: int, current_price: Decimal) -> Trade:
        """Record a new manual price and re-mark every investment of the trade."""
        with transaction(self.session):
            trade = self._get_for_update(trade_id)
            trade.current_price = current_price
            trade.updated_at = datetime.now()
            investments = self.positions.revalue_investments(trade)
            self.positions.resync(trade)

        self.session.refresh(trade)
        logger.info(
            f"Trade {trade.id} current price set to {current_price}, "
            f"{len(investments)} investment(s) revalued"
        )
        return trade

    def close_trade(
        self,
        trade_id: int,
        exit_price: Decimal,
        close_reason: CloseReason,
        closed_at: datetime | None = None,
    ) -> Trade:
        with transaction(self.session):
            trade = self._get_for_update(trade_id)
            trade.exit_price = exit_price
            trade.status = TradeStatus.CLOSED
            trade.close_date = closed_at or datetime.now()
            trade.close_reason = close_reason
            trade.tp_hit, trade.liquidated = close_flags(close_reason)
            trade.updated_at = datetime.now()
            self.positions.resync(trade)

        self.session.refresh(trade)
        logger.info(
            f"Trade {trade.id} closed ({close_reason.value}) @ {exit_price}: "
            f"profit_loss={trade.profit_loss}"
        )
        return trade

    def delete_trade(self, trade_id: int) -> None:
        """Delete a trade together with all of its investments."""
        with transaction(self.session):
            trade = self._get_for_update(trade_id)
            removed = self.investments.delete_by_trade_id(trade.id)
            self.trades.delete(trade)
        logger.info(f"Trade {trade_id} deleted with {removed} investment(s)")

    def _get_for_update(self, trade_id: int) -> Trade:
        trade = self.trades.get(trade_id, for_update=True)
        if trade is None:
            raise NotFoundError("Trade", trade_id)
        return trade
