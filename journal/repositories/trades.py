"""Trade record store.

Repositories add and flush but never commit: the calling service owns the
transaction, so a read + recompute + write sequence commits (or rolls back)
as one unit.
"""

from datetime import datetime
from decimal import Decimal

from sqlmodel import Session, select, func

from journal.models.trade import Trade, TradeStatus, TradeType
from journal.services.money import ZERO, money, to_decimal


def _decimal(value) -> Decimal:
    return to_decimal(value) if value is not None else ZERO


class TradeRepository:
    def __init__(self, session: Session):
        self.session = session

    def add(self, trade: Trade) -> Trade:
        self.session.add(trade)
        self.session.flush()
        return trade

    save = add

    def get(self, trade_id: int, for_update: bool = False) -> Trade | None:
        """Fetch one trade. `for_update` takes a row lock where the dialect has one."""
        if not for_update:
            return self.session.get(Trade, trade_id)
        stmt = select(Trade).where(Trade.id == trade_id).with_for_update()
        return self.session.exec(stmt).first()

    def list_all(self) -> list[Trade]:
        return list(self.session.exec(select(Trade).order_by(Trade.trade_date.desc())).all())

    def find(
        self,
        coin: str | None = None,
        status: TradeStatus | None = None,
        trade_type: TradeType | None = None,
        exchange: str | None = None,
    ) -> list[Trade]:
        """Filter trades. Coin and exchange match case-insensitively."""
        stmt = select(Trade)
        if coin is not None:
            stmt = stmt.where(func.lower(Trade.coin) == coin.lower())
        if status is not None:
            stmt = stmt.where(Trade.status == status)
        if trade_type is not None:
            stmt = stmt.where(Trade.trade_type == trade_type)
        if exchange is not None:
            stmt = stmt.where(func.lower(Trade.exchange) == exchange.lower())
        stmt = stmt.order_by(Trade.trade_date.desc())
        return list(self.session.exec(stmt).all())

    def find_by_trade_date_between(self, start: datetime, end: datetime) -> list[Trade]:
        stmt = (
            select(Trade)
            .where(Trade.trade_date >= start, Trade.trade_date <= end)
            .order_by(Trade.trade_date)
        )
        return list(self.session.exec(stmt).all())

    def delete(self, trade: Trade) -> None:
        self.session.delete(trade)
        self.session.flush()

    # ------------------------------------------------------------------
    # Aggregates. Empty sets yield zero.
    # ------------------------------------------------------------------

    def sum_closed_profit_loss(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> Decimal:
        """Realized P&L, optionally bounded by close date (inclusive)."""
        stmt = select(func.coalesce(func.sum(Trade.profit_loss), 0)).where(
            Trade.status == TradeStatus.CLOSED
        )
        if start is not None:
            stmt = stmt.where(Trade.close_date >= start)
        if end is not None:
            stmt = stmt.where(Trade.close_date <= end)
        return money(_decimal(self.session.exec(stmt).one()))

    def _count_closed(self, *criteria) -> int:
        stmt = (
            select(func.count())
            .select_from(Trade)
            .where(Trade.status == TradeStatus.CLOSED, *criteria)
        )
        return int(self.session.exec(stmt).one())

    def count_closed(self) -> int:
        return self._count_closed()

    def count_winning(self) -> int:
        return self._count_closed(Trade.profit_loss > 0)

    def count_losing(self) -> int:
        return self._count_closed(Trade.profit_loss < 0)

    def _average_closed(self, *criteria) -> Decimal:
        stmt = select(func.avg(Trade.profit_loss)).where(Trade.status == TradeStatus.CLOSED, *criteria)
        return money(_decimal(self.session.exec(stmt).one()))

    def average_profit(self) -> Decimal:
        return self._average_closed(Trade.profit_loss > 0)

    def average_loss(self) -> Decimal:
        return self._average_closed(Trade.profit_loss < 0)

    def sum_position_size(self, status: TradeStatus | None = None) -> Decimal:
        """Committed capital across all trades, or only OPEN / CLOSED ones."""
        stmt = select(func.coalesce(func.sum(Trade.position_size), 0))
        if status is not None:
            stmt = stmt.where(Trade.status == status)
        return money(_decimal(self.session.exec(stmt).one()))

    def distinct_coins(self) -> list[str]:
        stmt = select(Trade.coin).distinct().order_by(Trade.coin)
        return list(self.session.exec(stmt).all())

    def distinct_exchanges(self) -> list[str]:
        stmt = (
            select(Trade.exchange)
            .where(Trade.exchange.is_not(None))  # type: ignore[union-attr]
            .distinct()
            .order_by(Trade.exchange)
        )
        return list(self.session.exec(stmt).all())
