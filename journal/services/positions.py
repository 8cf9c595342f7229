"""Position aggregation: keeps a trade's derived fields consistent.

`recompute_trade` is the single place a trade's position size and P&L are
derived. Every mutating operation calls it (through `PositionAggregator.resync`
when the store is involved) before the trade is written back.

Once a trade has had an investment its position size is the sum of the
amounts still recorded, zero after the last one is deleted. A trade that
never had investments is sized as entry_price * quantity.
"""

import logging
from decimal import Decimal

from journal.models.investment import Investment
from journal.models.trade import Trade
from journal.repositories.investments import InvestmentRepository
from journal.repositories.trades import TradeRepository
from journal.services.valuation import value_investment, value_trade

logger = logging.getLogger(__name__)


def recompute_trade(trade: Trade, invested_total: Decimal | None = None) -> Trade:
    """Derive position_size, profit_loss and profit_loss_percentage in place."""
    valuation = value_trade(
        trade.trade_type,
        trade.entry_price,
        trade.quantity,
        trade.leverage,
        exit_price=trade.exit_price,
        fees=trade.fees,
        invested_total=invested_total,
    )
    trade.position_size = valuation.position_size
    trade.profit_loss = valuation.profit_loss
    trade.profit_loss_percentage = valuation.profit_loss_percentage
    return trade


def revalue_investment(investment: Investment, trade: Trade) -> Investment:
    """Mark an investment to its trade's current price in place.

    Clears the stored mark when the trade has no current price.
    """
    valuation = value_investment(
        trade.trade_type,
        trade.leverage,
        trade.current_price,
        investment.price_at_investment,
        investment.amount,
    )
    investment.current_value = valuation.current_value
    investment.profit_loss = valuation.profit_loss
    return investment


class PositionAggregator:
    """Re-derives a trade from its stored investments.

    Runs inside the caller's transaction; the trade should have been loaded
    with `for_update=True` so concurrent edits to it serialize on the row lock.
    """

    def __init__(self, trades: TradeRepository, investments: InvestmentRepository):
        self.trades = trades
        self.investments = investments

    def invested_total(self, trade: Trade) -> Decimal | None:
        """Sum of investment amounts, or None for a trade never sized by investments."""
        if not trade.investment_sized:
            if self.investments.count_by_trade_id(trade.id) == 0:
                return None
            trade.investment_sized = True
        return self.investments.sum_amount_by_trade_id(trade.id)

    def resync(self, trade: Trade) -> Trade:
        invested = self.invested_total(trade)
        recompute_trade(trade, invested)
        logger.debug(
            f"Trade {trade.id} resynced: position_size={trade.position_size} "
            f"profit_loss={trade.profit_loss} invested={invested}"
        )
        return self.trades.save(trade)

    def revalue_investments(self, trade: Trade) -> list[Investment]:
        """Re-mark every investment of the trade to its current price."""
        investments = self.investments.list_by_trade_id(trade.id)
        for investment in investments:
            revalue_investment(investment, trade)
            self.investments.save(investment)
        return investments
