"""Position sync: re-derive every trade from its stored inputs.

Position sizes and P&L are written as a side effect of each mutation. A write
that bypassed the service layer (manual SQL, an import, a crashed request)
can leave them stale. This pass recomputes every trade and re-marks its
investments, and is safe to run any number of times.

Scenarios handled:
1. Trade with investments → position size = sum of amounts, investments re-marked
2. Trade without investments → position size = entry price * quantity
3. Closed trade → realized P&L recomputed from its exit price
"""

import logging

from sqlmodel import Session

from journal.database import engine, transaction
from journal.repositories.investments import InvestmentRepository
from journal.repositories.trades import TradeRepository
from journal.services.positions import PositionAggregator

logger = logging.getLogger(__name__)


def resync_positions(session: Session) -> dict:
    """Recompute every trade in one transaction.

    Returns counts of trades scanned and trades whose derived values changed.
    """
    trades = TradeRepository(session)
    investments = InvestmentRepository(session)
    aggregator = PositionAggregator(trades, investments)
    result = {"trades_scanned": 0, "trades_changed": 0}

    with transaction(session):
        for trade in trades.list_all():
            before = (trade.position_size, trade.profit_loss, trade.profit_loss_percentage)
            aggregator.revalue_investments(trade)
            aggregator.resync(trade)
            after = (trade.position_size, trade.profit_loss, trade.profit_loss_percentage)

            result["trades_scanned"] += 1
            if before != after:
                result["trades_changed"] += 1
                logger.info(f"Position sync: trade {trade.id} {before} -> {after}")

    logger.info(
        f"Position sync: {result['trades_scanned']} trades scanned, "
        f"{result['trades_changed']} changed"
    )
    return result


def sync_positions_on_startup() -> dict:
    """Called once from the app lifespan before requests are served."""
    with Session(engine) as session:
        return resync_positions(session)
