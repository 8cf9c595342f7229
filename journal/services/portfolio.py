"""Portfolio summary: aggregate statistics over the whole trade set.

Pure computation over a snapshot of trades. Date windows are built from a
calendar date supplied by the caller; no timezone conversion happens here.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Iterable

from journal.models.trade import Trade, TradeStatus
from journal.services.money import ZERO, divide, mean, money, quantize, total
from journal.services.valuation import mark_to_market
from journal.utils.constants import HUNDRED, PERCENT_PLACES, WIN_RATIO_PLACES

WEEK_LOOKBACK_DAYS = 7


@dataclass(frozen=True)
class PnLWindows:
    """Inclusive close-date ranges for today / this week / this month."""

    today_start: datetime
    today_end: datetime
    week_start: datetime
    month_start: datetime

    @classmethod
    def for_day(cls, today: date) -> "PnLWindows":
        return cls(
            today_start=datetime.combine(today, time.min),
            today_end=datetime.combine(today, time.max),
            week_start=datetime.combine(today - timedelta(days=WEEK_LOOKBACK_DAYS), time.min),
            month_start=datetime.combine(today.replace(day=1), time.min),
        )


@dataclass(frozen=True)
class TradeSummary:
    total_profit_loss: Decimal
    today_profit_loss: Decimal
    week_profit_loss: Decimal
    month_profit_loss: Decimal

    total_invested: Decimal
    current_portfolio_value: Decimal
    unrealized_pnl: Decimal
    realized_pnl: Decimal

    total_trades: int
    open_trades: int
    closed_trades: int
    winning_trades: int
    losing_trades: int

    win_rate: Decimal
    average_profit: Decimal
    average_loss: Decimal


def win_rate(winning: int, closed: int) -> Decimal:
    """Winning share of closed trades as a percentage. Zero without closed trades."""
    ratio = divide(Decimal(winning), Decimal(closed), WIN_RATIO_PLACES) if closed else None
    if ratio is None:
        return quantize(ZERO, PERCENT_PLACES)
    return quantize(ratio * HUNDRED, PERCENT_PLACES)


def realized_between(trades: Iterable[Trade], start: datetime, end: datetime) -> Decimal:
    """Realized P&L of trades closed within [start, end]."""
    return money(total(
        t.profit_loss for t in trades
        if t.status == TradeStatus.CLOSED
        and t.close_date is not None
        and start <= t.close_date <= end
    ))


def summarize_trades(trades: Iterable[Trade], today: date) -> TradeSummary:
    trades = list(trades)
    open_trades = [t for t in trades if t.status == TradeStatus.OPEN]
    closed_trades = [t for t in trades if t.status == TradeStatus.CLOSED]
    winners = [t.profit_loss for t in closed_trades if t.profit_loss is not None and t.profit_loss > ZERO]
    losers = [t.profit_loss for t in closed_trades if t.profit_loss is not None and t.profit_loss < ZERO]

    realized = money(total(t.profit_loss for t in closed_trades))

    open_value = ZERO
    unrealized = ZERO
    for trade in open_trades:
        marked = mark_to_market(
            trade.trade_type,
            trade.entry_price,
            trade.current_price,
            trade.leverage,
            trade.position_size,
        )
        open_value += marked.current_value
        unrealized += marked.profit_loss

    windows = PnLWindows.for_day(today)

    return TradeSummary(
        total_profit_loss=realized,
        today_profit_loss=realized_between(closed_trades, windows.today_start, windows.today_end),
        week_profit_loss=realized_between(closed_trades, windows.week_start, windows.today_end),
        month_profit_loss=realized_between(closed_trades, windows.month_start, windows.today_end),
        total_invested=money(total(t.position_size for t in trades)),
        current_portfolio_value=money(open_value + realized),
        unrealized_pnl=money(unrealized),
        realized_pnl=realized,
        total_trades=len(trades),
        open_trades=len(open_trades),
        closed_trades=len(closed_trades),
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_rate=win_rate(len(winners), len(closed_trades)),
        average_profit=mean(winners),
        average_loss=mean(losers),
    )
