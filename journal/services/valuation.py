"""Stateless valuation of trades and investments.

All functions are pure computation. No I/O, no database access. Trade-level
and investment-level P&L both go through `direction` so LONG and SHORT keep
one sign convention: LONG gains when price rises, SHORT gains when it falls.
"""

from dataclasses import dataclass
from decimal import Decimal

from journal.models.trade import TradeType
from journal.services.money import ONE, ZERO, divide, money, percentage


@dataclass(frozen=True)
class TradeValuation:
    position_size: Decimal | None
    profit_loss: Decimal | None
    profit_loss_percentage: Decimal | None


@dataclass(frozen=True)
class InvestmentValuation:
    current_value: Decimal | None
    profit_loss: Decimal | None


@dataclass(frozen=True)
class MarkedPosition:
    """Live value of an open position at its current price."""

    current_value: Decimal
    profit_loss: Decimal


# ---------------------------------------------------------------------------
# Sign convention
# ---------------------------------------------------------------------------

def direction(trade_type: TradeType) -> int:
    """+1 for LONG, -1 for SHORT."""
    return 1 if TradeType(trade_type) == TradeType.LONG else -1


def price_move(trade_type: TradeType, reference_price: Decimal, price: Decimal) -> Decimal:
    """Price difference from the position's point of view (positive = gain)."""
    return (price - reference_price) * direction(trade_type)


def price_change_ratio(
    trade_type: TradeType, reference_price: Decimal, price: Decimal
) -> Decimal | None:
    """Signed move relative to the reference price, 8 fractional digits."""
    return divide(price_move(trade_type, reference_price, price), reference_price)


# ---------------------------------------------------------------------------
# Trade valuation
# ---------------------------------------------------------------------------

def value_trade(
    trade_type: TradeType,
    entry_price: Decimal | None,
    quantity: Decimal | None,
    leverage: int | None,
    exit_price: Decimal | None = None,
    fees: Decimal | None = None,
    invested_total: Decimal | None = None,
) -> TradeValuation:
    """Position size, realized P&L and P&L percentage of one trade.

    `invested_total` is the sum of the trade's investments; when given it
    replaces entry_price * quantity as the position size. P&L stays None until
    the trade has an exit price.
    """
    position_size = None
    if invested_total is not None:
        position_size = money(invested_total)
    elif entry_price is not None and quantity is not None:
        position_size = money(entry_price * quantity)

    if exit_price is None or entry_price is None or quantity is None or leverage is None:
        return TradeValuation(position_size, None, None)

    raw_pnl = price_move(trade_type, entry_price, exit_price) * quantity * leverage
    profit_loss = money(raw_pnl - fees if fees is not None else raw_pnl)

    profit_loss_percentage = None
    if position_size is not None and position_size > ZERO:
        profit_loss_percentage = percentage(profit_loss, position_size)

    return TradeValuation(position_size, profit_loss, profit_loss_percentage)


# ---------------------------------------------------------------------------
# Investment valuation
# ---------------------------------------------------------------------------

def value_investment(
    trade_type: TradeType,
    leverage: int | None,
    current_price: Decimal | None,
    price_at_investment: Decimal | None,
    amount: Decimal | None,
) -> InvestmentValuation:
    """Mark one investment to its trade's current price.

    Returns an empty valuation (both fields None) when the current price,
    the investment price or the amount is unknown.
    """
    if current_price is None or price_at_investment is None or amount is None:
        return InvestmentValuation(None, None)

    ratio = price_change_ratio(trade_type, price_at_investment, current_price)
    if ratio is None:
        return InvestmentValuation(None, None)

    leveraged_change = ratio * (leverage if leverage is not None else 1)
    current_value = amount * (ONE + leveraged_change)
    return InvestmentValuation(money(current_value), money(current_value - amount))


# ---------------------------------------------------------------------------
# Open-position mark to market
# ---------------------------------------------------------------------------

def mark_to_market(
    trade_type: TradeType,
    entry_price: Decimal | None,
    current_price: Decimal | None,
    leverage: int | None,
    position_size: Decimal | None,
) -> MarkedPosition:
    """Live value of an open trade, independent of its stored profit_loss.

    Without a current price the trade is marked at its entry price. Without a
    usable entry price it contributes its raw position size and no P&L.
    Results are unrounded; callers round the aggregated totals.
    """
    size = position_size if position_size is not None else ZERO
    if entry_price is None or entry_price <= ZERO:
        return MarkedPosition(size, ZERO)

    price = current_price if current_price is not None else entry_price
    ratio = price_change_ratio(trade_type, entry_price, price)
    leveraged_change = ratio * (leverage if leverage is not None else 1)
    current_value = size * (ONE + leveraged_change)
    return MarkedPosition(current_value, current_value - size)
