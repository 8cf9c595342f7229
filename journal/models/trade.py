"""Trade model: one leveraged futures position in the journal."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlmodel import SQLModel, Field

from journal.utils.constants import (
    COIN_MAX_LENGTH,
    EXCHANGE_MAX_LENGTH,
    MONEY_DIGITS,
    MONEY_PLACES,
    PERCENT_DIGITS,
    PERCENT_PLACES,
    PRICE_DIGITS,
    PRICE_PLACES,
)


class TradeType(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"


class TradeStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class CloseReason(str, Enum):
    TP_HIT = "TP_HIT"
    LIQUIDATED = "LIQUIDATED"
    MANUAL = "MANUAL"


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: int | None = Field(default=None, primary_key=True)
    coin: str = Field(index=True, max_length=COIN_MAX_LENGTH)  # e.g. "BTC"
    trade_type: TradeType
    entry_price: Decimal = Field(max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    exit_price: Decimal | None = Field(default=None, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    current_price: Decimal | None = Field(default=None, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    quantity: Decimal = Field(max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    leverage: int = 1

    # Derived on every create/update, see services.positions.recompute_trade
    position_size: Decimal | None = Field(default=None, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    profit_loss: Decimal | None = Field(default=None, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    profit_loss_percentage: Decimal | None = Field(
        default=None, max_digits=PERCENT_DIGITS, decimal_places=PERCENT_PLACES
    )

    fees: Decimal | None = Field(default=None, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    exchange: str | None = Field(default=None, index=True, max_length=EXCHANGE_MAX_LENGTH)
    status: TradeStatus = Field(default=TradeStatus.OPEN, index=True)
    notes: str | None = None

    # Reference levels, recorded only
    stop_loss: Decimal | None = Field(default=None, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    take_profit: Decimal | None = Field(default=None, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    liquidation_price: Decimal | None = Field(default=None, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)

    # Set once the trade gets its first investment; from then on its position
    # size is the sum of investment amounts, zero when all are removed
    investment_sized: bool = False

    tp_hit: bool = False
    liquidated: bool = False
    close_reason: CloseReason | None = None

    trade_date: datetime = Field(default_factory=datetime.now)
    close_date: datetime | None = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
