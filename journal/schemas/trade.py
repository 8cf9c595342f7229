"""Pydantic schemas for Trade API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from journal.models.trade import CloseReason, TradeStatus, TradeType
from journal.utils.constants import (
    COIN_MAX_LENGTH,
    EXCHANGE_MAX_LENGTH,
    MAX_LEVERAGE,
    MIN_LEVERAGE,
    MONEY_DIGITS,
    MONEY_PLACES,
    PRICE_DIGITS,
    PRICE_PLACES,
)
from journal.utils.dates import strip_tz


class TradeCreate(BaseModel):
    coin: str = Field(min_length=1, max_length=COIN_MAX_LENGTH)
    trade_type: TradeType
    entry_price: Decimal = Field(gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    exit_price: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    current_price: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    quantity: Decimal = Field(gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    leverage: int = Field(ge=MIN_LEVERAGE, le=MAX_LEVERAGE)
    fees: Decimal | None = Field(default=None, ge=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    exchange: str | None = Field(default=None, max_length=EXCHANGE_MAX_LENGTH)
    status: TradeStatus = TradeStatus.OPEN
    notes: str | None = None
    stop_loss: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    take_profit: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    liquidation_price: Decimal | None = Field(
        default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES
    )
    tp_hit: bool = False
    liquidated: bool = False
    close_reason: CloseReason | None = None
    trade_date: datetime = Field(default_factory=datetime.now)
    close_date: datetime | None = None

    @field_validator("coin")
    @classmethod
    def _trim_coin(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("exchange")
    @classmethod
    def _trim_exchange(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("trade_date", "close_date")
    @classmethod
    def _naive_dates(cls, value: datetime | None) -> datetime | None:
        return strip_tz(value)


class TradeUpdate(BaseModel):
    coin: str | None = Field(default=None, min_length=1, max_length=COIN_MAX_LENGTH)
    trade_type: TradeType | None = None
    entry_price: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    exit_price: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    current_price: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    quantity: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    leverage: int | None = Field(default=None, ge=MIN_LEVERAGE, le=MAX_LEVERAGE)
    fees: Decimal | None = Field(default=None, ge=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    exchange: str | None = Field(default=None, max_length=EXCHANGE_MAX_LENGTH)
    status: TradeStatus | None = None
    notes: str | None = None
    stop_loss: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    take_profit: Decimal | None = Field(default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    liquidation_price: Decimal | None = Field(
        default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES
    )
    tp_hit: bool | None = None
    liquidated: bool | None = None
    close_reason: CloseReason | None = None
    trade_date: datetime | None = None
    close_date: datetime | None = None

    @field_validator("trade_date", "close_date")
    @classmethod
    def _naive_dates(cls, value: datetime | None) -> datetime | None:
        return strip_tz(value)


class TradeClose(BaseModel):
    exit_price: Decimal = Field(gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    close_reason: CloseReason = CloseReason.MANUAL


class CurrentPriceUpdate(BaseModel):
    current_price: Decimal = Field(gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)


class TradeRead(BaseModel):
    id: int
    coin: str
    trade_type: TradeType
    entry_price: Decimal
    exit_price: Decimal | None
    current_price: Decimal | None
    quantity: Decimal
    leverage: int
    position_size: Decimal | None
    investment_sized: bool
    profit_loss: Decimal | None
    profit_loss_percentage: Decimal | None
    fees: Decimal | None
    exchange: str | None
    status: TradeStatus
    notes: str | None
    stop_loss: Decimal | None
    take_profit: Decimal | None
    liquidation_price: Decimal | None
    tp_hit: bool
    liquidated: bool
    close_reason: CloseReason | None
    trade_date: datetime
    close_date: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TradeSummaryRead(BaseModel):
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

    model_config = {"from_attributes": True}
