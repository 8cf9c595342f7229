"""Pydantic schemas for ExchangeWallet API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from journal.utils.constants import EXCHANGE_MAX_LENGTH, MONEY_DIGITS, MONEY_PLACES


class WalletCreate(BaseModel):
    exchange_name: str = Field(min_length=1, max_length=EXCHANGE_MAX_LENGTH)
    total_balance: Decimal = Field(ge=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    notes: str | None = None

    @field_validator("exchange_name")
    @classmethod
    def _trim_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text


class WalletUpdate(BaseModel):
    exchange_name: str | None = Field(default=None, min_length=1, max_length=EXCHANGE_MAX_LENGTH)
    total_balance: Decimal | None = Field(default=None, ge=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    notes: str | None = None

    @field_validator("exchange_name")
    @classmethod
    def _trim_optional_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text


class WalletRead(BaseModel):
    id: int
    exchange_name: str
    total_balance: Decimal
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WalletSummaryRead(BaseModel):
    id: int
    exchange_name: str
    total_balance: Decimal
    used_balance: Decimal
    available_balance: Decimal
    open_trades_count: int
    notes: str | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}
