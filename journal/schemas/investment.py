"""Pydantic schemas for Investment API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from journal.utils.constants import MONEY_DIGITS, MONEY_PLACES, PRICE_DIGITS, PRICE_PLACES
from journal.utils.dates import strip_tz


class InvestmentCreate(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    price_at_investment: Decimal = Field(gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)
    notes: str | None = None
    investment_date: datetime = Field(default_factory=datetime.now)

    @field_validator("investment_date")
    @classmethod
    def _naive_date(cls, value: datetime) -> datetime:
        return strip_tz(value)


class InvestmentUpdate(BaseModel):
    amount: Decimal | None = Field(default=None, gt=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    price_at_investment: Decimal | None = Field(
        default=None, gt=0, max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES
    )
    notes: str | None = None
    investment_date: datetime | None = None

    @field_validator("investment_date")
    @classmethod
    def _naive_date(cls, value: datetime | None) -> datetime | None:
        return strip_tz(value)


class InvestmentRead(BaseModel):
    id: int
    trade_id: int
    amount: Decimal
    price_at_investment: Decimal
    current_value: Decimal | None
    profit_loss: Decimal | None
    notes: str | None
    investment_date: datetime
    created_at: datetime

    model_config = {"from_attributes": True}
