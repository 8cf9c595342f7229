"""Investment model: capital added to an open trade after entry."""

from datetime import datetime
from decimal import Decimal

from sqlmodel import SQLModel, Field

from journal.utils.constants import MONEY_DIGITS, MONEY_PLACES, PRICE_DIGITS, PRICE_PLACES


class Investment(SQLModel, table=True):
    __tablename__ = "investment"

    id: int | None = Field(default=None, primary_key=True)
    trade_id: int = Field(foreign_key="trade.id", index=True)
    amount: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    price_at_investment: Decimal = Field(max_digits=PRICE_DIGITS, decimal_places=PRICE_PLACES)

    # Marked to the parent trade's current price; None until that price is known
    current_value: Decimal | None = Field(default=None, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    profit_loss: Decimal | None = Field(default=None, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)

    notes: str | None = None
    investment_date: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)
