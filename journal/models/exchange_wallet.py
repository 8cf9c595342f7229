"""ExchangeWallet model: capital ledger per exchange.

Linked to trades only through the exchange name (case-insensitive match on
Trade.exchange), not through a foreign key.
"""

from datetime import datetime
from decimal import Decimal

from sqlmodel import SQLModel, Field

from journal.utils.constants import EXCHANGE_MAX_LENGTH, MONEY_DIGITS, MONEY_PLACES


class ExchangeWallet(SQLModel, table=True):
    __tablename__ = "exchange_wallet"

    id: int | None = Field(default=None, primary_key=True)
    exchange_name: str = Field(unique=True, max_length=EXCHANGE_MAX_LENGTH)
    total_balance: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
