"""Database models."""

from journal.models.trade import Trade, TradeType, TradeStatus, CloseReason
from journal.models.investment import Investment
from journal.models.exchange_wallet import ExchangeWallet

__all__ = [
    "Trade",
    "TradeType",
    "TradeStatus",
    "CloseReason",
    "Investment",
    "ExchangeWallet",
]
