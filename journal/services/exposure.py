"""Wallet exposure: how much of each exchange balance is tied up in open trades."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from journal.models.exchange_wallet import ExchangeWallet
from journal.models.trade import Trade, TradeStatus
from journal.services.money import money, total


@dataclass(frozen=True)
class WalletExposure:
    id: int | None
    exchange_name: str
    total_balance: Decimal
    used_balance: Decimal
    available_balance: Decimal  # negative when open positions exceed the balance
    open_trades_count: int
    notes: str | None
    updated_at: datetime | None


def trades_on_exchange(exchange_name: str, trades: Iterable[Trade]) -> list[Trade]:
    """Open trades whose exchange matches the name, ignoring case."""
    name = exchange_name.lower()
    return [
        t for t in trades
        if t.status == TradeStatus.OPEN and t.exchange is not None and t.exchange.lower() == name
    ]


def compute_exposure(wallet: ExchangeWallet, open_trades: Iterable[Trade]) -> WalletExposure:
    matching = trades_on_exchange(wallet.exchange_name, open_trades)
    used = money(total(t.position_size for t in matching))
    balance = money(wallet.total_balance)
    return WalletExposure(
        id=wallet.id,
        exchange_name=wallet.exchange_name,
        total_balance=balance,
        used_balance=used,
        available_balance=balance - used,
        open_trades_count=len(matching),
        notes=wallet.notes,
        updated_at=wallet.updated_at,
    )


def total_balance(wallets: Iterable[ExchangeWallet]) -> Decimal:
    """Sum of every wallet's balance, independent of usage."""
    return money(total(w.total_balance for w in wallets))
