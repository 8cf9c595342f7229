"""Exchange wallet record store."""

from decimal import Decimal

from sqlmodel import Session, select, func

from journal.models.exchange_wallet import ExchangeWallet
from journal.services.money import ZERO, money, to_decimal


class WalletRepository:
    def __init__(self, session: Session):
        self.session = session

    def add(self, wallet: ExchangeWallet) -> ExchangeWallet:
        self.session.add(wallet)
        self.session.flush()
        return wallet

    save = add

    def get(self, wallet_id: int) -> ExchangeWallet | None:
        return self.session.get(ExchangeWallet, wallet_id)

    def list_all(self) -> list[ExchangeWallet]:
        stmt = select(ExchangeWallet).order_by(ExchangeWallet.exchange_name)
        return list(self.session.exec(stmt).all())

    def get_by_exchange_name(self, exchange_name: str) -> ExchangeWallet | None:
        stmt = select(ExchangeWallet).where(
            func.lower(ExchangeWallet.exchange_name) == exchange_name.lower()
        )
        return self.session.exec(stmt).first()

    def exists_by_exchange_name(self, exchange_name: str, exclude_id: int | None = None) -> bool:
        wallet = self.get_by_exchange_name(exchange_name)
        return wallet is not None and wallet.id != exclude_id

    def delete(self, wallet: ExchangeWallet) -> None:
        self.session.delete(wallet)
        self.session.flush()

    def sum_total_balance(self) -> Decimal:
        stmt = select(func.coalesce(func.sum(ExchangeWallet.total_balance), 0))
        value = self.session.exec(stmt).one()
        return money(to_decimal(value) if value is not None else ZERO)
