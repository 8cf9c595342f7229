"""Exchange wallet operations and exposure reports."""

import logging
from datetime import datetime
from decimal import Decimal

from pydantic import ValidationError
from sqlmodel import Session

from journal.database import transaction
from journal.errors import NotFoundError, ValidationFailure
from journal.models.exchange_wallet import ExchangeWallet
from journal.models.trade import TradeStatus
from journal.repositories.trades import TradeRepository
from journal.repositories.wallets import WalletRepository
from journal.schemas.wallet import WalletCreate, WalletUpdate
from journal.services.exposure import WalletExposure, compute_exposure

logger = logging.getLogger(__name__)


class WalletService:
    def __init__(self, session: Session):
        self.session = session
        self.wallets = WalletRepository(session)
        self.trades = TradeRepository(session)

    def list_wallets(self) -> list[ExchangeWallet]:
        return self.wallets.list_all()

    def get_wallet(self, wallet_id: int) -> ExchangeWallet:
        wallet = self.wallets.get(wallet_id)
        if wallet is None:
            raise NotFoundError("Wallet", wallet_id)
        return wallet

    def get_wallet_by_exchange(self, exchange_name: str) -> ExchangeWallet:
        wallet = self.wallets.get_by_exchange_name(exchange_name)
        if wallet is None:
            raise NotFoundError("Wallet", exchange_name)
        return wallet

    def create_wallet(self, data: WalletCreate) -> ExchangeWallet:
        with transaction(self.session):
            self._check_unique_name(data.exchange_name)
            wallet = ExchangeWallet(**data.model_dump())
            self.wallets.add(wallet)

        self.session.refresh(wallet)
        logger.info(f"Wallet {wallet.id} created for {wallet.exchange_name}: {wallet.total_balance}")
        return wallet

    def update_wallet(self, wallet_id: int, data: WalletUpdate) -> ExchangeWallet:
        with transaction(self.session):
            wallet = self.get_wallet(wallet_id)
            update_data = data.model_dump(exclude_unset=True)
            merged = {**wallet.model_dump(), **update_data}
            try:
                fields = WalletCreate.model_validate(merged).model_dump()
            except ValidationError as e:
                raise ValidationFailure.from_pydantic(e)

            old_name = wallet.exchange_name
            if fields["exchange_name"] != old_name:
                self._check_unique_name(fields["exchange_name"], exclude_id=wallet.id)
                if fields["exchange_name"].lower() != old_name.lower():
                    # Trades link to wallets by name only; they keep the old name
                    logger.warning(
                        f"Wallet {wallet.id} renamed {old_name!r} -> {fields['exchange_name']!r}; "
                        f"trades recorded on {old_name!r} no longer count against it"
                    )

            for key, value in fields.items():
                setattr(wallet, key, value)
            wallet.updated_at = datetime.now()
            self.wallets.save(wallet)

        self.session.refresh(wallet)
        return wallet

    def delete_wallet(self, wallet_id: int) -> None:
        with transaction(self.session):
            wallet = self.get_wallet(wallet_id)
            self.wallets.delete(wallet)
        logger.info(f"Wallet {wallet_id} deleted")

    def get_wallet_summary(self, wallet_id: int) -> WalletExposure:
        return self._exposure(self.get_wallet(wallet_id))

    def list_wallet_summaries(self) -> list[WalletExposure]:
        return [self._exposure(wallet) for wallet in self.wallets.list_all()]

    def total_balance(self) -> Decimal:
        return self.wallets.sum_total_balance()

    def _exposure(self, wallet: ExchangeWallet) -> WalletExposure:
        open_trades = self.trades.find(status=TradeStatus.OPEN, exchange=wallet.exchange_name)
        return compute_exposure(wallet, open_trades)

    def _check_unique_name(self, exchange_name: str, exclude_id: int | None = None) -> None:
        if self.wallets.exists_by_exchange_name(exchange_name, exclude_id=exclude_id):
            raise ValidationFailure("exchange_name", f"a wallet for {exchange_name!r} already exists")
