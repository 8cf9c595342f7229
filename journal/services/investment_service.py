"""Investment operations. Every write re-derives the parent trade's position size."""

import logging
from decimal import Decimal

from pydantic import ValidationError
from sqlmodel import Session

from journal.database import transaction
from journal.errors import NotFoundError, ValidationFailure
from journal.models.investment import Investment
from journal.models.trade import Trade, TradeStatus
from journal.repositories.investments import InvestmentRepository
from journal.repositories.trades import TradeRepository
from journal.schemas.investment import InvestmentCreate, InvestmentUpdate
from journal.services.positions import PositionAggregator, revalue_investment

logger = logging.getLogger(__name__)


class InvestmentService:
    def __init__(self, session: Session):
        self.session = session
        self.trades = TradeRepository(session)
        self.investments = InvestmentRepository(session)
        self.positions = PositionAggregator(self.trades, self.investments)

    def list_investments(self, trade_id: int) -> list[Investment]:
        self._get_trade(trade_id)
        return self.investments.list_by_trade_id(trade_id)

    def get_investment(self, trade_id: int, investment_id: int) -> Investment:
        investment = self.investments.get(investment_id)
        if investment is None or investment.trade_id != trade_id:
            raise NotFoundError("Investment", investment_id)
        return investment

    def total_invested(self, trade_id: int) -> Decimal:
        self._get_trade(trade_id)
        return self.investments.sum_amount_by_trade_id(trade_id)

    def add_investment(self, trade_id: int, data: InvestmentCreate) -> Investment:
        with transaction(self.session):
            trade = self._get_trade(trade_id, for_update=True)
            if trade.status != TradeStatus.OPEN:
                raise ValidationFailure("trade_id", "investments can only be added to an OPEN trade")

            investment = Investment(trade_id=trade.id, **data.model_dump())
            revalue_investment(investment, trade)
            self.investments.add(investment)
            self.positions.resync(trade)

        self.session.refresh(investment)
        logger.info(
            f"Investment {investment.id} added to trade {trade_id}: "
            f"{investment.amount} @ {investment.price_at_investment}"
        )
        return investment

    def update_investment(self, trade_id: int, investment_id: int, data: InvestmentUpdate) -> Investment:
        with transaction(self.session):
            trade = self._get_trade(trade_id, for_update=True)
            investment = self.get_investment(trade_id, investment_id)

            update_data = data.model_dump(exclude_unset=True)
            merged = {**investment.model_dump(), **update_data}
            try:
                fields = InvestmentCreate.model_validate(merged).model_dump()
            except ValidationError as e:
                raise ValidationFailure.from_pydantic(e)

            for key, value in fields.items():
                setattr(investment, key, value)
            revalue_investment(investment, trade)
            self.investments.save(investment)
            self.positions.resync(trade)

        self.session.refresh(investment)
        logger.info(f"Investment {investment_id} of trade {trade_id} updated: {sorted(update_data)}")
        return investment

    def delete_investment(self, trade_id: int, investment_id: int) -> None:
        with transaction(self.session):
            trade = self._get_trade(trade_id, for_update=True)
            investment = self.get_investment(trade_id, investment_id)
            self.investments.delete(investment)
            self.positions.resync(trade)
        logger.info(f"Investment {investment_id} removed from trade {trade_id}")

    def _get_trade(self, trade_id: int, for_update: bool = False) -> Trade:
        trade = self.trades.get(trade_id, for_update=for_update)
        if trade is None:
            raise NotFoundError("Trade", trade_id)
        return trade
