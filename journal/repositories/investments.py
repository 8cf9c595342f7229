"""Investment record store."""

from decimal import Decimal

from sqlmodel import Session, select, func

from journal.models.investment import Investment
from journal.services.money import ZERO, money, to_decimal


class InvestmentRepository:
    def __init__(self, session: Session):
        self.session = session

    def add(self, investment: Investment) -> Investment:
        self.session.add(investment)
        self.session.flush()
        return investment

    save = add

    def get(self, investment_id: int) -> Investment | None:
        return self.session.get(Investment, investment_id)

    def list_by_trade_id(self, trade_id: int) -> list[Investment]:
        """Newest investment first."""
        stmt = (
            select(Investment)
            .where(Investment.trade_id == trade_id)
            .order_by(Investment.investment_date.desc(), Investment.id.desc())
        )
        return list(self.session.exec(stmt).all())

    def delete(self, investment: Investment) -> None:
        self.session.delete(investment)
        self.session.flush()

    def delete_by_trade_id(self, trade_id: int) -> int:
        investments = self.list_by_trade_id(trade_id)
        for investment in investments:
            self.session.delete(investment)
        self.session.flush()
        return len(investments)

    def sum_amount_by_trade_id(self, trade_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(Investment.amount), 0)).where(
            Investment.trade_id == trade_id
        )
        value = self.session.exec(stmt).one()
        return money(to_decimal(value) if value is not None else ZERO)

    def count_by_trade_id(self, trade_id: int) -> int:
        stmt = select(func.count()).select_from(Investment).where(Investment.trade_id == trade_id)
        return int(self.session.exec(stmt).one())
