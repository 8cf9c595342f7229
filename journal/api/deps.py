"""Shared API dependencies: one service per request, bound to the request's session."""

from fastapi import Depends
from sqlmodel import Session

from journal.database import get_session
from journal.services.investment_service import InvestmentService
from journal.services.trade_service import TradeService
from journal.services.wallet_service import WalletService


def get_trade_service(session: Session = Depends(get_session)) -> TradeService:
    return TradeService(session)


def get_investment_service(session: Session = Depends(get_session)) -> InvestmentService:
    return InvestmentService(session)


def get_wallet_service(session: Session = Depends(get_session)) -> WalletService:
    return WalletService(session)
