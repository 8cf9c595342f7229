"""CLI tool for maintenance and quick reports.

Usage:
    python -m journal.cli <command>

Commands:
    init-db            create tables and indexes
    resync-positions   recompute position sizes and P&L for every trade
    summary            print the portfolio summary for today
    wallets            print used/available balance per exchange
"""

import sys
from datetime import date

from sqlmodel import Session

from journal.database import engine, create_db_and_tables
from journal.engine.position_sync import resync_positions
from journal.services.trade_service import TradeService
from journal.services.wallet_service import WalletService
from journal.utils.logging import setup_logging


def init_db():
    create_db_and_tables()
    print("Database ready.")


def resync():
    create_db_and_tables()
    with Session(engine) as session:
        result = resync_positions(session)
    print(f"Scanned {result['trades_scanned']} trades, {result['trades_changed']} changed.")


def summary():
    with Session(engine) as session:
        report = TradeService(session).get_summary(date.today())

    print(f"Trades:        {report.total_trades} ({report.open_trades} open, {report.closed_trades} closed)")
    print(f"Win rate:      {report.win_rate}% ({report.winning_trades}W / {report.losing_trades}L)")
    print(f"Realized P&L:  {report.realized_pnl}")
    print(f"Unrealized:    {report.unrealized_pnl}")
    print(f"Today / week / month: {report.today_profit_loss} / {report.week_profit_loss} / {report.month_profit_loss}")
    print(f"Avg profit / loss:    {report.average_profit} / {report.average_loss}")
    print(f"Invested:      {report.total_invested}")
    print(f"Portfolio:     {report.current_portfolio_value}")


def wallets():
    with Session(engine) as session:
        service = WalletService(session)
        summaries = service.list_wallet_summaries()
        total = service.total_balance()

    if not summaries:
        print("No wallets.")
        return
    for w in summaries:
        print(
            f"{w.exchange_name:<20} total {w.total_balance:>14}  used {w.used_balance:>14}  "
            f"available {w.available_balance:>14}  ({w.open_trades_count} open)"
        )
    print(f"{'TOTAL':<20} total {total:>14}")


COMMANDS = {
    "init-db": init_db,
    "resync-positions": resync,
    "summary": summary,
    "wallets": wallets,
}


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m journal.cli <command>")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)

    command = COMMANDS.get(sys.argv[1])
    if command is None:
        print(f"Unknown command: {sys.argv[1]}")
        sys.exit(1)

    setup_logging()
    command()


if __name__ == "__main__":
    main()
