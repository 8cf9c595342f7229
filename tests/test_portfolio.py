"""Tests for the portfolio summary and its P&L windows."""

from datetime import date, datetime, time
from decimal import Decimal

from factories import make_closed_trade, make_trade
from journal.models.trade import TradeType
from journal.services.portfolio import PnLWindows, realized_between, summarize_trades, win_rate

TODAY = date(2026, 10, 19)


# ---------------------------------------------------------------------------
# 1. Windows
# ---------------------------------------------------------------------------

def test_windows_for_day():
    windows = PnLWindows.for_day(TODAY)
    assert windows.today_start == datetime(2026, 10, 19, 0, 0)
    assert windows.today_end == datetime.combine(TODAY, time.max)
    assert windows.week_start == datetime(2026, 10, 12, 0, 0)
    assert windows.month_start == datetime(2026, 10, 1, 0, 0)


def test_week_window_crosses_month_boundary():
    windows = PnLWindows.for_day(date(2026, 11, 3))
    assert windows.week_start == datetime(2026, 10, 27, 0, 0)
    assert windows.month_start == datetime(2026, 11, 1, 0, 0)


def test_realized_between_is_inclusive():
    start, end = datetime(2026, 10, 12), datetime(2026, 10, 19, 12, 0)
    trades = [
        make_closed_trade("10", close_date=start),
        make_closed_trade("20", close_date=end),
        make_closed_trade("40", close_date=datetime(2026, 10, 11, 23, 59, 59)),
        make_closed_trade("80", close_date=None),
        make_trade(),
    ]
    assert realized_between(trades, start, end) == Decimal("30.00")


# ---------------------------------------------------------------------------
# 2. Win rate
# ---------------------------------------------------------------------------

def test_win_rate_three_of_four():
    assert str(win_rate(3, 4)) == "75.00"


def test_win_rate_rounds_ratio_to_four_places():
    assert str(win_rate(1, 3)) == "33.33"
    assert str(win_rate(2, 3)) == "66.67"


def test_win_rate_without_closed_trades():
    assert str(win_rate(0, 0)) == "0.00"


# ---------------------------------------------------------------------------
# 3. Summary
# ---------------------------------------------------------------------------

class TestSummarizeTrades:
    def test_empty_trade_set(self):
        summary = summarize_trades([], TODAY)
        assert summary.total_trades == 0
        assert summary.open_trades == summary.closed_trades == 0
        assert summary.total_profit_loss == Decimal("0")
        assert summary.total_invested == Decimal("0")
        assert summary.current_portfolio_value == Decimal("0")
        assert str(summary.win_rate) == "0.00"
        assert str(summary.average_profit) == "0.00"
        assert str(summary.average_loss) == "0.00"

    def test_counts_and_averages(self):
        trades = [
            make_closed_trade("100", close_date=datetime(2026, 10, 1)),
            make_closed_trade("50", close_date=datetime(2026, 10, 2)),
            make_closed_trade("25", close_date=datetime(2026, 10, 3)),
            make_closed_trade("-40", close_date=datetime(2026, 10, 4)),
            make_trade(),
        ]
        summary = summarize_trades(trades, TODAY)
        assert summary.total_trades == 5
        assert summary.open_trades == 1
        assert summary.closed_trades == 4
        assert summary.winning_trades == 3
        assert summary.losing_trades == 1
        assert summary.win_rate == Decimal("75.00")
        assert summary.average_profit == Decimal("58.33")
        assert summary.average_loss == Decimal("-40.00")
        assert summary.total_profit_loss == Decimal("135.00")
        assert summary.realized_pnl == summary.total_profit_loss

    def test_break_even_trade_is_neither_win_nor_loss(self):
        summary = summarize_trades([make_closed_trade("0", close_date=datetime(2026, 10, 1))], TODAY)
        assert summary.closed_trades == 1
        assert summary.winning_trades == summary.losing_trades == 0
        assert summary.win_rate == Decimal("0.00")

    def test_profit_loss_windows(self):
        trades = [
            make_closed_trade("100", close_date=datetime.combine(TODAY, time.max)),
            make_closed_trade("50", close_date=datetime(2026, 10, 12, 0, 0)),
            make_closed_trade("30", close_date=datetime(2026, 10, 11, 23, 59)),
            make_closed_trade("-40", close_date=datetime(2026, 9, 30, 18, 0)),
            make_closed_trade("20", close_date=None),
        ]
        summary = summarize_trades(trades, TODAY)
        assert summary.today_profit_loss == Decimal("100.00")
        assert summary.week_profit_loss == Decimal("150.00")
        assert summary.month_profit_loss == Decimal("180.00")
        assert summary.total_profit_loss == Decimal("160.00")

    def test_unrealized_and_portfolio_value(self):
        trades = [
            make_trade(quantity=Decimal("10"), leverage=5, current_price=Decimal("110")),
            make_trade(
                trade_type=TradeType.SHORT,
                quantity=Decimal("10"),
                current_price=Decimal("110"),
            ),
            make_closed_trade("-500", close_date=datetime(2026, 10, 18)),
        ]
        summary = summarize_trades(trades, TODAY)
        assert summary.unrealized_pnl == Decimal("400.00")
        assert summary.realized_pnl == Decimal("-500.00")
        assert summary.current_portfolio_value == Decimal("1900.00")
        assert summary.total_invested == Decimal("2100.00")

    def test_open_trade_without_current_price_marked_at_entry(self):
        summary = summarize_trades([make_trade(quantity=Decimal("3"), leverage=20)], TODAY)
        assert summary.unrealized_pnl == Decimal("0.00")
        assert summary.current_portfolio_value == Decimal("300.00")

    def test_unrealized_ignores_stored_profit_loss(self):
        trade = make_trade(current_price=Decimal("120"))
        trade.profit_loss = Decimal("999")
        summary = summarize_trades([trade], TODAY)
        assert summary.unrealized_pnl == Decimal("20.00")
        assert summary.total_profit_loss == Decimal("0.00")
