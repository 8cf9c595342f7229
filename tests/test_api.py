"""End-to-end tests for the HTTP API."""

from decimal import Decimal


def D(value) -> Decimal:
    return Decimal(str(value))


def _trade_payload(**overrides) -> dict:
    payload = {
        "coin": "BTC",
        "trade_type": "LONG",
        "entry_price": "100",
        "quantity": "2",
        "leverage": 5,
        "exchange": "Binance",
        "trade_date": "2026-10-10T12:00:00",
    }
    payload.update(overrides)
    return payload


def _create_trade(client, **overrides) -> dict:
    resp = client.post("/api/trades", json=_trade_payload(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# 1. Trades
# ---------------------------------------------------------------------------

def test_create_and_get_trade(client):
    trade = _create_trade(client)
    assert D(trade["position_size"]) == Decimal("200.00")
    assert trade["profit_loss"] is None
    assert trade["status"] == "OPEN"

    resp = client.get(f"/api/trades/{trade['id']}")
    assert resp.status_code == 200
    assert resp.json()["coin"] == "BTC"


def test_timezone_offset_is_dropped(client):
    trade = _create_trade(client, trade_date="2026-10-10T12:00:00+02:00")
    assert trade["trade_date"] == "2026-10-10T12:00:00"


def test_missing_trade_returns_404(client):
    resp = client.get("/api/trades/999")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Trade not found with id: 999"}
    assert client.delete("/api/trades/999").status_code == 404


def test_lifecycle_violation_returns_422(client):
    resp = client.post("/api/trades", json=_trade_payload(status="CLOSED", close_reason="MANUAL"))
    assert resp.status_code == 422
    assert resp.json()["field"] == "exit_price"


def test_schema_violation_returns_422(client):
    assert client.post("/api/trades", json=_trade_payload(leverage=200)).status_code == 422
    assert client.post("/api/trades", json=_trade_payload(entry_price="0")).status_code == 422
    assert client.post("/api/trades", json=_trade_payload(trade_type="SIDEWAYS")).status_code == 422


def test_close_trade(client):
    trade = _create_trade(client)
    resp = client.post(f"/api/trades/{trade['id']}/close", json={"exit_price": "80", "close_reason": "LIQUIDATED"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "CLOSED"
    assert D(body["profit_loss"]) == Decimal("-200.00")
    assert D(body["profit_loss_percentage"]) == Decimal("-100.00")
    assert body["liquidated"] is True
    assert body["tp_hit"] is False


def test_close_defaults_to_manual(client):
    trade = _create_trade(client)
    body = client.post(f"/api/trades/{trade['id']}/close", json={"exit_price": "110"}).json()
    assert body["close_reason"] == "MANUAL"
    assert D(body["profit_loss"]) == Decimal("100.00")


def test_partial_update(client):
    trade = _create_trade(client)
    resp = client.put(f"/api/trades/{trade['id']}", json={"quantity": "4", "notes": "scaled in"})
    assert resp.status_code == 200
    body = resp.json()
    assert D(body["position_size"]) == Decimal("400.00")
    assert body["notes"] == "scaled in"
    assert body["leverage"] == 5


def test_update_to_closed_without_exit_returns_422(client):
    trade = _create_trade(client)
    resp = client.put(f"/api/trades/{trade['id']}", json={"status": "CLOSED"})
    assert resp.status_code == 422
    assert resp.json()["field"] == "exit_price"


def test_current_price(client):
    trade = _create_trade(client)
    resp = client.put(f"/api/trades/{trade['id']}/current-price", json={"current_price": "125.5"})
    assert resp.status_code == 200
    assert D(resp.json()["current_price"]) == Decimal("125.5")


def test_filters_and_lookups(client):
    _create_trade(client, coin="BTC", exchange="Binance")
    _create_trade(client, coin="ETH", trade_type="SHORT", exchange="Bybit", trade_date="2026-10-12T08:00:00")

    assert [t["coin"] for t in client.get("/api/trades", params={"coin": "eth"}).json()] == ["ETH"]
    assert [t["coin"] for t in client.get("/api/trades", params={"trade_type": "LONG"}).json()] == ["BTC"]
    assert [t["coin"] for t in client.get("/api/trades", params={"exchange": "BYBIT"}).json()] == ["ETH"]
    assert client.get("/api/trades/coins").json() == ["BTC", "ETH"]
    assert client.get("/api/trades/exchanges").json() == ["Binance", "Bybit"]


def test_date_range(client):
    _create_trade(client, coin="BTC", trade_date="2026-10-01T00:00:00")
    _create_trade(client, coin="ETH", trade_date="2026-10-05T23:59:59")
    _create_trade(client, coin="SOL", trade_date="2026-10-06T00:00:00")

    resp = client.get("/api/trades/date-range", params={"start_date": "2026-10-01", "end_date": "2026-10-05"})
    assert [t["coin"] for t in resp.json()] == ["BTC", "ETH"]

    resp = client.get("/api/trades/date-range", params={"start_date": "2026-10-05", "end_date": "2026-10-01"})
    assert resp.status_code == 422


def test_delete_trade(client):
    trade = _create_trade(client)
    client.post(f"/api/trades/{trade['id']}/investments", json={"amount": "50", "price_at_investment": "100"})

    assert client.delete(f"/api/trades/{trade['id']}").status_code == 204
    assert client.get(f"/api/trades/{trade['id']}").status_code == 404
    assert client.get(f"/api/trades/{trade['id']}/investments").status_code == 404


# ---------------------------------------------------------------------------
# 2. Investments
# ---------------------------------------------------------------------------

def test_investment_flow(client):
    trade = _create_trade(client)
    url = f"/api/trades/{trade['id']}/investments"

    first = client.post(url, json={"amount": "100", "price_at_investment": "100"})
    assert first.status_code == 201
    client.post(url, json={"amount": "250", "price_at_investment": "105"})

    assert D(client.get(f"{url}/total").json()) == Decimal("350.00")
    assert D(client.get(f"/api/trades/{trade['id']}").json()["position_size"]) == Decimal("350.00")
    assert len(client.get(url).json()) == 2

    investment_id = first.json()["id"]
    resp = client.put(f"{url}/{investment_id}", json={"notes": "first leg"})
    assert resp.json()["notes"] == "first leg"
    assert D(resp.json()["amount"]) == Decimal("100.00")

    assert client.delete(f"{url}/{investment_id}").status_code == 204
    assert D(client.get(f"{url}/total").json()) == Decimal("250.00")
    assert client.get(f"{url}/{investment_id}").status_code == 404


def test_investment_on_closed_trade_returns_422(client):
    trade = _create_trade(client)
    client.post(f"/api/trades/{trade['id']}/close", json={"exit_price": "110"})
    resp = client.post(f"/api/trades/{trade['id']}/investments", json={"amount": "100", "price_at_investment": "100"})
    assert resp.status_code == 422
    assert resp.json()["field"] == "trade_id"


def test_investment_schema_violation(client):
    trade = _create_trade(client)
    resp = client.post(f"/api/trades/{trade['id']}/investments", json={"amount": "-1", "price_at_investment": "100"})
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# 3. Wallets
# ---------------------------------------------------------------------------

def test_wallet_flow(client):
    resp = client.post("/api/wallets", json={"exchange_name": "Binance", "total_balance": "10000"})
    assert resp.status_code == 201
    wallet = resp.json()

    _create_trade(client, quantity="30", exchange="binance")
    _create_trade(client, quantity="15", exchange="Binance")

    summary = client.get(f"/api/wallets/{wallet['id']}/summary").json()
    assert D(summary["used_balance"]) == Decimal("4500.00")
    assert D(summary["available_balance"]) == Decimal("5500.00")
    assert summary["open_trades_count"] == 2

    assert [s["exchange_name"] for s in client.get("/api/wallets/summaries").json()] == ["Binance"]
    assert client.get("/api/wallets/exchange/BINANCE").json()["id"] == wallet["id"]
    assert D(client.get("/api/wallets/total-balance").json()) == Decimal("10000.00")

    resp = client.put(f"/api/wallets/{wallet['id']}", json={"total_balance": "8000"})
    assert D(resp.json()["total_balance"]) == Decimal("8000.00")

    assert client.delete(f"/api/wallets/{wallet['id']}").status_code == 204
    assert client.get(f"/api/wallets/{wallet['id']}").status_code == 404


def test_duplicate_wallet_returns_422(client):
    client.post("/api/wallets", json={"exchange_name": "Bybit", "total_balance": "1"})
    resp = client.post("/api/wallets", json={"exchange_name": "bybit", "total_balance": "2"})
    assert resp.status_code == 422
    assert resp.json()["field"] == "exchange_name"


def test_unknown_exchange_returns_404(client):
    resp = client.get("/api/wallets/exchange/Kraken")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Wallet not found with id: Kraken"


# ---------------------------------------------------------------------------
# 4. Dashboard and system
# ---------------------------------------------------------------------------

def test_dashboard_summary(client):
    won = _create_trade(client)
    lost = _create_trade(client, coin="ETH")
    _create_trade(client, coin="SOL")
    client.post(f"/api/trades/{won['id']}/close", json={"exit_price": "110"})
    client.post(f"/api/trades/{lost['id']}/close", json={"exit_price": "95"})

    summary = client.get("/api/dashboard/summary").json()
    assert summary["total_trades"] == 3
    assert summary["open_trades"] == 1
    assert summary["closed_trades"] == 2
    assert D(summary["win_rate"]) == Decimal("50.00")
    assert D(summary["total_profit_loss"]) == Decimal("50.00")
    assert D(summary["today_profit_loss"]) == Decimal("50.00")
    assert D(summary["total_invested"]) == Decimal("600.00")


def test_realized_pnl_window(client):
    trade = _create_trade(client)
    client.post(f"/api/trades/{trade['id']}/close", json={"exit_price": "110"})

    assert D(client.get("/api/dashboard/realized-pnl").json()) == Decimal("100.00")
    resp = client.get("/api/dashboard/realized-pnl", params={"start": "2000-01-01T00:00:00", "end": "2000-12-31T23:59:59"})
    assert D(resp.json()) == Decimal("0.00")


def test_realized_pnl_bounds_drop_offsets(client):
    _create_trade(
        client,
        status="CLOSED",
        exit_price="110",
        close_reason="MANUAL",
        close_date="2026-10-12T10:00:00",
    )
    params = {"start": "2026-10-12T10:00:00+09:00", "end": "2026-10-12T10:00:00-05:00"}
    resp = client.get("/api/dashboard/realized-pnl", params=params)
    assert resp.status_code == 200
    assert D(resp.json()) == Decimal("100.00")


def test_health(client):
    assert client.get("/api/system/health").json() == {"status": "ok"}


def test_resync_endpoint(client):
    _create_trade(client)
    resp = client.post("/api/system/resync-positions")
    assert resp.status_code == 200
    assert resp.json() == {"trades_scanned": 1, "trades_changed": 0}
