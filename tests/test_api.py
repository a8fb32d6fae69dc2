from .conftest import RATE_ROWS


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["base_currency"] == "CZK"
    assert body["last_order_number"] == 0
    assert "X-Request-ID" in resp.headers


def test_rates_listing_and_lookup(seeded_client):
    codes = [q["code"] for q in seeded_client.get("/rates/").json()]
    assert codes == ["EUR", "USD", "HUF"]
    eur = seeded_client.get("/rates/eur").json()
    assert eur["quoted"] == {"buy": 24.1, "sell": 25.3, "buy_vip": 24.4, "sell_vip": 25.0}


def test_rate_table_with_base_currency_rejected(client):
    rows = RATE_ROWS + [["cz", "CZK", 1, 1, 1, 1, 1]]
    resp = client.put("/rates/", json={"rows": rows})
    assert resp.status_code == 422
    assert resp.json()["error"] == "malformed_input"
    # Nothing was stored
    assert client.get("/rates/").json() == []


def test_unknown_rate_is_missing_reference(seeded_client):
    resp = seeded_client.get("/rates/GBP")
    assert resp.status_code == 422
    assert resp.json()["error"] == "missing_reference_data"


def test_cash_flow_balances(seeded_client):
    assert seeded_client.get("/cash-flow/balances").json() == {
        "CZK": 100000.0,
        "EUR": 532.5,
        "USD": 1200.0,
    }


def test_submit_order_uses_operator_header(seeded_client):
    resp = seeded_client.post(
        "/orders/",
        json={"direction": "Buy", "currency": "EUR", "rate": 25, "amount": 40},
        headers={"X-Operator": "eva"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["order_number"] == "000001"
    assert body["total_paid"] == 1000.0
    assert body["submitted_by"] == "eva"
    assert body["ledger_row"][1:7] == ["Buy", "EUR", 25.0, 40, 0.0, "No"]
    assert seeded_client.get("/orders/000001").json()["order_number"] == "000001"
    assert seeded_client.get("/health").json()["last_order_number"] == 1


def test_sell_over_foreign_cash_returns_conflict(seeded_client):
    resp = seeded_client.post(
        "/orders/",
        json={"direction": "Sell", "currency": "USD", "rate": 23.2, "amount": 1500},
    )
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "insufficient_liquidity"
    assert body["side"] == "USD"
    assert body["required"] == 1500
    assert body["available"] == 1200
    assert body["shortfall"] == 300
    assert seeded_client.get("/orders/").json() == []


def test_buy_over_capital_reports_base_side(seeded_client):
    resp = seeded_client.post(
        "/orders/",
        json={"direction": "Buy", "currency": "EUR", "rate": 25, "amount": 5000},
    )
    assert resp.status_code == 409
    body = resp.json()
    assert body["side"] == "CZK"
    assert body["required"] == 125000.0
    assert body["shortfall"] == 25000.0


def test_quote_does_not_persist(seeded_client):
    resp = seeded_client.post(
        "/orders/quote",
        json={"direction": "Buy", "currency": "HUF", "amount": 20000, "vip": True},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["order"]["rate"] == 6.2
    assert body["settlement"]["total_paid"] == 1240.0
    assert body["settlement"]["accepted"] is True
    assert seeded_client.get("/orders/").json() == []


def test_malformed_order_rejected_before_pricing(seeded_client):
    for payload in (
        {"direction": "Buy", "currency": "EUR", "rate": 0, "amount": 10},
        {"direction": "Buy", "currency": "EUR", "rate": "abc", "amount": 10},
        {"direction": "Buy", "currency": "EUR", "rate": 25, "amount": 2.5},
        {"direction": "Buy", "currency": "EUR", "rate": 25, "amount": 10, "discount_pct": 150},
        {"direction": "Hold", "currency": "EUR", "rate": 25, "amount": 10},
    ):
        resp = seeded_client.post("/orders/", json=payload)
        assert resp.status_code == 422, payload
        assert resp.json()["error"] == "malformed_input", payload
    assert seeded_client.get("/health").json()["last_order_number"] == 0


def test_quote_with_bad_discount_is_malformed_input(seeded_client):
    resp = seeded_client.post(
        "/orders/quote",
        json={"direction": "Sell", "currency": "EUR", "rate": 25, "amount": 10, "discount_pct": 150},
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "malformed_input"


def test_other_body_errors_stay_validation_errors(client):
    resp = client.post(
        "/reconciliation/CZK",
        json={"recorded_balance": 0, "counts": [{"face_value": 0, "quantity": 1}]},
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_order_not_found(client):
    resp = client.get("/orders/999999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "order not found"


def test_denomination_sheet(client):
    body = client.get("/reconciliation/czk/denominations").json()
    assert body["precision"] == 0
    assert body["notes"] == [5000, 2000, 1000, 500, 200, 100]
    assert body["coins"][-1] == 1
    assert client.get("/reconciliation/XYZ/denominations").status_code == 422


def test_reconcile_against_ledger_balance(seeded_client):
    resp = seeded_client.post(
        "/reconciliation/EUR",
        json={
            "counts": [
                {"face_value": 100, "quantity": 5},
                {"face_value": 20, "quantity": 1},
                {"face_value": 10, "quantity": 1},
                {"face_value": 2, "quantity": 1},
            ]
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["classification"] == "Deficit"
    assert body["difference"] == -0.5
    assert body["breakdown_text"].splitlines()[0] == "100 × 5 = 500.00"
    assert body["summary"].startswith("EUR: deficit of 0.50")


def test_reconcile_with_supplied_balance(client):
    resp = client.post(
        "/reconciliation/CZK",
        json={
            "recorded_balance": 15000.0,
            "counts": [
                {"face_value": 1000, "quantity": 10},
                {"face_value": 200, "quantity": 25},
            ],
        },
    )
    body = resp.json()
    assert body["classification"] == "Match"
    assert body["difference"] == 0
    assert body["breakdown"] == []


def test_reconcile_without_ledger_balance_is_missing_reference(client):
    resp = client.post("/reconciliation/EUR", json={"counts": []})
    assert resp.status_code == 422
    assert resp.json()["error"] == "missing_reference_data"
