"""Integration tests for finance and fraud routes."""

import pytest


class TestGetFinance:
    """Tests for GET /finance endpoint."""

    def test_initial_books(self, client_without_start):
        client, _ = client_without_start

        response = client.get("/finance")

        assert response.status_code == 200
        data = response.json()
        assert data["stock_score"] == 40.0
        assert data["operating_cash"] == 5000.0
        assert data["credit_score"] == 50.0
        assert data["credit_limit"] == 10000.0
        assert data["special_purpose_entities"] == []
        assert data["ticks_insolvent"] == 0

    def test_spes_listed(self, client_without_start):
        client, _ = client_without_start
        client.post("/finance/cook-books")
        client.post("/finance/spe")

        spes = client.get("/finance").json()["special_purpose_entities"]

        assert len(spes) == 1
        assert spes[0]["name"] == "LJM-1"
        assert spes[0]["status"] == "active"
        assert spes[0]["is_active"] is True


class TestFraudCommands:
    def test_cook_books(self, client_without_start):
        client, engine = client_without_start

        data = client.post("/finance/cook-books").json()

        assert data["accepted"] is True
        assert data["event"]["title"] == "BOOKS COOKED"
        assert engine.get_state().stock_score == 2040.0
        assert engine.get_state().audit_risk_percent == 15.0

    def test_create_spe_needs_stock(self, client_without_start):
        client, _ = client_without_start

        data = client.post("/finance/spe").json()

        assert data["accepted"] is False
        assert data["event"]["title"] == "INSUFFICIENT STOCK VALUE"

    def test_lobby(self, client_without_start):
        client, engine = client_without_start

        data = client.post("/finance/lobby").json()

        assert data["event"]["title"] == "LOBBYISTS DEPLOYED"
        state = engine.get_state()
        assert state.operating_cash == 3000.0
        assert state.lobbying_shield_ticks_remaining == 600

    def test_shred(self, client_without_start):
        client, engine = client_without_start
        engine._state.audit_risk_percent = 50.0

        client.post("/finance/shred")

        assert engine.get_state().audit_risk_percent == 20.0
        assert engine.get_state().operating_cash == 2000.0


class TestMoneyMovement:
    def test_siphon(self, client_without_start):
        client, _ = client_without_start

        data = client.post("/finance/siphon", json={"amount": 1500}).json()

        assert data["accepted"] is True
        books = client.get("/finance").json()
        assert books["operating_cash"] == 3500.0
        assert books["offshore_holdings"] == 1500.0

    def test_siphon_more_than_cash(self, client_without_start):
        client, _ = client_without_start

        data = client.post("/finance/siphon", json={"amount": 6000}).json()

        assert data["accepted"] is False
        assert data["event"]["title"] == "INSUFFICIENT FUNDS"

    def test_borrow(self, client_without_start):
        client, _ = client_without_start

        client.post("/finance/borrow", json={"amount": 2500})

        books = client.get("/finance").json()
        assert books["outstanding_loan"] == 2500.0
        assert books["operating_cash"] == 7500.0

    def test_borrow_over_limit(self, client_without_start):
        client, _ = client_without_start

        data = client.post("/finance/borrow", json={"amount": 10001}).json()

        assert data["accepted"] is False
        assert data["event"]["title"] == "CREDIT LIMIT REACHED"

    @pytest.mark.parametrize("path", ["/finance/siphon", "/finance/borrow"])
    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amount_unprocessable(self, client_without_start, path, amount):
        client, _ = client_without_start
        assert client.post(path, json={"amount": amount}).status_code == 422
