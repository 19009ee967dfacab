"""Integration tests for reactor control routes.

Commands run whether or not the session has been started; rejected
commands still answer 200 with accepted=False.
"""

import pytest


class TestGetReactor:
    """Tests for GET /controls/reactor endpoint."""

    def test_initial_readout(self, client_without_start):
        client, _ = client_without_start

        response = client.get("/controls/reactor")

        assert response.status_code == 200
        data = response.json()
        assert data["core_temperature"] == 300.0
        assert data["control_rod_insertion"] == 100.0
        assert data["coolant_pump_on"] is True
        assert data["pump_level"] == 1
        assert data["has_auto_scram"] is False
        assert data["reactor_status"] == "running"
        assert data["grid_frequency_hz"] == 60.0


class TestSettings:
    """Tests for POST /controls/rods and /controls/valve."""

    def test_set_rods(self, client_without_start):
        client, engine = client_without_start

        response = client.post("/controls/rods", json={"percent": 25})

        assert response.status_code == 200
        data = response.json()
        assert data["command"] == "set_control_rod"
        assert data["accepted"] is True
        assert data["event"] is None
        assert data["tick_count"] == 0
        assert engine.get_state().control_rod_insertion == 25.0

    def test_set_valve(self, client_with_engine):
        client, engine = client_with_engine
        client.post("/controls/valve", json={"percent": 60})
        assert engine.get_state().steam_valve_opening == 60.0

    @pytest.mark.parametrize("body", [{"percent": 101}, {"percent": -1}, {}])
    def test_out_of_range_is_unprocessable(self, client_without_start, body):
        client, engine = client_without_start

        response = client.post("/controls/rods", json=body)

        assert response.status_code == 422
        assert engine.get_state().control_rod_insertion == 100.0


class TestSwitches:
    """Tests for POST /controls/pump/toggle and /controls/scram."""

    def test_toggle_pump(self, client_without_start):
        client, engine = client_without_start

        data = client.post("/controls/pump/toggle").json()

        assert data["event"]["title"] == "COOLANT PUMP OFF"
        assert data["event"]["cue"] == "click"
        assert engine.get_state().coolant_pump_on is False

    def test_scram(self, client_without_start):
        client, engine = client_without_start
        client.post("/controls/rods", json={"percent": 0})

        data = client.post("/controls/scram").json()

        assert data["event"]["severity"] == "warning"
        assert engine.get_state().control_rod_insertion == 100.0


class TestMaintenance:
    """Tests for repair, refuel and upgrade endpoints."""

    def test_repair(self, client_without_start):
        client, engine = client_without_start
        engine._state.condenser_health = 10.0

        data = client.post("/controls/repair", json={"component": "condenser"}).json()

        assert data["accepted"] is True
        assert data["event"]["title"] == "CONDENSER REPAIRED"
        state = engine.get_state()
        assert state.condenser_health == 100.0
        assert state.operating_cash == 4000.0

    def test_repair_unknown_component(self, client_without_start):
        client, _ = client_without_start
        response = client.post("/controls/repair", json={"component": "core"})
        assert response.status_code == 422

    def test_repair_insufficient_funds(self, client_without_start):
        client, engine = client_without_start
        engine._state.operating_cash = 50.0

        response = client.post("/controls/repair", json={"component": "pump"})

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is False
        assert data["event"]["title"] == "INSUFFICIENT FUNDS"
        assert data["event"]["cue"] == "error"

    def test_refuel(self, client_without_start):
        client, engine = client_without_start
        engine._state.fuel_remaining = 3.0

        client.post("/controls/refuel")

        assert engine.get_state().fuel_remaining == 100.0
        assert engine.get_state().operating_cash == 3500.0

    def test_upgrade_pump_until_max(self, client_without_start):
        client, engine = client_without_start

        first = client.post("/controls/upgrades/pump").json()
        second = client.post("/controls/upgrades/pump").json()
        third = client.post("/controls/upgrades/pump").json()

        assert first["accepted"] and second["accepted"]
        assert third["accepted"] is False
        assert third["event"]["title"] == "MAX LEVEL"
        assert engine.get_state().pump_level == 3

    def test_install_auto_scram(self, client_without_start):
        client, engine = client_without_start

        data = client.post("/controls/upgrades/auto-scram").json()

        assert data["accepted"] is True
        assert engine.get_state().has_auto_scram is True


class TestAfterGameOver:
    def test_commands_rejected(self, client_with_engine):
        client, engine = client_with_engine
        engine._state.audit_risk_percent = 100.0
        client.post("/simulation/tick", json={})

        data = client.post("/controls/scram").json()

        assert data["accepted"] is False
        assert data["event"]["title"] == "SESSION OVER"
