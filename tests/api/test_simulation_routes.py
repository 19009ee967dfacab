"""Integration tests for simulation lifecycle routes.

Covers:
- POST /simulation/start, /stop, /restart
- POST /simulation/tick, /pause, /resume
- GET /simulation/status, /snapshot, /history
"""

import pytest


class TestPostSimulationStart:
    """Tests for POST /simulation/start endpoint."""

    def test_start_manual(self, client_without_start):
        client, engine = client_without_start

        response = client.post("/simulation/start", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["mode"] == "manual"
        assert data["simulation_id"] == engine.simulation_id
        assert data["calendar_date"] == "Jan 2000"
        assert engine.is_running is True

    def test_start_auto_advance(self, client_without_start):
        client, engine = client_without_start

        response = client.post(
            "/simulation/start", json={"auto_advance": True, "tick_interval": 0.01}
        )

        assert response.status_code == 200
        assert response.json()["mode"] == "auto_advance"
        assert response.json()["tick_interval"] == 0.01

    def test_start_twice_conflicts(self, client_with_engine):
        client, _ = client_with_engine

        response = client.post("/simulation/start", json={})

        assert response.status_code == 409
        assert "already running" in response.json()["detail"]

    def test_start_rejects_non_positive_interval(self, client_without_start):
        client, engine = client_without_start

        response = client.post("/simulation/start", json={"tick_interval": 0})

        assert response.status_code == 422
        assert engine.is_running is False


class TestPostSimulationStop:
    """Tests for POST /simulation/stop endpoint."""

    def test_stop(self, client_with_engine):
        client, engine = client_with_engine
        client.post("/simulation/tick", json={"count": 3})

        response = client.post("/simulation/stop")

        assert response.status_code == 200
        data = response.json()
        assert data["tick_count"] == 3
        assert data["session_status"] == "running"
        assert engine.is_running is False

    def test_stop_when_not_running(self, client_without_start):
        client, _ = client_without_start

        response = client.post("/simulation/stop")

        assert response.status_code == 200
        assert response.json()["tick_count"] is None


class TestPostSimulationRestart:
    """Tests for POST /simulation/restart endpoint."""

    def test_restart_resets_state(self, client_with_engine):
        client, engine = client_with_engine
        client.post("/simulation/tick", json={"count": 10})
        old_id = engine.simulation_id

        response = client.post("/simulation/restart", json={"difficulty": 2, "seed": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["simulation_id"] != old_id
        assert data["difficulty"] == 2
        assert data["seed"] == 3
        assert data["was_running"] is True
        assert data["is_running"] is False
        assert engine.get_state().tick_count == 0
        assert engine.get_state().operating_cash == 4000.0

    def test_restart_and_start(self, client_with_engine):
        client, engine = client_with_engine

        response = client.post("/simulation/restart", json={"auto_start": True})

        assert response.json()["is_running"] is True
        assert engine.is_running is True

    def test_restart_rejects_unknown_difficulty(self, client_without_start):
        client, _ = client_without_start

        response = client.post("/simulation/restart", json={"difficulty": 7})

        assert response.status_code == 422


class TestPostSimulationTick:
    """Tests for POST /simulation/tick endpoint."""

    def test_tick_once_by_default(self, client_with_engine):
        client, engine = client_with_engine

        response = client.post("/simulation/tick", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["ticks_run"] == 1
        assert data["tick_count"] == 1
        assert [e["title"] for e in data["events"]] == ["BROWNOUT"]

    def test_tick_many(self, client_with_engine):
        client, engine = client_with_engine

        response = client.post("/simulation/tick", json={"count": 40})

        assert response.json()["tick_count"] == 40
        assert len(engine.get_score_history()) == 2

    def test_tick_requires_running(self, client_without_start):
        client, _ = client_without_start

        response = client.post("/simulation/tick", json={"count": 1})

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "Simulation Not Running"
        assert "POST /simulation/start" in data["suggestion"]

    @pytest.mark.parametrize("count", [0, -1, 10001])
    def test_tick_count_bounds(self, client_with_engine, count):
        client, _ = client_with_engine
        response = client.post("/simulation/tick", json={"count": count})
        assert response.status_code == 422

    def test_tick_after_game_over_runs_nothing(self, client_with_engine):
        client, engine = client_with_engine
        engine._state.audit_risk_percent = 100.0
        client.post("/simulation/tick", json={})

        response = client.post("/simulation/tick", json={"count": 5})

        data = response.json()
        assert data["ticks_run"] == 0
        assert data["is_game_over"] is True


class TestPauseResume:
    """Tests for POST /simulation/pause and /simulation/resume."""

    def test_pause_and_resume(self, client_with_engine):
        client, engine = client_with_engine

        paused = client.post("/simulation/pause")
        assert paused.status_code == 200
        assert paused.json()["status"] == "paused"
        assert engine.clock.is_paused is True

        resumed = client.post("/simulation/resume")
        assert resumed.json()["status"] == "running"
        assert engine.clock.is_paused is False

    @pytest.mark.parametrize("path", ["/simulation/pause", "/simulation/resume"])
    def test_requires_running(self, client_without_start, path):
        client, _ = client_without_start
        assert client.post(path).status_code == 409


class TestGetSimulationStatus:
    """Tests for GET /simulation/status endpoint."""

    def test_status_before_start(self, client_without_start):
        client, _ = client_without_start

        response = client.get("/simulation/status")

        assert response.status_code == 200
        data = response.json()
        assert data["is_running"] is False
        assert data["mode"] == "manual"
        assert data["session_status"] == "running"
        assert data["reactor_status"] == "running"
        assert data["chapter_index"] == 0
        assert data["stock_score"] == 40.0

    def test_status_after_failure(self, client_with_engine):
        client, engine = client_with_engine
        engine._state.audit_risk_percent = 100.0
        client.post("/simulation/tick", json={})

        data = client.get("/simulation/status").json()

        assert data["session_status"] == "failed"
        assert data["failure_reason"] == "FEDERAL RAID - FRAUD EXPOSED"


class TestGetSnapshotAndHistory:
    """Tests for GET /simulation/snapshot and /simulation/history."""

    def test_snapshot(self, client_with_engine):
        client, engine = client_with_engine
        client.post("/simulation/tick", json={"count": 20})

        data = client.get("/simulation/snapshot").json()

        assert data["simulation_id"] == engine.simulation_id
        assert data["state"]["tick_count"] == 20
        assert data["chapter"]["chapter_id"] == "vision"
        assert data["recent_events"][0]["title"] == "BROWNOUT"
        assert len(data["score_history"]) == 1

    def test_history(self, client_with_engine):
        client, _ = client_with_engine
        client.post("/simulation/tick", json={"count": 60})

        data = client.get("/simulation/history").json()

        assert data["count"] == 3
        assert [p["tick"] for p in data["points"]] == [20, 40, 60]
        assert data["points"][0]["calendar_date"] == "Jan 2000"
