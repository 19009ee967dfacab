"""Integration tests for the Meltdown Manager API client library.

These tests run the client against the real application using FastAPI's
TestClient wrapped in an httpx transport. This provides true end-to-end
testing of the client library against the actual API implementation.

A fresh engine with a fixed seed is created for each test.
"""

import httpx
import pytest
from starlette.testclient import TestClient

from api.dependencies import initialize_simulation_engine, shutdown_simulation_engine
from client import (
    ConflictError,
    MeltdownClient,
    NotFoundError,
    ValidationError,
)
from main import app
from models.advisory import LINK_SEVERED
from models.config import GameSettings


@pytest.fixture(autouse=True)
def setup_simulation_engine(monkeypatch):
    """Initialize the simulation engine before each test.

    The advisory service gets no API key, so spin requests never leave
    the process.
    """
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    initialize_simulation_engine(GameSettings(seed=1234))
    yield
    shutdown_simulation_engine()


@pytest.fixture
def client():
    """Create a MeltdownClient connected to the test app."""
    test_client = TestClient(app, raise_server_exceptions=False)

    class SyncTestTransport(httpx.BaseTransport):
        def handle_request(self, request: httpx.Request) -> httpx.Response:
            response = test_client.request(
                method=request.method,
                url=str(request.url.path),
                params=dict(request.url.params) if request.url.params else None,
                content=request.content,
                headers=dict(request.headers),
            )
            return httpx.Response(
                status_code=response.status_code,
                headers=response.headers,
                content=response.content,
            )

    with MeltdownClient(base_url="http://test", transport=SyncTestTransport()) as meltdown:
        yield meltdown


class TestRootEndpoints:
    def test_health(self, client):
        assert client.health().status == "healthy"

    def test_info(self, client):
        info = client.info()
        assert info.version == "0.1.0"
        assert info.docs_url == "/docs"


class TestSimulationLifecycle:
    def test_start_tick_stop(self, client):
        started = client.simulation.start()
        assert started.mode == "manual"

        ticked = client.simulation.tick(count=20)
        assert ticked.ticks_run == 20
        assert ticked.events[0]["title"] == "BROWNOUT"

        status = client.simulation.status()
        assert status.tick_count == 20
        assert status.is_game_over is False

        history = client.simulation.history()
        assert history.count == 1
        assert history.points[0].tick == 20

        stopped = client.simulation.stop()
        assert stopped.tick_count == 20

    def test_start_twice(self, client):
        client.simulation.start()
        with pytest.raises(ConflictError, match="already running"):
            client.simulation.start()

    def test_tick_without_start(self, client):
        with pytest.raises(ConflictError) as exc_info:
            client.simulation.tick()
        assert exc_info.value.error_type == "Simulation Not Running"

    def test_tick_count_validated(self, client):
        client.simulation.start()
        with pytest.raises(ValidationError) as exc_info:
            client.simulation.tick(count=0)
        assert exc_info.value.errors

    def test_restart(self, client):
        client.simulation.start()
        client.simulation.tick(count=5)

        restarted = client.simulation.restart(difficulty=4, auto_start=True)

        assert restarted.was_running is True
        assert restarted.is_running is True
        assert client.finance.get_state().operating_cash == 2000.0
        assert client.simulation.status().tick_count == 0

    def test_pause_resume(self, client):
        client.simulation.start()
        assert client.simulation.pause()["status"] == "paused"
        assert client.simulation.status().mode == "paused"
        assert client.simulation.resume()["status"] == "running"

    def test_snapshot(self, client):
        snapshot = client.simulation.snapshot()
        assert snapshot["state"]["calendar_date"] == "Jan 2000"
        assert snapshot["chapter"]["chapter_id"] == "vision"


class TestControls:
    def test_reactor_readout_follows_commands(self, client):
        client.controls.set_rods(30)
        client.controls.set_valve(70)
        client.controls.toggle_pump()

        reactor = client.controls.get_reactor()

        assert reactor.control_rod_insertion == 30.0
        assert reactor.steam_valve_opening == 70.0
        assert reactor.coolant_pump_on is False

    def test_scram(self, client):
        client.controls.set_rods(0)
        result = client.controls.scram()

        assert result.accepted is True
        assert result.event.title == "SCRAM"
        assert client.controls.get_reactor().control_rod_insertion == 100.0

    def test_rods_out_of_range(self, client):
        with pytest.raises(ValidationError):
            client.controls.set_rods(150)

    def test_purchases(self, client):
        assert client.controls.upgrade_pump().accepted is True
        assert client.controls.install_auto_scram().accepted is True

        # 5000 - 800 - 2500 - 1500
        refuel = client.controls.refuel()
        assert refuel.accepted is True
        assert client.finance.get_state().operating_cash == 200.0

        repair = client.controls.repair("turbine")
        assert repair.accepted is False
        assert repair.event.title == "INSUFFICIENT FUNDS"


class TestFinance:
    def test_fraud_flow(self, client):
        client.finance.cook_books()
        spe = client.finance.create_spe()

        assert spe.accepted is True
        books = client.finance.get_state()
        assert books.active_spe_count == 1
        assert books.audit_risk_percent == 22.0

        client.finance.shred()
        assert client.finance.get_state().audit_risk_percent == 0.0

    def test_money_movement(self, client):
        client.finance.borrow(3000)
        client.finance.siphon(8000)

        books = client.finance.get_state()
        assert books.outstanding_loan == 3000.0
        assert books.offshore_holdings == 8000.0
        assert books.operating_cash == 0.0

    def test_lobby(self, client):
        result = client.finance.lobby()
        assert result.event.title == "LOBBYISTS DEPLOYED"
        assert client.finance.get_state().lobbying_shield_ticks_remaining == 600


class TestEventsAndScenario:
    def test_events(self, client):
        client.finance.lobby()
        client.controls.scram()

        events = client.events.list()
        assert [e.title for e in events.events] == ["SCRAM", "LOBBYISTS DEPLOYED"]

        warnings = client.events.list(severity="warning", limit=1)
        assert [e.title for e in warnings.events] == ["SCRAM"]

    def test_scenario(self, client):
        assert client.scenario.summary()["chapter_count"] == 4
        assert client.scenario.prices()["auto_scram"] == 2500
        assert client.scenario.chapter(1)["chapter_id"] == "california"
        assert len(client.scenario.get()["events"]) == 9

    def test_missing_chapter(self, client):
        with pytest.raises(NotFoundError) as exc_info:
            client.scenario.chapter(10)
        assert exc_info.value.response_body["available_indices"] == [0, 1, 2, 3]


class TestAdvisory:
    def test_spin_falls_back_offline(self, client):
        result = client.advisory.spin("profit")

        assert result.source == "fallback"
        assert result.text == LINK_SEVERED
        assert client.advisory.current() == LINK_SEVERED

    def test_nothing_before_spin(self, client):
        assert client.advisory.current() is None
