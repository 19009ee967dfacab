"""Simulation lifecycle sub-client.

Wraps the /simulation/* endpoints. This is an internal module; import from
`client` instead.
"""

from typing import Any

from pydantic import BaseModel, Field

from client._base import BaseClient


# Response models for simulation endpoints


class StartSimulationResponse(BaseModel):
    """Response model for simulation start.

    Attributes:
        simulation_id: Unique identifier for this session.
        status: Current simulation status.
        mode: manual or auto_advance.
        tick_count: Tick the session started at.
        calendar_date: In-game calendar label.
        tick_interval: Seconds between ticks (if auto-advance enabled).
    """

    simulation_id: str
    status: str
    mode: str
    tick_count: int
    calendar_date: str
    tick_interval: float | None = None


class StopSimulationResponse(BaseModel):
    """Response model for simulation stop."""

    simulation_id: str
    status: str
    tick_count: int | None = None
    session_status: str | None = None
    failure_reason: str | None = None


class RestartSimulationResponse(BaseModel):
    """Response model for simulation restart."""

    simulation_id: str
    difficulty: int
    seed: int | None = None
    was_running: bool
    is_running: bool


class SimulationStatusResponse(BaseModel):
    """Response model for simulation status.

    Attributes:
        simulation_id: Unique identifier for this session.
        is_running: Whether the session has been started.
        mode: paused, manual or auto_advance.
        is_paused: Whether automatic ticking is paused.
        tick_count: Ticks executed so far.
        calendar_date: In-game calendar label.
        session_status: running, failed or escaped.
        failure_reason: Why the session failed, if it did.
        reactor_status: running, melting or destroyed.
        chapter_index: Active chapter index.
        stock_score: Current stock score.
    """

    simulation_id: str
    is_running: bool
    mode: str
    is_paused: bool
    tick_count: int
    calendar_date: str
    session_status: str
    failure_reason: str | None = None
    reactor_status: str
    chapter_index: int
    stock_score: float

    @property
    def is_game_over(self) -> bool:
        return self.session_status != "running"


class TickResponse(BaseModel):
    """Response model for manual ticking."""

    ticks_run: int
    tick_count: int
    is_game_over: bool
    events: list[dict[str, Any]] = Field(default_factory=list)


class ScorePointResponse(BaseModel):
    """One score history sample."""

    tick: int
    timestamp: str
    stock_score: float
    calendar_date: str


class ScoreHistoryResponse(BaseModel):
    """Response model for the score history."""

    points: list[ScorePointResponse]
    count: int


class SimulationClient(BaseClient):
    """Sub-client for the session lifecycle.

    Example:
        client.simulation.start()
        client.simulation.tick(count=20)
        status = client.simulation.status()
    """

    def start(
        self, auto_advance: bool = False, tick_interval: float | None = None
    ) -> StartSimulationResponse:
        """Start the session.

        Args:
            auto_advance: Run the server-side loop at a fixed rate.
            tick_interval: Seconds between automatic ticks.

        Raises:
            ConflictError: If the session is already running.
        """
        payload: dict[str, Any] = {"auto_advance": auto_advance}
        if tick_interval is not None:
            payload["tick_interval"] = tick_interval
        return self._post_model(StartSimulationResponse, "/simulation/start", json=payload)

    def stop(self) -> StopSimulationResponse:
        return self._post_model(StopSimulationResponse, "/simulation/stop")

    def restart(
        self,
        difficulty: int | None = None,
        seed: int | None = None,
        auto_start: bool = False,
        auto_advance: bool = False,
    ) -> RestartSimulationResponse:
        """Discard the session and build a fresh one.

        Args:
            difficulty: Difficulty for the new session (1-4).
            seed: Seed for the new session.
            auto_start: Start the new session right away.
            auto_advance: If auto-starting, run the server-side loop.
        """
        payload = {
            "difficulty": difficulty,
            "seed": seed,
            "auto_start": auto_start,
            "auto_advance": auto_advance,
        }
        return self._post_model(RestartSimulationResponse, "/simulation/restart", json=payload)

    def status(self) -> SimulationStatusResponse:
        return self._get_model(SimulationStatusResponse, "/simulation/status")

    def snapshot(self) -> dict[str, Any]:
        """Get the full snapshot as a plain dict."""
        return self._get("/simulation/snapshot")

    def history(self) -> ScoreHistoryResponse:
        return self._get_model(ScoreHistoryResponse, "/simulation/history")

    def tick(self, count: int = 1) -> TickResponse:
        """Run ticks manually.

        Raises:
            ConflictError: If the session has not been started.
        """
        return self._post_model(TickResponse, "/simulation/tick", json={"count": count})

    def pause(self) -> dict[str, Any]:
        return self._post("/simulation/pause")

    def resume(self) -> dict[str, Any]:
        return self._post("/simulation/resume")
