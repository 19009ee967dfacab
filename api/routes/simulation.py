"""Simulation lifecycle control endpoints.

These endpoints manage the session lifecycle: starting, stopping,
restarting, pausing, manual ticking, and reading status, snapshots and
the score history.
"""

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from api.dependencies import SimulationEngineDep
from api.exceptions import SimulationNotRunningError

# Create router for simulation control endpoints
router = APIRouter(
    prefix="/simulation",
    tags=["simulation"],
)


# Request/Response Models


class StartSimulationRequest(BaseModel):
    """Request model for starting simulation.

    Attributes:
        auto_advance: Run a background loop that ticks at a fixed rate.
        tick_interval: Seconds between automatic ticks.
    """

    auto_advance: bool = Field(default=False)
    tick_interval: Optional[float] = Field(default=None, gt=0)


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
    tick_interval: Optional[float] = None


class StopSimulationResponse(BaseModel):
    """Response model for simulation stop.

    Attributes:
        simulation_id: Unique identifier for this session.
        status: Current simulation status.
        tick_count: Tick the session stopped at (None if wasn't running).
        session_status: running, failed or escaped (None if wasn't running).
        failure_reason: Why the session failed, if it did.
    """

    simulation_id: str
    status: str
    tick_count: Optional[int] = None
    session_status: Optional[str] = None
    failure_reason: Optional[str] = None


class RestartSimulationRequest(BaseModel):
    """Request model for restarting the session.

    Attributes:
        difficulty: Difficulty for the new session (defaults to current).
        seed: Seed for the new session (defaults to current).
        auto_start: Start the new session immediately.
        auto_advance: If auto-starting, run the background loop.
    """

    difficulty: Optional[int] = Field(default=None, ge=1, le=4)
    seed: Optional[int] = None
    auto_start: bool = False
    auto_advance: bool = False


class RestartSimulationResponse(BaseModel):
    """Response model for simulation restart."""

    simulation_id: str
    difficulty: int
    seed: Optional[int] = None
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
    failure_reason: Optional[str] = None
    reactor_status: str
    chapter_index: int
    stock_score: float


class TickRequest(BaseModel):
    """Request model for manual ticking."""

    count: int = Field(default=1, ge=1, le=10000)


class TickResponse(BaseModel):
    """Response model for manual ticking."""

    ticks_run: int
    tick_count: int
    is_game_over: bool
    events: list[dict[str, Any]]


class ScoreHistoryResponse(BaseModel):
    """Response model for the score history ring buffer."""

    points: list[dict[str, Any]]
    count: int


# Route Handlers


@router.post("/start", response_model=StartSimulationResponse)
async def start_simulation(request: StartSimulationRequest, engine: SimulationEngineDep):
    """Start the simulation.

    Args:
        request: Configuration for starting the simulation.
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        Simulation startup details.

    Raises:
        HTTPException: If simulation is already running or start fails.
    """
    try:
        result = engine.start(
            auto_advance=request.auto_advance,
            tick_interval=request.tick_interval,
        )
        return StartSimulationResponse(**result)
    except RuntimeError as e:
        # Simulation already running
        raise HTTPException(
            status_code=409,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail=str(e),
        )


@router.post("/stop", response_model=StopSimulationResponse)
async def stop_simulation(engine: SimulationEngineDep):
    """Stop the simulation, halting the background loop if any.

    Args:
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        Summary of the stopped session.
    """
    return StopSimulationResponse(**engine.stop())


@router.post("/restart", response_model=RestartSimulationResponse)
async def restart_simulation(request: RestartSimulationRequest, engine: SimulationEngineDep):
    """Discard the session and build a fresh one.

    Args:
        request: Difficulty, seed and whether to start right away.
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        Details of the new session.

    Raises:
        HTTPException: If the difficulty is unknown.
    """
    try:
        result = engine.restart(difficulty=request.difficulty, seed=request.seed)
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail=str(e),
        )

    if request.auto_start:
        engine.start(auto_advance=request.auto_advance)

    return RestartSimulationResponse(**result, is_running=engine.is_running)


@router.get("/status", response_model=SimulationStatusResponse)
async def get_simulation_status(engine: SimulationEngineDep):
    """Get the current session status.

    Args:
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        Lifecycle, terminal and headline fields.
    """
    state = engine.get_state()
    return SimulationStatusResponse(
        simulation_id=engine.simulation_id,
        is_running=engine.is_running,
        mode=engine.clock.mode.value,
        is_paused=engine.clock.is_paused,
        tick_count=state.tick_count,
        calendar_date=state.calendar_date,
        session_status=state.session_status.value,
        failure_reason=state.failure_reason.value if state.failure_reason else None,
        reactor_status=state.reactor_status.value,
        chapter_index=state.current_chapter_index,
        stock_score=state.stock_score,
    )


@router.get("/snapshot")
async def get_snapshot(engine: SimulationEngineDep) -> dict[str, Any]:
    """Get the full snapshot presentation adapters render from.

    Args:
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        State, session metadata, chapter, recent events and score history.
    """
    return engine.get_snapshot()


@router.get("/history", response_model=ScoreHistoryResponse)
async def get_score_history(engine: SimulationEngineDep):
    """Get the score history, oldest sample first.

    Args:
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        The sampled score points.
    """
    points = engine.get_score_history()
    return ScoreHistoryResponse(points=points, count=len(points))


@router.post("/tick", response_model=TickResponse)
async def tick_simulation(request: TickRequest, engine: SimulationEngineDep):
    """Run one or more ticks manually.

    Stops early if the session ends.

    Args:
        request: Number of ticks to run.
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        Ticks run, the resulting tick count and the events emitted.

    Raises:
        SimulationNotRunningError: If the session has not been started.
    """
    if not engine.is_running:
        raise SimulationNotRunningError("Cannot tick: simulation is not running")

    return TickResponse(**engine.advance(ticks=request.count))


@router.post("/pause")
async def pause_simulation(engine: SimulationEngineDep) -> dict[str, Any]:
    """Pause automatic ticking.

    Raises:
        SimulationNotRunningError: If the session has not been started.
    """
    if not engine.is_running:
        raise SimulationNotRunningError("Cannot pause: simulation is not running")

    engine.pause()
    return {"status": "paused", "tick_count": engine.get_state().tick_count}


@router.post("/resume")
async def resume_simulation(engine: SimulationEngineDep) -> dict[str, Any]:
    """Resume automatic ticking.

    Raises:
        SimulationNotRunningError: If the session has not been started.
    """
    if not engine.is_running:
        raise SimulationNotRunningError("Cannot resume: simulation is not running")

    engine.resume()
    return {"status": "running", "tick_count": engine.get_state().tick_count}
