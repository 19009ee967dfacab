"""Simulation orchestration models.

This module contains the SimulationEngine and SimulationLoop classes. The
engine owns the single SimulationState record and is the only thing that
mutates it, either through a tick or through a command. The loop is a thin
threading shell that calls back into the engine at a fixed rate.
"""

import logging
import threading
import time
import uuid
from typing import TYPE_CHECKING, Any, Callable, Optional

from pydantic import BaseModel, Field

from models.commands import CommandProcessor, CommandResult
from models.economy import (
    advance_chapter,
    check_spe_triggers,
    decay_lobbying,
    update_financials,
    update_insolvency,
)
from models.event import NotableEvent, Severity
from models.event_log import EventLog
from models.history import ScoreHistory, ScorePoint
from models.physics import (
    check_auto_scram,
    update_grid,
    update_meltdown,
    update_neutronics,
    update_thermal,
)
from models.randomness import RandomSource
from models.scenario import Scenario, load_default_scenario
from models.state import SimulationState
from models.terminal import evaluate_terminal
from models.time import TickClock
from models.timeline import advance_clock

if TYPE_CHECKING:
    from models.advisory import AdvisoryResult, AdvisoryService, SpinTopic
    from models.config import GameSettings

logger = logging.getLogger(__name__)

EventListener = Callable[[NotableEvent], None]


class SimulationEngine(BaseModel):
    """Main orchestrator for a Meltdown Manager session.

    Advances the reactor, grid and fraud economy one fixed timestep at a
    time and applies player commands in between. Delegates automatic
    ticking to SimulationLoop.

    Responsibilities:
    - Lifecycle management (start, stop, restart)
    - The ordered per-tick update
    - Command dispatch with a single writer lock
    - Event log, score history and listener notification
    - Read-only state access through deep copies and snapshots

    Attributes:
        scenario: Immutable content and constants for the session.
        difficulty: Difficulty level the session started at (1-4).
        seed: Seed for the randomness source. None seeds from the OS.
        simulation_id: Unique identifier for this session.
        is_running: Whether the session has been started.
        clock: Wall-clock pacing state.
        event_log: Most recent notable events.
        score_history: Ring buffer of score samples for the chart.
        history_sample_ticks: Ticks between score samples.
        advisory_text: Latest display-only advisory text.
    """

    scenario: Scenario = Field(default_factory=load_default_scenario)
    difficulty: int = Field(default=1, ge=1, le=4)
    seed: Optional[int] = None
    simulation_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    is_running: bool = False
    clock: TickClock = Field(default_factory=TickClock)
    event_log: EventLog = Field(default_factory=EventLog)
    score_history: ScoreHistory = Field(default_factory=ScoreHistory)
    history_sample_ticks: int = Field(default=20, gt=0)
    advisory_text: Optional[str] = None

    class Config:
        arbitrary_types_allowed = True

    def __init__(self, **data):
        """Initialize with private attributes."""
        super().__init__(**data)
        self._loop: Optional[SimulationLoop] = None
        self._operation_lock = threading.Lock()
        self._rng = RandomSource(self.seed)
        self._commands = CommandProcessor(scenario=self.scenario, rng=self._rng)
        self._state = SimulationState.create_initial(self.scenario, self.difficulty)
        self._listeners: list[EventListener] = []

    @classmethod
    def from_settings(
        cls, settings: "GameSettings", scenario: Optional[Scenario] = None
    ) -> "SimulationEngine":
        """Build an engine configured from runtime settings.

        Args:
            settings: Loaded runtime settings.
            scenario: Scenario to play. Defaults to the stock campaign.

        Returns:
            A new, stopped engine.
        """
        return cls(
            scenario=scenario or load_default_scenario(),
            difficulty=settings.difficulty,
            seed=settings.seed,
            clock=TickClock(tick_interval=settings.tick_interval),
            event_log=EventLog(max_size=settings.event_log_size),
            score_history=ScoreHistory(max_size=settings.history_size),
            history_sample_ticks=settings.history_sample_ticks,
        )

    # ===== Lifecycle Methods =====

    def start(self, auto_advance: bool = False, tick_interval: Optional[float] = None) -> dict:
        """Start the session.

        If auto_advance is True, creates and starts a SimulationLoop.
        Otherwise ticks only happen through advance().

        Args:
            auto_advance: Whether to start the background loop.
            tick_interval: Seconds between automatic ticks. Defaults to the
                clock's current interval.

        Returns:
            Status dict with simulation_id, mode, tick_count and calendar_date.

        Raises:
            RuntimeError: If the session is already running.
            ValueError: If tick_interval is not positive.
        """
        if self.is_running:
            raise RuntimeError("Simulation is already running")
        if tick_interval is not None:
            if tick_interval <= 0:
                raise ValueError(f"Tick interval must be positive, got {tick_interval}")
            self.clock.tick_interval = tick_interval

        self.is_running = True

        if auto_advance:
            self.clock.auto_advance = True
            self._loop = SimulationLoop(engine=self, tick_interval=self.clock.tick_interval)
            self._loop.start()
            mode = "auto_advance"
        else:
            mode = "manual"

        logger.info(
            f"Simulation {self.simulation_id} started in {mode} mode "
            f"at tick {self._state.tick_count} ({self._state.calendar_date})"
        )

        return {
            "simulation_id": self.simulation_id,
            "status": "running",
            "mode": mode,
            "tick_count": self._state.tick_count,
            "calendar_date": self._state.calendar_date,
            "tick_interval": self.clock.tick_interval if auto_advance else None,
        }

    def stop(self) -> dict:
        """Stop the session, halting the loop if one is running.

        Returns:
            Summary dict with the final tick, session status and failure reason.
        """
        if not self.is_running:
            logger.warning("stop() called but simulation is not running")
            return {
                "simulation_id": self.simulation_id,
                "status": "stopped",
                "tick_count": None,
                "session_status": None,
                "failure_reason": None,
            }

        if self._loop and self._loop.is_running:
            self._loop.stop()
            self._loop = None

        self.is_running = False
        self.clock.auto_advance = False

        state = self._state
        logger.info(
            f"Simulation {self.simulation_id} stopped at tick {state.tick_count} "
            f"({state.session_status.value})"
        )

        return {
            "simulation_id": self.simulation_id,
            "status": "stopped",
            "tick_count": state.tick_count,
            "session_status": state.session_status.value,
            "failure_reason": state.failure_reason.value if state.failure_reason else None,
        }

    def restart(self, difficulty: Optional[int] = None, seed: Optional[int] = None) -> dict:
        """Discard the current session and build a fresh one.

        Stops the session if running. The new session is not started.

        Args:
            difficulty: Difficulty for the new session. Defaults to the current one.
            seed: Seed for the new session. Defaults to the current seed.

        Returns:
            Dict with the new simulation_id, difficulty and whether the old
            session was running.

        Raises:
            ValueError: If the scenario has no profile for the difficulty.
        """
        was_running = self.is_running
        if self.is_running:
            self.stop()

        new_difficulty = difficulty if difficulty is not None else self.difficulty
        new_state = SimulationState.create_initial(self.scenario, new_difficulty)

        with self._operation_lock:
            self.difficulty = new_difficulty
            if seed is not None:
                self.seed = seed
            self._rng.reseed(self.seed)
            self._state = new_state
            self.simulation_id = str(uuid.uuid4())
            self.clock.reset()
            self.event_log.clear()
            self.score_history.clear()
            self.advisory_text = None

        logger.info(
            f"Simulation restarted as {self.simulation_id} at difficulty {new_difficulty}"
        )

        return {
            "simulation_id": self.simulation_id,
            "difficulty": new_difficulty,
            "seed": self.seed,
            "was_running": was_running,
        }

    def pause(self) -> None:
        """Pause automatic ticking. The loop idles but stays alive."""
        self.clock.pause()
        logger.info(f"Simulation {self.simulation_id} paused")

    def resume(self) -> None:
        self.clock.resume()
        logger.info(f"Simulation {self.simulation_id} resumed")

    # ===== Tick =====

    def tick(self) -> list[NotableEvent]:
        """Advance the session by one fixed timestep.

        Called by SimulationLoop in auto-advance mode and by advance() in
        manual mode. A no-op once the session is over.

        Returns:
            Notable events emitted during the tick.
        """
        with self._operation_lock:
            events = self._run_tick()
            self.event_log.extend(events)

        self._dispatch(events)
        return events

    def advance(self, ticks: int = 1) -> dict:
        """Manually run a number of ticks.

        Args:
            ticks: Number of ticks to run (must be positive).

        Returns:
            Dict with ticks_run, tick_count, is_game_over and the events emitted.

        Raises:
            ValueError: If ticks <= 0 or the session is not running.
        """
        if not self.is_running:
            raise ValueError("Cannot advance: simulation is not running")
        if ticks <= 0:
            raise ValueError(f"Tick count must be positive, got {ticks}")

        emitted: list[NotableEvent] = []
        ticks_run = 0
        for _ in range(ticks):
            if self._state.is_game_over:
                break
            emitted.extend(self.tick())
            ticks_run += 1

        logger.debug(f"Advanced {ticks_run} ticks, {len(emitted)} events")

        return {
            "ticks_run": ticks_run,
            "tick_count": self._state.tick_count,
            "is_game_over": self._state.is_game_over,
            "events": [event.to_dict() for event in emitted],
        }

    def _run_tick(self) -> list[NotableEvent]:
        """Apply the ordered update steps. Caller must hold the lock."""
        state = self._state
        if state.is_game_over:
            return []

        physics = self.scenario.physics
        economy = self.scenario.economy
        events: list[NotableEvent] = []

        events.extend(advance_clock(state, self.scenario))

        update_neutronics(state, physics)
        release = update_thermal(state, physics, self._rng)
        events.extend(check_auto_scram(state, physics))

        chapter = self.scenario.chapter(state.current_chapter_index)
        events.extend(update_grid(state, physics, chapter, release, self._rng))
        events.extend(update_meltdown(state, physics))

        update_financials(state, self.scenario, chapter)
        events.extend(advance_chapter(state, self.scenario))
        decay_lobbying(state, economy)
        events.extend(check_spe_triggers(state, economy))
        update_insolvency(state)

        state.tick_count += 1
        state.clamp_bounds(physics)
        events.extend(evaluate_terminal(state, self.scenario))

        self.clock.record_tick()
        if self.clock.ticks_executed % self.history_sample_ticks == 0:
            self._record_score()

        if events:
            logger.debug(f"Tick {state.tick_count}: {len(events)} events")
        return events

    # ===== Score History =====

    def _record_score(self) -> None:
        state = self._state
        self.score_history.record(
            ScorePoint(
                tick=state.tick_count,
                stock_score=state.stock_score,
                calendar_date=state.calendar_date,
            )
        )

    def sample_score_history(self) -> ScorePoint:
        """Record a score sample immediately, outside the regular cadence."""
        with self._operation_lock:
            self._record_score()
            return self.score_history.latest

    # ===== Commands =====

    def _execute(self, command: Callable[..., CommandResult], *args: Any) -> CommandResult:
        with self._operation_lock:
            result = command(self._state, *args)
            if result.event is not None:
                self.event_log.append(result.event)

        if result.event is not None:
            self._dispatch([result.event])
        return result

    def set_control_rod(self, percent: float) -> CommandResult:
        return self._execute(self._commands.set_control_rod, percent)

    def set_steam_valve(self, percent: float) -> CommandResult:
        return self._execute(self._commands.set_steam_valve, percent)

    def toggle_pump(self) -> CommandResult:
        return self._execute(self._commands.toggle_pump)

    def scram(self) -> CommandResult:
        return self._execute(self._commands.scram)

    def repair_component(self, component: str) -> CommandResult:
        return self._execute(self._commands.repair_component, component)

    def refuel(self) -> CommandResult:
        return self._execute(self._commands.refuel)

    def upgrade_pump(self) -> CommandResult:
        return self._execute(self._commands.upgrade_pump)

    def install_auto_scram(self) -> CommandResult:
        return self._execute(self._commands.install_auto_scram)

    def create_spe(self) -> CommandResult:
        return self._execute(self._commands.create_spe)

    def lobby(self) -> CommandResult:
        return self._execute(self._commands.lobby)

    def cook_books(self) -> CommandResult:
        return self._execute(self._commands.cook_books)

    def shred_documents(self) -> CommandResult:
        return self._execute(self._commands.shred_documents)

    def siphon_to_offshore(self, amount: float) -> CommandResult:
        return self._execute(self._commands.siphon_to_offshore, amount)

    def borrow(self, amount: float) -> CommandResult:
        return self._execute(self._commands.borrow, amount)

    # ===== Listeners =====

    def add_listener(self, listener: EventListener) -> None:
        """Register a callback invoked once per notable event."""
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        """Unregister a callback.

        Raises:
            ValueError: If the listener was never registered.
        """
        self._listeners.remove(listener)

    def _dispatch(self, events: list[NotableEvent]) -> None:
        """Notify listeners outside the lock so they may read snapshots."""
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception as e:
                    logger.error(f"Event listener failed on '{event.title}': {e}", exc_info=True)

    # ===== Advisory Text =====

    def set_advisory_text(self, text: Optional[str]) -> None:
        with self._operation_lock:
            self.advisory_text = text

    def request_advisory(
        self, service: "AdvisoryService", topic: "SpinTopic"
    ) -> "AdvisoryResult":
        """Generate advisory text for the current situation.

        The state is copied under the lock; the remote call happens without
        it. Only the display-only advisory_text field is written back.

        Args:
            service: Advisory text generator.
            topic: What the advisory should spin.

        Returns:
            The generated (or fallback) advisory text.
        """
        state = self.get_state()
        result = service.generate(topic, state)
        self.set_advisory_text(result.text)
        return result

    # ===== State Access =====

    def get_state(self) -> SimulationState:
        """Get a deep copy of the current state.

        Mutating the copy has no effect on the session.
        """
        with self._operation_lock:
            return self._state.model_copy(deep=True)

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    def get_recent_events(
        self, limit: Optional[int] = None, severity: Optional[Severity] = None
    ) -> list[NotableEvent]:
        """Get retained notable events, newest first."""
        with self._operation_lock:
            return [
                event.model_copy()
                for event in self.event_log.recent(limit=limit, severity=severity)
            ]

    def get_score_history(self) -> list[dict]:
        with self._operation_lock:
            return self.score_history.to_list()

    def get_snapshot(self) -> dict:
        """Get a complete JSON-friendly snapshot for presentation adapters.

        Includes:
        - The full state plus derived fields
        - Session metadata (id, is_running, mode)
        - The active chapter
        - Recent notable events and the score history

        Returns:
            Serializable dict snapshot.
        """
        with self._operation_lock:
            state = self._state
            chapter = self.scenario.chapter(state.current_chapter_index)
            return {
                "simulation_id": self.simulation_id,
                "is_running": self.is_running,
                "mode": self.clock.mode.value,
                "clock": self.clock.to_dict(),
                "scenario_version": self.scenario.version,
                "state": state.get_snapshot(),
                "chapter": {
                    "index": state.current_chapter_index,
                    "chapter_id": chapter.chapter_id,
                    "title": chapter.title,
                    "is_final": self.scenario.is_final_chapter(state.current_chapter_index),
                },
                "recent_events": [event.to_dict() for event in self.event_log.recent()],
                "score_history": self.score_history.to_list(),
                "advisory_text": self.advisory_text,
            }


class SimulationLoop:
    """Threading component for auto-advance mode.

    Runs a fixed-rate loop on a dedicated daemon thread, calling back to
    SimulationEngine.tick() once per interval. Deadlines are measured on
    the monotonic clock so slow ticks do not accumulate drift.

    Does NOT contain simulation logic; all work is delegated to
    SimulationEngine.tick(), which also samples the score history.

    Attributes:
        engine: Parent SimulationEngine to call back to.
        tick_interval: Seconds between ticks (default 50ms).
        is_running: Whether loop thread is active.
    """

    def __init__(self, engine: SimulationEngine, tick_interval: float = 0.05) -> None:
        """Initialize simulation loop.

        Args:
            engine: Parent SimulationEngine to call back to.
            tick_interval: Seconds between ticks (default 50ms).
        """
        self.engine = engine
        self.tick_interval = tick_interval

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.is_running = False

    def start(self) -> None:
        """Start the simulation loop thread.

        Raises:
            RuntimeError: If loop is already running.
        """
        if self.is_running:
            raise RuntimeError("Simulation loop is already running")

        self.is_running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, daemon=True)
        self._thread.start()

        logger.info(f"SimulationLoop started at {1.0 / self.tick_interval:.0f} ticks/s")

    def stop(self) -> None:
        """Stop the simulation loop gracefully.

        Sets stop event, waits for thread to finish current tick.
        """
        if not self.is_running:
            return

        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=1.0)

        self.is_running = False
        self._thread = None

        logger.info("SimulationLoop stopped")

    def _run_loop(self) -> None:
        """Main loop that runs on dedicated thread.

        Each iteration ticks the engine unless paused, then waits until the
        next deadline or until stop is requested.
        """
        next_deadline = time.monotonic()
        while not self._stop_event.is_set():
            if not self.engine.clock.is_paused:
                try:
                    self.engine.tick()
                except Exception as e:
                    # Log but don't crash thread
                    logger.error(f"Error during simulation tick: {e}", exc_info=True)

            next_deadline += self.tick_interval
            delay = next_deadline - time.monotonic()
            if delay < 0:
                # Fell behind; resynchronize instead of bursting
                next_deadline = time.monotonic()
                delay = 0.0
            self._stop_event.wait(delay)
