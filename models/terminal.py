"""End-of-tick win and loss evaluation."""

import logging
from typing import Optional

from models.event import NotableEvent, Severity, SoundCue
from models.scenario import Scenario
from models.state import (
    FailureReason,
    ReactorStatus,
    SessionStatus,
    SimulationState,
)

logger = logging.getLogger(__name__)


def find_failure(state: SimulationState, scenario: Scenario) -> Optional[FailureReason]:
    """Return the first failure condition that holds, reactor checks first."""
    physics = scenario.physics
    if state.meltdown_progress >= 100.0:
        return FailureReason.CRITICAL_MASS
    if state.core_temperature >= physics.max_temperature:
        return FailureReason.CORE_BREACH
    if state.pressure >= physics.max_pressure:
        return FailureReason.VESSEL_RUPTURE
    if state.audit_risk_percent >= 100.0:
        return FailureReason.FRAUD_EXPOSED
    if state.ticks_insolvent >= scenario.economy.bankruptcy_grace_ticks:
        return FailureReason.BANKRUPTCY
    return None


def evaluate_terminal(state: SimulationState, scenario: Scenario) -> list[NotableEvent]:
    """End the session if a failure or the final victory condition holds.

    Args:
        state: State to mutate.
        scenario: Scenario supplying ceilings and the chapter ladder.

    Returns:
        The game-over or escape event, or nothing if play continues.
    """
    if state.is_game_over:
        return []

    reason = find_failure(state, scenario)
    if reason is not None:
        state.session_status = SessionStatus.FAILED
        state.failure_reason = reason
        if reason.is_reactor_failure:
            state.reactor_status = ReactorStatus.DESTROYED
        logger.info(f"Game over on tick {state.tick_count}: {reason.value}")
        return [
            NotableEvent.for_state(
                state, "GAME OVER", reason.value, Severity.DANGER, cue=SoundCue.ALARM
            )
        ]

    index = state.current_chapter_index
    if scenario.is_final_chapter(index) and scenario.chapter(index).is_won(state):
        state.session_status = SessionStatus.ESCAPED
        logger.info(
            f"Escaped on tick {state.tick_count} with "
            f"${state.offshore_holdings:,.0f} offshore"
        )
        return [
            NotableEvent.for_state(
                state,
                "ESCAPED",
                f"You made it out with ${state.offshore_holdings:,.0f} offshore.",
                Severity.INFO,
                cue=SoundCue.CASH,
            )
        ]
    return []
