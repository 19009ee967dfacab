"""Financial, chapter, lobbying and SPE update steps of the tick."""

import logging

from models.event import NotableEvent, Severity, SoundCue
from models.physics import effective_demand
from models.scenario import Chapter, EconomyConstants, Scenario
from models.state import SimulationState

logger = logging.getLogger(__name__)


def passive_audit_creep(state: SimulationState, scenario: Scenario) -> float:
    """Audit risk gained per tick from simply existing.

    Grows with the difficulty's multiplier and with every active SPE. A level
    outside the scenario's profiles uses the nearest one.
    """
    economy = scenario.economy
    levels = [int(p.level) for p in scenario.difficulties]
    level = min(max(state.difficulty_level, min(levels)), max(levels))
    profile = scenario.difficulty(level)
    return (
        economy.base_audit_creep * profile.audit_creep_multiplier
        + state.active_spe_count * economy.audit_creep_per_spe
    )


def update_financials(
    state: SimulationState, scenario: Scenario, chapter: Chapter
) -> None:
    """Sell power, accrue audit risk and reprice the stock.

    Args:
        state: State to mutate.
        scenario: Scenario supplying the economy constants.
        chapter: Active chapter, for revenue rate and demand scale.
    """
    economy = scenario.economy
    physics = scenario.physics

    power_sold = min(state.electrical_power_output, effective_demand(state, chapter))
    state.operating_cash += power_sold * chapter.revenue_rate

    if not state.is_lobbying_shield_active:
        state.audit_risk_percent = min(
            100.0, state.audit_risk_percent + passive_audit_creep(state, scenario)
        )

    instability = abs(physics.nominal_frequency - state.grid_frequency_hz)
    state.stock_score = max(
        0.0,
        state.stock_score
        + power_sold * economy.revenue_score_weight
        - instability * economy.stability_score_weight
        - state.audit_risk_percent * economy.audit_score_weight,
    )


def update_insolvency(state: SimulationState) -> None:
    """Count consecutive ticks spent at a stock score of zero.

    Runs after SPE collapses so a collapse that wipes out the score counts
    on the same tick.
    """
    if state.stock_score <= 0:
        state.ticks_insolvent += 1
    else:
        state.ticks_insolvent = 0


def advance_chapter(state: SimulationState, scenario: Scenario) -> list[NotableEvent]:
    """Move to the next chapter once the active one is won.

    The final chapter never advances; winning it ends the session instead.
    """
    index = state.current_chapter_index
    if scenario.is_final_chapter(index):
        return []

    chapter = scenario.chapter(index)
    if not chapter.is_won(state):
        return []

    state.current_chapter_index = index + 1
    upcoming = scenario.chapter(state.current_chapter_index)
    logger.info(
        f"Chapter '{chapter.title}' complete on tick {state.tick_count}, "
        f"advancing to '{upcoming.title}'"
    )
    return [
        NotableEvent.for_state(
            state,
            "CHAPTER COMPLETE",
            f"{chapter.title} complete. Next: {upcoming.title}.",
            Severity.INFO,
            cue=SoundCue.BUILD,
        )
    ]


def decay_lobbying(state: SimulationState, economy: EconomyConstants) -> None:
    """Count the lobbying shield down, shaving audit risk as it goes."""
    if not state.is_lobbying_shield_active:
        return

    state.lobbying_shield_ticks_remaining -= 1
    if state.lobbying_shield_ticks_remaining % economy.lobby_decay_interval == 0:
        state.audit_risk_percent = max(
            0.0, state.audit_risk_percent - economy.lobby_decay_relief
        )


def check_spe_triggers(
    state: SimulationState, economy: EconomyConstants
) -> list[NotableEvent]:
    """Collapse every active SPE whose trigger price exceeds the score.

    Each collapse lowers the score, so one collapse can pull the next
    entity under within the same pass.
    """
    events: list[NotableEvent] = []
    for spe in state.special_purpose_entities:
        if not spe.is_active or spe.trigger_stock_price <= state.stock_score:
            continue

        spe.collapse()
        state.outstanding_loan += spe.hidden_debt_amount
        state.stock_score = max(
            0.0, state.stock_score - spe.hidden_debt_amount / economy.spe_collapse_divisor
        )
        state.credit_score = max(0.0, state.credit_score - economy.spe_credit_penalty)

        logger.warning(
            f"SPE {spe.name} collapsed on tick {state.tick_count}: "
            f"${spe.hidden_debt_amount:,.0f} back on the books"
        )
        events.append(
            NotableEvent.for_state(
                state,
                "SPE COLLAPSE",
                f"{spe.name} collapsed. ${spe.hidden_debt_amount:,.0f} of hidden debt "
                "is now on the balance sheet.",
                Severity.DANGER,
            )
        )
    return events
