"""Reactor and grid update steps of the tick.

Each step mutates the SimulationState in place using the coefficients in
PhysicsConstants and returns whatever notable events it raised. Steps never
raise; every division has a guarded denominator.
"""

import logging

from models.event import NotableEvent, Severity, SoundCue
from models.randomness import RandomSource
from models.scenario import Chapter, PhysicsConstants
from models.state import ReactorStatus, SimulationState

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def pump_capacity(pump_level: int, physics: PhysicsConstants) -> float:
    """Flow multiplier delivered by a pump of the given upgrade level."""
    return 1.0 + (pump_level - 1) * physics.pump_capacity_step


def effective_demand(state: SimulationState, chapter: Chapter) -> float:
    """Grid demand after the chapter scale and weather modifier."""
    return state.grid_demand * chapter.demand_scale * state.weather_demand_modifier


def update_neutronics(state: SimulationState, physics: PhysicsConstants) -> None:
    """Recompute net reactivity, then evolve the xenon poison inventory.

    Reactivity reads the xenon level from before this tick's update.
    """
    fuel_factor = min(1.0, state.fuel_remaining / physics.fuel_factor_divisor)
    reactivity = (
        (1.0 - state.control_rod_insertion / 100.0) * fuel_factor
        - state.xenon_poison_level * physics.xenon_reactivity_coefficient
        - (state.core_temperature - physics.reference_temperature)
        * physics.temperature_reactivity_coefficient
    )
    state.net_reactivity = _clamp(reactivity, -1.0, 1.0)

    power = state.electrical_power_output
    xenon = state.xenon_poison_level
    xenon += (
        physics.xenon_production_rate * power
        - physics.xenon_burn_rate * xenon * power
        - physics.xenon_decay_rate * xenon
    )
    state.xenon_poison_level = _clamp(xenon, 0.0, 100.0)


def update_thermal(
    state: SimulationState, physics: PhysicsConstants, rng: RandomSource
) -> float:
    """Advance coolant flow, core temperature, pressure and fuel.

    Args:
        state: State to mutate.
        physics: Model coefficients.
        rng: Source of the thermal noise term.

    Returns:
        Steam released through the valve this tick, computed from the
        pressure before the update. The turbine step consumes it.
    """
    efficiency = (
        (1.0 if state.coolant_pump_on else 0.0)
        * state.pump_health
        / 100.0
        * pump_capacity(state.pump_level, physics)
    )
    state.coolant_flow_rate = (
        physics.flow_inertia * state.coolant_flow_rate
        + (1.0 - physics.flow_inertia) * efficiency * 100.0
    )

    temperature = state.core_temperature
    weather_modifier = state.weather_temperature_modifier or 1.0
    heat = (
        max(0.0, state.net_reactivity) * physics.heat_coefficient
        + state.electrical_power_output * physics.residual_heat_fraction
    )
    ambient_loss = (
        (temperature - physics.ambient_temperature)
        * physics.ambient_loss_coefficient
        / weather_modifier
    )
    convection = (
        (temperature - physics.coolant_inlet_temperature)
        * physics.convection_coefficient
        * (state.coolant_flow_rate / 100.0)
        * (state.condenser_health / 100.0)
    )
    noise = rng.noise(physics.noise_amplitude)
    state.core_temperature = max(
        physics.min_temperature, temperature + heat - ambient_loss - convection + noise
    )

    previous_pressure = state.pressure
    build = max(
        0.0,
        (state.core_temperature - physics.pressure_build_threshold)
        * physics.pressure_build_coefficient,
    )
    release = (
        (state.steam_valve_opening / 100.0)
        * previous_pressure
        * physics.pressure_release_coefficient
    )
    state.pressure = max(0.0, previous_pressure + build - release)

    state.fuel_remaining = max(
        0.0, state.fuel_remaining - state.electrical_power_output * physics.fuel_burn_rate
    )
    return release


def check_auto_scram(
    state: SimulationState, physics: PhysicsConstants
) -> list[NotableEvent]:
    """Drive the rods home if the auto-scram is installed and tripped."""
    if not state.has_auto_scram:
        return []
    if state.core_temperature <= physics.auto_scram_temperature:
        return []
    if state.control_rod_insertion >= 100.0:
        return []

    state.control_rod_insertion = 100.0
    logger.info(
        f"Auto-scram tripped at {state.core_temperature:.0f}C on tick {state.tick_count}"
    )
    return [
        NotableEvent.for_state(
            state,
            "AUTO-SCRAM ENGAGED",
            "Core temperature exceeded the trip point. Control rods fully inserted.",
            Severity.DANGER,
        )
    ]


def update_grid(
    state: SimulationState,
    physics: PhysicsConstants,
    chapter: Chapter,
    release: float,
    rng: RandomSource,
) -> list[NotableEvent]:
    """Couple the turbine to the grid and apply component wear.

    Args:
        state: State to mutate.
        physics: Model coefficients.
        chapter: Active chapter, for demand scale and brownout premium.
        release: Steam released this tick.
        rng: Source of the overspeed warning roll.

    Returns:
        Brownout, recovery and overspeed events.
    """
    events: list[NotableEvent] = []

    driven = release * physics.turbine_torque * state.turbine_health / 100.0
    power = (
        physics.power_inertia * state.electrical_power_output
        + (1.0 - physics.power_inertia) * driven
    )
    state.electrical_power_output = _clamp(power, 0.0, physics.max_power_output)

    demand = effective_demand(state, chapter)
    if demand > 0:
        target_hz = physics.nominal_frequency * state.electrical_power_output / demand
    else:
        target_hz = physics.nominal_frequency
    state.grid_frequency_hz = (
        physics.frequency_inertia * state.grid_frequency_hz
        + (1.0 - physics.frequency_inertia) * target_hz
    )

    was_browned_out = state.brownout_active
    state.brownout_active = state.grid_frequency_hz < physics.brownout_frequency
    if state.brownout_active and not was_browned_out:
        state.political_capital = max(
            0.0, state.political_capital - physics.brownout_political_penalty
        )
        logger.info(
            f"Brownout started at {state.grid_frequency_hz:.1f}Hz on tick {state.tick_count}"
        )
        events.append(
            NotableEvent.for_state(
                state,
                "BROWNOUT",
                f"Grid frequency fell to {state.grid_frequency_hz:.1f}Hz.",
                Severity.WARNING,
            )
        )
    elif was_browned_out and not state.brownout_active:
        logger.info(f"Brownout cleared on tick {state.tick_count}")
        events.append(
            NotableEvent.for_state(
                state,
                "GRID RESTORED",
                "Frequency is back within tolerance.",
                Severity.INFO,
                cue=SoundCue.CLICK,
            )
        )

    if state.brownout_active and chapter.brownout_premium > 0:
        state.operating_cash += chapter.brownout_premium

    if state.grid_frequency_hz > physics.overspeed_frequency:
        state.turbine_health = max(0.0, state.turbine_health - physics.overspeed_wear)
        if rng.chance(physics.overspeed_warning_chance):
            events.append(
                NotableEvent.for_state(
                    state,
                    "TURBINE OVERSPEED WARNING",
                    f"Grid at {state.grid_frequency_hz:.1f}Hz. Turbine blades are suffering.",
                    Severity.WARNING,
                )
            )

    if state.electrical_power_output > physics.high_output_threshold:
        state.pump_health = max(0.0, state.pump_health - physics.high_output_wear)
        state.condenser_health = max(0.0, state.condenser_health - physics.high_output_wear)
    if state.core_temperature > physics.high_temperature_threshold:
        state.condenser_health = max(
            0.0, state.condenser_health - physics.high_temperature_condenser_wear
        )

    return events


def update_meltdown(
    state: SimulationState, physics: PhysicsConstants
) -> list[NotableEvent]:
    """Accumulate or relax meltdown progress and update radiation.

    Moves the reactor between RUNNING and MELTING as progress leaves and
    returns to zero.
    """
    events: list[NotableEvent] = []

    overheated = (
        state.core_temperature > physics.meltdown_temperature
        or state.pressure > physics.meltdown_pressure
    )
    if overheated:
        state.meltdown_progress = min(100.0, state.meltdown_progress + physics.meltdown_rate)
    else:
        state.meltdown_progress = max(0.0, state.meltdown_progress - physics.meltdown_recovery)

    if state.reactor_status == ReactorStatus.RUNNING and state.meltdown_progress > 0:
        state.reactor_status = ReactorStatus.MELTING
        logger.warning(f"Core critical on tick {state.tick_count}")
        events.append(
            NotableEvent.for_state(
                state,
                "CORE CRITICAL",
                "Meltdown in progress. Cool the core immediately.",
                Severity.DANGER,
            )
        )
    elif state.reactor_status == ReactorStatus.MELTING and state.meltdown_progress <= 0:
        state.reactor_status = ReactorStatus.RUNNING
        logger.info(f"Core stabilized on tick {state.tick_count}")
        events.append(
            NotableEvent.for_state(
                state,
                "CORE STABILIZED",
                "Meltdown progress has returned to zero.",
                Severity.INFO,
            )
        )

    target = (
        max(0.0, state.core_temperature - physics.radiation_threshold_temperature)
        * physics.radiation_temperature_factor
        + state.meltdown_progress * physics.radiation_meltdown_factor
    )
    radiation = (
        physics.radiation_inertia * state.radiation_level
        + (1.0 - physics.radiation_inertia) * target
    )
    state.radiation_level = _clamp(radiation, 0.0, physics.max_radiation)

    return events
