"""Clock, calendar and scripted-event step of the tick."""

import logging
from datetime import date, timedelta

from models.event import NotableEvent, Severity, SoundCue
from models.scenario import HistoricEvent, Scenario, WeatherType
from models.state import SimulationState

logger = logging.getLogger(__name__)

DAYS_PER_STEP = 7


def calendar_for(start_date: date, day_count: int) -> date:
    """Return the calendar date reached after day_count week steps."""
    return start_date + timedelta(days=day_count * DAYS_PER_STEP)


def format_calendar(value: date) -> str:
    """Format a date as the "Mon YYYY" label shown in the HUD."""
    return value.strftime("%b %Y")


def advance_clock(state: SimulationState, scenario: Scenario) -> list[NotableEvent]:
    """Advance the hour of day and roll over into the next week.

    On every rollover the calendar label is recomputed, the first unfired
    historic event for the new month is applied, and the month's weather
    pattern is installed.

    Args:
        state: State to mutate.
        scenario: Scenario supplying the clock constants and event tables.

    Returns:
        Notable events raised by the rollover.
    """
    physics = scenario.physics
    state.simulated_hour_of_day += physics.hour_increment
    if state.simulated_hour_of_day < physics.hours_per_week_step:
        return []

    state.simulated_hour_of_day = 0.0
    state.day_count += 1
    current = calendar_for(scenario.start_date, state.day_count)
    state.calendar_date = format_calendar(current)

    events: list[NotableEvent] = []
    historic = scenario.find_event(
        current.month, current.year, exclude=set(state.triggered_events)
    )
    if historic is not None:
        events.extend(fire_historic_event(state, historic))
    events.extend(apply_weather(state, scenario, current))
    return events


def fire_historic_event(
    state: SimulationState, historic: HistoricEvent
) -> list[NotableEvent]:
    """Apply a scripted event once, honouring an active lobbying shield.

    While shielded, danger events are downgraded to warnings and mitigable
    events have their effects skipped.

    Args:
        state: State to mutate.
        historic: The event to fire.

    Returns:
        The headline event, plus a mitigation notice when effects were skipped.
    """
    state.triggered_events.append(historic.key)
    shielded = state.is_lobbying_shield_active

    severity = historic.severity
    if shielded and severity == Severity.DANGER:
        severity = Severity.WARNING

    events = [
        NotableEvent.for_state(state, historic.title, historic.description, severity)
    ]

    if shielded and historic.mitigable:
        events.append(
            NotableEvent.for_state(
                state,
                "LOBBYING PAYS OFF",
                "Lobbyists mitigated event impact.",
                Severity.INFO,
                cue=SoundCue.CASH,
            )
        )
        logger.info(f"Historic event '{historic.title}' mitigated by lobbying shield")
        return events

    for effect in historic.effects:
        effect.apply(state)
    logger.info(
        f"Historic event '{historic.title}' fired on {state.calendar_date} "
        f"with {len(historic.effects)} effects"
    )
    return events


def apply_weather(
    state: SimulationState, scenario: Scenario, current: date
) -> list[NotableEvent]:
    """Install the weather pattern for the current month.

    Months without a pattern revert to clear skies with neutral modifiers.

    Returns:
        A weather alert when a new named pattern begins, else nothing.
    """
    pattern = scenario.find_weather(current.month, current.year)
    if pattern is None:
        state.current_weather = WeatherType.SUNNY
        state.weather_name = None
        state.weather_demand_modifier = 1.0
        state.weather_temperature_modifier = 1.0
        return []

    is_new = pattern.name != state.weather_name
    state.current_weather = pattern.weather
    state.weather_name = pattern.name
    state.weather_demand_modifier = pattern.demand_modifier
    state.weather_temperature_modifier = pattern.temperature_modifier

    if not is_new:
        return []
    return [
        NotableEvent.for_state(
            state,
            f"WEATHER: {pattern.name}",
            f"Demand x{pattern.demand_modifier:.1f}, "
            f"cooling x{1 / pattern.temperature_modifier:.2f}",
            Severity.INFO,
            cue=SoundCue.CLICK,
        )
    ]
