"""Reactor control endpoints.

These endpoints expose the plant-side player commands: rods, valve, pump,
emergency shutdown, repairs, refuelling and upgrades. Every command returns
a CommandResponse; a rejected command is still a 200 with accepted=False.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from api.dependencies import SimulationEngineDep
from api.models import CommandResponse, PercentRequest
from api.utils import to_command_response
from models.commands import Component

router = APIRouter(
    prefix="/controls",
    tags=["controls"],
)


# Request/Response Models


class RepairRequest(BaseModel):
    """Request model for component repair."""

    component: Component


class ReactorStatusResponse(BaseModel):
    """Plant-side readout.

    Attributes:
        core_temperature: Core temperature in C.
        pressure: Vessel pressure in PSI.
        radiation_level: Radiation reading, 0-1000.
        control_rod_insertion: Rod insertion, 0-100.
        steam_valve_opening: Valve opening, 0-100.
        coolant_pump_on: Whether the coolant pump runs.
        coolant_flow_rate: Coolant flow.
        net_reactivity: Signed reactivity in [-1, 1].
        xenon_poison_level: Xenon inventory, 0-100.
        meltdown_progress: Meltdown accumulator, 0-100.
        fuel_remaining: Fuel left, 0-100.
        pump_health: Pump health, 0-100.
        turbine_health: Turbine health, 0-100.
        condenser_health: Condenser health, 0-100.
        pump_level: Coolant pump upgrade level.
        has_auto_scram: Whether the auto-scram is installed.
        reactor_status: running, melting or destroyed.
        electrical_power_output: Output in MW.
        grid_demand: Demand in MW before modifiers.
        grid_frequency_hz: Grid frequency.
        brownout_active: Whether the grid is browned out.
    """

    core_temperature: float
    pressure: float
    radiation_level: float
    control_rod_insertion: float
    steam_valve_opening: float
    coolant_pump_on: bool
    coolant_flow_rate: float
    net_reactivity: float
    xenon_poison_level: float
    meltdown_progress: float
    fuel_remaining: float
    pump_health: float
    turbine_health: float
    condenser_health: float
    pump_level: int
    has_auto_scram: bool
    reactor_status: str
    electrical_power_output: float
    grid_demand: float
    grid_frequency_hz: float
    brownout_active: bool


# Route Handlers


@router.get("/reactor", response_model=ReactorStatusResponse)
async def get_reactor_status(engine: SimulationEngineDep):
    """Get the plant-side readout.

    Args:
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        Reactor, component and grid fields.
    """
    state = engine.get_state()
    return ReactorStatusResponse(
        **state.model_dump(include=set(ReactorStatusResponse.model_fields) - {"reactor_status"}),
        reactor_status=state.reactor_status.value,
    )


@router.post("/rods", response_model=CommandResponse)
async def set_control_rods(request: PercentRequest, engine: SimulationEngineDep):
    """Set control rod insertion (100 = fully inserted)."""
    return to_command_response(engine, engine.set_control_rod(request.percent))


@router.post("/valve", response_model=CommandResponse)
async def set_steam_valve(request: PercentRequest, engine: SimulationEngineDep):
    """Set steam valve opening (0 = closed)."""
    return to_command_response(engine, engine.set_steam_valve(request.percent))


@router.post("/pump/toggle", response_model=CommandResponse)
async def toggle_pump(engine: SimulationEngineDep):
    return to_command_response(engine, engine.toggle_pump())


@router.post("/scram", response_model=CommandResponse)
async def scram(engine: SimulationEngineDep):
    """Emergency shutdown: drive every control rod fully in."""
    return to_command_response(engine, engine.scram())


@router.post("/repair", response_model=CommandResponse)
async def repair_component(request: RepairRequest, engine: SimulationEngineDep):
    """Repair a component to full health for its listed price.

    Args:
        request: Which component to repair.
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        The command outcome. Insufficient funds is a rejection, not an error.
    """
    return to_command_response(engine, engine.repair_component(request.component.value))


@router.post("/refuel", response_model=CommandResponse)
async def refuel(engine: SimulationEngineDep):
    return to_command_response(engine, engine.refuel())


@router.post("/upgrades/pump", response_model=CommandResponse)
async def upgrade_pump(engine: SimulationEngineDep):
    """Buy the next coolant pump level."""
    return to_command_response(engine, engine.upgrade_pump())


@router.post("/upgrades/auto-scram", response_model=CommandResponse)
async def install_auto_scram(engine: SimulationEngineDep):
    """Install the automatic scram system."""
    return to_command_response(engine, engine.install_auto_scram())
