"""Reactor controls sub-client.

Wraps the /controls/* endpoints. This is an internal module; import from
`client` instead.
"""

from typing import Literal

from pydantic import BaseModel

from client._base import BaseClient
from client.models import CommandResponse

ComponentName = Literal["pump", "turbine", "condenser"]


class ReactorStatusResponse(BaseModel):
    """Plant-side readout."""

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


class ControlsClient(BaseClient):
    """Sub-client for plant-side commands.

    Every command returns a CommandResponse. Check ``accepted``: a command
    the game refuses (for example a repair you cannot afford) is not an
    exception.

    Example:
        client.controls.set_rods(40)
        client.controls.set_valve(80)
        result = client.controls.repair("pump")
        if not result.accepted:
            print(result.message)
    """

    def get_reactor(self) -> ReactorStatusResponse:
        return self._get_model(ReactorStatusResponse, "/controls/reactor")

    def set_rods(self, percent: float) -> CommandResponse:
        """Set control rod insertion (100 = fully inserted).

        Raises:
            ValidationError: If percent is outside 0-100.
        """
        return self._post_model(CommandResponse, "/controls/rods", json={"percent": percent})

    def set_valve(self, percent: float) -> CommandResponse:
        """Set steam valve opening (0 = closed).

        Raises:
            ValidationError: If percent is outside 0-100.
        """
        return self._post_model(CommandResponse, "/controls/valve", json={"percent": percent})

    def toggle_pump(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/controls/pump/toggle")

    def scram(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/controls/scram")

    def repair(self, component: ComponentName) -> CommandResponse:
        """Repair a component to full health for its listed price."""
        return self._post_model(CommandResponse, "/controls/repair", json={"component": component})

    def refuel(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/controls/refuel")

    def upgrade_pump(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/controls/upgrades/pump")

    def install_auto_scram(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/controls/upgrades/auto-scram")
