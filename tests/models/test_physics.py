"""Unit tests for the reactor and grid update steps."""

import pytest

from models.event import Severity
from models.physics import (
    check_auto_scram,
    effective_demand,
    pump_capacity,
    update_grid,
    update_meltdown,
    update_neutronics,
    update_thermal,
)
from models.randomness import RandomSource
from models.scenario import PhysicsConstants, load_default_scenario
from models.state import ReactorStatus
from tests.fixtures.core.states import create_state

PHYSICS = PhysicsConstants()
QUIET = PhysicsConstants(noise_amplitude=0.0)


@pytest.fixture
def rng():
    return RandomSource(seed=42)


@pytest.fixture
def vision():
    return load_default_scenario().chapter(0)


class TestHelpers:
    def test_pump_capacity(self):
        assert pump_capacity(1, PHYSICS) == 1.0
        assert pump_capacity(3, PHYSICS) == 1.5

    def test_effective_demand(self):
        california = load_default_scenario().chapter(1)
        state = create_state(grid_demand=600.0, weather_demand_modifier=1.4)
        assert effective_demand(state, california) == pytest.approx(600 * 1.5 * 1.4)


class TestNeutronics:
    def test_rods_in_means_no_reactivity(self):
        state = create_state(control_rod_insertion=100.0, core_temperature=300.0)
        update_neutronics(state, PHYSICS)
        assert state.net_reactivity == 0.0

    def test_rods_out_fresh_core(self):
        state = create_state(control_rod_insertion=0.0, core_temperature=300.0)
        update_neutronics(state, PHYSICS)
        assert state.net_reactivity == pytest.approx(1.0)

    def test_xenon_poisons_reactivity(self):
        state = create_state(control_rod_insertion=0.0, xenon_poison_level=20.0)
        update_neutronics(state, PHYSICS)
        assert state.net_reactivity == pytest.approx(0.9)

    def test_low_fuel_scales_reactivity(self):
        state = create_state(control_rod_insertion=0.0, fuel_remaining=5.0)
        update_neutronics(state, PHYSICS)
        assert state.net_reactivity == pytest.approx(0.5)

    def test_reactivity_clamped(self):
        state = create_state(control_rod_insertion=0.0, core_temperature=20.0)
        update_neutronics(state, PHYSICS)
        assert state.net_reactivity == 1.0

    def test_xenon_builds_with_power(self):
        state = create_state(electrical_power_output=500.0, xenon_poison_level=0.0)
        update_neutronics(state, PHYSICS)
        assert state.xenon_poison_level == pytest.approx(0.5)

    def test_xenon_decays_without_power(self):
        state = create_state(electrical_power_output=0.0, xenon_poison_level=50.0)
        update_neutronics(state, PHYSICS)
        assert state.xenon_poison_level == pytest.approx(49.95)


class TestThermal:
    def test_cold_shutdown_cools(self, rng):
        state = create_state(control_rod_insertion=100.0, core_temperature=300.0)
        update_thermal(state, QUIET, rng)
        # ambient loss 1.4, convection 88
        assert state.core_temperature == pytest.approx(210.6)

    def test_pump_off_flow_decays(self, rng):
        state = create_state(coolant_pump_on=False, coolant_flow_rate=100.0)
        update_thermal(state, QUIET, rng)
        assert state.coolant_flow_rate == pytest.approx(95.0)

    def test_upgraded_pump_raises_flow(self, rng):
        state = create_state(pump_level=3, coolant_flow_rate=100.0)
        update_thermal(state, QUIET, rng)
        assert state.coolant_flow_rate == pytest.approx(102.5)

    def test_release_uses_previous_pressure(self, rng):
        state = create_state(pressure=1000.0, steam_valve_opening=50.0, core_temperature=300.0)
        release = update_thermal(state, QUIET, rng)

        assert release == pytest.approx(100.0)
        build = (state.core_temperature - 100.0) * 0.7
        assert state.pressure == pytest.approx(1000.0 + build - 100.0)

    def test_closed_valve_releases_nothing(self, rng):
        state = create_state(pressure=1000.0, steam_valve_opening=0.0)
        assert update_thermal(state, QUIET, rng) == 0.0

    def test_temperature_floor(self, rng):
        state = create_state(core_temperature=21.0, coolant_flow_rate=100.0)
        update_thermal(state, QUIET, rng)
        assert state.core_temperature >= PHYSICS.min_temperature

    def test_zero_weather_modifier_does_not_divide_by_zero(self, rng):
        state = create_state(weather_temperature_modifier=0.0)
        update_thermal(state, QUIET, rng)
        assert state.core_temperature > 0

    def test_fuel_burns_with_power(self, rng):
        state = create_state(electrical_power_output=1000.0, fuel_remaining=50.0)
        update_thermal(state, QUIET, rng)
        assert state.fuel_remaining == pytest.approx(49.99)


class TestAutoScram:
    def test_not_installed(self):
        state = create_state(core_temperature=2500.0, control_rod_insertion=0.0)
        assert check_auto_scram(state, PHYSICS) == []
        assert state.control_rod_insertion == 0.0

    def test_trips_above_threshold(self):
        state = create_state(
            has_auto_scram=True, core_temperature=2500.0, control_rod_insertion=10.0
        )
        events = check_auto_scram(state, PHYSICS)

        assert state.control_rod_insertion == 100.0
        assert [e.title for e in events] == ["AUTO-SCRAM ENGAGED"]

    def test_quiet_below_threshold(self):
        state = create_state(has_auto_scram=True, core_temperature=2000.0, control_rod_insertion=0.0)
        assert check_auto_scram(state, PHYSICS) == []

    def test_does_not_repeat_once_rods_are_in(self):
        state = create_state(has_auto_scram=True, core_temperature=2500.0, control_rod_insertion=100.0)
        assert check_auto_scram(state, PHYSICS) == []


class TestGrid:
    """Test the turbine, frequency and brownout model."""

    def test_power_follows_release(self, rng, vision):
        state = create_state(electrical_power_output=0.0)
        update_grid(state, PHYSICS, vision, release=100.0, rng=rng)
        # 0.9 * 0 + 0.1 * (100 * 10)
        assert state.electrical_power_output == pytest.approx(100.0)

    def test_worn_turbine_produces_less(self, rng, vision):
        state = create_state(electrical_power_output=0.0, turbine_health=50.0)
        update_grid(state, PHYSICS, vision, release=100.0, rng=rng)
        assert state.electrical_power_output == pytest.approx(50.0)

    def test_brownout_starts_once(self, rng, vision):
        state = create_state(political_capital=10.0)

        first = update_grid(state, PHYSICS, vision, release=0.0, rng=rng)
        second = update_grid(state, PHYSICS, vision, release=0.0, rng=rng)

        assert state.grid_frequency_hz == pytest.approx(60.0 * 0.95 * 0.95)
        assert state.brownout_active is True
        assert [e.title for e in first] == ["BROWNOUT"]
        assert first[0].severity == Severity.WARNING
        assert second == []
        assert state.political_capital == 9.0

    def test_grid_restored(self, rng, vision):
        state = create_state(
            brownout_active=True,
            grid_frequency_hz=60.0,
            electrical_power_output=600.0,
            grid_demand=600.0,
        )
        events = update_grid(state, PHYSICS, vision, release=60.0, rng=rng)

        assert state.brownout_active is False
        assert [e.title for e in events] == ["GRID RESTORED"]

    def test_brownout_premium(self, rng):
        california = load_default_scenario().chapter(1)
        state = create_state(operating_cash=1000.0)
        update_grid(state, PHYSICS, california, release=0.0, rng=rng)
        assert state.operating_cash == 1050.0

    def test_no_premium_outside_california(self, rng, vision):
        state = create_state(operating_cash=1000.0)
        update_grid(state, PHYSICS, vision, release=0.0, rng=rng)
        assert state.operating_cash == 1000.0

    def test_overspeed_wears_turbine(self, rng, vision):
        physics = PhysicsConstants(overspeed_warning_chance=1.0)
        state = create_state(
            grid_frequency_hz=70.0, electrical_power_output=700.0, grid_demand=600.0
        )
        events = update_grid(state, physics, vision, release=70.0, rng=rng)

        assert state.turbine_health == pytest.approx(99.9)
        assert [e.title for e in events] == ["TURBINE OVERSPEED WARNING"]

    def test_high_output_wear(self, rng, vision):
        state = create_state(electrical_power_output=1200.0, grid_demand=1200.0, grid_frequency_hz=60.0)
        update_grid(state, PHYSICS, vision, release=120.0, rng=rng)

        assert state.pump_health == pytest.approx(99.99)
        assert state.condenser_health == pytest.approx(99.99)

    def test_zero_demand_holds_nominal(self, rng, vision):
        state = create_state(grid_demand=0.0, grid_frequency_hz=60.0)
        update_grid(state, PHYSICS, vision, release=0.0, rng=rng)
        assert state.grid_frequency_hz == pytest.approx(60.0)


class TestMeltdown:
    def test_overheating_starts_meltdown(self):
        state = create_state(core_temperature=2700.0)
        events = update_meltdown(state, PHYSICS)

        assert state.meltdown_progress == 0.5
        assert state.reactor_status == ReactorStatus.MELTING
        assert [e.title for e in events] == ["CORE CRITICAL"]

    def test_overpressure_starts_meltdown(self):
        state = create_state(pressure=1900.0)
        update_meltdown(state, PHYSICS)
        assert state.meltdown_progress == 0.5

    def test_recovery(self):
        state = create_state(
            meltdown_progress=0.5, reactor_status=ReactorStatus.MELTING, core_temperature=300.0
        )

        assert update_meltdown(state, PHYSICS) == []
        assert state.meltdown_progress == 0.25

        events = update_meltdown(state, PHYSICS)
        assert state.meltdown_progress == 0.0
        assert state.reactor_status == ReactorStatus.RUNNING
        assert [e.title for e in events] == ["CORE STABILIZED"]

    def test_radiation_rises_with_heat(self):
        state = create_state(core_temperature=2500.0, radiation_level=0.0)
        update_meltdown(state, PHYSICS)
        # 0.1 * (1000 * 0.5)
        assert state.radiation_level == pytest.approx(50.0)

    def test_radiation_relaxes_when_cool(self):
        state = create_state(core_temperature=300.0, radiation_level=100.0)
        update_meltdown(state, PHYSICS)
        assert state.radiation_level == pytest.approx(90.0)
