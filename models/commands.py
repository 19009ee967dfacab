"""Discrete player commands.

Commands are the only way presentation adapters mutate the game state.
Each command validates its preconditions and either applies its effect or
leaves the state untouched and explains why. Rejections never raise; they
come back as a CommandResult carrying a warning event.
"""

import logging
import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from models.event import NotableEvent, Severity, SoundCue
from models.randomness import RandomSource
from models.scenario import Scenario
from models.state import SimulationState, SpecialPurposeEntity

logger = logging.getLogger(__name__)


class Component(str, Enum):
    """Repairable plant components."""

    PUMP = "pump"
    TURBINE = "turbine"
    CONDENSER = "condenser"

    @property
    def health_field(self) -> str:
        return f"{self.value}_health"


class CommandResult(BaseModel):
    """Outcome of a command.

    Args:
        command: Name of the command that ran.
        accepted: Whether the command's effect was applied.
        message: Human-readable outcome.
        event: Notable event raised by the command, if any.
    """

    command: str
    accepted: bool
    message: str
    event: Optional[NotableEvent] = Field(default=None)


class CommandProcessor:
    """Applies validated commands to a SimulationState.

    The processor holds no state of its own beyond the scenario and the
    shared randomness source. Callers are responsible for serializing
    access to the state; the engine does so with its operation lock.

    Args:
        scenario: Scenario supplying prices and economy constants.
        rng: Randomness source used for SPE debt rolls.
    """

    def __init__(self, scenario: Scenario, rng: RandomSource) -> None:
        self.scenario = scenario
        self.rng = rng

    # ===== Result helpers =====

    def _accept(
        self,
        state: SimulationState,
        command: str,
        message: str,
        event: Optional[NotableEvent] = None,
    ) -> CommandResult:
        state.clamp_bounds(self.scenario.physics)
        logger.debug(f"Command {command} accepted: {message}")
        return CommandResult(command=command, accepted=True, message=message, event=event)

    def _reject(
        self, state: SimulationState, command: str, title: str, message: str
    ) -> CommandResult:
        logger.warning(f"Command {command} rejected: {message}")
        event = NotableEvent.for_state(
            state, title, message, Severity.WARNING, cue=SoundCue.ERROR
        )
        return CommandResult(command=command, accepted=False, message=message, event=event)

    def _session_over(self, state: SimulationState, command: str) -> Optional[CommandResult]:
        if not state.is_game_over:
            return None
        return self._reject(
            state,
            command,
            "SESSION OVER",
            f"The session has ended ({state.session_status.value}). Restart to play again.",
        )

    def _insufficient_funds(
        self, state: SimulationState, command: str, price: float, what: str
    ) -> CommandResult:
        return self._reject(
            state,
            command,
            "INSUFFICIENT FUNDS",
            f"{what} costs ${price:,.0f}; you have ${state.operating_cash:,.0f}.",
        )

    # ===== Reactor controls =====

    def set_control_rod(self, state: SimulationState, percent: float) -> CommandResult:
        """Set control rod insertion, clamped to [0, 100]."""
        rejected = self._session_over(state, "set_control_rod")
        if rejected:
            return rejected
        if not math.isfinite(percent):
            return self._reject(state, "set_control_rod", "INVALID INPUT", "Rod position must be a number.")

        state.control_rod_insertion = min(100.0, max(0.0, float(percent)))
        return self._accept(
            state, "set_control_rod", f"Control rods at {state.control_rod_insertion:.0f}%"
        )

    def set_steam_valve(self, state: SimulationState, percent: float) -> CommandResult:
        """Set steam valve opening, clamped to [0, 100]."""
        rejected = self._session_over(state, "set_steam_valve")
        if rejected:
            return rejected
        if not math.isfinite(percent):
            return self._reject(state, "set_steam_valve", "INVALID INPUT", "Valve position must be a number.")

        state.steam_valve_opening = min(100.0, max(0.0, float(percent)))
        return self._accept(
            state, "set_steam_valve", f"Steam valve at {state.steam_valve_opening:.0f}%"
        )

    def toggle_pump(self, state: SimulationState) -> CommandResult:
        rejected = self._session_over(state, "toggle_pump")
        if rejected:
            return rejected

        state.coolant_pump_on = not state.coolant_pump_on
        label = "ON" if state.coolant_pump_on else "OFF"
        event = NotableEvent.for_state(
            state, f"COOLANT PUMP {label}", f"Primary coolant pump switched {label.lower()}.",
            Severity.INFO, cue=SoundCue.CLICK,
        )
        return self._accept(state, "toggle_pump", f"Coolant pump {label.lower()}", event)

    def scram(self, state: SimulationState) -> CommandResult:
        """Emergency shutdown: drive every rod fully in."""
        rejected = self._session_over(state, "scram")
        if rejected:
            return rejected

        state.control_rod_insertion = 100.0
        logger.info(f"Manual SCRAM on tick {state.tick_count}")
        event = NotableEvent.for_state(
            state, "SCRAM", "All control rods fully inserted.", Severity.WARNING,
            cue=SoundCue.ALARM,
        )
        return self._accept(state, "scram", "Control rods fully inserted", event)

    def repair_component(self, state: SimulationState, component: str) -> CommandResult:
        """Restore a component to full health for its listed price.

        Args:
            state: State to mutate.
            component: One of pump, turbine, condenser.

        Returns:
            Accepted with health exactly 100 and cash reduced by exactly the
            price, or rejected with the state untouched.
        """
        rejected = self._session_over(state, "repair_component")
        if rejected:
            return rejected
        try:
            part = Component(component)
        except ValueError:
            return self._reject(
                state, "repair_component", "UNKNOWN COMPONENT",
                f"Cannot repair '{component}'. Choose pump, turbine or condenser.",
            )

        price = self.scenario.prices.repair_cost(part.value)
        if state.operating_cash < price:
            return self._insufficient_funds(
                state, "repair_component", price, f"Repairing the {part.value}"
            )

        state.operating_cash -= price
        setattr(state, part.health_field, 100.0)
        event = NotableEvent.for_state(
            state, f"{part.value.upper()} REPAIRED",
            f"The {part.value} is back to full health for ${price:,.0f}.",
            Severity.INFO, cue=SoundCue.REPAIR,
        )
        return self._accept(state, "repair_component", f"{part.value} repaired", event)

    def refuel(self, state: SimulationState) -> CommandResult:
        rejected = self._session_over(state, "refuel")
        if rejected:
            return rejected

        price = self.scenario.prices.refuel
        if state.operating_cash < price:
            return self._insufficient_funds(state, "refuel", price, "Refuelling")

        state.operating_cash -= price
        state.fuel_remaining = 100.0
        event = NotableEvent.for_state(
            state, "REFUELLED", "Fresh fuel assemblies loaded.", Severity.INFO, cue=SoundCue.BUY
        )
        return self._accept(state, "refuel", "Fuel restored to 100%", event)

    def upgrade_pump(self, state: SimulationState) -> CommandResult:
        """Buy the next coolant pump level; price scales with the current level."""
        rejected = self._session_over(state, "upgrade_pump")
        if rejected:
            return rejected

        if state.pump_level >= self.scenario.physics.max_pump_level:
            return self._reject(
                state, "upgrade_pump", "MAX LEVEL", "The coolant pump is fully upgraded."
            )
        price = self.scenario.prices.pump_upgrade * state.pump_level
        if state.operating_cash < price:
            return self._insufficient_funds(state, "upgrade_pump", price, "The pump upgrade")

        state.operating_cash -= price
        state.pump_level += 1
        event = NotableEvent.for_state(
            state, "PUMP UPGRADED", f"Coolant pump now at level {state.pump_level}.",
            Severity.INFO, cue=SoundCue.BUY,
        )
        return self._accept(state, "upgrade_pump", f"Pump level {state.pump_level}", event)

    def install_auto_scram(self, state: SimulationState) -> CommandResult:
        rejected = self._session_over(state, "install_auto_scram")
        if rejected:
            return rejected

        if state.has_auto_scram:
            return self._reject(
                state, "install_auto_scram", "ALREADY INSTALLED",
                "The auto-scram system is already installed.",
            )
        price = self.scenario.prices.auto_scram
        if state.operating_cash < price:
            return self._insufficient_funds(state, "install_auto_scram", price, "Auto-scram")

        state.operating_cash -= price
        state.has_auto_scram = True
        event = NotableEvent.for_state(
            state, "AUTO-SCRAM INSTALLED",
            f"Rods will drop automatically above "
            f"{self.scenario.physics.auto_scram_temperature:.0f}C.",
            Severity.INFO, cue=SoundCue.BUY,
        )
        return self._accept(state, "install_auto_scram", "Auto-scram installed", event)

    # ===== Fraud and finance =====

    def create_spe(self, state: SimulationState) -> CommandResult:
        """Spin up a special purpose entity to hide debt.

        Costs score rather than cash. The entity's trigger price is set from
        the score after the debt boost, so a later drop of more than the
        trigger ratio collapses it.
        """
        rejected = self._session_over(state, "create_spe")
        if rejected:
            return rejected

        economy = self.scenario.economy
        price = self.scenario.prices.create_spe
        if state.stock_score < price:
            return self._reject(
                state, "create_spe", "INSUFFICIENT STOCK VALUE",
                f"An SPE needs a stock score of {price:,.0f}; you have {state.stock_score:,.0f}.",
            )

        state.stock_score -= price
        debt = self.rng.uniform(economy.spe_min_debt, economy.spe_max_debt)
        state.stock_score += debt / economy.spe_boost_divisor

        spe = SpecialPurposeEntity(
            name=f"LJM-{state.spe_count + 1}",
            hidden_debt_amount=debt,
            trigger_stock_price=state.stock_score * economy.spe_trigger_ratio,
            created_tick=state.tick_count,
        )
        state.special_purpose_entities.append(spe)
        state.total_hidden_debt += debt
        state.audit_risk_percent += economy.spe_audit_risk

        logger.info(
            f"Created {spe.name} hiding ${debt:,.0f}, trigger at {spe.trigger_stock_price:.1f}"
        )
        event = NotableEvent.for_state(
            state, "SPE CREATED",
            f"{spe.name} is hiding ${debt:,.0f}. It collapses if the score drops below "
            f"{spe.trigger_stock_price:,.1f}.",
            Severity.INFO, cue=SoundCue.BUILD,
        )
        return self._accept(state, "create_spe", f"{spe.name} created", event)

    def lobby(self, state: SimulationState) -> CommandResult:
        """Buy political cover: lower audit risk and shield against creep."""
        rejected = self._session_over(state, "lobby")
        if rejected:
            return rejected

        economy = self.scenario.economy
        price = self.scenario.prices.lobby
        if state.operating_cash < price:
            return self._insufficient_funds(state, "lobby", price, "Lobbying")

        state.operating_cash -= price
        state.audit_risk_percent = max(0.0, state.audit_risk_percent - economy.lobby_audit_relief)
        state.political_capital += economy.lobby_political_gain
        state.lobbying_shield_ticks_remaining = economy.lobby_shield_ticks
        event = NotableEvent.for_state(
            state, "LOBBYISTS DEPLOYED",
            f"Regulators are looking elsewhere for {economy.lobby_shield_ticks} ticks.",
            Severity.INFO, cue=SoundCue.CASH,
        )
        return self._accept(state, "lobby", "Lobbying shield active", event)

    def cook_books(self, state: SimulationState) -> CommandResult:
        rejected = self._session_over(state, "cook_books")
        if rejected:
            return rejected

        economy = self.scenario.economy
        state.stock_score += economy.cook_books_score
        state.audit_risk_percent += economy.cook_books_audit_risk
        event = NotableEvent.for_state(
            state, "BOOKS COOKED",
            "Mark-to-market accounting works wonders. The auditors are curious.",
            Severity.WARNING, cue=SoundCue.CASH,
        )
        return self._accept(state, "cook_books", "Earnings restated", event)

    def shred_documents(self, state: SimulationState) -> CommandResult:
        rejected = self._session_over(state, "shred_documents")
        if rejected:
            return rejected

        economy = self.scenario.economy
        price = self.scenario.prices.shred
        if state.operating_cash < price:
            return self._insufficient_funds(state, "shred_documents", price, "Shredding")

        state.operating_cash -= price
        state.audit_risk_percent = max(0.0, state.audit_risk_percent - economy.shred_audit_relief)
        event = NotableEvent.for_state(
            state, "DOCUMENTS SHREDDED", "What documents?", Severity.INFO, cue=SoundCue.SHRED
        )
        return self._accept(state, "shred_documents", "Documents shredded", event)

    def siphon_to_offshore(self, state: SimulationState, amount: float) -> CommandResult:
        """Move cash to offshore holdings."""
        rejected = self._session_over(state, "siphon_to_offshore")
        if rejected:
            return rejected
        if not math.isfinite(amount) or amount <= 0:
            return self._reject(
                state, "siphon_to_offshore", "INVALID AMOUNT", "Amount must be positive."
            )
        if amount > state.operating_cash:
            return self._insufficient_funds(
                state, "siphon_to_offshore", amount, f"Moving ${amount:,.0f} offshore"
            )

        state.operating_cash -= amount
        state.offshore_holdings += amount
        event = NotableEvent.for_state(
            state, "FUNDS TRANSFERRED", f"${amount:,.0f} wired to the Caymans.",
            Severity.INFO, cue=SoundCue.CASH,
        )
        return self._accept(state, "siphon_to_offshore", f"${amount:,.0f} moved offshore", event)

    def borrow(self, state: SimulationState, amount: float) -> CommandResult:
        """Borrow against the credit line; the limit scales with credit score."""
        rejected = self._session_over(state, "borrow")
        if rejected:
            return rejected
        if not math.isfinite(amount) or amount <= 0:
            return self._reject(state, "borrow", "INVALID AMOUNT", "Amount must be positive.")

        limit = state.credit_score * self.scenario.economy.credit_limit_multiplier
        if state.outstanding_loan + amount > limit:
            available = max(0.0, limit - state.outstanding_loan)
            return self._reject(
                state, "borrow", "CREDIT LIMIT REACHED",
                f"The bank will lend at most ${available:,.0f} more.",
            )

        state.operating_cash += amount
        state.outstanding_loan += amount
        event = NotableEvent.for_state(
            state, "LOAN APPROVED", f"${amount:,.0f} added to operating cash.",
            Severity.INFO, cue=SoundCue.CASH,
        )
        return self._accept(state, "borrow", f"Borrowed ${amount:,.0f}", event)
