"""Corporate finance endpoints.

These endpoints expose the fraud-side player commands (SPEs, lobbying,
cooking the books, shredding, offshore transfers, borrowing) and a
read-out of the company's books.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from api.dependencies import SimulationEngineDep
from api.models import AmountRequest, CommandResponse
from api.utils import to_command_response

router = APIRouter(
    prefix="/finance",
    tags=["finance"],
)


class FinanceStateResponse(BaseModel):
    """The books, both sets.

    Attributes:
        stock_score: Primary metric.
        operating_cash: Cash on hand.
        outstanding_loan: Debt on the books.
        credit_score: 0-100; sets the credit limit.
        credit_limit: Maximum outstanding loan.
        offshore_holdings: Cash moved offshore.
        audit_risk_percent: 0-100; 100 ends the session.
        political_capital: 0-100.
        lobbying_shield_ticks_remaining: Ticks left on the shield.
        total_hidden_debt: Debt ever parked in SPEs.
        special_purpose_entities: Every SPE, active or collapsed.
        ticks_insolvent: Consecutive ticks at zero score.
    """

    stock_score: float
    operating_cash: float
    outstanding_loan: float
    credit_score: float
    credit_limit: float
    offshore_holdings: float
    audit_risk_percent: float
    political_capital: float
    lobbying_shield_ticks_remaining: int
    total_hidden_debt: float
    special_purpose_entities: list[dict[str, Any]]
    ticks_insolvent: int


@router.get("", response_model=FinanceStateResponse)
async def get_finance_state(engine: SimulationEngineDep):
    """Get the company's books.

    Args:
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        Finance and fraud fields.
    """
    state = engine.get_state()
    return FinanceStateResponse(
        stock_score=state.stock_score,
        operating_cash=state.operating_cash,
        outstanding_loan=state.outstanding_loan,
        credit_score=state.credit_score,
        credit_limit=state.credit_score * engine.scenario.economy.credit_limit_multiplier,
        offshore_holdings=state.offshore_holdings,
        audit_risk_percent=state.audit_risk_percent,
        political_capital=state.political_capital,
        lobbying_shield_ticks_remaining=state.lobbying_shield_ticks_remaining,
        total_hidden_debt=state.total_hidden_debt,
        special_purpose_entities=[
            {**spe.model_dump(mode="json"), "is_active": spe.is_active}
            for spe in state.special_purpose_entities
        ],
        ticks_insolvent=state.ticks_insolvent,
    )


@router.post("/spe", response_model=CommandResponse)
async def create_spe(engine: SimulationEngineDep):
    """Create a special purpose entity to hide debt."""
    return to_command_response(engine, engine.create_spe())


@router.post("/lobby", response_model=CommandResponse)
async def lobby(engine: SimulationEngineDep):
    """Buy a lobbying shield against passive audit creep."""
    return to_command_response(engine, engine.lobby())


@router.post("/cook-books", response_model=CommandResponse)
async def cook_books(engine: SimulationEngineDep):
    return to_command_response(engine, engine.cook_books())


@router.post("/shred", response_model=CommandResponse)
async def shred_documents(engine: SimulationEngineDep):
    return to_command_response(engine, engine.shred_documents())


@router.post("/siphon", response_model=CommandResponse)
async def siphon_to_offshore(request: AmountRequest, engine: SimulationEngineDep):
    """Move operating cash to offshore holdings.

    Args:
        request: Amount to move; must not exceed operating cash.
        engine: The SimulationEngine instance (injected by FastAPI).
    """
    return to_command_response(engine, engine.siphon_to_offshore(request.amount))


@router.post("/borrow", response_model=CommandResponse)
async def borrow(request: AmountRequest, engine: SimulationEngineDep):
    """Borrow against the credit line.

    Args:
        request: Amount to borrow; the total loan may not exceed the credit limit.
        engine: The SimulationEngine instance (injected by FastAPI).
    """
    return to_command_response(engine, engine.borrow(request.amount))
