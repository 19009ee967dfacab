"""Corporate finance sub-client.

Wraps the /finance/* endpoints. This is an internal module; import from
`client` instead.
"""

from typing import Any

from pydantic import BaseModel

from client._base import BaseClient
from client.models import CommandResponse


class FinanceStateResponse(BaseModel):
    """The company's books."""

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

    @property
    def active_spe_count(self) -> int:
        return sum(1 for spe in self.special_purpose_entities if spe.get("is_active"))


class FinanceClient(BaseClient):
    """Sub-client for fraud-side commands.

    Example:
        client.finance.cook_books()
        client.finance.create_spe()
        client.finance.siphon(5000)
    """

    def get_state(self) -> FinanceStateResponse:
        return self._get_model(FinanceStateResponse, "/finance")

    def create_spe(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/finance/spe")

    def lobby(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/finance/lobby")

    def cook_books(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/finance/cook-books")

    def shred(self) -> CommandResponse:
        return self._post_model(CommandResponse, "/finance/shred")

    def siphon(self, amount: float) -> CommandResponse:
        """Move operating cash offshore.

        Raises:
            ValidationError: If amount is not positive.
        """
        return self._post_model(CommandResponse, "/finance/siphon", json={"amount": amount})

    def borrow(self, amount: float) -> CommandResponse:
        """Borrow against the credit line.

        Raises:
            ValidationError: If amount is not positive.
        """
        return self._post_model(CommandResponse, "/finance/borrow", json={"amount": amount})
