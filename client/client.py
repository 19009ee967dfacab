"""Main Meltdown Manager client class.

This module provides the entry point for driving a Meltdown Manager server
over HTTP. MeltdownClient gives namespaced access to every endpoint
through sub-client properties (client.simulation, client.controls, ...).

Example:
    Play a few weeks by hand::

        from client import MeltdownClient

        with MeltdownClient(base_url="http://localhost:8000") as client:
            client.simulation.start()
            client.controls.set_rods(30)
            client.controls.set_valve(70)
            client.simulation.tick(count=48)
            print(client.finance.get_state().stock_score)
"""

from typing import Any

from client._controls import ControlsClient
from client._events import EventsClient
from client._finance import FinanceClient
from client._http import HTTPClient
from client._scenario import AdvisoryClient, ScenarioClient
from client._simulation import SimulationClient
from client.models import HealthResponse, RootResponse


class MeltdownClient:
    """Synchronous client for the Meltdown Manager REST API.

    Supports the context manager protocol for automatic resource cleanup.

    Attributes:
        base_url: The base URL of the server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.

    Example:
        Manual lifecycle management::

            client = MeltdownClient()
            try:
                client.simulation.start()
                # ... do work ...
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the server (default: http://localhost:8000).
            timeout: Request timeout in seconds (default: 30.0).
            retry_enabled: Whether to automatically retry on transient failures.
                Retries on connection errors, timeouts, and HTTP 502/503/504.
                Uses exponential backoff (default: False).
            max_retries: Maximum number of retry attempts when retry is enabled
                (default: 3).
            transport: Custom HTTP transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        # Sub-clients are created on first access
        self._simulation: SimulationClient | None = None
        self._controls: ControlsClient | None = None
        self._finance: FinanceClient | None = None
        self._events: EventsClient | None = None
        self._scenario: ScenarioClient | None = None
        self._advisory: AdvisoryClient | None = None

    def __enter__(self) -> "MeltdownClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources.

        Call this when you're done with the client if you aren't using the
        context manager protocol.
        """
        self._http.close()

    # Sub-client properties (lazy initialization)

    @property
    def simulation(self) -> SimulationClient:
        """Access session lifecycle endpoints (/simulation/*).

        Provides methods for:
        - Starting, stopping and restarting the session
        - Pausing and resuming automatic ticking
        - Ticking manually
        - Reading status, the snapshot and the score history

        Returns:
            SimulationClient instance.
        """
        if self._simulation is None:
            self._simulation = SimulationClient(self._http)
        return self._simulation

    @property
    def controls(self) -> ControlsClient:
        """Access plant-side commands (/controls/*).

        Returns:
            ControlsClient instance.
        """
        if self._controls is None:
            self._controls = ControlsClient(self._http)
        return self._controls

    @property
    def finance(self) -> FinanceClient:
        """Access fraud-side commands and the books (/finance/*).

        Returns:
            FinanceClient instance.
        """
        if self._finance is None:
            self._finance = FinanceClient(self._http)
        return self._finance

    @property
    def events(self) -> EventsClient:
        if self._events is None:
            self._events = EventsClient(self._http)
        return self._events

    @property
    def scenario(self) -> ScenarioClient:
        if self._scenario is None:
            self._scenario = ScenarioClient(self._http)
        return self._scenario

    @property
    def advisory(self) -> AdvisoryClient:
        if self._advisory is None:
            self._advisory = AdvisoryClient(self._http)
        return self._advisory

    # Top-level endpoints

    def health(self) -> HealthResponse:
        """Check server health.

        Returns:
            HealthResponse with status "healthy".

        Raises:
            ConnectionError: If the server cannot be reached.
        """
        return HealthResponse.model_validate(self._http.get("/health"))

    def info(self) -> RootResponse:
        return RootResponse.model_validate(self._http.get("/"))
