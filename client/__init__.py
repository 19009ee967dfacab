"""Meltdown Manager API Client Library.

This module provides a type-safe Python client for driving a Meltdown
Manager server over its REST API.

Example:
    Basic usage::

        from client import MeltdownClient

        with MeltdownClient(base_url="http://localhost:8000") as client:
            client.simulation.start()
            client.finance.cook_books()
            client.simulation.tick(count=20)
            events = client.events.list(severity="danger")

Exports:
    MeltdownClient: Synchronous client for the REST API.

    Exceptions:
        MeltdownClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        BadRequestError: Bad request (HTTP 400).
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Resource not found (HTTP 404).
        ConflictError: State conflict (HTTP 409).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._controls import ControlsClient, ReactorStatusResponse
from client._events import EventListResponse, EventsClient
from client._finance import FinanceClient, FinanceStateResponse
from client._scenario import AdvisoryClient, ScenarioClient, SpinResponse
from client._simulation import (
    RestartSimulationResponse,
    ScoreHistoryResponse,
    ScorePointResponse,
    SimulationClient,
    SimulationStatusResponse,
    StartSimulationResponse,
    StopSimulationResponse,
    TickResponse,
)
from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    MeltdownClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    CommandResponse,
    HealthResponse,
    NotableEventResponse,
    RootResponse,
)
from client.client import MeltdownClient

__all__ = [
    # Main client
    "MeltdownClient",
    # Sub-clients
    "SimulationClient",
    "ControlsClient",
    "FinanceClient",
    "EventsClient",
    "ScenarioClient",
    "AdvisoryClient",
    # Exceptions
    "MeltdownClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "BadRequestError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    # Response models - General
    "CommandResponse",
    "NotableEventResponse",
    "HealthResponse",
    "RootResponse",
    # Response models - Simulation
    "StartSimulationResponse",
    "StopSimulationResponse",
    "RestartSimulationResponse",
    "SimulationStatusResponse",
    "TickResponse",
    "ScorePointResponse",
    "ScoreHistoryResponse",
    # Response models - Controls and finance
    "ReactorStatusResponse",
    "FinanceStateResponse",
    # Response models - Events and advisory
    "EventListResponse",
    "SpinResponse",
]
