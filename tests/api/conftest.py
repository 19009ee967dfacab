"""Shared fixtures for API integration tests.

This module provides the started-engine TestClient fixture used across all
API test files.
"""

import pytest


@pytest.fixture
def client_with_engine(client_without_start):
    """Provide a TestClient with a fresh SimulationEngine injected and started.

    The simulation runs in manual mode so tests control every tick, and is
    stopped during cleanup.

    Yields:
        A tuple of (TestClient, SimulationEngine) for testing.

    Example:
        def test_something(client_with_engine):
            client, engine = client_with_engine
            response = client.post("/simulation/tick", json={"count": 5})
            assert response.status_code == 200
    """
    client, engine = client_without_start

    response = client.post("/simulation/start", json={"auto_advance": False})
    assert response.status_code == 200, f"Failed to start simulation: {response.json()}"

    yield client, engine
