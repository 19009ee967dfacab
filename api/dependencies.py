"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to shared resources like the SimulationEngine and the
advisory text service.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends

from models.advisory import AdvisoryService
from models.config import GameSettings
from models.simulation import SimulationEngine

logger = logging.getLogger(__name__)

# Global state
# One engine and one advisory service per process, created at startup
_simulation_engine: SimulationEngine | None = None
_advisory_service: AdvisoryService | None = None


def get_simulation_engine() -> SimulationEngine:
    """Get the shared SimulationEngine instance.

    This function is a FastAPI dependency. When you add it to a route handler's
    parameters, FastAPI will automatically call this function and inject the result.

    Returns:
        The shared SimulationEngine instance.

    Raises:
        RuntimeError: If the engine hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(engine: SimulationEngineDep):
            return engine.get_snapshot()
    """
    global _simulation_engine

    if _simulation_engine is None:
        raise RuntimeError(
            "SimulationEngine not initialized. Call initialize_simulation_engine() first."
        )

    return _simulation_engine


def get_advisory_service() -> AdvisoryService:
    """Get the shared AdvisoryService instance.

    Raises:
        RuntimeError: If the service hasn't been initialized yet.
    """
    global _advisory_service

    if _advisory_service is None:
        raise RuntimeError(
            "AdvisoryService not initialized. Call initialize_simulation_engine() first."
        )

    return _advisory_service


def initialize_simulation_engine(settings: Optional[GameSettings] = None) -> SimulationEngine:
    """Initialize the shared SimulationEngine and AdvisoryService.

    This should be called once when the FastAPI app starts up.

    Args:
        settings: Runtime settings. Loaded from the environment if omitted.

    Returns:
        The newly created SimulationEngine instance.
    """
    global _simulation_engine, _advisory_service

    settings = settings or GameSettings.from_env()
    _simulation_engine = SimulationEngine.from_settings(settings)
    _advisory_service = AdvisoryService(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
    )

    logger.info(
        f"SimulationEngine {_simulation_engine.simulation_id} initialized at "
        f"difficulty {settings.difficulty} (advisory "
        f"{'enabled' if _advisory_service.is_configured else 'disabled'})"
    )

    return _simulation_engine


def shutdown_simulation_engine():
    """Shut down the SimulationEngine gracefully.

    This should be called when the FastAPI app shuts down.
    Stops any running simulation loop and drops the shared instances.
    """
    global _simulation_engine, _advisory_service

    if _simulation_engine is not None and _simulation_engine.is_running:
        _simulation_engine.stop()

    _simulation_engine = None
    _advisory_service = None


# Type aliases for dependency injection
# These make the type annotations cleaner in route handlers
SimulationEngineDep = Annotated[SimulationEngine, Depends(get_simulation_engine)]
AdvisoryServiceDep = Annotated[AdvisoryService, Depends(get_advisory_service)]
