"""Main entry point for the Meltdown Manager FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API presentation adapters use to drive the reactor-and-fraud
simulation.

To run the development server:
    uvicorn main:app --reload

To run in production:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_simulation_engine, shutdown_simulation_engine
from api.exceptions import (
    ChapterNotFoundError,
    SimulationNotRunningError,
    chapter_not_found_handler,
    generic_exception_handler,
    runtime_error_handler,
    simulation_not_running_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import advisory as advisory_routes
from api.routes import controls as controls_routes
from api.routes import events as events_routes
from api.routes import finance as finance_routes
from api.routes import scenario as scenario_routes
from api.routes import simulation as simulation_routes

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Runs code at startup (before yield) and shutdown (after yield).

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    logger.info("Starting Meltdown Manager - initializing SimulationEngine")
    initialize_simulation_engine()

    yield  # App runs and handles requests here

    logger.info("Shutting down Meltdown Manager - stopping SimulationEngine")
    shutdown_simulation_engine()


# Create the FastAPI application instance
app = FastAPI(
    title="Meltdown Manager",
    description="Reactor physics and corporate fraud simulation engine",
    version=APP_VERSION,
    lifespan=lifespan,
)

# Register exception handlers
# Order matters: specific exceptions before general ones
app.add_exception_handler(ChapterNotFoundError, chapter_not_found_handler)
app.add_exception_handler(SimulationNotRunningError, simulation_not_running_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(simulation_routes.router)
app.include_router(controls_routes.router)
app.include_router(finance_routes.router)
app.include_router(events_routes.router)
app.include_router(scenario_routes.router)
app.include_router(advisory_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to Meltdown Manager. Please keep your hands off the control rods.",
        "version": APP_VERSION,
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}
