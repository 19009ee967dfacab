"""Exception handlers for the Meltdown Manager FastAPI application.

This module defines custom exception handlers that convert Python exceptions
into consistent, user-friendly JSON responses.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api.models import ErrorResponse

logger = logging.getLogger(__name__)


# Custom Exception Classes
# These let you raise specific, meaningful errors in your route handlers


class ChapterNotFoundError(Exception):
    """Raised when a requested chapter index is outside the campaign.

    Args:
        index: The chapter index that was requested.
        chapter_count: Number of chapters in the campaign.
    """

    def __init__(self, index: int, chapter_count: int):
        self.index = index
        self.chapter_count = chapter_count
        super().__init__(f"Chapter {index} not found")


class SimulationNotRunningError(Exception):
    """Raised when an operation requires the simulation to be running but it's not.

    Args:
        message: Description of the operation that failed.
    """

    def __init__(self, message: str = "Simulation is not running"):
        self.message = message
        super().__init__(message)


# Exception Handlers
# These convert exceptions into JSON responses


async def chapter_not_found_handler(request: Request, exc: ChapterNotFoundError):
    """Handle ChapterNotFoundError exceptions.

    Returns a 404 with the requested index and the valid range.

    Args:
        request: The incoming request that triggered the error.
        exc: The ChapterNotFoundError exception.

    Returns:
        JSONResponse with 404 status and helpful details.
    """
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Chapter Not Found",
            "detail": f"Chapter {exc.index} does not exist",
            "requested_index": exc.index,
            "available_indices": list(range(exc.chapter_count)),
        },
    )


async def simulation_not_running_handler(request: Request, exc: SimulationNotRunningError):
    """Handle SimulationNotRunningError exceptions.

    Returns a 409 (Conflict) indicating the simulation needs to be started first.

    Args:
        request: The incoming request that triggered the error.
        exc: The SimulationNotRunningError exception.

    Returns:
        JSONResponse with 409 status.
    """
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Simulation Not Running",
            "detail": exc.message,
            "suggestion": "Start the simulation with POST /simulation/start",
        },
    )


def _error_body(error: str, detail: str, exc: Exception, **extra) -> dict:
    body = ErrorResponse(error=error, detail=detail, type=type(exc).__name__).model_dump()
    body.update(extra)
    return body


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Report game data that failed model validation after the request parsed.

    Request bodies are checked by FastAPI itself. This covers models built
    inside a route or command, such as a state record or scenario table.
    """
    logger.warning(
        f"{exc.error_count()} validation errors while handling {request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            "Invalid Game Data",
            f"{exc.error_count()} field(s) of {exc.title} failed validation",
            exc,
            validation_errors=exc.errors(include_url=False),
        ),
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Map a ValueError from the engine to 400.

    The engine raises ValueError for arguments that parse but make no sense
    for the session, such as an unknown difficulty or a non-positive tick
    count.
    """
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Rejected Input", str(exc), exc),
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Map a RuntimeError to 500, keeping its message.

    These come from the engine lifecycle, for instance a request arriving
    before the engine is initialized, so the message is safe to return.
    """
    logger.error(f"Engine error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Engine Error", str(exc), exc),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Catch-all for anything else. The traceback is logged, not returned."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal Server Error", "An unexpected error occurred", exc),
    )
