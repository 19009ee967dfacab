"""Client response models for the Meltdown Manager API client.

This module re-exports the models shared with the API layer and defines
client-specific response models that don't exist there.
"""

from pydantic import BaseModel, Field

# Re-export common models from API layer for client convenience
from api.models import (
    AmountRequest,
    CommandResponse,
    ErrorResponse,
    NotableEventResponse,
    PercentRequest,
)

__all__ = [
    # Re-exported from api.models
    "AmountRequest",
    "CommandResponse",
    "ErrorResponse",
    "NotableEventResponse",
    "PercentRequest",
    # Client-specific models
    "HealthResponse",
    "RootResponse",
]


class HealthResponse(BaseModel):
    """Response model for the health check.

    Attributes:
        status: Health status ("healthy").
    """

    status: str = Field(..., description="Health status")


class RootResponse(BaseModel):
    """Response model for the root endpoint.

    Attributes:
        message: Welcome message.
        version: API version string.
        docs_url: Path of the interactive docs.
    """

    message: str
    version: str
    docs_url: str
