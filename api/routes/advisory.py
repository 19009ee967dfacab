"""Advisory text endpoints.

Advisory text is display-only flavour. Generation failures are reported as
fallback text, never as HTTP errors.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from api.dependencies import AdvisoryServiceDep, SimulationEngineDep
from models.advisory import SpinTopic

router = APIRouter(
    prefix="/advisory",
    tags=["advisory"],
)


class SpinRequest(BaseModel):
    """Request model for generating advisory text."""

    topic: SpinTopic = Field(default=SpinTopic.HEADLINE)


class SpinResponse(BaseModel):
    """Response model for generated advisory text.

    Attributes:
        topic: Topic that was requested.
        text: Text to display.
        source: "gemini" or "fallback".
    """

    topic: str
    text: str
    source: str


class AdvisoryTextResponse(BaseModel):
    """Response model for the currently displayed advisory text."""

    text: Optional[str] = None


@router.post("/spin", response_model=SpinResponse)
async def generate_spin(
    request: SpinRequest,
    engine: SimulationEngineDep,
    service: AdvisoryServiceDep,
):
    """Generate advisory text for the current situation.

    The remote call runs in a worker thread and outside the engine lock,
    so ticks keep running while it resolves.

    Args:
        request: Which topic to spin.
        engine: The SimulationEngine instance (injected by FastAPI).
        service: The AdvisoryService instance (injected by FastAPI).

    Returns:
        The generated or fallback text.
    """
    result = await run_in_threadpool(engine.request_advisory, service, request.topic)
    return SpinResponse(topic=result.topic.value, text=result.text, source=result.source)


@router.get("", response_model=AdvisoryTextResponse)
async def get_advisory_text(engine: SimulationEngineDep):
    return AdvisoryTextResponse(text=engine.advisory_text)
