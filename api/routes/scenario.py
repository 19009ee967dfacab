"""Static scenario data endpoints.

Scenario content never changes during a session, so these endpoints are
safe to cache on the client.
"""

from typing import Any

from fastapi import APIRouter

from api.dependencies import SimulationEngineDep
from api.exceptions import ChapterNotFoundError

router = APIRouter(
    prefix="/scenario",
    tags=["scenario"],
)


@router.get("")
async def get_scenario(engine: SimulationEngineDep) -> dict[str, Any]:
    """Get the complete scenario: events, weather, chapters, prices and constants.

    Args:
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        The scenario as JSON.
    """
    return engine.scenario.model_dump(mode="json")


@router.get("/summary")
async def get_scenario_summary(engine: SimulationEngineDep) -> dict[str, Any]:
    return engine.scenario.summary()


@router.get("/chapters/{index}")
async def get_chapter(index: int, engine: SimulationEngineDep) -> dict[str, Any]:
    """Get one chapter of the campaign.

    Args:
        index: Zero-based chapter index.
        engine: The SimulationEngine instance (injected by FastAPI).

    Returns:
        The chapter as JSON, with its index and whether it is the last one.

    Raises:
        ChapterNotFoundError: If the index is outside the campaign.
    """
    scenario = engine.scenario
    try:
        chapter = scenario.chapter(index)
    except IndexError:
        raise ChapterNotFoundError(index, len(scenario.chapters))

    return {
        "index": index,
        "is_final": scenario.is_final_chapter(index),
        **chapter.model_dump(mode="json"),
    }


@router.get("/prices")
async def get_prices(engine: SimulationEngineDep) -> dict[str, float]:
    """Get the price of every paid command."""
    return engine.scenario.prices.model_dump()
