"""Scenario and advisory sub-clients.

Wraps the read-only /scenario/* endpoints and the /advisory/* endpoints.
This is an internal module; import from `client` instead.
"""

from typing import Any, Literal

from pydantic import BaseModel

from client._base import BaseClient

SpinTopicName = Literal["meltdown", "audit", "profit", "headline", "advice"]


class SpinResponse(BaseModel):
    """Generated advisory text.

    Attributes:
        topic: Topic that was requested.
        text: Text to display.
        source: "gemini" or "fallback".
    """

    topic: str
    text: str
    source: str


class ScenarioClient(BaseClient):
    """Sub-client for static scenario data."""

    def get(self) -> dict[str, Any]:
        """Get the whole scenario as a plain dict."""
        return self._get("/scenario")

    def summary(self) -> dict[str, Any]:
        return self._get("/scenario/summary")

    def chapter(self, index: int) -> dict[str, Any]:
        """Get one chapter.

        Raises:
            NotFoundError: If the index is outside the campaign.
        """
        return self._get(f"/scenario/chapters/{index}")

    def prices(self) -> dict[str, float]:
        return self._get("/scenario/prices")


class AdvisoryClient(BaseClient):
    """Sub-client for advisory text."""

    def spin(self, topic: SpinTopicName = "headline") -> SpinResponse:
        """Generate advisory text. Falls back to static text server-side."""
        return self._post_model(SpinResponse, "/advisory/spin", json={"topic": topic})

    def current(self) -> str | None:
        """Get the advisory text currently on display, if any."""
        return self._get("/advisory")["text"]
