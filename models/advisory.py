"""Advisory "corporate spin" text generation.

Wraps the Gemini generateContent REST endpoint. The service only reads a
state copy it is handed and returns text; it never mutates the session.
Any failure degrades to a static fallback line.
"""

import logging
import os
from enum import Enum
from typing import Any, Optional

import requests
from pydantic import BaseModel, Field

from models.state import SimulationState

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.0-flash"

LINK_SEVERED = "Communications Link Severed."
DATA_COMPROMISED = "Data Integrity Compromised."


class SpinTopic(str, Enum):
    """What the advisory text should spin."""

    MELTDOWN = "meltdown"
    AUDIT = "audit"
    PROFIT = "profit"
    HEADLINE = "headline"
    ADVICE = "advice"


class AdvisoryResult(BaseModel):
    """Generated advisory text and where it came from.

    Args:
        topic: Topic that was requested.
        text: Text to display.
        source: "gemini" for generated text, "fallback" otherwise.
    """

    topic: SpinTopic
    text: str
    source: str = Field(default="gemini")

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"


def build_context(state: SimulationState) -> str:
    """Summarize the numbers the copywriter gets to see."""
    return (
        f"Stock Price: ${state.stock_score:.2f}. "
        f"Core Temp: {state.core_temperature:.0f}C. "
        f"Audit Risk: {state.audit_risk_percent:.0f}%. "
        f"Total SPE Hidden Debt: ${state.total_hidden_debt:.0f}."
    )


def build_prompt(topic: SpinTopic, state: SimulationState) -> str:
    """Build the prompt for a topic.

    Args:
        topic: What to spin.
        state: State copy supplying context numbers.

    Returns:
        Prompt text for the model.
    """
    if topic == SpinTopic.MELTDOWN:
        return (
            "You are a PR spokesperson for Enron. A nuclear reactor is melting down. "
            "Write one darkly funny corporate-speak sentence spinning this disaster as "
            'an "exciting thermal transition". Max 12 words.'
        )
    if topic == SpinTopic.AUDIT:
        return (
            "SEC audit coming. You are a panicked CFO. Give a one-sentence instruction "
            "to a subordinate about hiding evidence. Max 10 words."
        )
    if topic == SpinTopic.PROFIT:
        return (
            "Enron just announced fake profits. You are Ken Lay. Give an arrogant, "
            "visionary one-sentence quote about Enron's future. Max 12 words."
        )
    if topic == SpinTopic.ADVICE:
        return (
            "You are an Enron Executive speaking to your successor. The current stock is "
            f"{state.stock_score:.0f} and audit risk is {state.audit_risk_percent:.0f}%. "
            "Give a very short (10 words max), confident, and slightly corrupt piece of advice."
        )
    return (
        "Write a cryptic, ominous but professional corporate news ticker headline for a "
        f"failing energy giant. Context: {build_context(state)} Max 10 words."
    )


class AdvisoryService(BaseModel):
    """Client for generated advisory text.

    Loads the Gemini API key from the GEMINI_API_KEY environment variable
    if one is not provided.

    Args:
        api_key: Gemini API key. Without one every request falls back.
        model: Gemini model name.
        timeout: Request timeout in seconds.
    """

    api_key: Optional[str] = Field(default=None, description="Gemini API key")
    model: str = Field(default=DEFAULT_MODEL, description="Gemini model name")
    timeout: float = Field(default=10.0, gt=0.0, description="Request timeout in seconds")

    def __init__(self, **data):
        """Initialize the service, reading the API key from the environment if absent."""
        if "api_key" not in data or data["api_key"] is None:
            data["api_key"] = os.environ.get("GEMINI_API_KEY")
        super().__init__(**data)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def generate(self, topic: SpinTopic, state: SimulationState) -> AdvisoryResult:
        """Generate advisory text for a topic.

        Never raises for service failures: a missing key, a transport error
        or a non-200 response yields "Communications Link Severed.", and an
        empty or malformed reply yields "Data Integrity Compromised.".

        Args:
            topic: What to spin.
            state: State copy supplying context numbers.

        Returns:
            The advisory result.
        """
        if not self.is_configured:
            logger.warning("Advisory requested but GEMINI_API_KEY is not configured")
            return AdvisoryResult(topic=topic, text=LINK_SEVERED, source="fallback")

        url = f"{GEMINI_BASE_URL}/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": build_prompt(topic, state)}]}]}

        try:
            response = requests.post(
                url, params={"key": self.api_key}, json=payload, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"Advisory request failed: {e}")
            return AdvisoryResult(topic=topic, text=LINK_SEVERED, source="fallback")

        if response.status_code != 200:
            logger.warning(
                f"Advisory request failed: {response.status_code} {response.text[:200]}"
            )
            return AdvisoryResult(topic=topic, text=LINK_SEVERED, source="fallback")

        try:
            text = extract_text(response.json())
        except ValueError as e:
            logger.warning(f"Advisory response was not JSON: {e}")
            return AdvisoryResult(topic=topic, text=LINK_SEVERED, source="fallback")

        if not text:
            return AdvisoryResult(topic=topic, text=DATA_COMPROMISED, source="fallback")
        return AdvisoryResult(topic=topic, text=text)


def extract_text(data: Any) -> str:
    """Pull the first candidate's text out of a generateContent response.

    Anything that does not have the documented shape counts as no text.

    Returns:
        The stripped text, or an empty string if the response has none.
    """
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    if not isinstance(first, dict):
        return ""
    content = first.get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    return "".join(texts).strip()
