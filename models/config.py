"""Runtime settings loaded from the environment.

Values come from process environment variables, with a .env file in the
working directory loaded first if present.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class GameSettings(BaseModel):
    """Settings for the engine and its collaborators.

    Args:
        difficulty: Starting difficulty level (1-4).
        seed: Seed for the randomness source. None seeds from the OS.
        tick_interval: Wall-clock seconds between automatic ticks.
        history_sample_ticks: Ticks between score history samples.
        history_size: Score history ring buffer size.
        event_log_size: Number of recent notable events retained.
        gemini_api_key: API key for advisory text generation.
        gemini_model: Gemini model name for advisory text.
    """

    difficulty: int = Field(default=1, ge=1, le=4)
    seed: Optional[int] = None
    tick_interval: float = Field(default=0.05, gt=0.0)
    history_sample_ticks: int = Field(default=20, gt=0)
    history_size: int = Field(default=40, gt=0)
    event_log_size: int = Field(default=5, gt=0)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"

    @field_validator("seed", "gemini_api_key", mode="before")
    @classmethod
    def empty_string_is_none(cls, v):
        """Treat blank environment values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "GameSettings":
        """Build settings from MELTDOWN_* and GEMINI_* environment variables.

        Args:
            load_dotenv_file: Whether to load a .env file first.

        Returns:
            The settings.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        if load_dotenv_file:
            load_dotenv()

        env_map = {
            "difficulty": "MELTDOWN_DIFFICULTY",
            "seed": "MELTDOWN_SEED",
            "tick_interval": "MELTDOWN_TICK_INTERVAL",
            "history_sample_ticks": "MELTDOWN_HISTORY_SAMPLE_TICKS",
            "history_size": "MELTDOWN_HISTORY_SIZE",
            "event_log_size": "MELTDOWN_EVENT_LOG_SIZE",
            "gemini_api_key": "GEMINI_API_KEY",
            "gemini_model": "GEMINI_MODEL",
        }
        data = {
            field: os.environ[variable]
            for field, variable in env_map.items()
            if variable in os.environ
        }
        return cls(**data)
