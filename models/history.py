"""Rolling score history for the stock chart."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ScorePoint(BaseModel):
    """One sample of the stock score.

    Args:
        tick: Simulation tick the sample was taken on.
        timestamp: Wall-clock time of the sample.
        stock_score: Score at sample time.
        calendar_date: In-game calendar label at sample time.
    """

    tick: int = Field(ge=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    stock_score: float
    calendar_date: str = ""


class ScoreHistory(BaseModel):
    """Ring buffer of the most recent score samples.

    Oldest samples are dropped once the buffer holds max_size points.

    Args:
        points: Samples, oldest first.
        max_size: Maximum number of samples kept.

    Examples:
        history = ScoreHistory(max_size=40)
        history.record(ScorePoint(tick=20, stock_score=41.5))
        history.latest.stock_score  # 41.5
    """

    points: list[ScorePoint] = Field(
        default_factory=list,
        description="Samples, oldest first",
    )
    max_size: int = Field(default=40, description="Maximum number of samples kept")

    @field_validator("max_size")
    @classmethod
    def validate_max_size(cls, v: int) -> int:
        """Validate that max_size is positive.

        Raises:
            ValueError: If max_size is not positive.
        """
        if v <= 0:
            raise ValueError("max_size must be positive")
        return v

    @model_validator(mode="after")
    def trim_points_to_max_size(self) -> "ScoreHistory":
        """Trim points if initialized with more than max_size."""
        if len(self.points) > self.max_size:
            self.points = self.points[-self.max_size :]
        return self

    @property
    def latest(self) -> Optional[ScorePoint]:
        return self.points[-1] if self.points else None

    def record(self, point: ScorePoint) -> Optional[ScorePoint]:
        """Append a sample, dropping the oldest if the buffer is full.

        Args:
            point: Sample to append.

        Returns:
            The dropped sample, or None if nothing was dropped.
        """
        self.points.append(point)
        if len(self.points) > self.max_size:
            return self.points.pop(0)
        return None

    def clear(self) -> None:
        self.points.clear()

    def to_list(self) -> list[dict]:
        """Export samples as JSON-friendly dicts, oldest first."""
        return [point.model_dump(mode="json") for point in self.points]
