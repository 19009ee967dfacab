"""Unit tests for ScoreHistory and ScorePoint."""

import pytest
from pydantic import ValidationError

from models.history import ScoreHistory, ScorePoint


def make_points(count: int) -> list[ScorePoint]:
    return [ScorePoint(tick=i * 20, stock_score=40.0 + i) for i in range(count)]


class TestScoreHistory:
    def test_defaults(self):
        history = ScoreHistory()
        assert history.max_size == 40
        assert history.points == []
        assert history.latest is None

    def test_invalid_max_size(self):
        with pytest.raises(ValidationError):
            ScoreHistory(max_size=-1)

    def test_record_and_latest(self):
        history = ScoreHistory()
        dropped = history.record(ScorePoint(tick=20, stock_score=41.5))

        assert dropped is None
        assert history.latest.stock_score == 41.5

    def test_ring_buffer_drops_oldest(self):
        history = ScoreHistory(max_size=3)
        for point in make_points(3):
            history.record(point)

        dropped = history.record(ScorePoint(tick=60, stock_score=99.0))

        assert dropped.tick == 0
        assert len(history.points) == 3
        assert [p.tick for p in history.points] == [20, 40, 60]

    def test_initial_points_trimmed(self):
        history = ScoreHistory(points=make_points(10), max_size=4)
        assert [p.tick for p in history.points] == [120, 140, 160, 180]

    def test_clear(self):
        history = ScoreHistory(points=make_points(3))
        history.clear()
        assert history.points == []

    def test_to_list(self):
        history = ScoreHistory(points=make_points(2))
        data = history.to_list()

        assert [p["tick"] for p in data] == [0, 20]
        assert isinstance(data[0]["timestamp"], str)
        assert data[1]["stock_score"] == 41.0
