"""Unit tests for RandomSource."""

from models.randomness import RandomSource


class TestRandomSource:
    def test_same_seed_same_sequence(self):
        a = RandomSource(seed=7)
        b = RandomSource(seed=7)
        assert [a.uniform(0, 10) for _ in range(5)] == [b.uniform(0, 10) for _ in range(5)]

    def test_uniform_range(self):
        rng = RandomSource(seed=1)
        for _ in range(200):
            value = rng.uniform(15000, 25000)
            assert 15000 <= value <= 25000

    def test_noise_is_symmetric_half_amplitude(self):
        rng = RandomSource(seed=2)
        values = [rng.noise(1.0) for _ in range(500)]
        assert all(-0.5 <= v < 0.5 for v in values)
        assert min(values) < 0 < max(values)

    def test_zero_amplitude_noise(self):
        assert RandomSource(seed=3).noise(0.0) == 0.0

    def test_chance_extremes(self):
        rng = RandomSource(seed=4)
        assert not any(rng.chance(0.0) for _ in range(100))
        assert all(rng.chance(1.0) for _ in range(100))

    def test_reseed_replays(self):
        rng = RandomSource(seed=5)
        first = [rng.uniform(0, 1) for _ in range(3)]
        rng.reseed(5)
        assert [rng.uniform(0, 1) for _ in range(3)] == first
