"""Injectable randomness source for the simulation.

Every random draw the engine makes goes through one RandomSource so a
seeded session replays identically.
"""

import random
from typing import Optional


class RandomSource:
    """Seeded wrapper around random.Random.

    Args:
        seed: Seed for the underlying generator. None seeds from the OS.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def uniform(self, low: float, high: float) -> float:
        """Draw a float in [low, high)."""
        return low + (high - low) * self._random.random()

    def noise(self, amplitude: float) -> float:
        """Draw symmetric noise in [-amplitude/2, amplitude/2)."""
        return (self._random.random() - 0.5) * amplitude

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self._random.random() < probability

    def reseed(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._random.seed(seed)
