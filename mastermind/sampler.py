from __future__ import annotations

import random
from mastermind.universe import Combination, CombinationUniverse


class CombinationSampler:
    def __init__(self, universe: CombinationUniverse, seed: int | None = None) -> None:
        if not isinstance(universe, CombinationUniverse):
            raise TypeError("universe must be a CombinationUniverse")
        if len(universe) == 0:
            raise ValueError("universe is empty")

        self._universe = universe

        # Create RNG (deterministic if seed provided)
        self._rng = random.Random(seed)

    def set_seed(self, seed: int) -> None:
        self._rng = random.Random(seed)

    def choice_index(self) -> int:
        return self._rng.randrange(len(self._universe))

    def choice_combination(self) -> Combination:
        return self._universe.combination_at(self.choice_index())

    def batch_indices(self, k: int) -> list[int]:
        if not isinstance(k, int) or k <= 0:
            raise ValueError("k must be a positive integer")
        return [self.choice_index() for _ in range(k)]
