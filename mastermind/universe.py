from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

Combination = Tuple[int, ...]


def enumerate_combinations(num_colors: int, num_spaces: int) -> List[Combination]:
    """
    Run a `num_spaces`-digit counter in base `num_colors` and snapshot it
    after every increment, starting from all zeros. Position 0 is the least
    significant digit. Stops once the most significant digit overflows.

    With `num_spaces == 0` the counter has no digits, so the only snapshot
    is the empty combination.
    """
    digits = [0] * num_spaces
    out: List[Combination] = []
    while True:
        out.append(tuple(digits))
        pos = 0
        while pos < num_spaces:
            digits[pos] += 1
            if digits[pos] < num_colors:
                break
            digits[pos] = 0
            pos += 1
        if pos == num_spaces:
            return out


class CombinationUniverse:
    """
    Every legal guess for a game shape, in counter order.

    Index `i` maps to the same combination for the lifetime of the object;
    nothing here is mutable after construction.
    """

    def __init__(self, num_colors: int, num_spaces: int, combinations: Sequence[Combination]) -> None:
        if not isinstance(num_colors, int) or num_colors <= 0:
            raise ValueError("num_colors must be a positive integer")
        if not isinstance(num_spaces, int) or num_spaces < 0:
            raise ValueError("num_spaces must be a non-negative integer")
        if len(combinations) != num_colors ** num_spaces:
            raise ValueError(
                f"expected {num_colors ** num_spaces} combinations, got {len(combinations)}"
            )

        self._num_colors = num_colors
        self._num_spaces = num_spaces
        self._combinations: List[Combination] = [tuple(c) for c in combinations]
        self._index = {c: i for i, c in enumerate(self._combinations)}
        if len(self._index) != len(self._combinations):
            raise ValueError("duplicate combinations detected")

        codes = np.array(self._combinations, dtype=np.int32).reshape(len(self._combinations), num_spaces)
        counts = np.stack([(codes == c).sum(axis=1) for c in range(num_colors)], axis=1).astype(np.int32)
        codes.setflags(write=False)
        counts.setflags(write=False)
        self._codes = codes
        self._color_counts = counts

    # ---------- Construction helpers ----------

    @classmethod
    def build(cls, num_colors: int, num_spaces: int) -> "CombinationUniverse":
        """Enumerate all `num_colors ** num_spaces` combinations."""
        if not isinstance(num_colors, int) or num_colors <= 0:
            raise ValueError("num_colors must be a positive integer")
        if not isinstance(num_spaces, int) or num_spaces < 0:
            raise ValueError("num_spaces must be a non-negative integer")
        combos = enumerate_combinations(num_colors, num_spaces)
        logger.debug("built universe of %d combinations (%d colors, %d spaces)",
                     len(combos), num_colors, num_spaces)
        return cls(num_colors, num_spaces, combos)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        return len(self._combinations)

    def __repr__(self) -> str:
        return f"CombinationUniverse(num_colors={self._num_colors}, num_spaces={self._num_spaces})"

    @property
    def num_colors(self) -> int:
        return self._num_colors

    @property
    def num_spaces(self) -> int:
        return self._num_spaces

    @property
    def codes(self) -> np.ndarray:
        """Read-only (N, num_spaces) array of colors."""
        return self._codes

    @property
    def color_counts(self) -> np.ndarray:
        """Read-only (N, num_colors) array of per-color occurrence counts."""
        return self._color_counts

    def combinations(self) -> List[Combination]:
        """Return a copy of the combination list."""
        return list(self._combinations)

    def contains(self, combination: Iterable[int]) -> bool:
        return tuple(combination) in self._index

    def index_of(self, combination: Iterable[int]) -> int:
        """Return the index for `combination`; raise KeyError if it is not legal."""
        key = tuple(combination)
        try:
            return self._index[key]
        except KeyError:
            raise KeyError(f"unknown combination: {list(key)}") from None

    def combination_at(self, idx: int) -> Combination:
        """Return the combination at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._combinations):
            raise IndexError(f"index out of range: {idx}")
        return self._combinations[idx]

    def to_indices(self, combinations: Iterable[Iterable[int]]) -> List[int]:
        return [self.index_of(c) for c in combinations]

    def to_combinations(self, indices: Iterable[int]) -> List[Combination]:
        return [self.combination_at(i) for i in indices]

    def to_frame(self) -> pd.DataFrame:
        """One row per combination, one column per position."""
        df = pd.DataFrame(self._codes, columns=[f"pos_{i}" for i in range(self._num_spaces)])
        df.index.name = "index"
        return df
