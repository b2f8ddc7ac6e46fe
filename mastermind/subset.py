"""
subset.py

Candidate subsets: the combinations still consistent with all feedback so far.
"""

from __future__ import annotations

import logging
from typing import Callable, FrozenSet, Iterable, List, Sequence, Tuple

import numpy as np

from mastermind.feedback import Score, compute_score
from mastermind.universe import Combination, CombinationUniverse

logger = logging.getLogger(__name__)


class CandidateSubset:
    """
    A universe plus a set of unique indices into it.

    Subsets are never mutated. Every filter returns a new subset whose
    members are a subset of the receiver's; an empty result means no
    combination fits the feedback and is left to the caller to report.
    """

    def __init__(self, universe: CombinationUniverse, indices: Iterable[int]) -> None:
        if not isinstance(universe, CombinationUniverse):
            raise TypeError("universe must be a CombinationUniverse")
        members = frozenset(indices)
        n = len(universe)
        for i in members:
            if not isinstance(i, (int, np.integer)) or i < 0 or i >= n:
                raise IndexError(f"index out of range: {i}")
        self._universe = universe
        self._members: FrozenSet[int] = frozenset(int(i) for i in members)
        self._array = None

    @classmethod
    def full(cls, universe: CombinationUniverse) -> "CandidateSubset":
        """Every combination in the universe; the state at game start."""
        return cls(universe, range(len(universe)))

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, idx: object) -> bool:
        return idx in self._members

    def __repr__(self) -> str:
        return f"CandidateSubset({len(self)} of {len(self._universe)})"

    @property
    def universe(self) -> CombinationUniverse:
        return self._universe

    @property
    def members(self) -> FrozenSet[int]:
        return self._members

    @property
    def is_empty(self) -> bool:
        return not self._members

    @property
    def is_determined(self) -> bool:
        """Exactly one candidate is left."""
        return len(self._members) == 1

    def sorted_members(self) -> List[int]:
        return sorted(self._members)

    def as_array(self) -> np.ndarray:
        """Sorted member indices as a read-only int array (cached)."""
        if self._array is None:
            arr = np.fromiter(sorted(self._members), dtype=np.int64, count=len(self._members))
            arr.setflags(write=False)
            self._array = arr
        return self._array

    def combinations(self) -> List[Combination]:
        return self._universe.to_combinations(self.sorted_members())

    # ---------- Filtering ----------

    def filter(self, predicate: Callable[[Combination], bool]) -> "CandidateSubset":
        """Keep the members whose combination satisfies `predicate`."""
        kept = [i for i in self._members if predicate(self._universe.combination_at(i))]
        return CandidateSubset(self._universe, kept)

    def filter_by_score(self, guess: Sequence[int], observed: Score) -> "CandidateSubset":
        """Keep index i iff compute_score(guess, universe[i]) == observed."""
        observed = tuple(observed)
        out = self.filter(lambda combo: compute_score(guess, combo) == observed)
        logger.debug("filter %s score=%s: %d -> %d candidates",
                     list(guess), observed, len(self), len(out))
        return out


def filter_candidates(
    universe: CombinationUniverse, history: Sequence[Tuple[Sequence[int], Score]]
) -> CandidateSubset:
    """
    Start from the full universe and keep only the candidates that match
    *all* (guess, score) pairs in history.
    """
    subset = CandidateSubset.full(universe)
    for guess, score in history:
        subset = subset.filter_by_score(guess, score)
    return subset
