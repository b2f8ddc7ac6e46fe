"""
decision.py

Minimax selection of the next guess.

For a candidate guess c and the remaining subset S, every hypothetical
answer a in S would eliminate the members r whose score against c differs
from score(c, a). The guess's worst case ("fewest eliminations") is

    |S| - size of the largest score partition of S induced by c

and the engine picks the guess that maximizes it over the whole universe.
Guesses outside S are allowed: a guess known to be wrong can still split
the candidates best.

Evaluation is a parallel map over chunks of guess indices followed by a
single-threaded fold through `BestChoices`. Workers share one
`PruningBound` so a guess can be abandoned once its running value falls
below a value some other guess already achieved.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from mastermind.config import CONFIG
from mastermind.errors import NoConsistentAnswerError
from mastermind.feedback import score_codes
from mastermind.subset import CandidateSubset
from mastermind.universe import CombinationUniverse

logger = logging.getLogger(__name__)


def fewest_eliminations(
    universe: CombinationUniverse,
    guess_index: int,
    subset: CandidateSubset,
    threshold: Optional[int] = None,
    block_size: int = CONFIG["block_size"],
) -> int:
    """
    Worst-case number of candidates `guess_index` is guaranteed to eliminate.

    Members are scored in blocks of `block_size`, accumulating a histogram
    of score codes. The running value |S| - max(histogram) never increases
    as more members are seen, so once it is strictly below `threshold` the
    scan stops and that partial value is returned.
    """
    members = subset.as_array()
    n = len(members)
    if n == 0:
        return 0
    bins = (universe.num_spaces + 1) ** 2
    hist = np.zeros(bins, dtype=np.int64)
    largest = 0
    for start in range(0, n, block_size):
        codes = score_codes(universe, guess_index, members[start:start + block_size])
        hist += np.bincount(codes, minlength=bins)
        largest = int(hist.max())
        if threshold is not None and n - largest < threshold:
            break
    return n - largest


class BestChoices:
    """
    Best fewest-eliminations value seen and every index that achieves it.

    A strictly greater value clears the tie list before inserting; an equal
    value appends. `record` is safe to call from several threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._best: Optional[int] = None
        self._choices: List[int] = []

    def record(self, index: int, value: int) -> None:
        with self._lock:
            if self._best is None or value > self._best:
                self._best = value
                self._choices = [index]
            elif value == self._best:
                self._choices.append(index)

    @property
    def best(self) -> Optional[int]:
        return self._best

    @property
    def choices(self) -> List[int]:
        with self._lock:
            return list(self._choices)


class PruningBound:
    """
    Largest fewest-eliminations value any fully evaluated guess reached.

    Reads are unlocked and may be stale; a stale (lower) bound only prunes
    less. Raising the bound takes the lock and never lowers it.
    """

    def __init__(self, value: int = 0) -> None:
        self._lock = threading.Lock()
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def raise_to(self, value: int) -> None:
        with self._lock:
            if value > self._value:
                self._value = value


@dataclass(frozen=True)
class Decision:
    index: int
    fewest_eliminations: int
    ties: Tuple[int, ...]
    remaining: int

    @property
    def worst_case_remaining(self) -> int:
        """Candidates left after this guess in the worst case."""
        return self.remaining - self.fewest_eliminations


class DecisionEngine:
    """
    Picks the guess that maximizes the guaranteed number of eliminations.

    Tie-break: the lowest-index tied guess that is still a candidate (it
    might be the answer); if no tied guess is a candidate, the lowest-index
    tied guess. The choice is therefore independent of thread scheduling.
    """

    def __init__(
        self,
        *,
        max_workers: Optional[int] = CONFIG["max_workers"],
        chunk_size: int = CONFIG["chunk_size"],
        block_size: int = CONFIG["block_size"],
        progress: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        if max_workers is not None and max_workers <= 0:
            raise ValueError("max_workers must be positive or None")
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        self.max_workers = max_workers
        self.chunk_size = int(chunk_size)
        self.block_size = int(block_size)
        self.progress = progress

    def decide(self, subset: CandidateSubset, universe: Optional[CombinationUniverse] = None) -> int:
        """Index (into the universe) of the next guess."""
        return self.evaluate(subset, universe).index

    def evaluate(self, subset: CandidateSubset, universe: Optional[CombinationUniverse] = None) -> Decision:
        universe = self._check_universe(subset, universe)
        if subset.is_empty:
            raise NoConsistentAnswerError("no combination is consistent with the feedback given")
        if subset.is_determined:
            (only,) = subset.members
            return Decision(index=only, fewest_eliminations=0, ties=(only,), remaining=1)

        results = self._map(universe, subset)
        best = BestChoices()
        for start in sorted(results):
            for idx, value in results[start]:
                best.record(idx, value)

        ties = tuple(sorted(best.choices))
        in_subset = [i for i in ties if i in subset]
        index = in_subset[0] if in_subset else ties[0]
        logger.debug(
            "decided %d: fewest eliminations %d of %d remaining (%d tied, %d candidates among them)",
            index, best.best, len(subset), len(ties), len(in_subset),
        )
        return Decision(index=index, fewest_eliminations=int(best.best), ties=ties, remaining=len(subset))

    # -------------------------
    # Helpers
    # -------------------------
    def _map(self, universe: CombinationUniverse, subset: CandidateSubset) -> Dict[int, List[Tuple[int, int]]]:
        n = len(universe)
        starts = list(range(0, n, self.chunk_size))
        bound = PruningBound()
        results: Dict[int, List[Tuple[int, int]]] = {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self._evaluate_chunk, universe, subset,
                                range(s, min(s + self.chunk_size, n)), bound): s
                for s in starts
            }
            for done, fut in enumerate(as_completed(futures), start=1):
                results[futures[fut]] = fut.result()
                if self.progress is not None:
                    self.progress(done, len(starts))
        return results

    def _evaluate_chunk(
        self,
        universe: CombinationUniverse,
        subset: CandidateSubset,
        indices: Sequence[int],
        bound: PruningBound,
    ) -> List[Tuple[int, int]]:
        out: List[Tuple[int, int]] = []
        for idx in indices:
            threshold = bound.value
            value = fewest_eliminations(universe, idx, subset, threshold=threshold,
                                        block_size=self.block_size)
            if value >= threshold:
                # not pruned, so the value is exact
                bound.raise_to(value)
            out.append((idx, value))
        return out

    @staticmethod
    def _check_universe(subset: CandidateSubset, universe: Optional[CombinationUniverse]) -> CombinationUniverse:
        if not isinstance(subset, CandidateSubset):
            raise TypeError("subset must be a CandidateSubset")
        if universe is None or universe is subset.universe:
            return subset.universe
        if (universe.num_colors, universe.num_spaces) != (subset.universe.num_colors, subset.universe.num_spaces):
            raise ValueError("subset does not index into the given universe")
        return universe


def decide(
    subset: CandidateSubset,
    universe: Optional[CombinationUniverse] = None,
    **engine_kwargs,
) -> int:
    """One-shot helper: build a DecisionEngine and return its next guess index."""
    return DecisionEngine(**engine_kwargs).decide(subset, universe)
