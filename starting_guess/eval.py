"""
starting_guess/eval.py

Score candidate opening guesses by how well they split the full universe.

Metrics per guess:
- worst_case: size of the largest score partition (lower is better; the minimax criterion)
- fewest_eliminations: candidates the guess is guaranteed to eliminate
- exp_remaining: expected remaining candidates after the first score
- entropy: information gain in bits (higher is better)
- partitions: number of distinct scores induced

Usage:
  python -m starting_guess.eval
  python -m starting_guess.eval --colors 6 --spaces 4 --out opening_results.csv --top 10
"""

from __future__ import annotations

import argparse
import time
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from mastermind.config import CONFIG
from mastermind.feedback import score_codes
from mastermind.render import format_combination
from mastermind.subset import CandidateSubset
from mastermind.universe import CombinationUniverse

SORT_COLUMNS = ["worst_case", "exp_remaining", "entropy"]


def _score_histogram(universe: CombinationUniverse, guess_index: int, members: np.ndarray) -> np.ndarray:
    """Counts of each encoded score for one guess; empty bins dropped."""
    bins = (universe.num_spaces + 1) ** 2
    counts = np.bincount(score_codes(universe, guess_index, members), minlength=bins)
    return counts[counts > 0]


def _metrics_from_counts(counts: np.ndarray, total: int) -> Dict[str, float]:
    if total <= 0:
        raise ValueError("total must be positive")
    p = counts / total
    worst_case = int(counts.max())
    return {
        "worst_case": worst_case,
        "fewest_eliminations": total - worst_case,
        "exp_remaining": float((counts * counts).sum() / total),
        "entropy": float(-(p * np.log2(p)).sum()),
        "partitions": int(len(counts)),
    }


def evaluate_first_guesses(
    universe: CombinationUniverse,
    guesses: Optional[Sequence[int]] = None,
    *,
    progress: bool = False,
) -> pd.DataFrame:
    """
    Evaluate each opening guess (universe index) against every combination.

    Returns a DataFrame sorted best first by worst case, then expected
    remaining, then entropy (descending).
    """
    members = CandidateSubset.full(universe).as_array()
    pool = list(guesses) if guesses is not None else list(range(len(universe)))

    rows: List[Dict[str, float]] = []
    for i, g in enumerate(pool):
        row = {"guess": format_combination(universe.combination_at(g)), "index": g}
        row.update(_metrics_from_counts(_score_histogram(universe, g, members), len(members)))
        rows.append(row)
        if progress and (i + 1) % 250 == 0:
            print(f"Scored {i+1}/{len(pool)} guesses...", flush=True)

    df = pd.DataFrame(rows, columns=["guess", "index", "worst_case", "fewest_eliminations",
                                     "exp_remaining", "entropy", "partitions"])
    return df.sort_values(SORT_COLUMNS, ascending=[True, True, False], kind="stable").reset_index(drop=True)


def _print_top(results: pd.DataFrame, k: int = 20) -> None:
    print(f"\nTop {k} opening guesses by worst case:")
    print(f"{'rank':>4}  {'guess':<8}  {'worst':>5}  {'exp_rem':>8}  {'entropy':>8}  {'parts':>6}")
    for rank, r in enumerate(results.head(k).itertuples(index=False), start=1):
        print(f"{rank:>4}  {r.guess:<8}  {r.worst_case:>5}  {r.exp_remaining:>8.2f}  {r.entropy:>8.3f}  {r.partitions:>6}")


def main():
    ap = argparse.ArgumentParser(description="Evaluate Mastermind opening guesses.")
    ap.add_argument("--colors", type=int, default=CONFIG["num_colors"])
    ap.add_argument("--spaces", type=int, default=CONFIG["num_spaces"])
    ap.add_argument("--out", default="opening_results.csv", help="Output CSV filename")
    ap.add_argument("--top", type=int, default=15, help="How many top rows to print")
    ap.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show progress during evaluation (use --no-progress to disable)",
    )
    args = ap.parse_args()

    universe = CombinationUniverse.build(args.colors, args.spaces)
    print(f"Scoring {len(universe)} guesses against {len(universe)} combinations...", flush=True)
    t0 = time.perf_counter()
    results = evaluate_first_guesses(universe, progress=args.progress)
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)

    _print_top(results, k=args.top)
    results.to_csv(args.out, index=False)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
