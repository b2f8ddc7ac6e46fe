"""
Feedback utilities for Mastermind.

A score is the pair (white, black):
- black = positions where guess and answer hold the same color
- white = further color matches, ignoring position

Two answers are indistinguishable by a guess iff the guess produces the
same score against both, so score equality is the filter predicate used
everywhere else.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np

from mastermind.errors import CombinationLengthError

Combination = Sequence[int]


class Score(NamedTuple):
    white: int
    black: int


def compute_score(guess: Combination, answer: Combination) -> Score:
    """
    Compute the Mastermind feedback for `guess` against `answer`.

    Pass 1 counts exact matches and finds the largest color used by either
    side. Pass 2 builds per-color occurrence counts; the overlap
    sum(min(guess_count, answer_count)) counts every exact match too, so
    `black` is subtracted once to get `white`.

    Raises
    ------
    CombinationLengthError
        If the two combinations have different lengths.
    """
    n = len(guess)
    if len(answer) != n:
        raise CombinationLengthError(n, len(answer))

    black = 0
    max_color = -1
    for g, a in zip(guess, answer):
        if g == a:
            black += 1
        if g > max_color:
            max_color = g
        if a > max_color:
            max_color = a

    guess_counts = [0] * (max_color + 1)
    answer_counts = [0] * (max_color + 1)
    for g, a in zip(guess, answer):
        guess_counts[g] += 1
        answer_counts[a] += 1

    overlap = sum(min(gc, ac) for gc, ac in zip(guess_counts, answer_counts))
    if overlap < black:
        raise AssertionError(f"color overlap {overlap} below exact matches {black}")
    return Score(white=overlap - black, black=black)


def score_to_int(score: Score, num_spaces: int) -> int:
    """
    Encode a score as black * (num_spaces + 1) + white.

    Every valid score for `num_spaces` maps to a distinct value in
    [0, (num_spaces + 1) ** 2), which makes it usable as a histogram bin.
    """
    white, black = score
    if white < 0 or black < 0 or white + black > num_spaces:
        raise ValueError(f"invalid score {tuple(score)} for {num_spaces} spaces")
    return black * (num_spaces + 1) + white


def int_to_score(code: int, num_spaces: int) -> Score:
    """Inverse of `score_to_int`."""
    if code < 0:
        raise ValueError(f"score code must be non-negative, got {code}")
    black, white = divmod(code, num_spaces + 1)
    if white + black > num_spaces:
        raise ValueError(f"score code {code} out of range for {num_spaces} spaces")
    return Score(white=white, black=black)


def consistent_with(candidate: Combination, guess: Combination, score: Score) -> bool:
    """True iff `candidate`, taken as the answer, would have produced `score` for `guess`."""
    return compute_score(guess, candidate) == tuple(score)


def score_codes(universe, guess_index: int, indices: np.ndarray) -> np.ndarray:
    """
    Encoded scores (see `score_to_int`) of one guess against many members.

    Vectorized over the universe's `codes` and `color_counts` arrays; agrees
    element-wise with `compute_score`.
    """
    codes = universe.codes
    counts = universe.color_counts
    black = (codes[indices] == codes[guess_index]).sum(axis=1)
    overlap = np.minimum(counts[indices], counts[guess_index]).sum(axis=1)
    white = overlap - black
    return black * (universe.num_spaces + 1) + white


if __name__ == "__main__":
    # Quick sanity checks
    assert compute_score([0, 1, 2, 3], [3, 2, 1, 0]) == Score(4, 0)
    assert compute_score([0, 0, 1, 1], [0, 1, 0, 1]) == Score(2, 2)
    assert compute_score([0, 0, 1, 1], [0, 0, 1, 1]) == Score(0, 4)
    assert compute_score([0, 0, 0, 0], [1, 1, 1, 1]) == Score(0, 0)
    assert score_to_int(Score(0, 4), 4) == 20
    assert int_to_score(20, 4) == Score(0, 4)
    print("feedback.py sanity checks passed.")
