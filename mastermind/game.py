"""
game.py

The turn loop: guess, get a score, narrow the candidates, repeat.

`play_game` scores guesses against a known answer (simulation);
`play_interactive` asks a callback for each score (live play).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from mastermind.config import CONFIG
from mastermind.decision import DecisionEngine
from mastermind.feedback import Score, compute_score
from mastermind.subset import CandidateSubset
from mastermind.universe import Combination, CombinationUniverse

logger = logging.getLogger(__name__)


class Outcome(Enum):
    SOLVED = "solved"                # a guess scored all black
    DETERMINED = "determined"        # one candidate left, not guessed yet
    CONTRADICTION = "contradiction"  # no candidate fits the scores given
    TURN_LIMIT = "turn_limit"        # out of turns with several candidates left


@dataclass(frozen=True)
class Turn:
    guess_index: int
    guess: Combination
    score: Score
    remaining: int


@dataclass
class GameResult:
    outcome: Outcome
    turns: List[Turn] = field(default_factory=list)
    answer_index: Optional[int] = None

    @property
    def num_turns(self) -> int:
        return len(self.turns)

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED


def play_interactive(
    universe: CombinationUniverse,
    ask_score: Callable[[Combination], Sequence[int]],
    *,
    initial_guess: Optional[Sequence[int]] = None,
    max_turns: int = CONFIG["max_turns"],
    engine: Optional[DecisionEngine] = None,
    play_determined: bool = True,
    on_turn: Optional[Callable[[Turn, CandidateSubset], None]] = None,
) -> GameResult:
    """
    Run the turn loop, asking `ask_score(guess)` for each (white, black) score.

    The first guess is `initial_guess` when given, otherwise the engine's
    choice. With `play_determined=False` the loop stops as soon as a single
    candidate remains instead of spending a turn to guess it.
    """
    if max_turns <= 0:
        raise ValueError("max_turns must be positive")
    engine = engine or DecisionEngine()
    solved_score = Score(white=0, black=universe.num_spaces)
    subset = CandidateSubset.full(universe)
    turns: List[Turn] = []

    while len(turns) < max_turns:
        if not turns and initial_guess is not None:
            guess_index = universe.index_of(initial_guess)
        else:
            guess_index = engine.decide(subset)
        guess = universe.combination_at(guess_index)

        score = Score(*ask_score(guess))
        subset = subset.filter_by_score(guess, score)
        turn = Turn(guess_index=guess_index, guess=guess, score=score, remaining=len(subset))
        turns.append(turn)
        if on_turn is not None:
            on_turn(turn, subset)

        if subset.is_empty:
            logger.info("no candidate fits the scores after %d turns", len(turns))
            return GameResult(Outcome.CONTRADICTION, turns)
        if score == solved_score:
            logger.info("solved in %d turns", len(turns))
            return GameResult(Outcome.SOLVED, turns, guess_index)
        if subset.is_determined and not play_determined:
            (only,) = subset.members
            return GameResult(Outcome.DETERMINED, turns, only)

    if subset.is_determined:
        (only,) = subset.members
        return GameResult(Outcome.DETERMINED, turns, only)
    logger.info("turn limit %d reached with %d candidates left", max_turns, len(subset))
    return GameResult(Outcome.TURN_LIMIT, turns)


def play_game(
    universe: CombinationUniverse,
    answer: Sequence[int],
    **kwargs,
) -> GameResult:
    """Simulated game against a known answer; keyword arguments as for `play_interactive`."""
    answer = tuple(answer)
    if not universe.contains(answer):
        raise KeyError(f"answer {list(answer)} is not in the universe")
    return play_interactive(universe, lambda guess: compute_score(guess, answer), **kwargs)
