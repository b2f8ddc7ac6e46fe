"""
solver/solver_cli.py

Mastermind code-breaker (human-in-the-loop):
- The solver suggests a guess each turn (the minimax choice).
- YOU play it against the real code and type the score: white then black,
  e.g. '2 1', or tagged like 'b1 w2'.
- The solver prunes candidates and suggests the next guess until solved.

Simulated play instead of typing scores:
  python -m solver.solver_cli --answer ABCD
  python -m solver.solver_cli --random --seed 7

Run:
  python -m solver.solver_cli --colors 6 --spaces 4

Shortcuts:
  quit / q / exit  -> exit
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from mastermind.config import CONFIG
from mastermind.decision import DecisionEngine
from mastermind.errors import MastermindError
from mastermind.feedback import Score
from mastermind.game import GameResult, Outcome, Turn, play_game, play_interactive
from mastermind.render import format_combination, format_score, parse_combination, parse_score
from mastermind.sampler import CombinationSampler
from mastermind.subset import CandidateSubset
from mastermind.universe import Combination, CombinationUniverse

QUIT_WORDS = {"q", "quit", "exit"}


class UserQuit(Exception):
    pass


def _ask_score(num_spaces: int, use_color: bool):
    def ask(guess: Combination) -> Score:
        print(f"Guess: {format_combination(guess, color=use_color)}  ({format_combination(guess)})")
        while True:
            raw = input("Score (white black): ").strip()
            if raw.lower() in QUIT_WORDS:
                raise UserQuit()
            try:
                return parse_score(raw, num_spaces)
            except ValueError as e:
                print("Invalid score:", e)
    return ask


def _print_turn(use_color: bool, show_limit: int = 10):
    def on_turn(turn: Turn, subset: CandidateSubset) -> None:
        print(f"  {format_combination(turn.guess, color=use_color)}  {format_score(turn.score)}"
              f"  -> {turn.remaining} candidate(s) left")
        if 0 < len(subset) <= show_limit:
            print("  Candidates:", ", ".join(format_combination(c) for c in subset.combinations()))
    return on_turn


def _report(result: GameResult, universe: CombinationUniverse) -> int:
    if result.outcome is Outcome.SOLVED:
        code = format_combination(universe.combination_at(result.answer_index))
        print(f"Solved! The code is {code} ({result.num_turns} turns)")
        return 0
    if result.outcome is Outcome.DETERMINED:
        code = format_combination(universe.combination_at(result.answer_index))
        print(f"The code must be {code} (out of turns before guessing it)")
        return 0
    if result.outcome is Outcome.CONTRADICTION:
        print("No combination fits the scores given. Check your feedback inputs.")
        return 2
    print(f"Out of turns after {result.num_turns} guesses.")
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Minimax Mastermind solver")
    ap.add_argument("--colors", type=int, default=CONFIG["num_colors"], help="Number of colors")
    ap.add_argument("--spaces", type=int, default=CONFIG["num_spaces"], help="Number of positions")
    ap.add_argument("--first", default=None,
                    help="Opening guess, e.g. AABB (default: AABB for 6x4, else the engine's choice)")
    ap.add_argument("--max-turns", type=int, default=CONFIG["max_turns"], help="Turn budget")
    ap.add_argument("--workers", type=int, default=CONFIG["max_workers"], help="Worker threads for the search")
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--answer", default=None, help="Play against this code instead of asking for scores")
    mode.add_argument("--random", action="store_true", help="Play against a random code")
    ap.add_argument("--seed", type=int, default=CONFIG["seed"], help="RNG seed for --random")
    ap.add_argument("--no-color", action="store_true", help="Plain letters only")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        universe = CombinationUniverse.build(args.colors, args.spaces)
    except ValueError as e:
        ap.error(str(e))

    initial_guess = None
    try:
        if args.first is not None:
            initial_guess = parse_combination(args.first, args.colors, args.spaces)
        elif universe.contains(CONFIG["initial_guess"]):
            initial_guess = CONFIG["initial_guess"]
    except ValueError as e:
        ap.error(f"--first: {e}")

    use_color = not args.no_color and sys.stdout.isatty()
    engine = DecisionEngine(max_workers=args.workers)
    kwargs = dict(initial_guess=initial_guess, max_turns=args.max_turns, engine=engine,
                  on_turn=_print_turn(use_color))

    print(f"\nMastermind solver: {args.colors} colors, {args.spaces} spaces, {len(universe)} combinations.")

    try:
        if args.answer is not None or args.random:
            if args.random:
                answer = CombinationSampler(universe, seed=args.seed).choice_combination()
            else:
                try:
                    answer = parse_combination(args.answer, args.colors, args.spaces)
                except ValueError as e:
                    ap.error(f"--answer: {e}")
            print(f"Secret code: {format_combination(answer, color=use_color)}")
            result = play_game(universe, answer, **kwargs)
        else:
            print("After each suggested guess, type the score you got (white black). Type 'quit' to exit.\n")
            result = play_interactive(universe, _ask_score(args.spaces, use_color), **kwargs)
    except UserQuit:
        print("bye!")
        return 0
    except MastermindError as e:
        print("Solver error:", e)
        return 2

    return _report(result, universe)


if __name__ == "__main__":
    sys.exit(main())
