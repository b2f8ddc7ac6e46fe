"""
starting_guess/eval_whole_game_sim.py

Simulate *full games* to evaluate opening guesses.
For each opening, play the minimax solver against a set of answers
(every combination, or a random sample) and record how many turns it took.

Usage examples:
  python -m starting_guess.eval_whole_game_sim --first AABB ABCD
  python -m starting_guess.eval_whole_game_sim --episodes 200 --seed 1 --first AABB
  python -m starting_guess.eval_whole_game_sim --colors 4 --spaces 3

Outputs a CSV with one row per game and prints a summary per opening.
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import List, Optional, Sequence

import pandas as pd

from mastermind.config import CONFIG
from mastermind.decision import DecisionEngine
from mastermind.game import play_game
from mastermind.render import format_combination, parse_combination
from mastermind.sampler import CombinationSampler
from mastermind.universe import Combination, CombinationUniverse


def simulate_games(
    universe: CombinationUniverse,
    openings: Sequence[Optional[Combination]],
    answers: Sequence[int],
    *,
    max_turns: int = CONFIG["max_turns"],
    engine: Optional[DecisionEngine] = None,
    progress: bool = True,
) -> pd.DataFrame:
    """
    One row per (opening, answer) game with columns
    opening, answer, outcome, turns.
    An opening of None lets the engine pick the first guess too.
    """
    engine = engine or DecisionEngine()
    rows: List[dict] = []
    for opening in openings:
        label = format_combination(opening) if opening is not None else "minimax"
        for gi, answer_idx in enumerate(answers, start=1):
            answer = universe.combination_at(answer_idx)
            result = play_game(universe, answer, initial_guess=opening, max_turns=max_turns, engine=engine)
            rows.append({
                "opening": label,
                "answer": format_combination(answer),
                "outcome": result.outcome.value,
                "turns": result.num_turns,
            })
            if progress and gi % 100 == 0:
                print(f"[{label}] played {gi}/{len(answers)} games...", flush=True)
    return pd.DataFrame(rows, columns=["opening", "answer", "outcome", "turns"])


def summarize(games: pd.DataFrame) -> pd.DataFrame:
    """Per-opening solve rate and turn statistics over solved games."""
    solved = games[games["outcome"] == "solved"]
    stats = solved.groupby("opening")["turns"].agg(["mean", "median", "max"])
    stats["games"] = games.groupby("opening").size()
    stats["solve_rate"] = solved.groupby("opening").size() / stats["games"]
    return stats.sort_values(["solve_rate", "mean"], ascending=[False, True])


def main():
    ap = argparse.ArgumentParser(description="Whole-game evaluation of Mastermind opening guesses.")
    ap.add_argument("--colors", type=int, default=CONFIG["num_colors"])
    ap.add_argument("--spaces", type=int, default=CONFIG["num_spaces"])
    ap.add_argument("--first", nargs="*", default=None,
                    help="Opening guesses to test (default: the configured opening, or the engine's choice)")
    ap.add_argument("--episodes", type=int, default=None,
                    help="Sample this many random answers instead of playing every combination")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed for answer sampling")
    ap.add_argument("--max-turns", type=int, default=CONFIG["max_turns"])
    ap.add_argument("--workers", type=int, default=CONFIG["max_workers"])
    ap.add_argument("--out", default="whole_game_results.csv", help="Output CSV path")
    ap.add_argument("--progress", action=argparse.BooleanOptionalAction, default=True)
    args = ap.parse_args()

    logging.basicConfig(level=logging.WARNING)

    universe = CombinationUniverse.build(args.colors, args.spaces)
    if args.first:
        openings = [parse_combination(s, args.colors, args.spaces) for s in args.first]
    elif universe.contains(CONFIG["initial_guess"]):
        openings = [CONFIG["initial_guess"]]
    else:
        openings = [None]

    if args.episodes is not None:
        answers = CombinationSampler(universe, seed=args.seed).batch_indices(args.episodes)
    else:
        answers = list(range(len(universe)))

    print(f"Playing {len(answers)} games for each of {len(openings)} opening(s) "
          f"({args.colors} colors, {args.spaces} spaces)", flush=True)
    t0 = time.perf_counter()
    games = simulate_games(universe, openings, answers, max_turns=args.max_turns,
                           engine=DecisionEngine(max_workers=args.workers), progress=args.progress)
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)

    print(summarize(games).to_string())
    print("\nTurn distribution:")
    print(games.groupby(["opening", "turns"]).size().unstack(fill_value=0).to_string())

    games.to_csv(args.out, index=False)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
