from mastermind.config import CONFIG
from mastermind.decision import DecisionEngine
from mastermind.game import Outcome, play_game
from mastermind.render import format_combination, format_score
from mastermind.sampler import CombinationSampler
from mastermind.universe import CombinationUniverse

universe = CombinationUniverse.build(CONFIG["num_colors"], CONFIG["num_spaces"])
sampler = CombinationSampler(universe, seed=123)
engine = DecisionEngine()

print("Universe size:", len(universe))

# ---- Minimax over sampled answers ----
N = 20
turn_counts = []
outcomes = {outcome: 0 for outcome in Outcome}
for answer_idx in sampler.batch_indices(N):
    result = play_game(
        universe,
        universe.combination_at(answer_idx),
        initial_guess=CONFIG["initial_guess"],
        engine=engine,
    )
    outcomes[result.outcome] += 1
    if result.solved:
        turn_counts.append(result.num_turns)

avg_turns = sum(turn_counts) / len(turn_counts) if turn_counts else float('nan')
print("\n=== Minimax Solver ===")
print(f"Games: {N}")
print("Outcomes:", {o.value: n for o, n in outcomes.items() if n})
print(f"Avg turns (solved only): {avg_turns:.2f}")
print(f"Max turns: {max(turn_counts, default=0)}")

# ---- One game, turn by turn ----
print("\n=== Minimax Game ===")
answer = sampler.choice_combination()


def _print_turn(turn, subset):
    print(f"guess={format_combination(turn.guess)} {format_score(turn.score)} remaining={turn.remaining}")


result = play_game(
    universe,
    answer,
    initial_guess=CONFIG["initial_guess"],
    engine=engine,
    on_turn=_print_turn,
)
print(f"MINIMAX FINAL: outcome={result.outcome.value} answer={format_combination(answer)} turns={result.num_turns}")
