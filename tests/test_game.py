import pytest

from mastermind.decision import DecisionEngine
from mastermind.feedback import Score, compute_score
from mastermind.game import Outcome, play_game, play_interactive
from mastermind.subset import CandidateSubset
from mastermind.universe import CombinationUniverse


@pytest.fixture(scope="module")
def universe():
    return CombinationUniverse.build(6, 4)


@pytest.mark.parametrize("answer", [(0, 1, 2, 3), (5, 5, 5, 5), (3, 1, 4, 1), (2, 4, 0, 4)])
def test_minimax_game_shrinks_every_turn(universe, answer):
    result = play_game(universe, answer, initial_guess=(0, 0, 1, 1), max_turns=10, engine=DecisionEngine())

    assert result.outcome is Outcome.SOLVED
    assert universe.combination_at(result.answer_index) == answer
    assert result.num_turns <= 6
    sizes = [len(universe)] + [t.remaining for t in result.turns]
    for before, after in zip(sizes, sizes[1:]):
        assert after < before or after == 1
    assert result.turns[-1].score == Score(white=0, black=4)
    assert result.turns[0].guess == (0, 0, 1, 1)


def test_engine_picks_opening_when_none_given():
    universe = CombinationUniverse.build(3, 3)
    result = play_game(universe, (2, 2, 1))
    assert result.solved
    assert result.turns[0].guess_index == DecisionEngine().decide(
        CandidateSubset.full(universe)
    )


def test_contradictory_scores_are_reported():
    universe = CombinationUniverse.build(2, 2)
    result = play_interactive(universe, lambda guess: (0, 0), initial_guess=(0, 0))
    assert result.outcome is Outcome.CONTRADICTION
    assert [t.remaining for t in result.turns] == [1, 0]
    assert result.answer_index is None


class _FixedEngine:
    def __init__(self, index):
        self.index = index

    def decide(self, subset):
        return self.index


def test_all_black_on_excluded_guess_is_a_contradiction():
    universe = CombinationUniverse.build(2, 2)

    def ask_score(guess):
        return (0, 0) if guess == (0, 0) else (0, 2)

    result = play_interactive(
        universe,
        ask_score,
        initial_guess=(0, 0),
        engine=_FixedEngine(universe.index_of((0, 1))),
    )
    assert result.outcome is Outcome.CONTRADICTION
    assert [t.remaining for t in result.turns] == [1, 0]
    assert result.turns[-1].score == Score(white=0, black=2)
    assert result.answer_index is None


def test_determined_without_guessing():
    universe = CombinationUniverse.build(2, 2)
    result = play_game(universe, (1, 1), initial_guess=(0, 0), play_determined=False)
    assert result.outcome is Outcome.DETERMINED
    assert result.num_turns == 1
    assert universe.combination_at(result.answer_index) == (1, 1)


def test_determined_guess_is_played_by_default():
    universe = CombinationUniverse.build(2, 2)
    result = play_game(universe, (1, 1), initial_guess=(0, 0))
    assert result.outcome is Outcome.SOLVED
    assert result.num_turns == 2


def test_turn_limit(universe):
    result = play_game(universe, (5, 5, 4, 4), initial_guess=(0, 0, 1, 1), max_turns=1)
    assert result.outcome is Outcome.TURN_LIMIT
    assert result.turns[0].score == compute_score((0, 0, 1, 1), (5, 5, 4, 4))
    assert result.turns[0].remaining == 256


def test_determined_when_budget_runs_out():
    universe = CombinationUniverse.build(2, 2)
    result = play_game(universe, (1, 1), initial_guess=(0, 0), max_turns=1)
    assert result.outcome is Outcome.DETERMINED


def test_zero_spaces_game_is_solved_immediately():
    universe = CombinationUniverse.build(3, 0)
    result = play_game(universe, ())
    assert result.outcome is Outcome.SOLVED
    assert result.num_turns == 1
    assert result.turns[0].score == Score(0, 0)


def test_on_turn_callback_sees_every_turn():
    universe = CombinationUniverse.build(3, 2)
    seen = []
    result = play_game(universe, (2, 1), on_turn=lambda turn, subset: seen.append((turn.remaining, len(subset))))
    assert len(seen) == result.num_turns
    assert all(a == b for a, b in seen)


def test_bad_arguments():
    universe = CombinationUniverse.build(3, 2)
    with pytest.raises(KeyError):
        play_game(universe, (3, 0))
    with pytest.raises(ValueError):
        play_game(universe, (0, 0), max_turns=0)
