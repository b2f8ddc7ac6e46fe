import pytest

from mastermind.feedback import compute_score
from mastermind.subset import CandidateSubset, filter_candidates
from mastermind.universe import CombinationUniverse


@pytest.fixture
def universe():
    return CombinationUniverse.build(6, 4)


def test_pruning_after_knuth_opening(universe):
    guess = (0, 0, 1, 1)
    answer = (0, 1, 2, 3)
    score = compute_score(guess, answer)  # white 1, black 1

    remaining = CandidateSubset.full(universe).filter_by_score(guess, score)

    assert universe.index_of(answer) in remaining
    assert universe.index_of(guess) not in remaining
    assert universe.index_of((1, 1, 0, 0)) not in remaining
    for combo in remaining.combinations():
        assert compute_score(guess, combo) == score


def test_filter_returns_subset_and_keeps_receiver(universe):
    full = CandidateSubset.full(universe)
    narrowed = full.filter(lambda c: c[0] == 2)
    assert narrowed.members <= full.members
    assert len(narrowed) == 6 ** 3
    assert len(full) == 6 ** 4


def test_known_member_is_never_removed(universe):
    subset = CandidateSubset.full(universe).filter_by_score((0, 1, 2, 3), compute_score((0, 1, 2, 3), (3, 3, 4, 5)))
    for answer_idx in list(subset.members)[:20]:
        answer = universe.combination_at(answer_idx)
        for guess in [(0, 0, 1, 1), (5, 4, 3, 2), answer]:
            after = subset.filter_by_score(guess, compute_score(guess, answer))
            assert answer_idx in after
            assert after.members <= subset.members


def test_pruning_is_monotonic_with_more_feedback(universe):
    answer = (4, 2, 2, 5)
    h1 = [((0, 0, 1, 1), compute_score((0, 0, 1, 1), answer))]
    h2 = h1 + [((2, 3, 4, 5), compute_score((2, 3, 4, 5), answer))]
    rem1 = filter_candidates(universe, h1)
    rem2 = filter_candidates(universe, h2)
    assert rem2.members <= rem1.members
    assert universe.index_of(answer) in rem2


def test_inconsistent_feedback_gives_empty_subset():
    universe = CombinationUniverse.build(2, 2)
    subset = CandidateSubset.full(universe).filter_by_score((0, 0), (0, 0))
    assert subset.combinations() == [(1, 1)]
    assert subset.is_determined
    # (1, 1) would score all black against itself
    empty = subset.filter_by_score((1, 1), (0, 0))
    assert empty.is_empty
    assert len(empty) == 0


def test_invalid_indices_raise():
    universe = CombinationUniverse.build(2, 2)
    with pytest.raises(IndexError):
        CandidateSubset(universe, [0, 4])
    with pytest.raises(TypeError):
        CandidateSubset([(0, 0)], [0])


def test_duplicate_indices_collapse():
    universe = CombinationUniverse.build(2, 2)
    subset = CandidateSubset(universe, [1, 1, 2])
    assert len(subset) == 2
    assert subset.sorted_members() == [1, 2]
    assert subset.as_array().tolist() == [1, 2]
