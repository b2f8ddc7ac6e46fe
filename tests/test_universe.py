import pytest

from mastermind.universe import CombinationUniverse, enumerate_combinations


def test_two_by_two_universe():
    universe = CombinationUniverse.build(2, 2)
    assert set(universe.combinations()) == {(0, 0), (0, 1), (1, 0), (1, 1)}
    # position 0 is the fastest-moving digit
    assert universe.combinations() == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_size_and_uniqueness():
    universe = CombinationUniverse.build(6, 4)
    combos = universe.combinations()
    assert len(universe) == 6 ** 4
    assert len(set(combos)) == 6 ** 4
    for combination in [(0, 0, 1, 1), (5, 5, 5, 5), (3, 1, 4, 1)]:
        assert universe.contains(combination)
        assert universe.combination_at(universe.index_of(combination)) == combination


def test_zero_spaces_is_one_empty_combination():
    assert enumerate_combinations(3, 0) == [()]
    universe = CombinationUniverse.build(3, 0)
    assert len(universe) == 1
    assert universe.combination_at(0) == ()
    assert universe.codes.shape == (1, 0)


def test_invalid_shapes_raise():
    with pytest.raises(ValueError):
        CombinationUniverse.build(0, 4)
    with pytest.raises(ValueError):
        CombinationUniverse.build(6, -1)


def test_lookup_errors():
    universe = CombinationUniverse.build(3, 2)
    with pytest.raises(KeyError):
        universe.index_of((3, 0))
    with pytest.raises(IndexError):
        universe.combination_at(len(universe))
    assert universe.to_combinations(universe.to_indices([(2, 1), (0, 0)])) == [(2, 1), (0, 0)]


def test_numpy_views_are_read_only():
    universe = CombinationUniverse.build(3, 2)
    assert universe.codes.shape == (9, 2)
    assert universe.color_counts.shape == (9, 3)
    assert universe.color_counts.sum(axis=1).tolist() == [2] * 9
    with pytest.raises(ValueError):
        universe.codes[0, 0] = 1


def test_to_frame():
    universe = CombinationUniverse.build(3, 2)
    df = universe.to_frame()
    assert list(df.columns) == ["pos_0", "pos_1"]
    assert len(df) == 9
    assert tuple(df.loc[universe.index_of((2, 1))]) == (2, 1)
