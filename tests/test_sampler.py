import pytest

from mastermind.sampler import CombinationSampler
from mastermind.universe import CombinationUniverse


def test_same_seed_same_answers():
    universe = CombinationUniverse.build(6, 4)
    a = CombinationSampler(universe, seed=7)
    b = CombinationSampler(universe, seed=0)
    b.set_seed(7)
    assert a.batch_indices(20) == b.batch_indices(20)
    assert universe.contains(a.choice_combination())


def test_bad_arguments():
    universe = CombinationUniverse.build(2, 2)
    with pytest.raises(TypeError):
        CombinationSampler([(0, 0)])
    with pytest.raises(ValueError):
        CombinationSampler(universe).batch_indices(0)
