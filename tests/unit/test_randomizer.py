"""
Unit tests for the shuffle and sample primitives.
"""

import random
from itertools import permutations

from src.quizdeck.randomizer import sample, shuffle


class TestShuffle:
    """Test Fisher-Yates shuffle."""

    def test_returns_permutation(self, rng):
        items = list(range(10))
        result = shuffle(items, rng)

        assert sorted(result) == items
        assert len(result) == len(items)

    def test_input_not_mutated(self, rng):
        items = [1, 2, 3, 4, 5]
        shuffle(items, rng)

        assert items == [1, 2, 3, 4, 5]

    def test_returns_new_list(self, rng):
        items = [1, 2, 3]
        assert shuffle(items, rng) is not items

    def test_empty_and_single(self, rng):
        assert shuffle([], rng) == []
        assert shuffle(["only"], rng) == ["only"]

    def test_same_seed_same_order(self):
        items = list("abcdefgh")
        assert shuffle(items, random.Random(7)) == shuffle(items, random.Random(7))

    def test_accepts_tuples(self, rng):
        result = shuffle(("a", "b", "c"), rng)
        assert isinstance(result, list)
        assert sorted(result) == ["a", "b", "c"]

    def test_every_permutation_reachable(self):
        """All 6 orders of 3 items should show up over many draws."""
        r = random.Random(0)
        seen = {tuple(shuffle([0, 1, 2], r)) for _ in range(600)}
        assert seen == set(permutations([0, 1, 2]))

    def test_roughly_uniform_first_position(self):
        r = random.Random(42)
        counts = {x: 0 for x in range(4)}
        for _ in range(4000):
            counts[shuffle([0, 1, 2, 3], r)[0]] += 1
        assert all(800 < c < 1200 for c in counts.values())


class TestSample:
    """Test sampling without replacement."""

    def test_size_is_min_of_k_and_length(self, rng):
        assert len(sample(range(10), 3, rng)) == 3
        assert len(sample(range(4), 10, rng)) == 4

    def test_no_duplicates(self, rng):
        result = sample(list(range(20)), 10, rng)
        assert len(set(result)) == 10
        assert set(result) <= set(range(20))

    def test_zero_and_negative(self, rng):
        assert sample([1, 2, 3], 0, rng) == []
        assert sample([1, 2, 3], -1, rng) == []
