"""Tests for side assignment."""

import random

from debate_tab.models import Team
from debate_tab.services.draw import assign_sides, calculate_side_imbalance


class FixedRandom(random.Random):
    """Random source whose coin flips always return the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


class TestCalculateSideImbalance:
    """Tests for calculate_side_imbalance."""

    def test_signs(self):
        """Test imbalance is affirmatives minus negatives."""
        assert calculate_side_imbalance(3, 0) == 3
        assert calculate_side_imbalance(0, 3) == -3
        assert calculate_side_imbalance(2, 2) == 0


class TestAssignSides:
    """Tests for assign_sides."""

    def test_balance_gives_aff_to_team_owed_it(self):
        """Test the team with more negatives becomes affirmative."""
        a = Team(id="a", aff_count=3, neg_count=0)
        b = Team(id="b", aff_count=0, neg_count=3)

        aff, neg = assign_sides(a, b, "balance", FixedRandom(0.0))

        assert (aff.id, neg.id) == ("b", "a")

    def test_balance_keeps_order_when_first_is_owed(self):
        """Test no swap when the first team already needs the affirmative."""
        a = Team(id="a", aff_count=0, neg_count=2)
        b = Team(id="b", aff_count=1, neg_count=1)

        aff, _ = assign_sides(a, b, "balance", FixedRandom(0.9))

        assert aff.id == "a"

    def test_balance_tie_uses_coin_flip(self):
        """Test equal imbalance falls back to the random source."""
        a, b = Team(id="a"), Team(id="b")

        assert assign_sides(a, b, "balance", FixedRandom(0.1))[0].id == "a"
        assert assign_sides(a, b, "balance", FixedRandom(0.9))[0].id == "b"

    def test_random_method(self):
        """Test random sides follow the coin flip only."""
        a = Team(id="a", aff_count=5)
        b = Team(id="b", neg_count=5)

        assert assign_sides(a, b, "random", FixedRandom(0.2))[0].id == "a"
        assert assign_sides(a, b, "random", FixedRandom(0.7))[0].id == "b"

    def test_preallocated_keeps_order(self):
        """Test preallocated sides are never changed."""
        a = Team(id="a", aff_count=4)
        b = Team(id="b", neg_count=4)

        aff, neg = assign_sides(a, b, "preallocated", FixedRandom(0.9))

        assert (aff.id, neg.id) == ("a", "b")

    def test_seeded_rng_reproducible(self):
        """Test the same seed gives the same coin flips."""
        a, b = Team(id="a"), Team(id="b")

        first = [assign_sides(a, b, "random", random.Random(7))[0].id for _ in range(5)]
        second = [assign_sides(a, b, "random", random.Random(7))[0].id for _ in range(5)]

        assert first == second
