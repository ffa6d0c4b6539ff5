"""Tests for elimination-round pairings."""

from debate_tab.models import SeedEntry
from debate_tab.services.draw import generate_elimination_pairings


def _seeds(n: int) -> list[SeedEntry]:
    return [SeedEntry(team_id=f"s{i}", seed=i) for i in range(1, n + 1)]


class TestGenerateEliminationPairings:
    """Tests for generate_elimination_pairings."""

    def test_quarterfinal_bracket(self):
        """Test eight seeds pair 1v8, 2v7, 3v6, 4v5."""
        pairings = generate_elimination_pairings(_seeds(8))

        assert [(p.aff_team_id, p.neg_team_id) for p in pairings] == [
            ("s1", "s8"),
            ("s2", "s7"),
            ("s3", "s6"),
            ("s4", "s5"),
        ]
        assert [p.room_rank for p in pairings] == [1, 2, 3, 4]

    def test_input_order_irrelevant(self):
        """Test seeds are sorted before pairing."""
        seeds = list(reversed(_seeds(4)))

        pairings = generate_elimination_pairings(seeds)

        assert [(p.aff_team_id, p.neg_team_id) for p in pairings] == [("s1", "s4"), ("s2", "s3")]

    def test_odd_field_top_seed_bye(self):
        """Test the top seed sits out an odd field."""
        pairings = generate_elimination_pairings(_seeds(5))

        assert [(p.aff_team_id, p.neg_team_id) for p in pairings[:-1]] == [
            ("s2", "s5"),
            ("s3", "s4"),
        ]
        assert pairings[-1].aff_team_id == "s1"
        assert pairings[-1].is_bye
        assert pairings[-1].flags == ["bye"]
        assert pairings[-1].room_rank == 3

    def test_empty(self):
        """Test no seeds gives no pairings."""
        assert generate_elimination_pairings([]) == []
