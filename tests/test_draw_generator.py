"""Tests for whole-round draw generation."""

import itertools
from collections import Counter

from debate_tab.core.config import DrawSettings
from debate_tab.models import PairingHistory, Team
from debate_tab.services.draw import generate_draw


def _five_team_field() -> list[Team]:
    return [
        Team(id="a", wins=1, speaks=80),
        Team(id="b", wins=1, speaks=78),
        Team(id="c", wins=1, speaks=76),
        Team(id="d", wins=0, speaks=75),
        Team(id="e", wins=0, speaks=70),
    ]


def _field(n: int) -> list[Team]:
    return [Team(id=f"t{i}", speaks=70 + i) for i in range(n)]


class TestPowerPairedDraw:
    """Tests for the default power-paired draw."""

    def test_too_few_teams(self):
        """Test fewer than two active teams gives an empty draw."""
        assert generate_draw([], []) == []
        assert generate_draw([Team(id="a")], []) == []
        assert generate_draw([Team(id="a"), Team(id="b", active=False)], []) == []

    def test_odd_field_with_pullup_and_bye(self):
        """Test the top 0-win team is pulled up and the other gets a bye."""
        draw = generate_draw(_five_team_field(), [], DrawSettings(seed=1))

        debates = [p for p in draw if not p.is_bye]
        byes = [p for p in draw if p.is_bye]

        assert len(debates) == 2
        assert all(p.bracket == 1 for p in debates)
        assert [(p.aff_team_id, p.bracket, p.room_rank) for p in byes] == [("e", 0, 3)]
        assert byes[0].flags == ["bye"]

        pullup_rooms = [p for p in debates if "d" in (p.aff_team_id, p.neg_team_id)]
        assert len(pullup_rooms) == 1
        assert "pullup" in pullup_rooms[0].flags

    def test_every_active_team_appears_once(self):
        """Test each active team is in exactly one pairing."""
        teams = _field(9) + [Team(id="gone", active=False)]
        draw = generate_draw(teams, [], DrawSettings(seed=5))

        seen = Counter()
        for p in draw:
            seen[p.aff_team_id] += 1
            if p.neg_team_id:
                seen[p.neg_team_id] += 1

        assert set(seen) == {f"t{i}" for i in range(9)}
        assert all(count == 1 for count in seen.values())
        assert sum(1 for p in draw if p.is_bye) == 1

    def test_room_ranks_consecutive_with_bye_last(self):
        """Test room ranks run from 1 and byes come last."""
        draw = generate_draw(_field(7), [], DrawSettings(seed=2))

        assert [p.room_rank for p in draw] == list(range(1, len(draw) + 1))
        assert draw[-1].is_bye
        assert not any(p.is_bye for p in draw[:-1])

    def test_higher_bracket_ranked_first(self):
        """Test rooms from a higher bracket outrank lower ones."""
        teams = [
            Team(id="w1", wins=2, speaks=60),
            Team(id="w2", wins=2, speaks=61),
            Team(id="l1", wins=0, speaks=90),
            Team(id="l2", wins=0, speaks=91),
        ]
        draw = generate_draw(teams, [], DrawSettings(seed=0))

        assert [p.bracket for p in draw] == [2, 0]
        assert {draw[0].aff_team_id, draw[0].neg_team_id} == {"w1", "w2"}

    def test_avoids_rematches(self):
        """Test earlier opponents are not paired again when avoidable."""
        teams = [
            Team(id="a", wins=1, speaks=80),
            Team(id="b", wins=1, speaks=78),
            Team(id="c", wins=1, speaks=76),
            Team(id="d", wins=1, speaks=75),
        ]
        history = [PairingHistory(aff_id="a", neg_id="c", round_number=1)]
        draw = generate_draw(teams, history, DrawSettings(seed=0))

        matchups = {frozenset((p.aff_team_id, p.neg_team_id)) for p in draw}
        assert matchups == {frozenset(("a", "d")), frozenset(("b", "c"))}
        assert all("conflict" not in p.flags for p in draw)

    def test_unavoidable_rematch_flagged(self):
        """Test a rematch with no alternative is drawn and flagged."""
        teams = [Team(id="a"), Team(id="b")]
        history = [PairingHistory(aff_id="a", neg_id="b", round_number=1)]
        draw = generate_draw(teams, history, DrawSettings(seed=0))

        assert len(draw) == 1
        assert "conflict" in draw[0].flags

    def test_side_balance_applied(self):
        """Test the team owed the affirmative gets it."""
        teams = [
            Team(id="a", speaks=80, aff_count=2),
            Team(id="b", speaks=70, neg_count=2),
        ]
        draw = generate_draw(teams, [], DrawSettings(seed=0))

        assert (draw[0].aff_team_id, draw[0].neg_team_id) == ("b", "a")

    def test_snapshot_not_mutated(self):
        """Test teams passed in keep their pullup counters."""
        teams = _five_team_field()
        before = [t.model_dump() for t in teams]

        generate_draw(teams, [], DrawSettings(seed=1))

        assert [t.model_dump() for t in teams] == before

    def test_same_seed_same_draw(self):
        """Test identical inputs and seed give identical draws."""
        teams = _field(11)
        settings = DrawSettings(seed=99)

        assert generate_draw(teams, [], settings) == generate_draw(teams, [], settings)


class TestRandomDraw:
    """Tests for the random draw method."""

    def test_reproducible_with_seed(self):
        """Test a seeded random draw repeats exactly."""
        settings = DrawSettings(draw_method="random", seed=11)

        first = generate_draw(_field(8), [], settings)
        second = generate_draw(_field(8), [], settings)

        assert first == second
        assert len(first) == 4
        assert all(p.bracket == 0 for p in first)

    def test_odd_field_gets_one_bye(self):
        """Test an odd random draw has a single bye, ranked last."""
        draw = generate_draw(_field(5), [], DrawSettings(draw_method="random", seed=3))

        assert sum(1 for p in draw if p.is_bye) == 1
        assert draw[-1].is_bye


class TestRoundRobinDraw:
    """Tests for the round-robin draw method."""

    def test_everyone_meets_once(self):
        """Test six teams over five rounds meet every opponent exactly once."""
        teams = _field(6)
        settings = DrawSettings(draw_method="round_robin", seed=0)

        meetings = Counter()
        for round_number in range(1, 6):
            draw = generate_draw(teams, [], settings, round_number=round_number)
            assert len(draw) == 3
            for p in draw:
                meetings[frozenset((p.aff_team_id, p.neg_team_id))] += 1

        expected = {frozenset(pair) for pair in itertools.combinations([t.id for t in teams], 2)}
        assert set(meetings) == expected
        assert all(count == 1 for count in meetings.values())

    def test_odd_field_rotates_bye(self):
        """Test five teams each sit out exactly one of five rounds."""
        teams = _field(5)
        settings = DrawSettings(draw_method="round_robin", seed=0)

        bye_teams = []
        for round_number in range(1, 6):
            draw = generate_draw(teams, [], settings, round_number=round_number)
            byes = [p for p in draw if p.is_bye]
            assert len(byes) == 1
            bye_teams.append(byes[0].aff_team_id)

        assert sorted(bye_teams) == sorted(t.id for t in teams)
