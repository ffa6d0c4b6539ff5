"""Tests for bracket creation and odd-bracket pullups."""

import pytest

from debate_tab.models import Team
from debate_tab.services.draw import create_brackets, resolve_odd_brackets, select_pullup


def _five_team_field() -> list[Team]:
    return [
        Team(id="a", wins=1, speaks=80),
        Team(id="b", wins=1, speaks=78),
        Team(id="c", wins=1, speaks=76),
        Team(id="d", wins=0, speaks=75),
        Team(id="e", wins=0, speaks=70),
    ]


class TestCreateBrackets:
    """Tests for create_brackets."""

    def test_groups_by_wins_descending(self):
        """Test brackets are ordered by wins, teams by speaks."""
        teams = [
            Team(id="low", wins=0, speaks=90),
            Team(id="mid", wins=1, speaks=70),
            Team(id="top", wins=1, speaks=80),
        ]
        brackets = create_brackets(teams)

        assert [b.wins for b in brackets] == [1, 0]
        assert [t.id for t in brackets[0].teams] == ["top", "mid"]
        assert [t.id for t in brackets[1].teams] == ["low"]

    def test_skips_inactive_teams(self):
        """Test inactive teams are left out."""
        teams = [Team(id="a", wins=0), Team(id="b", wins=0, active=False)]
        brackets = create_brackets(teams)

        assert [t.id for b in brackets for t in b.teams] == ["a"]

    def test_works_on_copies(self):
        """Test bracket teams are copies of the snapshot."""
        teams = [Team(id="a")]
        brackets = create_brackets(teams)
        brackets[0].teams[0].pullup_count = 5

        assert teams[0].pullup_count == 0


class TestSelectPullup:
    """Tests for select_pullup."""

    def test_top_and_bottom(self):
        """Test top and bottom seeds are chosen by speaks."""
        teams = [Team(id="x", speaks=60), Team(id="y", speaks=70), Team(id="z", speaks=50)]

        assert select_pullup(teams, "pullup_top").id == "y"
        assert select_pullup(teams, "pullup_bottom").id == "z"

    def test_intermediate_prefers_fewest_pullups(self):
        """Test intermediate picks the fewest prior pullups, then speaks."""
        teams = [
            Team(id="x", speaks=80, pullup_count=1),
            Team(id="y", speaks=60, pullup_count=0),
            Team(id="z", speaks=70, pullup_count=0),
        ]

        assert select_pullup(teams, "intermediate").id == "z"
        assert select_pullup(teams, "intermediate_bubble_up_down").id == "z"

    def test_empty_raises(self):
        """Test selecting from an empty bracket raises ValueError."""
        with pytest.raises(ValueError, match="No teams"):
            select_pullup([], "pullup_top")


class TestResolveOddBrackets:
    """Tests for resolve_odd_brackets."""

    def test_pullup_top_moves_top_seed_and_leaves_bye(self):
        """Test the top 0-win team is pulled up and the other gets a bye."""
        brackets = create_brackets(_five_team_field())
        byes = resolve_odd_brackets(brackets, "pullup_top")

        assert [t.id for t in brackets[0].teams] == ["a", "b", "c", "d"]
        assert brackets[0].pulled_up == {"d"}
        assert brackets[0].teams[-1].pullup_count == 1
        assert brackets[1].teams == []
        assert [t.id for t in byes] == ["e"]

    def test_pullup_bottom_moves_bottom_seed(self):
        """Test pullup_bottom takes the lowest seed of the lower bracket."""
        brackets = create_brackets(_five_team_field())
        byes = resolve_odd_brackets(brackets, "pullup_bottom")

        assert brackets[0].pulled_up == {"e"}
        assert [t.id for t in byes] == ["d"]

    def test_intermediate_avoids_repeat_pullups(self):
        """Test intermediate skips a team that was pulled up before."""
        teams = _five_team_field()
        teams[3].pullup_count = 2
        brackets = create_brackets(teams)
        resolve_odd_brackets(brackets, "intermediate")

        assert brackets[0].pulled_up == {"e"}

    def test_snapshot_not_mutated(self):
        """Test pullup counters only change on the working copies."""
        teams = _five_team_field()
        brackets = create_brackets(teams)
        resolve_odd_brackets(brackets, "pullup_top")

        assert all(t.pullup_count == 0 for t in teams)

    def test_single_team_gets_bye(self):
        """Test a lone team with nobody below receives a bye."""
        brackets = create_brackets([Team(id="solo", wins=2)])
        byes = resolve_odd_brackets(brackets, "pullup_top")

        assert [t.id for t in byes] == ["solo"]
        assert brackets[0].teams == []

    def test_even_brackets_untouched(self):
        """Test even brackets need no pullups or byes."""
        teams = [Team(id=str(i), wins=i // 2) for i in range(4)]
        brackets = create_brackets(teams)
        byes = resolve_odd_brackets(brackets, "pullup_top")

        assert byes == []
        assert all(len(b.teams) == 2 for b in brackets)
        assert all(not b.pulled_up for b in brackets)

    def test_emptied_bracket_is_skipped(self):
        """Test a bracket emptied by a pullup is passed over."""
        teams = [
            Team(id="a", wins=2, speaks=3),
            Team(id="b", wins=2, speaks=2),
            Team(id="c", wins=2, speaks=1),
            Team(id="d", wins=1),
            Team(id="e", wins=0),
        ]
        brackets = create_brackets(teams)
        byes = resolve_odd_brackets(brackets, "pullup_top")

        assert [len(b.teams) for b in brackets] == [4, 0, 0]
        assert [t.id for t in byes] == ["e"]
