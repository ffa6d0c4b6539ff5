"""Win-count brackets and odd-bracket pullups for power-paired draws."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from debate_tab.core.config import OddBracketMethod
from debate_tab.models import Team

logger = structlog.get_logger()


@dataclass
class Bracket:
    """Teams tied on wins, in seed order (speaks descending).

    Attributes:
        wins: Win count shared by the bracket's own teams.
        teams: Teams to pair in this bracket, pulled-up teams included.
        pulled_up: IDs of teams pulled up into this bracket this round.
    """

    wins: int
    teams: list[Team] = field(default_factory=list)
    pulled_up: set[str] = field(default_factory=set)


@dataclass
class DebatePairing:
    """A pairing while the draw is being built. ``neg`` is None for a bye."""

    aff: Team
    neg: Team | None
    bracket: int
    flags: list[str] = field(default_factory=list)

    @property
    def is_bye(self) -> bool:
        return self.neg is None

    def add_flag(self, flag: str) -> None:
        if flag not in self.flags:
            self.flags.append(flag)


def create_brackets(teams: Sequence[Team]) -> list[Bracket]:
    """Group active teams into brackets by win count.

    Teams are copied so pullups can bump counters without touching the
    caller's snapshot.

    Args:
        teams: Team snapshot for the round.

    Returns:
        Brackets ordered by wins descending, teams by speaks descending.
    """
    by_wins: dict[int, list[Team]] = {}
    for team in teams:
        if not team.active:
            continue
        by_wins.setdefault(team.wins, []).append(team.model_copy())

    return [
        Bracket(wins=wins, teams=sorted(by_wins[wins], key=lambda t: t.speaks, reverse=True))
        for wins in sorted(by_wins, reverse=True)
    ]


def select_pullup(teams: Sequence[Team], method: OddBracketMethod) -> Team:
    """Pick the team to pull up from a lower bracket.

    Args:
        teams: The lower bracket's teams in seed order. Must not be empty.
        method: Odd-bracket strategy.

    Returns:
        The selected team (not removed from ``teams``).
    """
    if not teams:
        msg = "No teams to pull up"
        raise ValueError(msg)

    if method == "pullup_bottom":
        return sorted(teams, key=lambda t: -t.speaks)[-1]
    if method in ("intermediate", "intermediate_bubble_up_down"):
        return sorted(teams, key=lambda t: (t.pullup_count, -t.speaks))[0]
    return sorted(teams, key=lambda t: -t.speaks)[0]


def resolve_odd_brackets(brackets: list[Bracket], method: OddBracketMethod) -> list[Team]:
    """Make every bracket even by pulling teams up from below.

    Brackets are processed from the top. An odd bracket takes one team from
    the next non-empty bracket below it; the pulled team's pullup counter is
    incremented. If the lowest bracket is left odd, its last team is removed
    and returned as the bye.

    Args:
        brackets: Brackets from ``create_brackets``; modified in place.
        method: Odd-bracket strategy.

    Returns:
        Teams receiving a bye (empty or one team).
    """
    byes: list[Team] = []

    for i, bracket in enumerate(brackets):
        if len(bracket.teams) % 2 == 0:
            continue

        source = next((b for b in brackets[i + 1 :] if b.teams), None)
        if source is None:
            bye_team = bracket.teams.pop()
            byes.append(bye_team)
            logger.info("bye_assigned", team=bye_team.id, bracket=bracket.wins)
            continue

        team = select_pullup(source.teams, method)
        source.teams = [t for t in source.teams if t.id != team.id]
        team.pullup_count += 1
        bracket.teams.append(team)
        bracket.pulled_up.add(team.id)
        logger.debug(
            "pullup",
            team=team.id,
            from_bracket=source.wins,
            to_bracket=bracket.wins,
            method=method,
        )

    return byes
