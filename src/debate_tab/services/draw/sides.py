"""Affirmative/negative side assignment."""

from __future__ import annotations

import random

from debate_tab.core.config import SideMethod
from debate_tab.models import Team


def calculate_side_imbalance(aff_count: int, neg_count: int) -> int:
    """Positive when a team has been affirmative more often than negative."""
    return aff_count - neg_count


def assign_sides(
    team_a: Team,
    team_b: Team,
    method: SideMethod,
    rng: random.Random,
) -> tuple[Team, Team]:
    """Decide which team is affirmative.

    - "balance": the team with the lower affirmative-minus-negative imbalance
      needs the affirmative more and gets it; equal imbalance is a coin flip.
    - "random": coin flip.
    - "preallocated": keep the given order.

    Args:
        team_a: Provisional affirmative team.
        team_b: Provisional negative team.
        method: Side method.
        rng: Random source for coin flips.

    Returns:
        Tuple of (affirmative, negative).
    """
    if method == "preallocated":
        return team_a, team_b

    if method == "balance":
        imbalance_a = calculate_side_imbalance(team_a.aff_count, team_a.neg_count)
        imbalance_b = calculate_side_imbalance(team_b.aff_count, team_b.neg_count)
        if imbalance_a < imbalance_b:
            return team_a, team_b
        if imbalance_b < imbalance_a:
            return team_b, team_a

    return (team_a, team_b) if rng.random() < 0.5 else (team_b, team_a)
