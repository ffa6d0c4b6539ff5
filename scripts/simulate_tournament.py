#!/usr/bin/env python
"""Simulate a Swiss debate tournament end to end.

Generates a power-paired draw each round, allocates judges, decides every
debate at random (weighted by a hidden team strength), and keeps the
win/speaks/side records the way a hosting application would between rounds.
"""

import argparse
import random

from tabulate import tabulate

from debate_tab.core.config import DrawSettings
from debate_tab.models import JudgeConflict, JudgeInfo, PairingHistory, Team
from debate_tab.services.allocation import allocate_judges
from debate_tab.services.draw import generate_draw
from debate_tab.services.reporting import (
    format_allocation_summary,
    format_allocation_table,
    format_draw_table,
)
from debate_tab.services.snapshot import pairings_from_draw

INSTITUTIONS = ["Oxford", "Cambridge", "Harvard", "Yale", "Sydney", "Monash"]


def build_field(num_teams: int, rng: random.Random) -> tuple[list[Team], dict[str, float]]:
    teams = [
        Team(
            id=f"T{i + 1:02d}",
            name=f"{INSTITUTIONS[i % len(INSTITUTIONS)]} {chr(ord('A') + i // len(INSTITUTIONS))}",
            institution=INSTITUTIONS[i % len(INSTITUTIONS)],
        )
        for i in range(num_teams)
    ]
    strength = {t.id: rng.gauss(75.0, 3.0) for t in teams}
    return teams, strength


def build_judges(num_judges: int, rng: random.Random) -> list[JudgeInfo]:
    return [
        JudgeInfo(
            id=f"J{i + 1:02d}",
            experience_years=rng.randint(0, 8),
            institution=INSTITUTIONS[i % len(INSTITUTIONS)] if i % 3 == 0 else None,
        )
        for i in range(num_judges)
    ]


def record_round(
    teams: list[Team],
    draw: list,
    strength: dict[str, float],
    round_number: int,
    history: list[PairingHistory],
    rng: random.Random,
) -> None:
    by_id = {t.id: t for t in teams}
    for pairing in draw:
        aff = by_id[pairing.aff_team_id]
        if pairing.neg_team_id is None:
            aff.wins += 1
            continue
        neg = by_id[pairing.neg_team_id]
        aff_score = rng.gauss(strength[aff.id], 2.0) * 2
        neg_score = rng.gauss(strength[neg.id], 2.0) * 2
        winner = aff if aff_score >= neg_score else neg
        winner.wins += 1
        aff.speaks += round(aff_score, 1)
        neg.speaks += round(neg_score, 1)
        aff.aff_count += 1
        neg.neg_count += 1
        history.append(
            PairingHistory(aff_id=aff.id, neg_id=neg.id, round_number=round_number)
        )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--teams", type=int, default=13)
    parser.add_argument("--judges", type=int, default=8)
    parser.add_argument("--rounds", type=int, default=5)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    teams, strength = build_field(args.teams, rng)
    judges = build_judges(args.judges, rng)
    conflicts = [JudgeConflict(judge_id=judges[0].id, team_id=teams[0].id)]
    history: list[PairingHistory] = []
    settings = DrawSettings(seed=args.seed)

    for round_number in range(1, args.rounds + 1):
        draw = generate_draw(teams, history, settings, round_number, rng=rng)
        allocation = allocate_judges(
            judges, pairings_from_draw(draw, teams, round_number), conflicts
        )

        print(f"\n=== Round {round_number} ===")
        print(format_draw_table(draw, teams))
        print()
        print(format_allocation_table(allocation.assignments))
        print(format_allocation_summary(allocation.summary))

        record_round(teams, draw, strength, round_number, history, rng)

    standings = sorted(teams, key=lambda t: (-t.wins, -t.speaks))
    rows = [(t.name, t.wins, f"{t.speaks:.1f}", t.aff_count, t.neg_count) for t in standings]
    print("\n=== Standings ===")
    print(tabulate(rows, headers=("Team", "Wins", "Speaks", "Aff", "Neg"), tablefmt="github"))


if __name__ == "__main__":
    main()
