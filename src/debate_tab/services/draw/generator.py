"""Draw generation for one round.

Three draw methods are supported:

1. **Power paired** (`power_paired`):
   - Teams are bracketed by wins and odd brackets are evened with pullups
   - Each bracket is folded and matched with the Munkres solver
   - Remaining conflicts are swapped one-up-one-down between brackets
2. **Random** (`random`): shuffle and pair consecutive teams
3. **Round robin** (`round_robin`): circle-method schedule keyed on the round

Sides and room ranks are assigned the same way for every method. Random
choices come from an injected ``random.Random`` so draws can be reproduced.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence

import structlog

from debate_tab.core.config import DrawSettings
from debate_tab.models import GeneratedPairing, PairingHistory, Team
from debate_tab.services.draw.brackets import (
    DebatePairing,
    create_brackets,
    resolve_odd_brackets,
)
from debate_tab.services.draw.power import meeting_counts, pair_bracket, resolve_conflicts
from debate_tab.services.draw.sides import assign_sides

logger = structlog.get_logger()


def generate_draw(
    teams: Sequence[Team],
    history: Sequence[PairingHistory],
    settings: DrawSettings | None = None,
    round_number: int = 1,
    rng: random.Random | None = None,
) -> list[GeneratedPairing]:
    """Generate the pairings for one round.

    Args:
        teams: Team snapshot. Inactive teams are ignored; the snapshot is not
            modified.
        history: Every earlier pairing of the tournament.
        settings: Draw settings. Defaults to a power-paired, side-balanced draw.
        round_number: Round being drawn (drives the round-robin rotation).
        rng: Random source for shuffles and coin flips. Defaults to one seeded
            from ``settings.seed``.

    Returns:
        Pairings ordered by room rank, byes last. Empty if fewer than two
        active teams.
    """
    settings = settings or DrawSettings()
    rng = rng or random.Random(settings.seed)  # noqa: S311

    active = [t for t in teams if t.active]
    min_pair_size = 2
    if len(active) < min_pair_size:
        logger.info("draw_skipped", round=round_number, active_teams=len(active))
        return []

    methods: dict[str, Callable[[], list[DebatePairing]]] = {
        "power_paired": lambda: _power_paired_draw(active, history, settings),
        "random": lambda: _random_draw(active, rng),
        "round_robin": lambda: _round_robin_draw(active, round_number),
    }
    pairings = methods[settings.draw_method]()
    pairings = _assign_all_sides(pairings, settings, rng)
    draw = assign_room_ranks(pairings)

    logger.info(
        "draw_generated",
        round=round_number,
        method=settings.draw_method,
        pairings=len(draw),
        byes=sum(1 for p in draw if p.is_bye),
        conflicts=sum(1 for p in draw if "conflict" in p.flags),
    )
    return draw


def _power_paired_draw(
    teams: Sequence[Team],
    history: Sequence[PairingHistory],
    settings: DrawSettings,
) -> list[DebatePairing]:
    meetings = meeting_counts(history)
    brackets = create_brackets(teams)
    byes = resolve_odd_brackets(brackets, settings.odd_bracket)

    pairings: list[DebatePairing] = []
    for bracket in brackets:
        bracket_pairings, unpaired = pair_bracket(bracket, meetings, settings)
        pairings.extend(bracket_pairings)
        pairings.extend(_bye(team, bracket.wins) for team in unpaired)

    pairings.extend(_bye(team, team.wins) for team in byes)
    return resolve_conflicts(pairings, meetings, settings)


def _random_draw(teams: Sequence[Team], rng: random.Random) -> list[DebatePairing]:
    shuffled = list(teams)
    rng.shuffle(shuffled)

    pairings = [
        DebatePairing(aff=shuffled[i], neg=shuffled[i + 1], bracket=0)
        for i in range(0, len(shuffled) - 1, 2)
    ]
    if len(shuffled) % 2 == 1:
        pairings.append(_bye(shuffled[-1], 0))
    return pairings


def _round_robin_draw(teams: Sequence[Team], round_number: int) -> list[DebatePairing]:
    """Circle method: fix the first team, rotate the rest one step per round."""
    order: list[Team | None] = sorted(teams, key=lambda t: t.id)
    if len(order) % 2 == 1:
        order.append(None)

    n = len(order)
    shift = (round_number - 1) % (n - 1)
    rotating = order[1:]
    if shift:
        rotating = rotating[-shift:] + rotating[:-shift]
    circle = [order[0], *rotating]

    pairings: list[DebatePairing] = []
    for i in range(n // 2):
        home, away = circle[i], circle[n - 1 - i]
        if home is None and away is not None:
            pairings.append(_bye(away, 0))
        elif away is None and home is not None:
            pairings.append(_bye(home, 0))
        elif home is not None and away is not None:
            pairings.append(DebatePairing(aff=home, neg=away, bracket=0))
    return pairings


def _bye(team: Team, bracket: int) -> DebatePairing:
    return DebatePairing(aff=team, neg=None, bracket=bracket, flags=["bye"])


def _assign_all_sides(
    pairings: list[DebatePairing],
    settings: DrawSettings,
    rng: random.Random,
) -> list[DebatePairing]:
    for pairing in pairings:
        if pairing.neg is None:
            continue
        pairing.aff, pairing.neg = assign_sides(
            pairing.aff, pairing.neg, settings.side_method, rng
        )
    return pairings


def assign_room_ranks(pairings: Sequence[DebatePairing]) -> list[GeneratedPairing]:
    """Number pairings from 1 by bracket, then combined speaks; byes last.

    Args:
        pairings: Final pairings with sides decided.

    Returns:
        Output pairings ordered by room rank.
    """

    def sort_key(pairing: DebatePairing) -> tuple[bool, int, float]:
        speaks = pairing.aff.speaks + (pairing.neg.speaks if pairing.neg else 0.0)
        return pairing.is_bye, -pairing.bracket, -speaks

    ordered = sorted(pairings, key=sort_key)
    return [
        GeneratedPairing(
            aff_team_id=pairing.aff.id,
            neg_team_id=pairing.neg.id if pairing.neg else None,
            bracket=pairing.bracket,
            room_rank=rank,
            flags=list(pairing.flags),
        )
        for rank, pairing in enumerate(ordered, start=1)
    ]
