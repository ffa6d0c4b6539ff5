"""Power pairing within brackets and one-up-one-down conflict swapping.

Each bracket is folded into a top half and a bottom half and matched across
the fold with the Munkres solver, so the bracket as a whole avoids rematches
and same-institution debates wherever it can. Conflicts the solver could not
avoid are then attacked by swapping a team with a pairing from the next
bracket down.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

import structlog

from debate_tab.core.config import DrawSettings
from debate_tab.models import PairingHistory, Team
from debate_tab.services.draw.brackets import Bracket, DebatePairing
from debate_tab.solver import DISALLOWED, compute_assignment, is_disallowed

logger = structlog.get_logger()

# Weight on the speaks gap, enough to break ties toward evenly matched teams
SPEAKS_TIE_BREAK = 0.01

MeetingCounts = Counter[frozenset[str]]


def meeting_counts(history: Iterable[PairingHistory]) -> MeetingCounts:
    """Count prior meetings for every pair of teams, regardless of side."""
    return Counter(frozenset((h.aff_id, h.neg_id)) for h in history)


def count_meetings(meetings: MeetingCounts, team_a: str, team_b: str) -> int:
    """Return how many times two teams have met."""
    return meetings[frozenset((team_a, team_b))]


def same_institution(team_a: Team, team_b: Team) -> bool:
    """Case-insensitive institution match; teams without one never match."""
    if not team_a.institution or not team_b.institution:
        return False
    return team_a.institution.casefold() == team_b.institution.casefold()


def pairing_cost(
    team_a: Team,
    team_b: Team,
    meetings: MeetingCounts,
    settings: DrawSettings,
) -> float:
    """Cost of pairing two teams; lower is better.

    Adds the history penalty per prior meeting (``DISALLOWED`` once the
    meetings exceed ``max_repeat_opponents``), the institution penalty for a
    same-institution debate under club protection, and a small speaks gap
    term.
    """
    cost = 0.0

    if settings.avoid_rematches:
        meets = count_meetings(meetings, team_a.id, team_b.id)
        if meets > settings.max_repeat_opponents:
            return DISALLOWED
        cost += meets * settings.history_penalty

    if settings.club_protect and same_institution(team_a, team_b):
        cost += settings.institution_penalty

    cost += abs(team_a.speaks - team_b.speaks) * SPEAKS_TIE_BREAK
    return cost


def check_pairing_conflict(
    team_a: Team,
    team_b: Team,
    meetings: MeetingCounts,
    settings: DrawSettings,
) -> tuple[bool, str | None]:
    """Check two teams for a hard conflict.

    Returns:
        Tuple of (has_conflict, reason). reason is None when there is no conflict.
    """
    if settings.avoid_rematches:
        meets = count_meetings(meetings, team_a.id, team_b.id)
        if meets > settings.max_repeat_opponents:
            return True, f"Teams have met {meets} time(s)"

    if settings.club_protect and same_institution(team_a, team_b):
        return True, "Same institution"

    return False, None


def has_conflict(pairing: DebatePairing, meetings: MeetingCounts, settings: DrawSettings) -> bool:
    if pairing.neg is None:
        return False
    conflict, _ = check_pairing_conflict(pairing.aff, pairing.neg, meetings, settings)
    return conflict


def pair_bracket(
    bracket: Bracket,
    meetings: MeetingCounts,
    settings: DrawSettings,
) -> tuple[list[DebatePairing], list[Team]]:
    """Pair one bracket optimally across the power-pairing fold.

    The seed-ordered bracket is split into a top half and a bottom half; the
    shorter half is padded with placeholders whose cells are disallowed. The
    top-half team of each pairing is provisionally affirmative.

    Args:
        bracket: An even bracket from ``resolve_odd_brackets``.
        meetings: Prior meeting counts.
        settings: Draw settings.

    Returns:
        Tuple of (pairings, unpaired_teams).
    """
    teams = bracket.teams
    if len(teams) < 2:
        return [], list(teams)

    half = len(teams) // 2
    top: list[Team | None] = list(teams[:half])
    bottom: list[Team | None] = list(teams[half:])
    while len(top) < len(bottom):
        top.append(None)
    while len(bottom) < len(top):
        bottom.append(None)

    matrix = [
        [
            DISALLOWED if a is None or b is None else pairing_cost(a, b, meetings, settings)
            for b in bottom
        ]
        for a in top
    ]
    result = compute_assignment(matrix)

    pairings: list[DebatePairing] = []
    used: set[str] = set()
    for i, j in result.pairs:
        aff, neg = top[i], bottom[j]
        if aff is None or neg is None:
            continue
        pairing = DebatePairing(aff=aff, neg=neg, bracket=bracket.wins)
        if aff.id in bracket.pulled_up or neg.id in bracket.pulled_up:
            pairing.add_flag("pullup")
        if is_disallowed(matrix[i][j]):
            logger.warning(
                "forced_disallowed_pairing",
                bracket=bracket.wins,
                aff=aff.id,
                neg=neg.id,
            )
        pairings.append(pairing)
        used.update((aff.id, neg.id))

    unpaired = [t for t in teams if t.id not in used]
    return pairings, unpaired


def resolve_conflicts(
    pairings: Sequence[DebatePairing],
    meetings: MeetingCounts,
    settings: DrawSettings,
) -> list[DebatePairing]:
    """Apply one-up-one-down swaps between adjacent brackets.

    For every pair of adjacent brackets (wins descending), each upper pairing
    with a hard conflict is tested against the conflict-free pairings of the
    lower bracket by swapping affirmative teams; a negative swap gives the
    same two matchups. The first swap that leaves both pairings conflict-free
    is applied and both are flagged. Conflicts that survive are flagged
    ``conflict``.

    Args:
        pairings: Pairings from every bracket, byes included.
        meetings: Prior meeting counts.
        settings: Draw settings.

    Returns:
        Non-bye pairings grouped by bracket (wins descending), then the byes.
    """
    by_bracket: dict[int, list[DebatePairing]] = {}
    byes: list[DebatePairing] = []
    for pairing in pairings:
        if pairing.is_bye:
            byes.append(pairing)
        else:
            by_bracket.setdefault(pairing.bracket, []).append(pairing)

    bracket_wins = sorted(by_bracket, reverse=True)
    for upper_wins, lower_wins in zip(bracket_wins, bracket_wins[1:]):
        _swap_to_resolve(by_bracket[upper_wins], by_bracket[lower_wins], meetings, settings)

    resolved = [p for wins in bracket_wins for p in by_bracket[wins]]
    for pairing in resolved:
        if has_conflict(pairing, meetings, settings):
            pairing.add_flag("conflict")
            logger.warning(
                "conflict_unresolved",
                bracket=pairing.bracket,
                aff=pairing.aff.id,
                neg=pairing.neg.id if pairing.neg else None,
            )

    return resolved + byes


def _swap_to_resolve(
    upper_bracket: list[DebatePairing],
    lower_bracket: list[DebatePairing],
    meetings: MeetingCounts,
    settings: DrawSettings,
) -> None:
    for upper in upper_bracket:
        if not has_conflict(upper, meetings, settings):
            continue

        for lower in lower_bracket:
            if has_conflict(lower, meetings, settings):
                continue

            # Conflicts ignore sides, so swapping the negatives yields the same
            # two matchups as swapping the affirmatives; one test covers both.
            if not _swap_resolves(upper, lower, meetings, settings):
                continue

            upper.aff, lower.aff = lower.aff, upper.aff
            upper.add_flag("swapped_aff")
            lower.add_flag("swapped_aff")
            logger.info(
                "conflict_swapped",
                upper_bracket=upper.bracket,
                lower_bracket=lower.bracket,
            )
            break


def _swap_resolves(
    upper: DebatePairing,
    lower: DebatePairing,
    meetings: MeetingCounts,
    settings: DrawSettings,
) -> bool:
    new_upper = DebatePairing(aff=lower.aff, neg=upper.neg, bracket=upper.bracket)
    new_lower = DebatePairing(aff=upper.aff, neg=lower.neg, bracket=lower.bracket)
    return not has_conflict(new_upper, meetings, settings) and not has_conflict(
        new_lower, meetings, settings
    )
