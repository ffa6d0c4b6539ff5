"""Judge allocation with the Munkres solver.

Every pairing is expanded into ``judges_per_room`` slots and a judges x slots
cost matrix is solved in one pass, so full panels are filled together. The
cost model favours experienced judges in top rooms, forbids judges with a
declared team conflict and heavily penalises institution clashes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

import structlog

from debate_tab.models import (
    AllocationSummary,
    JudgeAssignment,
    JudgeConflict,
    JudgeInfo,
    PairingInfo,
)
from debate_tab.solver import DISALLOWED, compute_assignment

logger = structlog.get_logger()

# Cost constants
BASE_COST = 1000.0
EXPERIENCE_BONUS = 100.0  # Per year of experience
ROOM_PRIORITY_BONUS = 50.0  # Per step above room rank 10
ROOM_PRIORITY_CAP = 10
INSTITUTION_CONFLICT_COST = 5000.0


@dataclass(frozen=True)
class JudgeSlot:
    """One seat on a pairing's panel."""

    pairing: PairingInfo
    slot: int


@dataclass(frozen=True)
class ConflictHit:
    """A conflict between a judge and a pairing.

    Attributes:
        hard: True for team conflicts, which make the seat disallowed.
        reason: Human-readable description.
    """

    hard: bool
    reason: str


@dataclass
class AllocationResult:
    assignments: list[JudgeAssignment]
    summary: AllocationSummary


def _same(a: str | None, b: str | None) -> bool:
    if not a or not b:
        return False
    return a.casefold() == b.casefold()


def filter_available_judges(
    judges: Sequence[JudgeInfo],
    round_date: date | None = None,
    format_key: str | None = None,
) -> list[JudgeInfo]:
    """Keep judges free on the round date who can judge the format.

    A judge with no declared dates is always available; a judge with no
    specializations can judge any format.
    """
    available = list(judges)

    if format_key:
        available = [
            j for j in available if not j.specializations or format_key in j.specializations
        ]

    if round_date is not None:
        available = [
            j for j in available if not j.available_dates or round_date in j.available_dates
        ]

    return available


def expand_slots(pairings: Sequence[PairingInfo], judges_per_room: int) -> list[JudgeSlot]:
    """Expand each pairing into one slot per panel seat."""
    return [
        JudgeSlot(pairing=pairing, slot=seat)
        for pairing in pairings
        for seat in range(judges_per_room)
    ]


def check_conflict(
    judge: JudgeInfo,
    pairing: PairingInfo,
    conflicts: Sequence[JudgeConflict],
) -> ConflictHit | None:
    """Find the most serious conflict between a judge and a pairing.

    Team conflicts are checked first, then declared institution conflicts,
    then the judge's own institution.

    Args:
        judge: Candidate judge.
        pairing: Pairing to judge.
        conflicts: All declared conflicts (other judges' entries are ignored).

    Returns:
        The conflict, or None if the judge is clear.
    """
    own = [c for c in conflicts if c.judge_id == judge.id]
    teams = (pairing.aff_team_id, pairing.neg_team_id)

    for conflict in own:
        if conflict.team_id and conflict.team_id in teams:
            return ConflictHit(hard=True, reason=f"team conflict with {conflict.team_id}")

    institutions = (pairing.aff_institution, pairing.neg_institution)
    for conflict in own:
        if any(_same(conflict.institution, inst) for inst in institutions):
            return ConflictHit(
                hard=False, reason=f"institution conflict with {conflict.institution}"
            )

    if any(_same(judge.institution, inst) for inst in institutions):
        return ConflictHit(
            hard=False, reason=f"judge's institution conflict ({judge.institution})"
        )

    return None


def calculate_cost(
    judge: JudgeInfo,
    pairing: PairingInfo,
    conflicts: Sequence[JudgeConflict],
) -> float:
    """Cost of seating a judge in a pairing; lower is better.

    Returns ``DISALLOWED`` for a team conflict. Otherwise the base cost,
    less an experience bonus and a bonus for top rooms, plus the
    institution penalty when applicable, floored at zero.
    """
    hit = check_conflict(judge, pairing, conflicts)
    if hit is not None and hit.hard:
        return DISALLOWED

    cost = BASE_COST
    cost -= judge.experience_years * EXPERIENCE_BONUS
    if pairing.room_rank is not None:
        priority = ROOM_PRIORITY_CAP - min(pairing.room_rank, ROOM_PRIORITY_CAP)
        cost -= priority * ROOM_PRIORITY_BONUS
    if hit is not None:
        cost += INSTITUTION_CONFLICT_COST

    return max(0.0, cost)


def build_cost_matrix(
    judges: Sequence[JudgeInfo],
    slots: Sequence[JudgeSlot],
    conflicts: Sequence[JudgeConflict],
) -> list[list[float]]:
    """Build the judges x slots cost matrix (rows are judges)."""
    return [[calculate_cost(judge, s.pairing, conflicts) for s in slots] for judge in judges]


def allocate_judges(
    judges: Sequence[JudgeInfo],
    pairings: Sequence[PairingInfo],
    conflicts: Sequence[JudgeConflict] = (),
    judges_per_room: int = 1,
    round_date: date | None = None,
    format_key: str | None = None,
) -> AllocationResult:
    """Allocate judges to pairings at minimum total cost.

    Args:
        judges: Judge roster.
        pairings: Pairings needing judges.
        conflicts: Declared judge conflicts.
        judges_per_room: Panel size.
        round_date: Date of the round, for availability filtering.
        format_key: Debate format, for specialization filtering.

    Returns:
        AllocationResult with assignments in pairing order and a summary.
        Seats the solver could only fill with a conflicted judge are still
        returned, with ``has_conflict`` set.
    """
    if judges_per_room < 1:
        msg = "judges_per_room must be at least 1"
        raise ValueError(msg)

    available = filter_available_judges(judges, round_date, format_key)
    assignments: list[JudgeAssignment] = []

    if available and pairings:
        slots = expand_slots(pairings, judges_per_room)
        matrix = build_cost_matrix(available, slots, conflicts)
        result = compute_assignment(matrix)

        for judge_index, slot_index in sorted(result.pairs, key=lambda p: p[1]):
            judge = available[judge_index]
            slot = slots[slot_index]
            hit = check_conflict(judge, slot.pairing, conflicts)
            assignments.append(
                JudgeAssignment(
                    pairing_id=slot.pairing.id,
                    judge_id=judge.id,
                    judge_name=judge.name,
                    cost=matrix[judge_index][slot_index],
                    has_conflict=hit is not None,
                    conflict_reason=hit.reason if hit else None,
                )
            )

    summary = summarize_allocation(assignments, pairings, len(available), judges_per_room)
    logger.info(
        "judges_allocated",
        judges=len(available),
        pairings=len(pairings),
        assigned=summary.total_assigned,
        conflicts=summary.conflict_count,
        unassigned=len(summary.unassigned_pairings),
    )
    for warning in summary.warnings:
        logger.warning("allocation_warning", detail=warning)

    return AllocationResult(assignments=assignments, summary=summary)


def summarize_allocation(
    assignments: Sequence[JudgeAssignment],
    pairings: Sequence[PairingInfo],
    judge_supply: int,
    judges_per_room: int = 1,
) -> AllocationSummary:
    """Summarise an allocation and collect warnings.

    Args:
        assignments: Assignments produced by ``allocate_judges``.
        pairings: Pairings that needed judges.
        judge_supply: Number of eligible judges.
        judges_per_room: Panel size.

    Returns:
        AllocationSummary with totals, unassigned pairing IDs and warnings.
    """
    seats: dict[str, int] = {}
    for assignment in assignments:
        seats[assignment.pairing_id] = seats.get(assignment.pairing_id, 0) + 1

    unassigned = [p.id for p in pairings if p.id not in seats]
    short_panels = [p.id for p in pairings if 0 < seats.get(p.id, 0) < judges_per_room]
    conflict_count = sum(1 for a in assignments if a.has_conflict)

    warnings: list[str] = []
    if conflict_count > 0:
        warnings.append(f"{conflict_count} assignments have conflicts")
    if unassigned:
        warnings.append(f"{len(unassigned)} pairings have no judge assigned")
    if short_panels:
        warnings.append(f"{len(short_panels)} pairings have an incomplete panel")

    judges_needed = len(pairings) * judges_per_room
    if judge_supply < judges_needed:
        warnings.append(f"Not enough judges: have {judge_supply}, need {judges_needed}")

    return AllocationSummary(
        total_assigned=len(assignments),
        conflict_count=conflict_count,
        unassigned_pairings=unassigned,
        warnings=warnings,
    )
