"""Plain-text tables for draws and judge allocations."""

from __future__ import annotations

from collections.abc import Sequence

from tabulate import tabulate

from debate_tab.models import AllocationSummary, GeneratedPairing, JudgeAssignment, Team
from debate_tab.solver import is_disallowed

BYE_LABEL = "(bye)"


def _team_label(team_id: str | None, teams: dict[str, Team]) -> str:
    if team_id is None:
        return BYE_LABEL
    team = teams.get(team_id)
    if team is None or not team.name:
        return team_id
    return f"{team.name} ({team_id})"


def format_draw_table(draw: Sequence[GeneratedPairing], teams: Sequence[Team] = ()) -> str:
    """Render a draw as a GitHub-style table, one row per room.

    Args:
        draw: Pairings in room-rank order.
        teams: Optional team snapshot used to show team names.

    Returns:
        Table text.
    """
    by_id = {t.id: t for t in teams}
    rows = [
        (
            p.room_rank,
            p.bracket,
            _team_label(p.aff_team_id, by_id),
            _team_label(p.neg_team_id, by_id),
            ", ".join(p.flags),
        )
        for p in draw
    ]
    return tabulate(
        rows, headers=("Room", "Bracket", "Affirmative", "Negative", "Flags"), tablefmt="github"
    )


def format_allocation_table(assignments: Sequence[JudgeAssignment]) -> str:
    """Render judge assignments, marking conflicted seats."""
    rows = [
        (
            a.pairing_id,
            a.judge_name or a.judge_id,
            "disallowed" if is_disallowed(a.cost) else f"{a.cost:.0f}",
            a.conflict_reason or "",
        )
        for a in assignments
    ]
    return tabulate(rows, headers=("Pairing", "Judge", "Cost", "Conflict"), tablefmt="github")


def format_allocation_summary(summary: AllocationSummary) -> str:
    """Render the allocation summary as short lines of text."""
    lines = [
        f"Assigned: {summary.total_assigned}",
        f"Conflicts: {summary.conflict_count}",
    ]
    if summary.unassigned_pairings:
        lines.append(f"Unassigned pairings: {', '.join(summary.unassigned_pairings)}")
    lines.extend(f"Warning: {w}" for w in summary.warnings)
    return "\n".join(lines)
