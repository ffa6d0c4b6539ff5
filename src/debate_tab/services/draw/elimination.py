"""Seeded pairings for elimination rounds."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from debate_tab.models import GeneratedPairing, SeedEntry

logger = structlog.get_logger()


def generate_elimination_pairings(seeds: Sequence[SeedEntry]) -> list[GeneratedPairing]:
    """Pair seeds 1 v N, 2 v N-1, and so on.

    The higher seed takes the affirmative. With an odd field the top seed
    gets a bye, listed after the debates.

    Args:
        seeds: Breaking teams with their seeds.

    Returns:
        Pairings with room ranks following seed order.
    """
    ordered = sorted(seeds, key=lambda s: s.seed)
    bye: SeedEntry | None = None
    if len(ordered) % 2 == 1:
        bye = ordered.pop(0)

    pairings = [
        GeneratedPairing(
            aff_team_id=ordered[i].team_id,
            neg_team_id=ordered[-1 - i].team_id,
            room_rank=i + 1,
        )
        for i in range(len(ordered) // 2)
    ]
    if bye is not None:
        pairings.append(
            GeneratedPairing(aff_team_id=bye.team_id, room_rank=len(pairings) + 1, flags=["bye"])
        )
        logger.info("bye_assigned", team=bye.team_id, seed=bye.seed)

    return pairings
