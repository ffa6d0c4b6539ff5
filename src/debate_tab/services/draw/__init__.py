from .brackets import Bracket, DebatePairing, create_brackets, resolve_odd_brackets, select_pullup
from .elimination import generate_elimination_pairings
from .generator import assign_room_ranks, generate_draw
from .power import (
    check_pairing_conflict,
    count_meetings,
    meeting_counts,
    pair_bracket,
    pairing_cost,
    resolve_conflicts,
)
from .sides import assign_sides, calculate_side_imbalance

__all__ = [
    "Bracket",
    "DebatePairing",
    "assign_room_ranks",
    "assign_sides",
    "calculate_side_imbalance",
    "check_pairing_conflict",
    "count_meetings",
    "create_brackets",
    "generate_draw",
    "generate_elimination_pairings",
    "meeting_counts",
    "pair_bracket",
    "pairing_cost",
    "resolve_conflicts",
    "resolve_odd_brackets",
    "select_pullup",
]
