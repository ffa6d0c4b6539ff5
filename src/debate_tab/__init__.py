"""Debate Tab pairing engine.

Power-paired draws, judge allocation and the Munkres assignment solver
behind both, for Swiss-style debate tournaments.
"""

from debate_tab.services.allocation import AllocationResult, allocate_judges
from debate_tab.services.draw import generate_draw, generate_elimination_pairings
from debate_tab.solver import DISALLOWED, Assignment, compute_assignment

__version__ = "0.1.0"
__all__ = [
    "DISALLOWED",
    "AllocationResult",
    "Assignment",
    "__version__",
    "allocate_judges",
    "compute_assignment",
    "generate_draw",
    "generate_elimination_pairings",
]
