"""Assignment solver shared by the draw generator and judge allocator."""

from debate_tab.solver.munkres import (
    DISALLOWED,
    Assignment,
    compute_assignment,
    is_disallowed,
)

__all__ = [
    "DISALLOWED",
    "Assignment",
    "compute_assignment",
    "is_disallowed",
]
