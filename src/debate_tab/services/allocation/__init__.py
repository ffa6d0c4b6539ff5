from .judges import (
    AllocationResult,
    ConflictHit,
    JudgeSlot,
    allocate_judges,
    build_cost_matrix,
    calculate_cost,
    check_conflict,
    expand_slots,
    filter_available_judges,
    summarize_allocation,
)

__all__ = [
    "AllocationResult",
    "ConflictHit",
    "JudgeSlot",
    "allocate_judges",
    "build_cost_matrix",
    "calculate_cost",
    "check_conflict",
    "expand_slots",
    "filter_available_judges",
    "summarize_allocation",
]
