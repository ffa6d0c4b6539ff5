from debate_tab.models.judge import (
    AllocationSummary,
    JudgeAssignment,
    JudgeConflict,
    JudgeInfo,
    PairingInfo,
)
from debate_tab.models.team import GeneratedPairing, PairingHistory, SeedEntry, Team

__all__ = [
    "AllocationSummary",
    "GeneratedPairing",
    "JudgeAssignment",
    "JudgeConflict",
    "JudgeInfo",
    "PairingHistory",
    "PairingInfo",
    "SeedEntry",
    "Team",
]
