"""Core configuration and errors for debate-tab."""

from debate_tab.core.config import (
    AllocationSettings,
    DrawMethod,
    DrawSettings,
    EngineConfig,
    OddBracketMethod,
    SideMethod,
    load_config,
)
from debate_tab.core.errors import (
    ConfigurationError,
    SnapshotError,
    ValidationError,
)

__all__ = [
    "AllocationSettings",
    "DrawMethod",
    "DrawSettings",
    "EngineConfig",
    "OddBracketMethod",
    "SideMethod",
    "load_config",
    "ConfigurationError",
    "SnapshotError",
    "ValidationError",
]
