"""Configuration schemas and loading for debate-tab."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Literal

import pydantic
import yaml
from pydantic import BaseModel, Field, field_validator

from debate_tab.core.errors import ValidationError

DrawMethod = Literal["random", "power_paired", "round_robin"]
SideMethod = Literal["balance", "preallocated", "random"]
OddBracketMethod = Literal[
    "pullup_top",
    "pullup_bottom",
    "intermediate",
    "intermediate_bubble_up_down",
]


class DrawSettings(BaseModel):
    """Draw generation configuration.

    Attributes:
        draw_method: How teams are matched ("random", "power_paired", "round_robin").
        side_method: How affirmative/negative sides are decided:
            - "balance": team that has been affirmative less often goes affirmative.
            - "preallocated": keep the order produced by the pairing step.
            - "random": coin flip.
        odd_bracket: Which team is pulled up into an odd bracket.
        avoid_rematches: Forbid pairings beyond max_repeat_opponents prior meetings.
        club_protect: Penalise pairings between teams of the same institution.
        history_penalty: Cost per prior meeting of the two teams.
        institution_penalty: Cost added for a same-institution pairing.
        side_penalty: Accepted for compatibility with saved settings; the
            power-pairing cost does not use it.
        max_repeat_opponents: Prior meetings allowed before a pairing is disallowed.
        seed: Seed for coin flips and shuffles. None means nondeterministic.
    """

    draw_method: DrawMethod = "power_paired"
    side_method: SideMethod = "balance"
    odd_bracket: OddBracketMethod = "pullup_top"
    avoid_rematches: bool = True
    club_protect: bool = True
    history_penalty: float = Field(default=1000.0, ge=0)
    institution_penalty: float = Field(default=500.0, ge=0)
    side_penalty: float = Field(default=100.0, ge=0)
    max_repeat_opponents: int = Field(default=0, ge=0)
    seed: int | None = None


class AllocationSettings(BaseModel):
    """Judge allocation configuration."""

    judges_per_room: int = Field(default=1, ge=1)
    round_date: date | None = None
    format_key: str | None = None

    @field_validator("format_key")
    @classmethod
    def normalize_format_key(cls, v: str | None) -> str | None:
        """Treat blank format keys as unset."""
        if v is not None and not v.strip():
            return None
        return v


class EngineConfig(BaseModel):
    """Complete engine configuration."""

    draw: DrawSettings = Field(default_factory=DrawSettings)
    allocation: AllocationSettings = Field(default_factory=AllocationSettings)


def load_config(path: str | Path) -> EngineConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated EngineConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config is invalid (first failing field reported).
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f)

    try:
        return EngineConfig.model_validate(data or {})
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "config"
        raise ValidationError(field, first["msg"]) from e
