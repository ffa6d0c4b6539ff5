"""Judge allocation input and output models."""

import math
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_serializer


class JudgeInfo(BaseModel):
    """A judge on the roster.

    An empty ``available_dates`` list means the judge is always available; an
    empty or missing ``specializations`` list means any format.
    """

    id: str
    name: str | None = None
    experience_years: float = Field(default=0.0, ge=0)
    available_dates: list[date] = Field(default_factory=list)
    institution: str | None = None
    specializations: list[str] | None = None


class PairingInfo(BaseModel):
    """A saved pairing that needs judges."""

    id: str
    aff_team_id: str
    neg_team_id: str
    aff_institution: str | None = None
    neg_institution: str | None = None
    scheduled_time: datetime | None = None
    room_rank: int | None = Field(default=None, ge=1)


class JudgeConflict(BaseModel):
    """A declared conflict between a judge and a team or institution."""

    judge_id: str
    team_id: str | None = None
    institution: str | None = None
    conflict_type: Literal["team", "institution", "personal"] = "team"


class JudgeAssignment(BaseModel):
    """A judge seated in a pairing."""

    pairing_id: str
    judge_id: str
    judge_name: str | None = None
    cost: float
    has_conflict: bool = False
    conflict_reason: str | None = None

    @field_serializer("cost", when_used="json")
    def serialize_cost(self, cost: float) -> float | None:
        """Disallowed (infinite) costs become null in JSON output."""
        return None if math.isinf(cost) else cost


class AllocationSummary(BaseModel):
    """Diagnostics for one allocation run."""

    total_assigned: int = 0
    conflict_count: int = 0
    unassigned_pairings: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
