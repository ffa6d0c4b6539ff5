"""Snapshot files handed to the engine by the hosting application.

Snapshots are YAML documents (JSON is accepted too, being valid YAML). A
draw snapshot looks like::

    round_number: 3
    teams:
      - {id: t1, institution: Oxford, wins: 2, speaks: 151.5, aff_count: 1, neg_count: 1}
    history:
      - {aff_id: t1, neg_id: t2, round_number: 1}

An allocation snapshot carries ``judges``, ``pairings`` and ``conflicts``.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

import pydantic
import yaml
from pydantic import BaseModel, Field

from debate_tab.core.errors import SnapshotError
from debate_tab.models import (
    GeneratedPairing,
    JudgeConflict,
    JudgeInfo,
    PairingHistory,
    PairingInfo,
    Team,
)

SnapshotT = TypeVar("SnapshotT", bound=BaseModel)


class DrawSnapshot(BaseModel):
    """Teams and history for one draw."""

    round_number: int = Field(default=1, ge=1)
    teams: list[Team] = Field(default_factory=list)
    history: list[PairingHistory] = Field(default_factory=list)


class AllocationSnapshot(BaseModel):
    """Judges, pairings and conflicts for one allocation."""

    judges: list[JudgeInfo] = Field(default_factory=list)
    pairings: list[PairingInfo] = Field(default_factory=list)
    conflicts: list[JudgeConflict] = Field(default_factory=list)


def _load(path: str | Path, model: type[SnapshotT]) -> SnapshotT:
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        msg = f"Snapshot file not found: {snapshot_path}"
        raise FileNotFoundError(msg)

    try:
        with snapshot_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return model.model_validate(data or {})
    except yaml.YAMLError as e:
        raise SnapshotError(str(snapshot_path), f"not valid YAML/JSON ({e})") from e
    except pydantic.ValidationError as e:
        raise SnapshotError(str(snapshot_path), str(e)) from e


def load_draw_snapshot(path: str | Path) -> DrawSnapshot:
    """Load teams and pairing history from a snapshot file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SnapshotError: If the file can't be parsed or validated.
    """
    return _load(path, DrawSnapshot)


def load_allocation_snapshot(path: str | Path) -> AllocationSnapshot:
    """Load judges, pairings and conflicts from a snapshot file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SnapshotError: If the file can't be parsed or validated.
    """
    return _load(path, AllocationSnapshot)


def pairings_from_draw(
    draw: Sequence[GeneratedPairing],
    teams: Sequence[Team],
    round_number: int,
) -> list[PairingInfo]:
    """Turn a generated draw into allocation input, skipping byes.

    Pairing IDs are ``R<round>-<room rank>``.
    """
    by_id = {t.id: t for t in teams}
    pairings: list[PairingInfo] = []
    for pairing in draw:
        if pairing.neg_team_id is None:
            continue
        aff = by_id.get(pairing.aff_team_id)
        neg = by_id.get(pairing.neg_team_id)
        pairings.append(
            PairingInfo(
                id=f"R{round_number}-{pairing.room_rank}",
                aff_team_id=pairing.aff_team_id,
                neg_team_id=pairing.neg_team_id,
                aff_institution=aff.institution if aff else None,
                neg_institution=neg.institution if neg else None,
                room_rank=pairing.room_rank,
            )
        )
    return pairings
