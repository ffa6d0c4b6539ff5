"""Team snapshot and draw output models."""

from pydantic import BaseModel, ConfigDict, Field


class Team(BaseModel):
    """A team as seen by the draw generator for one round.

    Records are owned by the external record-keeper; the generator works on
    copies, so pullup counters bumped during a draw are never written back.
    """

    id: str
    name: str | None = None
    institution: str | None = None
    wins: int = Field(default=0, ge=0)
    speaks: float = 0.0
    aff_count: int = Field(default=0, ge=0)
    neg_count: int = Field(default=0, ge=0)
    pullup_count: int = Field(default=0, ge=0)
    active: bool = True

    @property
    def side_imbalance(self) -> int:
        """Affirmative minus negative appearances."""
        return self.aff_count - self.neg_count


class PairingHistory(BaseModel):
    """A pairing from a previous round."""

    model_config = ConfigDict(frozen=True)

    aff_id: str
    neg_id: str
    round_number: int = Field(ge=1)


class GeneratedPairing(BaseModel):
    """One debate in a generated draw. A missing negative team means a bye."""

    aff_team_id: str
    neg_team_id: str | None = None
    bracket: int = 0
    room_rank: int = 0
    flags: list[str] = Field(default_factory=list)

    @property
    def is_bye(self) -> bool:
        return self.neg_team_id is None


class SeedEntry(BaseModel):
    """A team's seed for an elimination round (1 is the top seed)."""

    team_id: str
    seed: int = Field(ge=1)
