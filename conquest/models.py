from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Territory(BaseModel):
    # Combat mutates territories in place; re-validate so troops can never go negative.
    model_config = ConfigDict(validate_assignment=True)

    name: str
    faction: str
    troops: int = Field(..., ge=0)

    def is_owned_by(self, faction: str) -> bool:
        return self.faction == faction


class MissionKind(StrEnum):
    conquer_three = "conquer_three"
    reach_fifteen_troops = "reach_fifteen_troops"
    conquer_all = "conquer_all"


class Mission(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: MissionKind
    # Display-only number shown next to the description (1, 2 or 3).
    number: int
    description: str


class BattleOutcome(StrEnum):
    attacker_won = "attacker_won"
    defender_won = "defender_won"


class BattleReport(BaseModel):
    seq: int
    origin: int
    destination: int
    attacker_name: str
    defender_name: str
    outcome: BattleOutcome
    created_at: datetime


class GamePhase(StrEnum):
    setup = "setup"
    playing = "playing"
    won = "won"
    quit = "quit"


class GameState(BaseModel):
    game_id: UUID
    created_at: datetime
    last_updated_at: datetime

    # For reproducibility/debugging.
    seed: int

    # Fixed for the lifetime of the game; territories are filled in during setup.
    territory_count: int = Field(..., ge=0)

    player_faction: str = ""
    territories: list[Territory] = Field(default_factory=list)

    mission: Mission | None = None

    phase: GamePhase = GamePhase.setup
    won: bool = False

    # Every resolved attack, oldest first.
    battles: list[BattleReport] = Field(default_factory=list)
