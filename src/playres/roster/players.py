from __future__ import annotations
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from playres.constants import PERCENTILE_MAX, PERCENTILE_MIN

ROSTER_KEYS = ("home-offense", "home-defense", "away-offense", "away-defense")


class Position(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    OT = "OT"
    OG = "OG"
    C = "C"
    DE = "DE"
    DT = "DT"
    LB = "LB"
    MLB = "MLB"
    CB = "CB"
    S = "S"


class Player(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, extra="allow")

    name: str
    position: Position
    percentile: float = Field(50.0, ge=PERCENTILE_MIN, le=PERCENTILE_MAX)
    stamina: float = Field(100.0, ge=PERCENTILE_MIN, le=PERCENTILE_MAX)
    traits: Dict[str, float] = Field(default_factory=dict, alias="traits-from-baseline-percentile")

    @field_validator("traits", mode="before")
    @classmethod
    def _no_null_traits(cls, v):
        return v or {}

    def trait(self, name: str) -> float:
        return self.traits.get(name, 0.0)


class Rosters(BaseModel):
    """The four squads; which two are on the field depends on possession."""
    model_config = ConfigDict(populate_by_name=True)

    home_offense: List[Player] = Field(default_factory=list, alias="home-offense")
    home_defense: List[Player] = Field(default_factory=list, alias="home-defense")
    away_offense: List[Player] = Field(default_factory=list, alias="away-offense")
    away_defense: List[Player] = Field(default_factory=list, alias="away-defense")

    def for_possession(self, possession: str) -> Tuple[List[Player], List[Player]]:
        if possession == "home":
            return self.home_offense, self.away_defense
        return self.away_offense, self.home_defense

    def squad(self, key: str) -> List[Player]:
        return getattr(self, key.replace("-", "_"))

    def all_players(self) -> Iterator[Player]:
        for key in ROSTER_KEYS:
            yield from self.squad(key)

    def find(self, name: str) -> Player:
        for p in self.all_players():
            if p.name == name:
                return p
        raise KeyError(name)
