from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Mapping

from playres.constants import FIRST_AND_TEN_YTG, KICKOFF_YARDLINE, QUARTER_LENGTH, TIMEOUTS_PER_HALF


def other_team(team: str) -> str:
    return "away" if team == "home" else "home"


@dataclass(frozen=True, slots=True)
class GameState:
    possession: str = "home"          # home|away
    quarter: int = 1                  # 1..4, 5+ = overtime
    down: int = 1                     # 1..4
    distance: int = FIRST_AND_TEN_YTG
    opp_yardline: int = KICKOFF_YARDLINE  # yards to the offense's target goal line
    score_home: int = 0
    score_away: int = 0
    time: str = QUARTER_LENGTH        # "M:SS" left in the quarter
    timeouts_home: int = TIMEOUTS_PER_HALF
    timeouts_away: int = TIMEOUTS_PER_HALF
    timeout_called: bool = False
    consecutive_unsuccessful_plays: int = 0
    is_final: bool = False

    @property
    def offense(self) -> str:
        return self.possession

    @property
    def defense(self) -> str:
        return other_team(self.possession)

    def score_of(self, team: str) -> int:
        return self.score_home if team == "home" else self.score_away

    def timeouts_of(self, team: str) -> int:
        return self.timeouts_home if team == "home" else self.timeouts_away

    @property
    def offense_leading(self) -> bool:
        return self.score_of(self.offense) > self.score_of(self.defense)

    def add_points(self, team: str, points: int) -> GameState:
        if team == "home":
            return replace(self, score_home=self.score_home + points)
        return replace(self, score_away=self.score_away + points)

    def flip_possession(self, opp_yardline: int) -> GameState:
        """New series for the other team, `opp_yardline` from their target."""
        return replace(self, possession=other_team(self.possession), down=1,
                       distance=FIRST_AND_TEN_YTG, opp_yardline=opp_yardline,
                       consecutive_unsuccessful_plays=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "possession": self.possession,
            "quarter": self.quarter,
            "down": self.down,
            "distance": self.distance,
            "opp-yardline": self.opp_yardline,
            "score": {"home": self.score_home, "away": self.score_away},
            "time": self.time,
            "timeouts": {"home": self.timeouts_home, "away": self.timeouts_away},
            "timeoutCalled": self.timeout_called,
            "consecutiveUnsuccessfulPlays": self.consecutive_unsuccessful_plays,
            "isFinal": self.is_final,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> GameState:
        score = raw.get("score") or {}
        timeouts = raw.get("timeouts") or {}
        return cls(
            possession=raw.get("possession", "home"),
            quarter=int(raw.get("quarter", 1)),
            down=int(raw.get("down", 1)),
            distance=int(raw.get("distance", FIRST_AND_TEN_YTG)),
            opp_yardline=int(raw.get("opp-yardline", KICKOFF_YARDLINE)),
            score_home=int(score.get("home", 0)),
            score_away=int(score.get("away", 0)),
            time=str(raw.get("time", QUARTER_LENGTH)),
            timeouts_home=int(timeouts.get("home", TIMEOUTS_PER_HALF)),
            timeouts_away=int(timeouts.get("away", TIMEOUTS_PER_HALF)),
            timeout_called=bool(raw.get("timeoutCalled", False)),
            consecutive_unsuccessful_plays=int(raw.get("consecutiveUnsuccessfulPlays", 0)),
            is_final=bool(raw.get("isFinal", False)),
        )
