from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from playres.config import SpecialTeamsCfg
from playres.constants import MAX_YARDLINE
from playres.rates import clamp
from playres.state import GameState

PUNT = "punt"
FG_GOOD = "field-goal-success"
FG_MISS = "field-goal-miss"


@dataclass(frozen=True, slots=True)
class SpecialTeamsResult:
    kind: str
    description: str
    yards: int = 0                   # punt distance
    new_yardline: Optional[int] = None  # receiving team's opp-yardline
    points: int = 0


def field_goal_probability(opp_yardline: int, cfg: Optional[SpecialTeamsCfg] = None) -> float:
    """Percent chance, linear in the line of scrimmage."""
    cfg = cfg or SpecialTeamsCfg()
    return clamp(cfg.fg_base_percent - cfg.fg_decay_per_yard * opp_yardline, 0.0, 100.0)


def punt(s: GameState, dice, cfg: Optional[SpecialTeamsCfg] = None) -> SpecialTeamsResult:
    cfg = cfg or SpecialTeamsCfg()
    distance = int(round(cfg.punt_base_distance + (dice.uniform() - 0.5) * cfg.punt_variance))
    if s.opp_yardline - distance < 0:
        return SpecialTeamsResult(PUNT, f"Punt traveled {distance} yards. Touchback.",
                                  yards=distance, new_yardline=cfg.touchback_yardline)
    new_yardline = MAX_YARDLINE - (s.opp_yardline - distance)
    return SpecialTeamsResult(PUNT, f"Punt traveled {distance} yards. Opponent starts at {new_yardline} yard line.",
                              yards=distance, new_yardline=new_yardline)


def field_goal(s: GameState, dice, cfg: Optional[SpecialTeamsCfg] = None) -> SpecialTeamsResult:
    cfg = cfg or SpecialTeamsCfg()
    roll = dice.uniform() * 100.0
    if roll <= field_goal_probability(s.opp_yardline, cfg):
        return SpecialTeamsResult(FG_GOOD, f"Field goal is GOOD! {cfg.field_goal_points} points awarded.",
                                  points=cfg.field_goal_points)
    new_yardline = MAX_YARDLINE - s.opp_yardline
    return SpecialTeamsResult(
        FG_MISS,
        f"Field goal is NO GOOD. Turnover on downs. Opponent starts at {new_yardline} yard line.",
        new_yardline=new_yardline,
    )
