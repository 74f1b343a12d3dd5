from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from playres.config import RubberBandCfg, SpecialTeamsCfg
from playres.constants import FIRST_AND_TEN_YTG, MAX_DOWN, MAX_YARDLINE, MIN_YARDLINE, SHORT_GAIN_YARDS
from playres.rates import RateVector
from playres.rules.special_teams import FG_GOOD, SpecialTeamsResult
from playres.sampling.outcomes import Category
from playres.state import GameState

logger = logging.getLogger(__name__)

PLAY_TYPES = ("run", "pass", "punt", "fg")


@dataclass(frozen=True, slots=True)
class RubberBand:
    rates: RateVector
    penalty_yards: int = 0
    applied: Optional[str] = None   # "penalty", "success-boost" or None


@dataclass(frozen=True, slots=True)
class Transition:
    state: GameState
    first_down: bool = False
    touchdown: bool = False
    turnover: bool = False
    turnover_on_downs: bool = False
    possession_changed: bool = False
    points: int = 0


class RulesFSM:
    def __init__(self, rubber_band: Optional[RubberBandCfg] = None,
                 special_teams: Optional[SpecialTeamsCfg] = None):
        self.rb = rubber_band or RubberBandCfg()
        self.st = special_teams or SpecialTeamsCfg()

    def legal_actions(self, s: GameState) -> dict[str, np.ndarray]:
        mask_pt = np.zeros(len(PLAY_TYPES), dtype=bool)
        if s.is_final:
            return {"play_type": mask_pt}
        mask_pt[[0, 1]] = True          # run, pass
        if s.down == MAX_DOWN:
            mask_pt[[2, 3]] = True      # punt, fg
        return {"play_type": mask_pt}

    def rubber_band_active(self, s: GameState) -> bool:
        return s.consecutive_unsuccessful_plays >= self.rb.min_consecutive and s.down >= self.rb.min_down

    def rubber_band(self, s: GameState, play_type: str, rates: RateVector,
                    conversion_rate: float, dice) -> RubberBand:
        """Pre-sample nudge after repeated failures on a late down."""
        if not self.rubber_band_active(s):
            return RubberBand(rates)
        if play_type == "pass":
            roll = dice.d100()
            if roll <= self.rb.major_penalty_roll:
                return RubberBand(rates, self.rb.major_penalty_yards, "penalty")
            if roll <= self.rb.minor_penalty_roll:
                return RubberBand(rates, self.rb.minor_penalty_yards, "penalty")
            return RubberBand(rates.with_success(rates.success + self.rb.pass_success_boost), 0, "success-boost")
        boost = self.rb.run_conversion_factor * conversion_rate
        return RubberBand(rates.with_success(rates.success + boost), 0, "success-boost")

    @staticmethod
    def next_counter(s: GameState, category: Category, yards: int) -> int:
        if category is Category.UNSUCCESSFUL or (yards < SHORT_GAIN_YARDS and category is not Category.EXPLOSIVE):
            return s.consecutive_unsuccessful_plays + 1
        return 0

    def _flip(self, s: GameState, opp_yardline: int, why: str) -> GameState:
        # safeties aren't modeled; a change of possession on the goal line spots at the 1
        opp_yardline = max(MIN_YARDLINE + 1, opp_yardline)
        ns = s.flip_possession(opp_yardline)
        logger.info("%s: %s ball at opp-yardline %d", why, ns.possession, opp_yardline)
        return ns

    def apply_outcome(self, s: GameState, *, yards: int, turnover: bool, category: Category) -> Transition:
        line = min(MAX_YARDLINE, s.opp_yardline - yards)
        if line <= MIN_YARDLINE:
            pts = self.st.touchdown_points
            ns = s.add_points(s.offense, pts)
            ns = self._flip(ns, self.st.kickoff_yardline, f"touchdown {s.offense}")
            return Transition(ns, touchdown=True, possession_changed=True, points=pts)

        counter = self.next_counter(s, category, yards)
        ns = replace(s, opp_yardline=line, consecutive_unsuccessful_plays=counter)
        if turnover:
            ns = self._flip(ns, MAX_YARDLINE - line, "turnover")
            return Transition(ns, turnover=True, possession_changed=True)
        if yards >= s.distance:
            ns = replace(ns, down=1, distance=FIRST_AND_TEN_YTG, consecutive_unsuccessful_plays=0)
            return Transition(ns, first_down=True)
        ns = replace(ns, down=s.down + 1, distance=s.distance - yards)
        if ns.down > MAX_DOWN:
            ns = self._flip(ns, MAX_YARDLINE - line, "turnover on downs")
            return Transition(ns, turnover_on_downs=True, possession_changed=True)
        return Transition(ns)

    def apply_special_teams(self, s: GameState, result: SpecialTeamsResult) -> Transition:
        if result.kind == FG_GOOD:
            ns = s.add_points(s.offense, result.points)
            ns = self._flip(ns, self.st.kickoff_yardline, f"field goal {s.offense}")
            return Transition(ns, possession_changed=True, points=result.points)
        ns = self._flip(s, result.new_yardline, result.kind)
        return Transition(ns, possession_changed=True)
