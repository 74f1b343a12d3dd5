from __future__ import annotations
import logging
from dataclasses import replace
from typing import Optional

from playres.config import TimingCfg
from playres.constants import TEAMS, TIMEOUTS_PER_HALF
from playres.errors import IllegalActionError
from playres.state import GameState

logger = logging.getLogger(__name__)


def parse_clock(t: str) -> int:
    """ "M:SS" -> seconds."""
    try:
        m, s = t.strip().split(":")
        minutes, seconds = int(m), int(s)
    except ValueError as e:
        raise ValueError(f"bad clock string {t!r}") from e
    if minutes < 0 or not 0 <= seconds < 60:
        raise ValueError(f"bad clock string {t!r}")
    return minutes * 60 + seconds


def format_clock(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


class GameClock:
    def __init__(self, cfg: Optional[TimingCfg] = None):
        self.cfg = cfg or TimingCfg()

    def runoff(self, play_type: str, *, offense_leading: bool, stopped: bool = False) -> int:
        """Seconds a snap takes off the clock.

        `stopped` covers incompletions, snaps after a timeout and special teams.
        """
        if stopped:
            return self.cfg.timeout_incomplete_runoff
        table = self.cfg.winning_team if offense_leading else self.cfg.losing_team
        return table.for_play(play_type)

    def advance(self, s: GameState, seconds: int) -> GameState:
        if s.is_final:
            return s
        left = parse_clock(s.time) - seconds
        if left > 0:
            return replace(s, time=format_clock(left))
        if s.quarter >= self.cfg.regulation_quarters:
            logger.info("end of regulation: home %d, away %d", s.score_home, s.score_away)
            return replace(s, time=format_clock(0), is_final=True, timeout_called=False)
        quarter = s.quarter + 1
        ns = replace(s, quarter=quarter, time=self.cfg.quarter_length)
        if quarter == self.cfg.regulation_quarters // 2 + 1:
            ns = replace(ns, timeouts_home=TIMEOUTS_PER_HALF, timeouts_away=TIMEOUTS_PER_HALF,
                         timeout_called=False)
        logger.info("start of quarter %d", quarter)
        return ns

    def after_snap(self, s: GameState, play_type: str, *, offense_leading: bool,
                   stopped: bool = False) -> GameState:
        """Run the clock for a completed snap and clear a pending timeout."""
        secs = self.runoff(play_type, offense_leading=offense_leading,
                           stopped=stopped or s.timeout_called)
        return self.advance(replace(s, timeout_called=False), secs)


def call_timeout(s: GameState, team: str) -> GameState:
    if team not in TEAMS:
        raise IllegalActionError(f"unknown team {team!r}")
    if s.is_final:
        raise IllegalActionError("game is over")
    if s.timeout_called:
        raise IllegalActionError("a timeout is already pending")
    left = s.timeouts_of(team)
    if left <= 0:
        raise IllegalActionError(f"{team} has no timeouts left")
    if team == "home":
        return replace(s, timeouts_home=left - 1, timeout_called=True)
    return replace(s, timeouts_away=left - 1, timeout_called=True)
