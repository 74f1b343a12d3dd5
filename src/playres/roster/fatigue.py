from __future__ import annotations
import logging
from typing import Collection, Optional

from playres.config import FatigueCfg
from playres.constants import PERCENTILE_MAX, PERCENTILE_MIN
from playres.rates import clamp
from playres.roster.players import Player, Rosters

logger = logging.getLogger(__name__)


class FatigueUpdater:
    """Post-snap stamina: players on the field tire, everyone else recovers."""

    def __init__(self, cfg: Optional[FatigueCfg] = None):
        self.cfg = cfg or FatigueCfg()

    def drain(self, player: Player, play_type: str) -> float:
        mods = self.cfg.position_modifiers
        pos = player.position.value
        factor = mods.get("always", {}).get(pos, 1.0) * mods.get(play_type, {}).get(pos, 1.0)
        return self.cfg.baseline_fatigue * factor

    def apply(self, rosters: Rosters, on_field: Collection[str], play_type: str) -> None:
        """Mutates stamina in place for every rostered player, exactly once each."""
        seen = set()
        for p in rosters.all_players():
            if id(p) in seen:
                continue
            seen.add(id(p))
            if p.name in on_field:
                delta = -self.drain(p, play_type)
            else:
                delta = self.cfg.baseline_recovery
            p.stamina = clamp(p.stamina + delta, PERCENTILE_MIN, PERCENTILE_MAX)
        logger.debug("fatigue applied: %d on field, %d rostered", len(on_field), len(seen))
