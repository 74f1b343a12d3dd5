from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from playres.config import FatigueCurveCfg
from playres.rates import clamp
from playres.constants import PERCENTILE_MAX, PERCENTILE_MIN
from playres.roster.assignments import Assignment
from playres.roster.players import Player
from playres.roster.traits import PlayContext, TraitAdjustment, detect_trait


def fatigue_multiplier_raw(stamina: float, curve: Optional[FatigueCurveCfg] = None) -> float:
    """Piecewise stamina -> effectiveness, before the min-multiplier floor.

    flat above the high threshold, linear between the thresholds,
    log10 below the medium threshold (reaching 0 at stamina <= 1).
    """
    c = curve or FatigueCurveCfg()
    s = clamp(stamina, PERCENTILE_MIN, PERCENTILE_MAX)
    if s >= c.high_stamina_threshold:
        return c.high_stamina_multiplier
    if s >= c.medium_stamina_threshold:
        span = c.high_stamina_threshold - c.medium_stamina_threshold
        frac = (c.high_stamina_threshold - s) / span
        return c.high_stamina_multiplier - frac * (c.high_stamina_multiplier - c.medium_stamina_multiplier)
    a = c.medium_stamina_multiplier / math.log10(c.medium_stamina_threshold)
    return a * math.log10(max(s, 1.0))


def fatigue_multiplier(stamina: float, curve: Optional[FatigueCurveCfg] = None) -> float:
    c = curve or FatigueCurveCfg()
    return max(c.min_multiplier, fatigue_multiplier_raw(stamina, c))


@dataclass(frozen=True, slots=True)
class EffectiveRating:
    effective_percentile: float
    adjusted_base: float
    multiplier: float
    trait: Optional[TraitAdjustment] = None


def effective_percentile(player: Player, assignment: Optional[Assignment] = None,
                         ctx: Optional[PlayContext] = None,
                         curve: Optional[FatigueCurveCfg] = None) -> EffectiveRating:
    """Trait first, then fatigue; fatigue can only pull the rating down."""
    base = player.percentile
    trait = detect_trait(player, assignment, ctx)
    if trait is not None:
        base = clamp(base + trait.value, PERCENTILE_MIN, PERCENTILE_MAX)
    mult = fatigue_multiplier(player.stamina, curve)
    return EffectiveRating(
        effective_percentile=min(base * mult, base),
        adjusted_base=base,
        multiplier=mult,
        trait=trait,
    )


def rate_lineup(players: Iterable[Player], assignments: Mapping[str, Assignment],
                ctx: Optional[PlayContext] = None,
                curve: Optional[FatigueCurveCfg] = None) -> Dict[str, EffectiveRating]:
    """Effective ratings for everyone on the field, keyed by player name."""
    return {p.name: effective_percentile(p, assignments.get(p.name), ctx, curve) for p in players}
