"""
Position traits. Each position has an ordered rule list; the first rule whose
condition holds *and* whose trait value is nonzero wins. Changing the order
changes outcomes.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from playres.roster.assignments import (
    Assignment, AssignmentCategory as Cat, ManCoverageAction, QBPassAction, QBRunAction,
    QuartersMatchAction, RBRunAction, RouteAction, RunBlockAction, RushAction, ZoneShortAction,
)
from playres.roster.players import Player, Position


@dataclass(frozen=True, slots=True)
class PlayContext:
    play_type: str = "run"
    location: str = ""        # on-field alignment label, e.g. "press left"


@dataclass(frozen=True, slots=True)
class TraitAdjustment:
    trait: str
    value: float
    description: str


Condition = Callable[[Assignment, PlayContext], bool]

BOOTS = {QBPassAction.BOOT_LEFT, QBPassAction.BOOT_RIGHT}
LONG_DROPS = {QBPassAction.FIVE_STEP_DROP, QBPassAction.SEVEN_STEP_DROP}
OPTION_READS = {QBRunAction.ZONE_READ_LEFT, QBRunAction.ZONE_READ_RIGHT,
                QBRunAction.SPEED_OPTION_LEFT, QBRunAction.SPEED_OPTION_RIGHT}
OUTSIDE_RUNS = {RBRunAction.OZR_LEFT, RBRunAction.OZR_RIGHT, RBRunAction.SWEEP}
GAP_RUNS = {RBRunAction.LEFT_A_GAP, RBRunAction.LEFT_B_GAP, RBRunAction.LEFT_C_GAP,
            RBRunAction.RIGHT_A_GAP, RBRunAction.RIGHT_B_GAP, RBRunAction.RIGHT_C_GAP}
DEEP_ROUTES = {RouteAction.DEEP_DIG, RouteAction.CORNER, RouteAction.POST, RouteAction.GO,
               RouteAction.POST_CORNER, RouteAction.SKINNY_POST}
ZONE_BLOCKS = {RunBlockAction.ZONE_INSIDE_LEFT, RunBlockAction.ZONE_INSIDE_RIGHT,
               RunBlockAction.ZONE_OUTSIDE_LEFT, RunBlockAction.ZONE_OUTSIDE_RIGHT}
GAP_BLOCKS = {RunBlockAction.GAP_LEFT_A, RunBlockAction.GAP_LEFT_B, RunBlockAction.GAP_LEFT_C,
              RunBlockAction.GAP_RIGHT_A, RunBlockAction.GAP_RIGHT_B, RunBlockAction.GAP_RIGHT_C}
# Quarters-match calls split between zone (deep/cap) and man (trail/meg) responsibilities
ZONE_LIKE_CALLS = {ManCoverageAction.DEEP_TECHNIQUE, QuartersMatchAction.CAP_DEEP, ZoneShortAction.TAMPA}
MAN_LIKE_CALLS = {ManCoverageAction.TRAIL_TECHNIQUE, QuartersMatchAction.TRAIL_APEX, QuartersMatchAction.LOCK_MEG}


def _action_in(actions) -> Condition:
    return lambda a, ctx: a.action in actions


def _category(*cats: Cat) -> Condition:
    return lambda a, ctx: a.category in cats


def _play_type(pt: str) -> Condition:
    return lambda a, ctx: ctx.play_type == pt


_OL_RULES: List[Tuple[str, Condition]] = [
    ("zone-blocker", _action_in(ZONE_BLOCKS)),
    ("gap-blocker", _action_in(GAP_BLOCKS | {RunBlockAction.COMBO})),
    ("hammer", _action_in(GAP_BLOCKS)),
    ("pass-protection", _category(Cat.PASS_BLOCK)),
]
_DL_RULES: List[Tuple[str, Condition]] = [
    ("qb-predator", _play_type("pass")),
    ("gap-stuffer", _play_type("run")),
    ("contain", _action_in({RushAction.CONTAIN})),
]
_LB_RULES: List[Tuple[str, Condition]] = [
    ("blitz-threat", _category(Cat.RUSH)),
    ("gap-stuffer", _play_type("run")),
    ("zone-coverage", lambda a, ctx: a.category.is_zone),
    ("man-coverage", _category(Cat.MAN_COVERAGE)),
]
_DB_RULES: List[Tuple[str, Condition]] = [
    ("run-fitter", _play_type("run")),
    ("zone-coverage", lambda a, ctx: a.category.is_zone or a.action in ZONE_LIKE_CALLS),
    ("man-coverage", lambda a, ctx: a.category is Cat.MAN_COVERAGE or a.action in MAN_LIKE_CALLS),
    ("presser", lambda a, ctx: "press" in ctx.location),
]

TRAIT_RULES: Dict[Position, List[Tuple[str, Condition]]] = {
    Position.QB: [
        ("escape-artist", _action_in(BOOTS)),
        ("pocket-passer", _action_in(LONG_DROPS)),
        ("option-threat", _action_in(OPTION_READS)),
    ],
    Position.RB: [
        ("blocker", _category(Cat.PROTECT)),
        ("route-runner", _category(Cat.ROUTE)),
        ("speed-back", _action_in(OUTSIDE_RUNS)),
        ("power-back", _action_in(GAP_RUNS)),
    ],
    Position.WR: [
        ("deep-threat", _action_in(DEEP_ROUTES)),
        ("quick-game", lambda a, ctx: a.category is Cat.ROUTE and a.action not in DEEP_ROUTES),
        ("blocker", _category(Cat.BLOCK)),
    ],
    Position.TE: [
        ("run-blocker", _category(Cat.RUN_BLOCK)),
        ("protection", _category(Cat.PASS_BLOCK)),
        ("pass-catcher", _category(Cat.ROUTE)),
    ],
    Position.OT: _OL_RULES,
    Position.OG: _OL_RULES,
    Position.C: _OL_RULES,
    Position.DE: _DL_RULES,
    Position.DT: _DL_RULES,
    Position.LB: _LB_RULES,
    Position.MLB: _LB_RULES,
    Position.CB: _DB_RULES,
    Position.S: _DB_RULES,
}


def trait_label(trait: str) -> str:
    return " ".join(w.upper() if w == "qb" else w.capitalize() for w in trait.split("-"))


def detect_trait(player: Player, assignment: Optional[Assignment],
                 ctx: Optional[PlayContext] = None) -> Optional[TraitAdjustment]:
    if assignment is None or not player.traits:
        return None
    ctx = ctx or PlayContext()
    for trait, cond in TRAIT_RULES[player.position]:
        if cond(assignment, ctx):
            value = player.trait(trait)
            if value != 0:
                return TraitAdjustment(trait, value, trait_label(trait))
    return None
