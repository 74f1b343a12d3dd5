"""
Closed assignment catalog: one action enum per category plus the explicit
per-position table of what a player may be assigned.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Type

from playres.errors import IllegalActionError
from playres.roster.players import Position


class AssignmentCategory(str, Enum):
    PASS = "Pass"
    RUN = "Run"
    PROTECT = "Protect"
    ROUTE = "Route"
    BLOCK = "Block"
    PASS_BLOCK = "Pass Block"
    RUN_BLOCK = "Run Block"
    MAN_COVERAGE = "Man Coverage"
    QUARTERS_MATCH = "Quarters Match"
    ZONE_DEEP = "Zone Deep"
    ZONE_SHORT = "Zone Short"
    RUSH = "Rush"
    SPY = "Spy"

    @property
    def is_zone(self) -> bool:
        return self in (AssignmentCategory.ZONE_DEEP, AssignmentCategory.ZONE_SHORT)


class QBPassAction(Enum):
    FIVE_STEP_DROP = "5 step drop"
    BOOT_RIGHT = "Boot right"
    BOOT_LEFT = "Boot left"
    PLAY_ACTION_PASS = "Play action pass"
    THREE_STEP_DROP = "3 step drop"
    SEVEN_STEP_DROP = "7 step drop"


class QBRunAction(Enum):
    QB_DRAW = "QB draw"
    ZONE_READ_LEFT = "Zone read left"
    ZONE_READ_RIGHT = "Zone read right"
    SPEED_OPTION_LEFT = "Speed option left"
    SPEED_OPTION_RIGHT = "Speed option right"
    TOSS_LEFT = "Toss left"
    TOSS_RIGHT = "Toss right"
    SNEAK = "Sneak"
    HANDOFF = "Handoff"


class ProtectAction(Enum):
    BLOCK_LEFT = "Block left"
    BLOCK_RIGHT = "Block right"
    LEAK_LEFT = "Leak/delay left"
    LEAK_RIGHT = "Leak/delay right"


class RBRunAction(Enum):
    IZR_LEFT = "IZR left"
    IZR_RIGHT = "IZR right"
    OZR_LEFT = "OZR left"
    OZR_RIGHT = "OZR right"
    LEFT_A_GAP = "Left A gap"
    LEFT_B_GAP = "Left B gap"
    RIGHT_A_GAP = "Right A gap"
    RIGHT_B_GAP = "Right B gap"
    LEFT_C_GAP = "Left C gap"
    RIGHT_C_GAP = "Right C gap"
    FLEA_FLICKER = "Flea flicker"
    SWEEP = "Sweep"


class RouteAction(Enum):
    WHEEL = "Wheel"
    TUNNEL_SCREEN = "Tunnel screen"
    FLAT_LEFT = "Flat left"
    FLAT_RIGHT = "Flat right"
    ANGLE = "Angle"
    FLAT = "1 Flat"
    SHORT_HITCH = "Short hitch"
    SLANT = "2 Slant"
    SLANT_AND_GO = "Slant-and-go"
    COMEBACK = "3 Comeback"
    CURL_HOOK = "4 Curl/Hook"
    OUT = "5 Out"
    OUT_AND_UP = "Out-and-up"
    DEEP_OUT = "Deep out"
    SHALLOW_DIG = "6 Shallow dig"
    DRAG = "Drag"
    CORNER = "7 Corner"
    POST = "8 Post"
    SKINNY_POST = "Skinny post"
    POST_CORNER = "Post-corner"
    GO = "9 Go/Fly/Fade"
    DEEP_DIG = "Deep dig"
    WHIP = "Whip route"
    CHIP_DELAY = "Chip+Delay"
    SCREEN = "Screen"


class BlockAction(Enum):
    BLOCK = "Block"
    JET_MOTION = "Jet Motion"
    JET_MOTION_OPTION = "Jet motion option"


class PassBlockAction(Enum):
    INSIDE_PRIORITY = "Inside priority"
    OUTSIDE_PRIORITY = "Outside priority"
    SLIDE_LEFT = "Slide left"
    SLIDE_RIGHT = "Slide right"


class RunBlockAction(Enum):
    ZONE_INSIDE_LEFT = "Zone inside left"
    ZONE_INSIDE_RIGHT = "Zone inside right"
    ZONE_OUTSIDE_LEFT = "Zone outside left"
    ZONE_OUTSIDE_RIGHT = "Zone outside right"
    GAP_LEFT_A = "Gap left A"
    GAP_LEFT_B = "Gap left B"
    GAP_LEFT_C = "Gap left C"
    GAP_RIGHT_A = "Gap right A"
    GAP_RIGHT_B = "Gap right B"
    GAP_RIGHT_C = "Gap right C"
    PULL = "Pull"
    SEAL_EDGE = "Seal edge"
    COMBO = "Combo"


class ManCoverageAction(Enum):
    INSIDE_TECHNIQUE = "Inside technique man"
    DEEP_TECHNIQUE = "Deep technique man"
    OUTSIDE_TECHNIQUE = "Outside technique man"
    TRAIL_TECHNIQUE = "Trail technique man"
    INSIDE_MATCH = "Inside match man"
    OUTSIDE_MATCH = "Outside match man"


class QuartersMatchAction(Enum):
    LOCK_MEG = "LOCK+MEG"
    TRAIL_APEX = "TRAIL+APEX"
    CAP_DEEP = "CAP+DEEP"
    CUT_CROSSER = "CUT+CROSSER"


class ZoneDeepAction(Enum):
    DEEP_MIDDLE_THIRD = "Deep middle 1/3"
    DEEP_LEFT_COV2 = "Deep left (cov2)"
    DEEP_RIGHT_COV2 = "Deep right (cov2)"
    DEEP_LEFT_COV3 = "Deep left (cov3)"
    DEEP_RIGHT_COV3 = "Deep right (cov3)"
    DEEP_FAR_LEFT_COV4 = "Deep far left (cov4)"
    DEEP_FAR_RIGHT_COV4 = "Deep far right (cov4)"
    DEEP_SEAM_LEFT_COV4 = "Deep seam left (cov4)"
    DEEP_SEAM_RIGHT_COV4 = "Deep seam right (cov4)"
    DEEP_SEAM_FIT_SHALLOW = "Deep left/right seam+fit shallow"


class ZoneShortAction(Enum):
    ROBBER = "Robber"
    FLAT_OUT_L = "Flat/Out L"
    FLAT_OUT_R = "Flat/Out R"
    CURL_FLAT_L = "Curl/Flat L"
    CURL_FLAT_R = "Curl/Flat R"
    CURL_HOOK_L = "Curl/Hook L"
    CURL_HOOK_R = "Curl/Hook R"
    CURL_HOLE_L = "Curl/Hole L"
    CURL_HOLE_R = "Curl/Hole R"
    FLAT_L = "Flat L"
    FLAT_R = "Flat R"
    OUT_L = "Out L"
    OUT_R = "Out R"
    CURL_L = "Curl L"
    CURL_R = "Curl R"
    HOOK_L = "Hook L"
    HOOK_R = "Hook R"
    HOLE = "Hole"
    TAMPA = "Deep hole/Tampa"
    SPY = "Spy"


class RushAction(Enum):
    LEFT_A_GAP = "Left A gap"
    RIGHT_A_GAP = "Right A gap"
    LEFT_B_GAP = "Left B gap"
    RIGHT_B_GAP = "Right B gap"
    LEFT_C_GAP = "Left C gap"
    RIGHT_C_GAP = "Right C gap"
    CONTAIN = "Contain"


class SpyAction(Enum):
    SPY = "Spy"


# Which enum a category's actions come from. Run is split between QB and RB below.
CATEGORY_ACTIONS: Dict[AssignmentCategory, Type[Enum]] = {
    AssignmentCategory.PASS: QBPassAction,
    AssignmentCategory.PROTECT: ProtectAction,
    AssignmentCategory.ROUTE: RouteAction,
    AssignmentCategory.BLOCK: BlockAction,
    AssignmentCategory.PASS_BLOCK: PassBlockAction,
    AssignmentCategory.RUN_BLOCK: RunBlockAction,
    AssignmentCategory.MAN_COVERAGE: ManCoverageAction,
    AssignmentCategory.QUARTERS_MATCH: QuartersMatchAction,
    AssignmentCategory.ZONE_DEEP: ZoneDeepAction,
    AssignmentCategory.ZONE_SHORT: ZoneShortAction,
    AssignmentCategory.RUSH: RushAction,
    AssignmentCategory.SPY: SpyAction,
}
RUN_ACTIONS = (QBRunAction, RBRunAction)


@dataclass(frozen=True, slots=True)
class Assignment:
    category: AssignmentCategory
    action: Enum

    def __post_init__(self):
        allowed = RUN_ACTIONS if self.category is AssignmentCategory.RUN else (CATEGORY_ACTIONS[self.category],)
        if not isinstance(self.action, allowed):
            raise IllegalActionError(f"{self.action!r} is not a {self.category.value} action")

    @classmethod
    def parse(cls, category: str, action: str) -> Assignment:
        try:
            cat = AssignmentCategory(category)
        except ValueError as e:
            raise IllegalActionError(f"unknown assignment category {category!r}") from e
        if cat is AssignmentCategory.RUN:
            # QB and RB run actions never share a label
            enum = QBRunAction if action in QBRunAction._value2member_map_ else RBRunAction
        else:
            enum = CATEGORY_ACTIONS[cat]
        try:
            return cls(cat, enum(action))
        except ValueError as e:
            raise IllegalActionError(f"unknown {category} action {action!r}") from e

    def __str__(self) -> str:
        return f"{self.category.value}: {self.action.value}"


def _all(enum: Type[Enum]) -> Tuple[Enum, ...]:
    return tuple(enum)


_RB_ONLY_ROUTES = (RouteAction.WHEEL, RouteAction.TUNNEL_SCREEN, RouteAction.FLAT_LEFT,
                   RouteAction.FLAT_RIGHT, RouteAction.ANGLE)
_RB_ROUTES = _RB_ONLY_ROUTES[:2] + (RouteAction.FLAT, RouteAction.SHORT_HITCH) + _RB_ONLY_ROUTES[2:]
_TE_ROUTES = tuple(r for r in RouteAction if r not in _RB_ONLY_ROUTES and r is not RouteAction.SCREEN)
_WR_ROUTES = _TE_ROUTES + (RouteAction.SCREEN,)

_LINE = {
    AssignmentCategory.PASS_BLOCK: _all(PassBlockAction),
    AssignmentCategory.RUN_BLOCK: _all(RunBlockAction),
}
_DEFENSE = {
    AssignmentCategory.MAN_COVERAGE: _all(ManCoverageAction),
    AssignmentCategory.QUARTERS_MATCH: _all(QuartersMatchAction),
    AssignmentCategory.ZONE_DEEP: _all(ZoneDeepAction),
    AssignmentCategory.ZONE_SHORT: _all(ZoneShortAction),
    AssignmentCategory.RUSH: _all(RushAction),
    AssignmentCategory.SPY: _all(SpyAction),
}

LEGAL_ACTIONS: Dict[Position, Dict[AssignmentCategory, Tuple[Enum, ...]]] = {
    Position.QB: {
        AssignmentCategory.PASS: _all(QBPassAction),
        AssignmentCategory.RUN: _all(QBRunAction),
    },
    Position.RB: {
        AssignmentCategory.PROTECT: _all(ProtectAction),
        AssignmentCategory.RUN: _all(RBRunAction),
        AssignmentCategory.ROUTE: _RB_ROUTES,
    },
    Position.WR: {
        AssignmentCategory.BLOCK: _all(BlockAction),
        AssignmentCategory.ROUTE: _WR_ROUTES,
    },
    Position.TE: {
        AssignmentCategory.BLOCK: _all(BlockAction),
        **_LINE,
        AssignmentCategory.ROUTE: _TE_ROUTES,
    },
    Position.OT: dict(_LINE),
    Position.OG: dict(_LINE),
    Position.C: dict(_LINE),
    **{p: dict(_DEFENSE) for p in (Position.CB, Position.S, Position.LB, Position.MLB, Position.DE, Position.DT)},
}


def is_legal(position: Position, assignment: Assignment) -> bool:
    return assignment.action in LEGAL_ACTIONS[position].get(assignment.category, ())


def require_legal(position: Position, assignment: Assignment) -> Assignment:
    if not is_legal(position, assignment):
        raise IllegalActionError(f"{position.value} cannot be assigned {assignment}")
    return assignment


def classify_play_type(qb_assignment: Optional[Assignment]) -> str:
    """A QB working a Pass-category action makes the snap a pass; otherwise a run."""
    if qb_assignment is not None and qb_assignment.category is AssignmentCategory.PASS:
        return "pass"
    return "run"
