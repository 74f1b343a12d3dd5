from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from playres.config import HavocOutcomesCfg, StateMachineCfg
from playres.rates import RateVector
from playres.sampling.profiles import INCOMPLETE_DESCRIPTION, ProfileRepository

logger = logging.getLogger(__name__)


class PlayType(str, Enum):
    RUN = "run"
    PASS = "pass"


class Category(str, Enum):
    HAVOC = "havoc"
    EXPLOSIVE = "explosive"
    SUCCESS = "success"
    UNSUCCESSFUL = "unsuccessful"


class HavocKind(str, Enum):
    SACK = "sack"
    TURNOVER = "turnover"
    TACKLE_FOR_LOSS = "tackle-for-loss"
    STUFFED_RUN = "stuffed-run"


def outcome_path(name: str) -> str:
    return f"outcomes/{name}.json"


HAVOC_PROFILES = {
    HavocKind.SACK: outcome_path("havoc-sack"),
    HavocKind.TURNOVER: outcome_path("havoc-turnover"),
    HavocKind.TACKLE_FOR_LOSS: outcome_path("havoc-tackle-for-loss"),
    HavocKind.STUFFED_RUN: outcome_path("havoc-run"),
}

# pass-play overrides
PASS_HAVOC_PROFILES = {
    HavocKind.TURNOVER: outcome_path("havoc-interception"),
}

BUCKET_PROFILES = {
    (Category.EXPLOSIVE, PlayType.PASS): outcome_path("explosive-pass"),
    (Category.EXPLOSIVE, PlayType.RUN): outcome_path("explosive-run"),
    (Category.SUCCESS, PlayType.PASS): outcome_path("successful-pass"),
    (Category.SUCCESS, PlayType.RUN): outcome_path("successful-run"),
    (Category.UNSUCCESSFUL, PlayType.PASS): outcome_path("unsuccessful-pass"),
    (Category.UNSUCCESSFUL, PlayType.RUN): outcome_path("unsuccessful-run"),
}

# Successful snaps that miss the primary-profile threshold use these instead
YAC_PROFILES = {
    PlayType.PASS: outcome_path("yac-catch"),
    PlayType.RUN: outcome_path("yac-run"),
}

ALL_PROFILES = (tuple(HAVOC_PROFILES.values()) + tuple(PASS_HAVOC_PROFILES.values())
                + tuple(BUCKET_PROFILES.values()) + tuple(YAC_PROFILES.values()))


def roll_category(rates: RateVector, roll: int) -> Category:
    # a roll sitting exactly on a boundary belongs to the earlier bucket
    edge = rates.havoc
    if roll <= edge:
        return Category.HAVOC
    edge += rates.explosive
    if roll <= edge:
        return Category.EXPLOSIVE
    edge += rates.success
    if roll <= edge:
        return Category.SUCCESS
    return Category.UNSUCCESSFUL


def roll_havoc_kind(cfg: HavocOutcomesCfg, roll: int) -> HavocKind:
    edge = cfg.sack
    if roll <= edge:
        return HavocKind.SACK
    edge += cfg.turnover
    if roll <= edge:
        return HavocKind.TURNOVER
    edge += cfg.tackle_for_loss
    if roll <= edge:
        return HavocKind.TACKLE_FOR_LOSS
    return HavocKind.STUFFED_RUN


@dataclass(frozen=True, slots=True)
class SampledOutcome:
    category: Category
    play_type: PlayType
    profile: str
    outcome: str
    yards: int
    turnover: bool
    turnover_type: Optional[str]
    description: str
    is_complete: bool = True
    havoc_kind: Optional[HavocKind] = None


class OutcomeSampler:
    """Draws a category, picks its profile, then completion/yards/turnover.

    Roll order per snap: category, havoc kind (havoc only), YAC (success
    only), completion (pass profiles that define it), yards (unless
    incomplete), turnover.
    """

    def __init__(self, profiles: ProfileRepository, cfg: Optional[StateMachineCfg] = None):
        self.profiles = profiles
        self.cfg = cfg or StateMachineCfg()

    def profile_for(self, category: Category, play_type: PlayType, dice) -> tuple[str, Optional[HavocKind]]:
        if category is Category.HAVOC:
            kind = roll_havoc_kind(self.cfg.havoc_outcomes, dice.d100())
            if play_type is PlayType.PASS and kind in PASS_HAVOC_PROFILES:
                return PASS_HAVOC_PROFILES[kind], kind
            return HAVOC_PROFILES[kind], kind
        if category is Category.SUCCESS:
            threshold = (self.cfg.yac.pass_primary_threshold if play_type is PlayType.PASS
                         else self.cfg.yac.run_primary_threshold)
            if dice.d100() > threshold:
                return YAC_PROFILES[play_type], None
        return BUCKET_PROFILES[(category, play_type)], None

    def sample(self, play_type: PlayType | str, rates: RateVector, dice, *,
               category: Optional[Category] = None, penalty_yards: int = 0) -> SampledOutcome:
        """Resolve one snap. Raises ProfileLoadError if a profile is unavailable.

        `category` forces the bucket (and skips the category roll), as the
        validation harness does for its scripted sequences.
        """
        play_type = PlayType(play_type)
        if category is None:
            category = roll_category(rates, dice.d100())
        path, kind = self.profile_for(category, play_type, dice)
        profile = self.profiles.load(path)

        is_complete = True
        if play_type is PlayType.PASS and profile.completion_percentage is not None:
            is_complete = dice.d100() <= profile.completion_percentage
        yards = profile.yards(dice.d100()) if is_complete else 0
        yards += penalty_yards

        turnover = dice.d100() <= profile.turnover_probability
        description = profile.render(yards) if is_complete else INCOMPLETE_DESCRIPTION
        logger.debug("%s %s via %s: %d yards%s", play_type.value, category.value, path, yards,
                     " (turnover)" if turnover else "")
        return SampledOutcome(
            category=category,
            play_type=play_type,
            profile=path,
            outcome=profile.outcome,
            yards=yards,
            turnover=turnover,
            turnover_type=profile.turnover_type if turnover else None,
            description=description,
            is_complete=is_complete,
            havoc_kind=kind,
        )
