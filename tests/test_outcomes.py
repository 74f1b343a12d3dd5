import pytest

from playres.config import HavocOutcomesCfg, StateMachineCfg
from playres.errors import ProfileLoadError
from playres.rates import RateVector
from playres.sampling.dice import ScriptedDice
from playres.sampling.outcomes import Category, HavocKind, OutcomeSampler, roll_category, roll_havoc_kind
from playres.sampling.profiles import INCOMPLETE_DESCRIPTION, ProfileRepository

BASE = RateVector(success=45, explosive=13, havoc=11)


def sampler():
    return OutcomeSampler(ProfileRepository(), StateMachineCfg())


def test_category_boundaries_are_inclusive():
    assert roll_category(BASE, 1) is Category.HAVOC
    assert roll_category(BASE, 11) is Category.HAVOC
    assert roll_category(BASE, 12) is Category.EXPLOSIVE
    assert roll_category(BASE, 24) is Category.EXPLOSIVE
    assert roll_category(BASE, 25) is Category.SUCCESS
    assert roll_category(BASE, 69) is Category.SUCCESS
    assert roll_category(BASE, 70) is Category.UNSUCCESSFUL
    assert roll_category(BASE, 100) is Category.UNSUCCESSFUL


def test_fractional_boundaries():
    r = RateVector(success=40.5, explosive=11.5, havoc=11.5)
    assert roll_category(r, 11) is Category.HAVOC
    assert roll_category(r, 12) is Category.EXPLOSIVE
    assert roll_category(r, 23) is Category.EXPLOSIVE
    assert roll_category(r, 24) is Category.SUCCESS


def test_overcommitted_rates_never_reach_unsuccessful():
    r = RateVector(success=100, explosive=13, havoc=0)
    assert all(roll_category(r, roll) is not Category.UNSUCCESSFUL for roll in range(1, 101))


def test_havoc_sub_roll_split():
    cfg = HavocOutcomesCfg()
    assert cfg.stuffed_run == 15
    assert roll_havoc_kind(cfg, 35) is HavocKind.SACK
    assert roll_havoc_kind(cfg, 36) is HavocKind.TURNOVER
    assert roll_havoc_kind(cfg, 55) is HavocKind.TURNOVER
    assert roll_havoc_kind(cfg, 56) is HavocKind.TACKLE_FOR_LOSS
    assert roll_havoc_kind(cfg, 85) is HavocKind.TACKLE_FOR_LOSS
    assert roll_havoc_kind(cfg, 86) is HavocKind.STUFFED_RUN


def test_havoc_turnover_always_gives_the_ball_away():
    dice = ScriptedDice([5, 50, 50, 100])
    out = sampler().sample("run", BASE, dice)
    assert out.category is Category.HAVOC
    assert out.havoc_kind is HavocKind.TURNOVER
    assert out.yards == -1
    assert out.turnover and out.turnover_type == "fumble"
    assert dice.consumed == 4


def test_pass_havoc_turnover_is_an_interception():
    out = sampler().sample("pass", BASE, ScriptedDice([5, 50, 50, 100]))
    assert out.havoc_kind is HavocKind.TURNOVER
    assert out.profile == "outcomes/havoc-interception.json"
    assert out.turnover and out.turnover_type == "interception"
    assert "picked off" in out.description


def test_success_above_threshold_uses_yac_profile():
    dice = ScriptedDice([30, 80, 50, 99])
    out = sampler().sample("pass", BASE, dice)
    assert out.category is Category.SUCCESS
    assert out.profile == "outcomes/yac-catch.json"
    assert out.yards == 4
    assert "4 yards" in out.description
    assert not out.turnover and out.turnover_type is None


def test_success_at_threshold_uses_primary_profile():
    out = sampler().sample("pass", BASE, ScriptedDice([30, 75, 50, 99]))
    assert out.profile == "outcomes/successful-pass.json"
    assert out.yards == 5


def test_incomplete_pass_skips_yardage_roll():
    dice = ScriptedDice([90, 56, 99])
    out = sampler().sample("pass", BASE, dice)
    assert out.category is Category.UNSUCCESSFUL
    assert not out.is_complete
    assert out.yards == 0
    assert out.description == INCOMPLETE_DESCRIPTION
    assert dice.consumed == 3


def test_completion_roll_inclusive():
    out = sampler().sample("pass", BASE, ScriptedDice([90, 55, 50, 99]))
    assert out.is_complete
    assert out.yards == 3


def test_runs_never_roll_completion():
    dice = ScriptedDice([90, 50, 99])
    out = sampler().sample("run", BASE, dice)
    assert out.is_complete
    assert out.yards == 2
    assert dice.consumed == 3


def test_forced_category_skips_category_roll():
    dice = ScriptedDice([50, 99])
    out = sampler().sample("run", BASE, dice, category=Category.EXPLOSIVE)
    assert out.category is Category.EXPLOSIVE
    assert out.yards == 13
    assert dice.consumed == 2


def test_penalty_yards_added_to_gain():
    out = sampler().sample("run", BASE, ScriptedDice([50, 50, 99]), category=Category.SUCCESS,
                           penalty_yards=5)
    assert out.yards == 10


def test_missing_profile_surfaces_as_error(tmp_path):
    s = OutcomeSampler(ProfileRepository(tmp_path))
    with pytest.raises(ProfileLoadError):
        s.sample("run", BASE, ScriptedDice([30, 50, 50, 99]))


def test_unknown_play_type_rejected():
    with pytest.raises(ValueError):
        sampler().sample("punt", BASE, ScriptedDice([30]))
