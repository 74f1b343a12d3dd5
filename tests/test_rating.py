import pytest

from playres.config import FatigueCurveCfg
from playres.roster.assignments import Assignment, AssignmentCategory, QBPassAction
from playres.roster.players import Player, Position
from playres.roster.rating import effective_percentile, fatigue_multiplier, fatigue_multiplier_raw, rate_lineup


def test_fatigue_curve_anchor_points():
    assert fatigue_multiplier(100) == 0.99
    assert fatigue_multiplier(85) == 0.99
    assert fatigue_multiplier(72.5) == pytest.approx(0.895)
    assert fatigue_multiplier(60) == pytest.approx(0.80)
    assert fatigue_multiplier_raw(59.999) == pytest.approx(0.80, abs=1e-4)
    assert fatigue_multiplier(30) == pytest.approx(0.8 * 1.4771213 / 1.7781513, rel=1e-6)


def test_fatigue_floor():
    assert fatigue_multiplier_raw(0) == 0.0
    assert fatigue_multiplier(0) == 0.20
    assert fatigue_multiplier(2) == 0.20
    assert fatigue_multiplier(5) > 0.20


def test_fatigue_curve_monotone():
    vals = [fatigue_multiplier(s) for s in range(0, 101)]
    assert all(a <= b for a, b in zip(vals, vals[1:]))


def test_curve_thresholds_must_be_ordered():
    with pytest.raises(ValueError):
        FatigueCurveCfg(high_stamina_threshold=50, medium_stamina_threshold=60)


def qb(**kw):
    return Player(name="QB1", position=Position.QB, percentile=80,
                  traits={"pocket-passer": 5, "escape-artist": -4}, **kw)


def test_trait_then_fatigue():
    r = effective_percentile(qb(), Assignment(AssignmentCategory.PASS, QBPassAction.FIVE_STEP_DROP))
    assert r.trait is not None and r.trait.trait == "pocket-passer"
    assert r.adjusted_base == 85
    assert r.effective_percentile == pytest.approx(85 * 0.99)


def test_negative_trait_and_no_assignment():
    boot = effective_percentile(qb(), Assignment(AssignmentCategory.PASS, QBPassAction.BOOT_LEFT))
    assert boot.adjusted_base == 76
    plain = effective_percentile(qb())
    assert plain.trait is None
    assert plain.effective_percentile == pytest.approx(80 * 0.99)


def test_tired_player_is_attenuated():
    r = effective_percentile(qb(stamina=30))
    assert r.effective_percentile == pytest.approx(80 * fatigue_multiplier(30))
    assert r.effective_percentile <= r.adjusted_base


def test_trait_bonus_clamped_to_100():
    p = Player(name="QB2", position=Position.QB, percentile=98, traits={"pocket-passer": 5})
    r = effective_percentile(p, Assignment(AssignmentCategory.PASS, QBPassAction.SEVEN_STEP_DROP))
    assert r.adjusted_base == 100


def test_rate_lineup_covers_everyone():
    players = [qb(), Player(name="RB1", position=Position.RB)]
    out = rate_lineup(players, {"QB1": Assignment(AssignmentCategory.PASS, QBPassAction.THREE_STEP_DROP)})
    assert set(out) == {"QB1", "RB1"}
    assert out["RB1"].effective_percentile == pytest.approx(50 * 0.99)
