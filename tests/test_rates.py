import pytest

from playres.config import BaselineRatesCfg
from playres.rates import Evaluation, RateVector, extract_evaluation, rates_from_advantage


def test_neutral_pass_matchup():
    r = rates_from_advantage("pass", 0, 5)
    assert r.success == pytest.approx(40.5)
    assert r.explosive == pytest.approx(11.5)
    assert r.havoc == pytest.approx(11.5)
    assert r.unsuccessful == pytest.approx(36.5)


def test_dominant_run_matchup_hits_good_outcome_ceiling():
    r = rates_from_advantage("run", 10, 10)
    assert r.explosive == pytest.approx(27.0)
    assert r.havoc == pytest.approx(3.0)
    assert r.success == pytest.approx(68.0)


def test_hopeless_pass_matchup_keeps_success_floor():
    r = rates_from_advantage("pass", -10, 0)
    assert r.explosive == pytest.approx(3.0)
    assert r.havoc == pytest.approx(8.0)
    assert r.success == pytest.approx(4.0)


def test_bucket_bounds_hold_across_the_input_grid():
    for pt in ("run", "pass"):
        for adv in range(-10, 11):
            for lev in range(0, 11):
                r = rates_from_advantage(pt, adv, lev)
                assert 3.0 <= r.success <= 90.0
                assert 3.0 <= r.explosive <= 65.0
                assert 3.0 <= r.havoc <= 65.0
                assert r.total <= 100.0
                assert not r.overcommitted


def test_advantage_inputs_are_clamped():
    hi = Evaluation.model_validate({"offense-advantage": 25, "risk-leverage": 40}).to_rates("run")
    assert hi == rates_from_advantage("run", 10, 10)
    default_lev = Evaluation.model_validate({"offense-advantage": 0}).to_rates("pass")
    assert default_lev == rates_from_advantage("pass", 0, 5)


def test_missing_or_garbage_fields_fall_back_to_baseline():
    ev = Evaluation.model_validate({"offense-advantage": "lots", "success-rate": None})
    assert not ev.has_advantage
    assert ev.to_rates("run") == RateVector(success=45.0, explosive=13.0, havoc=11.0)


def test_direct_rates_clamped_but_not_renormalized():
    r = Evaluation.model_validate({"success-rate": 150, "havoc-rate": -5}).to_rates("pass")
    assert r == RateVector(success=100.0, explosive=13.0, havoc=0.0)
    assert r.overcommitted
    assert r.unsuccessful == pytest.approx(-13.0)


def test_custom_defaults_and_conversion():
    defaults = BaselineRatesCfg(success_rate=50, havoc_rate=5, explosive_rate=10, conversion_rate=40)
    ev = Evaluation()
    assert ev.to_rates("run", defaults) == RateVector(success=50.0, explosive=10.0, havoc=5.0)
    assert ev.conversion(defaults) == 40.0
    assert Evaluation.model_validate({"conversion-rate-1st-2nd-down-only": 25}).conversion() == 25.0
    assert Evaluation().conversion() == 31.0


def test_with_success_caps_at_100():
    assert RateVector(90, 5, 5).with_success(130).success == 100.0


def test_extract_evaluation_takes_last_json_line():
    text = (
        "The slot fade beats the boundary corner.\n"
        '{"offense-advantage": -3}\n'
        "```json\n"
        '{"offense-advantage": 2, "risk-leverage": 4}\n'
        "```"
    )
    ev = extract_evaluation(text)
    assert ev.offense_advantage == 2.0
    assert ev.risk_leverage == 4.0


def test_extract_evaluation_single_fenced_line():
    ev = extract_evaluation('```json {"success-rate": 50, "havoc-rate": 10, "explosive-rate": 10}```')
    assert ev.to_rates("run") == RateVector(success=50.0, explosive=10.0, havoc=10.0)


def test_extract_evaluation_without_json_is_empty():
    ev = extract_evaluation("no idea, sorry\n{not json")
    assert ev == Evaluation()
