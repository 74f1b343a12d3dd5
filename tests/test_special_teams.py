import pytest

from playres.rules.fsm import RulesFSM
from playres.rules.special_teams import FG_GOOD, FG_MISS, field_goal, field_goal_probability, punt
from playres.sampling.dice import ScriptedDice
from playres.state import GameState


def test_field_goal_probability_line():
    assert field_goal_probability(25) == pytest.approx(49.75)
    assert field_goal_probability(0) == pytest.approx(95.0)
    assert field_goal_probability(60) == 0.0


def test_field_goal_good_scores_and_kicks_off():
    s = GameState(down=4, distance=6, opp_yardline=25, score_home=7)
    r = field_goal(s, ScriptedDice(uniforms=[0.0]))
    assert r.kind == FG_GOOD and r.points == 3
    t = RulesFSM().apply_special_teams(s, r)
    assert t.state.score_home == 10
    assert t.state.possession == "away"
    assert t.state.opp_yardline == 65
    assert t.points == 3


def test_field_goal_miss_gives_ball_at_spot():
    s = GameState(down=4, distance=6, opp_yardline=25)
    r = field_goal(s, ScriptedDice(uniforms=[0.999]))
    assert r.kind == FG_MISS and r.points == 0
    assert r.new_yardline == 75
    t = RulesFSM().apply_special_teams(s, r)
    assert t.state.possession == "away" and t.state.opp_yardline == 75
    assert t.state.score_home == 0


@pytest.mark.parametrize("u,distance", [(0.5, 45), (0.0, 40), (0.999, 50)])
def test_punt_distance_spread(u, distance):
    r = punt(GameState(down=4, opp_yardline=70), ScriptedDice(uniforms=[u]))
    assert r.yards == distance
    assert r.new_yardline == 100 - (70 - distance)


def test_punt_into_end_zone_is_touchback():
    s = GameState(down=4, opp_yardline=40)
    r = punt(s, ScriptedDice(uniforms=[0.5]))
    assert r.new_yardline == 80
    assert "Touchback" in r.description
    t = RulesFSM().apply_special_teams(s, r)
    assert t.state.possession == "away"
    assert (t.state.down, t.state.distance, t.state.opp_yardline) == (1, 10, 80)
