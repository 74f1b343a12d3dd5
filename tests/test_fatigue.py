import pytest

from playres.config import FatigueCfg, load_config
from playres.roster.fatigue import FatigueUpdater
from playres.roster.players import Player, Position, Rosters


def updater():
    return FatigueUpdater(load_config().fatigue)


def test_drain_applies_position_modifiers():
    u = updater()
    assert u.drain(Player(name="QB1", position=Position.QB), "pass") == pytest.approx(2.5)
    assert u.drain(Player(name="OT1", position=Position.OT), "run") == pytest.approx(2.5 * 1.1 * 1.1)
    assert u.drain(Player(name="DE1", position=Position.DE), "pass") == pytest.approx(2.5 * 1.1 * 1.2)
    assert u.drain(Player(name="RB1", position=Position.RB), "pass") == pytest.approx(2.5)


def test_on_field_tire_and_bench_recovers():
    rosters = Rosters(
        home_offense=[Player(name="WR1", position=Position.WR, stamina=90),
                      Player(name="WR2", position=Position.WR, stamina=50)],
        away_defense=[Player(name="CB1", position=Position.CB, stamina=1)],
        home_defense=[Player(name="LB1", position=Position.LB, stamina=99)],
    )
    updater().apply(rosters, {"WR1", "CB1"}, "pass")
    assert rosters.find("WR1").stamina == pytest.approx(90 - 2.5 * 1.3)
    assert rosters.find("CB1").stamina == 0.0
    assert rosters.find("WR2").stamina == pytest.approx(52.25)
    assert rosters.find("LB1").stamina == 100.0


def test_defaults_without_modifiers():
    u = FatigueUpdater(FatigueCfg())
    assert u.drain(Player(name="DT1", position=Position.DT), "run") == pytest.approx(2.5)
