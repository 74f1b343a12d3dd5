import logging

from playres.eval.eval_report import build_tables, write_report
from playres.log import setup_logging
from playres.simulate import simulate


def test_simulated_games_finish_and_obey_rules():
    df = simulate(3, seed=5)
    assert set(df["game"]) == {0, 1, 2}
    assert set(df["play_type"]) <= {"run", "pass", "punt", "fg"}
    specials = df[df["play_type"].isin(["punt", "fg"])]
    assert (specials["down"] == 4).all()
    assert df["down"].between(1, 4).all()


def test_same_seed_same_games():
    a, b = simulate(1, seed=9), simulate(1, seed=9)
    assert a.equals(b)


def test_report_written(tmp_path):
    sims = simulate(2, seed=3, spread=3.0)
    tables = build_tables(sims)
    assert set(tables["yards"].columns) == {"run", "pass"}
    out = write_report(sims, tmp_path / "report.md", "memory")
    text = out.read_text()
    assert "## Yards/play" in text
    assert (tmp_path / "yards_overlay.png").exists()


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG")
    root = setup_logging("WARNING")
    tagged = [h for h in root.handlers if getattr(h, "_playres", False)]
    assert len(tagged) == 1
    assert root.level == logging.WARNING
