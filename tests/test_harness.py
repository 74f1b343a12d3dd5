from playres.eval.harness import forced_sequence_rate, profile_table, run_harness, yards_per_play
from playres.sampling.outcomes import Category
from playres.sampling.profiles import ProfileRepository


def test_three_unsuccessful_runs_rarely_convert():
    rate = forced_sequence_rate(Category.UNSUCCESSFUL, "run", trials=20_000, seed=11)
    assert 0.10 <= rate <= 0.15


def test_three_successful_passes_usually_convert():
    rate = forced_sequence_rate(Category.SUCCESS, "pass", trials=20_000, seed=12)
    assert 0.80 <= rate <= 0.85


def test_yards_per_play_at_baseline():
    assert 6.3 <= yards_per_play("pass", 100_000, seed=13).mean() <= 6.8
    assert 4.1 <= yards_per_play("run", 100_000, seed=14).mean() <= 4.5


def test_profile_table_exact_means():
    t = profile_table(ProfileRepository())
    assert len(t) == 13
    assert t.loc["yac-catch", "exact_mean_yards"] == 4.0
    assert t.loc["havoc-turnover", "turnover"] == 100
    assert t.loc["havoc-interception", "turnover"] == 100


def test_run_harness_shapes():
    out = run_harness(trials=200, plays=500, seed=1)
    assert list(out["sequences"].index) == ["3x unsuccessful run", "3x success pass"]
    assert set(out["yards_per_play"].index) == {"run", "pass"}
