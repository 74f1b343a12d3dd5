"""
Reference validation harness: scripted category sequences from 1st & 10 and
yards-per-play at the baseline rates.

    python -m playres.eval.harness --trials 300000
"""
from __future__ import annotations
import argparse
import logging
from typing import Optional

import numpy as np
import pandas as pd

from playres.config import FullConfig, load_config
from playres.log import setup_logging
from playres.rates import RateVector
from playres.rules.fsm import RulesFSM
from playres.sampling.dice import RandomDice
from playres.sampling.outcomes import ALL_PROFILES, Category, OutcomeSampler
from playres.sampling.profiles import ProfileRepository
from playres.state import GameState

logger = logging.getLogger(__name__)

SEQUENCE_LENGTH = 3


def baseline_rates(cfg: Optional[FullConfig] = None) -> RateVector:
    b = (cfg or FullConfig()).baseline_rates
    return RateVector(success=b.success_rate, explosive=b.explosive_rate, havoc=b.havoc_rate)


def forced_sequence_rate(category: Category, play_type: str, trials: int, seed: int = 0,
                         cfg: Optional[FullConfig] = None,
                         profiles: Optional[ProfileRepository] = None) -> float:
    """Share of series that move the chains within three snaps of `category`."""
    cfg = cfg or FullConfig()
    profiles = profiles or ProfileRepository(cfg.data_path)
    sampler = OutcomeSampler(profiles, cfg.state_machine)
    fsm = RulesFSM(cfg.state_machine.rubber_band, cfg.special_teams)
    dice = RandomDice(seed)
    rates = baseline_rates(cfg)
    conversion = cfg.baseline_rates.conversion_rate
    start = GameState()
    made = 0
    for _ in range(trials):
        s = start
        for _ in range(SEQUENCE_LENGTH):
            band = fsm.rubber_band(s, play_type, rates, conversion, dice)
            out = sampler.sample(play_type, band.rates, dice, category=category,
                                 penalty_yards=band.penalty_yards)
            t = fsm.apply_outcome(s, yards=out.yards, turnover=out.turnover, category=out.category)
            if t.first_down or t.touchdown:
                made += 1
                break
            if t.possession_changed:
                break
            s = t.state
    return made / trials


def yards_per_play(play_type: str, plays: int, seed: int = 0,
                   cfg: Optional[FullConfig] = None,
                   profiles: Optional[ProfileRepository] = None) -> np.ndarray:
    """Raw sampled yards for independent snaps at the baseline rates."""
    cfg = cfg or FullConfig()
    profiles = profiles or ProfileRepository(cfg.data_path)
    sampler = OutcomeSampler(profiles, cfg.state_machine)
    dice = RandomDice(seed)
    rates = baseline_rates(cfg)
    return np.fromiter((sampler.sample(play_type, rates, dice).yards for _ in range(plays)),
                       dtype=np.int64, count=plays)


def profile_table(profiles: ProfileRepository) -> pd.DataFrame:
    rows = []
    for path in ALL_PROFILES:
        p = profiles.load(path)
        rows.append({"profile": p.outcome, "mean": p.mean, "std": p.std, "skew": p.skew,
                     "completion": p.completion_percentage, "turnover": p.turnover_probability,
                     "exact_mean_yards": round(p.expected_yards, 3)})
    return pd.DataFrame(rows).set_index("profile")


def run_harness(trials: int, plays: int, seed: int = 0, cfg: Optional[FullConfig] = None) -> dict[str, pd.DataFrame]:
    cfg = cfg or FullConfig()
    profiles = ProfileRepository(cfg.data_path)
    seq = pd.DataFrame([
        {"scenario": "3x unsuccessful run", "first_down_rate":
            forced_sequence_rate(Category.UNSUCCESSFUL, "run", trials, seed, cfg, profiles)},
        {"scenario": "3x success pass", "first_down_rate":
            forced_sequence_rate(Category.SUCCESS, "pass", trials, seed + 1, cfg, profiles)},
    ]).set_index("scenario")
    ypp = pd.DataFrame({
        pt: pd.Series(yards_per_play(pt, plays, seed + 2 + i, cfg, profiles)).describe()
        for i, pt in enumerate(("run", "pass"))
    }).T
    return {"sequences": seq, "yards_per_play": ypp, "profiles": profile_table(profiles)}


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=None)
    ap.add_argument("--trials", type=int, default=300_000)
    ap.add_argument("--plays", type=int, default=300_000)
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()

    setup_logging(args.log_level)
    cfg = load_config(args.config)
    out = run_harness(args.trials, args.plays, args.seed, cfg)
    print("\n== Forced sequences (from 1st & 10) ==")
    print(out["sequences"].round(4).to_string())
    print("\n== Yards/play at baseline rates ==")
    print(out["yards_per_play"].round(3).to_string())
    print("\n== Outcome profiles ==")
    print(out["profiles"].to_string())


if __name__ == "__main__":
    main()
