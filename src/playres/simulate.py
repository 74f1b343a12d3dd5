"""
Whole-game simulation with a simple situational play caller.

    python -m playres.simulate --n_games 200 --out runs/sim_games.parquet
"""
from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from playres.config import FullConfig, load_config
from playres.engine import PlayEngine, PlayResult, SimulationContext
from playres.log import setup_logging
from playres.rates import Evaluation
from playres.rules.fsm import PLAY_TYPES, RulesFSM
from playres.sampling.dice import RandomDice
from playres.state import GameState

logger = logging.getLogger(__name__)

MAX_SNAPS_PER_GAME = 400
FG_RANGE = 35            # opp-yardline at or inside which 4th down means a kick
GO_FOR_IT_YTG = 2
GO_FOR_IT_RANGE = 55


def pass_prob(s: GameState) -> float:
    p = 0.55
    if s.down == 3 and s.distance >= 7:
        p = 0.8
    elif s.down == 2 and s.distance >= 8:
        p = 0.65
    if s.distance <= 2:
        p = 0.35
    return p


def choose_play(s: GameState, legal: np.ndarray, rng: np.random.Generator) -> str:
    allowed = {PLAY_TYPES[i] for i, ok in enumerate(legal) if ok}
    if "fg" in allowed and s.opp_yardline <= FG_RANGE:
        return "fg"
    if "punt" in allowed and not (s.distance <= GO_FOR_IT_YTG and s.opp_yardline <= GO_FOR_IT_RANGE):
        return "punt"
    return "pass" if rng.random() < pass_prob(s) else "run"


def random_evaluation(rng: np.random.Generator, spread: float) -> Optional[Evaluation]:
    """Matchup quality for one snap; spread 0 means baseline rates."""
    if spread <= 0:
        return None
    return Evaluation(offense_advantage=float(rng.normal(0.0, spread)),
                      risk_leverage=float(rng.uniform(0.0, 10.0)))


def snap_row(game: int, before: GameState, r: PlayResult) -> dict:
    s = r.state
    return {
        "game": game,
        "quarter": before.quarter,
        "time": before.time,
        "possession": before.possession,
        "down": before.down,
        "distance": before.distance,
        "opp_yardline": before.opp_yardline,
        "play_type": r.play_type,
        "outcome": r.outcome,
        "category": r.category.value if r.category else None,
        "yards": r.yards,
        "penalty_yards": r.penalty_yards,
        "turnover": r.turnover,
        "first_down": r.first_down,
        "touchdown": r.touchdown,
        "turnover_on_downs": r.turnover_on_downs,
        "points": r.points,
        "score_home": s.score_home,
        "score_away": s.score_away,
    }


def simulate_game(game: int, cfg: FullConfig, dice, rng: np.random.Generator,
                  spread: float = 0.0) -> list[dict]:
    engine = PlayEngine()
    ctx = SimulationContext(config=cfg, state=GameState(), dice=dice)
    fsm = RulesFSM(cfg.state_machine.rubber_band, cfg.special_teams)
    rows = []
    for _ in range(MAX_SNAPS_PER_GAME):
        if ctx.state.is_final:
            break
        before = ctx.state
        play_type = choose_play(before, fsm.legal_actions(before)["play_type"], rng)
        if play_type == "punt":
            r = engine.punt(ctx)
        elif play_type == "fg":
            r = engine.field_goal(ctx)
        else:
            r = engine.resolve_play(ctx, random_evaluation(rng, spread), play_type=play_type)
            if not r.ok:
                raise RuntimeError(r.error)
        rows.append(snap_row(game, before, r))
    else:
        logger.warning("game %d stopped after %d snaps without finishing", game, MAX_SNAPS_PER_GAME)
    return rows


def simulate(n_games: int, cfg: Optional[FullConfig] = None, seed: Optional[int] = None,
             spread: float = 0.0) -> pd.DataFrame:
    cfg = cfg or FullConfig()
    seed = cfg.seed if seed is None else seed
    dice = RandomDice(seed)
    rng = np.random.default_rng(seed + 1)
    rows = []
    for g in range(n_games):
        rows.extend(simulate_game(g, cfg, dice, rng, spread))
    return pd.DataFrame(rows)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--n_games", type=int, default=200)
    ap.add_argument("--config", default=None)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--spread", type=float, default=0.0,
                    help="std-dev of the per-snap offense advantage; 0 plays every snap at baseline rates")
    ap.add_argument("--out", default="runs/sim_games.parquet")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    setup_logging(args.log_level)
    cfg = load_config(args.config)
    df = simulate(args.n_games, cfg, args.seed, args.spread)
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(out, index=False)
    print("Saved", out, f"({len(df):,} snaps)")


if __name__ == "__main__":
    main()
