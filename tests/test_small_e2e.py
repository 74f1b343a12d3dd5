import numpy as np

from playres.config import load_config
from playres.engine import PlayEngine, SimulationContext
from playres.rules.fsm import PLAY_TYPES, RulesFSM
from playres.sampling.dice import RandomDice
from playres.simulate import choose_play, random_evaluation
from playres.state import GameState


def test_e2e_random_policy_invariants():
    rng = np.random.default_rng(0)
    cfg = load_config()
    ctx = SimulationContext(config=cfg, state=GameState(), dice=RandomDice(0))
    engine = PlayEngine()
    fsm = RulesFSM(cfg.state_machine.rubber_band, cfg.special_teams)
    total = 0
    for _ in range(400):
        s = ctx.state
        if s.is_final:
            break
        masks = fsm.legal_actions(s)
        assert masks["play_type"].any()
        pt = choose_play(s, masks["play_type"], rng)
        assert pt in PLAY_TYPES
        if pt == "punt":
            r = engine.punt(ctx)
        elif pt == "fg":
            r = engine.field_goal(ctx)
        else:
            r = engine.resolve_play(ctx, random_evaluation(rng, 3.0), play_type=pt)
        assert r.ok
        ns = ctx.state
        assert 1 <= ns.down <= 4
        assert ns.distance >= 1
        assert 0 < ns.opp_yardline <= 100
        assert ns.consecutive_unsuccessful_plays >= 0
        assert ns.score_home + ns.score_away >= total
        total = ns.score_home + ns.score_away
        assert 0 <= ns.timeouts_home <= 3 and 0 <= ns.timeouts_away <= 3
    assert ctx.state.is_final
