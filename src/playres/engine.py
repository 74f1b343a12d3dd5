from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, Mapping, Optional, Union

from playres.config import FullConfig, load_config
from playres.errors import IllegalActionError, ProfileLoadError
from playres.persistence import GameStore
from playres.rates import Evaluation, RateVector, extract_evaluation
from playres.roster.assignments import Assignment, classify_play_type
from playres.roster.fatigue import FatigueUpdater
from playres.roster.players import Position, Rosters
from playres.roster.rating import EffectiveRating, effective_percentile
from playres.roster.traits import PlayContext
from playres.rules.clock import GameClock, call_timeout
from playres.rules.fsm import PLAY_TYPES, RulesFSM, Transition
from playres.rules.special_teams import SpecialTeamsResult, field_goal, punt
from playres.sampling.dice import RandomDice
from playres.sampling.outcomes import Category, OutcomeSampler
from playres.sampling.profiles import ProfileRepository
from playres.state import GameState

logger = logging.getLogger(__name__)

EvaluationInput = Union[Evaluation, Mapping[str, Any], str, None]


@dataclass
class SimulationContext:
    """Everything a snap may read or mutate. Nothing else is consulted."""
    config: FullConfig
    state: GameState
    rosters: Rosters = field(default_factory=Rosters)
    profiles: Optional[ProfileRepository] = None
    dice: Optional[Any] = None
    store: Optional[GameStore] = None

    def __post_init__(self):
        if self.profiles is None:
            self.profiles = ProfileRepository(self.config.data_path)
        if self.dice is None:
            self.dice = RandomDice(self.config.seed)

    @classmethod
    def create(cls, config: Optional[FullConfig] = None, store: Optional[GameStore] = None,
               **kw) -> SimulationContext:
        config = config or load_config()
        state = store.load_state() if store is not None else GameState()
        rosters = store.load_rosters() if store is not None else Rosters()
        return cls(config=config, state=state, rosters=rosters, store=store, **kw)

    def persist(self) -> None:
        if self.store is not None:
            self.store.save_state(self.state)
            self.store.save_rosters(self.rosters)


@dataclass(frozen=True, slots=True)
class PlayResult:
    outcome: str
    yards: int = 0
    description: str = ""
    play_type: Optional[str] = None
    category: Optional[Category] = None
    turnover: bool = False
    turnover_type: Optional[str] = None
    is_complete: bool = True
    rates: Optional[RateVector] = None
    penalty_yards: int = 0
    first_down: bool = False
    touchdown: bool = False
    turnover_on_downs: bool = False
    possession_changed: bool = False
    points: int = 0
    state: Optional[GameState] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, message: str, play_type: Optional[str] = None,
               rates: Optional[RateVector] = None) -> PlayResult:
        return cls(outcome="error", yards=0, description=message, play_type=play_type,
                   rates=rates, error=message)

    def as_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome,
            "outcomeType": self.category.value if self.category else None,
            "playType": self.play_type,
            "yards": self.yards,
            "turnover": self.turnover,
            "turnoverType": self.turnover_type,
            "description": self.description,
            "isComplete": self.is_complete,
            "penaltyYards": self.penalty_yards,
            "firstDown": self.first_down,
            "touchdown": self.touchdown,
            "turnoverOnDowns": self.turnover_on_downs,
            "possessionChanged": self.possession_changed,
            "rates": self.rates.as_dict() if self.rates else None,
        }


def as_evaluation(raw: EvaluationInput) -> Evaluation:
    if raw is None:
        return Evaluation()
    if isinstance(raw, Evaluation):
        return raw
    if isinstance(raw, str):
        return extract_evaluation(raw)
    return Evaluation.model_validate(dict(raw))


class PlayEngine:
    """Resolves snaps against a SimulationContext.

    State and stamina are only written once the whole snap has been sampled;
    a failed profile load leaves both untouched.
    """

    @staticmethod
    def _fsm(cfg: FullConfig) -> RulesFSM:
        return RulesFSM(cfg.state_machine.rubber_band, cfg.special_teams)

    def infer_play_type(self, ctx: SimulationContext, assignments: Mapping[str, Assignment]) -> str:
        offense, _ = ctx.rosters.for_possession(ctx.state.possession)
        for p in offense:
            if p.position is Position.QB and p.name in assignments:
                return classify_play_type(assignments[p.name])
        return "run"

    def ratings(self, ctx: SimulationContext, assignments: Mapping[str, Assignment], play_type: str,
                locations: Optional[Mapping[str, str]] = None) -> Dict[str, EffectiveRating]:
        """Effective percentiles for the players named in `assignments`, for the evaluator."""
        offense, defense = ctx.rosters.for_possession(ctx.state.possession)
        curve = ctx.config.fatigue.effectiveness_curve
        locations = locations or {}
        return {
            p.name: effective_percentile(p, assignments[p.name],
                                         PlayContext(play_type, locations.get(p.name, "")), curve)
            for p in [*offense, *defense] if p.name in assignments
        }

    @staticmethod
    def _squads_on_field(ctx: SimulationContext) -> set[str]:
        offense, defense = ctx.rosters.for_possession(ctx.state.possession)
        return {p.name for p in [*offense, *defense]}

    def _guard(self, ctx: SimulationContext) -> None:
        if ctx.state.is_final:
            raise IllegalActionError("game is over")

    def resolve_play(self, ctx: SimulationContext, evaluation: EvaluationInput = None,
                     play_type: Optional[str] = None,
                     assignments: Optional[Mapping[str, Assignment]] = None,
                     on_field: Optional[Collection[str]] = None) -> PlayResult:
        self._guard(ctx)
        cfg = ctx.config
        s = ctx.state
        ev = as_evaluation(evaluation)
        play_type = play_type or ev.play_type or self.infer_play_type(ctx, assignments or {})
        if play_type not in ("run", "pass"):
            raise IllegalActionError(f"{play_type!r} is not a scrimmage play")
        if on_field is None:
            on_field = set(assignments) if assignments else self._squads_on_field(ctx)

        rates = ev.to_rates(play_type, cfg.baseline_rates)
        fsm = self._fsm(cfg)
        band = fsm.rubber_band(s, play_type, rates, ev.conversion(cfg.baseline_rates), ctx.dice)
        if band.applied:
            logger.debug("rubber band (%s) on %d-and-%d", band.applied, s.down, s.distance)
        sampler = OutcomeSampler(ctx.profiles, cfg.state_machine)
        try:
            out = sampler.sample(play_type, band.rates, ctx.dice, penalty_yards=band.penalty_yards)
        except ProfileLoadError as e:
            logger.error("play not resolved: %s", e)
            return PlayResult.failed(str(e), play_type, band.rates)

        t = fsm.apply_outcome(s, yards=out.yards, turnover=out.turnover, category=out.category)
        ns = GameClock(cfg.timing).after_snap(t.state, play_type, offense_leading=s.offense_leading,
                                            stopped=not out.is_complete)
        FatigueUpdater(cfg.fatigue).apply(ctx.rosters, on_field, play_type)
        ctx.state = ns
        ctx.persist()
        return PlayResult(
            outcome=out.outcome,
            yards=out.yards,
            description=out.description,
            play_type=play_type,
            category=out.category,
            turnover=out.turnover,
            turnover_type=out.turnover_type,
            is_complete=out.is_complete,
            rates=band.rates,
            penalty_yards=band.penalty_yards,
            first_down=t.first_down,
            touchdown=t.touchdown,
            turnover_on_downs=t.turnover_on_downs,
            possession_changed=t.possession_changed,
            points=t.points,
            state=ns,
        )

    def _special(self, ctx: SimulationContext, result: SpecialTeamsResult, kind: str) -> PlayResult:
        s = ctx.state
        t: Transition = self._fsm(ctx.config).apply_special_teams(s, result)
        ns = GameClock(ctx.config.timing).after_snap(t.state, kind, offense_leading=s.offense_leading, stopped=True)
        ctx.state = ns
        ctx.persist()
        return PlayResult(outcome=result.kind, yards=result.yards, description=result.description,
                          play_type=kind, possession_changed=t.possession_changed,
                          points=t.points, state=ns)

    def _require_special(self, ctx: SimulationContext, kind: str) -> None:
        self._guard(ctx)
        mask = self._fsm(ctx.config).legal_actions(ctx.state)["play_type"]
        if not mask[PLAY_TYPES.index(kind)]:
            raise IllegalActionError(f"{kind} not allowed on down {ctx.state.down}")

    def punt(self, ctx: SimulationContext) -> PlayResult:
        self._require_special(ctx, "punt")
        return self._special(ctx, punt(ctx.state, ctx.dice, ctx.config.special_teams), "punt")

    def field_goal(self, ctx: SimulationContext) -> PlayResult:
        self._require_special(ctx, "fg")
        return self._special(ctx, field_goal(ctx.state, ctx.dice, ctx.config.special_teams), "fg")

    def call_timeout(self, ctx: SimulationContext, team: str) -> GameState:
        ctx.state = call_timeout(ctx.state, team)
        ctx.persist()
        return ctx.state
