from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from playres.constants import KICKOFF_YARDLINE, QUARTER_LENGTH, REGULATION_QUARTERS, TOUCHBACK_YARDLINE
from playres.errors import ConfigError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"

FATIGUE_DOC = "fatigue.json"
STATE_MACHINE_DOC = "play-state-machine.json"
TIMING_DOC = "timing.json"


class _Cfg(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FatigueCurveCfg(_Cfg):
    high_stamina_threshold: float = Field(85.0, alias="high-stamina-threshold")
    high_stamina_multiplier: float = Field(0.99, alias="high-stamina-multiplier")
    medium_stamina_threshold: float = Field(60.0, alias="medium-stamina-threshold")
    medium_stamina_multiplier: float = Field(0.80, alias="medium-stamina-multiplier")
    min_multiplier: float = Field(0.20, alias="min-multiplier")

    @model_validator(mode="after")
    def _ordered(self):
        if not 1 < self.medium_stamina_threshold < self.high_stamina_threshold:
            raise ValueError("need 1 < medium-stamina-threshold < high-stamina-threshold")
        return self


class FatigueCfg(_Cfg):
    baseline_fatigue: float = Field(2.5, alias="baseline-fatigue")
    baseline_recovery: float = Field(2.25, alias="baseline-recovery")
    # "always" applies every snap, "run"/"pass" only on that play type
    position_modifiers: Dict[str, Dict[str, float]] = Field(
        default_factory=lambda: {"always": {}, "run": {}, "pass": {}},
        alias="position-modifiers",
    )
    effectiveness_curve: FatigueCurveCfg = Field(default_factory=FatigueCurveCfg, alias="effectiveness-curve")


class HavocOutcomesCfg(_Cfg):
    sack: float = 35.0
    turnover: float = 20.0
    tackle_for_loss: float = Field(30.0, alias="tackle-for-loss")

    @model_validator(mode="after")
    def _fits_in_d100(self):
        parts = (self.sack, self.turnover, self.tackle_for_loss)
        if min(parts) < 0 or sum(parts) > 100:
            raise ValueError("havoc-outcomes must be non-negative and sum to at most 100")
        return self

    @property
    def stuffed_run(self) -> float:
        return 100.0 - self.sack - self.turnover - self.tackle_for_loss


class YacCfg(_Cfg):
    pass_primary_threshold: int = Field(75, alias="pass-primary-threshold")
    run_primary_threshold: int = Field(70, alias="run-primary-threshold")


class RubberBandCfg(_Cfg):
    min_consecutive: int = Field(2, alias="min-consecutive")
    min_down: int = Field(3, alias="min-down")
    major_penalty_roll: int = Field(10, alias="major-penalty-roll")
    major_penalty_yards: int = Field(5, alias="major-penalty-yards")
    minor_penalty_roll: int = Field(18, alias="minor-penalty-roll")
    minor_penalty_yards: int = Field(3, alias="minor-penalty-yards")
    pass_success_boost: float = Field(30.0, alias="pass-success-boost")
    run_conversion_factor: float = Field(0.2, alias="run-conversion-factor")


class StateMachineCfg(_Cfg):
    havoc_outcomes: HavocOutcomesCfg = Field(default_factory=HavocOutcomesCfg, alias="havoc-outcomes")
    yac: YacCfg = Field(default_factory=YacCfg)
    rubber_band: RubberBandCfg = Field(default_factory=RubberBandCfg, alias="rubber-band")


class BaselineRatesCfg(_Cfg):
    success_rate: float = Field(45.0, alias="success-rate")
    havoc_rate: float = Field(11.0, alias="havoc-rate")
    explosive_rate: float = Field(13.0, alias="explosive-rate")
    conversion_rate: float = Field(31.0, alias="conversion-rate-1st-2nd-down-only")


class RunoffCfg(_Cfg):
    run: int
    pass_: int = Field(alias="pass")

    def for_play(self, play_type: str) -> int:
        return self.pass_ if play_type == "pass" else self.run


class TimingCfg(_Cfg):
    timeout_incomplete_runoff: int = Field(6, alias="timeout-incomplete-runoff")
    winning_team: RunoffCfg = Field(default_factory=lambda: RunoffCfg(run=44, pass_=28), alias="winning-team")
    losing_team: RunoffCfg = Field(default_factory=lambda: RunoffCfg(run=36, pass_=19), alias="losing-team")
    quarter_length: str = Field(QUARTER_LENGTH, alias="quarter-length")
    regulation_quarters: int = Field(REGULATION_QUARTERS, alias="regulation-quarters")


class SpecialTeamsCfg(_Cfg):
    punt_base_distance: float = Field(45.0, alias="punt-base-distance")
    punt_variance: float = Field(10.0, alias="punt-variance")     # full width of the uniform spread
    touchback_yardline: int = Field(TOUCHBACK_YARDLINE, alias="touchback-yardline")
    fg_base_percent: float = Field(95.0, alias="fg-base-percent")
    fg_decay_per_yard: float = Field(1.81, alias="fg-decay-per-yard")
    kickoff_yardline: int = Field(KICKOFF_YARDLINE, alias="kickoff-yardline")
    touchdown_points: int = Field(6, alias="touchdown-points")
    field_goal_points: int = Field(3, alias="field-goal-points")


class FullConfig(_Cfg):
    seed: int = 42
    data_dir: Optional[str] = Field(None, alias="data-dir")
    fatigue: FatigueCfg = Field(default_factory=FatigueCfg)
    state_machine: StateMachineCfg = Field(default_factory=StateMachineCfg, alias="state-machine")
    baseline_rates: BaselineRatesCfg = Field(default_factory=BaselineRatesCfg, alias="baseline-rates")
    timing: TimingCfg = Field(default_factory=TimingCfg)
    special_teams: SpecialTeamsCfg = Field(default_factory=SpecialTeamsCfg, alias="special-teams")

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir) if self.data_dir else DATA_DIR


def read_json_doc(path: Path) -> dict[str, Any]:
    """Read one JSON config document; a missing file means "use the defaults"."""
    try:
        with open(path, "r") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.warning("config document %s not found, using defaults", path)
        return {}
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    return raw


def deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[str] = None) -> FullConfig:
    """Bundled JSON documents first, then the YAML run config on top."""
    raw: dict[str, Any] = {}
    if path:
        with open(path, "r") as f:
            raw = yaml.safe_load(f) or {}
    data_dir = Path(raw.get("data-dir") or raw.get("data_dir") or DATA_DIR)
    docs = {
        "fatigue": read_json_doc(data_dir / FATIGUE_DOC),
        "state-machine": read_json_doc(data_dir / STATE_MACHINE_DOC),
        "timing": read_json_doc(data_dir / TIMING_DOC),
    }
    try:
        return FullConfig.model_validate(deep_merge(docs, raw))
    except ValidationError as e:
        raise ConfigError(str(e)) from e
