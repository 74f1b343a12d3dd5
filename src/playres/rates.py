from __future__ import annotations
import json
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from playres.config import BaselineRatesCfg

logger = logging.getLogger(__name__)

# Explosive + havoc before any leverage, per play type
BASELINE_EXPLOSIVE = {"pass": 6.0, "run": 3.0}
BASELINE_HAVOC = {"pass": 5.0, "run": 3.0}

GOOD_OUTCOME_INTERCEPT = 52.0
GOOD_OUTCOME_SLOPE = 4.5
GOOD_OUTCOME_BOUNDS = (5.0, 95.0)
LEVERAGE_SLOPE = 2.4
BUCKET_FLOOR = 3.0            # reserved for each of explosive and havoc
SUCCESS_BOUNDS = (3.0, 90.0)
VOLATILE_BOUNDS = (3.0, 65.0)

ADVANTAGE_BOUNDS = (-10.0, 10.0)
LEVERAGE_BOUNDS = (0.0, 10.0)
DEFAULT_LEVERAGE = 5.0


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


@dataclass(frozen=True, slots=True)
class RateVector:
    success: float      # percent
    explosive: float
    havoc: float

    @property
    def total(self) -> float:
        return self.success + self.explosive + self.havoc

    @property
    def unsuccessful(self) -> float:
        # left negative on purpose when the buckets overcommit
        return 100.0 - self.total

    @property
    def overcommitted(self) -> bool:
        return self.total > 100.0

    def with_success(self, value: float) -> RateVector:
        return replace(self, success=min(100.0, value))

    def as_dict(self) -> dict[str, float]:
        return {
            "success-rate": self.success,
            "explosive-rate": self.explosive,
            "havoc-rate": self.havoc,
            "unsuccessful-rate": self.unsuccessful,
        }


def rates_from_advantage(play_type: str, offense_advantage: float, risk_leverage: float) -> RateVector:
    """Map a schematic advantage/leverage pair to outcome percentages.

    Buckets are clamped independently and never renormalized, so extreme
    inputs can push the implied unsuccessful rate below zero.
    """
    pt = "pass" if play_type == "pass" else "run"
    good = clamp(GOOD_OUTCOME_INTERCEPT + offense_advantage * GOOD_OUTCOME_SLOPE, *GOOD_OUTCOME_BOUNDS)
    pool = BASELINE_EXPLOSIVE[pt] + BASELINE_HAVOC[pt] + risk_leverage * LEVERAGE_SLOPE
    offense_factor = (offense_advantage + 10.0) / 20.0
    spread = pool - 2 * BUCKET_FLOOR
    explosive = BUCKET_FLOOR + spread * offense_factor
    havoc = BUCKET_FLOOR + spread * (1.0 - offense_factor)
    success = max(SUCCESS_BOUNDS[0], good - explosive)
    return RateVector(
        success=min(SUCCESS_BOUNDS[1], success),
        explosive=clamp(explosive, *VOLATILE_BOUNDS),
        havoc=clamp(havoc, *VOLATILE_BOUNDS),
    )


class Evaluation(BaseModel):
    """What the external evaluator hands over for one snap.

    Either the advantage form (``offense-advantage``/``risk-leverage``) or
    direct percentages. Anything non-numeric is treated as missing.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    play_type: Optional[str] = Field(None, alias="play-type")
    offense_advantage: Optional[float] = Field(None, alias="offense-advantage")
    risk_leverage: Optional[float] = Field(None, alias="risk-leverage")
    success_rate: Optional[float] = Field(None, alias="success-rate")
    havoc_rate: Optional[float] = Field(None, alias="havoc-rate")
    explosive_rate: Optional[float] = Field(None, alias="explosive-rate")
    conversion_rate: Optional[float] = Field(None, alias="conversion-rate-1st-2nd-down-only")

    @field_validator("offense_advantage", "risk_leverage", "success_rate", "havoc_rate",
                     "explosive_rate", "conversion_rate", mode="before")
    @classmethod
    def _lenient_number(cls, v: Any) -> Optional[float]:
        if v is None or isinstance(v, bool):
            return None
        try:
            x = float(v)
        except (TypeError, ValueError):
            logger.warning("non-numeric evaluation value %r treated as missing", v)
            return None
        return None if math.isnan(x) else x

    @property
    def has_advantage(self) -> bool:
        return self.offense_advantage is not None

    def to_rates(self, play_type: Optional[str] = None,
                 defaults: Optional[BaselineRatesCfg] = None) -> RateVector:
        defaults = defaults or BaselineRatesCfg()
        if self.has_advantage:
            adv = clamp(self.offense_advantage, *ADVANTAGE_BOUNDS)
            lev = self.risk_leverage if self.risk_leverage is not None else DEFAULT_LEVERAGE
            rates = rates_from_advantage(play_type or self.play_type or "run", adv, clamp(lev, *LEVERAGE_BOUNDS))
        else:
            missing = [n for n in ("success_rate", "havoc_rate", "explosive_rate") if getattr(self, n) is None]
            if missing:
                logger.warning("evaluation missing %s, substituting defaults", ", ".join(missing))
            pick = lambda v, d: clamp(d if v is None else v, 0.0, 100.0)
            rates = RateVector(
                success=pick(self.success_rate, defaults.success_rate),
                explosive=pick(self.explosive_rate, defaults.explosive_rate),
                havoc=pick(self.havoc_rate, defaults.havoc_rate),
            )
        if rates.overcommitted:
            logger.warning("rate buckets sum to %.1f%% (> 100), unsuccessful rate is %.1f%%",
                           rates.total, rates.unsuccessful)
        return rates

    def conversion(self, defaults: Optional[BaselineRatesCfg] = None) -> float:
        if self.conversion_rate is not None:
            return self.conversion_rate
        return (defaults or BaselineRatesCfg()).conversion_rate


def _strip_fences(line: str) -> str:
    line = line.strip()
    for fence in ("```json", "```"):
        if line.startswith(fence):
            line = line[len(fence):].strip()
    if line.endswith("```"):
        line = line[:-3].strip()
    return line


def extract_evaluation(text: str) -> Evaluation:
    """Pull the evaluation object out of free-form evaluator output.

    The last line holding a JSON object wins. Unparseable output falls back
    to an empty evaluation, which resolves to the baseline rates.
    """
    for line in reversed(text.strip().splitlines()):
        candidate = _strip_fences(line)
        if not candidate.startswith("{"):
            continue
        try:
            raw = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(raw, dict):
            return Evaluation.model_validate(raw)
    logger.error("no evaluation object found in evaluator output, using defaults")
    return Evaluation()
