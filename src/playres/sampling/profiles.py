from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from playres.config import DATA_DIR
from playres.errors import ProfileLoadError
from playres.sampling.yardage import expected_yards, yards_from_roll

logger = logging.getLogger(__name__)

INCOMPLETE_DESCRIPTION = "The pass was incomplete. Yards: 0"


class OutcomeProfile(BaseModel):
    """Statistical shape of one outcome bucket, as stored in outcomes/*.json."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    outcome: str
    description: str
    mean: float = Field(alias="average-yards-gained")
    std: float = Field(gt=0, alias="standard-deviation")
    skew: float = Field(0.0, alias="skewness")
    completion_percentage: Optional[float] = Field(None, ge=0, le=100, alias="completion-percentage")
    turnover_probability: float = Field(0.0, ge=0, le=100, alias="turnover-probability")
    turnover_type: Optional[str] = Field(None, alias="turnover-type")

    def yards(self, roll: int) -> int:
        return yards_from_roll(roll, self.mean, self.std, self.skew)

    def render(self, yards: int) -> str:
        return self.description.replace("{yards}", str(yards)).replace("{yards-after-catch}", str(yards))

    @property
    def expected_yards(self) -> float:
        return expected_yards(self.mean, self.std, self.skew)


class ProfileRepository:
    """Loads outcome profiles on first use and keeps them for the session.

    Paths are relative to ``root`` (e.g. ``outcomes/explosive-run.json``).
    The cache is never invalidated; profiles are immutable once loaded.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else DATA_DIR
        self._cache: Dict[str, OutcomeProfile] = {}

    def __contains__(self, path: str) -> bool:
        return path in self._cache

    def load(self, path: str) -> OutcomeProfile:
        hit = self._cache.get(path)
        if hit is not None:
            return hit
        full = self.root / path
        logger.debug("loading outcome profile %s", full)
        try:
            with open(full, "r") as f:
                raw = json.load(f)
            profile = OutcomeProfile.model_validate(raw)
        except FileNotFoundError as e:
            logger.error("outcome profile %s missing", full)
            raise ProfileLoadError(path, "file not found") from e
        except (OSError, json.JSONDecodeError) as e:
            logger.error("outcome profile %s unreadable: %s", full, e)
            raise ProfileLoadError(path, str(e)) from e
        except ValidationError as e:
            logger.error("outcome profile %s invalid: %s", full, e)
            raise ProfileLoadError(path, "invalid profile") from e
        self._cache[path] = profile
        return profile

    def put(self, path: str, profile: OutcomeProfile) -> None:
        """Seed the cache, e.g. with an in-memory profile."""
        self._cache[path] = profile
