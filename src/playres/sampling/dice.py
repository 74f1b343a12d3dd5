from __future__ import annotations
from typing import Iterable, Optional

import numpy as np

from playres.constants import ROLL_MAX, ROLL_MIN

_BLOCK = 4096


class RandomDice:
    """Single entropy source for a session; every draw is independent."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._block = np.empty(0, dtype=np.int64)
        self._i = 0

    def d100(self) -> int:
        if self._i >= len(self._block):
            self._block = self.rng.integers(ROLL_MIN, ROLL_MAX + 1, size=_BLOCK)
            self._i = 0
        r = int(self._block[self._i])
        self._i += 1
        return r

    def uniform(self) -> float:
        return float(self.rng.random())


class ScriptedDice:
    """Replays a fixed sequence of rolls; runs dry with IndexError."""

    def __init__(self, rolls: Iterable[int] = (), uniforms: Iterable[float] = ()):
        self.rolls = list(rolls)
        self.uniforms = list(uniforms)
        self.consumed = 0

    def d100(self) -> int:
        if not self.rolls:
            raise IndexError("scripted dice ran out of d100 rolls")
        r = self.rolls.pop(0)
        if not ROLL_MIN <= r <= ROLL_MAX:
            raise ValueError(f"scripted roll {r} outside 1..100")
        self.consumed += 1
        return r

    def uniform(self) -> float:
        if not self.uniforms:
            raise IndexError("scripted dice ran out of uniform draws")
        return self.uniforms.pop(0)

