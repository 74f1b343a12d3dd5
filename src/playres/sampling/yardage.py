from __future__ import annotations
import math

import numpy as np

from playres.constants import ROLL_MAX, ROLL_MIN, Z_CLAMP

# Winitzki's constant for the closed-form erf / erfinv approximation
WINITZKI_A = 8.0 * (math.pi - 3.0) / (3.0 * math.pi * (4.0 - math.pi))


def erfinv(x: float) -> float:
    """Winitzki's closed-form inverse error function, |x| < 1."""
    ln = math.log((1.0 - x) * (1.0 + x))
    first = 2.0 / (math.pi * WINITZKI_A) + ln / 2.0
    y = math.sqrt(math.sqrt(first * first - ln / WINITZKI_A) - first)
    return math.copysign(y, x) if x != 0.0 else 0.0


def inverse_normal_cdf(p: float) -> float:
    """Standard-normal quantile, clamped to +/-10 outside (0, 1)."""
    if p <= 0.0:
        return -Z_CLAMP
    if p >= 1.0:
        return Z_CLAMP
    return math.sqrt(2.0) * erfinv(2.0 * p - 1.0)


def roll_to_percentile(roll: int) -> float:
    return (roll - ROLL_MIN) / (ROLL_MAX - ROLL_MIN)


def roll_to_z(roll: int) -> float:
    """Same as inverse_normal_cdf(roll_to_percentile(roll)), computed so that
    rolls r and 101 - r map to exactly opposite quantiles."""
    if roll <= ROLL_MIN:
        return -Z_CLAMP
    if roll >= ROLL_MAX:
        return Z_CLAMP
    x = (2 * roll - (ROLL_MIN + ROLL_MAX)) / (ROLL_MAX - ROLL_MIN)
    return math.sqrt(2.0) * erfinv(x)


def skew_adjust(z: float, skew: float) -> float:
    # first-order skew-normal (Cornish-Fisher) term
    if skew == 0:
        return z
    return z + skew * (z * z - 1.0) / 6.0


def yards_from_roll(roll: int, mean: float, std: float, skew: float = 0.0) -> int:
    if std <= 0:
        raise ValueError(f"standard deviation must be positive, got {std}")
    z = skew_adjust(roll_to_z(roll), skew)
    # round() is half-to-even, which keeps the zero-skew table symmetric about the mean
    return int(round(mean + z * std))


def yards_table(mean: float, std: float, skew: float = 0.0) -> np.ndarray:
    """Yards for every roll 1..100, in roll order."""
    return np.array([yards_from_roll(r, mean, std, skew) for r in range(ROLL_MIN, ROLL_MAX + 1)],
                    dtype=np.int64)


def expected_yards(mean: float, std: float, skew: float = 0.0) -> float:
    return float(yards_table(mean, std, skew).mean())
