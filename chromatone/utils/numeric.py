"""
Small numeric helpers: rounding policies, clamping, angular arithmetic.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

EPSILON = 2.220446049250313e-16


def mat_vec(matrix: np.ndarray, vector: Sequence[float]) -> Tuple[float, ...]:
    """Multiply a matrix by a vector and return a tuple of floats."""

    return tuple(float(v) for v in np.dot(matrix, np.asarray(vector, dtype=np.float64)))


def clamp(lo: float, value: float, hi: float) -> float:
    return max(lo, min(value, hi))


def lerp(start: float, stop: float, amount: float) -> float:
    """Linear interpolation with ``amount`` clamped to [0, 1]."""

    amount = clamp(0.0, amount, 1.0)
    return start + (stop - start) * amount


def round_to(value: float, digits: int) -> float:
    """
    Round half up to ``digits`` decimals.

    ``EPSILON`` is added before scaling so values like 1.005 round up, and the
    result never carries a negative zero. Non-finite values pass through.
    """

    if not math.isfinite(value):
        return value
    scale = 10.0 ** digits
    return math.floor((value + EPSILON) * scale + 0.5) / scale + 0.0


def floor_to(value: float, digits: int) -> float:
    """Round down to ``digits`` decimals (same epsilon policy as ``round_to``)."""

    if not math.isfinite(value):
        return value
    scale = 10.0 ** digits
    return math.floor((value + EPSILON) * scale) / scale + 0.0


def signed_pow(value: float, exponent: float) -> float:
    """``sign(x) * |x| ** p``; keeps fractional powers of negatives real."""

    return math.copysign(abs(value) ** exponent, value) if value != 0 else 0.0


def normalize_hue(hue: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""

    hue = hue % 360.0
    return 0.0 if hue >= 360.0 else hue + 0.0


def hue_difference(hue: float, reference: float) -> float:
    """Smallest signed difference ``hue - reference`` in degrees, in [-180, 180)."""

    return (hue - reference + 180.0) % 360.0 - 180.0


def polar_to_rect(radius: float, hue_deg: float) -> Tuple[float, float]:
    h = math.radians(hue_deg)
    return radius * math.cos(h), radius * math.sin(h)


def rect_to_polar(x: float, y: float) -> Tuple[float, float]:
    """Return ``(radius, hue)`` with hue in degrees in [0, 360)."""

    return math.hypot(x, y), normalize_hue(math.degrees(math.atan2(y, x)))


def cbrt(value: float) -> float:
    """Real cube root, negative for negative input."""

    return float(np.cbrt(value))
