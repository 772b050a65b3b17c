"""
Real roots of monic cubic equations ``x**3 + a2*x**2 + a1*x + a0 = 0``.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from chromatone.utils.numeric import clamp


def solve_cubic(a2: float, a1: float, a0: float) -> Tuple[float, ...]:
    """
    All real roots, sorted in descending order.

    Uses the discriminant ``r**2 + q**3``: one real root via Cardano when it
    is positive, three real roots via the trigonometric (Viete) form otherwise.
    """

    q = a1 / 3.0 - a2 * a2 / 9.0
    r = (a1 * a2 - 3.0 * a0) / 6.0 - a2 ** 3 / 27.0
    disc = r * r + q ** 3
    shift = a2 / 3.0

    if disc > 0:
        sq = math.sqrt(disc)
        root = float(np.cbrt(r + sq) + np.cbrt(r - sq)) - shift
        return (root,)

    if q == 0:
        return (-shift, -shift, -shift)

    rho = math.sqrt(-q)
    theta = math.acos(clamp(-1.0, r / rho ** 3, 1.0))
    roots = [
        2.0 * rho * math.cos((theta + 2.0 * math.pi * k) / 3.0) - shift
        for k in range(3)
    ]
    return tuple(sorted(roots, reverse=True))


def solve_cubic_trig(a2: float, a1: float, a0: float) -> Tuple[float, ...]:
    """All real roots via the Q/R formulation, sorted in descending order."""

    Q = (a2 * a2 - 3.0 * a1) / 9.0
    R = (2.0 * a2 ** 3 - 9.0 * a2 * a1 + 27.0 * a0) / 54.0
    shift = a2 / 3.0

    if R * R < Q ** 3:
        theta = math.acos(clamp(-1.0, R / math.sqrt(Q ** 3), 1.0))
        sq = -2.0 * math.sqrt(Q)
        roots = [
            sq * math.cos(theta / 3.0) - shift,
            sq * math.cos((theta + 2.0 * math.pi) / 3.0) - shift,
            sq * math.cos((theta - 2.0 * math.pi) / 3.0) - shift,
        ]
        return tuple(sorted(roots, reverse=True))

    return (_cardano_root(Q, R) - shift,)


def solve_lightness_cubic(a2: float, a1: float, a0: float) -> float:
    """Largest real root clamped to [0, 1]."""

    Q = (a2 * a2 - 3.0 * a1) / 9.0
    R = (2.0 * a2 ** 3 - 9.0 * a2 * a1 + 27.0 * a0) / 54.0
    shift = a2 / 3.0

    if R * R < Q ** 3:
        theta = math.acos(clamp(-1.0, R / math.sqrt(Q ** 3), 1.0)) if Q != 0 else 0.0
        z = -2.0 * math.sqrt(Q) * math.cos((theta + 2.0 * math.pi) / 3.0) - shift
    else:
        z = _cardano_root(Q, R) - shift

    return clamp(0.0, z, 1.0)


def _cardano_root(Q: float, R: float) -> float:
    A = -math.copysign(1.0, R) * float(np.cbrt(abs(R) + math.sqrt(R * R - Q ** 3)))
    B = 0.0 if A == 0 else Q / A
    return A + B
