"""
Adaptive gamut clipping toward a hue-dependent lightness anchor.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from chromatone.conversion.convert import convert_color
from chromatone.conversion.steps import components
from chromatone.core.config import NO_ROUNDING, ColorSpace, Gamut, Precision
from chromatone.gamut.cusp import find_cusp, find_gamut_intersection, normalize_ab
from chromatone.gamut.fitting import BLACK_OKLCH, MAX_BISECTION_STEPS, WHITE_OKLCH, Oklch, fit_chroma_to_gamut
from chromatone.gamut.membership import GamutLike, is_in_gamut
from chromatone.utils.numeric import EPSILON, clamp, floor_to, round_to

logger = logging.getLogger(__name__)

# Digits used by the backstop search when rounding is disabled
_UNROUNDED_DIGITS = 15

# Chroma below which a color has no usable hue direction
ACHROMATIC_CHROMA = 1e-7


def adaptive_gamut_clip(
    oklch: Sequence[float],
    gamut: GamutLike = Gamut.SRGB,
    alpha: float = 0.05,
    round: bool = True,
    precision: Precision = Precision(),
) -> Oklch:
    """
    Project an out-of-gamut color toward an adaptive lightness anchor.

    Parameters
    ----------
    oklch : sequence of float
        Color to clip; returned unchanged when already inside ``gamut``.
    gamut : Gamut, ColorSpace or str
        Target gamut.
    alpha : float
        Near zero the projection is pure chroma compression; larger values
        move the anchor toward the cusp-independent mid lightness.
    round : bool
        Floor lightness and chroma, round hue, using ``precision``.
    precision : Precision
        Digits for the rounding pass.

    Returns
    -------
    tuple of float
        Clipped Oklch color inside ``gamut``.
        Lightness at or beyond 1 (0) gives white (black); colors with
        chroma below ``ACHROMATIC_CHROMA`` keep their lightness as a gray.
    """

    if is_in_gamut(oklch, ColorSpace.OKLCH, gamut):
        return components(oklch)

    L, C, H = components(oklch)
    if L >= 1.0:
        return WHITE_OKLCH
    if L <= 0.0:
        return BLACK_OKLCH
    if C < ACHROMATIC_CHROMA:
        return clamp(0.0, L, 1.0), 0.0, 0.0

    _, a, b = convert_color((L, C, H), ColorSpace.OKLCH, ColorSpace.OKLAB, NO_ROUNDING)
    a_unit, b_unit = normalize_ab(a, b)

    cusp = find_cusp(a_unit, b_unit, gamut)
    dL = L - cusp.lightness
    k = 2.0 * (1.0 - cusp.lightness if dL > 0 else cusp.lightness)
    e1 = 0.5 * k + abs(dL) + alpha * C / k
    L0 = cusp.lightness + 0.5 * (math.copysign(1.0, dL) if dL != 0 else 0.0) * (
        e1 - math.sqrt(e1 * e1 - 2.0 * k * abs(dL))
    )

    t = find_gamut_intersection(a_unit, b_unit, L, C, L0, gamut, cusp)
    clipped = (L0 * (1.0 - t) + t * L, t * C, H)

    if round:
        clipped = (
            floor_to(clipped[0], precision.lightness),
            floor_to(clipped[1], precision.chroma),
            round_to(clipped[2], precision.hue),
        )

    if not is_in_gamut(clipped, ColorSpace.OKLCH, gamut):
        logger.debug("Analytic clip %s outside gamut, searching along projection line", clipped)
        l_digits = precision.lightness if round else _UNROUNDED_DIGITS
        c_digits = precision.chroma if round else _UNROUNDED_DIGITS
        clipped = clip_along_projection_line(clipped, L0, gamut, l_digits, c_digits)

    return fit_chroma_to_gamut(clipped, gamut)


def clip_along_projection_line(
    oklch: Sequence[float],
    l0: float,
    gamut: GamutLike = Gamut.SRGB,
    lightness_digits: int = 5,
    chroma_digits: int = 5,
) -> Oklch:
    """Bisect chroma on the line from ``(l0, 0)`` to ``oklch`` in the (L, C) plane."""

    L, C, H = components(oklch)
    if C == 0:
        return l0, 0.0, H

    def line_lightness(chroma: float) -> float:
        return (L - l0) / C * chroma + l0

    precision = 10.0 ** -chroma_digits
    lo, hi = 0.0, C
    for _ in range(MAX_BISECTION_STEPS):
        if hi - lo <= precision + EPSILON:
            break
        mid = round_to((lo + hi) / 2.0, chroma_digits)
        if is_in_gamut((round_to(line_lightness(mid), lightness_digits), mid, H), ColorSpace.OKLCH, gamut):
            lo = mid
        else:
            hi = mid

    return round_to(line_lightness(lo), lightness_digits), lo, H
