"""
Oklab gamut-triangle geometry: cusp point and line intersections.

For a fixed hue the gamut boundary in the (L, C) plane is approximated by a
triangle with corners at black, white and the cusp. The maximum saturation
``S = C / L`` comes from a polynomial fit refined by one Halley step.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional, Tuple

import numpy as np

from chromatone.conversion.convert import convert_color
from chromatone.conversion.spaces import resolve_gamut
from chromatone.core.config import NO_ROUNDING, ColorSpace, Gamut
from chromatone.gamut.membership import GamutLike, linear_space
from chromatone.utils.matrices import (
    LMS_TO_LIN_DISPLAY_P3,
    LMS_TO_LIN_SRGB,
    MAX_SATURATION_COEFFS,
    OKLAB_TO_LIN_DISPLAY_P3_APPROX,
    OKLAB_TO_LIN_SRGB_APPROX,
    OKLAB_TO_LMS3,
)
from chromatone.utils.numeric import EPSILON

_NORM_EPSILON = 1e-5


class CuspPoint(NamedTuple):
    """Widest point of the gamut boundary for one hue."""

    lightness: float
    chroma: float


def normalize_ab(a: float, b: float) -> Tuple[float, float]:
    """Scale ``(a, b)`` to unit length; zero chroma gives ``(0, 0)``."""

    chroma = max(_NORM_EPSILON, math.hypot(a, b))
    return a / chroma, b / chroma


def find_max_saturation(a: float, b: float, gamut: GamutLike = Gamut.SRGB) -> float:
    """
    Maximum saturation ``S = C / L`` for the hue ``(a, b)`` (unit length).

    The RGB channel that clips first is picked from the approximate Oklab to
    RGB rows; its polynomial estimate is then refined by one Halley step on
    ``channel(S) = 0``.
    """

    _check_unit(a, b)
    approx, lms_to_rgb = _gamut_tables(gamut)
    ab = np.array([a, b])

    if float(approx[0] @ ab) > 1.0:
        channel = 0
    elif float(approx[1] @ ab) > 1.0:
        channel = 1
    else:
        channel = 2

    k0, k1, k2, k3, k4 = MAX_SATURATION_COEFFS[channel]
    S = k0 + k1 * a + k2 * b + k3 * a * a + k4 * a * b

    k_lms = OKLAB_TO_LMS3[:, 1:] @ ab
    lms_ = 1.0 + S * k_lms
    lms = lms_ ** 3
    lms_ds = 3.0 * k_lms * lms_ ** 2
    lms_ds2 = 6.0 * k_lms ** 2 * lms_

    weights = lms_to_rgb[channel]
    f = float(weights @ lms)
    f1 = float(weights @ lms_ds)
    f2 = float(weights @ lms_ds2)
    return S - f * f1 / (f1 * f1 - 0.5 * f * f2)


def find_cusp(a: float, b: float, gamut: GamutLike = Gamut.SRGB) -> CuspPoint:
    """Cusp ``(L, C)`` of the gamut triangle for the hue ``(a, b)`` (unit length)."""

    S = find_max_saturation(a, b, gamut)
    rgb = convert_color((1.0, S * a, S * b), ColorSpace.OKLAB, linear_space(gamut), NO_ROUNDING)
    L = float(np.cbrt(1.0 / max(rgb)))
    return CuspPoint(L, L * S)


def find_gamut_intersection(
    a: float,
    b: float,
    l1: float,
    c1: float,
    l0: float,
    gamut: GamutLike = Gamut.SRGB,
    cusp: Optional[CuspPoint] = None,
) -> float:
    """
    Parameter ``t`` where the line from ``(l0, 0)`` to ``(l1, c1)`` meets the
    gamut boundary, so the clipped point is ``(l0 + t*(l1 - l0), t*c1)``.

    The lower half of the triangle is intersected exactly. For the upper
    half the triangle estimate is refined by one Halley step per RGB channel.
    """

    if cusp is None:
        cusp = find_cusp(a, b, gamut)
    l_cusp, c_cusp = cusp

    if (l1 - l0) * c_cusp - (l_cusp - l0) * c1 <= -EPSILON:
        return c_cusp * l0 / (c1 * l_cusp + c_cusp * (l0 - l1))

    t = c_cusp * (l0 - 1.0) / (c1 * (l_cusp - 1.0) + c_cusp * (l0 - l1))

    _, lms_to_rgb = _gamut_tables(gamut)
    dL = l1 - l0
    dC = c1
    k_lms = OKLAB_TO_LMS3[:, 1:] @ np.array([a, b])
    lms_dt_ = dL + dC * k_lms

    L = l0 * (1.0 - t) + t * l1
    C = t * c1
    lms_ = L + C * k_lms
    lms = lms_ ** 3
    lms_dt = 3.0 * lms_dt_ * lms_ ** 2
    lms_dt2 = 6.0 * lms_dt_ ** 2 * lms_

    rgb = lms_to_rgb @ lms - 1.0
    rgb_dt = lms_to_rgb @ lms_dt
    rgb_dt2 = lms_to_rgb @ lms_dt2

    steps = []
    for value, d1, d2 in zip(rgb, rgb_dt, rgb_dt2):
        u = d1 / (d1 * d1 - 0.5 * value * d2)
        if u >= 0:
            steps.append(float(-value * u))

    return t + min(steps) if steps else t


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------


def _gamut_tables(gamut: GamutLike) -> Tuple[np.ndarray, np.ndarray]:
    if resolve_gamut(gamut) == Gamut.DISPLAY_P3:
        return OKLAB_TO_LIN_DISPLAY_P3_APPROX, LMS_TO_LIN_DISPLAY_P3
    return OKLAB_TO_LIN_SRGB_APPROX, LMS_TO_LIN_SRGB


def _check_unit(a: float, b: float) -> None:
    if round(a * a + b * b) != 1:
        raise ValueError(f"(a, b) must be normalized to unit length, got ({a}, {b})")
