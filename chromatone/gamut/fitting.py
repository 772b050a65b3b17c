"""
Chroma bisection into a display gamut, with and without gray-lightness
preservation.

Gray-preserving fits keep the luminance of the gray twin ``(L, 0, h)``: for a
fixed hue, Y of an Oklch color is a cubic in L with chroma-dependent
coefficients, so the corrected lightness is the largest root of
``L^3 + k1*C*L^2 + k2*C^2*L + k3*C^3 - Y_target = 0``.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from chromatone.conversion.convert import convert_color
from chromatone.conversion.steps import components
from chromatone.core.config import NO_ROUNDING, ColorSpace, Gamut
from chromatone.gamut.membership import GamutLike, is_in_gamut
from chromatone.utils.cubic import solve_lightness_cubic
from chromatone.utils.matrices import LMS_OKLAB_TO_XYZ, OKLAB_TO_LMS3
from chromatone.utils.numeric import EPSILON, clamp, floor_to, round_to

logger = logging.getLogger(__name__)

Oklch = Tuple[float, float, float]

# Smallest luminance step that still changes an 8-bit gray
Y_TOLERANCE = 2.0 ** -13

MAX_BISECTION_STEPS = 64

WHITE_OKLCH: Oklch = (1.0, 0.0, 0.0)
BLACK_OKLCH: Oklch = (0.0, 0.0, 0.0)


def fit_chroma_to_gamut(oklch: Sequence[float], gamut: GamutLike = Gamut.SRGB, digits: int = 5) -> Oklch:
    """
    Reduce chroma until the color fits ``gamut``; lightness and hue are kept.

    Colors already inside the gamut are returned unchanged. Lightness at or
    beyond 1 (0) gives white (black) without searching.
    """

    if is_in_gamut(oklch, ColorSpace.OKLCH, gamut):
        return components(oklch)

    L, C, H = components(oklch)
    if L >= 1.0:
        return WHITE_OKLCH
    if L <= 0.0:
        return BLACK_OKLCH

    hue = abs(H) % 360.0
    a_unit, b_unit = _unit_ab(hue)
    precision = 10.0 ** -digits

    lo, hi = 0.0, C
    for _ in range(MAX_BISECTION_STEPS):
        if hi - lo <= precision + EPSILON:
            break
        mid = round_to((lo + hi) / 2.0, digits)
        if is_in_gamut((L, mid * a_unit, mid * b_unit), ColorSpace.OKLAB, gamut):
            lo = mid
        else:
            hi = mid

    return L, lo, hue


def correct_lightness_to_gray(oklch: Sequence[float], target_lightness: Optional[float] = None) -> Oklch:
    """
    Adjust L so the color has the luminance of the gray ``(target, 0, 0)``.

    ``target_lightness`` defaults to the color's own lightness. Colors whose
    luminance is already within ``Y_TOLERANCE`` are returned unchanged.
    """

    L, C, H = components(oklch)
    target = L if target_lightness is None else clamp(0.0, target_lightness, 1.0)
    y_target = target ** 3
    y_current = _luminance(L, C, H)

    if abs(y_target - y_current) <= Y_TOLERANCE:
        return L, C, H

    return _solve_gray_lightness(C, _gray_cubic_coefficients(H), y_target), C, H


def fit_chroma_to_gamut_preserving_gray(
    oklch: Sequence[float],
    gamut: GamutLike = Gamut.SRGB,
    target_lightness: float = 0.0,
    lightness_digits: int = 5,
    chroma_digits: int = 5,
) -> Oklch:
    """
    Fit chroma into ``gamut`` while keeping the gray-equivalent lightness.

    Parameters
    ----------
    oklch : sequence of float
        Color to fit.
    gamut : Gamut, ColorSpace or str
        Target gamut.
    target_lightness : float
        Lightness of the gray twin to preserve; ``0`` means the color's own
        lightness.
    lightness_digits, chroma_digits : int
        Decimal digits kept (floored) for lightness and chroma.

    Notes
    -----
    Lightness is re-solved after every chroma probe. When a corrected sample
    falls outside the gamut, the last in-gamut lightness is kept instead.
    """

    L, C, H = components(oklch)
    if L >= 1.0:
        return WHITE_OKLCH
    if L <= 0.0:
        return BLACK_OKLCH

    hue = abs(H) % 360.0
    a_unit, b_unit = _unit_ab(hue)
    coeffs = _gray_cubic_coefficients(hue)
    precision = 10.0 ** -chroma_digits

    target = clamp(0.0, target_lightness, 1.0)
    y_target = (L if target == 0 else target) ** 3

    def corrected(chroma: float) -> float:
        if abs(_luminance(L, chroma, hue) - y_target) <= Y_TOLERANCE:
            return L
        return floor_to(_solve_gray_lightness(chroma, coeffs, y_target), lightness_digits)

    L_new = corrected(C)
    if is_in_gamut((L_new, C, hue), ColorSpace.OKLCH, gamut):
        return L_new, C, hue

    lo, hi = 0.0, C
    L_prev = L
    for _ in range(MAX_BISECTION_STEPS):
        if hi - lo <= precision + EPSILON:
            break
        mid = floor_to((lo + hi) / 2.0, chroma_digits)
        L_new = corrected(mid)
        if is_in_gamut((L_new, mid * a_unit, mid * b_unit), ColorSpace.OKLAB, gamut):
            lo = mid
            L_prev = L_new
        else:
            hi = mid

    if is_in_gamut((L_new, lo, hue), ColorSpace.OKLCH, gamut):
        return L_new, lo, hue

    logger.debug("Gray fit kept previous in-gamut lightness %.5f (last probe %.5f)", L_prev, L_new)
    return L_prev, lo, hue


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------


def _unit_ab(hue: float) -> Tuple[float, float]:
    h = math.radians(hue)
    return math.cos(h), math.sin(h)


def _luminance(L: float, C: float, H: float) -> float:
    return convert_color((L, C, H), ColorSpace.OKLCH, ColorSpace.XYZ, NO_ROUNDING)[1]


def _gray_cubic_coefficients(hue: float) -> Tuple[float, float, float]:
    """Coefficients of ``C*L^2``, ``C^2*L`` and ``C^3`` in Y(L, C) for ``hue``."""

    d_lms = OKLAB_TO_LMS3[:, 1:] @ np.asarray(_unit_ab(hue))
    y_row = LMS_OKLAB_TO_XYZ[1]
    return (
        3.0 * float(y_row @ d_lms),
        3.0 * float(y_row @ d_lms ** 2),
        float(y_row @ d_lms ** 3),
    )


def _solve_gray_lightness(chroma: float, coeffs: Tuple[float, float, float], y_target: float) -> float:
    k_cl2, k_c2l, k_c3 = coeffs
    return solve_lightness_cubic(k_cl2 * chroma, k_c2l * chroma ** 2, k_c3 * chroma ** 3 - y_target)
