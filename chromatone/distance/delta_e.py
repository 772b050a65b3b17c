"""
Perceptual color-difference formulas.

Each metric works in its native space (Lab, Oklab or JzCzHz). Colors given in
any other space are converted there first, without rounding.
"""

from __future__ import annotations

import math
from typing import Tuple, Union

from chromatone.conversion.convert import convert_color
from chromatone.conversion.spaces import resolve_space
from chromatone.conversion.steps import ColorValue, components
from chromatone.core.config import NO_ROUNDING, ColorSpace

SpaceLike = Union[ColorSpace, str]

_TWENTY_FIVE_POW_7 = 25.0 ** 7


def delta_e_1976(reference: ColorValue, sample: ColorValue, space: SpaceLike = ColorSpace.LAB) -> float:
    """Euclidean distance in CIELab."""

    (L1, a1, b1), (L2, a2, b2) = _in_space(reference, sample, space, ColorSpace.LAB)
    return math.sqrt((L2 - L1) ** 2 + (a2 - a1) ** 2 + (b2 - b1) ** 2)


def delta_e_2000(
    reference: ColorValue,
    sample: ColorValue,
    space: SpaceLike = ColorSpace.LAB,
    k_lch: Tuple[float, float, float] = (1.0, 1.0, 1.0),
) -> float:
    """
    CIEDE2000 color difference.

    Parameters
    ----------
    reference, sample : ColorValue
        Colors in ``space``.
    space : ColorSpace or str
        Space of both colors; converted to Lab when different.
    k_lch : tuple of float
        Parametric weighting factors (kL, kC, kH). The standard values are
        all 1; (0.67, 0.67, 0.67) brings the scale close to CIE76.
    """

    kL, kC, kH = k_lch
    (L1, a1, b1), (L2, a2, b2) = _in_space(reference, sample, space, ColorSpace.LAB)

    # a* asymmetry factor from the mean chroma
    c_bar = (math.hypot(a1, b1) + math.hypot(a2, b2)) / 2.0
    c_bar7 = c_bar ** 7
    G = 0.5 * (1.0 - math.sqrt(c_bar7 / (c_bar7 + _TWENTY_FIVE_POW_7)))

    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2
    c1p = math.hypot(a1p, b1)
    c2p = math.hypot(a2p, b2)
    h1p = math.degrees(math.atan2(b1, a1p)) % 360.0
    h2p = math.degrees(math.atan2(b2, a2p)) % 360.0

    dL = L2 - L1
    dC = c2p - c1p

    h_diff = h2p - h1p
    h_sum = h1p + h2p
    chroma_product = c1p * c2p
    if chroma_product == 0:
        dh = 0.0
    elif abs(h_diff) <= 180.0:
        dh = h_diff
    elif h_diff > 180.0:
        dh = h_diff - 360.0
    else:
        dh = h_diff + 360.0
    dH = 2.0 * math.sqrt(chroma_product) * math.sin(math.radians(dh) / 2.0)

    L_mean = (L1 + L2) / 2.0
    C_mean = (c1p + c2p) / 2.0
    if chroma_product == 0:
        h_mean = h_sum
    elif abs(h_diff) <= 180.0:
        h_mean = h_sum / 2.0
    elif h_sum < 360.0:
        h_mean = (h_sum + 360.0) / 2.0
    else:
        h_mean = (h_sum - 360.0) / 2.0

    lsq = (L_mean - 50.0) ** 2
    SL = 1.0 + 0.015 * lsq / math.sqrt(20.0 + lsq)
    SC = 1.0 + 0.045 * C_mean
    T = (
        1.0
        - 0.17 * math.cos(math.radians(h_mean - 30.0))
        + 0.24 * math.cos(math.radians(2.0 * h_mean))
        + 0.32 * math.cos(math.radians(3.0 * h_mean + 6.0))
        - 0.20 * math.cos(math.radians(4.0 * h_mean - 63.0))
    )
    SH = 1.0 + 0.015 * C_mean * T

    # Rotation term for the blue region (hue 225..315)
    d_theta = 30.0 * math.exp(-(((h_mean - 275.0) / 25.0) ** 2))
    c_mean7 = C_mean ** 7
    RC = 2.0 * math.sqrt(c_mean7 / (c_mean7 + _TWENTY_FIVE_POW_7))
    RT = -math.sin(math.radians(2.0 * d_theta)) * RC

    l_term = dL / (kL * SL)
    c_term = dC / (kC * SC)
    h_term = dH / (kH * SH)
    return math.sqrt(l_term ** 2 + c_term ** 2 + h_term ** 2 + RT * c_term * h_term)


def delta_e_ok(reference: ColorValue, sample: ColorValue, space: SpaceLike = ColorSpace.OKLAB) -> float:
    """Euclidean distance in Oklab (about 100 times smaller than CIE76)."""

    (L1, a1, b1), (L2, a2, b2) = _in_space(reference, sample, space, ColorSpace.OKLAB)
    return math.sqrt((L1 - L2) ** 2 + (a1 - a2) ** 2 + (b1 - b2) ** 2)


def delta_e_z(reference: ColorValue, sample: ColorValue, space: SpaceLike = ColorSpace.JZCZHZ) -> float:
    """JzCzHz difference with the polar hue term ``2 Cz1 Cz2 (1 - cos dh)``."""

    (J1, C1, h1), (J2, C2, h2) = _in_space(reference, sample, space, ColorSpace.JZCZHZ)
    dH_sq = 2.0 * C1 * C2 * (1.0 - math.cos(math.radians(h2 - h1)))
    return math.sqrt((J2 - J1) ** 2 + (C2 - C1) ** 2 + dH_sq)


def _in_space(reference: ColorValue, sample: ColorValue, space: SpaceLike, native: ColorSpace):
    space = resolve_space(space)
    if space != native:
        reference = convert_color(reference, space, native, NO_ROUNDING)
        sample = convert_color(sample, space, native, NO_ROUNDING)
    return components(reference), components(sample)
