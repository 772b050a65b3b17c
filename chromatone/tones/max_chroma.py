"""
Recover chroma lost to gamut clipping without a visible color shift.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from chromatone.conversion.convert import convert_color
from chromatone.core.config import NO_ROUNDING, ColorSpace, DeltaEMetric, Gamut
from chromatone.distance.metric_factory import create_delta_e
from chromatone.gamut.fitting import MAX_BISECTION_STEPS, fit_chroma_to_gamut
from chromatone.gamut.membership import GamutLike
from chromatone.utils.numeric import EPSILON, round_to

logger = logging.getLogger(__name__)

# Digits the difference is rounded to before comparing with the threshold
_JND_DIGITS = {DeltaEMetric.CIEDE2000: 1, DeltaEMetric.OK: 3}


def find_max_chroma(
    oklch: Sequence[float],
    gamut: GamutLike = Gamut.SRGB,
    metric: DeltaEMetric = DeltaEMetric.CIEDE2000,
    chroma_digits: int = 5,
    max_chroma: float = 0.4,
    jnd_delta_e2000: float = 0.2,
    jnd_delta_e_ok: float = 0.002,
) -> float:
    """
    Largest Oklch chroma indistinguishable from the gamut-clipped color.

    The color is first clipped with ``fit_chroma_to_gamut``; chroma is then
    bisected upward between the clipped chroma and ``max_chroma``, accepting
    every sample whose difference from the clipped reference stays below the
    just-noticeable difference of ``metric`` (CIEDE2000 or OK).

    Returns
    -------
    float
        Chroma, never below the clipped chroma.
    """

    if metric not in _JND_DIGITS:
        raise ValueError(f"Metric {metric} has no just-noticeable difference threshold")

    delta_e = create_delta_e(metric)
    jnd = jnd_delta_e2000 if metric == DeltaEMetric.CIEDE2000 else jnd_delta_e_ok
    jnd_digits = _JND_DIGITS[metric]

    reference = fit_chroma_to_gamut(oklch, gamut, chroma_digits)
    L, lo, H = reference
    reference_oklab = convert_color(reference, ColorSpace.OKLCH, ColorSpace.OKLAB, NO_ROUNDING)

    h = math.radians(H)
    a_unit, b_unit = math.cos(h), math.sin(h)
    precision = 10.0 ** -chroma_digits

    hi = max_chroma
    for _ in range(MAX_BISECTION_STEPS):
        if hi - lo <= precision + EPSILON:
            break
        mid = round_to((lo + hi) / 2.0, chroma_digits)
        sample = (L, mid * a_unit, mid * b_unit)
        distance = round_to(delta_e(reference_oklab, sample, ColorSpace.OKLAB), jnd_digits)
        if distance < jnd:
            lo = mid
        else:
            hi = mid

    logger.debug("Max chroma %.5f (clipped %.5f) for L=%.5f h=%.2f", lo, reference[1], L, H)
    return lo
