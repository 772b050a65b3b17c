"""
Lightness scale conversion between CIELab (0..100) and Oklab (0..1).

Both scales are cube-root compressions of luminance, so for gray colors the
mapping is exact: Oklab L = cbrt(Y) and Lab L = 116 cbrt(Y) - 16 above the
linear toe.
"""

from __future__ import annotations

from chromatone.utils.numeric import cbrt, round_to

_KAPPA = 24389.0 / 27.0
_KAPPA_EPSILON = 8.0          # kappa * epsilon
_EPSILON_CBRT = 6.0 / 29.0
_KAPPA_CBRT_INV = 3.0 / 29.0


def lab_to_oklab_lightness(lightness: float, digits: int = 5, round: bool = True) -> float:
    """Lab lightness (tone) to Oklab lightness."""

    if lightness > _KAPPA_EPSILON:
        ok_lightness = (lightness + 16.0) / 116.0
    else:
        ok_lightness = _KAPPA_CBRT_INV * cbrt(lightness)
    return round_to(ok_lightness, digits) if round else ok_lightness


def oklab_to_lab_lightness(lightness: float, digits: int = 3, round: bool = True) -> float:
    """Oklab lightness to Lab lightness (tone)."""

    if lightness > _EPSILON_CBRT:
        lab_lightness = 116.0 * lightness - 16.0
    else:
        lab_lightness = _KAPPA * lightness ** 3
    return round_to(lab_lightness, digits) if round else lab_lightness
