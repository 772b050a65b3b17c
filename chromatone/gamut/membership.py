"""
Gamut membership tests in linear RGB.
"""

from __future__ import annotations

from typing import Union

from chromatone.conversion.convert import convert_color
from chromatone.conversion.spaces import resolve_gamut
from chromatone.conversion.steps import ColorValue, components
from chromatone.core.config import NO_ROUNDING, ColorSpace, Gamut

GamutLike = Union[Gamut, ColorSpace, str]

_LINEAR_SPACES = {
    Gamut.SRGB: ColorSpace.LIN_SRGB,
    Gamut.DISPLAY_P3: ColorSpace.LIN_DISPLAY_P3,
}


def gamut_from_space(space: GamutLike) -> Gamut:
    """Gamut of an RGB encoding (sRGB, hex, Display-P3 and their linear forms)."""

    return resolve_gamut(space)


def linear_space(gamut: GamutLike) -> ColorSpace:
    """Linear RGB space whose unit cube is ``gamut``."""

    return _LINEAR_SPACES[resolve_gamut(gamut)]


def is_in_gamut(
    value: ColorValue,
    space: Union[ColorSpace, str] = ColorSpace.OKLCH,
    gamut: GamutLike = Gamut.SRGB,
) -> bool:
    """
    True when ``value`` lies inside ``gamut``.

    The test runs in linear RGB, so no transfer function is involved: every
    channel must be within [0, 1].
    """

    rgb = components(convert_color(value, space, linear_space(gamut), NO_ROUNDING))
    return all(0.0 <= c <= 1.0 for c in rgb)
