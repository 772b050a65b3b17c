"""
WCAG 2.x relative luminance and contrast ratio.
"""

from __future__ import annotations

from typing import Union

from chromatone.conversion.convert import convert_color
from chromatone.conversion.steps import ColorValue, components
from chromatone.core.config import NO_ROUNDING, ColorSpace
from chromatone.utils.matrices import LIN_SRGB_TO_XYZ
from chromatone.utils.numeric import round_to

_WCAG_LUMA = (0.2126, 0.7152, 0.0722)


def relative_luminance(
    value: ColorValue,
    space: Union[ColorSpace, str] = ColorSpace.SRGB,
    approx: bool = True,
    digits: int = 2,
) -> float:
    """
    Relative luminance (Y of D65 XYZ, 0..1) rounded to ``digits``.

    ``approx`` uses the WCAG weights instead of the exact Y row of the linear
    sRGB to XYZ matrix.
    """

    lin_rgb = components(convert_color(value, space, ColorSpace.LIN_SRGB, NO_ROUNDING))
    weights = _WCAG_LUMA if approx else tuple(float(w) for w in LIN_SRGB_TO_XYZ[1])
    return round_to(sum(w * c for w, c in zip(weights, lin_rgb)), digits)


def contrast_ratio(luminance_1: float, luminance_2: float, digits: int = 2) -> float:
    """WCAG contrast ratio (1..21) between two relative luminances."""

    lighter = max(luminance_1, luminance_2)
    darker = min(luminance_1, luminance_2)
    return round_to((lighter + 0.05) / (darker + 0.05), digits)
