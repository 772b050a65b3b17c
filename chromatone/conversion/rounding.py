"""
Final rounding pass applied to composite conversion results.
"""

from __future__ import annotations

from typing import Union

from chromatone.conversion.spaces import RoundingClass, get_space_info
from chromatone.conversion.steps import ColorValue
from chromatone.core.config import ColorSpace, Precision
from chromatone.utils.numeric import floor_to, normalize_hue, round_to


def round_color(
    value: ColorValue,
    space: Union[ColorSpace, str],
    precision: Precision = Precision(),
) -> ColorValue:
    """
    Round ``value`` with the policy of its space's rounding class.

    Lightness and chroma are floored so a rounded color never drifts out of
    gamut; hue and opponent axes are rounded half up. Components beyond the
    first three (CAM16 extras) are left untouched.
    """

    rounding = get_space_info(space).rounding
    if rounding in (RoundingClass.NONE, RoundingClass.HEX) or isinstance(value, str):
        return value

    head = tuple(value[:3])
    tail = tuple(value[3:])

    if rounding == RoundingClass.POLAR:
        L, C, h = head
        head = (
            floor_to(L, precision.lightness),
            floor_to(C, precision.chroma),
            normalize_hue(round_to(h, precision.hue)),
        )
    elif rounding == RoundingClass.RECT:
        L, a, b = head
        head = (
            floor_to(L, precision.lightness),
            round_to(a, precision.ab),
            round_to(b, precision.ab),
        )
    else:
        digits = {
            RoundingClass.SRGB: precision.srgb,
            RoundingClass.LINEAR_RGB: precision.lin_rgb,
            RoundingClass.DISPLAY_P3: precision.display_p3,
        }[rounding]
        head = tuple(round_to(c, digits) for c in head)

    return head + tail
