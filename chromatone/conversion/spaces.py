"""
Color space registry: component layout and rounding class of every space.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from chromatone.core.config import ColorSpace, Gamut
from chromatone.core.errors import UnsupportedSpaceError


class RoundingClass(Enum):
    """Which precision policy applies to a space's components."""

    NONE = "none"              # XYZ family: never rounded
    HEX = "hex"                # string, already quantised
    SRGB = "srgb"              # 0..255 components
    LINEAR_RGB = "linear_rgb"  # linear sRGB / linear Display-P3
    DISPLAY_P3 = "display_p3"  # gamma-encoded Display-P3
    RECT = "rect"              # lightness + two opponent axes
    POLAR = "polar"            # lightness + chroma + hue


@dataclass(frozen=True)
class ColorSpaceInfo:
    """Static description of one color space."""

    space: ColorSpace
    components: Tuple[str, ...]
    rounding: RoundingClass
    hue_index: Optional[int] = None  # index of the circular component
    gamut: Optional[Gamut] = None    # display gamut this encoding belongs to

    @property
    def is_polar(self) -> bool:
        return self.hue_index is not None


def _info(space, components, rounding, hue_index=None, gamut=None) -> ColorSpaceInfo:
    return ColorSpaceInfo(space, tuple(components.split()), rounding, hue_index, gamut)


_CS = ColorSpace
_R = RoundingClass

COLOR_SPACES: Mapping[ColorSpace, ColorSpaceInfo] = MappingProxyType(
    {
        _CS.HEX: _info(_CS.HEX, "hex", _R.HEX, gamut=Gamut.SRGB),
        _CS.SRGB: _info(_CS.SRGB, "r g b", _R.SRGB, gamut=Gamut.SRGB),
        _CS.LIN_SRGB: _info(_CS.LIN_SRGB, "r g b", _R.LINEAR_RGB, gamut=Gamut.SRGB),
        _CS.XYZ: _info(_CS.XYZ, "x y z", _R.NONE),
        _CS.LAB: _info(_CS.LAB, "l a b", _R.RECT),
        _CS.LCH: _info(_CS.LCH, "l c h", _R.POLAR, 2),
        _CS.OKLAB: _info(_CS.OKLAB, "l a b", _R.RECT),
        _CS.OKLCH: _info(_CS.OKLCH, "l c h", _R.POLAR, 2),
        _CS.LIN_DISPLAY_P3: _info(_CS.LIN_DISPLAY_P3, "r g b", _R.LINEAR_RGB, gamut=Gamut.DISPLAY_P3),
        _CS.DISPLAY_P3: _info(_CS.DISPLAY_P3, "r g b", _R.DISPLAY_P3, gamut=Gamut.DISPLAY_P3),
        _CS.OKLAB_GAMMA: _info(_CS.OKLAB_GAMMA, "l a b", _R.RECT),
        _CS.OKLCH_GAMMA: _info(_CS.OKLCH_GAMMA, "l c h", _R.POLAR, 2),
        _CS.IPT: _info(_CS.IPT, "i p t", _R.RECT),
        _CS.IPT_CH: _info(_CS.IPT_CH, "i c h", _R.POLAR, 2),
        _CS.XYZ_IPT: _info(_CS.XYZ_IPT, "x y z", _R.NONE),
        _CS.XYZ_CIE: _info(_CS.XYZ_CIE, "x y z", _R.NONE),
        _CS.JZAZBZ: _info(_CS.JZAZBZ, "jz az bz", _R.RECT),
        _CS.JZCZHZ: _info(_CS.JZCZHZ, "jz cz hz", _R.POLAR, 2),
        _CS.CAM16: _info(_CS.CAM16, "j c h m s q", _R.POLAR, 2),
        _CS.CAM16_UCS: _info(_CS.CAM16_UCS, "j m h a b c", _R.POLAR, 2),
        _CS.ICTCP: _info(_CS.ICTCP, "i ct cp", _R.RECT),
        _CS.ICTCP_CH: _info(_CS.ICTCP_CH, "i c h", _R.POLAR, 2),
        _CS.OSA_UCS: _info(_CS.OSA_UCS, "l j g", _R.RECT),
        _CS.OSA_UCS_CH: _info(_CS.OSA_UCS_CH, "l c h", _R.POLAR, 2),
    }
)

# Oklab-family spaces whose lightness saturates at 0 (black) and 1 (white)
OK_LIGHTNESS_SPACES = (ColorSpace.OKLAB, ColorSpace.OKLCH)


def resolve_space(space: Union[ColorSpace, str]) -> ColorSpace:
    """Accept a ``ColorSpace`` or its string value."""

    if isinstance(space, ColorSpace):
        return space
    if isinstance(space, str):
        try:
            return ColorSpace(space.lower())
        except ValueError:
            pass
    raise UnsupportedSpaceError(space)


def get_space_info(space: Union[ColorSpace, str]) -> ColorSpaceInfo:
    return COLOR_SPACES[resolve_space(space)]


def resolve_gamut(gamut: Union[Gamut, ColorSpace, str]) -> Gamut:
    """
    Map a gamut selector to a ``Gamut``.

    Accepts a ``Gamut``, an RGB encoding of that gamut (sRGB, hex, linear
    sRGB, Display-P3, linear Display-P3) or the string value of either.
    """

    if isinstance(gamut, Gamut):
        return gamut
    if isinstance(gamut, str):
        try:
            return Gamut(gamut.lower())
        except ValueError:
            gamut = resolve_space(gamut)
    info = COLOR_SPACES.get(gamut) if isinstance(gamut, ColorSpace) else None
    if info is None or info.gamut is None:
        raise UnsupportedSpaceError(gamut, f"Not a display gamut: {gamut!r}")
    return info.gamut
