"""
Composite color conversion and the error-returning boundary API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from chromatone.appearance.cam16 import CAM16
from chromatone.conversion.graph import find_path
from chromatone.conversion.rounding import round_color
from chromatone.conversion.spaces import OK_LIGHTNESS_SPACES, get_space_info, resolve_space
from chromatone.conversion.steps import ColorValue, components, step_convert
from chromatone.core.config import RGB_OUTPUT_SPACES, ColorSpace, ConvertOptions, Gamut
from chromatone.core.errors import ColorError, NoConversionPathError
from chromatone.utils.matrices import LIN_SRGB_TO_XYZ

logger = logging.getLogger(__name__)

SpaceLike = Union[ColorSpace, str]

_CAM16_SPACES = (ColorSpace.CAM16, ColorSpace.CAM16_UCS)
_REC709_LUMA = (0.2126, 0.7152, 0.0722)


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------


def convert_color(
    value: ColorValue,
    source: SpaceLike,
    target: SpaceLike,
    options: Optional[ConvertOptions] = None,
) -> ColorValue:
    """
    Convert ``value`` from ``source`` to ``target`` along the shortest path.

    Parameters
    ----------
    value : str or tuple of float
        Hex string for ``ColorSpace.HEX``, component tuple otherwise.
    source, target : ColorSpace or str
        Spaces (enum or string value).
    options : ConvertOptions, optional
        Rounding and CAM16 settings. Pass ``NO_ROUNDING`` (or
        ``options.unrounded()``) for intermediate math.

    Raises
    ------
    UnsupportedSpaceError
        Unknown space.
    NoConversionPathError
        The spaces are disconnected.
    InvalidColorError
        Malformed input value.
    """

    source = resolve_space(source)
    target = resolve_space(target)
    options = options or ConvertOptions()

    if source == target:
        return value

    path = find_path(source, target)
    if path is None:
        raise NoConversionPathError(source, target)

    # Display output of Oklab lightness outside (0, 1) is exact white or black.
    if options.round and source in OK_LIGHTNESS_SPACES and target in RGB_OUTPUT_SPACES:
        lightness = components(value)[0]
        if lightness >= 1.0 or lightness <= 0.0:
            return _display_extreme(lightness >= 1.0, target, options)

    model = CAM16(options.viewing_conditions) if any(s in _CAM16_SPACES for s in path) else None

    color = value
    for hop_from, hop_to in zip(path, path[1:]):
        color = step_convert(color, hop_from, hop_to, options, model)

    if options.round:
        color = round_color(color, target, options.precision)
    return color


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of ``convert``: the converted color or the error that stopped it."""

    color: Optional[ColorValue] = None
    error: Optional[ColorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def convert(
    value: ColorValue,
    source: SpaceLike,
    target: SpaceLike,
    options: Optional[ConvertOptions] = None,
) -> ConversionResult:
    """Boundary variant of ``convert_color`` returning a failure value instead of raising."""

    try:
        return ConversionResult(color=convert_color(value, source, target, options))
    except ColorError as exc:
        logger.warning("Conversion %s -> %s failed: %s", source, target, exc)
        return ConversionResult(error=exc)


@dataclass(frozen=True)
class Color:
    """A color value tagged with its space."""

    value: ColorValue
    space: ColorSpace

    def __post_init__(self) -> None:
        object.__setattr__(self, "space", resolve_space(self.space))
        if not isinstance(self.value, str):
            object.__setattr__(self, "value", tuple(self.value))

    def to(self, space: SpaceLike, options: Optional[ConvertOptions] = None) -> "Color":
        space = resolve_space(space)
        return Color(convert_color(self.value, self.space, space, options), space)


def convert_to_grayscale(
    value: ColorValue,
    source: SpaceLike = ColorSpace.LIN_SRGB,
    target: SpaceLike = ColorSpace.HEX,
    approx: bool = False,
    options: Optional[ConvertOptions] = None,
) -> ColorValue:
    """
    Gray color with the same luminance as ``value``, encoded in ``target``.

    Luminance comes from the Y row of the linear sRGB to XYZ matrix, or from
    the Rec. 709 weights when ``approx`` is set.
    """

    options = options or ConvertOptions()
    lin_rgb = convert_color(value, source, ColorSpace.LIN_SRGB, options.unrounded())
    weights = _REC709_LUMA if approx else tuple(float(w) for w in LIN_SRGB_TO_XYZ[1])
    y = sum(w * c for w, c in zip(weights, components(lin_rgb)))
    return convert_color((y, y, y), ColorSpace.LIN_SRGB, target, options)


def convert_to_lci(
    value: ColorValue,
    source: SpaceLike,
    options: Optional[ConvertOptions] = None,
) -> ColorValue:
    """Mixed ``(Lab L, CAM16 C, IPT hue)`` description of a color."""

    lightness = convert_color(value, source, ColorSpace.LAB, options)[0]
    chroma = convert_color(value, source, ColorSpace.CAM16, options)[1]
    hue = convert_color(value, source, ColorSpace.IPT_CH, options)[2]
    return lightness, chroma, hue


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------


def _display_extreme(white: bool, target: ColorSpace, options: ConvertOptions) -> ColorValue:
    level = 1.0 if white else 0.0
    linear = ColorSpace.LIN_DISPLAY_P3 if get_space_info(target).gamut == Gamut.DISPLAY_P3 else ColorSpace.LIN_SRGB
    return convert_color((level, level, level), linear, target, options)
