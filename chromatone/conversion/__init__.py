"""Color space registry, conversion graph and composite conversion."""

from chromatone.conversion.convert import (
    Color,
    ConversionResult,
    convert,
    convert_color,
    convert_to_grayscale,
    convert_to_lci,
)
from chromatone.conversion.graph import CONVERSION_GRAPH, find_path
from chromatone.conversion.rounding import round_color
from chromatone.conversion.spaces import (
    COLOR_SPACES,
    ColorSpaceInfo,
    RoundingClass,
    get_space_info,
    resolve_gamut,
    resolve_space,
)
from chromatone.conversion.steps import ColorValue, step_convert

__all__ = [
    "Color",
    "ColorValue",
    "ConversionResult",
    "convert",
    "convert_color",
    "convert_to_grayscale",
    "convert_to_lci",
    "CONVERSION_GRAPH",
    "find_path",
    "round_color",
    "COLOR_SPACES",
    "ColorSpaceInfo",
    "RoundingClass",
    "get_space_info",
    "resolve_gamut",
    "resolve_space",
    "step_convert",
]
