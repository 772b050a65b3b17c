"""chromatone.

Color conversion among two dozen color spaces, perceptual gamut mapping and
Material-style tone palettes built in Oklch.
"""

from chromatone.appearance.cam16 import CAM16, DEFAULT_VIEWING_CONDITIONS, ViewingConditions
from chromatone.conversion.convert import (
    Color,
    ConversionResult,
    convert,
    convert_color,
    convert_to_grayscale,
    convert_to_lci,
)
from chromatone.core.config import (
    ChromaPolicy,
    ColorSpace,
    ConvertOptions,
    DeltaEMetric,
    Gamut,
    PaletteConfig,
    PaletteRole,
    Precision,
)
from chromatone.core.errors import (
    ColorError,
    InvalidColorError,
    NoConversionPathError,
    UnsupportedSpaceError,
)
from chromatone.core.pipeline import TonalPalette, ToneEntry, TonePaletteBuilder, build_palettes
from chromatone.gamut import adaptive_gamut_clip, fit_chroma_to_gamut, is_in_gamut

__all__ = [
    "Color",
    "ConversionResult",
    "convert",
    "convert_color",
    "convert_to_grayscale",
    "convert_to_lci",
    "ColorSpace",
    "Gamut",
    "DeltaEMetric",
    "PaletteRole",
    "ChromaPolicy",
    "Precision",
    "ConvertOptions",
    "PaletteConfig",
    "ViewingConditions",
    "DEFAULT_VIEWING_CONDITIONS",
    "CAM16",
    "ColorError",
    "InvalidColorError",
    "NoConversionPathError",
    "UnsupportedSpaceError",
    "TonePaletteBuilder",
    "TonalPalette",
    "ToneEntry",
    "build_palettes",
    "adaptive_gamut_clip",
    "fit_chroma_to_gamut",
    "is_in_gamut",
]

__version__ = "1.0.0"
