"""Configuration and error types shared across chromatone."""

from chromatone.core.config import (
    DEFAULT_TONES,
    NO_ROUNDING,
    RGB_OUTPUT_SPACES,
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

__all__ = [
    "ColorSpace",
    "Gamut",
    "DeltaEMetric",
    "PaletteRole",
    "ChromaPolicy",
    "Precision",
    "ConvertOptions",
    "PaletteConfig",
    "NO_ROUNDING",
    "RGB_OUTPUT_SPACES",
    "DEFAULT_TONES",
    "ColorError",
    "InvalidColorError",
    "NoConversionPathError",
    "UnsupportedSpaceError",
]
