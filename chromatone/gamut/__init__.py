"""Gamut membership, chroma fitting and adaptive clipping."""

from chromatone.gamut.clipping import adaptive_gamut_clip, clip_along_projection_line
from chromatone.gamut.cusp import (
    CuspPoint,
    find_cusp,
    find_gamut_intersection,
    find_max_saturation,
    normalize_ab,
)
from chromatone.gamut.fitting import (
    correct_lightness_to_gray,
    fit_chroma_to_gamut,
    fit_chroma_to_gamut_preserving_gray,
)
from chromatone.gamut.membership import gamut_from_space, is_in_gamut, linear_space

__all__ = [
    "adaptive_gamut_clip",
    "clip_along_projection_line",
    "CuspPoint",
    "find_cusp",
    "find_gamut_intersection",
    "find_max_saturation",
    "normalize_ab",
    "correct_lightness_to_gray",
    "fit_chroma_to_gamut",
    "fit_chroma_to_gamut_preserving_gray",
    "gamut_from_space",
    "is_in_gamut",
    "linear_space",
]
