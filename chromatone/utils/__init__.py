"""Numeric primitives: coefficient matrices, rounding, cubic solvers."""

from chromatone.utils.chromatic_adaptation import adapt_xyz, chromatic_adaptation_matrices
from chromatone.utils.cubic import solve_cubic, solve_cubic_trig, solve_lightness_cubic
from chromatone.utils.numeric import (
    EPSILON,
    clamp,
    floor_to,
    hue_difference,
    lerp,
    normalize_hue,
    round_to,
)

__all__ = [
    "adapt_xyz",
    "chromatic_adaptation_matrices",
    "solve_cubic",
    "solve_cubic_trig",
    "solve_lightness_cubic",
    "EPSILON",
    "clamp",
    "floor_to",
    "hue_difference",
    "lerp",
    "normalize_hue",
    "round_to",
]
