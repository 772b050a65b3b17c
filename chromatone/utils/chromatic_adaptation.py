"""
Bradford chromatic adaptation between white points.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from chromatone.utils.matrices import BRADFORD, BRADFORD_INV
from chromatone.utils.numeric import mat_vec


def xyy_to_xyz(x: float, y: float, Y: float = 1.0) -> Tuple[float, float, float]:
    """Convert chromaticity coordinates (and luminance) to XYZ."""

    return x * Y / y, Y, (1.0 - x - y) * Y / y


def chromatic_adaptation_matrices(
    white_from: Sequence[float],
    white_to: Sequence[float],
    *,
    from_xyy: bool = False,
    to_xyy: bool = False,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Bradford adaptation matrices between two white points.

    White points are XYZ triples, or ``(x, y)`` / ``(x, y, Y)`` chromaticities
    when the matching ``*_xyy`` flag is set.

    Returns
    -------
    forward, inverse : np.ndarray
        3x3 matrices mapping XYZ under ``white_from`` to XYZ under ``white_to``
        and back.
    """

    src = np.asarray(xyy_to_xyz(*white_from) if from_xyy else white_from, dtype=np.float64)
    dst = np.asarray(xyy_to_xyz(*white_to) if to_xyy else white_to, dtype=np.float64)

    cone_src = BRADFORD @ src
    cone_dst = BRADFORD @ dst
    scale = np.diag(cone_dst / cone_src)

    forward = BRADFORD_INV @ scale @ BRADFORD
    return forward, np.linalg.inv(forward)


def adapt_xyz(
    xyz: Sequence[float],
    white_from: Sequence[float],
    white_to: Sequence[float],
) -> Tuple[float, ...]:
    """Adapt one XYZ color from ``white_from`` to ``white_to``."""

    forward, _ = chromatic_adaptation_matrices(white_from, white_to)
    return mat_vec(forward, xyz)
