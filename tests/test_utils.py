"""
Tests for numeric helpers, cubic solvers and chromatic adaptation.
"""

from __future__ import annotations

import numpy as np
import pytest

from chromatone.utils import (
    adapt_xyz,
    chromatic_adaptation_matrices,
    floor_to,
    hue_difference,
    lerp,
    normalize_hue,
    round_to,
    solve_cubic,
    solve_cubic_trig,
    solve_lightness_cubic,
)
from chromatone.utils.matrices import (
    LIN_SRGB_TO_XYZ,
    LMS3_TO_OKLAB,
    OKLAB_TO_LMS3,
    WHITE_D50,
    WHITE_D65,
    XYZ_TO_LIN_SRGB,
)


@pytest.mark.parametrize("solver", [solve_cubic, solve_cubic_trig])
def test_three_real_roots(solver) -> None:
    # (x - 1)(x - 2)(x - 3)
    roots = solver(-6.0, 11.0, -6.0)
    np.testing.assert_allclose(roots, (3.0, 2.0, 1.0), atol=1e-12)


@pytest.mark.parametrize("solver", [solve_cubic, solve_cubic_trig])
def test_single_real_root(solver) -> None:
    roots = solver(0.0, 0.0, -1.0)
    assert len(roots) == 1
    assert roots[0] == pytest.approx(1.0)


def test_lightness_cubic_is_clamped() -> None:
    assert solve_lightness_cubic(0.0, 0.0, -0.125) == pytest.approx(0.5)
    assert solve_lightness_cubic(0.0, 0.0, -8.0) == 1.0


def test_bradford_identity_for_equal_whites() -> None:
    forward, inverse = chromatic_adaptation_matrices(WHITE_D65, WHITE_D65)
    np.testing.assert_allclose(forward, np.eye(3), atol=1e-9)
    np.testing.assert_allclose(inverse, np.eye(3), atol=1e-9)


def test_bradford_maps_white_to_white() -> None:
    forward, inverse = chromatic_adaptation_matrices(WHITE_D65, WHITE_D50)
    np.testing.assert_allclose(forward @ WHITE_D65, WHITE_D50, atol=1e-9)
    np.testing.assert_allclose(forward @ inverse, np.eye(3), atol=1e-9)
    np.testing.assert_allclose(adapt_xyz(WHITE_D65, WHITE_D65, WHITE_D50), WHITE_D50, atol=1e-9)


def test_bradford_accepts_chromaticities() -> None:
    forward, _ = chromatic_adaptation_matrices((0.3127, 0.3290), (0.3457, 0.3585), from_xyy=True, to_xyy=True)
    np.testing.assert_allclose(forward @ WHITE_D65, WHITE_D50, atol=1e-6)


def test_matrix_pairs_are_inverse() -> None:
    np.testing.assert_allclose(LIN_SRGB_TO_XYZ @ XYZ_TO_LIN_SRGB, np.eye(3), atol=1e-6)
    np.testing.assert_allclose(OKLAB_TO_LMS3 @ LMS3_TO_OKLAB, np.eye(3), atol=1e-6)


def test_matrices_are_read_only() -> None:
    with pytest.raises(ValueError):
        LIN_SRGB_TO_XYZ[0, 0] = 1.0


def test_rounding_helpers() -> None:
    assert round_to(1.005, 2) == 1.01
    assert round_to(-0.0000001, 3) == 0.0
    assert str(round_to(-0.0000001, 3)) == "0.0"
    assert floor_to(0.123459, 5) == 0.12345
    assert round_to(float("nan"), 2) != round_to(float("nan"), 2)


def test_angular_helpers() -> None:
    assert normalize_hue(-30.0) == 330.0
    assert normalize_hue(720.0) == 0.0
    assert hue_difference(10.0, 350.0) == pytest.approx(20.0)
    assert hue_difference(350.0, 10.0) == pytest.approx(-20.0)


def test_lerp_clamps_amount() -> None:
    assert lerp(0.0, 10.0, 0.5) == 5.0
    assert lerp(0.0, 10.0, 2.0) == 10.0
    assert lerp(0.0, 10.0, -1.0) == 0.0
