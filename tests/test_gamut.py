"""
Tests for gamut membership, chroma fitting, cusp geometry and clipping.
"""

from __future__ import annotations

import pytest

from chromatone.conversion import convert_color
from chromatone.core.config import NO_ROUNDING, ColorSpace, Gamut
from chromatone.core.errors import UnsupportedSpaceError
from chromatone.gamut import fitting
from chromatone.gamut import (
    adaptive_gamut_clip,
    clip_along_projection_line,
    correct_lightness_to_gray,
    find_cusp,
    find_gamut_intersection,
    find_max_saturation,
    fit_chroma_to_gamut,
    fit_chroma_to_gamut_preserving_gray,
    gamut_from_space,
    is_in_gamut,
    normalize_ab,
)

OUT_OF_GAMUT = [(0.7, 0.4, 150.0), (0.6, 0.35, 250.0), (0.9, 0.3, 30.0), (0.3, 0.25, 300.0)]


def test_gamut_from_space() -> None:
    assert gamut_from_space(ColorSpace.HEX) == Gamut.SRGB
    assert gamut_from_space("lin_srgb") == Gamut.SRGB
    assert gamut_from_space(ColorSpace.LIN_DISPLAY_P3) == Gamut.DISPLAY_P3
    with pytest.raises(UnsupportedSpaceError):
        gamut_from_space(ColorSpace.OKLCH)


def test_membership() -> None:
    assert is_in_gamut("#ff0000", ColorSpace.HEX)
    assert is_in_gamut((0.5, 0.05, 30.0))
    assert not is_in_gamut((0.7, 0.4, 150.0))
    assert is_in_gamut((1.0, 0.0, 0.0), ColorSpace.DISPLAY_P3, Gamut.DISPLAY_P3)
    assert not is_in_gamut((1.0, 0.0, 0.0), ColorSpace.DISPLAY_P3, Gamut.SRGB)


@pytest.mark.parametrize("oklch", OUT_OF_GAMUT)
def test_fit_chroma_lands_on_boundary(oklch) -> None:
    L, C, h = fit_chroma_to_gamut(oklch)
    assert L == oklch[0]
    assert h == oklch[2]
    assert C < oklch[1]
    assert is_in_gamut((L, C, h))
    assert not is_in_gamut((L, C + 1e-4, h))


def test_fit_chroma_is_idempotent_and_keeps_in_gamut_colors() -> None:
    fitted = fit_chroma_to_gamut((0.7, 0.4, 150.0))
    assert fit_chroma_to_gamut(fitted) == fitted
    assert fit_chroma_to_gamut((0.5, 0.05, 30.0)) == (0.5, 0.05, 30.0)


def test_fit_chroma_extremes() -> None:
    assert fit_chroma_to_gamut((1.0, 0.2, 30.0)) == (1.0, 0.0, 0.0)
    assert fit_chroma_to_gamut((-0.2, 0.2, 30.0)) == (0.0, 0.0, 0.0)


def test_display_p3_is_wider() -> None:
    srgb = fit_chroma_to_gamut((0.7, 0.4, 150.0), Gamut.SRGB)
    p3 = fit_chroma_to_gamut((0.7, 0.4, 150.0), Gamut.DISPLAY_P3)
    assert p3[1] > srgb[1]
    assert is_in_gamut(p3, ColorSpace.OKLCH, Gamut.DISPLAY_P3)


def test_lightness_correction_matches_gray_luminance() -> None:
    L, C, h = correct_lightness_to_gray((0.7, 0.1, 150.0))
    y = convert_color((L, C, h), ColorSpace.OKLCH, ColorSpace.XYZ, NO_ROUNDING)[1]
    assert y == pytest.approx(0.7 ** 3, abs=1e-4)
    assert C == 0.1


def test_lightness_correction_skips_gray() -> None:
    assert correct_lightness_to_gray((0.4, 0.0, 0.0)) == (0.4, 0.0, 0.0)


@pytest.mark.parametrize("oklch", OUT_OF_GAMUT)
def test_gray_preserving_fit_is_in_gamut(oklch) -> None:
    L, C, h = fit_chroma_to_gamut_preserving_gray(oklch)
    assert 0.0 < L < 1.0
    assert C <= oklch[1]
    assert is_in_gamut((L, C, h))


def test_unit_ab_normalization() -> None:
    assert normalize_ab(3.0, 4.0) == pytest.approx((0.6, 0.8))
    assert normalize_ab(0.0, 0.0) == (0.0, 0.0)
    with pytest.raises(ValueError):
        find_max_saturation(3.0, 4.0)


def test_red_cusp_is_the_red_primary() -> None:
    _, a, b = convert_color("#ff0000", ColorSpace.HEX, ColorSpace.OKLAB, NO_ROUNDING)
    red_l, red_c, _ = convert_color("#ff0000", ColorSpace.HEX, ColorSpace.OKLCH, NO_ROUNDING)
    cusp = find_cusp(*normalize_ab(a, b))
    assert cusp.lightness == pytest.approx(red_l, abs=2e-3)
    assert cusp.chroma == pytest.approx(red_c, abs=2e-3)


def test_intersection_at_cusp_lightness() -> None:
    a, b = normalize_ab(0.5, -0.8)
    cusp = find_cusp(a, b)
    t = find_gamut_intersection(a, b, cusp.lightness, 0.5, cusp.lightness, Gamut.SRGB, cusp)
    assert t * 0.5 == pytest.approx(cusp.chroma, abs=2e-3)


@pytest.mark.parametrize("oklch", OUT_OF_GAMUT)
def test_adaptive_clip_is_in_gamut(oklch) -> None:
    clipped = adaptive_gamut_clip(oklch)
    assert is_in_gamut(clipped)
    assert clipped[1] <= oklch[1]

    unrounded = adaptive_gamut_clip(oklch, round=False)
    assert is_in_gamut(unrounded)


def test_adaptive_clip_keeps_in_gamut_colors() -> None:
    assert adaptive_gamut_clip((0.5, 0.05, 30.0)) == (0.5, 0.05, 30.0)


def test_projection_line_clip() -> None:
    L, C, h = clip_along_projection_line((0.9, 0.3, 30.0), 0.6)
    assert is_in_gamut((L, C, h))
    assert 0.6 <= L <= 0.9
    assert clip_along_projection_line((0.7, 0.0, 30.0), 0.5) == (0.5, 0.0, 30.0)


@pytest.mark.parametrize(
    "oklch, expected",
    [
        ((1.2, 0.0, 0.0), (1.0, 0.0, 0.0)),
        ((-0.1, 0.0, 0.0), (0.0, 0.0, 0.0)),
        ((1.1, 0.1, 0.05), (1.0, 0.0, 0.0)),
        ((0.9999999999, 5e-8, 0.0), (0.9999999999, 0.0, 0.0)),
    ],
)
def test_adaptive_clip_handles_achromatic_and_extreme_lightness(oklch, expected) -> None:
    assert adaptive_gamut_clip(oklch) == expected


def test_gray_fit_falls_back_to_last_in_gamut_lightness(monkeypatch) -> None:
    # Lightness solutions overshoot to near white for every chroma above 0.075
    monkeypatch.setattr(fitting, "_luminance", lambda L, C, H: -1.0)
    monkeypatch.setattr(
        fitting,
        "_solve_gray_lightness",
        lambda chroma, coeffs, y_target: 0.6 if chroma <= 0.075 + 1e-9 else 0.999,
    )

    assert not is_in_gamut((0.999, 0.075, 30.0))
    result = fit_chroma_to_gamut_preserving_gray((0.6, 0.3, 30.0), Gamut.SRGB, 0.6)
    assert result == (0.6, 0.075, 30.0)
    assert is_in_gamut(result)
