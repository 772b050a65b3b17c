"""
Tests for the conversion graph, step converters and composite conversion.
"""

from __future__ import annotations

import numpy as np
import pytest

from chromatone import Color, ColorSpace, convert, convert_color
from chromatone.conversion import convert_to_grayscale, convert_to_lci, find_path, round_color
from chromatone.conversion.steps import step_convert
from chromatone.core.config import NO_ROUNDING, ConvertOptions, Precision
from chromatone.core.errors import InvalidColorError, NoConversionPathError, UnsupportedSpaceError

HEX_SAMPLES = ["#ffffff", "#808080", "#ff0000", "#00ff00", "#0000ff", "#123456", "#6750a4", "#f7ecf1"]


def test_hex_parsing_variants() -> None:
    assert convert_color("#f00", ColorSpace.HEX, ColorSpace.SRGB) == (255.0, 0.0, 0.0)
    assert convert_color("F00", ColorSpace.HEX, ColorSpace.SRGB) == (255.0, 0.0, 0.0)
    assert convert_color("#6750A4", "hex", "srgb") == (103.0, 80.0, 164.0)


@pytest.mark.parametrize("value", ["#12345", "#ggg", "red", "#1234567"])
def test_invalid_hex_raises(value: str) -> None:
    with pytest.raises(InvalidColorError):
        convert_color(value, ColorSpace.HEX, ColorSpace.OKLCH)


def test_hex_output_is_clipped_and_lowercase() -> None:
    assert convert_color((300.0, -5.0, 128.0), ColorSpace.SRGB, ColorSpace.HEX) == "#ff0080"
    assert convert_color((171.0, 205.0, 239.0), ColorSpace.SRGB, ColorSpace.HEX) == "#abcdef"


def test_red_in_oklch() -> None:
    L, C, h = convert_color("#ff0000", ColorSpace.HEX, ColorSpace.OKLCH)
    assert L == pytest.approx(0.62796, abs=1e-3)
    assert C == pytest.approx(0.25768, abs=1e-3)
    assert h == pytest.approx(29.23, abs=0.05)


def test_white_hex_in_oklch() -> None:
    L, C, _ = convert_color("#ffffff", ColorSpace.HEX, ColorSpace.OKLCH)
    assert L == 1.0
    assert C == 0.0


@pytest.mark.parametrize(
    "oklch, expected",
    [
        ((1.0, 0.0, 0.0), "#ffffff"),
        ((1.2, 0.1, 30.0), "#ffffff"),
        ((0.0, 0.0, 0.0), "#000000"),
        ((-0.1, 0.2, 120.0), "#000000"),
    ],
)
def test_oklch_lightness_extremes_encode_to_white_and_black(oklch, expected: str) -> None:
    assert convert_color(oklch, ColorSpace.OKLCH, ColorSpace.HEX) == expected


def test_achromatic_oklch_gives_equal_rgb() -> None:
    for lightness in (0.1, 0.37, 0.5, 0.93):
        r, g, b = convert_color((lightness, 0.0, 0.0), ColorSpace.OKLCH, ColorSpace.SRGB)
        assert r == g == b
        r, g, b = convert_color((lightness, 0.0, 215.0), ColorSpace.OKLCH, ColorSpace.LIN_SRGB, NO_ROUNDING)
        assert r == g == b


@pytest.mark.parametrize(
    "space",
    [ColorSpace.OKLCH, ColorSpace.OKLAB, ColorSpace.LAB, ColorSpace.LCH, ColorSpace.DISPLAY_P3, ColorSpace.CAM16],
)
@pytest.mark.parametrize("hex_color", HEX_SAMPLES)
def test_hex_roundtrip_through_rounded_space(space: ColorSpace, hex_color: str) -> None:
    value = convert_color(hex_color, ColorSpace.HEX, space)
    assert convert_color(value, space, ColorSpace.HEX) == hex_color


@pytest.mark.parametrize(
    "space",
    [
        ColorSpace.XYZ_CIE,
        ColorSpace.OKLCH_GAMMA,
        ColorSpace.IPT_CH,
        ColorSpace.JZCZHZ,
        ColorSpace.ICTCP_CH,
        ColorSpace.CAM16_UCS,
    ],
)
@pytest.mark.parametrize("hex_color", HEX_SAMPLES)
def test_hex_roundtrip_through_unrounded_space(space: ColorSpace, hex_color: str) -> None:
    value = convert_color(hex_color, ColorSpace.HEX, space, NO_ROUNDING)
    assert convert_color(value, space, ColorSpace.HEX) == hex_color


def test_lin_srgb_lab_roundtrip_without_rounding() -> None:
    rgb = (0.2, 0.45, 0.7)
    lab = convert_color(rgb, ColorSpace.LIN_SRGB, ColorSpace.LAB, NO_ROUNDING)
    back = convert_color(lab, ColorSpace.LAB, ColorSpace.LIN_SRGB, NO_ROUNDING)
    np.testing.assert_allclose(back, rgb, rtol=1e-9, atol=1e-12)


def test_transforms_return_new_tuples() -> None:
    value = [0.5, 0.1, 200.0]
    result = convert_color(value, ColorSpace.OKLCH, ColorSpace.OKLAB)
    assert isinstance(result, tuple)
    assert value == [0.5, 0.1, 200.0]


def test_path_is_shortest_and_deterministic() -> None:
    assert find_path(ColorSpace.HEX, ColorSpace.OKLCH) == (
        ColorSpace.HEX,
        ColorSpace.SRGB,
        ColorSpace.LIN_SRGB,
        ColorSpace.OKLAB,
        ColorSpace.OKLCH,
    )
    assert find_path("oklch", "oklch") == (ColorSpace.OKLCH,)
    assert find_path(ColorSpace.HEX, ColorSpace.CAM16_UCS) == find_path(ColorSpace.HEX, ColorSpace.CAM16_UCS)


def test_osa_ucs_is_forward_only() -> None:
    assert find_path(ColorSpace.XYZ, ColorSpace.OSA_UCS_CH) is not None
    assert find_path(ColorSpace.OSA_UCS, ColorSpace.XYZ) is None

    L, C, h = convert_color("#808080", ColorSpace.HEX, ColorSpace.OSA_UCS_CH, NO_ROUNDING)
    assert np.isfinite([L, C, h]).all()

    with pytest.raises(NoConversionPathError):
        convert_color((0.0, 1.0, 2.0), ColorSpace.OSA_UCS, ColorSpace.HEX)


def test_unimplemented_step_raises() -> None:
    with pytest.raises(NoConversionPathError, match="Unimplemented"):
        step_convert((0.0, 1.0, 2.0), ColorSpace.OSA_UCS, ColorSpace.XYZ_CIE)


def test_unknown_space_raises() -> None:
    with pytest.raises(UnsupportedSpaceError):
        convert_color((0.5, 0.1, 20.0), "oklch", "hsl")


def test_boundary_returns_failure_values() -> None:
    result = convert("#zzzzzz", ColorSpace.HEX, ColorSpace.OKLCH)
    assert not result.ok
    assert isinstance(result.error, InvalidColorError)
    assert result.color is None

    result = convert((0.0, 1.0, 2.0), ColorSpace.OSA_UCS, ColorSpace.XYZ)
    assert isinstance(result.error, NoConversionPathError)

    result = convert("#ff0000", "hex", "srgb")
    assert result.ok
    assert result.color == (255.0, 0.0, 0.0)


def test_rounding_policy_per_class() -> None:
    precision = Precision()
    assert round_color((0.123456789, 0.987654321, 359.996), ColorSpace.OKLCH, precision) == (0.12345, 0.98765, 0.0)
    assert round_color((0.123456789, -0.0123456, 0.0123456), ColorSpace.OKLAB, precision) == (
        0.12345,
        -0.01235,
        0.01235,
    )
    assert round_color((12.5, 200.4, 99.6), ColorSpace.SRGB, precision) == (13.0, 200.0, 100.0)
    assert round_color((0.1, 0.2, 0.3), ColorSpace.XYZ, precision) == (0.1, 0.2, 0.3)


def test_custom_precision_is_applied() -> None:
    options = ConvertOptions(precision=Precision(lightness=2, chroma=2, hue=0))
    L, C, h = convert_color("#6750a4", ColorSpace.HEX, ColorSpace.OKLCH, options)
    assert L == round(L, 2)
    assert C == round(C, 2)
    assert h == float(int(h))


def test_cam16_extended_output() -> None:
    options = ConvertOptions(round=False, cam16_extended=True)
    cam = convert_color("#6750a4", ColorSpace.HEX, ColorSpace.CAM16, options)
    assert len(cam) == 8
    assert 0.0 <= cam[6] < 400.0
    assert isinstance(cam[7], str)


def test_color_value_object() -> None:
    color = Color("#ff0000", "hex")
    assert color.space == ColorSpace.HEX
    srgb = color.to("srgb")
    assert srgb.space == ColorSpace.SRGB
    assert srgb.value == (255.0, 0.0, 0.0)


def test_grayscale_keeps_gray() -> None:
    assert convert_to_grayscale("#808080", ColorSpace.HEX, ColorSpace.HEX) == "#808080"
    r, g, b = convert_to_grayscale("#ff0000", ColorSpace.HEX, ColorSpace.SRGB)
    assert r == g == b
    r_approx, _, _ = convert_to_grayscale("#ff0000", ColorSpace.HEX, ColorSpace.SRGB, approx=True)
    assert r_approx == pytest.approx(r, abs=1.0)


def test_lci_output() -> None:
    lightness, chroma, hue = convert_to_lci("#808080", ColorSpace.HEX)
    assert lightness == pytest.approx(53.6, abs=0.2)
    assert chroma < 5.0
    assert 0.0 <= hue < 360.0
