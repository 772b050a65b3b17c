"""
Tests for the palette pipeline and its configuration.
"""

from __future__ import annotations

import pytest

from chromatone import (
    ChromaPolicy,
    ColorSpace,
    DeltaEMetric,
    Gamut,
    PaletteConfig,
    PaletteRole,
    Precision,
    TonePaletteBuilder,
    build_palettes,
)
from chromatone.conversion import convert_color
from chromatone.core.errors import InvalidColorError
from chromatone.gamut import is_in_gamut
from chromatone.tones import construct_tone_palette, derive_role_bases

TONES = (0, 40, 90, 100)


def _is_gray_hex(value: str) -> bool:
    return value[1:3] == value[3:5] == value[5:7]


def test_config_validation() -> None:
    PaletteConfig().validate()

    with pytest.raises(ValueError):
        PaletteConfig(tones=()).validate()
    with pytest.raises(ValueError):
        PaletteConfig(tones=(0, 101)).validate()
    with pytest.raises(ValueError):
        PaletteConfig(output_space=ColorSpace.OKLCH).validate()
    with pytest.raises(ValueError):
        PaletteConfig(metric=DeltaEMetric.JZ).validate()
    with pytest.raises(ValueError):
        PaletteConfig(jnd_delta_e_ok=0.0).validate()
    with pytest.raises(ValueError):
        PaletteConfig(chroma_targets=(1, 2, 3)).validate()
    with pytest.raises(ValueError):
        PaletteConfig(precision=Precision(hue=18)).validate()


def test_builder_validates_config() -> None:
    with pytest.raises(ValueError):
        TonePaletteBuilder(PaletteConfig(tones=()))


def test_role_bases_order_and_error_base() -> None:
    config = PaletteConfig()
    seed = convert_color("#6750a4", ColorSpace.HEX, ColorSpace.OKLCH)
    bases = derive_role_bases(seed, config)

    assert [base.role for base in bases] == list(PaletteRole)
    error = bases[3]
    assert error.oklch == config.error_color_oklch
    assert error.target_ipt_hue == config.error_ipt_hue
    assert error.target_cam16_chroma == 84
    assert bases[0].target_cam16_chroma >= 48
    assert bases[1].target_cam16_chroma == 16


def test_tone_palette_end_points() -> None:
    config = PaletteConfig(tones=TONES)
    outputs, oklch = construct_tone_palette((0.5, 0.15, 300.0), 300.0, 40.0, config)

    assert [tone for tone, _ in outputs] == list(TONES)
    assert outputs[0][1] == "#000000"
    assert outputs[-1][1] == "#ffffff"
    assert oklch[0][1] == (0.0, 0.0, 0.0)
    assert oklch[-1][1] == (1.0, 0.0, 0.0)


def test_build_palettes_for_colored_seed() -> None:
    palettes = build_palettes("#6750a4", tones=TONES)

    assert [palette.role for palette in palettes] == list(PaletteRole)
    for palette in palettes:
        assert [entry.tone for entry in palette.tones] == list(TONES)
        assert palette.colors()[0] == "#000000"
        assert palette.colors()[-1] == "#ffffff"
        for entry in palette.tones:
            assert _is_gray_hex(entry.color_hex_gray)
            assert abs(entry.lightness_lab - entry.tone) <= 1.0
            assert 0.0 <= entry.hue_ipt <= 360.0


def test_gray_seed_gives_gray_palettes() -> None:
    palettes = build_palettes("#808080", tones=TONES)

    for palette in palettes:
        for entry in palette.tones:
            assert _is_gray_hex(entry.color)
            assert entry.color_oklch[1] == 0.0


def test_display_p3_output() -> None:
    palettes = build_palettes(
        "#6750a4",
        tones=(50,),
        gamut=Gamut.DISPLAY_P3,
        output_space=ColorSpace.DISPLAY_P3,
    )
    for palette in palettes:
        for entry in palette.tones:
            assert len(entry.color) == 3
            assert all(0.0 <= c <= 1.0 for c in entry.color)


def test_content_policy_scales_with_seed() -> None:
    config = PaletteConfig(chroma_policy=ChromaPolicy.CONTENT, tones=(50,))
    palettes = TonePaletteBuilder(config).build("#6750a4")

    primary = palettes[0].tones[0]
    secondary = palettes[1].tones[0]
    assert primary.chroma_cam16 > secondary.chroma_cam16


def test_invalid_seed_raises() -> None:
    with pytest.raises(InvalidColorError):
        build_palettes("#nothex", tones=TONES)


def test_jnd_follows_metric() -> None:
    assert PaletteConfig().jnd == 0.2
    assert PaletteConfig(metric=DeltaEMetric.OK).jnd == 0.002


def test_config_gamut_is_kept_without_explicit_override() -> None:
    config = PaletteConfig(gamut=Gamut.DISPLAY_P3)
    primary = build_palettes("#ff0000", tones=(50,), config=config)[0]
    oklch = primary.tones[0].color_oklch

    assert is_in_gamut(oklch, ColorSpace.OKLCH, Gamut.DISPLAY_P3)
    assert not is_in_gamut(oklch, ColorSpace.OKLCH, Gamut.SRGB)


def test_config_output_space_is_kept_without_explicit_override() -> None:
    config = PaletteConfig(output_space=ColorSpace.SRGB)
    palettes = build_palettes("#6750a4", tones=(50,), config=config)
    assert all(isinstance(palette.colors()[0], tuple) for palette in palettes)

    palettes = build_palettes("#6750a4", tones=(50,), output_space=ColorSpace.HEX, config=config)
    assert all(isinstance(palette.colors()[0], str) for palette in palettes)
