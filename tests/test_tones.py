"""
Tests for lightness scales, max-chroma search and correction loops.
"""

from __future__ import annotations

import math

import pytest

from chromatone.conversion import convert_color
from chromatone.core.config import ColorSpace, DeltaEMetric
from chromatone.distance import delta_e_2000, delta_e_ok
from chromatone.tones import (
    cam16_chroma,
    correct_chroma_to_cam16,
    correct_hue_to_ipt_hue,
    correct_hue_to_reference,
    find_max_chroma,
    ipt_hue,
    lab_to_oklab_lightness,
    oklab_to_lab_lightness,
)
from chromatone.utils.numeric import hue_difference


@pytest.mark.parametrize("tone", [1.0, 4.0, 10.0, 50.0, 87.0, 99.0])
def test_lightness_scales_are_inverse(tone: float) -> None:
    assert oklab_to_lab_lightness(lab_to_oklab_lightness(tone)) == pytest.approx(tone, abs=0.01)


def test_lightness_reference_values() -> None:
    assert lab_to_oklab_lightness(50.0) == 0.56897
    assert lab_to_oklab_lightness(4.0) == 0.16421
    assert lab_to_oklab_lightness(100.0) == 1.0
    assert oklab_to_lab_lightness(1.0) == 100.0


def test_hue_correction_reaches_target() -> None:
    target = ipt_hue((0.6, 0.1, 130.0))
    L, C, h = correct_hue_to_ipt_hue((0.6, 0.1, 100.0), target)
    assert (L, C) == (0.6, 0.1)
    assert abs(hue_difference(ipt_hue((L, C, h)), target)) < 0.5
    assert abs(hue_difference(h, 130.0)) < 2.0


def test_hue_correction_across_zero() -> None:
    target = ipt_hue((0.6, 0.1, 5.0))
    L, C, h = correct_hue_to_ipt_hue((0.6, 0.1, 340.0), target)
    assert abs(hue_difference(ipt_hue((L, C, h)), target)) < 0.5
    assert 0.0 <= h < 360.0


def test_hue_correction_to_reference() -> None:
    reference = (0.5, 0.12, 250.0)
    corrected = correct_hue_to_reference((0.6, 0.1, 220.0), reference)
    assert abs(hue_difference(ipt_hue(corrected), ipt_hue(reference))) < 0.5


def test_hue_correction_degenerate_inputs() -> None:
    assert correct_hue_to_ipt_hue((0.6, 0.0, 100.0), 30.0) == (0.6, 0.0, 100.0)
    assert correct_hue_to_ipt_hue((1.0, 0.1, 100.0), 30.0) == (1.0, 0.0, 0.0)
    assert correct_hue_to_ipt_hue((0.0, 0.1, 100.0), 30.0) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize("target", [8.0, 30.0, 48.0])
def test_chroma_correction_reaches_target(target: float) -> None:
    L, C, h = correct_chroma_to_cam16((0.6, 0.05, 250.0), target)
    assert (L, h) == (0.6, 250.0)
    assert cam16_chroma((L, C, h)) == pytest.approx(target, abs=0.5)


def test_chroma_correction_keeps_matching_color() -> None:
    oklch = (0.6, 0.1, 40.0)
    target = cam16_chroma(oklch)
    assert correct_chroma_to_cam16(oklch, target) == oklch


def test_max_chroma_is_indistinguishable() -> None:
    seed = convert_color("#6750a4", ColorSpace.HEX, ColorSpace.OKLCH)
    L, C, h = seed
    chroma = find_max_chroma(seed)
    assert chroma >= C
    assert delta_e_2000(seed, (L, chroma, h), ColorSpace.OKLCH) < 0.2


def test_max_chroma_with_ok_metric() -> None:
    seed = convert_color("#3a7bd5", ColorSpace.HEX, ColorSpace.OKLCH)
    L, C, h = seed
    chroma = find_max_chroma(seed, metric=DeltaEMetric.OK)
    assert chroma >= C
    assert delta_e_ok(seed, (L, chroma, h), ColorSpace.OKLCH) < 0.002


def test_max_chroma_rejects_metric_without_threshold() -> None:
    with pytest.raises(ValueError):
        find_max_chroma((0.5, 0.1, 30.0), metric=DeltaEMetric.CIE76)


def test_chroma_correction_stops_where_cam16_chroma_turns_back() -> None:
    # CAM16 chroma first falls, then rises again as Oklch chroma shrinks
    L, C, h = correct_chroma_to_cam16((0.85488, 0.00526, 60.02), 0.8973762375235834)
    assert (L, h) == (0.85488, 60.02)
    assert C == pytest.approx(0.00468, abs=5e-5)


def test_chroma_correction_retries_above_zero_chroma_floor() -> None:
    # Target lies below the CAM16 chroma of the matching gray
    L, C, h = correct_chroma_to_cam16((0.81638, 0.00359, 132.64), 1.6263202324990014)
    assert (L, h) == (0.81638, 132.64)
    assert C > 1e-5
    assert C == pytest.approx(0.00234, abs=1e-4)


def test_chroma_correction_without_retry_collapses_to_smallest_step() -> None:
    _, C, _ = correct_chroma_to_cam16((0.81638, 0.00359, 132.64), 1.6263202324990014, retry_near_zero=False)
    assert C == 1e-5


def test_cam16_chroma_is_finite_for_extreme_chroma() -> None:
    for oklch in [(0.5, 0.6, 250.0), (0.2, 0.5, 140.0), (0.9, 0.4, 320.0)]:
        chroma = cam16_chroma(oklch)
        assert math.isfinite(chroma)
        assert chroma >= 0.0
