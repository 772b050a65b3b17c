"""
Tests for color-difference metrics and contrast.
"""

from __future__ import annotations

import pytest

from chromatone.core.config import ColorSpace, DeltaEMetric
from chromatone.distance import (
    contrast_ratio,
    create_delta_e,
    delta_e_1976,
    delta_e_2000,
    delta_e_ok,
    delta_e_z,
    relative_luminance,
)


@pytest.mark.parametrize(
    "lab1, lab2, expected",
    [
        ((50.0, 2.6772, -79.7751), (50.0, 0.0, -82.7485), 2.0425),
        ((50.0, 0.0, 0.0), (50.0, -1.0, 2.0), 2.3669),
        ((50.0, 2.5, 0.0), (73.0, 25.0, -18.0), 27.1492),
        ((60.2574, -34.0099, 36.2677), (60.4626, -34.1751, 39.4387), 1.2644),
        ((22.7233, 20.0904, -46.6940), (23.0331, 14.9730, -42.5619), 2.0373),
    ],
)
def test_ciede2000_reference_pairs(lab1, lab2, expected: float) -> None:
    assert delta_e_2000(lab1, lab2) == pytest.approx(expected, abs=1e-4)
    assert delta_e_2000(lab2, lab1) == pytest.approx(expected, abs=1e-4)


def test_cie76_is_euclidean() -> None:
    assert delta_e_1976((50.0, 0.0, 0.0), (53.0, 4.0, 0.0)) == pytest.approx(5.0)


def test_metrics_accept_other_spaces() -> None:
    assert delta_e_ok("#6750a4", "#6750a4", ColorSpace.HEX) == 0.0
    assert delta_e_2000("#ff0000", "#fe0000", "hex") < 1.0
    assert delta_e_z("#ff0000", "#0000ff", ColorSpace.HEX) > 0.0


def test_ok_difference_scale() -> None:
    assert delta_e_ok((0.5, 0.1, 0.0), (0.5, 0.1, 0.002)) == pytest.approx(0.002)


def test_metric_factory() -> None:
    assert create_delta_e(DeltaEMetric.CIEDE2000) is delta_e_2000
    assert create_delta_e("ok") is delta_e_ok
    assert create_delta_e("CIE76") is delta_e_1976
    assert create_delta_e(DeltaEMetric.JZ) is delta_e_z
    with pytest.raises(ValueError):
        create_delta_e("cmc")


def test_contrast_black_white() -> None:
    white = relative_luminance("#ffffff", ColorSpace.HEX)
    black = relative_luminance("#000000", ColorSpace.HEX)
    assert white == 1.0
    assert black == 0.0
    assert contrast_ratio(white, black) == 21.0
    assert contrast_ratio(black, white) == 21.0


def test_relative_luminance_of_gray() -> None:
    assert relative_luminance((128.0, 128.0, 128.0)) == pytest.approx(0.22, abs=0.01)
    assert relative_luminance((128.0, 128.0, 128.0), approx=False, digits=4) == pytest.approx(0.2159, abs=1e-3)
