"""
Tests for the CAM16 appearance model.
"""

from __future__ import annotations

import numpy as np
import pytest

from chromatone.appearance import CAM16, DEFAULT_VIEWING_CONDITIONS, ViewingConditions, xyz_to_cam16_chroma
from chromatone.utils.matrices import LIN_SRGB_TO_XYZ, WHITE_D65


def test_default_conditions_match_environment_derivation() -> None:
    derived = ViewingConditions.from_environment()
    default = DEFAULT_VIEWING_CONDITIONS

    for name in ("n", "nbb", "ncb", "z", "fl", "d", "aw", "c", "f", "adapting_luminance", "background_luminance"):
        assert getattr(derived, name) == pytest.approx(getattr(default, name), rel=1e-4), name
    np.testing.assert_allclose(derived.rgb_d, default.rgb_d, rtol=1e-4)


def test_forward_inverse_roundtrip() -> None:
    model = CAM16()
    rng = np.random.default_rng(7)
    for rgb in rng.uniform(0.05, 0.95, size=(16, 3)):
        xyz = LIN_SRGB_TO_XYZ @ rgb
        correlates = model.forward(xyz)
        back = model.inverse(correlates.lightness, correlates.chroma, correlates.hue)
        np.testing.assert_allclose(back, xyz, rtol=1e-6, atol=1e-9)


def test_custom_conditions_roundtrip() -> None:
    conditions = ViewingConditions.from_environment(adapting_luminance=200.0, surround=1.0)
    model = CAM16(conditions)
    xyz = (0.3, 0.25, 0.4)
    correlates = model.forward(xyz)
    back = model.inverse(correlates.lightness, correlates.chroma, correlates.hue)
    np.testing.assert_allclose(back, xyz, rtol=1e-6, atol=1e-9)


def test_white_has_full_lightness() -> None:
    correlates = CAM16().forward(tuple(WHITE_D65))
    assert correlates.lightness == pytest.approx(100.0, abs=0.05)
    assert correlates.chroma < 5.0


def test_black_is_zero() -> None:
    correlates = CAM16().forward((0.0, 0.0, 0.0))
    assert correlates.lightness == 0.0
    assert correlates.chroma == 0.0


def test_ucs_roundtrip() -> None:
    model = CAM16()
    correlates = model.forward((0.2, 0.15, 0.5))
    ucs = model.to_ucs(correlates.as_tuple())
    J, C, h, M = model.from_ucs(ucs[:3])

    assert J == pytest.approx(correlates.lightness, rel=1e-9)
    assert M == pytest.approx(correlates.colorfulness, rel=1e-9)
    assert C == pytest.approx(correlates.chroma, rel=1e-9)
    assert h == correlates.hue


def test_hue_quadrature_composition() -> None:
    model = CAM16()
    quadrature, composition = model.hue_quadrature(90.0)
    assert quadrature == pytest.approx(100.0)
    assert composition == "100Y0G"

    quadrature, composition = model.hue_quadrature(10.0)
    assert 300.0 < quadrature < 400.0
    assert composition.endswith("R")


def test_fast_chroma_matches_model() -> None:
    xyz = (0.4, 0.3, 0.1)
    assert xyz_to_cam16_chroma(xyz) == pytest.approx(CAM16().forward(xyz).chroma)
    assert xyz_to_cam16_chroma(xyz, ucs=True) > 0.0


def test_invalid_environment_raises() -> None:
    with pytest.raises(ValueError):
        ViewingConditions.from_environment(adapting_luminance=0.0)
