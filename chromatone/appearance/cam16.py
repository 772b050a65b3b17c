"""
CAM16: CIE 2016 color appearance model and the CAM16-UCS uniform space.

XYZ inputs are relative (white Y = 1). The default viewing conditions are
those of Material-style "HCT" palettes: D65 white, background at Lab L = 50,
average surround, no discounting.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np

from chromatone.utils.matrices import (
    CAM16_POST_ADAPTATION_INV,
    CAM16_RGB_TO_XYZ,
    WHITE_D65,
    XYZ_TO_CAM16_RGB,
)
from chromatone.utils.numeric import cbrt, clamp, lerp, normalize_hue

logger = logging.getLogger(__name__)

# Chroma reported when the model yields a non-real value (far outside any
# display gamut).
NON_REAL_CHROMA = 150.0

# Unique hues, eccentricities and quadrature values (R, Y, G, B, R)
_HUE_ANGLES = (20.14, 90.0, 164.25, 237.53, 380.14)
_HUE_ECCENTRICITY = (0.8, 0.7, 1.0, 1.2, 0.8)
_HUE_QUADRATURE = (0.0, 100.0, 200.0, 300.0, 400.0)
_HUE_NAMES = ("R", "Y", "G", "B", "R")

_UCS_C1 = 0.007
_UCS_C2 = 0.0228


def lab_lightness_to_y(lightness: float) -> float:
    """Relative luminance (0..1) of a CIELab lightness."""

    fy = (lightness + 16.0) / 116.0
    return fy ** 3 if lightness > 8.0 else lightness * 27.0 / 24389.0


@dataclass(frozen=True)
class ViewingConditions:
    """
    CAM16 viewing conditions with all derived constants.

    Build custom conditions with ``ViewingConditions.from_environment``;
    ``DEFAULT_VIEWING_CONDITIONS`` holds the precomputed default bundle.
    """

    white: Tuple[float, float, float]  # white point, Y = 100
    adapting_luminance: float          # L_A, cd/m^2
    background_luminance: float        # Y_b, relative to Y_w = 100
    surround: float                    # 0 dark, 1 dim, 2 average
    discounting: bool
    f: float
    c: float
    nc: float
    n: float
    nbb: float
    ncb: float
    z: float
    fl: float
    d: float
    rgb_d: Tuple[float, float, float]
    aw: float

    @property
    def fl_root(self) -> float:
        return self.fl ** 0.25

    @classmethod
    def from_environment(
        cls,
        white: Sequence[float] = tuple(WHITE_D65),
        adapting_luminance: Optional[float] = None,
        background_luminance: Optional[float] = None,
        surround: float = 2.0,
        discounting: bool = False,
    ) -> "ViewingConditions":
        """
        Derive every viewing-condition constant.

        Parameters
        ----------
        white : sequence of float
            White point XYZ with Y = 1.
        adapting_luminance : float, optional
            L_A in cd/m^2; defaults to the gray-world value ``(2 / pi) * Y_b``.
        background_luminance : float, optional
            Y_b on the 0..100 scale; defaults to Lab L = 50.
        surround : float
            0 (dark) .. 2 (average), clamped.
        discounting : bool
            Assume full adaptation to the illuminant.
        """

        white_100 = np.asarray(white, dtype=np.float64) * 100.0
        surround = clamp(0.0, surround, 2.0)

        if background_luminance is None:
            background_luminance = 100.0 * lab_lightness_to_y(50.0)
        if adapting_luminance is None:
            adapting_luminance = (2.0 / math.pi) * background_luminance
        if adapting_luminance <= 0 or background_luminance <= 0:
            raise ValueError("Adapting and background luminance must be positive")

        f = 0.8 + surround / 10.0
        if f >= 0.9:
            c = lerp(0.59, 0.69, (f - 0.9) * 10.0)
        else:
            c = lerp(0.525, 0.59, (f - 0.8) * 10.0)

        n = background_luminance / white_100[1]
        nbb = 0.725 / n ** 0.2
        z = 1.48 + math.sqrt(n)

        if discounting:
            d = 1.0
        else:
            d = f * (1.0 - (1.0 / 3.6) * math.exp((-adapting_luminance - 42.0) / 92.0))
        d = clamp(0.0, d, 1.0)

        k = 1.0 / (5.0 * adapting_luminance + 1.0)
        k4 = k ** 4
        fl = k4 * adapting_luminance + 0.1 * (1.0 - k4) ** 2 * cbrt(5.0 * adapting_luminance)

        rgb_w = XYZ_TO_CAM16_RGB @ white_100
        rgb_d = d * white_100[1] / rgb_w + 1.0 - d
        rgb_aw = _post_adaptation(rgb_d * rgb_w, fl)
        aw = (40.0 * rgb_aw[0] + 20.0 * rgb_aw[1] + rgb_aw[2]) / 20.0 * nbb

        vc = cls(
            white=tuple(float(v) for v in white_100),
            adapting_luminance=float(adapting_luminance),
            background_luminance=float(background_luminance),
            surround=float(surround),
            discounting=discounting,
            f=f,
            c=c,
            nc=f,
            n=float(n),
            nbb=float(nbb),
            ncb=float(nbb),
            z=z,
            fl=fl,
            d=d,
            rgb_d=tuple(float(v) for v in rgb_d),
            aw=float(aw),
        )
        logger.debug(
            "CAM16 viewing conditions: L_A=%.4f Y_b=%.4f F=%.2f D=%.4f F_L=%.6f",
            vc.adapting_luminance,
            vc.background_luminance,
            vc.f,
            vc.d,
            vc.fl,
        )
        return vc


DEFAULT_VIEWING_CONDITIONS = ViewingConditions(
    white=(float(WHITE_D65[0] * 100.0), 100.0, float(WHITE_D65[2] * 100.0)),
    adapting_luminance=11.725677948856951,
    background_luminance=18.418651851244416,
    surround=2.0,
    discounting=False,
    f=1.0,
    c=0.69,
    nc=1.0,
    n=0.18418651851244416,
    nbb=1.0169191804458757,
    ncb=1.0169191804458757,
    z=1.909169568483652,
    fl=0.3884814537800353,
    d=0.8450896328492113,
    rgb_d=(1.0211931250282205, 0.98629630699647, 0.9338046211456176),
    aw=29.980990887425268,
)


class Cam16Correlates(NamedTuple):
    """Perceptual correlates of one color."""

    lightness: float     # J
    chroma: float        # C
    hue: float           # h, degrees
    colorfulness: float  # M
    saturation: float    # s
    brightness: float    # Q
    hue_quadrature: Optional[float] = None  # H
    hue_composition: Optional[str] = None   # e.g. "59G41B"

    def as_tuple(self) -> Tuple:
        """Component tuple ``(J, C, h, M, s, Q[, H, composition])``."""

        base = (self.lightness, self.chroma, self.hue, self.colorfulness, self.saturation, self.brightness)
        if self.hue_quadrature is None:
            return base
        return base + (self.hue_quadrature, self.hue_composition)


class CAM16:
    """
    CAM16 forward and closed-form inverse transforms.
    """

    def __init__(self, viewing_conditions: Optional[ViewingConditions] = None) -> None:
        self.vc = viewing_conditions or DEFAULT_VIEWING_CONDITIONS

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def forward(self, xyz: Sequence[float], extended: bool = False) -> Cam16Correlates:
        """
        XYZ (white Y = 1) to perceptual correlates.

        ``extended`` adds hue quadrature and hue composition.
        """

        vc = self.vc
        rgb = XYZ_TO_CAM16_RGB @ (np.asarray(xyz, dtype=np.float64) * 100.0)
        rgb_a = _post_adaptation(np.asarray(vc.rgb_d) * rgb, vc.fl)

        a = (11.0 * rgb_a[0] - 12.0 * rgb_a[1] + rgb_a[2]) / 11.0
        b = (rgb_a[0] + rgb_a[1] - 2.0 * rgb_a[2]) / 9.0
        p2 = (40.0 * rgb_a[0] + 20.0 * rgb_a[1] + rgb_a[2]) / 20.0
        u = (20.0 * rgb_a[0] + 20.0 * rgb_a[1] + 21.0 * rgb_a[2]) / 20.0

        hue = normalize_hue(math.degrees(math.atan2(b, a)))
        e_hue = _eccentricity(hue)

        A = p2 * vc.nbb
        # Negative achromatic response only occurs far outside the spectral locus
        J = 100.0 * (A / vc.aw) ** (vc.c * vc.z) if A > 0 else 0.0
        Q = (4.0 / vc.c) * math.sqrt(J / 100.0) * (vc.aw + 4.0) * vc.fl_root

        t = (50000.0 / 13.0) * e_hue * vc.nc * vc.ncb * math.hypot(a, b) / (u + 0.305)
        if t >= 0:
            alpha = t ** 0.9 * (1.64 - 0.29 ** vc.n) ** 0.73
            C = alpha * math.sqrt(J / 100.0)
        else:
            logger.debug("Non-real CAM16 chroma for XYZ %s, using %.1f", tuple(xyz), NON_REAL_CHROMA)
            C = NON_REAL_CHROMA
            alpha = C / math.sqrt(J / 100.0) if J > 0 else 0.0
        M = C * vc.fl_root
        s = 50.0 * math.sqrt(alpha * vc.c / (vc.aw + 4.0))

        if not extended:
            return Cam16Correlates(float(J), float(C), hue, float(M), float(s), float(Q))

        quadrature, composition = self.hue_quadrature(hue)
        return Cam16Correlates(float(J), float(C), hue, float(M), float(s), float(Q), quadrature, composition)

    def inverse(self, lightness: float, chroma: float, hue: float) -> Tuple[float, float, float]:
        """(J, C, h) to XYZ (white Y = 1), solved per channel without iteration."""

        vc = self.vc
        J = max(lightness, 0.0)
        h_rad = math.radians(hue)

        alpha = 0.0 if chroma == 0 or J == 0 else chroma / math.sqrt(J / 100.0)
        t = (alpha / (1.64 - 0.29 ** vc.n) ** 0.73) ** (1.0 / 0.9)

        e_hue = _eccentricity(hue)

        A = vc.aw * (J / 100.0) ** (1.0 / (vc.c * vc.z))
        p1 = e_hue * (50000.0 / 13.0) * vc.nc * vc.ncb
        p2 = A / vc.nbb

        cos_h = math.cos(h_rad)
        sin_h = math.sin(h_rad)
        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * cos_h + 108.0 * t * sin_h)
        a = gamma * cos_h
        b = gamma * sin_h

        rgb_a = CAM16_POST_ADAPTATION_INV @ np.array([p2, a, b]) / 1403.0
        rgb_c = _inverse_post_adaptation(rgb_a, vc.fl)
        rgb = rgb_c / np.asarray(vc.rgb_d)
        xyz = CAM16_RGB_TO_XYZ @ rgb / 100.0
        return float(xyz[0]), float(xyz[1]), float(xyz[2])

    def hue_quadrature(self, hue: float) -> Tuple[float, str]:
        """Hue quadrature H (0..400) and hue composition such as ``"59G41B"``."""

        hue_prime = hue + 360.0 if hue < _HUE_ANGLES[0] else hue
        i = 3
        for idx in range(3):
            if _HUE_ANGLES[idx] <= hue_prime < _HUE_ANGLES[idx + 1]:
                i = idx
                break

        num = _HUE_ECCENTRICITY[i + 1] * (hue_prime - _HUE_ANGLES[i])
        den = num + _HUE_ECCENTRICITY[i] * (_HUE_ANGLES[i + 1] - hue_prime)
        quadrature = _HUE_QUADRATURE[i] + 100.0 * num / den

        left = int(math.floor(_HUE_QUADRATURE[i + 1] - quadrature + 0.5))
        right = int(math.floor(quadrature - _HUE_QUADRATURE[i] + 0.5))
        composition = f"{left}{_HUE_NAMES[i]}{right}{_HUE_NAMES[i + 1]}"
        return quadrature, composition

    # ------------------------------------------------------------------
    # Uniform color space
    # ------------------------------------------------------------------

    def to_ucs(self, cam16_color: Sequence) -> Tuple[float, ...]:
        """
        CAM16 ``(J, C, h[, M, s, Q])`` to CAM16-UCS ``(J', M', h, a', b', C)``.

        Colorfulness is taken from the input when present, otherwise derived
        from chroma with this model's F_L.
        """

        J, C, hue = (float(v) for v in cam16_color[:3])
        M = float(cam16_color[3]) if len(cam16_color) > 3 else C * self.vc.fl_root

        m_ucs = math.log1p(_UCS_C2 * M) / _UCS_C2
        j_ucs = (1.0 + 100.0 * _UCS_C1) * J / (1.0 + _UCS_C1 * J)
        h_rad = math.radians(hue)
        return j_ucs, m_ucs, hue, m_ucs * math.cos(h_rad), m_ucs * math.sin(h_rad), C

    def from_ucs(self, ucs_color: Sequence) -> Tuple[float, ...]:
        """
        CAM16-UCS ``(J', M', h[, a', b', C])`` to CAM16 ``(J, C, h, M)``.

        Chroma is taken from the input when present, otherwise derived from
        colorfulness with this model's F_L.
        """

        j_ucs, m_ucs, hue = (float(v) for v in ucs_color[:3])
        M = math.expm1(_UCS_C2 * m_ucs) / _UCS_C2
        J = j_ucs / (1.0 + 100.0 * _UCS_C1 - _UCS_C1 * j_ucs)
        C = float(ucs_color[5]) if len(ucs_color) > 5 else M / self.vc.fl_root
        return J, C, hue, M


def xyz_to_cam16_chroma(xyz: Sequence[float], ucs: bool = False) -> float:
    """CAM16 chroma (or CAM16-UCS colorfulness) under the default conditions."""

    model = CAM16()
    correlates = model.forward(xyz)
    if ucs:
        return model.to_ucs(correlates.as_tuple())[1]
    return correlates.chroma


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------


def _eccentricity(hue: float) -> float:
    hue_prime = hue + 360.0 if hue < _HUE_ANGLES[0] else hue
    return 0.25 * (math.cos(math.radians(hue_prime) + 2.0) + 3.8)


def _post_adaptation(rgb: np.ndarray, fl: float) -> np.ndarray:
    factor = (fl * np.abs(rgb) / 100.0) ** 0.42
    return 400.0 * np.sign(rgb).astype(np.float64) * factor / (factor + 27.13)


def _inverse_post_adaptation(rgb_a: np.ndarray, fl: float) -> np.ndarray:
    magnitude = np.abs(rgb_a)
    with np.errstate(divide="ignore", invalid="ignore"):
        base = np.maximum(27.13 * magnitude / (400.0 - magnitude), 0.0)
    return np.sign(rgb_a).astype(np.float64) * (100.0 / fl) * base ** (100.0 / 42.0)
