"""
One-hop converters between directly connected color spaces.

Every converter is a pure function returning a new tuple. ``step_convert``
dispatches through an enum-keyed table; CAM16 hops additionally receive the
appearance model configured with the caller's viewing conditions.
"""

from __future__ import annotations

import math
import re
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from chromatone.appearance.cam16 import CAM16
from chromatone.core.config import ColorSpace, ConvertOptions
from chromatone.core.errors import InvalidColorError, NoConversionPathError
from chromatone.utils import matrices as mx
from chromatone.utils.numeric import cbrt, mat_vec, polar_to_rect, rect_to_polar, round_to, signed_pow

Components = Tuple[float, ...]
ColorValue = Union[str, Components]

_HEX_FULL = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
_HEX_SHORT = re.compile(r"^#?([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)

# CIELab
_LAB_EPSILON = 216.0 / 24389.0
_LAB_KAPPA = 24389.0 / 27.0

# "Gamma" Oklab exponent
_OKLAB_GAMMA = 0.323

# IPT exponent
_IPT_EXPONENT = 0.43

# JzAzBz
_JZ_B = 1.15
_JZ_G = 0.66
_JZ_C1 = 3424.0 / 4096.0
_JZ_C2 = 2413.0 / 128.0
_JZ_C3 = 2392.0 / 128.0
_JZ_N = 2610.0 / 16384.0
_JZ_P = 1.7 * 2523.0 / 32.0
_JZ_D = -0.56
_JZ_D0 = 1.6295499532821566e-11

# ICtCp (BT.2100 PQ)
_PQ_M1 = 2610.0 / 16384.0
_PQ_M2 = 2523.0 / 32.0
_PQ_C1 = 107.0 / 128.0
_PQ_C2 = 2413.0 / 128.0
_PQ_C3 = 2392.0 / 128.0

# Oklab/IPT outputs are rounded to this many decimals to drop float noise
_NOISE_DIGITS = 15


def components(value: object, count: int = 3) -> Components:
    """Validate and unpack a numeric color into a tuple of floats."""

    if isinstance(value, (str, bytes)) or not isinstance(value, (Sequence, np.ndarray)):
        raise InvalidColorError(f"Expected {count} numeric components, got {value!r}")
    if len(value) < count:
        raise InvalidColorError(f"Expected {count} numeric components, got {len(value)}")
    try:
        return tuple(float(v) for v in value[:count])
    except (TypeError, ValueError) as exc:
        raise InvalidColorError(f"Non-numeric color component in {value!r}") from exc


# ----------------------------------------------------------------------
# Hex / RGB transfer functions
# ----------------------------------------------------------------------


def hex_to_srgb(value: object) -> Components:
    """``"#rrggbb"`` / ``"#rgb"`` (any case, ``#`` optional) to sRGB 0..255."""

    if not isinstance(value, str):
        raise InvalidColorError(f"Hex color must be a string, got {value!r}")
    text = value.strip()
    match = _HEX_FULL.match(text)
    scale = 1
    if match is None:
        match = _HEX_SHORT.match(text)
        scale = 0x11
    if match is None:
        raise InvalidColorError(f"Invalid hex color: {value!r}")
    return tuple(float(int(group, 16) * scale) for group in match.groups())


def srgb_to_hex(value: object) -> str:
    """sRGB 0..255 to lowercase ``"#rrggbb"``; channels clipped to 0..255."""

    channels = [int(min(max(round_to(c, 0), 0.0), 255.0)) for c in components(value)]
    return "#" + "".join(f"{c:02x}" for c in channels)


def _decode_srgb_transfer(c: float) -> float:
    return ((c + 0.055) / 1.055) ** 2.4 if c > 0.04045 else c / 12.92


def _encode_srgb_transfer(c: float) -> float:
    return 1.055 * c ** (1.0 / 2.4) - 0.055 if c > 0.0031308 else 12.92 * c


def srgb_to_lin_srgb(value: object) -> Components:
    return tuple(_decode_srgb_transfer(c / 255.0) for c in components(value))


def lin_srgb_to_srgb(value: object) -> Components:
    return tuple(255.0 * _encode_srgb_transfer(c) for c in components(value))


def display_p3_to_lin(value: object) -> Components:
    return tuple(_decode_srgb_transfer(c) for c in components(value))


def lin_to_display_p3(value: object) -> Components:
    return tuple(_encode_srgb_transfer(c) for c in components(value))


# ----------------------------------------------------------------------
# Matrix hops
# ----------------------------------------------------------------------


def _matrix_step(matrix: np.ndarray) -> Callable[[object], Components]:
    def step(value: object) -> Components:
        return mat_vec(matrix, components(value))

    return step


def _rgb_to_lms(matrix: np.ndarray, rgb: Components) -> Components:
    # Gray rows sum to one: r = g = b maps to l = m = s exactly.
    if rgb[0] == rgb[1] == rgb[2]:
        return rgb
    return mat_vec(matrix, rgb)


def _lms_to_rgb(matrix: np.ndarray, lms: Components) -> Components:
    if lms[0] == lms[1] == lms[2]:
        return lms
    return mat_vec(matrix, lms)


# ----------------------------------------------------------------------
# CIELab
# ----------------------------------------------------------------------


def xyz_to_lab(value: object) -> Components:
    x, y, z = (c / w for c, w in zip(components(value), mx.WHITE_D65))

    def f(t: float) -> float:
        return cbrt(t) if t > _LAB_EPSILON else (_LAB_KAPPA * t + 16.0) / 116.0

    fx, fy, fz = f(x), f(y), f(z)
    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


def lab_to_xyz(value: object) -> Components:
    L, a, b = components(value)
    fy = (L + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0
    edge = 6.0 / 29.0

    x = fx ** 3 if fx > edge else (116.0 * fx - 16.0) / _LAB_KAPPA
    y = fy ** 3 if L > 8.0 else L / _LAB_KAPPA
    z = fz ** 3 if fz > edge else (116.0 * fz - 16.0) / _LAB_KAPPA
    return tuple(float(c * w) for c, w in zip((x, y, z), mx.WHITE_D65))


# ----------------------------------------------------------------------
# Polar <-> rectangular
# ----------------------------------------------------------------------


def rect_to_polar_color(value: object) -> Components:
    """``(L, a, b)`` to ``(L, C, h)``; hue from ``atan2(b, a)``."""

    L, a, b = components(value)
    chroma, hue = rect_to_polar(a, b)
    return L, chroma, hue


def polar_to_rect_color(value: object) -> Components:
    L, chroma, hue = components(value)
    a, b = polar_to_rect(chroma, hue)
    return L, a, b


def ictcp_to_polar(value: object) -> Components:
    """``(I, Ct, Cp)`` to ``(I, C, h)`` with ``h = atan2(Ct, Cp)``."""

    i, ct, cp = components(value)
    chroma, hue = rect_to_polar(cp, ct)
    return i, chroma, hue


def polar_to_ictcp(value: object) -> Components:
    i, chroma, hue = components(value)
    cp, ct = polar_to_rect(chroma, hue)
    return i, ct, cp


def osa_ucs_to_polar(value: object) -> Components:
    """``(L, j, g)`` to ``(L, C, h)`` with ``h = atan2(j, g)``."""

    L, j, g = components(value)
    chroma, hue = rect_to_polar(g, j)
    return L, chroma, hue


def polar_to_osa_ucs(value: object) -> Components:
    L, chroma, hue = components(value)
    g, j = polar_to_rect(chroma, hue)
    return L, j, g


# ----------------------------------------------------------------------
# Oklab
# ----------------------------------------------------------------------


def _lms_to_oklab(lms: Components, exponent: Optional[float] = None) -> Components:
    if exponent is None:
        lms_p = tuple(cbrt(c) for c in lms)
    else:
        lms_p = tuple(signed_pow(c, exponent) for c in lms)
    if lms_p[0] == lms_p[1] == lms_p[2]:
        return lms_p[0], 0.0, 0.0
    return tuple(round_to(c, _NOISE_DIGITS) for c in mat_vec(mx.LMS3_TO_OKLAB, lms_p))


def _oklab_to_lms(value: object, exponent: Optional[float] = None) -> Components:
    lms_p = mat_vec(mx.OKLAB_TO_LMS3, components(value))
    if exponent is None:
        return tuple(c ** 3 for c in lms_p)
    return tuple(signed_pow(c, 1.0 / exponent) for c in lms_p)


def xyz_to_oklab(value: object) -> Components:
    return _lms_to_oklab(mat_vec(mx.XYZ_TO_LMS_OKLAB, components(value)))


def oklab_to_xyz(value: object) -> Components:
    return mat_vec(mx.LMS_OKLAB_TO_XYZ, _oklab_to_lms(value))


def lin_srgb_to_oklab(value: object) -> Components:
    return _lms_to_oklab(_rgb_to_lms(mx.LIN_SRGB_TO_LMS, components(value)))


def oklab_to_lin_srgb(value: object) -> Components:
    return _lms_to_rgb(mx.LMS_TO_LIN_SRGB, _oklab_to_lms(value))


def xyz_to_oklab_gamma(value: object) -> Components:
    return _lms_to_oklab(mat_vec(mx.XYZ_TO_LMS_OKLAB, components(value)), _OKLAB_GAMMA)


def oklab_gamma_to_xyz(value: object) -> Components:
    return mat_vec(mx.LMS_OKLAB_TO_XYZ, _oklab_to_lms(value, _OKLAB_GAMMA))


def lin_srgb_to_oklab_gamma(value: object) -> Components:
    return _lms_to_oklab(_rgb_to_lms(mx.LIN_SRGB_TO_LMS, components(value)), _OKLAB_GAMMA)


def oklab_gamma_to_lin_srgb(value: object) -> Components:
    return _lms_to_rgb(mx.LMS_TO_LIN_SRGB, _oklab_to_lms(value, _OKLAB_GAMMA))


# ----------------------------------------------------------------------
# IPT
# ----------------------------------------------------------------------


def xyz_ipt_to_ipt(value: object) -> Components:
    lms = mat_vec(mx.XYZ_IPT_TO_LMS_IPT, components(value))
    lms_p = tuple(signed_pow(c, _IPT_EXPONENT) for c in lms)
    return tuple(round_to(c, _NOISE_DIGITS) for c in mat_vec(mx.LMS_P_TO_IPT, lms_p))


def ipt_to_xyz_ipt(value: object) -> Components:
    lms_p = mat_vec(mx.IPT_TO_LMS_P, components(value))
    lms = tuple(signed_pow(c, 1.0 / _IPT_EXPONENT) for c in lms_p)
    return mat_vec(mx.LMS_IPT_TO_XYZ_IPT, lms)


# ----------------------------------------------------------------------
# Perceptual quantizer spaces (JzAzBz, ICtCp)
# ----------------------------------------------------------------------


def _pq_encode(lms: Components, c1: float, c2: float, c3: float, m1: float, m2: float) -> Components:
    # Negative cone responses only arise for imaginary colors; encode them as zero.
    encoded = []
    for c in lms:
        f = max(c, 0.0) ** m1
        encoded.append(((c1 + c2 * f) / (1.0 + c3 * f)) ** m2)
    return tuple(encoded)


def _pq_decode(lms_p: Components, c1: float, c2: float, c3: float, m1: float, m2: float) -> Components:
    decoded = []
    for c in lms_p:
        f = max(c, 0.0) ** (1.0 / m2)
        ratio = (c1 - f) / (c3 * f - c2)
        decoded.append(max(ratio, 0.0) ** (1.0 / m1))
    return tuple(decoded)


def xyz_cie_to_jzazbz(value: object) -> Components:
    X, Y, Z = components(value)
    x_abs = _JZ_B * X - (_JZ_B - 1.0) * Z
    y_abs = _JZ_G * Y - (_JZ_G - 1.0) * X

    lms = mat_vec(mx.XYZ_ABS_TO_LMS_JZAZBZ, (x_abs, y_abs, Z))
    lms_p = _pq_encode(lms, _JZ_C1, _JZ_C2, _JZ_C3, _JZ_N, _JZ_P)
    iz, az, bz = mat_vec(mx.LMS_P_TO_IZAZBZ, lms_p)

    jz = (1.0 + _JZ_D) * iz / (1.0 + _JZ_D * iz) - _JZ_D0
    return jz, az, bz


def jzazbz_to_xyz_cie(value: object) -> Components:
    jz, az, bz = components(value)
    iz = (jz + _JZ_D0) / (1.0 + _JZ_D - _JZ_D * (jz + _JZ_D0))

    lms_p = mat_vec(mx.IZAZBZ_TO_LMS_P, (iz, az, bz))
    lms = _pq_decode(lms_p, _JZ_C1, _JZ_C2, _JZ_C3, _JZ_N, _JZ_P)
    x_abs, y_abs, z_abs = mat_vec(mx.LMS_JZAZBZ_TO_XYZ_ABS, lms)

    X = (x_abs + (_JZ_B - 1.0) * z_abs) / _JZ_B
    Y = (y_abs + (_JZ_G - 1.0) * X) / _JZ_G
    return X, Y, z_abs


def xyz_cie_to_ictcp(value: object) -> Components:
    lms = mat_vec(mx.XYZ_CIE_TO_LMS_ICTCP, components(value))
    lms_p = _pq_encode(lms, _PQ_C1, _PQ_C2, _PQ_C3, _PQ_M1, _PQ_M2)
    return mat_vec(mx.LMS_P_TO_ICTCP, lms_p)


def ictcp_to_xyz_cie(value: object) -> Components:
    lms_p = mat_vec(mx.ICTCP_TO_LMS_P, components(value))
    lms = _pq_decode(lms_p, _PQ_C1, _PQ_C2, _PQ_C3, _PQ_M1, _PQ_M2)
    return mat_vec(mx.LMS_ICTCP_TO_XYZ_CIE, lms)


# ----------------------------------------------------------------------
# OSA-UCS (forward only)
# ----------------------------------------------------------------------


def xyz_cie_to_osa_ucs(value: object) -> Components:
    """XYZ (white Y = 1) to OSA-UCS ``(L, j, g)``."""

    xyz = tuple(c * 100.0 for c in components(value))
    X, Y, Z = xyz
    total = X + Y + Z
    if total == 0:
        x, y = 0.3127, 0.3290
    else:
        x, y = X / total, Y / total

    K = (
        4.4934 * x * x
        + 4.3034 * y * y
        - 4.276 * x * y
        - 1.3744 * x
        - 2.5643 * y
        + 1.8103
    )
    y_m = K * Y

    f1 = cbrt(y_m) - 2.0 / 3.0
    f2 = 0.042 * cbrt(y_m - 30.0)
    l_prime = 5.9 * (f1 + f2)
    L = (l_prime - 14.3993) / math.sqrt(2.0)
    C = 1.0 + f2 / f1 if f1 != 0 else 1.0

    r, g, b = (cbrt(c) for c in mat_vec(mx.XYZ_TO_RGB_OSA_UCS, xyz))
    a_axis = -13.7 * r + 17.7 * g - 4.0 * b
    b_axis = 1.7 * r + 8.0 * g - 9.7 * b
    return L, C * b_axis, C * a_axis


# ----------------------------------------------------------------------
# CAM16 hops
# ----------------------------------------------------------------------


def xyz_to_cam16(value: object, model: CAM16, extended: bool = False) -> Components:
    return model.forward(components(value), extended=extended).as_tuple()


def cam16_to_xyz(value: object, model: CAM16, extended: bool = False) -> Components:
    J, C, h = components(value)
    return model.inverse(J, C, h)


def cam16_to_cam16_ucs(value: object, model: CAM16, extended: bool = False) -> Components:
    comps = components(value, 3)
    if len(value) > 3:  # type: ignore[arg-type]
        comps = comps + (float(value[3]),)  # type: ignore[index]
    return model.to_ucs(comps)


def cam16_ucs_to_cam16(value: object, model: CAM16, extended: bool = False) -> Components:
    comps = components(value, 3)
    if len(value) > 5:  # type: ignore[arg-type]
        comps = comps + (0.0, 0.0, float(value[5]))  # type: ignore[index]
    return model.from_ucs(comps)


_CS = ColorSpace

STEP_CONVERTERS: Mapping[Tuple[ColorSpace, ColorSpace], Callable[[object], ColorValue]] = MappingProxyType(
    {
        (_CS.HEX, _CS.SRGB): hex_to_srgb,
        (_CS.SRGB, _CS.HEX): srgb_to_hex,
        (_CS.SRGB, _CS.LIN_SRGB): srgb_to_lin_srgb,
        (_CS.LIN_SRGB, _CS.SRGB): lin_srgb_to_srgb,
        (_CS.LIN_SRGB, _CS.XYZ): _matrix_step(mx.LIN_SRGB_TO_XYZ),
        (_CS.XYZ, _CS.LIN_SRGB): _matrix_step(mx.XYZ_TO_LIN_SRGB),
        (_CS.LIN_SRGB, _CS.OKLAB): lin_srgb_to_oklab,
        (_CS.OKLAB, _CS.LIN_SRGB): oklab_to_lin_srgb,
        (_CS.LIN_SRGB, _CS.OKLAB_GAMMA): lin_srgb_to_oklab_gamma,
        (_CS.OKLAB_GAMMA, _CS.LIN_SRGB): oklab_gamma_to_lin_srgb,
        (_CS.XYZ, _CS.LAB): xyz_to_lab,
        (_CS.LAB, _CS.XYZ): lab_to_xyz,
        (_CS.LAB, _CS.LCH): rect_to_polar_color,
        (_CS.LCH, _CS.LAB): polar_to_rect_color,
        (_CS.XYZ, _CS.OKLAB): xyz_to_oklab,
        (_CS.OKLAB, _CS.XYZ): oklab_to_xyz,
        (_CS.OKLAB, _CS.OKLCH): rect_to_polar_color,
        (_CS.OKLCH, _CS.OKLAB): polar_to_rect_color,
        (_CS.XYZ, _CS.LIN_DISPLAY_P3): _matrix_step(mx.XYZ_TO_LIN_DISPLAY_P3),
        (_CS.LIN_DISPLAY_P3, _CS.XYZ): _matrix_step(mx.LIN_DISPLAY_P3_TO_XYZ),
        (_CS.LIN_DISPLAY_P3, _CS.DISPLAY_P3): lin_to_display_p3,
        (_CS.DISPLAY_P3, _CS.LIN_DISPLAY_P3): display_p3_to_lin,
        (_CS.XYZ, _CS.OKLAB_GAMMA): xyz_to_oklab_gamma,
        (_CS.OKLAB_GAMMA, _CS.XYZ): oklab_gamma_to_xyz,
        (_CS.OKLAB_GAMMA, _CS.OKLCH_GAMMA): rect_to_polar_color,
        (_CS.OKLCH_GAMMA, _CS.OKLAB_GAMMA): polar_to_rect_color,
        (_CS.XYZ, _CS.XYZ_IPT): _matrix_step(mx.XYZ_TO_XYZ_IPT),
        (_CS.XYZ_IPT, _CS.XYZ): _matrix_step(mx.XYZ_IPT_TO_XYZ),
        (_CS.XYZ_IPT, _CS.IPT): xyz_ipt_to_ipt,
        (_CS.IPT, _CS.XYZ_IPT): ipt_to_xyz_ipt,
        (_CS.IPT, _CS.IPT_CH): rect_to_polar_color,
        (_CS.IPT_CH, _CS.IPT): polar_to_rect_color,
        (_CS.XYZ, _CS.XYZ_CIE): _matrix_step(mx.XYZ_TO_XYZ_CIE),
        (_CS.XYZ_CIE, _CS.XYZ): _matrix_step(mx.XYZ_CIE_TO_XYZ),
        (_CS.XYZ_CIE, _CS.JZAZBZ): xyz_cie_to_jzazbz,
        (_CS.JZAZBZ, _CS.XYZ_CIE): jzazbz_to_xyz_cie,
        (_CS.JZAZBZ, _CS.JZCZHZ): rect_to_polar_color,
        (_CS.JZCZHZ, _CS.JZAZBZ): polar_to_rect_color,
        (_CS.XYZ_CIE, _CS.ICTCP): xyz_cie_to_ictcp,
        (_CS.ICTCP, _CS.XYZ_CIE): ictcp_to_xyz_cie,
        (_CS.ICTCP, _CS.ICTCP_CH): ictcp_to_polar,
        (_CS.ICTCP_CH, _CS.ICTCP): polar_to_ictcp,
        (_CS.XYZ_CIE, _CS.OSA_UCS): xyz_cie_to_osa_ucs,
        (_CS.OSA_UCS, _CS.OSA_UCS_CH): osa_ucs_to_polar,
        (_CS.OSA_UCS_CH, _CS.OSA_UCS): polar_to_osa_ucs,
    }
)

CAM16_STEP_CONVERTERS: Mapping[Tuple[ColorSpace, ColorSpace], Callable[..., Components]] = MappingProxyType(
    {
        (_CS.XYZ, _CS.CAM16): xyz_to_cam16,
        (_CS.CAM16, _CS.XYZ): cam16_to_xyz,
        (_CS.CAM16, _CS.CAM16_UCS): cam16_to_cam16_ucs,
        (_CS.CAM16_UCS, _CS.CAM16): cam16_ucs_to_cam16,
    }
)


def has_step(source: ColorSpace, target: ColorSpace) -> bool:
    key = (source, target)
    return key in STEP_CONVERTERS or key in CAM16_STEP_CONVERTERS


def step_convert(
    value: ColorValue,
    source: ColorSpace,
    target: ColorSpace,
    options: Optional[ConvertOptions] = None,
    model: Optional[CAM16] = None,
) -> ColorValue:
    """
    Convert ``value`` across one edge of the conversion graph.

    Raises
    ------
    NoConversionPathError
        ``(source, target)`` has no implemented converter.
    """

    key = (source, target)
    converter = STEP_CONVERTERS.get(key)
    if converter is not None:
        return converter(value)

    cam_converter = CAM16_STEP_CONVERTERS.get(key)
    if cam_converter is not None:
        options = options or ConvertOptions()
        model = model or CAM16(options.viewing_conditions)
        return cam_converter(value, model, options.cam16_extended)

    raise NoConversionPathError(source, target, f"Unimplemented conversion step {source.value} -> {target.value}")
