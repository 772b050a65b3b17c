"""
Configuration primitives for chromatone.

Defines enums for color spaces, gamuts, difference metrics and palette roles,
and dataclasses collecting the numeric options shared by conversion and
palette construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from chromatone.appearance.cam16 import ViewingConditions


class ColorSpace(Enum):
    """Color spaces known to the conversion graph."""

    HEX = "hex"                        # "#rrggbb" / "#rgb"
    SRGB = "srgb"                      # R, G, B as 0..255
    LIN_SRGB = "lin_srgb"              # linear sRGB, 0..1
    XYZ = "xyz"                        # CIE XYZ D65, Y as 0..1
    LAB = "lab"                        # CIELab D65
    LCH = "lch"                        # CIELch D65
    OKLAB = "oklab"
    OKLCH = "oklch"
    LIN_DISPLAY_P3 = "lin_display_p3"  # linear Display-P3, 0..1
    DISPLAY_P3 = "display_p3"          # Display-P3, 0..1
    OKLAB_GAMMA = "oklab_gamma"        # Oklab with exponent 0.323
    OKLCH_GAMMA = "oklch_gamma"
    IPT = "ipt"
    IPT_CH = "ipt_ch"
    XYZ_IPT = "xyz_ipt"                # XYZ with the IPT D65 white
    XYZ_CIE = "xyz_cie"                # XYZ with the CIE 1931 D65 white
    JZAZBZ = "jzazbz"
    JZCZHZ = "jzczhz"
    CAM16 = "cam16"                    # J, C, h, M, s, Q
    CAM16_UCS = "cam16_ucs"            # J', M', h, a', b', C
    ICTCP = "ictcp"
    ICTCP_CH = "ictcp_ch"
    OSA_UCS = "osa_ucs"                # L, j, g
    OSA_UCS_CH = "osa_ucs_ch"


class Gamut(Enum):
    """Target display gamuts."""

    SRGB = "srgb"
    DISPLAY_P3 = "display_p3"


class DeltaEMetric(Enum):
    """Perceptual color-difference formulas."""

    CIE76 = "cie76"          # Euclidean in Lab
    CIEDE2000 = "ciede2000"  # CIE 2000 weighted difference
    OK = "ok"                # Euclidean in Oklab
    JZ = "jz"                # JzCzHz polar difference


class PaletteRole(Enum):
    """Palette roles, in core-palette order."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    ERROR = "error"
    NEUTRAL = "neutral"
    NEUTRAL_VARIANT = "neutral-variant"


class ChromaPolicy(Enum):
    """How target CAM16 chroma is assigned to palette roles."""

    VIBRANT = "vibrant"  # fixed chroma targets per role
    CONTENT = "content"  # targets proportional to the seed chroma


RGB_OUTPUT_SPACES = (
    ColorSpace.HEX,
    ColorSpace.SRGB,
    ColorSpace.LIN_SRGB,
    ColorSpace.DISPLAY_P3,
    ColorSpace.LIN_DISPLAY_P3,
)

DEFAULT_TONES: Tuple[int, ...] = (
    0, 1, 4, 5, 6, 10, 12, 17, 20, 22, 24, 25, 30, 35,
    40, 50, 60, 70, 80, 87, 90, 92, 94, 95, 96, 98, 99, 100,
)


@dataclass(frozen=True)
class Precision:
    """Decimal digits kept per channel class when rounding results."""

    lin_rgb: int = 5     # linear sRGB / linear Display-P3
    lightness: int = 5   # L in Oklab/Oklch and friends
    chroma: int = 5      # C in polar spaces
    hue: int = 2         # h in polar spaces
    ab: int = 5          # a, b in rectangular spaces
    srgb: int = 0        # sRGB 0..255
    display_p3: int = 4  # Display-P3 0..1

    def validate(self) -> None:
        """Validate digit counts."""

        for name in ("lin_rgb", "lightness", "chroma", "hue", "ab", "srgb", "display_p3"):
            digits = getattr(self, name)
            if not isinstance(digits, int) or not (0 <= digits <= 17):
                raise ValueError(f"Precision {name}={digits!r} out of range [0, 17]")


@dataclass(frozen=True)
class ConvertOptions:
    """
    Options for composite color conversion.

    ``viewing_conditions`` of ``None`` selects the precomputed default CAM16
    viewing conditions.
    """

    round: bool = True
    precision: Precision = field(default_factory=Precision)
    viewing_conditions: Optional["ViewingConditions"] = None
    cam16_extended: bool = False  # hue quadrature + hue composition

    def validate(self) -> None:
        """Validate nested precision settings."""

        self.precision.validate()

    def unrounded(self) -> "ConvertOptions":
        """Same options with the final rounding pass disabled."""

        return ConvertOptions(
            round=False,
            precision=self.precision,
            viewing_conditions=self.viewing_conditions,
            cam16_extended=self.cam16_extended,
        )


NO_ROUNDING = ConvertOptions(round=False)


@dataclass
class PaletteConfig:
    """
    Complete configuration for tone-palette construction.

    Defaults follow Material-style core palettes: vibrant chroma targets,
    sRGB gamut, hex output.
    """

    # Gamut and output
    gamut: Gamut = Gamut.SRGB
    output_space: ColorSpace = ColorSpace.HEX
    tones: Tuple[float, ...] = DEFAULT_TONES

    # Max-chroma recovery
    find_max_chroma: bool = True
    metric: DeltaEMetric = DeltaEMetric.CIEDE2000
    jnd_delta_e2000: float = 0.2
    jnd_delta_e_ok: float = 0.002
    max_chroma: float = 0.4

    # Role policy
    chroma_policy: ChromaPolicy = ChromaPolicy.VIBRANT
    # CAM16 chroma: primary (min), secondary, tertiary, neutral, neutral variant, error
    chroma_targets: Tuple[float, float, float, float, float, float] = (48, 16, 24, 4, 8, 84)
    gray_ipt_hue: float = 200.0
    tertiary_hue_shift: float = 60.0
    error_color_oklch: Tuple[float, float, float] = (0.59391, 0.20442, 27.81)
    error_ipt_hue: float = 32.13

    # Correction loops
    max_chroma_oklch: float = 0.6  # upper bound for CAM16 chroma matching
    cam16_chroma_digits: int = 3
    output_chroma_digits: int = 3  # chroma rounded up before encoding, if in gamut

    precision: Precision = field(default_factory=Precision)

    def validate(self) -> None:
        """Validate configuration parameters."""

        self.precision.validate()

        if not self.tones:
            raise ValueError("Tone list is empty")
        for tone in self.tones:
            if not (0 <= tone <= 100):
                raise ValueError(f"Tone {tone} out of range [0, 100]")

        if self.output_space not in RGB_OUTPUT_SPACES:
            raise ValueError(
                f"Output space {self.output_space.value} is not an RGB encoding"
            )

        if self.metric not in (DeltaEMetric.CIEDE2000, DeltaEMetric.OK):
            raise ValueError(f"Metric {self.metric.value} has no JND threshold")

        if self.jnd_delta_e2000 <= 0 or self.jnd_delta_e_ok <= 0:
            raise ValueError("JND thresholds must be positive")

        if not (0 < self.max_chroma <= 1) or not (0 < self.max_chroma_oklch <= 1):
            raise ValueError("Chroma search bounds out of range (0, 1]")

        if len(self.chroma_targets) != 6 or any(c < 0 for c in self.chroma_targets):
            raise ValueError("chroma_targets needs six non-negative CAM16 chroma values")

        if not (0 <= self.cam16_chroma_digits <= 17) or not (0 <= self.output_chroma_digits <= 17):
            raise ValueError("Chroma digits out of range [0, 17]")

    def convert_options(self) -> ConvertOptions:
        """Rounded conversion options matching this configuration."""

        return ConvertOptions(precision=self.precision)

    @property
    def jnd(self) -> float:
        """Just-noticeable difference for the selected metric."""

        return self.jnd_delta_e2000 if self.metric == DeltaEMetric.CIEDE2000 else self.jnd_delta_e_ok
