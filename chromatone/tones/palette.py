"""
Role policy and per-role tone palette construction in Oklch.

A seed color is turned into six role base colors (Material-style core
palette). Each base is expanded into a tone palette whose lightness follows
Lab tones while hue and chroma are held at IPT hue and CAM16 chroma targets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from chromatone.conversion.convert import convert_color
from chromatone.conversion.steps import ColorValue, components
from chromatone.core.config import NO_ROUNDING, ChromaPolicy, ColorSpace, PaletteConfig, PaletteRole
from chromatone.gamut.fitting import BLACK_OKLCH, WHITE_OKLCH, Oklch, fit_chroma_to_gamut_preserving_gray
from chromatone.gamut.membership import is_in_gamut
from chromatone.tones.corrections import correct_chroma_to_cam16, correct_hue_to_ipt_hue
from chromatone.tones.lightness import lab_to_oklab_lightness
from chromatone.tones.max_chroma import find_max_chroma
from chromatone.utils.numeric import round_to

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleBase:
    """Base color of one palette role with the targets its tones are held to."""

    role: PaletteRole
    oklch: Oklch
    target_ipt_hue: float
    target_cam16_chroma: float


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------


def derive_role_bases(seed_oklch: Sequence[float], config: PaletteConfig) -> List[RoleBase]:
    """
    Derive the six role base colors from a seed.

    Parameters
    ----------
    seed_oklch : sequence of float
        Seed color in Oklch.
    config : PaletteConfig
        Chroma policy, chroma targets, gray and error defaults.

    Returns
    -------
    list of RoleBase
        In ``PaletteRole`` order: primary, secondary, tertiary, error,
        neutral, neutral-variant.
    """

    L, C, H = components(seed_oklch)
    if config.find_max_chroma and C != 0:
        C = find_max_chroma(
            (L, C, H),
            config.gamut,
            config.metric,
            config.precision.chroma,
            config.max_chroma,
            config.jnd_delta_e2000,
            config.jnd_delta_e_ok,
        )

    primary_hue = config.gray_ipt_hue if C == 0 else convert_color((L, C, H), ColorSpace.OKLCH, ColorSpace.IPT_CH, NO_ROUNDING)[2]
    tertiary_hue = (primary_hue + config.tertiary_hue_shift) % 360.0
    tertiary_oklch_hue = (H + config.tertiary_hue_shift) % 360.0

    # Equal CAM16 chroma maps to different Oklch chroma per hue
    J_prm, C_prm, h_prm = convert_color((L, C, H), ColorSpace.OKLCH, ColorSpace.CAM16, NO_ROUNDING)[:3]
    J_trt, _, h_trt = convert_color((L, C, tertiary_oklch_hue), ColorSpace.OKLCH, ColorSpace.CAM16, NO_ROUNDING)[:3]

    targets = _chroma_targets(C_prm, config)
    content = config.chroma_policy == ChromaPolicy.CONTENT

    def oklch_chroma(J: float, cam16_chroma: float, h: float) -> float:
        return convert_color((J, cam16_chroma, h), ColorSpace.CAM16, ColorSpace.OKLCH, config.convert_options())[1]

    plan = (
        (PaletteRole.PRIMARY, C if content else oklch_chroma(J_prm, targets[0], h_prm), H, primary_hue),
        (PaletteRole.SECONDARY, oklch_chroma(J_prm, targets[1], h_prm), H, primary_hue),
        (PaletteRole.TERTIARY, oklch_chroma(J_trt, targets[2], h_trt), tertiary_oklch_hue, tertiary_hue),
        (PaletteRole.NEUTRAL, oklch_chroma(J_prm, targets[3], h_prm), H, primary_hue),
        (PaletteRole.NEUTRAL_VARIANT, oklch_chroma(J_prm, targets[4], h_prm), H, primary_hue),
    )

    bases = {}
    for (role, chroma, hue, ipt_hue), target in zip(plan, targets):
        oklch = correct_chroma_to_cam16(
            (L, chroma, hue),
            target,
            config.cam16_chroma_digits,
            config.precision.chroma,
            config.max_chroma_oklch,
        )
        oklch = correct_hue_to_ipt_hue(oklch, ipt_hue, config.precision.hue)
        logger.debug("%s base %s (IPT hue %.2f, CAM16 chroma %.2f)", role.value, oklch, ipt_hue, target)
        bases[role] = RoleBase(role, oklch, ipt_hue, target)

    bases[PaletteRole.ERROR] = RoleBase(
        PaletteRole.ERROR,
        components(config.error_color_oklch),
        config.error_ipt_hue,
        config.chroma_targets[5],
    )

    return [bases[role] for role in PaletteRole]


def construct_tone_palette(
    base_oklch: Sequence[float],
    target_ipt_hue: float,
    target_cam16_chroma: float,
    config: PaletteConfig,
) -> Tuple[List[Tuple[float, ColorValue]], List[Tuple[float, Oklch]]]:
    """
    Expand a base color into one color per tone of ``config.tones``.

    Tones 0 and 100 are black and white. Every other tone takes its Oklch
    lightness from the Lab tone, then is fitted to the gamut at constant gray
    lightness, rotated to ``target_ipt_hue``, rescaled to
    ``target_cam16_chroma`` and fitted again against the original tone
    lightness.

    Returns
    -------
    tuple
        ``(outputs, oklch)``: lists of ``(tone, color)`` pairs, the first
        encoded in ``config.output_space``, the second in Oklch.
    """

    L, C, H = components(base_oklch)
    if config.find_max_chroma and C != 0:
        C = find_max_chroma(
            (L, C, H),
            config.gamut,
            config.metric,
            config.precision.chroma,
            config.max_chroma,
            config.jnd_delta_e2000,
            config.jnd_delta_e_ok,
        )

    palette: List[Tuple[float, Oklch]] = []
    for tone in config.tones:
        palette.append((tone, _tone_color(tone, C, H, target_ipt_hue, target_cam16_chroma, config)))

    outputs = [(tone, _encode(oklch, config)) for tone, oklch in palette]
    return outputs, palette


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------


def _chroma_targets(primary_chroma: float, config: PaletteConfig) -> Tuple[float, float, float, float, float]:
    """CAM16 chroma targets for primary, secondary, tertiary, neutral, neutral variant."""

    primary, secondary, tertiary, neutral, neutral_variant, _ = config.chroma_targets
    if config.chroma_policy == ChromaPolicy.CONTENT:
        return (
            primary_chroma,
            primary_chroma / 3.0,
            primary_chroma / 2.0,
            min(primary_chroma / 12.0, neutral),
            min(primary_chroma / 6.0, neutral_variant),
        )
    return max(primary, primary_chroma), secondary, tertiary, neutral, neutral_variant


def _tone_color(
    tone: float,
    chroma: float,
    hue: float,
    target_ipt_hue: float,
    target_cam16_chroma: float,
    config: PaletteConfig,
) -> Oklch:
    if tone == 0:
        return BLACK_OKLCH
    if tone == 100:
        return WHITE_OKLCH

    digits = config.precision
    lightness = lab_to_oklab_lightness(tone, digits.lightness)
    color = (lightness, chroma, hue)

    color = fit_chroma_to_gamut_preserving_gray(color, config.gamut, 0.0, digits.lightness, digits.chroma)
    color = correct_hue_to_ipt_hue(color, target_ipt_hue, digits.hue)
    color = correct_chroma_to_cam16(
        color,
        target_cam16_chroma,
        config.cam16_chroma_digits,
        digits.chroma,
        config.max_chroma_oklch,
    )
    color = fit_chroma_to_gamut_preserving_gray(color, config.gamut, lightness, digits.lightness, digits.chroma)

    logger.debug("Tone %s -> %s", tone, color)
    return color


def _encode(oklch: Oklch, config: PaletteConfig) -> ColorValue:
    """Encode in the output space, rounding chroma up first when that stays in gamut."""

    L, C, H = oklch
    rounded = round_to(C, config.output_chroma_digits)
    if rounded > C and is_in_gamut((L, rounded, H), ColorSpace.OKLCH, config.gamut):
        oklch = (L, rounded, H)
    return convert_color(oklch, ColorSpace.OKLCH, config.output_space, config.convert_options())
