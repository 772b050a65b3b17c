"""
Main chromatone palette pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple, Union

from chromatone.conversion.convert import convert_color, convert_to_grayscale
from chromatone.conversion.spaces import resolve_gamut, resolve_space
from chromatone.conversion.steps import ColorValue, components
from chromatone.core.config import ColorSpace, Gamut, PaletteConfig, PaletteRole
from chromatone.gamut.fitting import Oklch
from chromatone.tones.palette import RoleBase, construct_tone_palette, derive_role_bases
from chromatone.utils.numeric import round_to

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToneEntry:
    """One tone of a palette with its display color and perceptual readouts."""

    tone: float
    color: ColorValue            # in the configured output space
    color_oklch: Oklch
    color_hex_gray: str          # gray with the same luminance
    rgb_gray_component: float    # sRGB channel value of that gray
    lightness_lab: float         # Lab L, whole numbers
    chroma_cam16: float          # CAM16 C, one decimal
    hue_ipt: float               # IPT hue, whole degrees


@dataclass(frozen=True)
class TonalPalette:
    """Tones of one palette role, in the configured tone order."""

    role: PaletteRole
    tones: Tuple[ToneEntry, ...]

    def colors(self) -> List[ColorValue]:
        return [entry.color for entry in self.tones]


class TonePaletteBuilder:
    """
    Material-style core palette builder working in Oklch.

    Pipeline stages:
        1. Seed conversion to Oklch and gray detection
        2. Role base colors (primary, secondary, tertiary, error, neutral,
           neutral variant)
        3. Tone palettes per role (gray-preserving gamut fit, IPT hue and
           CAM16 chroma correction)
        4. Output encoding and readouts
    """

    def __init__(self, config: Optional[PaletteConfig] = None) -> None:
        self.config = config or PaletteConfig()
        self.config.validate()

        logger.info("Initializing palette builder")
        logger.info("  Gamut: %s", self.config.gamut.value)
        logger.info("  Output: %s", self.config.output_space.value)
        logger.info("  Policy: %s", self.config.chroma_policy.value)

    def build(self, seed: ColorValue, source_space: Union[ColorSpace, str] = ColorSpace.HEX) -> List[TonalPalette]:
        """
        Build the six role palettes for a seed color.

        Parameters
        ----------
        seed : str or sequence of float
            Seed color in ``source_space``.
        source_space : ColorSpace or str
            Space of the seed.

        Returns
        -------
        list of TonalPalette
            In ``PaletteRole`` order.

        Raises
        ------
        ColorError
            The seed is malformed or ``source_space`` is unknown.
        """

        logger.info("Building palettes for seed %s (%s)", seed, source_space)

        seed_oklch, is_gray = self._stage_seed(seed, source_space)
        bases = self._stage_role_bases(seed_oklch)
        palettes = self._stage_tones(bases)
        result = self._stage_outputs(palettes, is_gray)

        logger.info("Built %d palettes with %d tones each", len(result), len(self.config.tones))
        return result

    def _stage_seed(self, seed: ColorValue, source_space: Union[ColorSpace, str]) -> Tuple[Oklch, bool]:
        logger.debug("Stage 1: seed conversion")
        source_space = resolve_space(source_space)
        options = self.config.convert_options()

        seed_oklch = components(convert_color(seed, source_space, ColorSpace.OKLCH, options))
        r, g, b = components(convert_color(seed, source_space, ColorSpace.SRGB, options))
        is_gray = r == g == b
        if is_gray:
            logger.debug("Gray seed, palettes will be encoded as grays")
        return seed_oklch, is_gray

    def _stage_role_bases(self, seed_oklch: Oklch) -> List[RoleBase]:
        logger.debug("Stage 2: role base colors")
        return derive_role_bases(seed_oklch, self.config)

    def _stage_tones(self, bases: Sequence[RoleBase]) -> List[Tuple[RoleBase, List[Tuple[float, ColorValue]], List[Tuple[float, Oklch]]]]:
        logger.debug("Stage 3: tone palettes")
        palettes = []
        for base in bases:
            logger.info("Constructing %s palette", base.role.value)
            outputs, oklch = construct_tone_palette(
                base.oklch,
                base.target_ipt_hue,
                base.target_cam16_chroma,
                self.config,
            )
            palettes.append((base, outputs, oklch))
        return palettes

    def _stage_outputs(self, palettes, is_gray: bool) -> List[TonalPalette]:
        logger.debug("Stage 4: output encoding")
        options = self.config.convert_options()

        result = []
        for base, outputs, oklch_tones in palettes:
            entries = []
            for (tone, color), (_, oklch) in zip(outputs, oklch_tones):
                gray_hex = convert_to_grayscale(oklch, ColorSpace.OKLCH, ColorSpace.HEX, options=options)
                if is_gray:
                    color = convert_to_grayscale(oklch, ColorSpace.OKLCH, self.config.output_space, options=options)
                    oklch = components(convert_to_grayscale(oklch, ColorSpace.OKLCH, ColorSpace.OKLCH, options=options))
                entries.append(self._tone_entry(tone, color, oklch, gray_hex, options))
            result.append(TonalPalette(base.role, tuple(entries)))
        return result

    @staticmethod
    def _tone_entry(tone: float, color: ColorValue, oklch: Oklch, gray_hex: str, options) -> ToneEntry:
        gray_rgb = convert_to_grayscale(oklch, ColorSpace.OKLCH, ColorSpace.SRGB, options=options)
        return ToneEntry(
            tone=tone,
            color=color,
            color_oklch=oklch,
            color_hex_gray=gray_hex,
            rgb_gray_component=gray_rgb[0],
            lightness_lab=round_to(convert_color(oklch, ColorSpace.OKLCH, ColorSpace.LAB, options)[0], 0),
            chroma_cam16=round_to(convert_color(oklch, ColorSpace.OKLCH, ColorSpace.CAM16, options)[1], 1),
            hue_ipt=round_to(convert_color(oklch, ColorSpace.OKLCH, ColorSpace.IPT_CH, options)[2], 0),
        )


def build_palettes(
    seed: ColorValue,
    source_space: Union[ColorSpace, str] = ColorSpace.HEX,
    tones: Optional[Sequence[float]] = None,
    gamut: Optional[Union[Gamut, str]] = None,
    output_space: Optional[Union[ColorSpace, str]] = None,
    config: Optional[PaletteConfig] = None,
) -> List[TonalPalette]:
    """
    Convenience wrapper for building the core palettes of a seed color.

    Explicit ``tones``, ``gamut`` and ``output_space`` override the
    corresponding fields of ``config``; left as ``None`` they keep the
    config values (sRGB, hex output and the default tones unless set).
    """

    config = config or PaletteConfig()
    config = replace(
        config,
        tones=tuple(tones) if tones is not None else config.tones,
        gamut=resolve_gamut(gamut) if gamut is not None else config.gamut,
        output_space=resolve_space(output_space) if output_space is not None else config.output_space,
    )

    builder = TonePaletteBuilder(config)
    return builder.build(seed, source_space)
