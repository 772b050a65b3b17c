"""
Tone palette scenarios.
"""

from __future__ import annotations

import logging

from chromatone import (
    ChromaPolicy,
    ColorSpace,
    Gamut,
    PaletteConfig,
    TonePaletteBuilder,
    build_palettes,
)


def example_default_palettes() -> list:
    """Build the six core palettes for a seed color."""

    palettes = build_palettes("#6750a4", tones=(0, 10, 40, 90, 100))
    for palette in palettes:
        print(f"{palette.role.value:>16}: {' '.join(palette.colors())}")
    return palettes


def example_readouts() -> None:
    """Print the perceptual readouts of the primary palette."""

    primary = build_palettes("#3a7bd5", tones=(20, 50, 80))[0]
    for entry in primary.tones:
        print(
            f"tone {entry.tone:>3}: {entry.color} gray {entry.color_hex_gray} "
            f"L*={entry.lightness_lab} C16={entry.chroma_cam16} hIPT={entry.hue_ipt}"
        )


def example_display_p3_content() -> list:
    """Content policy in the Display P3 gamut with P3 output."""

    config = PaletteConfig(
        gamut=Gamut.DISPLAY_P3,
        output_space=ColorSpace.DISPLAY_P3,
        chroma_policy=ChromaPolicy.CONTENT,
        tones=(30, 60, 90),
    )
    palettes = TonePaletteBuilder(config).build("#e8590c")
    for palette in palettes:
        print(f"{palette.role.value:>16}: {palette.colors()}")
    return palettes


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("Running chromatone palette examples...")
    example_default_palettes()
    example_readouts()
    example_display_p3_content()
