"""
Basic chromatone conversion examples.
"""

from __future__ import annotations

import logging

from chromatone import (
    Color,
    ColorSpace,
    ConvertOptions,
    Gamut,
    adaptive_gamut_clip,
    convert,
    convert_color,
    fit_chroma_to_gamut,
)


def example_simple() -> tuple:
    """Convert a hex color to Oklch and back."""

    oklch = convert_color("#6750a4", ColorSpace.HEX, ColorSpace.OKLCH)
    back = convert_color(oklch, ColorSpace.OKLCH, ColorSpace.HEX)
    print(f"#6750a4 -> oklch{oklch} -> {back}")
    return oklch


def example_unrounded() -> tuple:
    """Keep full precision and get the extended CAM16 readout."""

    options = ConvertOptions(round=False, cam16_extended=True)
    cam16 = convert_color("#6750a4", "hex", "cam16", options)
    print(f"CAM16 J={cam16[0]:0.2f} C={cam16[1]:0.2f} h={cam16[2]:0.2f} H={cam16[6]:0.1f} ({cam16[7]})")
    return cam16


def example_gamut_mapping() -> tuple:
    """Bring an out-of-gamut Oklch color into sRGB two ways."""

    vivid = (0.7, 0.4, 150.0)
    fitted = fit_chroma_to_gamut(vivid, Gamut.SRGB)
    clipped = adaptive_gamut_clip(vivid, Gamut.SRGB)
    print(f"Chroma fit: {fitted} -> {convert_color(fitted, 'oklch', 'hex')}")
    print(f"Adaptive clip: {clipped} -> {convert_color(clipped, 'oklch', 'hex')}")
    return fitted, clipped


def example_error_handling() -> None:
    """Boundary conversions report failures instead of raising."""

    result = convert("#nothex", ColorSpace.HEX, ColorSpace.OKLCH)
    print(f"ok={result.ok} error={result.error}")

    color = Color("#ff0000", "hex").to("oklab")
    print(f"Color object: {color.space.value} {color.value}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("Running chromatone basic examples...")
    example_simple()
    example_unrounded()
    example_gamut_mapping()
    example_error_handling()
