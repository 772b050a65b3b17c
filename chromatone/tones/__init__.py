"""Tone palettes: lightness scales, max chroma, hue and chroma corrections."""

from chromatone.tones.corrections import (
    cam16_chroma,
    correct_chroma_to_cam16,
    correct_hue_to_ipt_hue,
    correct_hue_to_reference,
    ipt_hue,
)
from chromatone.tones.lightness import lab_to_oklab_lightness, oklab_to_lab_lightness
from chromatone.tones.max_chroma import find_max_chroma
from chromatone.tones.palette import RoleBase, construct_tone_palette, derive_role_bases

__all__ = [
    "cam16_chroma",
    "correct_chroma_to_cam16",
    "correct_hue_to_ipt_hue",
    "correct_hue_to_reference",
    "ipt_hue",
    "lab_to_oklab_lightness",
    "oklab_to_lab_lightness",
    "find_max_chroma",
    "RoleBase",
    "construct_tone_palette",
    "derive_role_bases",
]
