"""Color appearance model."""

from chromatone.appearance.cam16 import (
    CAM16,
    DEFAULT_VIEWING_CONDITIONS,
    NON_REAL_CHROMA,
    Cam16Correlates,
    ViewingConditions,
    xyz_to_cam16_chroma,
)

__all__ = [
    "CAM16",
    "Cam16Correlates",
    "ViewingConditions",
    "DEFAULT_VIEWING_CONDITIONS",
    "NON_REAL_CHROMA",
    "xyz_to_cam16_chroma",
]
