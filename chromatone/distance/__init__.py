"""Color-difference metrics and contrast."""

from chromatone.distance.contrast import contrast_ratio, relative_luminance
from chromatone.distance.delta_e import delta_e_1976, delta_e_2000, delta_e_ok, delta_e_z
from chromatone.distance.metric_factory import create_delta_e

__all__ = [
    "contrast_ratio",
    "relative_luminance",
    "delta_e_1976",
    "delta_e_2000",
    "delta_e_ok",
    "delta_e_z",
    "create_delta_e",
]
