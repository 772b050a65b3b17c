"""
Factory utilities for selecting a color-difference metric.
"""

from __future__ import annotations

from typing import Callable, Union

from chromatone.core.config import DeltaEMetric
from chromatone.distance.delta_e import delta_e_1976, delta_e_2000, delta_e_ok, delta_e_z

DeltaEFunction = Callable[..., float]


def create_delta_e(metric: Union[DeltaEMetric, str]) -> DeltaEFunction:
    """Return the difference function for ``metric``."""

    if isinstance(metric, str):
        try:
            metric = DeltaEMetric(metric.lower())
        except ValueError:
            raise ValueError(f"Unknown delta E metric: {metric}") from None

    if metric == DeltaEMetric.CIE76:
        return delta_e_1976

    if metric == DeltaEMetric.CIEDE2000:
        return delta_e_2000

    if metric == DeltaEMetric.OK:
        return delta_e_ok

    if metric == DeltaEMetric.JZ:
        return delta_e_z

    raise ValueError(f"Unknown delta E metric: {metric}")
