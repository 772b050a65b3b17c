"""
Conversion graph and breadth-first path finder.
"""

from __future__ import annotations

from collections import deque
from types import MappingProxyType
from typing import Deque, Mapping, Optional, Set, Tuple, Union

from chromatone.core.config import ColorSpace
from chromatone.conversion.spaces import resolve_space

_CS = ColorSpace

# Neighbour order is significant: BFS breaks ties by it.
CONVERSION_GRAPH: Mapping[ColorSpace, Tuple[ColorSpace, ...]] = MappingProxyType(
    {
        _CS.HEX: (_CS.SRGB,),
        _CS.SRGB: (_CS.HEX, _CS.LIN_SRGB),
        _CS.LIN_SRGB: (_CS.SRGB, _CS.XYZ, _CS.OKLAB, _CS.OKLAB_GAMMA),
        _CS.XYZ: (
            _CS.LIN_SRGB,
            _CS.LAB,
            _CS.OKLAB,
            _CS.LIN_DISPLAY_P3,
            _CS.OKLAB_GAMMA,
            _CS.XYZ_IPT,
            _CS.XYZ_CIE,
            _CS.CAM16,
        ),
        _CS.LAB: (_CS.XYZ, _CS.LCH),
        _CS.OKLAB: (_CS.LIN_SRGB, _CS.XYZ, _CS.OKLCH),
        _CS.LCH: (_CS.LAB,),
        _CS.OKLCH: (_CS.OKLAB,),
        _CS.LIN_DISPLAY_P3: (_CS.DISPLAY_P3, _CS.XYZ),
        _CS.DISPLAY_P3: (_CS.LIN_DISPLAY_P3,),
        _CS.OKLAB_GAMMA: (_CS.LIN_SRGB, _CS.XYZ, _CS.OKLCH_GAMMA),
        _CS.OKLCH_GAMMA: (_CS.OKLAB_GAMMA,),
        _CS.IPT: (_CS.XYZ_IPT, _CS.IPT_CH),
        _CS.IPT_CH: (_CS.IPT,),
        _CS.XYZ_IPT: (_CS.XYZ, _CS.IPT),
        _CS.XYZ_CIE: (_CS.XYZ, _CS.JZAZBZ, _CS.ICTCP, _CS.OSA_UCS),
        _CS.JZAZBZ: (_CS.XYZ_CIE, _CS.JZCZHZ),
        _CS.JZCZHZ: (_CS.JZAZBZ,),
        _CS.CAM16: (_CS.XYZ, _CS.CAM16_UCS),
        _CS.CAM16_UCS: (_CS.CAM16,),
        _CS.ICTCP: (_CS.XYZ_CIE, _CS.ICTCP_CH),
        _CS.ICTCP_CH: (_CS.ICTCP,),
        # OSA-UCS has a forward transform only; no edge back into XYZ.
        _CS.OSA_UCS: (_CS.OSA_UCS_CH,),
        _CS.OSA_UCS_CH: (_CS.OSA_UCS,),
    }
)


def find_path(
    source: Union[ColorSpace, str],
    target: Union[ColorSpace, str],
) -> Optional[Tuple[ColorSpace, ...]]:
    """
    Shortest hop-count path from ``source`` to ``target``.

    Returns the ordered spaces including both ends, a one-element path when
    ``source == target``, or ``None`` when ``target`` is unreachable.
    """

    source = resolve_space(source)
    target = resolve_space(target)

    if source == target:
        return (source,)

    visited: Set[ColorSpace] = {source}
    queue: Deque[Tuple[ColorSpace, Tuple[ColorSpace, ...]]] = deque([(source, (source,))])

    while queue:
        node, path = queue.popleft()
        for neighbour in CONVERSION_GRAPH.get(node, ()):
            if neighbour in visited:
                continue
            next_path = path + (neighbour,)
            if neighbour == target:
                return next_path
            visited.add(neighbour)
            queue.append((neighbour, next_path))

    return None
