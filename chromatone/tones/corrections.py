"""
Correction loops that steer an Oklch color toward a target IPT hue or a
target CAM16 chroma while keeping its Oklch lightness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from chromatone.conversion.convert import convert_color
from chromatone.conversion.steps import components
from chromatone.core.config import NO_ROUNDING, ColorSpace
from chromatone.gamut.fitting import BLACK_OKLCH, MAX_BISECTION_STEPS, WHITE_OKLCH, Oklch
from chromatone.utils.numeric import EPSILON, floor_to, hue_difference, normalize_hue, round_to

logger = logging.getLogger(__name__)

# Smallest IPT hue difference worth correcting, in degrees
HUE_TOLERANCE = 2.0 ** -8

# CAM16 chroma added to the zero-chroma floor when the search collapses to zero
ZERO_CHROMA_OFFSET = 0.45


# ----------------------------------------------------------------------
# Hue
# ----------------------------------------------------------------------


def ipt_hue(oklch: Sequence[float]) -> float:
    """IPT hue of an Oklch color, rounded like a converted IPTch color."""

    return convert_color(components(oklch), ColorSpace.OKLCH, ColorSpace.IPT_CH)[2]


def correct_hue_to_ipt_hue(oklch: Sequence[float], target_ipt_hue: float, hue_digits: int = 2) -> Oklch:
    """
    Rotate the Oklch hue until the IPT hue matches ``target_ipt_hue``.

    Bisection runs over a half turn on the side indicated by the signed
    angular difference. Zero-chroma colors have no hue and are returned
    unchanged; lightness at or beyond 1 (0) gives white (black).
    """

    L, C, H = components(oklch)
    if L >= 1.0:
        return WHITE_OKLCH
    if L <= 0.0:
        return BLACK_OKLCH
    if C == 0:
        return L, C, H

    target = round_to(target_ipt_hue, hue_digits)
    precision = 10.0 ** -hue_digits

    diff = hue_difference(ipt_hue((L, C, H)), target)
    lo, hi = (H, H + 180.0) if diff <= 0 else (H - 180.0, H)

    hue = H
    for _ in range(MAX_BISECTION_STEPS):
        if abs(diff) <= HUE_TOLERANCE or abs(hi - lo) < 2.0 * precision:
            break
        mid = round_to((lo + hi) / 2.0, hue_digits)
        hue = normalize_hue(round_to(mid % 360.0, hue_digits))
        diff = hue_difference(ipt_hue((L, C, hue)), target)
        if diff <= 0:
            lo = mid
        else:
            hi = mid

    return L, C, hue


def correct_hue_to_reference(oklch: Sequence[float], reference_oklch: Sequence[float], hue_digits: int = 2) -> Oklch:
    """Rotate the Oklch hue until its IPT hue matches that of ``reference_oklch``."""

    return correct_hue_to_ipt_hue(oklch, ipt_hue(reference_oklch), hue_digits)


# ----------------------------------------------------------------------
# Chroma
# ----------------------------------------------------------------------


@dataclass
class _ChromaSearchState:
    """Best-so-far bookkeeping for the CAM16 chroma bisection."""

    delta: float = 0.0
    rising: int = 0             # consecutive steps where the error grew
    last_improving: float = 0.0  # midpoint before the error started growing

    def update(self, mid: float, delta: float) -> None:
        previous = self.delta if self.delta != 0 else delta
        self.delta = delta
        self.rising = self.rising + 1 if delta > previous else 0
        if self.rising == 0:
            self.last_improving = mid


def cam16_chroma(oklch: Sequence[float], digits: int = 3) -> float:
    """CAM16 chroma of an Oklch color, floored to ``digits``."""

    chroma = convert_color(components(oklch), ColorSpace.OKLCH, ColorSpace.CAM16, NO_ROUNDING)[1]
    return floor_to(chroma, digits)


def correct_chroma_to_cam16(
    oklch: Sequence[float],
    target_cam16_chroma: float,
    cam16_digits: int = 3,
    chroma_digits: int = 5,
    max_chroma: float = 0.6,
    retry_near_zero: bool = True,
) -> Oklch:
    """
    Rescale Oklch chroma until the CAM16 chroma matches the target.

    Parameters
    ----------
    oklch : sequence of float
        Color whose lightness and hue are kept.
    target_cam16_chroma : float
        Desired CAM16 chroma.
    cam16_digits, chroma_digits : int
        Digits kept (floored) for CAM16 and Oklch chroma.
    max_chroma : float
        Upper bound of the Oklch chroma search.
    retry_near_zero : bool
        When the search collapses to the smallest chroma step, search again
        for the zero-chroma CAM16 floor plus ``ZERO_CHROMA_OFFSET``.

    Notes
    -----
    Near zero Oklch chroma the CAM16 chroma is not monotonic. When the error
    grows on more than one consecutive step the search falls back to the
    last improving midpoint instead of shrinking toward zero.
    """

    L, C, H = components(oklch)
    target = floor_to(target_cam16_chroma, cam16_digits)
    cam16_precision = 10.0 ** -cam16_digits
    precision = 1.0 / 10.0 ** chroma_digits

    current = cam16_chroma((L, C, H), cam16_digits)
    state = _ChromaSearchState()
    lo, hi = 0.0, max_chroma
    chroma = C

    for _ in range(MAX_BISECTION_STEPS):
        if abs(current - target) <= cam16_precision + EPSILON or hi - lo <= precision + EPSILON:
            break
        mid = floor_to((lo + hi) / 2.0, chroma_digits)
        current = cam16_chroma((L, mid, H), cam16_digits)
        state.update(mid, abs(current - target))

        if current < target:
            lo = mid
        elif state.rising > 1:
            logger.debug("CAM16 chroma error growing at C=%.5f, back to %.5f", mid, state.last_improving)
            lo = mid = state.last_improving
        else:
            hi = mid
        chroma = mid
    else:
        logger.warning(
            "CAM16 chroma search stopped after %d steps (target %.3f, reached %.3f)",
            MAX_BISECTION_STEPS,
            target,
            current,
        )

    if retry_near_zero and chroma == precision:
        floor_chroma = convert_color((L, precision, H), ColorSpace.OKLCH, ColorSpace.CAM16)[1]
        logger.debug("Chroma collapsed to zero, retrying with CAM16 floor %.3f", floor_chroma)
        chroma = correct_chroma_to_cam16(
            (L, C, H),
            floor_chroma + ZERO_CHROMA_OFFSET,
            cam16_digits,
            chroma_digits,
            max_chroma,
            retry_near_zero=False,
        )[1]

    return L, chroma, H
