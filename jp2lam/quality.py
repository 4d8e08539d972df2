"""Quality-driven truncation: map a 0-100 quality setting to a slope threshold."""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence

from .pcrd import CodeBlockPcrdCurve
from .selection import LayerSelection, evaluate_lambda

# Pixel count of the image the quality curve was calibrated on (4000 x 3000).
_REFERENCE_PIXELS = 12_000_000.0
_FLOOR_MARGIN = 1.2


def quality_to_lambda(quality: int, pixel_count: int) -> float:
    """Slope threshold for ``quality`` (0-100), scaled by image size.

    Quality 100 means lossless and yields 0; quality 0 yields the largest float.
    Lambda falls on a log scale from quality 1 to 89, then fades to zero at 99.
    Smaller images get a proportionally lower lambda.
    """
    if quality < 0:
        raise ValueError(f"quality must be non-negative, got {quality}")
    if pixel_count < 0:
        raise ValueError(f"pixel count must be non-negative, got {pixel_count}")
    if quality >= 100:
        return 0.0
    if quality == 0:
        return sys.float_info.max

    t = (quality - 1.0) / 98.0
    log_lambda = 5.68 - 2.618 * t**0.85
    base_lambda = max(10.0**log_lambda, 1e-3)

    # The top of the range fades toward zero so q99 keeps every lossy pass.
    if quality >= 90:
        tail = (99.0 - min(quality, 99)) / 9.0
        tail_multiplier = tail * tail
    else:
        tail_multiplier = 1.0

    resolution_factor = (pixel_count / _REFERENCE_PIXELS) ** 0.35
    return base_lambda * resolution_factor * tail_multiplier


def _calibrate_lambda(
    curves: Sequence[CodeBlockPcrdCurve], raw_lambda: float, pixel_count: int
) -> float:
    """Scale ``raw_lambda`` down when the image's steepest slope is below the q=1 floor."""
    max_slope = max(
        (
            point.slope
            for curve in curves
            for point in curve.points[1:]
            if math.isfinite(point.slope) and point.slope > 0.0
        ),
        default=0.0,
    )
    if max_slope <= 0.0:
        return raw_lambda

    floor_lambda = quality_to_lambda(1, pixel_count)
    target_floor = max_slope * _FLOOR_MARGIN
    if target_floor >= floor_lambda:
        return raw_lambda
    return raw_lambda * (target_floor / floor_lambda)


def select_for_quality(
    curves: Sequence[CodeBlockPcrdCurve], quality: int, pixel_count: int
) -> LayerSelection:
    """Select truncation points from a quality setting rather than a byte budget.

    Below quality 100 the lambda curve is scaled per image so that quality 1
    lands just above the image's steepest slope.
    """
    if not curves:
        return LayerSelection(target_bytes=0, actual_bytes=0, lam=0.0)

    raw_lambda = quality_to_lambda(quality, pixel_count)
    if quality >= 100:
        lam = raw_lambda
    else:
        lam = _calibrate_lambda(curves, raw_lambda, pixel_count)
    return evaluate_lambda(curves, lam)