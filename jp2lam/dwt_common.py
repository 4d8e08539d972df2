"""Shared helpers for the two-dimensional wavelet transforms."""

from __future__ import annotations

from collections.abc import Sized


class DwtError(ValueError):
    """Raised when the inputs of a wavelet transform are inconsistent."""


def encode_resolutions(width: int, height: int, levels: int) -> list[tuple[int, int]]:
    """Return the (width, height) of every resolution, coarsest first.

    The list holds ``levels + 1`` entries; the last one is the full image size
    and each earlier entry halves the next one, rounding up.
    """
    if levels < 0:
        raise DwtError(f"DWT decomposition levels must be non-negative, got {levels}")
    w, h = width, height
    resolutions = [(w, h)]
    for _ in range(levels):
        w = -(-w // 2)
        h = -(-h // 2)
        resolutions.append((w, h))
    resolutions.reverse()
    return resolutions


def check_area(data: Sized, width: int, height: int) -> int:
    """Check that ``data`` holds exactly ``width * height`` samples.

    Returns the image area; raises :class:`DwtError` on a mismatch.
    """
    if width < 0 or height < 0:
        raise DwtError(f"DWT image dimensions must be non-negative, got {width}x{height}")
    area = width * height
    if len(data) != area:
        raise DwtError(f"DWT input length {len(data)} did not match image area {area}")
    return area