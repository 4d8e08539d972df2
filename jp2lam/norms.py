"""Wavelet synthesis norms and quantisation step-size encoding."""

from __future__ import annotations

import math
from enum import Enum


class BandOrientation(Enum):
    """Orientation of a wavelet subband."""

    LL = "LL"
    HL = "HL"
    LH = "LH"
    HH = "HH"


_NORMS_53: dict[BandOrientation, tuple[float, ...]] = {
    BandOrientation.LL: (1.000, 1.500, 2.750, 5.375, 10.68, 21.34, 42.67, 85.33, 170.7, 341.3),
    BandOrientation.HL: (1.038, 1.592, 2.919, 5.703, 11.33, 22.64, 45.25, 90.48, 180.9, 0.0),
    BandOrientation.LH: (1.038, 1.592, 2.919, 5.703, 11.33, 22.64, 45.25, 90.48, 180.9, 0.0),
    BandOrientation.HH: (0.7186, 0.9218, 1.586, 3.043, 6.019, 12.01, 24.00, 47.97, 95.93, 0.0),
}

_NORMS_97: dict[BandOrientation, tuple[float, ...]] = {
    BandOrientation.LL: (1.000, 1.965, 4.177, 8.403, 16.90, 33.84, 67.69, 135.3, 270.6, 540.9),
    BandOrientation.HL: (2.022, 3.989, 8.355, 17.04, 34.27, 68.63, 137.3, 274.6, 549.0, 0.0),
    BandOrientation.LH: (2.022, 3.989, 8.355, 17.04, 34.27, 68.63, 137.3, 274.6, 549.0, 0.0),
    BandOrientation.HH: (2.080, 3.865, 8.307, 17.18, 34.71, 69.59, 139.3, 278.6, 557.2, 0.0),
}

_GAINS = {
    BandOrientation.LL: 0,
    BandOrientation.HL: 1,
    BandOrientation.LH: 1,
    BandOrientation.HH: 2,
}

_U8_MAX = 0xFF


def _lookup(table: dict[BandOrientation, tuple[float, ...]], level: int, band: BandOrientation) -> float:
    if level < 0:
        raise ValueError(f"decomposition level must be non-negative, got {level}")
    limit = 9 if band is BandOrientation.LL else 8
    return table[band][min(level, limit)]


def get_norm_53(level: int, band: BandOrientation) -> float:
    """Synthesis norm of a 5/3 subband at ``level`` (clamped to the table)."""
    return _lookup(_NORMS_53, level, band)


def get_norm_97(level: int, band: BandOrientation) -> float:
    """Synthesis norm of a 9/7 subband at ``level`` (clamped to the table)."""
    return _lookup(_NORMS_97, level, band)


def band_gain(band: BandOrientation) -> int:
    """Log2 of the nominal dynamic-range gain of a subband."""
    return _GAINS[band]


def reversible_exponent(precision: int, band: BandOrientation) -> int:
    """Exponent signalled for a reversible subband, saturating at 255."""
    return min(min(precision, _U8_MAX) + band_gain(band), _U8_MAX)


def _floor_log2(value: int) -> int:
    return max(value, 1).bit_length() - 1


def encode_stepsize(stepsize: int, numbps: int) -> tuple[int, int]:
    """Pack a step size (scaled by 8192) into an (exponent, mantissa) pair."""
    log = _floor_log2(stepsize)
    p = log - 13
    n = 11 - log
    shifted = stepsize >> -n if n < 0 else stepsize << n
    mantissa = shifted & 0x7FF
    exponent = max(numbps - p, 0) & _U8_MAX
    return exponent, mantissa


def irreversible_expounded_quant(
    precision: int,
    num_resolutions: int,
    resolution: int,
    band: BandOrientation,
) -> tuple[int, int]:
    """Expounded quantisation (exponent, mantissa) for a 9/7 subband."""
    gain = band_gain(band)
    level = max(max(num_resolutions - 1, 0) - resolution, 0)
    norm = get_norm_97(level, band)
    stepsize = (1 << gain) / norm
    return encode_stepsize(math.floor(stepsize * 8192.0), precision + gain)