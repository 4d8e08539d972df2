"""Irreversible 9/7 floating-point wavelet transform (JPEG 2000 lossy path)."""

from __future__ import annotations

from collections.abc import Sequence

from .dwt_common import check_area, encode_resolutions

# Irreversible 9/7 lifting constants (ISO/IEC 15444-1 Annex F).
ALPHA = -1.586134342059924
BETA = -0.052980118572961
GAMMA = 0.882911075530934
DELTA = 0.443506852043971
K = 1.230174104914001
INV_K = 1.0 / K


def _fetch_sym(samples: list[float], i: int) -> float:
    """Whole-sample symmetric extension: x[-i] = x[i], x[n-1+i] = x[n-1-i]."""
    n = len(samples)
    if n == 0:
        return 0.0
    if n == 1:
        return samples[0]
    if 0 <= i < n:
        return samples[i]
    period = 2 * (n - 1)
    k = i % period
    return samples[period - k if k >= n else k]


def _lift(samples: list[float], start: int, coeff: float) -> None:
    for j in range(start, len(samples), 2):
        samples[j] += coeff * (_fetch_sym(samples, j - 1) + _fetch_sym(samples, j + 1))


def forward_97_1d(samples: Sequence[float]) -> list[float]:
    """Forward 9/7 lifting on one even-origin line, output as ``[low | high]``."""
    if len(samples) < 2:
        return [v * INV_K for v in samples]

    x = [float(v) for v in samples]
    _lift(x, 1, ALPHA)
    _lift(x, 0, BETA)
    _lift(x, 1, GAMMA)
    _lift(x, 0, DELTA)
    return [v * INV_K for v in x[0::2]] + [v * K for v in x[1::2]]


def inverse_97_1d(samples: Sequence[float]) -> list[float]:
    """Undo :func:`forward_97_1d` on one line."""
    n = len(samples)
    if n < 2:
        return [v * K for v in samples]

    sn = -(-n // 2)
    inter = [0.0] * n
    inter[0::2] = [float(v) * K for v in samples[:sn]]
    inter[1::2] = [float(v) * INV_K for v in samples[sn:]]
    _lift(inter, 0, -DELTA)
    _lift(inter, 1, -GAMMA)
    _lift(inter, 0, -BETA)
    _lift(inter, 1, -ALPHA)
    return inter


def forward_97_2d(data: Sequence[float], width: int, height: int, levels: int) -> list[float]:
    """Forward multi-level 2-D 9/7 transform of a row-major image.

    Returns a new list in the JPEG 2000 subband layout.
    """
    check_area(data, width, height)
    out = [float(v) for v in data]
    if width == 0 or height == 0 or levels == 0:
        return out

    for rw, rh in reversed(encode_resolutions(width, height, levels)[1:]):
        for x in range(rw):
            column = slice(x, x + rh * width, width)
            out[column] = forward_97_1d(out[column])
        for y in range(rh):
            row = slice(y * width, y * width + rw)
            out[row] = forward_97_1d(out[row])
    return out


def inverse_97_2d(data: Sequence[float], width: int, height: int, levels: int) -> list[float]:
    """Inverse of :func:`forward_97_2d`; returns the reconstructed signal."""
    check_area(data, width, height)
    out = [float(v) for v in data]
    if width == 0 or height == 0 or levels == 0:
        return out

    for rw, rh in encode_resolutions(width, height, levels)[1:]:
        for y in range(rh):
            row = slice(y * width, y * width + rw)
            out[row] = inverse_97_1d(out[row])
        for x in range(rw):
            column = slice(x, x + rh * width, width)
            out[column] = inverse_97_1d(out[column])
    return out