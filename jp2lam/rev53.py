"""Reversible 5/3 integer wavelet transform (JPEG 2000 lossless path)."""

from __future__ import annotations

from collections.abc import Sequence

from .dwt_common import check_area, encode_resolutions


def forward_53_1d(samples: Sequence[int], even: bool) -> list[int]:
    """Forward 5/3 lifting on one line.

    Returns the coefficients deinterleaved as ``[low | high]``.
    ``even`` selects an even-origin (``True``) or odd-origin line.
    """
    width = len(samples)
    if width <= 1:
        if not even and width == 1:
            return [samples[0] * 2]
        return list(samples)

    if even:
        low = list(samples[0::2])
        high = list(samples[1::2])
        sn, dn = len(low), len(high)
        # Predict step on odd samples.
        high = [h - ((low[i] + low[min(i + 1, sn - 1)]) >> 1) for i, h in enumerate(high)]
        # Update step on even samples.
        low = [
            v + ((high[min(max(i - 1, 0), dn - 1)] + high[min(i, dn - 1)] + 2) >> 2)
            for i, v in enumerate(low)
        ]
        return low + high

    out = list(samples)
    sn = width >> 1
    dn = width - sn
    tmp = [0] * width
    tmp[sn] = out[0] - out[1]
    for i in range(1, sn):
        tmp[sn + i] = out[2 * i] - ((out[2 * i + 1] + out[2 * (i - 1) + 1]) >> 1)
    if width % 2:
        i = sn
        tmp[sn + i] = out[2 * i] - out[2 * (i - 1) + 1]

    for i in range(dn - 1):
        out[i] = out[2 * i + 1] + ((tmp[sn + i] + tmp[sn + i + 1] + 2) >> 2)
    if width % 2 == 0:
        i = dn - 1
        out[i] = out[2 * i + 1] + ((tmp[sn + i] + tmp[sn + i] + 2) >> 2)
    out[sn : sn + dn] = tmp[sn : sn + dn]
    return out


def inverse_53_1d(coefficients: Sequence[int]) -> list[int]:
    """Undo an even-origin :func:`forward_53_1d` on one line."""
    width = len(coefficients)
    if width <= 1:
        return list(coefficients)

    sn = -(-width // 2)
    dn = width - sn
    low = list(coefficients[:sn])
    high = list(coefficients[sn:])
    if dn == 0:
        return low

    # Undo the update step on even samples.
    even = [low[0] - ((high[0] + high[0] + 2) >> 2)]
    for i in range(1, sn):
        right = high[i] if i < dn else high[i - 1]
        even.append(low[i] - ((high[i - 1] + right + 2) >> 2))

    # Undo the predict step on odd samples, then interleave.
    out = [0] * width
    out[0::2] = even
    out[1::2] = [
        h + ((even[i] + even[i + 1]) >> 1) if i + 1 < sn else h + even[i]
        for i, h in enumerate(high)
    ]
    return out


def forward_53_2d(data: Sequence[int], width: int, height: int, levels: int) -> list[int]:
    """Forward multi-level 2-D 5/3 transform of a row-major image.

    Returns a new list in the JPEG 2000 subband layout.
    """
    check_area(data, width, height)
    out = list(data)
    if width == 0 or height == 0 or levels == 0:
        return out

    for rw, rh in reversed(encode_resolutions(width, height, levels)[1:]):
        for x in range(rw):
            column = slice(x, x + rh * width, width)
            out[column] = forward_53_1d(out[column], True)
        for y in range(rh):
            row = slice(y * width, y * width + rw)
            out[row] = forward_53_1d(out[row], True)
    return out


def inverse_53_2d(data: Sequence[int], width: int, height: int, levels: int) -> list[int]:
    """Inverse of :func:`forward_53_2d`; returns the reconstructed samples."""
    check_area(data, width, height)
    out = list(data)
    if width == 0 or height == 0 or levels == 0:
        return out

    for rw, rh in encode_resolutions(width, height, levels)[1:]:
        for y in range(rh):
            row = slice(y * width, y * width + rw)
            out[row] = inverse_53_1d(out[row])
        for x in range(rw):
            column = slice(x, x + rh * width, width)
            out[column] = inverse_53_1d(out[column])
    return out