"""Wavelet transforms, quantization norms and rate-distortion truncation planning for JPEG 2000."""

__version__ = "0.1.0"

__all__ = [
    "distortion",
    "dwt_common",
    "irrev97",
    "norms",
    "pcrd",
    "quality",
    "rev53",
    "selection",
]