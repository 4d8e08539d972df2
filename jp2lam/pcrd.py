"""Rate-distortion curves for code-blocks used by post-compression truncation."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class RawPassRecord:
    """One coding pass as reported by the block coder."""

    pass_index: int
    bytes: int
    cumulative_bytes: int
    distortion_delta: float


@dataclass(frozen=True)
class PcrdPoint:
    """A cumulative truncation point on a code-block R-D curve."""

    passes: int
    bytes: int
    distortion_reduction: float
    slope: float

    @classmethod
    def omitted(cls) -> PcrdPoint:
        """The point where the whole block is left out."""
        return cls(passes=0, bytes=0, distortion_reduction=0.0, slope=math.inf)


@dataclass
class CodeBlockPcrdCurve:
    """Cumulative R-D curve of one code-block; ``points[0]`` is the omitted point."""

    block_id: int
    points: list[PcrdPoint] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.points) <= 1

    def max_bytes(self) -> int:
        return self.points[-1].bytes if self.points else 0


class PcrdError(ValueError):
    """Base class for rate-distortion planning errors."""


class EmptyCurveError(PcrdError):
    def __init__(self, block_id: int) -> None:
        self.block_id = block_id
        super().__init__(f"PCRD curve for block {block_id} is empty")


class InvalidOriginPointError(PcrdError):
    def __init__(self, block_id: int) -> None:
        self.block_id = block_id
        super().__init__(f"PCRD curve for block {block_id} has invalid origin point")


class NonMonotoneCumulativeBytesError(PcrdError):
    def __init__(self, block_id: int, pass_index: int, previous: int, current: int) -> None:
        self.block_id = block_id
        self.pass_index = pass_index
        self.previous = previous
        self.current = current
        super().__init__(
            f"block {block_id} pass {pass_index} has non-monotone cumulative bytes: "
            f"{previous} -> {current}"
        )


class InconsistentIncrementalBytesError(PcrdError):
    def __init__(self, block_id: int, pass_index: int, bytes: int, expected: int) -> None:
        self.block_id = block_id
        self.pass_index = pass_index
        self.bytes = bytes
        self.expected = expected
        super().__init__(
            f"block {block_id} pass {pass_index} has inconsistent incremental bytes: "
            f"got {bytes}, expected {expected}"
        )


class InvalidDistortionDeltaError(PcrdError):
    def __init__(self, block_id: int, pass_index: int, distortion_delta: float) -> None:
        self.block_id = block_id
        self.pass_index = pass_index
        self.distortion_delta = distortion_delta
        super().__init__(
            f"block {block_id} pass {pass_index} has invalid distortion delta {distortion_delta}"
        )


class NonMonotonePassesError(PcrdError):
    def __init__(self, block_id: int, previous: int, current: int) -> None:
        self.block_id = block_id
        self.previous = previous
        self.current = current
        super().__init__(f"block {block_id} has non-monotone pass counts: {previous} -> {current}")


class NonMonotonePointBytesError(PcrdError):
    def __init__(self, block_id: int, previous: int, current: int) -> None:
        self.block_id = block_id
        self.previous = previous
        self.current = current
        super().__init__(f"block {block_id} has non-monotone point bytes: {previous} -> {current}")


class NonMonotoneDistortionError(PcrdError):
    def __init__(self, block_id: int, previous: float, current: float) -> None:
        self.block_id = block_id
        self.previous = previous
        self.current = current
        super().__init__(
            f"block {block_id} has non-monotone distortion reduction: {previous} -> {current}"
        )


class NegativeByteDeltaError(PcrdError):
    def __init__(self) -> None:
        super().__init__("PCRD point had negative byte delta")


class TotalBytesOverflowError(PcrdError):
    def __init__(self) -> None:
        super().__init__("PCRD total byte count overflowed u32")


class InconsistentSelectionBlockCountsError(PcrdError):
    def __init__(self, layer_index: int, expected: int, actual: int) -> None:
        self.layer_index = layer_index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"layer {layer_index} has inconsistent block count: expected {expected}, got {actual}"
        )


class NonMonotoneLayerSelectionError(PcrdError):
    def __init__(
        self, layer_index: int, block_id: int, previous_passes: int, current_passes: int
    ) -> None:
        self.layer_index = layer_index
        self.block_id = block_id
        self.previous_passes = previous_passes
        self.current_passes = current_passes
        super().__init__(
            f"layer {layer_index} block {block_id} regressed in cumulative passes: "
            f"{previous_passes} -> {current_passes}"
        )


def _rd_slope(a: PcrdPoint, b: PcrdPoint) -> float:
    if b.bytes < a.bytes:
        raise NegativeByteDeltaError()
    db = b.bytes - a.bytes
    dd = b.distortion_reduction - a.distortion_reduction
    if db == 0:
        # Distortion gained at no byte cost is infinitely attractive.
        return math.inf if dd > 0.0 else 0.0
    return dd / db


def _with_slopes(points: Sequence[PcrdPoint]) -> list[PcrdPoint]:
    if not points:
        return []
    out = [replace(points[0], slope=math.inf)]
    for prev, point in zip(points, points[1:]):
        out.append(replace(point, slope=_rd_slope(prev, point)))
    return out


def build_raw_curve(block_id: int, passes: Iterable[RawPassRecord]) -> CodeBlockPcrdCurve:
    """Build the cumulative R-D curve of one block from its per-pass records."""
    points = [PcrdPoint.omitted()]
    prev_cum_bytes = 0
    cum_distortion = 0.0

    for record in passes:
        if record.cumulative_bytes < prev_cum_bytes:
            raise NonMonotoneCumulativeBytesError(
                block_id, record.pass_index, prev_cum_bytes, record.cumulative_bytes
            )
        expected = record.cumulative_bytes - prev_cum_bytes
        if record.bytes != expected:
            raise InconsistentIncrementalBytesError(
                block_id, record.pass_index, record.bytes, expected
            )
        delta = record.distortion_delta
        if not math.isfinite(delta) or delta < 0.0:
            raise InvalidDistortionDeltaError(block_id, record.pass_index, delta)

        cum_distortion += delta
        points.append(
            PcrdPoint(
                passes=record.pass_index + 1,
                bytes=record.cumulative_bytes,
                distortion_reduction=cum_distortion,
                slope=0.0,
            )
        )
        prev_cum_bytes = record.cumulative_bytes

    return CodeBlockPcrdCurve(block_id, _with_slopes(points))


def prune_to_convex_hull(curve: CodeBlockPcrdCurve) -> CodeBlockPcrdCurve:
    """Keep only the points whose slopes strictly decrease along the curve."""
    if not curve.points:
        raise EmptyCurveError(curve.block_id)

    hull: list[PcrdPoint] = []
    for point in curve.points:
        hull.append(point)
        while len(hull) >= 3:
            a, b, c = hull[-3:]
            if _rd_slope(b, c) >= _rd_slope(a, b):
                del hull[-2]
            else:
                break

    return CodeBlockPcrdCurve(curve.block_id, _with_slopes(hull))


def build_hull_curve(block_id: int, passes: Iterable[RawPassRecord]) -> CodeBlockPcrdCurve:
    """Build a raw curve and prune it to its hull."""
    return prune_to_convex_hull(build_raw_curve(block_id, passes))


def build_hull_curves(
    blocks: Iterable[tuple[int, Iterable[RawPassRecord]]],
) -> list[CodeBlockPcrdCurve]:
    """Build hull curves for many ``(block_id, passes)`` pairs."""
    return [build_hull_curve(block_id, passes) for block_id, passes in blocks]


def validate_curve(curve: CodeBlockPcrdCurve) -> None:
    """Check that a curve starts at the origin and grows monotonically."""
    if not curve.points:
        raise EmptyCurveError(curve.block_id)

    first = curve.points[0]
    if first.passes != 0 or first.bytes != 0 or first.distortion_reduction != 0.0:
        raise InvalidOriginPointError(curve.block_id)

    for prev, point in zip(curve.points, curve.points[1:]):
        if point.passes <= prev.passes:
            raise NonMonotonePassesError(curve.block_id, prev.passes, point.passes)
        if point.bytes < prev.bytes:
            raise NonMonotonePointBytesError(curve.block_id, prev.bytes, point.bytes)
        if point.distortion_reduction < prev.distortion_reduction:
            raise NonMonotoneDistortionError(
                curve.block_id, prev.distortion_reduction, point.distortion_reduction
            )


def validate_curves(curves: Iterable[CodeBlockPcrdCurve]) -> None:
    """Validate every curve in turn."""
    for curve in curves:
        validate_curve(curve)