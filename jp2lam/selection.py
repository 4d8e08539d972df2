"""Global slope-threshold selection of code-block truncation points."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from .pcrd import (
    CodeBlockPcrdCurve,
    InconsistentSelectionBlockCountsError,
    NonMonotoneLayerSelectionError,
    PcrdPoint,
    TotalBytesOverflowError,
    validate_curve,
    validate_curves,
)

_U32_MAX = 0xFFFFFFFF
_SEARCH_ITERATIONS = 48


@dataclass(frozen=True)
class BlockSelection:
    """Chosen truncation point (number of leading passes) for one code-block."""

    block_id: int
    passes: int

    @classmethod
    def omitted(cls, block_id: int) -> BlockSelection:
        """Selection that leaves the block out entirely."""
        return cls(block_id=block_id, passes=0)


@dataclass
class LayerSelection:
    """Cumulative selection across all code-blocks for one byte target."""

    target_bytes: int
    actual_bytes: int
    lam: float
    selections: list[BlockSelection] = field(default_factory=list)


@dataclass(frozen=True)
class LayerBudget:
    """Cumulative byte target of one quality layer."""

    layer_index: int
    target_bytes_cumulative: int


@dataclass
class SelectionStats:
    """Totals and chosen points of a fixed-lambda selection."""

    total_bytes: int
    total_distortion_reduction: float
    chosen_points: list[PcrdPoint] = field(default_factory=list)


def _add_bytes(total: int, extra: int) -> int:
    total += extra
    if total > _U32_MAX:
        raise TotalBytesOverflowError()
    return total


def choose_block_point(curve: CodeBlockPcrdCurve, lam: float) -> PcrdPoint:
    """Deepest point reached while every slope stays at or above ``lam``."""
    validate_curve(curve)
    best = curve.points[0]
    for point in curve.points[1:]:
        if point.slope < lam:
            break
        best = point
    return best


def evaluate_lambda(curves: Sequence[CodeBlockPcrdCurve], lam: float) -> LayerSelection:
    """Select one point per block for a fixed slope threshold."""
    validate_curves(curves)
    actual_bytes = 0
    selections = []
    for curve in curves:
        chosen = choose_block_point(curve, lam)
        actual_bytes = _add_bytes(actual_bytes, chosen.bytes)
        selections.append(BlockSelection(curve.block_id, chosen.passes))
    return LayerSelection(target_bytes=0, actual_bytes=actual_bytes, lam=lam, selections=selections)


def evaluate_lambda_with_stats(
    curves: Sequence[CodeBlockPcrdCurve], lam: float
) -> SelectionStats:
    """Like :func:`evaluate_lambda`, but report chosen points and distortion totals."""
    validate_curves(curves)
    total_bytes = 0
    total_distortion = 0.0
    chosen_points = []
    for curve in curves:
        chosen = choose_block_point(curve, lam)
        total_bytes = _add_bytes(total_bytes, chosen.bytes)
        total_distortion += chosen.distortion_reduction
        chosen_points.append(chosen)
    return SelectionStats(total_bytes, total_distortion, chosen_points)


def _max_slope(curves: Sequence[CodeBlockPcrdCurve]) -> float:
    max_value = 0.0
    for curve in curves:
        validate_curve(curve)
        for point in curve.points[1:]:
            if math.isfinite(point.slope):
                max_value = max(max_value, point.slope)
    return max_value


def select_for_target_bytes(
    curves: Sequence[CodeBlockPcrdCurve], target_bytes: int
) -> LayerSelection:
    """Best-quality selection whose total size stays within ``target_bytes``."""
    if not curves:
        return LayerSelection(target_bytes=target_bytes, actual_bytes=0, lam=0.0)

    validate_curves(curves)

    max_lambda = _max_slope(curves)
    lo = 0.0
    hi = max_lambda if math.isfinite(max_lambda) and max_lambda > 0.0 else 1.0

    best = evaluate_lambda(curves, hi)
    if best.actual_bytes > target_bytes:
        best = evaluate_lambda(curves, math.inf)

    for _ in range(_SEARCH_ITERATIONS):
        mid = 0.5 * (lo + hi)
        trial = evaluate_lambda(curves, mid)
        if trial.actual_bytes > target_bytes:
            lo = mid
        else:
            best = trial
            hi = mid

    return LayerSelection(
        target_bytes=target_bytes,
        actual_bytes=best.actual_bytes,
        lam=best.lam,
        selections=best.selections,
    )


def build_layer_selections(
    curves: Sequence[CodeBlockPcrdCurve], budgets: Sequence[LayerBudget]
) -> list[LayerSelection]:
    """One cumulative selection per layer budget."""
    return [
        replace(
            select_for_target_bytes(curves, budget.target_bytes_cumulative),
            target_bytes=budget.target_bytes_cumulative,
        )
        for budget in budgets
    ]


def cumulative_to_incremental_passes(
    cumulative: Sequence[LayerSelection],
) -> list[list[tuple[int, int]]]:
    """Turn cumulative per-layer selections into ``[layer][block] -> (block_id, new passes)``."""
    if not cumulative:
        return []

    block_count = len(cumulative[0].selections)
    for layer_index, layer in enumerate(cumulative):
        if len(layer.selections) != block_count:
            raise InconsistentSelectionBlockCountsError(
                layer_index, block_count, len(layer.selections)
            )

    previous = [0] * block_count
    out = []
    for layer_index, layer in enumerate(cumulative):
        this_layer = []
        for i, selection in enumerate(layer.selections):
            prev = previous[i]
            if selection.passes < prev:
                raise NonMonotoneLayerSelectionError(
                    layer_index, selection.block_id, prev, selection.passes
                )
            previous[i] = selection.passes
            this_layer.append((selection.block_id, selection.passes - prev))
        out.append(this_layer)
    return out