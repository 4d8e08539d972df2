import math

import pytest

from jp2lam.pcrd import (
    CodeBlockPcrdCurve,
    EmptyCurveError,
    InconsistentIncrementalBytesError,
    InvalidDistortionDeltaError,
    InvalidOriginPointError,
    NegativeByteDeltaError,
    NonMonotoneCumulativeBytesError,
    NonMonotoneDistortionError,
    NonMonotonePassesError,
    NonMonotonePointBytesError,
    PcrdError,
    PcrdPoint,
    RawPassRecord,
    build_hull_curve,
    build_hull_curves,
    build_raw_curve,
    prune_to_convex_hull,
    validate_curve,
    validate_curves,
)


def sample_curve(block_id):
    return build_hull_curve(
        block_id,
        [
            RawPassRecord(0, 10, 10, 100.0),
            RawPassRecord(1, 10, 20, 50.0),
            RawPassRecord(2, 10, 30, 20.0),
            RawPassRecord(3, 10, 40, 5.0),
        ],
    )


def test_build_raw_curve_includes_omitted_origin():
    curve = build_raw_curve(7, [RawPassRecord(0, 4, 4, 9.0), RawPassRecord(1, 3, 7, 4.0)])
    assert len(curve.points) == 3
    assert curve.points[0].passes == 0
    assert curve.points[0].bytes == 0
    assert curve.points[1].passes == 1
    assert curve.points[1].bytes == 4
    assert curve.points[2].passes == 2
    assert curve.points[2].bytes == 7
    assert abs(curve.points[2].distortion_reduction - 13.0) < 1e-9


def test_sample_curve_slopes():
    curve = sample_curve(0)
    slopes = [p.slope for p in curve.points]
    assert math.isinf(slopes[0])
    assert slopes[1:] == pytest.approx([10.0, 5.0, 2.0, 0.5])
    assert curve.max_bytes() == 40
    assert not curve.is_empty()


def test_hull_prunes_non_convex_middle_points():
    raw = build_raw_curve(
        1,
        [
            RawPassRecord(0, 10, 10, 100.0),
            RawPassRecord(1, 10, 20, 120.0),
            RawPassRecord(2, 10, 30, 10.0),
        ],
    )
    hull = prune_to_convex_hull(raw)
    assert len(hull.points) < len(raw.points)
    assert [p.passes for p in hull.points] == [0, 2, 3]
    for prev, cur in zip(hull.points[1:], hull.points[2:]):
        assert cur.slope < prev.slope


def test_hull_dominates_equal_slope_middle_points():
    raw = build_raw_curve(
        0,
        [
            RawPassRecord(0, 10, 10, 100.0),
            RawPassRecord(1, 10, 20, 100.0),
            RawPassRecord(2, 10, 30, 20.0),
        ],
    )
    hull = prune_to_convex_hull(raw)
    assert len(hull.points) < len(raw.points)
    for prev, cur in zip(hull.points[1:], hull.points[2:]):
        assert cur.slope < prev.slope


def test_build_raw_curve_rejects_nonmonotone_cumulative_bytes():
    with pytest.raises(NonMonotoneCumulativeBytesError) as info:
        build_raw_curve(0, [RawPassRecord(0, 10, 10, 5.0), RawPassRecord(1, 5, 8, 3.0)])
    assert info.value.previous == 10
    assert info.value.current == 8


def test_build_raw_curve_rejects_inconsistent_incremental_bytes():
    with pytest.raises(InconsistentIncrementalBytesError) as info:
        build_raw_curve(0, [RawPassRecord(0, 10, 10, 5.0), RawPassRecord(1, 3, 20, 3.0)])
    assert info.value.expected == 10


def test_build_raw_curve_rejects_negative_distortion_delta():
    with pytest.raises(InvalidDistortionDeltaError):
        build_raw_curve(0, [RawPassRecord(0, 10, 10, -1.0)])


def test_build_raw_curve_rejects_nan_distortion_delta():
    with pytest.raises(InvalidDistortionDeltaError):
        build_raw_curve(0, [RawPassRecord(0, 10, 10, math.nan)])


def test_validate_curve_rejects_bad_origin():
    curve = CodeBlockPcrdCurve(
        0,
        [
            PcrdPoint(1, 0, 0.0, math.inf),
            PcrdPoint(2, 10, 5.0, 0.5),
        ],
    )
    with pytest.raises(InvalidOriginPointError):
        validate_curve(curve)


def test_validate_curve_rejects_nonmonotone_points():
    origin = PcrdPoint.omitted()
    with pytest.raises(NonMonotonePassesError):
        validate_curve(CodeBlockPcrdCurve(0, [origin, PcrdPoint(0, 5, 1.0, 1.0)]))
    with pytest.raises(NonMonotonePointBytesError):
        validate_curve(
            CodeBlockPcrdCurve(0, [origin, PcrdPoint(1, 5, 1.0, 1.0), PcrdPoint(2, 4, 2.0, 1.0)])
        )
    with pytest.raises(NonMonotoneDistortionError):
        validate_curve(
            CodeBlockPcrdCurve(0, [origin, PcrdPoint(1, 5, 3.0, 1.0), PcrdPoint(2, 6, 2.0, 1.0)])
        )


def test_validate_curves_rejects_empty_curve():
    with pytest.raises(EmptyCurveError):
        validate_curves([sample_curve(0), CodeBlockPcrdCurve(3, [])])


def test_prune_rejects_empty_and_negative_bytes():
    with pytest.raises(EmptyCurveError):
        prune_to_convex_hull(CodeBlockPcrdCurve(0, []))
    bad = CodeBlockPcrdCurve(
        0, [PcrdPoint.omitted(), PcrdPoint(1, 10, 5.0, 0.5), PcrdPoint(2, 5, 6.0, 0.1)]
    )
    with pytest.raises(NegativeByteDeltaError):
        prune_to_convex_hull(bad)


def test_errors_share_base_class():
    with pytest.raises(PcrdError):
        build_raw_curve(0, [RawPassRecord(0, 1, 10, 1.0)])


def test_build_hull_curves_keeps_block_ids():
    curves = build_hull_curves(
        [(4, [RawPassRecord(0, 8, 8, 64.0)]), (9, [])]
    )
    assert [c.block_id for c in curves] == [4, 9]
    assert curves[0].max_bytes() == 8
    assert curves[1].is_empty()
    assert curves[1].max_bytes() == 0


def test_zero_byte_pass_has_infinite_slope():
    curve = build_raw_curve(0, [RawPassRecord(0, 0, 0, 3.0), RawPassRecord(1, 0, 0, 0.0)])
    assert math.isinf(curve.points[1].slope)
    assert curve.points[2].slope == 0.0