import pytest

from jp2lam.dwt_common import DwtError
from jp2lam.rev53 import forward_53_1d, forward_53_2d, inverse_53_1d, inverse_53_2d


def max_decompositions(width, height):
    min_dim = min(width, height)
    if min_dim <= 1:
        return 0
    return min_dim.bit_length() - 1


def tiny_patterns(width, height, impulse_stride=1):
    length = width * height
    patterns = [
        ("zeros", [0] * length),
        ("ones", [1] * length),
        ("horizontal_ramp", [x for _ in range(height) for x in range(width)]),
        ("vertical_ramp", [y for y in range(height) for _ in range(width)]),
        ("checkerboard", [(x + y) & 1 for y in range(height) for x in range(width)]),
    ]
    for pos in range(0, length, impulse_stride):
        data = [0] * length
        data[pos] = 255
        patterns.append(("impulse", data))
    return patterns


def test_one_level_transform_matches_known_2x2_case():
    assert forward_53_2d([1, 2, 3, 4], 2, 2, 1) == [3, 1, 2, 0]


def test_one_level_transform_matches_known_1d_row_case():
    assert forward_53_2d([10, 20, 30, 40], 4, 1, 1) == [10, 33, 0, 10]


def test_multi_level_transform_preserves_length_and_runs_on_odd_sizes():
    data = list(range(35))
    out = forward_53_2d(data, 5, 7, 2)
    assert len(out) == 35
    assert data == list(range(35))


def test_forward_then_inverse_53_roundtrips_exactly_for_small_images():
    for height in range(1, 9):
        for width in range(1, 9):
            levels = min(max_decompositions(width, height), 3)
            for name, original in tiny_patterns(width, height):
                coeffs = forward_53_2d(original, width, height, levels)
                restored = inverse_53_2d(coeffs, width, height, levels)
                assert restored == original, f"{name} {width}x{height} levels={levels}"


@pytest.mark.parametrize("width,height,levels", [(48, 40, 5), (64, 48, 5), (32, 32, 5)])
def test_forward_then_inverse_53_roundtrips_exactly_at_5_levels_non_pow2(width, height, levels):
    for name, original in tiny_patterns(width, height, impulse_stride=37):
        coeffs = forward_53_2d(original, width, height, levels)
        restored = inverse_53_2d(coeffs, width, height, levels)
        assert restored == original, f"{name} {width}x{height} levels={levels}"


def test_zero_levels_is_identity():
    data = [5, -3, 7, 9, 1, 0]
    assert forward_53_2d(data, 3, 2, 0) == data
    assert inverse_53_2d(data, 3, 2, 0) == data


def test_1d_even_roundtrip():
    for n in range(1, 12):
        samples = [(i * 37) % 11 - 5 for i in range(n)]
        assert inverse_53_1d(forward_53_1d(samples, True)) == samples


def test_odd_origin_single_sample_is_doubled():
    assert forward_53_1d([5], False) == [10]


def test_even_origin_single_sample_unchanged():
    assert forward_53_1d([5], True) == [5]


def test_odd_origin_preserves_length():
    for n in range(2, 10):
        assert len(forward_53_1d(list(range(n)), False)) == n


def test_forward_rejects_length_mismatch():
    with pytest.raises(DwtError):
        forward_53_2d([1, 2, 3], 2, 2, 1)


def test_inverse_rejects_length_mismatch():
    with pytest.raises(DwtError):
        inverse_53_2d([1, 2, 3, 4, 5], 2, 2, 1)