# jp2lam

Building blocks for a JPEG 2000 encoder aimed at document workloads, written
in pure Python with no third-party dependencies.

## What is inside

- `jp2lam.rev53` – reversible 5/3 integer wavelet transform:
  `forward_53_1d`, `inverse_53_1d`, `forward_53_2d`, `inverse_53_2d`.
  The 2-D functions take a row-major list, a width, a height and a number of
  decomposition levels, and return a new list in the JPEG 2000 subband layout.
  Round trips are exact.
- `jp2lam.irrev97` – irreversible 9/7 floating-point wavelet transform with
  the ISO/IEC 15444-1 Annex F lifting constants: `forward_97_1d`,
  `inverse_97_1d`, `forward_97_2d`, `inverse_97_2d`. Round trips agree to
  within floating-point error.
- `jp2lam.dwt_common` – `encode_resolutions` (the resolution ladder, coarsest
  first) and `check_area`; `DwtError` (a `ValueError`) is raised when the
  data length does not match the image area or a dimension or level count is
  negative.
- `jp2lam.norms` – `BandOrientation`, synthesis norms per band and level
  (`get_norm_53`, `get_norm_97`), `band_gain`, `reversible_exponent`, and
  quantization step-size packing (`encode_stepsize`,
  `irreversible_expounded_quant`).
- `jp2lam.pcrd` – per-code-block rate-distortion curves built from
  `RawPassRecord`s (`build_raw_curve`), pruned to a strictly decreasing-slope
  hull (`prune_to_convex_hull`, `build_hull_curve`, `build_hull_curves`), and
  checked by `validate_curve` / `validate_curves`. All errors derive from
  `PcrdError` (a `ValueError`).
- `jp2lam.selection` – global slope-threshold (lambda) selection of truncation
  points: `choose_block_point`, `evaluate_lambda`,
  `evaluate_lambda_with_stats`, `select_for_target_bytes` (a 48-step bisection
  for the best selection within a byte budget), `build_layer_selections` for
  cumulative `LayerBudget`s, and `cumulative_to_incremental_passes`.
- `jp2lam.distortion` – distortion estimates for coding passes
  (`estimate_pass_distortion_delta_baseline`,
  `estimate_pass_distortion_delta_taubman2000`, `explain_pass_distortion`),
  `band_distortion_bias`, `apply_contrast_masking_to_delta` and
  `default_subband_weight`.
- `jp2lam.quality` – `quality_to_lambda` maps a 0–100 quality setting and a
  pixel count to a lambda threshold; `select_for_quality` selects passes by
  quality, rescaling lambda per image so that quality 1 lands just above the
  image's steepest slope.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Example

```python
from jp2lam.rev53 import forward_53_2d, inverse_53_2d

data = [1, 2, 3, 4]
coeffs = forward_53_2d(data, 2, 2, 1)     # [3, 1, 2, 0]
assert inverse_53_2d(coeffs, 2, 2, 1) == data
```

Choosing truncation points for a byte budget:

```python
from jp2lam.pcrd import RawPassRecord, build_hull_curve
from jp2lam.selection import select_for_target_bytes

curve = build_hull_curve(0, [
    RawPassRecord(0, 10, 10, 100.0),
    RawPassRecord(1, 10, 20, 50.0),
    RawPassRecord(2, 10, 30, 20.0),
])
layer = select_for_target_bytes([curve], 20)
print(layer.actual_bytes, layer.lam, layer.selections)
```

Selecting by quality instead of a budget:

```python
from jp2lam.quality import quality_to_lambda, select_for_quality

lam = quality_to_lambda(50, 1_000_000)
layer = select_for_quality([curve], 50, 1_000_000)
```

A quality of 100 maps to a lambda of 0 (every hull point is kept); a quality
of 0 maps to the largest float (every block is left out).

## What it does not do

This package holds the transform and rate-control pieces only. It has no
block (Tier-1) coder, no packet or codestream writer and no JP2 container
output, so it does not turn an image into a `.jp2` file by itself, and it
has no command-line tool. Distortion estimates take the per-pass sample
counts and the `BlockClass` of a code-block as inputs; the package does not
classify blocks or compute masking weights from image data.