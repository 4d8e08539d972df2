"""Per-pass distortion estimates that drive rate-distortion truncation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PassKind(Enum):
    """Kind of a block coding pass."""

    SIGNIFICANCE_PROPAGATION = "significance_propagation"
    MAGNITUDE_REFINEMENT = "magnitude_refinement"
    CLEANUP = "cleanup"


class BandKind(Enum):
    """Subband orientation as seen by the distortion models."""

    LL = "LL"
    HL = "HL"
    LH = "LH"
    HH = "HH"


class BlockClass(Enum):
    """Content class of a code-block, used for spatial weighting."""

    EDGE_TEXT = "edge_text"
    FLAT = "flat"
    GRADIENT = "gradient"
    TEXTURE_PHOTO = "texture_photo"
    BACKGROUND_NOISE = "background_noise"


class DistortionModel(Enum):
    """Which distortion model estimates the value of a pass."""

    BASELINE_ALPHA = "baseline_alpha"
    PASS_KIND_AWARE = "pass_kind_aware"
    TAUBMAN2000 = "taubman2000"


@dataclass(frozen=True)
class PassDistortionContext:
    """Everything needed to estimate the distortion removed by one coding pass."""

    pass_kind: PassKind
    bitplane: int
    newly_significant: int
    refinement_samples: int
    subband_weight: float
    quant_step: float
    band_kind: BandKind
    quality: int
    block_class: BlockClass
    contrast_visibility_weight: float = 1.0
    taubman_masking_weight: float = 1.0


@dataclass(frozen=True)
class PassDistortionExplanation:
    """Breakdown of one distortion estimate."""

    model: DistortionModel
    energy_per_sample: float
    effective_samples: float
    band_bias: float
    subband_weight: float
    total: float


_CLASS_MASKING_STRENGTH = {
    BlockClass.EDGE_TEXT: 0.15,
    BlockClass.FLAT: 0.10,
    BlockClass.GRADIENT: 0.20,
    BlockClass.TEXTURE_PHOTO: 1.00,
    BlockClass.BACKGROUND_NOISE: 1.20,
}


def _energy_per_sample(ctx: PassDistortionContext) -> float:
    plane_weight = float(1 << min(ctx.bitplane, 30)) * ctx.quant_step
    return plane_weight * plane_weight


def _pass_contribution(ctx: PassDistortionContext, energy: float) -> float:
    if ctx.pass_kind is PassKind.SIGNIFICANCE_PROPAGATION:
        return ctx.newly_significant * energy
    if ctx.pass_kind is PassKind.MAGNITUDE_REFINEMENT:
        return ctx.refinement_samples * energy * 0.25
    return ctx.newly_significant * energy * 0.85


def estimate_pass_distortion_delta_baseline(ctx: PassDistortionContext) -> float:
    """Quant-aware energy model with a flat 0.25 refinement factor."""
    energy = _energy_per_sample(ctx)
    sig_term = ctx.newly_significant * energy
    ref_term = ctx.refinement_samples * energy * 0.25
    return ctx.subband_weight * (sig_term + ref_term)


def estimate_pass_distortion_delta_taubman2000(ctx: PassDistortionContext) -> float:
    """Subband-domain visual masking model weighted by ``taubman_masking_weight``."""
    energy = _energy_per_sample(ctx)
    return ctx.subband_weight * ctx.taubman_masking_weight * _pass_contribution(ctx, energy)


def band_distortion_bias(band: BandKind, quality: int) -> float:
    """Quality-dependent weight favouring LL over HH subbands."""
    if quality < 50:
        t = quality / 50.0
        if band is BandKind.LL:
            return 3.0 - 1.8 * t
        if band is BandKind.HH:
            return 0.20 + 0.62 * t
        return 1.0
    if band is BandKind.LL:
        return 1.20
    if band is BandKind.HH:
        return 0.82
    return 1.00


def apply_contrast_masking_to_delta(
    raw_delta: float,
    contrast_visibility_weight: float,
    block_class: BlockClass,
    quality: int,
) -> float:
    """Scale a distortion delta by class- and quality-dependent contrast masking."""
    if raw_delta <= 0.0:
        return 0.0
    low_rate_strength = min(max(1.0 - quality / 100.0, 0.0), 1.0)
    effective_strength = low_rate_strength * _CLASS_MASKING_STRENGTH[block_class]
    blended_weight = 1.0 + effective_strength * (contrast_visibility_weight - 1.0)
    return raw_delta * min(max(blended_weight, 0.20), 1.0)


def explain_pass_distortion(
    ctx: PassDistortionContext, model: DistortionModel
) -> PassDistortionExplanation:
    """Return the factors that make up a distortion estimate for one pass."""
    energy = _energy_per_sample(ctx)
    if model is DistortionModel.PASS_KIND_AWARE:
        band_bias = band_distortion_bias(ctx.band_kind, ctx.quality)
    else:
        band_bias = 1.0

    if ctx.pass_kind is PassKind.MAGNITUDE_REFINEMENT:
        effective_samples = ctx.refinement_samples * 0.25
    elif ctx.pass_kind is PassKind.CLEANUP and model is not DistortionModel.BASELINE_ALPHA:
        effective_samples = ctx.newly_significant * 0.85
    else:
        effective_samples = float(ctx.newly_significant)

    masking = ctx.taubman_masking_weight if model is DistortionModel.TAUBMAN2000 else 1.0
    total = ctx.subband_weight * band_bias * masking * effective_samples * energy
    return PassDistortionExplanation(
        model=model,
        energy_per_sample=energy,
        effective_samples=effective_samples,
        band_bias=band_bias,
        subband_weight=ctx.subband_weight,
        total=total,
    )


def default_subband_weight(resolution: int, is_ll: bool, is_hh: bool) -> float:
    """Conservative default weight for a subband."""
    weight = 1.0
    if is_ll:
        weight *= 1.15
    if is_hh:
        weight *= 0.90
    if resolution == 0:
        weight *= 1.10
    return weight