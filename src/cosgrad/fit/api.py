"""
Fit cosine palette coefficients to a sequence of key colors.

Each channel is fitted independently. Frequency is the only nonlinear
parameter, so it is searched over a fixed grid and every candidate is solved
in closed form (see cosgrad.fit.kernels). The search is deterministic and
costs O(channels x candidates x samples).

Example:
    >>> colors = ["#1a2b3c", "#4d5e6f", "#a0b0c0", "#ffeedd"]
    >>> result = fit_cosine_palette(colors, refine=True)
    >>> report = validate_fit(colors, result)
    >>> for comparison in report.color_comparisons:
    ...     print(comparison.original, comparison.fitted, comparison.error)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from cosgrad.coeffs import CosineCoeffs
from cosgrad.constants import (
    FIT_AMPLITUDE_EPSILON,
    FIT_AMPLITUDE_RANGE,
    FIT_DET_EPSILON,
    FIT_FREQ_MAX,
    FIT_FREQ_MIN,
    FIT_FREQ_STEP,
    FIT_FREQUENCY_RANGE,
    FIT_NEUTRAL_FREQUENCY,
    FIT_NEUTRAL_OFFSET,
    FIT_OFFSET_RANGE,
    FIT_REFINE_SPAN,
    FIT_REFINE_STEP,
    NUM_CHANNELS,
)
from cosgrad.fit.kernels import scan_frequencies_numba
from cosgrad.sampler import evaluate, hex_to_unit_rgb, rgb_to_hex, sample_times
from cosgrad.utils import interpolate_key_colors

logger = logging.getLogger(__name__)


def frequency_grid(
    freq_min: float = FIT_FREQ_MIN,
    freq_max: float = FIT_FREQ_MAX,
    step: float = FIT_FREQ_STEP,
) -> np.ndarray:
    """
    Candidate frequencies from freq_min to freq_max inclusive.

    Values are rounded so grid points are the decimal values they name
    (1.0, not 1.0000000000000002).

    Example:
        >>> len(frequency_grid())
        23
    """
    count = int(round((freq_max - freq_min) / step)) + 1
    return np.round(freq_min + step * np.arange(count, dtype=np.float64), 10)


FREQ_CANDIDATES = frequency_grid()


@dataclass(frozen=True)
class ChannelFit:
    """Best fit for a single channel (before clamping)."""

    offset: float
    amplitude: float
    frequency: float
    phase: float
    error: float


@dataclass(frozen=True)
class FitResult:
    """
    Fitted coefficients.

    Attributes:
        coeffs: Clamped CosineCoeffs
        error: Total squared error over all channels (before clamping)
    """

    coeffs: CosineCoeffs
    error: float


@dataclass(frozen=True)
class ColorComparison:
    """One key color against its fitted reproduction."""

    original: str
    fitted: str
    error: float  # mean absolute RGB difference, 0-255 scale


@dataclass(frozen=True)
class FitValidation:
    color_comparisons: list[ColorComparison] = field(default_factory=list)

    @property
    def max_error(self) -> float:
        return max((c.error for c in self.color_comparisons), default=0.0)


def _best_of(
    t_values: np.ndarray,
    targets: np.ndarray,
    freqs: np.ndarray,
) -> tuple[ChannelFit, int]:
    """Scan candidate frequencies and return the lowest-error fit (first wins ties)."""
    out = np.empty((len(freqs), 5), dtype=np.float64)
    scan_frequencies_numba(t_values, targets, freqs, FIT_DET_EPSILON, FIT_AMPLITUDE_EPSILON, out)

    best = int(np.argmin(out[:, 3]))
    a, b, d, sse, _ = out[best]
    degenerate = int(np.count_nonzero(out[:, 4]))
    return ChannelFit(float(a), float(b), float(freqs[best]), float(d), float(sse)), degenerate


def fit_channel(
    t_values: np.ndarray,
    targets: np.ndarray,
    refine: bool = False,
) -> ChannelFit:
    """
    Fit offset, amplitude, frequency and phase for one channel.

    Args:
        t_values: Sample positions [N]
        targets: Channel values [N] in [0, 1]
        refine: Also search +/-0.05 around the best grid frequency in 0.005 steps

    Returns:
        Unclamped ChannelFit with the lowest squared error
    """
    t_values = np.ascontiguousarray(t_values, dtype=np.float64)
    targets = np.ascontiguousarray(targets, dtype=np.float64)

    best, degenerate = _best_of(t_values, targets, FREQ_CANDIDATES)
    if degenerate:
        logger.debug(
            f"[fit_channel] {degenerate}/{len(FREQ_CANDIDATES)} candidates singular, "
            f"used mean fallback"
        )

    if refine:
        offsets = np.arange(-FIT_REFINE_SPAN, FIT_REFINE_SPAN + FIT_REFINE_STEP / 2, FIT_REFINE_STEP)
        fine = np.round(best.frequency + offsets, 10)
        fine = fine[fine >= FIT_FREQUENCY_RANGE[0]]
        refined, _ = _best_of(t_values, targets, fine)
        # Keep the grid result unless refinement is strictly better
        if refined.error < best.error:
            best = refined

    return best


def _clamp_channel(fit: ChannelFit) -> tuple[float, float, float, float]:
    a = float(np.clip(fit.offset, *FIT_OFFSET_RANGE))
    b = float(np.clip(fit.amplitude, *FIT_AMPLITUDE_RANGE))
    c = float(np.clip(fit.frequency, *FIT_FREQUENCY_RANGE))
    d = fit.phase % 1.0
    if d >= 1.0:  # tiny negative phases wrap to exactly 1.0
        d = 0.0
    return a, b, c, d


def _key_colors(hex_colors: Sequence[str]) -> np.ndarray:
    return np.array([hex_to_unit_rgb(h) for h in hex_colors], dtype=np.float64).reshape(-1, 3)


def fit_cosine_palette(
    hex_colors: Sequence[str],
    refine: bool = False,
    dense_samples: int | None = None,
) -> FitResult:
    """
    Fit cosine palette coefficients to key colors placed at t = i / (N - 1).

    Args:
        hex_colors: Key colors, '#rrggbb' (3 or more for a meaningful fit)
        refine: Run a local refinement pass around the best grid frequency
        dense_samples: If set (>= 2), fit against this many samples of the
            piecewise-linear path through the key colors instead of the key
            colors themselves. Keeps the curve from oscillating between stops.

    Returns:
        FitResult with clamped coefficients and the total squared error

    Raises:
        ValueError: If a color is not a valid hex string or dense_samples is below 2
        TypeError: If dense_samples is not an int
    """
    if dense_samples is not None and (
        isinstance(dense_samples, bool) or not isinstance(dense_samples, (int, np.integer))
    ):
        raise TypeError(f"dense_samples must be an int, got {type(dense_samples).__name__}")
    if dense_samples is not None and dense_samples < 2:
        raise ValueError(
            f"dense_samples={dense_samples} must be at least 2. Use None to fit the key colors directly."
        )

    colors = _key_colors(hex_colors)

    if len(colors) == 0:
        logger.debug("[fit_cosine_palette] No colors given, returning neutral palette")
        neutral = CosineCoeffs(
            (FIT_NEUTRAL_OFFSET,) * 3,
            (0.0,) * 3,
            (FIT_NEUTRAL_FREQUENCY,) * 3,
            (0.0,) * 3,
        )
        return FitResult(neutral, 0.0)

    if dense_samples is not None and len(colors) >= 2:
        t_values, targets = interpolate_key_colors(colors, dense_samples)
    else:
        t_values, targets = sample_times(len(colors)), colors

    vectors = np.zeros((4, NUM_CHANNELS), dtype=np.float64)
    total_error = 0.0
    for ch in range(NUM_CHANNELS):
        fit = fit_channel(t_values, targets[:, ch], refine=refine)
        vectors[:, ch] = _clamp_channel(fit)
        total_error += fit.error

    logger.debug(
        f"[fit_cosine_palette] Fitted {len(colors)} colors, "
        f"frequencies={vectors[2].round(3).tolist()}, error={total_error:.6f}"
    )
    return FitResult(CosineCoeffs.from_array(vectors), total_error)


def validate_fit(hex_colors: Sequence[str], result: FitResult) -> FitValidation:
    """
    Compare each key color with the fitted palette at the same t.

    Args:
        hex_colors: Key colors used for the fit
        result: Output of fit_cosine_palette

    Returns:
        FitValidation with one ColorComparison per key color. The error is the
        mean absolute RGB difference on a 0-255 scale, rounded to 0.1.
    """
    colors = _key_colors(hex_colors)
    fitted = np.clip(evaluate(result.coeffs, sample_times(len(colors))), 0.0, 1.0)
    errors = np.abs(colors - fitted).mean(axis=1) * 255.0

    return FitValidation(
        [
            ColorComparison(original, rgb_to_hex(*rgb), round(float(err), 1))
            for original, rgb, err in zip(hex_colors, fitted.tolist(), errors)
        ]
    )
