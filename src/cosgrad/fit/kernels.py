"""
Numba-optimized kernels for cosine palette fitting.

For a fixed frequency c the model is linear in three unknowns:

    a + b*cos(2*pi*(c*t + d)) = A + B*cos(2*pi*c*t) + C*sin(2*pi*c*t)

so each candidate frequency is a 3x3 normal-equation solve.
"""

import math

import numpy as np
from numba import njit

# ============================================================================
# Linear Least Squares (fixed 3 columns)
# ============================================================================


@njit(cache=True, nogil=True)
def solve_normal_equations_3x3(
    t_values: np.ndarray,
    targets: np.ndarray,
    freq: float,
    det_epsilon: float,
) -> tuple[float, float, float, bool]:
    """
    Least-squares fit of A + B*cos(2*pi*freq*t) + C*sin(2*pi*freq*t).

    Forms AtA / Atb for the design matrix [1, cos, sin] and inverts AtA in
    closed form (Cramer's rule).

    Args:
        t_values: Sample positions [N]
        targets: Channel values [N]
        freq: Candidate frequency
        det_epsilon: |det(AtA)| below this is treated as singular

    Returns:
        (A, B, C, degenerate). A degenerate system returns (mean(targets), 0, 0, True).
    """
    n = t_values.shape[0]
    tau = 2.0 * math.pi

    # AtA is symmetric: only 6 distinct sums
    s11 = 0.0
    s1c = 0.0
    s1s = 0.0
    scc = 0.0
    scs = 0.0
    sss = 0.0
    # Atb
    b1 = 0.0
    bc = 0.0
    bs = 0.0

    for k in range(n):
        angle = tau * freq * t_values[k]
        co = math.cos(angle)
        si = math.sin(angle)
        y = targets[k]

        s11 += 1.0
        s1c += co
        s1s += si
        scc += co * co
        scs += co * si
        sss += si * si
        b1 += y
        bc += co * y
        bs += si * y

    # Cofactors of the symmetric matrix
    # [[s11, s1c, s1s],
    #  [s1c, scc, scs],
    #  [s1s, scs, sss]]
    c00 = scc * sss - scs * scs
    c01 = s1s * scs - s1c * sss
    c02 = s1c * scs - s1s * scc
    det = s11 * c00 + s1c * c01 + s1s * c02

    if abs(det) < det_epsilon:
        mean = b1 / n if n > 0 else 0.0
        return mean, 0.0, 0.0, True

    c11 = s11 * sss - s1s * s1s
    c12 = s1s * s1c - s11 * scs
    c22 = s11 * scc - s1c * s1c

    inv_det = 1.0 / det
    big_a = (c00 * b1 + c01 * bc + c02 * bs) * inv_det
    big_b = (c01 * b1 + c11 * bc + c12 * bs) * inv_det
    big_c = (c02 * b1 + c12 * bc + c22 * bs) * inv_det
    return big_a, big_b, big_c, False


# ============================================================================
# Per-Channel Frequency Scan
# ============================================================================


@njit(cache=True, nogil=True)
def fit_channel_at_frequency_numba(
    t_values: np.ndarray,
    targets: np.ndarray,
    freq: float,
    det_epsilon: float,
    amplitude_epsilon: float,
) -> tuple[float, float, float, float, bool]:
    """
    Best (offset, amplitude, phase) for one channel at a fixed frequency.

    Args:
        t_values: Sample positions [N]
        targets: Channel values [N]
        freq: Frequency
        det_epsilon: Singular-system threshold
        amplitude_epsilon: Amplitudes at or below this get phase 0

    Returns:
        (a, b, d, sse, degenerate) with b >= 0 and d = atan2(-C, B) / 2pi
    """
    tau = 2.0 * math.pi
    big_a, big_b, big_c, degenerate = solve_normal_equations_3x3(
        t_values, targets, freq, det_epsilon
    )

    a = big_a
    b = math.sqrt(big_b * big_b + big_c * big_c)
    d = math.atan2(-big_c, big_b) / tau if b > amplitude_epsilon else 0.0

    sse = 0.0
    for k in range(t_values.shape[0]):
        predicted = a + b * math.cos(tau * (freq * t_values[k] + d))
        diff = predicted - targets[k]
        sse += diff * diff

    return a, b, d, sse, degenerate


@njit(cache=True, nogil=True)
def scan_frequencies_numba(
    t_values: np.ndarray,
    targets: np.ndarray,
    freqs: np.ndarray,
    det_epsilon: float,
    amplitude_epsilon: float,
    out: np.ndarray,
) -> None:
    """
    Fit one channel at every candidate frequency.

    Args:
        t_values: Sample positions [N]
        targets: Channel values [N]
        freqs: Candidate frequencies [F]
        det_epsilon: Singular-system threshold
        amplitude_epsilon: Phase-zero amplitude threshold
        out: Output buffer [F, 5] of (a, b, d, sse, degenerate)

    Note: Modifies out in-place
    """
    for i in range(freqs.shape[0]):
        a, b, d, sse, degenerate = fit_channel_at_frequency_numba(
            t_values, targets, freqs[i], det_epsilon, amplitude_epsilon
        )
        out[i, 0] = a
        out[i, 1] = b
        out[i, 2] = d
        out[i, 3] = sse
        out[i, 4] = 1.0 if degenerate else 0.0
