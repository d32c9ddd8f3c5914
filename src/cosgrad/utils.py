"""
Utility functions for resampling key colors (NumPy implementation)

Provides helpers for piecewise-linear interpolation of color stops.
"""

import numpy as np


def linear_interp_1d(x: np.ndarray, centers: np.ndarray, values: np.ndarray) -> np.ndarray:
    """
    Perform 1D linear interpolation using sorted sample positions.

    Args:
        x: Input positions to interpolate [N]
        centers: Sorted, strictly increasing sample positions [K], K >= 2
        values: Values at the sample positions [K] or [K, C]

    Returns:
        Interpolated values [N] or [N, C]

    Example:
        >>> centers = np.array([0.0, 0.5, 1.0])
        >>> values = np.array([0.0, 0.25, 1.0])
        >>> x = np.array([0.25, 0.75])
        >>> result = linear_interp_1d(x, centers, values)
        >>> print(result)
        [0.125 0.625]
    """
    indices = np.searchsorted(centers, x, side="right")
    indices = np.clip(indices, 1, len(centers) - 1)

    left_idx = indices - 1
    right_idx = indices

    left_centers = centers[left_idx]
    right_centers = centers[right_idx]
    left_values = values[left_idx]
    right_values = values[right_idx]

    alpha = (x - left_centers) / (right_centers - left_centers)
    if values.ndim > 1:
        alpha = alpha[:, np.newaxis]
    return left_values + alpha * (right_values - left_values)


def interpolate_key_colors(colors: np.ndarray, num_samples: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Densely resample evenly spaced key colors along their piecewise-linear path.

    Args:
        colors: Key colors [K, 3], K >= 2, placed at t = i / (K - 1)
        num_samples: Number of output samples (>= 2)

    Returns:
        (t_values [num_samples], samples [num_samples, 3])
    """
    key_t = np.arange(len(colors), dtype=np.float64) / (len(colors) - 1)
    t_values = np.arange(num_samples, dtype=np.float64) / (num_samples - 1)
    return t_values, linear_interp_1d(t_values, key_t, np.asarray(colors, dtype=np.float64))
