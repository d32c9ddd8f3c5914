"""
Forward evaluation of cosine palettes and hex color helpers.

Sampling places n stops evenly over t in [0, 1] (t=0 for a single stop) and
evaluates each channel as

    value = offset + amplitude * cos(2*pi * (frequency * t + phase))

clamped to [0, 1].
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Any, TypeAlias

import numpy as np

from cosgrad.coeffs import CosineCoeffs, GlobalModifiers, as_coeffs
from cosgrad.constants import DEFAULT_BRIGHTNESS, LUMA_WEIGHTS, TAU
from cosgrad.exceptions import ValidationError
from cosgrad.modifiers import apply_globals
from cosgrad.validators import validate_type

logger = logging.getLogger(__name__)

RGB: TypeAlias = tuple[float, float, float]

_HEX_DIGITS = frozenset("0123456789abcdef")


def sample_times(n: int) -> np.ndarray:
    """
    Evenly spaced sample positions: t_i = i / (n - 1), or [0.0] when n == 1.

    Example:
        >>> sample_times(3)
        array([0. , 0.5, 1. ])
    """
    if n <= 0:
        return np.zeros(0, dtype=np.float64)
    if n == 1:
        return np.zeros(1, dtype=np.float64)
    return np.arange(n, dtype=np.float64) / (n - 1)


def evaluate(coeffs: CosineCoeffs, t: np.ndarray) -> np.ndarray:
    """
    Evaluate the unclamped cosine model at arbitrary positions.

    Args:
        coeffs: Palette coefficients
        t: Sample positions [N]

    Returns:
        Channel values [N, 3] (not clamped)
    """
    a, b, c, d = coeffs.rgb_array()
    t = np.asarray(t, dtype=np.float64)[:, np.newaxis]
    return a + b * np.cos(TAU * (c * t + d))


@validate_type((int, np.integer), "n", param_index=0)
def sample_array(n: int, coeffs: CosineCoeffs) -> np.ndarray:
    """
    Sample a palette into an [n, 3] float64 array of clamped RGB values.

    Args:
        n: Number of stops (n <= 0 gives an empty array)
        coeffs: Palette coefficients

    Returns:
        RGB values in [0, 1], shape [n, 3]

    Raises:
        ValidationError: If a coefficient is NaN or infinite
    """
    if not coeffs.is_finite():
        raise ValidationError("Coefficients must be finite numbers")
    values = evaluate(coeffs, sample_times(n))
    return np.clip(values, 0.0, 1.0)


@validate_type((int, np.integer), "n", param_index=0)
def sample(n: int, coeffs: Any) -> list[RGB]:
    """
    Sample a palette into a list of n clamped (r, g, b) tuples.

    Malformed coefficients give an empty list instead of raising.

    Args:
        n: Number of stops
        coeffs: CosineCoeffs or 4 rows of 3/4 numbers

    Returns:
        List of (r, g, b) floats in [0, 1]

    Example:
        >>> coeffs = [[.5, .5, .5, 1], [.5, .5, .5, 1], [1, 1, 1, 1], [0, .333, .667, 1]]
        >>> len(sample(3, coeffs))
        3
    """
    try:
        values = sample_array(n, as_coeffs(coeffs))
    except ValidationError as e:
        logger.debug(f"[sample] Ignoring malformed coefficients: {e}")
        return []

    return [tuple(row) for row in values.tolist()]


def _channel_to_hex(value: float) -> str:
    # Half-up rounding on the 0-255 scale
    byte = int(math.floor(value * 255.0 + 0.5))
    return f"{min(max(byte, 0), 255):02x}"


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Convert unit-range RGB to a lowercase '#rrggbb' string.

    Example:
        >>> rgb_to_hex(1.0, 0.5, 0.0)
        '#ff8000'
    """
    return f"#{_channel_to_hex(r)}{_channel_to_hex(g)}{_channel_to_hex(b)}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """
    Parse '#rrggbb' (or '#rgb') into 0-255 integers, case-insensitively.

    Raises:
        ValueError: If the string is not a 3 or 6 digit hex color
    """
    clean = hex_color.strip().removeprefix("#").lower()
    if len(clean) == 3:
        clean = "".join(ch * 2 for ch in clean)
    if len(clean) != 6 or not set(clean) <= _HEX_DIGITS:
        raise ValueError(
            f"Invalid hex color: {hex_color!r}. Expected '#RRGGBB' or '#RGB'."
        )
    return int(clean[0:2], 16), int(clean[2:4], 16), int(clean[4:6], 16)


def hex_to_unit_rgb(hex_color: str) -> RGB:
    """Parse a hex color into unit-range (r, g, b) floats."""
    r, g, b = hex_to_rgb(hex_color)
    return r / 255.0, g / 255.0, b / 255.0


def average_brightness(hex_colors: Iterable[str]) -> float:
    """
    Average perceived brightness of hex colors, in [0, 1].

    Uses ITU-R BT.601 luma (0.299 R + 0.587 G + 0.114 B). An empty input
    returns 0.5.
    """
    colors = list(hex_colors)
    if not colors:
        return DEFAULT_BRIGHTNESS

    wr, wg, wb = LUMA_WEIGHTS
    total = 0.0
    for hex_color in colors:
        r, g, b = hex_to_rgb(hex_color)
        total += (r * wr + g * wg + b * wb) / 255.0
    return total / len(colors)


def gradient_hexes(n: int, coeffs: Any, globals_: GlobalModifiers | None = None) -> list[str]:
    """
    Apply globals, sample n stops and return them as hex strings.

    Args:
        n: Number of stops
        coeffs: Base coefficients
        globals_: Global modifiers (identity when None)

    Returns:
        List of '#rrggbb' strings
    """
    try:
        coeffs = as_coeffs(coeffs)
        if globals_ is not None:
            coeffs = apply_globals(coeffs, globals_)
    except ValidationError as e:
        logger.debug(f"[gradient_hexes] Ignoring malformed input: {e}")
        return []

    return [rgb_to_hex(r, g, b) for r, g, b in sample(n, coeffs)]
