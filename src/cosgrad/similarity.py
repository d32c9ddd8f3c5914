"""
Similarity fingerprints for near-duplicate palettes.

The key rounds the RGB entries of all four coefficient vectors to two
decimals. Palettes that differ by a few thousandths per entry share a key;
differences of 0.02 or more in any entry always give different keys. Values
within 0.005-0.01 of each other may land either side of a rounding boundary.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from cosgrad.coeffs import as_coeffs
from cosgrad.constants import SIMILARITY_DECIMALS, SIMILARITY_DELIMITER


def fingerprint(coeffs: Any) -> str:
    """
    Lossy equality key for a palette.

    Args:
        coeffs: CosineCoeffs or 4 rows of 3/4 numbers

    Returns:
        12 rounded numbers joined with '|'

    Example:
        >>> fingerprint([[.8, .5, .4], [.2, .2, .2], [2, 1, 1], [0, .1, .2]])
        '0.80|0.50|0.40|0.20|0.20|0.20|2.00|1.00|1.00|0.00|0.10|0.20'
    """
    rounded = np.round(as_coeffs(coeffs).rgb_array(), SIMILARITY_DECIMALS) + 0.0  # drop -0.0
    return SIMILARITY_DELIMITER.join(f"{value:.{SIMILARITY_DECIMALS}f}" for value in rounded.ravel())
