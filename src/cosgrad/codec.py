"""
Seed codec: compact, reversible, URL-safe text form of (coefficients, globals).

Format:
    12 or 16 comma-separated numbers (RGB of offset, amplitude, frequency,
    phase, then optionally exposure, contrast, frequency_scale, phase_shift),
    each printed with COEFF_PRECISION decimals and the leading zero dropped
    for values inside (-1, 1). The text is LZ-String compressed with the
    URI-component alphabet, so seeds can sit in a URL path without escaping.

Globals within 10^-COEFF_PRECISION of the identity (0, 1, 1, 0) are left out.

Example:
    >>> seed = serialize(coeffs, GlobalModifiers(0.2, 1.5, 1.2, 0.5))
    >>> decoded_coeffs, decoded_globals = deserialize(seed)
    >>> is_valid_seed(seed)
    True
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from lzstring import LZString

from cosgrad.coeffs import CosineCoeffs, GlobalModifiers, as_coeffs, as_globals
from cosgrad.constants import (
    COEFF_PRECISION,
    LEGACY_PHASE_THRESHOLD,
    NUM_CHANNELS,
    SEED_COEFF_TOKENS,
    SEED_FULL_TOKENS,
    SEED_SEPARATOR,
)
from cosgrad.exceptions import InvalidSeedError, ValidationError

logger = logging.getLogger(__name__)

_LEADING_ZERO = re.compile(r"^(-?)0\.")


def format_number(value: float) -> str:
    """
    Format one seed number.

    Example:
        >>> format_number(0.5), format_number(-0.25), format_number(0), format_number(1.2)
        ('.500', '-.250', '0', '1.200')
    """
    if value == 0:
        return "0"
    text = f"{value:.{COEFF_PRECISION}f}"
    if -1 < value < 1:
        text = _LEADING_ZERO.sub(r"\1.", text, count=1)
    return text


def parse_number(token: str) -> float:
    """Parse one seed number, re-expanding the leading-dot shorthand."""
    if token.startswith("."):
        return float("0" + token)
    if token.startswith("-."):
        return float("-0" + token[1:])
    return float(token)


def serialize(coeffs: Any, globals_: Any = None) -> str:
    """
    Encode coefficients and globals as a seed string.

    Args:
        coeffs: CosineCoeffs or 4 rows of 3/4 numbers
        globals_: GlobalModifiers or 4 numbers (identity when None)

    Returns:
        URL-safe seed

    Raises:
        ValidationError: If shapes are wrong, a value is not finite, or a
            global is outside its range
    """
    coeffs = as_coeffs(coeffs)
    if not coeffs.is_finite():
        raise ValidationError("Coefficients must be finite numbers")
    globals_ = as_globals(globals_).validate()

    data = [value for vec in coeffs for value in vec]
    if not globals_.is_identity():
        data.extend(globals_)

    packed = SEED_SEPARATOR.join(format_number(value) for value in data)
    return LZString.compressToEncodedURIComponent(packed)


def _decode_numbers(seed: str) -> list[float]:
    if not isinstance(seed, str):
        raise InvalidSeedError(f"Invalid seed: expected str, got {type(seed).__name__}")

    try:
        decompressed = LZString.decompressFromEncodedURIComponent(seed)
    except Exception as e:
        raise InvalidSeedError(f"Invalid seed: failed to decompress ({e!r})") from e

    if not decompressed:
        raise InvalidSeedError("Invalid seed: failed to decompress or empty result")

    tokens = decompressed.split(SEED_SEPARATOR)
    if len(tokens) not in (SEED_COEFF_TOKENS, SEED_FULL_TOKENS):
        raise InvalidSeedError(
            f"Invalid seed format: expected {SEED_COEFF_TOKENS} or {SEED_FULL_TOKENS} "
            f"values, got {len(tokens)}"
        )

    try:
        numbers = [parse_number(token) for token in tokens]
    except ValueError as e:
        raise InvalidSeedError(f"Invalid seed: non-numeric value ({e})") from e

    if not all(math.isfinite(n) for n in numbers):
        raise InvalidSeedError("Invalid seed: values must be finite")
    return numbers


def deserialize(seed: str) -> tuple[CosineCoeffs, GlobalModifiers]:
    """
    Decode a seed into coefficients and globals.

    Twelve-number seeds get identity globals. Seeds whose phase shift is
    outside +/-1.001 come from the old radians format and are rescaled by 1/pi.

    Raises:
        InvalidSeedError: If the seed cannot be decompressed, has the wrong
            number of values, or holds non-finite / out-of-range values
    """
    numbers = _decode_numbers(seed)

    if len(numbers) == SEED_FULL_TOKENS and abs(numbers[-1]) > LEGACY_PHASE_THRESHOLD:
        logger.debug(f"[deserialize] Legacy radians phase {numbers[-1]}, rescaling to -1..1")
        numbers[-1] = numbers[-1] / math.pi

    numbers = [round(n, COEFF_PRECISION) for n in numbers]
    rows = [numbers[i : i + NUM_CHANNELS] for i in range(0, SEED_COEFF_TOKENS, NUM_CHANNELS)]
    coeffs = CosineCoeffs(*rows)

    if len(numbers) == SEED_COEFF_TOKENS:
        return coeffs, GlobalModifiers.identity()

    globals_ = GlobalModifiers(*numbers[SEED_COEFF_TOKENS:])
    try:
        globals_.validate()
    except ValidationError as e:
        raise InvalidSeedError(f"Invalid seed: {e}") from e
    return coeffs, globals_


def is_valid_seed(seed: Any) -> bool:
    """
    Check whether a seed decodes cleanly. Never raises.

    Example:
        >>> is_valid_seed("")
        False
    """
    try:
        deserialize(seed)
    except InvalidSeedError:
        return False
    return True
