"""
Global modifier application.

Globals act on whole coefficient vectors:

    offset    += exposure         (additive)
    amplitude *= contrast         (multiplicative)
    frequency *= frequency_scale  (multiplicative)
    phase     += phase_shift      (additive)

Editors display coefficients with globals applied. When a displayed value is
edited, the inverse recovers the base coefficient. Taring folds a global into
the base coefficients and resets it, leaving the rendered output unchanged.

All functions return new values; inputs are never modified.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from cosgrad.coeffs import CosineCoeffs, GlobalModifiers, as_coeffs, as_globals
from cosgrad.constants import NUM_CHANNELS, NUM_VECTORS
from cosgrad.params import MODIFIER_SLOTS
from cosgrad.validators import validate_index

logger = logging.getLogger(__name__)


def apply_globals(coeffs: Any, globals_: Any) -> CosineCoeffs:
    """
    Apply global modifiers to coefficients.

    Args:
        coeffs: Base coefficients
        globals_: Global modifiers

    Returns:
        New CosineCoeffs with every vector modified by its global

    Example:
        >>> base = CosineCoeffs.from_rows([[.5] * 3, [.5] * 3, [1] * 3, [0] * 3])
        >>> apply_globals(base, GlobalModifiers(contrast=1.5)).amplitude
        (0.75, 0.75, 0.75)
    """
    rgb = as_coeffs(coeffs).rgb_array()
    globals_ = as_globals(globals_)
    out = np.stack([slot.apply(rgb[slot.index], globals_[slot.index]) for slot in MODIFIER_SLOTS])
    return CosineCoeffs.from_array(out)


def normalize_to_defaults(coeffs: Any, globals_: Any) -> CosineCoeffs:
    """
    Undo apply_globals: recover base coefficients from modified ones.

    normalize_to_defaults(apply_globals(c, g), g) reproduces c up to rounding.

    Raises:
        ValueError: If a multiplicative global is zero
    """
    rgb = as_coeffs(coeffs).rgb_array()
    globals_ = as_globals(globals_)
    out = np.stack([slot.invert(rgb[slot.index], globals_[slot.index]) for slot in MODIFIER_SLOTS])
    return CosineCoeffs.from_array(out)


@validate_index(NUM_VECTORS, "slot", param_index=0)
def invert_global(slot: int, value: float, globals_: Any) -> float:
    """
    Recover the base value of one coefficient from its displayed value.

    Args:
        slot: Modifier / vector index (0=exposure/offset .. 3=phase_shift/phase)
        value: Displayed (globally modified) value
        globals_: Global modifiers in effect

    Returns:
        Base coefficient value

    Raises:
        ValueError: If the slot is multiplicative and its global is zero
    """
    globals_ = as_globals(globals_)
    return float(MODIFIER_SLOTS[slot].invert(float(value), globals_[slot]))


@validate_index(NUM_VECTORS, "slot", param_index=1)
@validate_index(NUM_CHANNELS, "channel", param_index=2)
def update_slot_with_inverse(
    coeffs: Any,
    slot: int,
    channel: int,
    value: float,
    globals_: Any,
) -> CosineCoeffs:
    """
    Replace one base coefficient so that, with globals applied, it displays `value`.

    Args:
        coeffs: Base coefficients
        slot: Vector index (0=offset, 1=amplitude, 2=frequency, 3=phase)
        channel: Channel index (0=R, 1=G, 2=B)
        value: Desired displayed value
        globals_: Global modifiers in effect

    Returns:
        New CosineCoeffs with only (slot, channel) changed
    """
    base = invert_global(slot, value, globals_)
    return as_coeffs(coeffs).with_channel(slot, channel, base)


@validate_index(NUM_VECTORS, "slot", param_index=2)
def tare(
    coeffs: Any,
    globals_: Any,
    slot: int,
    default: float | None = None,
) -> tuple[CosineCoeffs, GlobalModifiers]:
    """
    Fold one global into the base coefficients and reset it to `default`.

    Additive slots become old + current - default, multiplicative slots
    old * current / default. The rendered output is unchanged. When the
    global already equals `default` nothing changes.

    Args:
        coeffs: Base coefficients
        globals_: Global modifiers
        slot: Modifier index to tare
        default: Value to reset the global to (slot identity when None)

    Returns:
        (coeffs, globals) tuple

    Example:
        >>> coeffs, globals_ = tare(coeffs, GlobalModifiers(exposure=0.2), 0)
        >>> globals_.exposure
        0.0
    """
    coeffs = as_coeffs(coeffs)
    globals_ = as_globals(globals_)
    modifier = MODIFIER_SLOTS[slot]
    if default is None:
        default = modifier.default

    current = globals_[slot]
    if current == default:
        return coeffs, globals_

    vector = modifier.tare(np.asarray(coeffs.vector(slot)), current, default)
    logger.debug(f"[tare] Folded {modifier.name}={current} into {modifier.vector}, reset to {default}")
    return coeffs.with_vector(slot, vector), globals_.with_slot(slot, default)


def tare_all(coeffs: Any, globals_: Any) -> tuple[CosineCoeffs, GlobalModifiers]:
    """Tare every global to its identity value, baking all globals into the coefficients."""
    for slot in MODIFIER_SLOTS:
        coeffs, globals_ = tare(coeffs, globals_, slot.index)
    return as_coeffs(coeffs), as_globals(globals_)
