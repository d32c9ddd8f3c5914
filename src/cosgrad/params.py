"""
Global modifier slot definitions.

Each global modifier (exposure, contrast, frequency scale, phase shift) acts on
exactly one coefficient vector. A ModifierSlot records which vector, the
modifier's identity value and valid range, and whether it combines with the
vector additively or multiplicatively. All slot algebra (apply, invert, tare)
lives here so the rest of the package never switches on slot indices.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from cosgrad.constants import (
    ADDITIVE,
    CONTRAST_MAX,
    CONTRAST_MIN,
    DEFAULT_CONTRAST,
    DEFAULT_EXPOSURE,
    DEFAULT_FREQUENCY_SCALE,
    DEFAULT_PHASE_SHIFT,
    EXPOSURE_MAX,
    EXPOSURE_MIN,
    FREQUENCY_SCALE_MAX,
    FREQUENCY_SCALE_MIN,
    MULTIPLICATIVE,
    PHASE_SHIFT_MAX,
    PHASE_SHIFT_MIN,
    VALID_SLOT_KINDS,
)
from cosgrad.exceptions import ValidationError

Values: TypeAlias = float | np.ndarray


@dataclass(frozen=True)
class ModifierSlot:
    """
    Descriptor for one global modifier.

    Attributes:
        name: Modifier name (also the GlobalModifiers field name)
        index: Slot index, equal to the coefficient vector it modifies
        vector: Name of the coefficient vector it modifies
        default: Identity value (applying it changes nothing)
        range: (min, max) tuple for validation
        kind: "additive" or "multiplicative"

    Example:
        >>> slot = MODIFIER_SLOTS[1]
        >>> slot.apply(0.5, 1.5)
        0.75
        >>> slot.invert(0.75, 1.5)
        0.5
    """

    name: str
    index: int
    vector: str
    default: float
    range: tuple[float, float]
    kind: str

    def __post_init__(self):
        """Validate slot definition."""
        if self.kind not in VALID_SLOT_KINDS:
            raise ValueError(
                f"Invalid kind for {self.name}: {self.kind}. Must be one of {VALID_SLOT_KINDS}"
            )
        min_val, max_val = self.range
        if min_val >= max_val:
            raise ValueError(
                f"Invalid range for {self.name}: min ({min_val}) must be < max ({max_val})"
            )
        if not (min_val <= self.default <= max_val):
            raise ValueError(
                f"Default value {self.default} for {self.name} outside range {self.range}"
            )

    @property
    def is_additive(self) -> bool:
        return self.kind == ADDITIVE

    def validate(self, value: float) -> float:
        """
        Validate a modifier value against the slot range.

        Args:
            value: Value to validate

        Returns:
            Validated value as float

        Raises:
            ValidationError: If value is outside the slot range
        """
        min_val, max_val = self.range
        if not (min_val <= value <= max_val):
            raise ValidationError(f"{self.name}={value} outside valid range {self.range}")
        return float(value)

    def apply(self, values: Values, amount: float) -> Values:
        """Combine base values with the modifier amount."""
        if self.is_additive:
            return values + amount
        return values * amount

    def invert(self, values: Values, amount: float) -> Values:
        """Recover base values from modified values (inverse of apply)."""
        if self.is_additive:
            return values - amount
        self._require_nonzero(amount, "invert")
        return values / amount

    def tare(self, values: Values, current: float, default: float) -> Values:
        """
        Fold the current modifier into base values so pairing them with
        `default` reproduces the current output.
        """
        if self.is_additive:
            return values + current - default
        self._require_nonzero(default, "tare to")
        return values * current / default

    def _require_nonzero(self, amount: float, action: str) -> None:
        if amount == 0:
            raise ValueError(
                f"Cannot {action} {self.name}={amount}: {self.kind} modifiers "
                f"have no inverse at zero."
            )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"ModifierSlot(name='{self.name}', index={self.index}, "
            f"default={self.default}, range={self.range}, kind='{self.kind}')"
        )


EXPOSURE = ModifierSlot(
    "exposure", 0, "offset", DEFAULT_EXPOSURE, (EXPOSURE_MIN, EXPOSURE_MAX), ADDITIVE
)
CONTRAST = ModifierSlot(
    "contrast", 1, "amplitude", DEFAULT_CONTRAST, (CONTRAST_MIN, CONTRAST_MAX), MULTIPLICATIVE
)
FREQUENCY_SCALE = ModifierSlot(
    "frequency_scale",
    2,
    "frequency",
    DEFAULT_FREQUENCY_SCALE,
    (FREQUENCY_SCALE_MIN, FREQUENCY_SCALE_MAX),
    MULTIPLICATIVE,
)
PHASE_SHIFT = ModifierSlot(
    "phase_shift", 3, "phase", DEFAULT_PHASE_SHIFT, (PHASE_SHIFT_MIN, PHASE_SHIFT_MAX), ADDITIVE
)

# Ordered by slot index
MODIFIER_SLOTS: tuple[ModifierSlot, ...] = (EXPOSURE, CONTRAST, FREQUENCY_SCALE, PHASE_SHIFT)
