"""
Value objects for the cosine palette model.

    color(t) = a + b * cos(2*pi * (c*t + d))

CosineCoeffs holds the four per-channel vectors a (offset), b (amplitude),
c (frequency) and d (phase). GlobalModifiers holds the four scalars that act
on those vectors as a whole. Both are frozen; every builder returns a new
instance.

Example:
    >>> coeffs = CosineCoeffs.from_rows([
    ...     [0.5, 0.5, 0.5, 1],
    ...     [0.5, 0.5, 0.5, 1],
    ...     [1.0, 1.0, 1.0, 1],
    ...     [0.0, 0.333, 0.667, 1],
    ... ])
    >>> coeffs.to_array().shape
    (4, 4)
    >>> GlobalModifiers().with_contrast(1.5).contrast
    1.5
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace
from typing import Any, Self, TypeAlias

import numpy as np

from cosgrad.constants import (
    ALPHA,
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
    NUM_CHANNELS,
    NUM_VECTORS,
    PHASE_SHIFT_MAX,
    PHASE_SHIFT_MIN,
    PRECISION_EPSILON,
)
from cosgrad.exceptions import ValidationError
from cosgrad.params import MODIFIER_SLOTS
from cosgrad.validators import validate_index, validate_range

Vec3: TypeAlias = tuple[float, float, float]

VECTOR_NAMES = ("offset", "amplitude", "frequency", "phase")


def _as_vec3(values: Any, name: str) -> Vec3:
    try:
        items = tuple(float(v) for v in values)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a sequence of {NUM_CHANNELS} numbers") from e
    if len(items) != NUM_CHANNELS:
        raise ValidationError(f"{name} must have {NUM_CHANNELS} channels, got {len(items)}")
    return items  # type: ignore[return-value]


@dataclass(frozen=True)
class CosineCoeffs:
    """
    Per-channel cosine palette coefficients.

    Attributes:
        offset: a, base color per channel
        amplitude: b, color range per channel
        frequency: c, color cycles per channel
        phase: d, color shift per channel
    """

    offset: Vec3
    amplitude: Vec3
    frequency: Vec3
    phase: Vec3

    def __post_init__(self) -> None:
        for name in VECTOR_NAMES:
            object.__setattr__(self, name, _as_vec3(getattr(self, name), name))

    @classmethod
    def from_rows(cls, rows: Any) -> CosineCoeffs:
        """
        Build coefficients from 4 rows of 3 (RGB) or 4 (RGB + alpha) numbers.

        The alpha column is ignored; it is always 1 in the external format.

        Raises:
            ValidationError: If the shape is not 4x3 / 4x4 or a value is not finite
        """
        try:
            arr = np.asarray(rows, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Coefficients must be numeric 4x4 data: {e}") from e

        if arr.ndim != 2 or arr.shape[0] != NUM_VECTORS or arr.shape[1] not in (3, 4):
            raise ValidationError(
                f"Coefficients must have shape (4, 4) or (4, 3), got {arr.shape}"
            )
        if not np.all(np.isfinite(arr[:, :NUM_CHANNELS])):
            raise ValidationError("Coefficients must be finite numbers")

        return cls(*(tuple(row[:NUM_CHANNELS].tolist()) for row in arr))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> CosineCoeffs:
        """Build coefficients from a (4, 3) or (4, 4) array without finiteness checks."""
        return cls(*(tuple(row[:NUM_CHANNELS].tolist()) for row in np.asarray(arr)))

    def to_array(self) -> np.ndarray:
        """Return the (4, 4) float64 form with the alpha column set to 1."""
        arr = np.full((NUM_VECTORS, NUM_CHANNELS + 1), ALPHA, dtype=np.float64)
        arr[:, :NUM_CHANNELS] = self.rgb_array()
        return arr

    def rgb_array(self) -> np.ndarray:
        """Return the (4, 3) float64 form (alpha dropped)."""
        return np.array([self.offset, self.amplitude, self.frequency, self.phase], dtype=np.float64)

    def rows(self) -> list[list[float]]:
        """Return the external nested-list form, 4 rows of [r, g, b, 1]."""
        return [[*vec, ALPHA] for vec in self]

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for vec in self for v in vec)

    def vector(self, index: int) -> Vec3:
        return getattr(self, VECTOR_NAMES[index])

    @validate_index(NUM_VECTORS, "index")
    def with_vector(self, index: int, values: Sequence[float]) -> Self:
        """Return a copy with vector `index` replaced."""
        return replace(self, **{VECTOR_NAMES[index]: values})

    @validate_index(NUM_VECTORS, "index")
    @validate_index(NUM_CHANNELS, "channel", param_index=2)
    def with_channel(self, index: int, channel: int, value: float) -> Self:
        """Return a copy with a single (vector, channel) entry replaced."""
        vec = list(self.vector(index))
        vec[channel] = float(value)
        return replace(self, **{VECTOR_NAMES[index]: tuple(vec)})

    def __iter__(self) -> Iterator[Vec3]:
        return iter((self.offset, self.amplitude, self.frequency, self.phase))

    def __len__(self) -> int:
        return NUM_VECTORS


@dataclass(frozen=True)
class GlobalModifiers:
    """
    Uniform adjustments applied on top of CosineCoeffs.

    Attributes:
        exposure: Added to the offset vector (identity 0)
        contrast: Multiplies the amplitude vector (identity 1)
        frequency_scale: Multiplies the frequency vector (identity 1)
        phase_shift: Added to the phase vector (identity 0)

    Slot indices follow the vectors they modify, so globals[i] acts on
    coeffs.vector(i).
    """

    exposure: float = DEFAULT_EXPOSURE
    contrast: float = DEFAULT_CONTRAST
    frequency_scale: float = DEFAULT_FREQUENCY_SCALE
    phase_shift: float = DEFAULT_PHASE_SHIFT

    def __post_init__(self) -> None:
        for slot in MODIFIER_SLOTS:
            object.__setattr__(self, slot.name, float(getattr(self, slot.name)))

    @classmethod
    def identity(cls) -> GlobalModifiers:
        return cls()

    @classmethod
    def from_values(cls, values: Any) -> GlobalModifiers:
        """
        Build globals from a length-4 sequence.

        Raises:
            ValidationError: If the length is not 4 or a value is not finite
        """
        try:
            items = [float(v) for v in values]
        except (TypeError, ValueError) as e:
            raise ValidationError("Globals must be a sequence of 4 numbers") from e
        if len(items) != len(MODIFIER_SLOTS):
            raise ValidationError(f"Globals must have 4 values, got {len(items)}")
        if not all(math.isfinite(v) for v in items):
            raise ValidationError("Globals must be finite numbers")
        return cls(*items)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.exposure, self.contrast, self.frequency_scale, self.phase_shift)

    def validate(self) -> Self:
        """
        Check every modifier against its slot range.

        Raises:
            ValidationError: If a value is not finite or outside its range
        """
        for slot, value in zip(MODIFIER_SLOTS, self):
            if not math.isfinite(value):
                raise ValidationError(f"{slot.name} must be finite, got {value}")
            slot.validate(value)
        return self

    def is_identity(self, epsilon: float = PRECISION_EPSILON) -> bool:
        """True when every slot is within `epsilon` of its identity value."""
        return all(abs(value - slot.default) < epsilon for slot, value in zip(MODIFIER_SLOTS, self))

    @validate_index(len(MODIFIER_SLOTS), "slot")
    def with_slot(self, slot: int, value: float) -> Self:
        """Return a copy with the modifier at `slot` replaced (no range check)."""
        return replace(self, **{MODIFIER_SLOTS[slot].name: float(value)})

    @validate_range(EXPOSURE_MIN, EXPOSURE_MAX, "exposure")
    def with_exposure(self, exposure: float) -> Self:
        return replace(self, exposure=float(exposure))

    @validate_range(CONTRAST_MIN, CONTRAST_MAX, "contrast")
    def with_contrast(self, contrast: float) -> Self:
        return replace(self, contrast=float(contrast))

    @validate_range(FREQUENCY_SCALE_MIN, FREQUENCY_SCALE_MAX, "frequency_scale")
    def with_frequency_scale(self, frequency_scale: float) -> Self:
        return replace(self, frequency_scale=float(frequency_scale))

    @validate_range(PHASE_SHIFT_MIN, PHASE_SHIFT_MAX, "phase_shift")
    def with_phase_shift(self, phase_shift: float) -> Self:
        return replace(self, phase_shift=float(phase_shift))

    def __getitem__(self, slot: int) -> float:
        return self.as_tuple()[slot]

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())

    def __len__(self) -> int:
        return len(MODIFIER_SLOTS)


def as_coeffs(value: Any) -> CosineCoeffs:
    """Coerce nested sequences / arrays into CosineCoeffs (instances pass through)."""
    if isinstance(value, CosineCoeffs):
        return value
    return CosineCoeffs.from_rows(value)


def as_globals(value: Any) -> GlobalModifiers:
    """Coerce a length-4 sequence into GlobalModifiers; None means identity."""
    if value is None:
        return GlobalModifiers.identity()
    if isinstance(value, GlobalModifiers):
        return value
    return GlobalModifiers.from_values(value)
