"""
cosgrad - Cosine Gradient Palettes

Procedural color gradients from a 4-parameter-per-channel cosine model:

    color(t) = a + b * cos(2*pi * (c*t + d))

Features:
- Forward sampling of palettes into RGB stops and hex strings
- Global modifiers (exposure, contrast, frequency scale, phase shift) with
  exact inverses and taring
- Least-squares fitting of coefficients to key colors (Numba kernels)
- Compact, reversible, URL-safe seed strings with legacy-format support
- Lossy similarity fingerprints for near-duplicate detection

Example - Sampling:
    >>> from cosgrad import CosineCoeffs, GlobalModifiers, gradient_hexes
    >>>
    >>> coeffs = CosineCoeffs.from_rows([
    ...     [0.5, 0.5, 0.5, 1],
    ...     [0.5, 0.5, 0.5, 1],
    ...     [1.0, 1.0, 1.0, 1],
    ...     [0.0, 0.333, 0.667, 1],
    ... ])
    >>> hexes = gradient_hexes(7, coeffs, GlobalModifiers(contrast=1.2))

Example - Seeds:
    >>> from cosgrad import serialize, deserialize, is_valid_seed
    >>>
    >>> seed = serialize(coeffs, GlobalModifiers(0.2, 1.5, 1.2, 0.5))
    >>> coeffs, globals_ = deserialize(seed)

Example - Fitting:
    >>> from cosgrad import fit_cosine_palette, validate_fit
    >>>
    >>> result = fit_cosine_palette(["#2d1b4e", "#b8336a", "#f4a259", "#f9e07f"])
    >>> report = validate_fit(["#2d1b4e", "#b8336a", "#f4a259", "#f9e07f"], result)
"""

__version__ = "0.1.0"

# Memoization
from cosgrad.cache import BoundedCache, fingerprint_for, seed_for

# Seed codec
from cosgrad.codec import deserialize, is_valid_seed, serialize

# Value objects
from cosgrad.coeffs import CosineCoeffs, GlobalModifiers

# Errors
from cosgrad.exceptions import CosgradError, InvalidSeedError, ValidationError

# Fitting
from cosgrad.fit import FitResult, FitValidation, fit_cosine_palette, validate_fit

# Global modifiers
from cosgrad.modifiers import (
    apply_globals,
    invert_global,
    normalize_to_defaults,
    tare,
    tare_all,
    update_slot_with_inverse,
)

# Modifier slot descriptors
from cosgrad.params import MODIFIER_SLOTS, ModifierSlot

# Sampling and color helpers
from cosgrad.sampler import (
    average_brightness,
    gradient_hexes,
    hex_to_rgb,
    rgb_to_hex,
    sample,
    sample_array,
)

# Similarity
from cosgrad.similarity import fingerprint

__all__ = [
    # Version
    "__version__",
    # Data structures
    "CosineCoeffs",
    "GlobalModifiers",
    "ModifierSlot",
    "MODIFIER_SLOTS",
    # Errors
    "CosgradError",
    "ValidationError",
    "InvalidSeedError",
    # Sampling
    "sample",
    "sample_array",
    "gradient_hexes",
    "rgb_to_hex",
    "hex_to_rgb",
    "average_brightness",
    # Modifiers
    "apply_globals",
    "invert_global",
    "update_slot_with_inverse",
    "normalize_to_defaults",
    "tare",
    "tare_all",
    # Fitting
    "fit_cosine_palette",
    "validate_fit",
    "FitResult",
    "FitValidation",
    # Seeds
    "serialize",
    "deserialize",
    "is_valid_seed",
    # Similarity
    "fingerprint",
    # Memoization
    "BoundedCache",
    "seed_for",
    "fingerprint_for",
]
