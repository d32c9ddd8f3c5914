"""
Constants and default values for cosgrad.

Centralizes magic numbers and configuration defaults for better maintainability.
"""

from __future__ import annotations

import math

# =============================================================================
# Cosine Model Constants
# =============================================================================

TAU = 2.0 * math.pi

# Vector layout: a (offset), b (amplitude), c (frequency), d (phase)
NUM_VECTORS = 4
NUM_CHANNELS = 3  # R, G, B (alpha slot is always 1)
ALPHA = 1.0

# =============================================================================
# Seed Codec Constants
# =============================================================================

# Decimal places kept in seeds
COEFF_PRECISION = 3
PRECISION_EPSILON = 10.0**-COEFF_PRECISION

SEED_COEFF_TOKENS = NUM_VECTORS * NUM_CHANNELS  # 12
SEED_FULL_TOKENS = SEED_COEFF_TOKENS + 4  # 16
SEED_SEPARATOR = ","

# Seeds written before phase was normalized stored it in radians (-pi..pi)
LEGACY_PHASE_THRESHOLD = 1.001

# =============================================================================
# Global Modifier Constants
# =============================================================================

# Identity values [exposure, contrast, frequency_scale, phase_shift]
DEFAULT_EXPOSURE = 0.0
DEFAULT_CONTRAST = 1.0
DEFAULT_FREQUENCY_SCALE = 1.0
DEFAULT_PHASE_SHIFT = 0.0

# Global modifier ranges
EXPOSURE_MIN = -1.0
EXPOSURE_MAX = 1.0
CONTRAST_MIN = 0.0
CONTRAST_MAX = 2.0
FREQUENCY_SCALE_MIN = 0.0
FREQUENCY_SCALE_MAX = 2.0
PHASE_SHIFT_MIN = -1.0 - PRECISION_EPSILON
PHASE_SHIFT_MAX = 1.0 + PRECISION_EPSILON

# Slot kinds
ADDITIVE = "additive"
MULTIPLICATIVE = "multiplicative"
VALID_SLOT_KINDS = {ADDITIVE, MULTIPLICATIVE}

# =============================================================================
# Fitter Constants
# =============================================================================

# Coarse frequency grid: 0.3..2.5 step 0.1 (23 candidates)
FIT_FREQ_MIN = 0.3
FIT_FREQ_MAX = 2.5
FIT_FREQ_STEP = 0.1

# Optional refinement around the best grid frequency
FIT_REFINE_SPAN = 0.05
FIT_REFINE_STEP = 0.005

# Below this the 3x3 normal equations are treated as singular
FIT_DET_EPSILON = 1e-10
FIT_AMPLITUDE_EPSILON = 1e-10

# Output clamps
FIT_OFFSET_RANGE = (0.0, 1.0)
FIT_AMPLITUDE_RANGE = (-0.6, 0.6)
FIT_FREQUENCY_RANGE = (0.1, 3.0)

# Used when there is nothing to fit
FIT_NEUTRAL_OFFSET = 0.5
FIT_NEUTRAL_FREQUENCY = 1.0

# =============================================================================
# Sampling / Color Constants
# =============================================================================

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)
DEFAULT_BRIGHTNESS = 0.5  # Returned for an empty color list

# =============================================================================
# Similarity / Cache Constants
# =============================================================================

SIMILARITY_DECIMALS = 2
SIMILARITY_DELIMITER = "|"

DEFAULT_CACHE_SIZE = 50
