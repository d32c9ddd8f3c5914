"""
Least-squares fitting module.

Recovers cosine palette coefficients from key colors using a frequency grid
search with closed-form linear solves per candidate.
"""

from cosgrad.fit.api import (
    FREQ_CANDIDATES,
    ChannelFit,
    ColorComparison,
    FitResult,
    FitValidation,
    fit_channel,
    fit_cosine_palette,
    frequency_grid,
    validate_fit,
)

__all__ = [
    "FREQ_CANDIDATES",
    "ChannelFit",
    "ColorComparison",
    "FitResult",
    "FitValidation",
    "fit_channel",
    "fit_cosine_palette",
    "frequency_grid",
    "validate_fit",
]
