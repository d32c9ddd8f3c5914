"""
Exception types raised by cosgrad.

All errors derive from ValueError so callers that already guard against bad
numeric input keep working.
"""

from __future__ import annotations


class CosgradError(ValueError):
    """Base class for cosgrad errors."""


class ValidationError(CosgradError):
    """Coefficients or globals have the wrong shape or out-of-range values."""


class InvalidSeedError(CosgradError):
    """A seed string could not be decoded into coefficients and globals."""
