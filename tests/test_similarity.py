"""
Tests for similarity fingerprints.
"""

import re

import numpy as np
import pytest

from cosgrad import CosineCoeffs, ValidationError, fingerprint, serialize


@pytest.fixture
def coeffs():
    """Reference palette."""
    return CosineCoeffs.from_rows(
        [
            [0.8, 0.5, 0.4, 1],
            [0.2, 0.2, 0.2, 1],
            [2.0, 1.0, 1.0, 1],
            [0.0, 0.1, 0.2, 1],
        ]
    )


class TestFingerprint:
    """Test fingerprint()."""

    def test_format(self, coeffs):
        """Test 12 two-decimal numbers joined with '|'."""
        key = fingerprint(coeffs)

        assert key == "0.80|0.50|0.40|0.20|0.20|0.20|2.00|1.00|1.00|0.00|0.10|0.20"
        assert re.fullmatch(r"(-?\d+\.\d{2}\|){11}-?\d+\.\d{2}", key)

    def test_small_tweak_shares_key(self, coeffs):
        """Test a sub-rounding tweak keeps the key while the seed changes."""
        tweaked = coeffs.with_channel(0, 0, 0.802).with_channel(3, 1, 0.101)

        assert fingerprint(tweaked) == fingerprint(coeffs)
        assert serialize(tweaked) != serialize(coeffs)

    @pytest.mark.parametrize("vector", [0, 1, 2, 3])
    @pytest.mark.parametrize("channel", [0, 1, 2])
    def test_large_difference_changes_key(self, coeffs, vector, channel):
        """Test a 0.02 change in any entry gives a different key."""
        shifted = coeffs.with_channel(vector, channel, coeffs.vector(vector)[channel] + 0.02)
        assert fingerprint(shifted) != fingerprint(coeffs)

    def test_ignores_alpha(self, coeffs):
        """Test the alpha column does not participate."""
        arr = coeffs.to_array()
        arr[:, 3] = 0.25
        assert fingerprint(arr) == fingerprint(coeffs)

    def test_negative_zero(self, coeffs):
        """Test tiny negatives do not render as '-0.00'."""
        key = fingerprint(coeffs.with_channel(1, 0, -0.001))

        assert "-0.00" not in key
        assert key.split("|")[3] == "0.00"

    def test_negative_values(self, coeffs):
        """Test negative amplitudes keep their sign."""
        key = fingerprint(coeffs.with_vector(1, [-0.3, -0.25, 0.0]))
        assert key.split("|")[3:6] == ["-0.30", "-0.25", "0.00"]

    def test_deterministic(self):
        """Test equal inputs give equal keys."""
        rng = np.random.default_rng(3)
        rows = rng.uniform(0, 1, (4, 3))
        assert fingerprint(rows) == fingerprint(rows.copy())

    def test_rejects_malformed(self):
        """Test malformed coefficients raise ValidationError."""
        with pytest.raises(ValidationError):
            fingerprint([[0.5, 0.5]] * 4)
