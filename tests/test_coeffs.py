"""
Tests for the CosineCoeffs / GlobalModifiers value objects and modifier slots.
"""

import numpy as np
import pytest

from cosgrad import MODIFIER_SLOTS, CosineCoeffs, GlobalModifiers, ModifierSlot, ValidationError
from cosgrad.coeffs import as_coeffs, as_globals


@pytest.fixture
def rows():
    """Reference palette in the external 4x4 form."""
    return [
        [0.5, 0.5, 0.5, 1],
        [0.5, 0.5, 0.5, 1],
        [1.0, 1.0, 1.0, 1],
        [0.0, 0.333, 0.667, 1],
    ]


class TestCosineCoeffs:
    """Test CosineCoeffs construction and builders."""

    def test_from_rows_4x4(self, rows):
        """Test building from 4 rows with alpha."""
        coeffs = CosineCoeffs.from_rows(rows)

        assert coeffs.offset == (0.5, 0.5, 0.5)
        assert coeffs.phase == (0.0, 0.333, 0.667)

    def test_from_rows_4x3(self, rows):
        """Test building from 4 rows without alpha."""
        coeffs = CosineCoeffs.from_rows([row[:3] for row in rows])

        assert coeffs == CosineCoeffs.from_rows(rows)

    def test_to_array_has_alpha_column(self, rows):
        """Test the array form is 4x4 with alpha fixed to 1."""
        arr = CosineCoeffs.from_rows(rows).to_array()

        assert arr.shape == (4, 4)
        assert np.all(arr[:, 3] == 1.0)
        np.testing.assert_array_equal(arr, np.array(rows, dtype=np.float64))

    def test_rows_round_trip(self, rows):
        """Test rows() returns the external nested-list form."""
        assert CosineCoeffs.from_rows(rows).rows() == [[float(v) for v in row] for row in rows]

    @pytest.mark.parametrize(
        "bad",
        [
            [[0.5, 0.5, 0.5]] * 3,  # 3 rows
            [[0.5, 0.5]] * 4,  # 2 columns
            [[0.5] * 5] * 4,  # 5 columns
            [0.5] * 16,  # flat
            "not coefficients",
        ],
    )
    def test_from_rows_rejects_bad_shapes(self, bad):
        """Test malformed shapes raise ValidationError."""
        with pytest.raises(ValidationError):
            CosineCoeffs.from_rows(bad)

    def test_from_rows_rejects_non_finite(self, rows):
        """Test NaN / inf raise ValidationError."""
        rows[1][2] = float("nan")
        with pytest.raises(ValidationError):
            CosineCoeffs.from_rows(rows)

        rows[1][2] = float("inf")
        with pytest.raises(ValidationError):
            CosineCoeffs.from_rows(rows)

    def test_vector_length_checked(self):
        """Test direct construction validates channel count."""
        with pytest.raises(ValidationError):
            CosineCoeffs((0.5, 0.5), (0.5, 0.5, 0.5), (1, 1, 1), (0, 0, 0))

    def test_with_vector_returns_new_instance(self, rows):
        """Test with_vector leaves the original untouched."""
        coeffs = CosineCoeffs.from_rows(rows)
        updated = coeffs.with_vector(2, [2.0, 2.0, 2.0])

        assert updated.frequency == (2.0, 2.0, 2.0)
        assert coeffs.frequency == (1.0, 1.0, 1.0)
        assert updated.offset == coeffs.offset

    def test_with_channel(self, rows):
        """Test with_channel replaces a single entry."""
        coeffs = CosineCoeffs.from_rows(rows)
        updated = coeffs.with_channel(3, 1, 0.25)

        assert updated.phase == (0.0, 0.25, 0.667)
        assert coeffs.phase == (0.0, 0.333, 0.667)

    def test_with_channel_rejects_bad_indices(self, rows):
        """Test index validation on builders."""
        coeffs = CosineCoeffs.from_rows(rows)

        with pytest.raises(ValueError):
            coeffs.with_channel(4, 0, 0.1)
        with pytest.raises(ValueError):
            coeffs.with_channel(0, 3, 0.1)
        with pytest.raises(TypeError):
            coeffs.with_channel(0.5, 0, 0.1)

    def test_frozen(self, rows):
        """Test coefficients are immutable."""
        coeffs = CosineCoeffs.from_rows(rows)
        with pytest.raises(AttributeError):
            coeffs.offset = (0.0, 0.0, 0.0)

    def test_hashable(self, rows):
        """Test equal coefficients hash equal."""
        assert hash(CosineCoeffs.from_rows(rows)) == hash(CosineCoeffs.from_rows(rows))

    def test_as_coeffs_passthrough(self, rows):
        """Test as_coeffs returns instances unchanged."""
        coeffs = CosineCoeffs.from_rows(rows)
        assert as_coeffs(coeffs) is coeffs
        assert as_coeffs(rows) == coeffs


class TestGlobalModifiers:
    """Test GlobalModifiers construction and validation."""

    def test_identity(self):
        """Test identity is (0, 1, 1, 0)."""
        assert GlobalModifiers.identity().as_tuple() == (0.0, 1.0, 1.0, 0.0)
        assert GlobalModifiers.identity().is_identity()

    def test_indexing(self):
        """Test slot indexing follows the vector order."""
        globals_ = GlobalModifiers(0.2, 1.5, 1.2, 0.5)

        assert globals_[0] == 0.2
        assert globals_[1] == 1.5
        assert globals_[2] == 1.2
        assert globals_[3] == 0.5
        assert list(globals_) == [0.2, 1.5, 1.2, 0.5]
        assert len(globals_) == 4

    def test_is_identity_epsilon(self):
        """Test is_identity tolerates differences below epsilon."""
        assert GlobalModifiers(0.0004, 1.0, 1.0, 0.0).is_identity()
        assert not GlobalModifiers(0.002, 1.0, 1.0, 0.0).is_identity()

    def test_from_values(self):
        """Test building from a sequence."""
        assert GlobalModifiers.from_values([0.2, 1.5, 1.2, 0.5]) == GlobalModifiers(0.2, 1.5, 1.2, 0.5)

    @pytest.mark.parametrize("bad", [[0, 1, 1], [0, 1, 1, 0, 0], [0, 1, float("nan"), 0], "abcd"])
    def test_from_values_rejects_bad_input(self, bad):
        """Test malformed globals raise ValidationError."""
        with pytest.raises(ValidationError):
            GlobalModifiers.from_values(bad)

    def test_validate_ranges(self):
        """Test range validation per slot."""
        GlobalModifiers(-1.0, 2.0, 0.0, 1.0).validate()

        with pytest.raises(ValidationError, match="exposure"):
            GlobalModifiers(exposure=1.5).validate()
        with pytest.raises(ValidationError, match="contrast"):
            GlobalModifiers(contrast=-0.1).validate()
        with pytest.raises(ValidationError, match="frequency_scale"):
            GlobalModifiers(frequency_scale=2.5).validate()
        with pytest.raises(ValidationError, match="phase_shift"):
            GlobalModifiers(phase_shift=1.1).validate()

    def test_range_checked_builders(self):
        """Test with_* builders validate their argument."""
        globals_ = GlobalModifiers().with_exposure(0.3).with_contrast(1.5)

        assert globals_.exposure == 0.3
        assert globals_.contrast == 1.5

        with pytest.raises(ValueError, match="outside valid range"):
            GlobalModifiers().with_exposure(2.0)
        with pytest.raises(TypeError):
            GlobalModifiers().with_phase_shift("0.5")

    def test_with_slot(self):
        """Test with_slot replaces by index without range checks."""
        globals_ = GlobalModifiers().with_slot(2, 1.8)

        assert globals_.frequency_scale == 1.8
        assert GlobalModifiers().frequency_scale == 1.0

    def test_as_globals(self):
        """Test coercion helper."""
        assert as_globals(None) == GlobalModifiers.identity()
        assert as_globals([0, 1, 1, 0]) == GlobalModifiers.identity()


class TestModifierSlot:
    """Test slot descriptors."""

    def test_slot_order(self):
        """Test slots line up with vectors."""
        assert [slot.name for slot in MODIFIER_SLOTS] == [
            "exposure",
            "contrast",
            "frequency_scale",
            "phase_shift",
        ]
        assert [slot.index for slot in MODIFIER_SLOTS] == [0, 1, 2, 3]
        assert [slot.is_additive for slot in MODIFIER_SLOTS] == [True, False, False, True]

    def test_invalid_definition(self):
        """Test slot definitions are validated."""
        with pytest.raises(ValueError):
            ModifierSlot("x", 0, "offset", 0.0, (1.0, -1.0), "additive")
        with pytest.raises(ValueError):
            ModifierSlot("x", 0, "offset", 5.0, (-1.0, 1.0), "additive")
        with pytest.raises(ValueError):
            ModifierSlot("x", 0, "offset", 0.0, (-1.0, 1.0), "exponential")

    @pytest.mark.parametrize("slot", MODIFIER_SLOTS, ids=lambda s: s.name)
    def test_apply_invert_round_trip(self, slot):
        """Test invert undoes apply."""
        values = np.array([0.1, 0.5, 0.9])
        np.testing.assert_allclose(slot.invert(slot.apply(values, 0.7), 0.7), values)

    def test_multiplicative_zero_has_no_inverse(self):
        """Test inverting a zero multiplicative modifier raises."""
        with pytest.raises(ValueError, match="no inverse"):
            MODIFIER_SLOTS[1].invert(0.5, 0.0)
