"""
Unit tests for Gray sequence generation.

Tests cover:
- Comparison table rows (padding, Gray column, cyclic Hamming column)
- Lazy and eager generation agree
- Bit width clamping
- Vectorised chart arrays
- Recursive reflected-binary construction and its equivalence with XOR
"""

import numpy as np
import pytest

from graylab.core.sequence import (
    SequenceRow,
    generate_sequence,
    iter_sequence,
    reflected_binary_construction,
    reflection_stages,
    sequence_arrays,
)
from graylab.utils.encoding import binary_to_gray, pad_binary


class TestGenerateSequence:
    """Tests for the comparison table."""

    def test_row_count(self):
        for n in range(1, 13):
            assert len(generate_sequence(n)) == 1 << n

    def test_three_bit_table(self):
        rows = generate_sequence(3)
        assert [r.gray for r in rows] == ["000", "001", "011", "010", "110", "111", "101", "100"]
        assert [r.binary for r in rows] == [pad_binary(i, 3) for i in range(8)]
        assert [r.index for r in rows] == list(range(8))

    def test_every_row_one_bit_from_previous(self):
        """Includes row 0, which is compared against the last row."""
        for n in range(1, 13):
            assert all(r.hamming_from_previous == 1 for r in generate_sequence(n))

    def test_row_ten_at_four_bits(self):
        row = generate_sequence(4)[10]
        assert row == SequenceRow(index=10, binary="1010", gray="1111", hamming_from_previous=1)

    def test_lazy_matches_eager(self):
        assert list(iter_sequence(5)) == generate_sequence(5)

    def test_iter_is_lazy(self):
        it = iter_sequence(12)
        first = next(it)
        assert first.index == 0
        assert first.gray == "0" * 12

    def test_bit_width_clamped(self):
        assert len(generate_sequence(0)) == 2
        assert len(generate_sequence(20)) == 4096


class TestSequenceArrays:
    """Tests for the vectorised chart data."""

    def test_shapes(self):
        indices, gray, gd, bd = sequence_arrays(4)
        for arr in (indices, gray, gd, bd):
            assert arr.shape == (16,)

    def test_gray_distances_all_one(self):
        _, _, gray_distance, _ = sequence_arrays(8)
        assert np.all(gray_distance == 1)

    def test_binary_distances(self):
        # stepping 0111 → 1000 flips all four bits; wrap 1111 → 0000 too
        _, _, _, binary_distance = sequence_arrays(4)
        assert binary_distance[8] == 4
        assert binary_distance[0] == 4
        assert binary_distance[1] == 1

    def test_gray_column(self):
        _, gray, _, _ = sequence_arrays(5)
        np.testing.assert_array_equal(gray, [binary_to_gray(i) for i in range(32)])


class TestReflectedBinaryConstruction:
    """Tests for the recursive reflection."""

    def test_zero_bits(self):
        assert reflected_binary_construction(0) == [""]

    def test_one_bit(self):
        assert reflected_binary_construction(1) == ["0", "1"]

    def test_two_bits(self):
        assert reflected_binary_construction(2) == ["00", "01", "11", "10"]

    def test_equivalent_to_xor_formula(self):
        for k in range(1, 7):
            expected = [pad_binary(binary_to_gray(i), k) for i in range(1 << k)]
            assert reflected_binary_construction(k) == expected, f"Mismatch for k={k}"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            reflected_binary_construction(-1)

    def test_stages(self):
        stages = reflection_stages(3)
        assert len(stages) == 4
        assert stages[0] == [""]
        assert stages[-1] == reflected_binary_construction(3)
