"""
Unit tests for encoding utilities (binary ↔ Gray code, Hamming distance).

Tests cover:
- Integer binary ↔ Gray conversion and roundtrip
- Gray code adjacency property, including the cyclic wrap edge
- Hamming distance
- Zero-padded rendering (never truncates)
- Vectorised helpers
- string_to_bits / bits_to_string and the bit-array Gray conversions
- clamp and bit width clamping
"""

import numpy as np
import pytest

from graylab.utils.encoding import (
    MAX_BITS,
    MIN_BITS,
    binary_to_gray,
    binary_to_gray_bits,
    bits_to_string,
    clamp,
    clamp_bit_width,
    gray_codes,
    gray_to_binary,
    gray_to_binary_bits,
    hamming_distance,
    max_value,
    pad_binary,
    popcount,
    string_to_bits,
)


# ---------------------------------------------------------------------------
# Integer Gray code
# ---------------------------------------------------------------------------

class TestIntegerGrayCode:
    """Tests for integer binary ↔ Gray conversion."""

    def test_known_values(self):
        expected = [0, 1, 3, 2, 6, 7, 5, 4, 12, 13, 15, 14, 10, 11, 9, 8]
        assert [binary_to_gray(v) for v in range(16)] == expected

    def test_documented_example(self):
        # 10 = 1010 → Gray 1111 → back to 1010
        assert binary_to_gray(10) == 15
        assert gray_to_binary(15) == 10

    def test_zero(self):
        assert binary_to_gray(0) == 0
        assert gray_to_binary(0) == 0

    def test_roundtrip_all_widths(self):
        """gray_to_binary(binary_to_gray(v)) == v for every n in [1, 12]."""
        for n in range(1, 13):
            for v in range(1 << n):
                assert gray_to_binary(binary_to_gray(v)) == v, f"Failed for n={n}, v={v}"

    def test_adjacent_values_differ_by_one_bit(self):
        for n in range(1, 13):
            for v in range((1 << n) - 1):
                assert hamming_distance(binary_to_gray(v), binary_to_gray(v + 1)) == 1

    def test_wrap_edge_differs_by_one_bit(self):
        """The last code and code 0 also differ by one bit (cyclic code)."""
        for n in range(1, 13):
            last = (1 << n) - 1
            assert hamming_distance(binary_to_gray(last), binary_to_gray(0)) == 1

    def test_large_value_roundtrip(self):
        val = 2**31 + 12345
        assert gray_to_binary(binary_to_gray(val)) == val

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            binary_to_gray(-1)
        with pytest.raises(ValueError):
            gray_to_binary(-3)


# ---------------------------------------------------------------------------
# Hamming distance
# ---------------------------------------------------------------------------

class TestHammingDistance:
    """Tests for bitwise Hamming distance."""

    def test_equal_values(self):
        assert hamming_distance(42, 42) == 0

    def test_single_bit(self):
        assert hamming_distance(0b1000, 0b0000) == 1

    def test_all_bits(self):
        assert hamming_distance(0b0111, 0b1000) == 4

    def test_symmetric(self):
        for a, b in [(3, 12), (0, 255), (100, 7)]:
            assert hamming_distance(a, b) == hamming_distance(b, a)

    def test_zero_iff_equal(self):
        for a in range(16):
            for b in range(16):
                assert (hamming_distance(a, b) == 0) == (a == b)


# ---------------------------------------------------------------------------
# Padding
# ---------------------------------------------------------------------------

class TestPadBinary:
    """Tests for zero-padded binary rendering."""

    def test_pads_to_width(self):
        assert pad_binary(5, 4) == "0101"

    def test_exact_width(self):
        assert pad_binary(10, 4) == "1010"

    def test_zero(self):
        assert pad_binary(0, 3) == "000"

    def test_never_truncates(self):
        assert pad_binary(37, 4) == "100101"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            pad_binary(-1, 4)


# ---------------------------------------------------------------------------
# Vectorised helpers
# ---------------------------------------------------------------------------

class TestVectorised:
    """Tests for the NumPy helpers."""

    def test_gray_codes_matches_scalar(self):
        values = np.arange(256)
        expected = [binary_to_gray(int(v)) for v in values]
        np.testing.assert_array_equal(gray_codes(values), expected)

    def test_popcount(self):
        values = np.array([0, 1, 3, 7, 8, 255, 4095])
        np.testing.assert_array_equal(popcount(values), [0, 1, 2, 3, 1, 8, 12])

    def test_popcount_does_not_modify_input(self):
        values = np.array([5, 6])
        popcount(values)
        np.testing.assert_array_equal(values, [5, 6])


# ---------------------------------------------------------------------------
# Bit arrays
# ---------------------------------------------------------------------------

class TestBitArrays:
    """Tests for bit array helpers (MSB first)."""

    def test_string_roundtrip(self):
        bits = string_to_bits("011010")
        np.testing.assert_array_equal(bits, [0, 1, 1, 0, 1, 0])
        assert bits_to_string(bits) == "011010"

    def test_empty_string(self):
        assert len(string_to_bits("")) == 0
        assert bits_to_string(np.array([], dtype=np.uint8)) == ""

    def test_binary_to_gray_bits_matches_integer(self):
        for val in range(64):
            gray = binary_to_gray_bits(string_to_bits(pad_binary(val, 6)))
            assert bits_to_string(gray) == pad_binary(binary_to_gray(val), 6)

    def test_gray_to_binary_bits_matches_integer(self):
        for code in range(64):
            binary = gray_to_binary_bits(string_to_bits(pad_binary(code, 6)))
            assert bits_to_string(binary) == pad_binary(gray_to_binary(code), 6)

    def test_empty_bit_arrays(self):
        empty = np.array([], dtype=np.uint8)
        assert len(binary_to_gray_bits(empty)) == 0
        assert len(gray_to_binary_bits(empty)) == 0


# ---------------------------------------------------------------------------
# clamp / bit width
# ---------------------------------------------------------------------------

class TestClamp:
    """Tests for value and bit width clamping."""

    def test_within_range(self):
        assert clamp(0.5, 0.0, 1.0) == 0.5

    def test_below_low(self):
        assert clamp(-0.5, 0.0, 1.0) == 0.0

    def test_above_high(self):
        assert clamp(1.5, 0.0, 1.0) == 1.0

    def test_bit_width_clamped(self):
        assert clamp_bit_width(0) == MIN_BITS
        assert clamp_bit_width(-5) == MIN_BITS
        assert clamp_bit_width(99) == MAX_BITS
        assert clamp_bit_width(7) == 7

    def test_max_value(self):
        assert max_value(1) == 1
        assert max_value(4) == 15
        assert max_value(12) == 4095
