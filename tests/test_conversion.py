"""
Unit tests for bit-string conversion.

Tests cover:
- Binary → Gray and Gray → Binary on known strings
- Input filtering and length limits
- Width preservation (leading zeros)
- Step-by-step walk-throughs for both directions
"""

import logging

import pytest

from graylab.core.conversion import (
    MAX_INPUT_BITS,
    binary_to_gray_steps,
    convert,
    gray_to_binary_steps,
    sanitize_bit_string,
)
from graylab.utils.encoding import (
    binary_to_gray,
    binary_to_gray_bits,
    gray_to_binary_bits,
    pad_binary,
    string_to_bits,
)


class TestConvert:
    """Tests for the boundary-facing convert()."""

    def test_binary_to_gray(self):
        assert convert("1010", to_gray=True) == "1111"

    def test_gray_to_binary(self):
        assert convert("1111", to_gray=False) == "1010"

    def test_keeps_leading_zeros(self):
        assert convert("0001", to_gray=True) == "0001"
        assert convert("0000", to_gray=False) == "0000"

    def test_single_bit(self):
        assert convert("1", to_gray=True) == "1"
        assert convert("0", to_gray=False) == "0"

    def test_filters_non_binary_characters(self):
        assert convert(" 10-1a0 ", to_gray=True) == "1111"

    def test_roundtrip(self):
        for v in range(256):
            text = pad_binary(v, 8)
            assert convert(convert(text, to_gray=True), to_gray=False) == text

    def test_matches_integer_codec(self):
        for v in range(64):
            assert convert(pad_binary(v, 6), True) == pad_binary(binary_to_gray(v), 6)

    def test_max_length_accepted(self):
        text = "1" * MAX_INPUT_BITS
        result = convert(text, to_gray=True)
        assert result == "1" + "0" * (MAX_INPUT_BITS - 1)

    @pytest.mark.parametrize("text", ["", "   ", "abc", "2345", "1" * (MAX_INPUT_BITS + 1)])
    def test_no_result(self, text):
        assert convert(text, to_gray=True) is None

    @pytest.mark.parametrize("text", [None, 1010, 3.5, ["1", "0"]])
    def test_non_string_input(self, text):
        assert convert(text, to_gray=False) is None

    def test_rejected_input_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="graylab.core.conversion"):
            convert("xyz", to_gray=True)
        assert "rejected" in caplog.text


class TestSanitize:
    """Tests for input filtering."""

    def test_strips(self):
        assert sanitize_bit_string("1 0 1") == "101"

    def test_empty_after_filter(self):
        assert sanitize_bit_string("hello") is None

    def test_too_long(self):
        assert sanitize_bit_string("0" * 33) is None


class TestSteps:
    """Tests for the XOR walk-throughs."""

    def test_binary_to_gray_step_count(self):
        # input line, one line per bit, result line
        assert len(binary_to_gray_steps("1010")) == 6

    def test_binary_to_gray_steps_content(self):
        steps = binary_to_gray_steps("1010")
        assert steps[0].header == "Input: binary 1010"
        assert steps[1].header == "Step 1: most significant bit"
        assert steps[1].result == "g3 = 1"
        assert steps[2].calculation == "g2 = b3 ⊕ b2 = 1 ⊕ 0 = 1"
        assert steps[-1].header == "Result"
        assert steps[-1].result == "1010 → 1111"

    def test_gray_to_binary_steps_content(self):
        steps = gray_to_binary_steps("1111")
        assert steps[0].header == "Input: Gray 1111"
        assert steps[2].calculation == "b2 = b3 ⊕ g2 = 1 ⊕ 1 = 0"
        assert steps[-1].result == "1111 → 1010"

    def test_steps_agree_with_convert(self):
        for v in range(32):
            text = pad_binary(v, 5)
            assert binary_to_gray_steps(text)[-1].result == f"{text} → {convert(text, True)}"
            assert gray_to_binary_steps(text)[-1].result == f"{text} → {convert(text, False)}"

    @pytest.mark.parametrize("text", ["", "10a1", "1" * 33, None])
    def test_invalid_input_gives_no_steps(self, text):
        assert binary_to_gray_steps(text) == []
        assert gray_to_binary_steps(text) == []

    def test_per_bit_results_follow_bit_arrays(self):
        text = "110100"
        gray = binary_to_gray_bits(string_to_bits(text))
        binary = gray_to_binary_bits(string_to_bits(text))
        to_gray = binary_to_gray_steps(text)[1:-1]
        to_binary = gray_to_binary_steps(text)[1:-1]
        for i, pos in enumerate(range(len(text) - 1, -1, -1)):
            assert to_gray[i].result == f"g{pos} = {int(gray[i])}"
            assert to_binary[i].result == f"b{pos} = {int(binary[i])}"
