"""
Bit-string conversion between binary and Gray code.

`convert()` is the boundary-facing entry point: it accepts untrusted text,
keeps only '0'/'1' characters, and returns None instead of raising when no
result is available. The step builders produce the per-bit XOR walk-through
shown next to the converter.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from graylab.utils.encoding import (
    binary_to_gray,
    binary_to_gray_bits,
    bits_to_string,
    gray_to_binary,
    gray_to_binary_bits,
    pad_binary,
    string_to_bits,
)

logger = logging.getLogger(__name__)

MAX_INPUT_BITS = 32

_NON_BINARY = re.compile(r"[^01]")
_BINARY = re.compile(r"[01]+")


def sanitize_bit_string(text: Any) -> Optional[str]:
    """
    Strip every character other than '0'/'1'.

    Returns None when the input is not a string, nothing is left, or more
    than MAX_INPUT_BITS digits remain.
    """
    if not isinstance(text, str):
        return None
    digits = _NON_BINARY.sub("", text)
    if not digits or len(digits) > MAX_INPUT_BITS:
        return None
    return digits


def convert(text: Any, to_gray: bool) -> Optional[str]:
    """
    Convert a bit string to Gray code (to_gray=True) or back to binary.

    The result keeps the digit count of the filtered input.

    Examples:
        >>> convert("1010", to_gray=True)
        '1111'
        >>> convert("1111", to_gray=False)
        '1010'
        >>> convert("", to_gray=True) is None
        True
    """
    digits = sanitize_bit_string(text)
    if digits is None:
        logger.warning("Conversion input rejected: %r", text)
        return None

    value = int(digits, 2)
    result = binary_to_gray(value) if to_gray else gray_to_binary(value)
    return pad_binary(result, len(digits))


# ---------------------------------------------------------------------------
# Step-by-step walk-through
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConversionStep:
    """One line of the conversion walk-through."""
    header: str
    calculation: str
    result: str = ""


def binary_to_gray_steps(bit_string: str) -> list[ConversionStep]:
    """
    Per-bit derivation of the Gray code of a binary string.

    g[msb] = b[msb]; g[i] = b[i+1] XOR b[i]

    Returns an empty list when the input is not a plain '0'/'1' string.
    """
    if not _is_plain_bits(bit_string):
        return []

    bits = string_to_bits(bit_string)
    gray = binary_to_gray_bits(bits)
    n = len(bits)
    steps = [ConversionStep(
        header=f"Input: binary {bit_string}",
        calculation="Bits: " + ", ".join(f"b{n - 1 - i}={int(b)}" for i, b in enumerate(bits)),
    )]

    for i in range(n):
        pos = n - 1 - i
        g = int(gray[i])
        if i == 0:
            header = f"Step {i + 1}: most significant bit"
            calculation = f"g{pos} = b{pos} = {g}"
        else:
            header = f"Step {i + 1}: bit {pos}"
            calculation = f"g{pos} = b{pos + 1} ⊕ b{pos} = {int(bits[i - 1])} ⊕ {int(bits[i])} = {g}"
        steps.append(ConversionStep(header=header, calculation=calculation, result=f"g{pos} = {g}"))

    result = bits_to_string(gray)
    steps.append(ConversionStep(
        header="Result",
        calculation=f"Gray code: {result}",
        result=f"{bit_string} → {result}",
    ))
    return steps


def gray_to_binary_steps(bit_string: str) -> list[ConversionStep]:
    """
    Per-bit derivation of the binary value of a Gray string.

    b[msb] = g[msb]; b[i] = b[i+1] XOR g[i]

    Returns an empty list when the input is not a plain '0'/'1' string.
    """
    if not _is_plain_bits(bit_string):
        return []

    gray = string_to_bits(bit_string)
    binary = gray_to_binary_bits(gray)
    n = len(gray)
    steps = [ConversionStep(
        header=f"Input: Gray {bit_string}",
        calculation="Bits: " + ", ".join(f"g{n - 1 - i}={int(g)}" for i, g in enumerate(gray)),
    )]

    for i in range(n):
        pos = n - 1 - i
        b = int(binary[i])
        if i == 0:
            header = f"Step {i + 1}: most significant bit"
            calculation = f"b{pos} = g{pos} = {b}"
        else:
            header = f"Step {i + 1}: bit {pos}"
            calculation = f"b{pos} = b{pos + 1} ⊕ g{pos} = {int(binary[i - 1])} ⊕ {int(gray[i])} = {b}"
        steps.append(ConversionStep(header=header, calculation=calculation, result=f"b{pos} = {b}"))

    result = bits_to_string(binary)
    steps.append(ConversionStep(
        header="Result",
        calculation=f"Binary: {result}",
        result=f"{bit_string} → {result}",
    ))
    return steps


def _is_plain_bits(bit_string: Any) -> bool:
    return (
        isinstance(bit_string, str)
        and len(bit_string) <= MAX_INPUT_BITS
        and _BINARY.fullmatch(bit_string) is not None
    )
